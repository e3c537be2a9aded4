"""
Image Loading (Qt Adapter)
==========================
Decodes image files with QImage and hands them to the model as numpy arrays.

Why is this file needed?
------------------------
The converter works on plain (H, W, 3) arrays and knows nothing about Qt or
file formats. This module is the only place where files become RasterImages.
"""
from __future__ import annotations

import logging
import os

import numpy as np
from PySide6.QtGui import QImage

from asciipet.model.entity import RasterImage

logger = logging.getLogger(__name__)


class ImageLoadError(ValueError):
    """The file is missing, unreadable or not a decodable image."""


def raster_from_qimage(image: QImage) -> RasterImage:
    """
    Copy a QImage into a RasterImage.

    Colors are taken premultiplied by alpha, so fully transparent pixels
    read as black.
    """
    if image.isNull() or image.width() < 1 or image.height() < 1:
        raise ImageLoadError("Image is empty.")

    rgba = image.convertToFormat(QImage.Format.Format_RGBA8888_Premultiplied)
    width, height = rgba.width(), rgba.height()
    stride = rgba.bytesPerLine()

    buffer = np.frombuffer(rgba.constBits(), dtype=np.uint8, count=stride * height)
    # Scanlines may be padded to 4-byte boundaries
    rows = buffer.reshape(height, stride)[:, : width * 4]
    pixels = rows.reshape(height, width, 4)[:, :, :3].copy()
    return RasterImage(pixels)


def load_image_bytes(data: bytes, name: str = "<memory>") -> RasterImage:
    image = QImage()
    if not image.loadFromData(data):
        raise ImageLoadError(f"Could not decode image '{name}'.")
    raster = raster_from_qimage(image)
    logger.debug(f"Decoded '{name}' ({raster.width}x{raster.height}).")
    return raster


def load_image(path: str) -> RasterImage:
    """Decode an image file. Raises ImageLoadError on any failure."""
    if not os.path.isfile(path):
        raise ImageLoadError(f"Image file not found: {path}")

    try:
        with open(path, "rb") as f:
            data = f.read()
    except OSError as e:
        raise ImageLoadError(f"Could not read image '{path}': {e}") from e

    return load_image_bytes(data, name=path)
