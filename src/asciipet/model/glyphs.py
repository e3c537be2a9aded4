"""
Glyph Mapper
Maps pixel colors to glyphs of a density ramp via perceptual luminance.
"""
from __future__ import annotations

from typing import TYPE_CHECKING

import numpy as np

if TYPE_CHECKING:
    import numpy.typing as npt
    from asciipet.model.entity import RGB

# Densest to sparsest; reads well on a dark or transparent background.
DEFAULT_RAMP: str = "@%#*+=-:. "


def luminance(rgb: RGB) -> float:
    """
    Rec. 601 luma (0.299 R + 0.587 G + 0.114 B) of an 8-bit RGB triple.
    """
    r, g, b = rgb
    return 0.299 * int(r) + 0.587 * int(g) + 0.114 * int(b)


def ramp_index(luma: float, ramp_length: int) -> int:
    idx = int(luma / 255 * (ramp_length - 1))
    # L == 255 can land a hair above the last slot after float rounding
    return min(max(idx, 0), ramp_length - 1)


def map_pixel(rgb: RGB, ramp: str = DEFAULT_RAMP) -> str:
    """
    Map a single pixel to a glyph.

    Args:
        rgb: 8-bit (red, green, blue).
        ramp: Glyphs ordered from darkest/densest to lightest/sparsest.

    Returns:
        The glyph for the pixel's luminance bucket.
    """
    return ramp[ramp_index(luminance(rgb), len(ramp))]


def map_luminance(pixels: npt.NDArray[np.uint8], ramp: str = DEFAULT_RAMP) -> npt.NDArray[np.int64]:
    """
    Vectorised ramp indices for an (..., 3) pixel array.

    Gives the same indices as `map_pixel` element by element.
    """
    rgb = np.asarray(pixels, dtype=np.float64)
    # Same operation order as luminance(), so bucket edges agree bit for bit
    luma = 0.299 * rgb[..., 0] + 0.587 * rgb[..., 1] + 0.114 * rgb[..., 2]
    idx = np.floor(luma / 255 * (len(ramp) - 1)).astype(np.int64)
    return np.clip(idx, 0, len(ramp) - 1)
