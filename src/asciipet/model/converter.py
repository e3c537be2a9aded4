"""
Image-to-Grid Converter
=======================
Samples a decoded image on a stride grid and turns every sample into a
glyph cell.

Why is this file needed?
------------------------
1. Sampling: Glyph cells are roughly twice as tall as they are wide, so rows
   are sampled at twice the column stride to keep the pet's proportions.
2. Sizing: The window size of the pet follows directly from the grid
   dimensions and the font metrics.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import List, Tuple

from asciipet.config import (
    GLYPH_CELL_HEIGHT_PX, GLYPH_CELL_WIDTH_PX, TARGET_WIDTH_GLYPHS, TOP_PADDING_PX
)
from asciipet.model.entity import Cell, Grid, Pet, RasterImage
from asciipet.model.glyphs import DEFAULT_RAMP, map_luminance

logger = logging.getLogger(__name__)


@dataclass
class Conversion:
    """Return object of `convert`."""
    grid: Grid
    window_width: int
    window_height: int
    lines: List[str] = field(default_factory=list)

    @property
    def rows(self) -> int:
        return len(self.grid)

    @property
    def columns(self) -> int:
        return max((len(row) for row in self.grid), default=0)

    def to_text(self) -> str:
        return "\n".join(self.lines)

    def to_pet(self) -> Pet:
        return Pet(grid=self.grid, window_width=self.window_width, window_height=self.window_height)


def compute_strides(image_width: int, target_width: int) -> Tuple[int, int]:
    """
    Horizontal and vertical sampling strides.

    Integer division on purpose: the truncation decides the final glyph width.
    """
    stride_x = max(1, image_width // target_width)
    return stride_x, stride_x * 2


def convert(
    image: RasterImage,
    target_width: int = TARGET_WIDTH_GLYPHS,
    ramp: str = DEFAULT_RAMP,
    cell_width: int = GLYPH_CELL_WIDTH_PX,
    cell_height: int = GLYPH_CELL_HEIGHT_PX,
    top_padding: int = TOP_PADDING_PX,
) -> Conversion:
    """
    Convert an image to a glyph grid.

    Args:
        image: Decoded image with positive dimensions.
        target_width: Desired pet width in glyphs (>= 1).
        ramp: Glyph ramp, darkest first.
        cell_width: Pixel width of one glyph cell.
        cell_height: Pixel height of one glyph cell.
        top_padding: Extra pixels above the first row (room for the HUD).

    Returns:
        The grid, the window size in pixels and the plain-text lines.
    """
    if target_width < 1:
        raise ValueError(f"target_width must be >= 1, got {target_width}.")

    stride_x, stride_y = compute_strides(image.width, target_width)

    # Nearest-pixel sampling at (x, y) for y in range(0, H, sy), x in range(0, W, sx)
    samples = image.pixels[::stride_y, ::stride_x]
    indices = map_luminance(samples, ramp)

    grid: Grid = []
    lines: List[str] = []
    for sample_row, index_row in zip(samples, indices):
        row: List[Cell] = []
        for pixel, idx in zip(sample_row, index_row):
            glyph = ramp[int(idx)]
            color = (int(pixel[0]), int(pixel[1]), int(pixel[2]))
            row.append(Cell(original_glyph=glyph, glyph=glyph, color=color))
        grid.append(row)
        lines.append("".join(cell.original_glyph for cell in row))

    max_row_len = max((len(row) for row in grid), default=0)
    window_width = max_row_len * cell_width
    window_height = len(grid) * cell_height + top_padding

    logger.debug(
        f"Converted {image.width}x{image.height} image with stride {stride_x}x{stride_y} "
        f"into {len(grid)} rows x {max_row_len} columns ({window_width}x{window_height} px)."
    )
    return Conversion(grid=grid, window_width=window_width, window_height=window_height, lines=lines)
