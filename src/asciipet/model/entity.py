"""
Pet Entity (Data Model)
=======================
This module defines the data structures shared by the converter, the effect
engine, the motion controller and the renderer.

Why is this file needed?
------------------------
1. State Management: The Pet holds the current glyph grid, the window size
   derived from it and the last system monitor reading in one place.
2. Ownership: The grid is replaced wholesale on every image load; only the
   effect engine rewrites the displayed glyphs.
3. Persistence: EffectConfig is what gets serialized to the preferences file.

Classes:
    RasterImage: A decoded image as an (H, W, 3) uint8 array.
    Cell: One glyph position of the grid.
    Pet: The render/physics subject.
    EffectConfig: User preferences (effect toggles and image path).
    MonitorSnapshot: One (cpu%, mem%) reading.
"""
from __future__ import annotations

from dataclasses import dataclass, field, asdict, fields
from typing import Any, Dict, List, Tuple, TYPE_CHECKING

import numpy as np

if TYPE_CHECKING:
    import numpy.typing as npt

RGB = Tuple[int, int, int]

STRESS_CPU_THRESHOLD: float = 80.0


@dataclass
class RasterImage:
    """
    A decoded image. `pixels` has shape (height, width, 3) with 8-bit channels.
    """
    pixels: npt.NDArray[np.uint8]

    def __post_init__(self) -> None:
        arr = np.asarray(self.pixels)
        if arr.ndim != 3 or arr.shape[2] != 3:
            raise ValueError(f"Expected an (H, W, 3) pixel array, got shape {arr.shape}.")
        if arr.shape[0] < 1 or arr.shape[1] < 1:
            raise ValueError(f"Image must have positive width and height, got {arr.shape[1]}x{arr.shape[0]}.")
        self.pixels = arr.astype(np.uint8, copy=False)

    @property
    def width(self) -> int:
        return int(self.pixels.shape[1])

    @property
    def height(self) -> int:
        return int(self.pixels.shape[0])

    def pixel(self, x: int, y: int) -> RGB:
        r, g, b = self.pixels[y, x]
        return int(r), int(g), int(b)

    @classmethod
    def solid(cls, width: int, height: int, color: RGB) -> RasterImage:
        """Build a single-color image (handy for placeholders and tests)."""
        pixels = np.empty((height, width, 3), dtype=np.uint8)
        pixels[:, :] = color
        return cls(pixels)


@dataclass
class Cell:
    original_glyph: str
    glyph: str
    color: RGB

    @property
    def is_corrupted(self) -> bool:
        return self.glyph != self.original_glyph


Grid = List[List[Cell]]


@dataclass(frozen=True)
class MonitorSnapshot:
    cpu_percent: float = 0.0
    mem_percent: float = 0.0


@dataclass
class Pet:
    """
    The single on-screen subject. Built from a conversion result and
    replaced, never patched, when a new image is loaded.
    """
    grid: Grid = field(default_factory=list)
    window_width: int = 0
    window_height: int = 0

    cpu_usage: float = 0.0
    mem_usage: float = 0.0

    @property
    def is_stressed(self) -> bool:
        return self.cpu_usage > STRESS_CPU_THRESHOLD

    @property
    def window_size(self) -> Tuple[int, int]:
        return self.window_width, self.window_height

    def update_stats(self, snapshot: MonitorSnapshot) -> None:
        self.cpu_usage = snapshot.cpu_percent
        self.mem_usage = snapshot.mem_percent

    def text(self) -> str:
        """The clean (uncorrupted) glyph art as plain text."""
        return "\n".join("".join(cell.original_glyph for cell in row) for row in self.grid)


@dataclass
class EffectConfig:
    """
    Preferences toggled from the keyboard and persisted between runs.
    """
    image_path: str = "assets/idle.png"
    show_color: bool = True
    show_glitch: bool = True
    show_animation: bool = True
    show_monitor: bool = False

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)

    @staticmethod
    def from_dict(data: Dict[str, Any]) -> EffectConfig:
        """
        Build from a parsed JSON object. Unknown keys are dropped; missing
        keys and values of the wrong JSON type fall back to the default.
        """
        known = {f.name for f in fields(EffectConfig)}
        values: Dict[str, Any] = {}
        for key, val in data.items():
            if key not in known:
                continue
            expected = str if key == "image_path" else bool
            if not isinstance(val, expected):
                continue
            values[key] = val
        return EffectConfig(**values)
