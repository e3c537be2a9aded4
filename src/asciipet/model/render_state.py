"""
Render State Assembler
Turns the pet, the motion flag and the preferences into draw commands.
"""
from __future__ import annotations

import math
from dataclasses import dataclass, field
from typing import List, Optional, Tuple

from asciipet.config import BASE_Y_PX, GLYPH_CELL_HEIGHT_PX, GLYPH_CELL_WIDTH_PX
from asciipet.model.entity import RGB, EffectConfig, Pet

ALERT_COLOR: RGB = (255, 50, 50)
MONOCHROME_COLOR: RGB = (0, 255, 0)
HUD_COLOR: RGB = (255, 255, 0)
HUD_POSITION: Tuple[int, int] = (0, 10)

FLOAT_SPEED: float = 0.05
FLOAT_AMPLITUDE_PX: float = 5.0


@dataclass
class GlyphCommand:
    x: int
    y: int  # text baseline
    glyph: str
    color: RGB


@dataclass
class HudCommand:
    text: str
    x: int
    y: int
    color: RGB = HUD_COLOR


@dataclass
class RenderFrame:
    """Everything a renderer needs to draw one frame."""
    offset_y: float = 0.0
    glyphs: List[GlyphCommand] = field(default_factory=list)
    hud: Optional[HudCommand] = None


def float_offset(tick: float, show_animation: bool, is_moving: bool) -> float:
    """Idle float; suppressed during motion so it does not fight the physics."""
    if show_animation and not is_moving:
        return math.sin(tick * FLOAT_SPEED) * FLOAT_AMPLITUDE_PX
    return 0.0


def resolve_color(cell_color: RGB, is_stressed: bool, show_color: bool) -> RGB:
    """Stress beats color mode, color mode beats monochrome."""
    if is_stressed:
        return ALERT_COLOR
    if show_color:
        return cell_color
    return MONOCHROME_COLOR


def hud_text(cpu: float, mem: float) -> str:
    return f"CPU: {cpu:.0f}% | MEM: {mem:.0f}%"


def assemble(
    pet: Pet,
    is_moving: bool,
    tick: float,
    config: EffectConfig,
    cell_width: int = GLYPH_CELL_WIDTH_PX,
    cell_height: int = GLYPH_CELL_HEIGHT_PX,
    base_y: int = BASE_Y_PX,
) -> RenderFrame:
    """
    Build the draw commands for the current frame.

    Args:
        pet: The pet (grid, stress flag, monitor readings).
        is_moving: True while dragged or drifting.
        tick: Animation clock, one per frame.
        config: Effect preferences.

    Returns:
        A RenderFrame with one GlyphCommand per cell and an optional HUD line.
    """
    offset_y = float_offset(tick, config.show_animation, is_moving)
    top = base_y + int(offset_y)
    stressed = pet.is_stressed

    glyphs: List[GlyphCommand] = []
    for r, row in enumerate(pet.grid):
        for c, cell in enumerate(row):
            glyphs.append(GlyphCommand(
                x=c * cell_width,
                y=r * cell_height + top,
                glyph=cell.glyph,
                color=resolve_color(cell.color, stressed, config.show_color),
            ))

    hud = None
    if config.show_monitor and not is_moving:
        # Pinned to the top edge, does not follow the float
        hud = HudCommand(text=hud_text(pet.cpu_usage, pet.mem_usage), x=HUD_POSITION[0], y=HUD_POSITION[1])

    return RenderFrame(offset_y=offset_y, glyphs=glyphs, hud=hud)
