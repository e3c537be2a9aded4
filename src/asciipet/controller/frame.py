"""
Frame Controller
================
Runs one full frame of the pet: input -> motion -> effects -> render state.

Why is this file needed?
------------------------
1. Ordering: Toggles, the animation clock, the physics step, the glitch
   reset/mutate pass and the monitor sync must happen exactly once per tick
   and in a fixed order. Keeping that in one Qt-free class makes it testable.
2. Ownership: It owns the Pet and swaps it atomically when a new image is
   loaded, so the renderer never sees a half-converted grid.
3. Scheduling: It advises the timer on how fast to tick.

Classes:
    Toggle: Preference switches bound to keys.
    FrameInput: What the window layer reports each tick.
    FrameOutput: What the window layer must apply each tick.
    FrameController: The per-frame pipeline.
"""
from __future__ import annotations

import logging
import random
from dataclasses import dataclass, field, replace
from enum import Enum
from typing import Callable, FrozenSet, List, Optional, Tuple

from asciipet.config import ACTIVE_TPS, IDLE_TPS, TARGET_WIDTH_GLYPHS
from asciipet.model import effects
from asciipet.model.converter import convert
from asciipet.model.entity import EffectConfig, MonitorSnapshot, Pet, RasterImage
from asciipet.model.motion import MotionController
from asciipet.model.render_state import RenderFrame, assemble

logger = logging.getLogger(__name__)

SnapshotProvider = Callable[[], MonitorSnapshot]


class Toggle(Enum):
    COLOR = "show_color"
    GLITCH = "show_glitch"
    ANIMATION = "show_animation"
    MONITOR = "show_monitor"


@dataclass
class FrameInput:
    pressed: bool = False
    pointer: Tuple[int, int] = (-1, -1)  # relative to the window origin
    window_pos: Tuple[int, int] = (0, 0)
    screen_size: Tuple[int, int] = (1920, 1080)
    toggles: FrozenSet[Toggle] = field(default_factory=frozenset)


@dataclass
class FrameOutput:
    window_pos: Tuple[int, int]
    moved: bool
    window_size: Tuple[int, int]
    tps: int
    render: RenderFrame
    glitched: List[Tuple[int, int]] = field(default_factory=list)


def _no_monitor() -> MonitorSnapshot:
    return MonitorSnapshot()


class FrameController:
    def __init__(
        self,
        config: Optional[EffectConfig] = None,
        snapshot_provider: SnapshotProvider = _no_monitor,
        rng: Optional[random.Random] = None,
        target_width: int = TARGET_WIDTH_GLYPHS,
    ) -> None:
        self.config: EffectConfig = config or EffectConfig()
        self.snapshot_provider = snapshot_provider
        self.rng = rng or random.Random()
        self.target_width = target_width

        self.pet = Pet()
        self.motion = MotionController()
        self.tick: float = 0.0

    # ------------------------------------------------------------------
    # Images
    # ------------------------------------------------------------------

    def load_image(self, image: RasterImage, path: Optional[str] = None) -> Pet:
        """
        Convert `image` and replace the pet in one step.

        If conversion raises, the previous pet stays in place.
        """
        conversion = convert(image, self.target_width)
        pet = conversion.to_pet()
        pet.cpu_usage = self.pet.cpu_usage
        pet.mem_usage = self.pet.mem_usage

        self.pet = pet
        if path is not None:
            self.config.image_path = path
        logger.info(
            f"Pet loaded: {conversion.rows}x{conversion.columns} glyphs, "
            f"window {pet.window_width}x{pet.window_height} px."
        )
        return pet

    def load_image_file(self, path: str, loader: Optional[Callable[[str], RasterImage]] = None) -> Optional[Pet]:
        """
        Decode and load an image file. On failure the error is logged and
        the current pet is kept; None is returned.
        """
        if loader is None:
            from asciipet.controller.image_loader import load_image as loader

        try:
            image = loader(path)
            return self.load_image(image, path=path)
        except ValueError as e:
            logger.error(f"Could not load pet image '{path}': {e}")
            return None

    # ------------------------------------------------------------------
    # Preferences
    # ------------------------------------------------------------------

    def toggle(self, which: Toggle) -> bool:
        value = not getattr(self.config, which.value)
        setattr(self.config, which.value, value)
        logger.info(f"{which.value} -> {value}")
        return value

    def preferences(self) -> EffectConfig:
        return replace(self.config)

    # ------------------------------------------------------------------
    # Frame
    # ------------------------------------------------------------------

    @property
    def is_moving(self) -> bool:
        return self.motion.is_moving

    def hovering(self, pointer: Tuple[int, int]) -> bool:
        x, y = pointer
        return 0 <= x <= self.pet.window_width and 0 <= y <= self.pet.window_height

    def advise_tps(self, hovering: bool) -> int:
        """High tick rate while hovered, moving or animating; low otherwise."""
        if hovering or self.is_moving or self.config.show_animation:
            return ACTIVE_TPS
        return IDLE_TPS

    def advance(self, frame: FrameInput) -> FrameOutput:
        """Run one frame. Never blocks, never raises for valid input."""
        for which in frame.toggles:
            self.toggle(which)

        self.tick += 1

        # Sampled before the physics step, like the pointer itself
        tps = self.advise_tps(self.hovering(frame.pointer))

        step = self.motion.step(
            pressed=frame.pressed,
            pointer=frame.pointer,
            window_pos=frame.window_pos,
            window_size=self.pet.window_size,
            screen_size=frame.screen_size,
        )
        is_moving = self.motion.is_moving

        glitched = effects.apply_frame(
            self.pet.grid,
            enabled=self.config.show_glitch,
            is_idle=not is_moving,
            rng=self.rng,
        )

        self.pet.update_stats(self.snapshot_provider())

        render = assemble(self.pet, is_moving, self.tick, self.config)
        return FrameOutput(
            window_pos=step.position,
            moved=step.moved,
            window_size=self.pet.window_size,
            tps=tps,
            render=render,
            glitched=glitched,
        )
