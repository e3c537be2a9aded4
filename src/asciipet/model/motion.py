"""
Motion Controller
=================
A small physics state machine that moves the pet window.

Why is this file needed?
------------------------
1. Dragging: While the mouse button is held the window follows the pointer
   exactly and the per-frame displacement is kept as the throw velocity.
2. Free flight: After release the window keeps gliding, slows down with
   friction and bounces off the screen edges, losing energy on every hit.
3. Idle detection: The effect engine and the renderer only animate when
   nothing is moving.

Classes:
    MotionState: The mutable physics state (never persisted).
    MotionStep: Return object of MotionController.step().
    MotionController: The state machine.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Tuple

logger = logging.getLogger(__name__)

Point = Tuple[int, int]
Size = Tuple[int, int]

FRICTION: float = 0.95
BOUNCE_DAMPING: float = 0.6  # 40 % of the speed is lost on every wall hit
REST_THRESHOLD: float = 0.1


@dataclass
class MotionState:
    is_dragging: bool = False
    drag_anchor: Point = (0, 0)  # pointer offset inside the window, valid while dragging
    velocity_x: float = 0.0
    velocity_y: float = 0.0
    last_window_pos: Point = (0, 0)

    @property
    def velocity(self) -> Tuple[float, float]:
        return self.velocity_x, self.velocity_y

    def has_momentum(self) -> bool:
        return abs(self.velocity_x) > REST_THRESHOLD or abs(self.velocity_y) > REST_THRESHOLD


@dataclass
class MotionStep:
    """Return object of a single physics frame."""
    position: Point
    moved: bool = False


class MotionController:
    """
    Two-state (Dragging / Free) window physics, stepped once per frame.
    """
    def __init__(self, friction: float = FRICTION, bounce_damping: float = BOUNCE_DAMPING) -> None:
        self.state = MotionState()
        self.friction = friction
        self.bounce_damping = bounce_damping

    @property
    def is_moving(self) -> bool:
        return self.state.is_dragging or self.state.has_momentum()

    @property
    def is_idle(self) -> bool:
        return not self.is_moving

    def reset(self) -> None:
        self.state = MotionState()

    def step(
        self,
        pressed: bool,
        pointer: Point,
        window_pos: Point,
        window_size: Size,
        screen_size: Size,
    ) -> MotionStep:
        """
        Advance the physics by one frame.

        Args:
            pressed: Whether the (left) mouse button is down.
            pointer: Pointer position relative to the window origin.
            window_pos: Current window origin in screen coordinates.
            window_size: Window (width, height) in pixels.
            screen_size: Usable screen (width, height) in pixels.

        Returns:
            The window origin to apply and whether it changed this frame.
        """
        if pressed:
            result = self._step_dragging(pointer, window_pos)
        else:
            result = self._step_free(window_pos, window_size, screen_size)

        self.state.last_window_pos = result.position
        return result

    def _step_dragging(self, pointer: Point, window_pos: Point) -> MotionStep:
        st = self.state
        if not st.is_dragging:
            # Grab anywhere: remember where inside the window the pet was caught
            st.is_dragging = True
            st.drag_anchor = pointer
            logger.debug(f"Drag started at anchor {pointer}.")
            return MotionStep(position=window_pos, moved=False)

        new_x = window_pos[0] + pointer[0] - st.drag_anchor[0]
        new_y = window_pos[1] + pointer[1] - st.drag_anchor[1]

        # Instantaneous velocity, so a release throws with the last flick
        st.velocity_x = float(new_x - st.last_window_pos[0])
        st.velocity_y = float(new_y - st.last_window_pos[1])
        return MotionStep(position=(new_x, new_y), moved=True)

    def _step_free(self, window_pos: Point, window_size: Size, screen_size: Size) -> MotionStep:
        st = self.state
        if st.is_dragging:
            st.is_dragging = False
            logger.debug(f"Released with velocity ({st.velocity_x:.1f}, {st.velocity_y:.1f}).")

        if not st.has_momentum():
            st.velocity_x = 0.0
            st.velocity_y = 0.0
            return MotionStep(position=window_pos, moved=False)

        # 1. Inertia (int() truncates toward zero)
        wx = window_pos[0] + int(st.velocity_x)
        wy = window_pos[1] + int(st.velocity_y)

        # 2. Friction
        st.velocity_x *= self.friction
        st.velocity_y *= self.friction

        # 3. Screen edges, independently per axis
        width, height = window_size
        screen_w, screen_h = screen_size

        if wx < 0:
            wx = 0
            st.velocity_x = -st.velocity_x * self.bounce_damping
        if wx + width > screen_w:
            wx = screen_w - width
            st.velocity_x = -st.velocity_x * self.bounce_damping
        if wy < 0:
            wy = 0
            st.velocity_y = -st.velocity_y * self.bounce_damping
        if wy + height > screen_h:
            wy = screen_h - height
            st.velocity_y = -st.velocity_y * self.bounce_damping

        return MotionStep(position=(wx, wy), moved=True)
