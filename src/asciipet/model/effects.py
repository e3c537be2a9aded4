"""
Glitch Effect Engine
Resets the displayed glyphs every frame and occasionally corrupts a few.
"""
from __future__ import annotations

import random
from typing import List, Sequence, Tuple

from asciipet.model.entity import Grid

CORRUPTION_GLYPHS: Tuple[str, ...] = ("?", "#", "$", "&", "0", "1", "!")
GLITCH_PERCENT: int = 10  # chance per idle frame, out of 100
GLITCH_MIN: int = 5
GLITCH_SPREAD: int = 5


def reset(grid: Grid) -> None:
    """Restore every cell's displayed glyph. Idempotent."""
    for row in grid:
        for cell in row:
            cell.glyph = cell.original_glyph


def corrupt(
    grid: Grid,
    rng: random.Random,
    alphabet: Sequence[str] = CORRUPTION_GLYPHS,
) -> List[Tuple[int, int]]:
    """
    Overwrite 5 to 9 randomly drawn cells with corruption glyphs.

    Draws are independent: the same cell may be hit twice (last write wins).

    Returns:
        The (row, col) of every draw, in draw order.
    """
    if not grid:
        return []

    count = GLITCH_MIN + rng.randrange(GLITCH_SPREAD)
    hits: List[Tuple[int, int]] = []
    for _ in range(count):
        r = rng.randrange(len(grid))
        # Column range follows the drawn row (the last row may be shorter)
        if not grid[r]:
            continue
        c = rng.randrange(len(grid[r]))
        grid[r][c].glyph = alphabet[rng.randrange(len(alphabet))]
        hits.append((r, c))
    return hits


def apply_frame(grid: Grid, enabled: bool, is_idle: bool, rng: random.Random) -> List[Tuple[int, int]]:
    """
    Per-frame effect pass.

    Args:
        grid: The pet's grid, mutated in place.
        enabled: The glitch preference.
        is_idle: True when the pet is neither dragged nor drifting.
        rng: Source of randomness.

    Returns:
        The cells corrupted this frame (empty if the glitch did not fire).
    """
    # Always first: a glitch never outlives its frame, even if just disabled
    reset(grid)

    if not (enabled and is_idle):
        return []
    if rng.randrange(100) >= GLITCH_PERCENT:
        return []
    return corrupt(grid, rng)
