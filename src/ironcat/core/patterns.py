"""
Seed Patterns

Initializers for Grid construction: classic B3/S23 test patterns placed at a
position, and the random seeding used by the command-line program.
"""

from typing import Dict, Optional

import numpy as np

from .grid import Initializer

# Stable 2x2 still life
BLOCK = np.array([
    [True, True],
    [True, True]
], dtype=bool)

# Horizontal period-2 oscillator
BLINKER = np.array([[True, True, True]], dtype=bool)

# Southeast-moving glider, translates by (1, 1) every 4 generations
GLIDER = np.array([
    [False, True, False],
    [False, False, True],
    [True, True, True]
], dtype=bool)

PATTERNS: Dict[str, np.ndarray] = {
    "block": BLOCK,
    "blinker": BLINKER,
    "glider": GLIDER,
}


def place(pattern: np.ndarray, width: int, height: int, x: int = 0, y: int = 0) -> Initializer:
    """Create an initializer that places a pattern with its top-left at (x, y).

    Pattern cells that fall off the grid edge wrap around, matching the
    grid's toroidal topology.

    Args:
        pattern: 2D boolean array, indexed [row, column]
        width: Width of the grid being seeded
        height: Height of the grid being seeded
        x: Top-left x-coordinate for placement
        y: Top-left y-coordinate for placement

    Returns:
        Initializer for Grid
    """
    pattern = np.asarray(pattern, dtype=bool)
    rows, cols = np.nonzero(pattern)
    alive = {((x + int(px)) % width, (y + int(py)) % height) for py, px in zip(rows, cols)}

    return lambda cx, cy: (cx, cy) in alive


def random_cells(width: int, height: int, cells: Optional[int] = None,
                 rng: Optional[np.random.Generator] = None) -> Initializer:
    """Create an initializer that sets random cells alive.

    A uniformly chosen cell is set alive ``cells`` times. The same cell can be
    picked more than once, so the live count may come out lower.

    Args:
        width: Grid width
        height: Grid height
        cells: Number of picks (defaults to half the grid size)
        rng: numpy random generator (a fresh default one when omitted)

    Returns:
        Initializer for Grid
    """
    if cells is None:
        cells = (width * height) // 2
    if rng is None:
        rng = np.random.default_rng()

    state = np.zeros((height, width), dtype=bool)
    indices = rng.integers(0, width * height, size=cells)
    state.flat[indices] = True

    return from_array(state)


def from_array(state: np.ndarray) -> Initializer:
    """Create an initializer reading from a (height, width) array."""
    state = np.asarray(state, dtype=bool)
    return lambda x, y: bool(state[y, x])
