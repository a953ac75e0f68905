"""Double-buffered toroidal grid state.

The grid owns two numpy boolean buffers of identical shape. ``current`` is
the authoritative generation and is only ever handed out as a read-only
view; ``next`` is scratch space for the generation being computed. A step
fills ``next`` and then ``swap()`` exchanges the two references.
"""

import logging
from typing import Callable, Optional, Tuple

import numpy as np

from .errors import InvalidDimensions

logger = logging.getLogger(__name__)

Initializer = Callable[[int, int], bool]

# (dy, dx) offsets of the Moore neighborhood
NEIGHBOR_OFFSETS = tuple(
    (dy, dx) for dy in (-1, 0, 1) for dx in (-1, 0, 1) if (dy, dx) != (0, 0)
)


class Grid:
    """2D toroidal boolean grid with a current and a next buffer.

    Attributes:
        width: Grid width in cells
        height: Grid height in cells
    """

    def __init__(self, width: int, height: int, initializer: Optional[Initializer] = None):
        """Allocate both buffers and fill ``current`` from the initializer.

        Args:
            width: Grid width (cells)
            height: Grid height (cells)
            initializer: Callable (x, y) -> bool giving each cell's initial
                state; all cells start dead when omitted

        Raises:
            InvalidDimensions: If width or height is not a positive integer
        """
        if isinstance(width, (bool, np.bool_)) or isinstance(height, (bool, np.bool_)):
            raise InvalidDimensions(width, height)
        if not isinstance(width, (int, np.integer)) or not isinstance(height, (int, np.integer)):
            raise InvalidDimensions(width, height)
        if width < 1 or height < 1:
            raise InvalidDimensions(width, height)

        self.width = int(width)
        self.height = int(height)

        self._current = np.zeros((self.height, self.width), dtype=bool)
        self._next = np.zeros((self.height, self.width), dtype=bool)

        if initializer is not None:
            for y in range(self.height):
                for x in range(self.width):
                    self._current[y, x] = bool(initializer(x, y))

        logger.debug(f"Allocated {self.width}x{self.height} grid, alive={self.count_alive()}")

    @classmethod
    def from_array(cls, state: np.ndarray) -> 'Grid':
        """Create a grid whose current generation is a copy of ``state``.

        Args:
            state: 2D array of shape (height, width); truthy cells are alive

        Returns:
            Grid: New grid holding the state
        """
        state = np.asarray(state)
        if state.ndim != 2:
            raise ValueError(f"Initial state must be a 2D array, got shape {state.shape}")

        height, width = state.shape
        grid = cls(width, height)
        grid._current[:] = state.astype(bool)
        return grid

    @property
    def shape(self) -> Tuple[int, int]:
        """(height, width), matching numpy indexing."""
        return (self.height, self.width)

    @property
    def current(self) -> np.ndarray:
        """Read-only view of the authoritative generation."""
        view = self._current.view()
        view.flags.writeable = False
        return view

    @property
    def next(self) -> np.ndarray:
        """Writable scratch buffer for the generation being computed."""
        return self._next

    def swap(self) -> None:
        """Make ``next`` the current generation. Exchanges references only."""
        self._current, self._next = self._next, self._current

    def at(self, x: int, y: int) -> bool:
        """Get the state of a cell in the current generation.

        Coordinates wrap around the torus.
        """
        return bool(self._current[y % self.height, x % self.width])

    def set(self, x: int, y: int, alive: bool) -> None:
        """Set the state of a cell in the next generation.

        Coordinates wrap around the torus.
        """
        self._next[y % self.height, x % self.width] = alive

    def count_live_neighbors(self, x: int, y: int) -> int:
        """Count live neighbors of cell (x, y) in the current generation.

        Args:
            x: Cell x-coordinate (column)
            y: Cell y-coordinate (row)

        Returns:
            Number of live neighbors (0-8)
        """
        count = 0
        for dy, dx in NEIGHBOR_OFFSETS:
            if self._current[(y + dy) % self.height, (x + dx) % self.width]:
                count += 1
        return count

    def neighbor_counts(self) -> np.ndarray:
        """Live neighbor count of every cell, computed with wrap-around rolls.

        Returns:
            int8 array of shape (height, width)
        """
        cells = self._current.astype(np.int8)
        counts = np.zeros_like(cells)
        for dy, dx in NEIGHBOR_OFFSETS:
            counts += np.roll(cells, (-dy, -dx), axis=(0, 1))
        return counts

    def count_alive(self) -> int:
        """Count total number of alive cells."""
        return int(np.count_nonzero(self._current))

    def is_empty(self) -> bool:
        """Check if all cells are dead."""
        return not np.any(self._current)

    def bounds(self) -> Tuple[int, int, int, int]:
        """Get bounding box of alive cells (min_x, min_y, max_x, max_y)."""
        if self.is_empty():
            return (0, 0, self.width - 1, self.height - 1)

        alive_rows, alive_cols = np.nonzero(self._current)
        return (int(alive_cols.min()), int(alive_rows.min()),
                int(alive_cols.max()), int(alive_rows.max()))

    def to_array(self) -> np.ndarray:
        """Get a writable copy of the current generation."""
        return self._current.copy()

    def __eq__(self, other: object) -> bool:
        """Grids are equal when their current generations match."""
        if not isinstance(other, Grid):
            return False
        return self.shape == other.shape and np.array_equal(self._current, other._current)

    def __str__(self) -> str:
        """Current generation with live cells as X."""
        return "\n".join(
            "".join("X" if alive else "." for alive in row) for row in self._current
        )

    def __repr__(self) -> str:
        return f"Grid({self.width}x{self.height}, alive={self.count_alive()})"
