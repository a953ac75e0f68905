"""Frame diffing for incremental terminal output.

FrameDiffer remembers what was last drawn and reports only the cells whose
state changed, so each frame writes a number of cells proportional to the
activity on the grid rather than its size.
"""

import logging
from typing import Iterator, Optional, Tuple

import numpy as np

from ..core.grid import Grid

logger = logging.getLogger(__name__)

UNKNOWN = -1

CellChange = Tuple[int, int, bool]


class FrameDiffer:
    """Tracks the last rendered frame and diffs new generations against it.

    The rendered frame is an int8 array: -1 for never rendered, 0 for dead,
    1 for alive. It is allocated on first use with the grid's shape.
    """

    def __init__(self):
        self._rendered: Optional[np.ndarray] = None

    @property
    def rendered(self) -> Optional[np.ndarray]:
        """Copy of the last rendered frame, or None before the first diff."""
        return None if self._rendered is None else self._rendered.copy()

    def invalidate(self) -> None:
        """Forget what was drawn; the next diff reports every cell."""
        if self._rendered is not None:
            self._rendered.fill(UNKNOWN)

    def diff(self, grid: Grid) -> Iterator[CellChange]:
        """Yield (x, y, alive) for each cell that differs from the last frame.

        Changes come in row-major order. Once the iterator is exhausted, the
        rendered frame matches the grid's current generation.

        Args:
            grid: Grid whose current generation is about to be drawn

        Yields:
            (x, y, new_state) tuples
        """
        if self._rendered is None or self._rendered.shape != grid.shape:
            logger.debug(f"Allocating rendered frame for {grid.width}x{grid.height} grid")
            self._rendered = np.full(grid.shape, UNKNOWN, dtype=np.int8)

        frame = grid.current.astype(np.int8)
        changed_rows, changed_cols = np.nonzero(frame != self._rendered)

        for y, x in zip(changed_rows.tolist(), changed_cols.tolist()):
            yield (x, y, bool(frame[y, x]))

        self._rendered[:] = frame
