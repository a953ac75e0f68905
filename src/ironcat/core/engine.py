"""Parallel generation stepping.

Computing generation N+1 is embarrassingly parallel: every cell reads only
the current generation, which does not change during the pass, and writes
only its own slot of the next buffer. The grid's rows are split into
disjoint bands, each band is handed to a numba kernel that runs without the
GIL, and the bands are joined before the buffers are swapped.
"""

import logging
import os
import time
from concurrent.futures import ThreadPoolExecutor
from typing import Callable, List, Optional, Tuple

import numpy as np
from numba import jit

from .grid import Grid
from .rules import RuleSet

logger = logging.getLogger(__name__)

RowBand = Tuple[int, int]


@jit(nopython=True, nogil=True, cache=True)
def advance_rows(current: np.ndarray, nxt: np.ndarray,
                 birth: np.ndarray, survive: np.ndarray,
                 row_start: int, row_stop: int) -> None:
    """Write rows [row_start, row_stop) of the next generation into ``nxt``.

    Args:
        current: Current generation, boolean (height, width), only read
        nxt: Next generation buffer, same shape, only rows in the band written
        birth: 9-slot table, birth[n] is True if a dead cell with n live
            neighbors is born
        survive: 9-slot table, survive[n] is True if a live cell with n live
            neighbors survives
        row_start: First row of the band
        row_stop: One past the last row of the band
    """
    height, width = current.shape
    for y in range(row_start, row_stop):
        up = (y + height - 1) % height
        down = (y + 1) % height
        for x in range(width):
            left = (x + width - 1) % width
            right = (x + 1) % width

            count = 0
            if current[up, left]:
                count += 1
            if current[up, x]:
                count += 1
            if current[up, right]:
                count += 1
            if current[y, left]:
                count += 1
            if current[y, right]:
                count += 1
            if current[down, left]:
                count += 1
            if current[down, x]:
                count += 1
            if current[down, right]:
                count += 1

            if current[y, x]:
                nxt[y, x] = survive[count]
            else:
                nxt[y, x] = birth[count]


def row_bands(height: int, parts: int) -> List[RowBand]:
    """Split ``height`` rows into at most ``parts`` contiguous, disjoint bands.

    Band sizes differ by at most one row and together cover every row exactly
    once.
    """
    parts = max(1, min(parts, height))
    base, extra = divmod(height, parts)

    bands = []
    start = 0
    for i in range(parts):
        stop = start + base + (1 if i < extra else 0)
        bands.append((start, stop))
        start = stop
    return bands


def parallel_map_rows(fn: Callable[[int, int], None], height: int, workers: int) -> None:
    """Run ``fn(row_start, row_stop)`` over disjoint row bands and join.

    A fresh pool is created for the call and shut down before it returns, so
    no worker outlives a single step. Exceptions raised by ``fn`` propagate.
    """
    bands = row_bands(height, workers)
    if len(bands) == 1:
        fn(*bands[0])
        return

    with ThreadPoolExecutor(max_workers=len(bands), thread_name_prefix="ironcat-step") as pool:
        futures = [pool.submit(fn, start, stop) for start, stop in bands]
        for future in futures:
            future.result()


class StepEngine:
    """Applies a RuleSet to a Grid one generation at a time.

    The engine owns its rule for the lifetime of the simulation. It performs
    no validation of its own: a well-formed Grid and RuleSet cannot fail.
    """

    def __init__(self, rule_set: RuleSet, workers: Optional[int] = None):
        """Initialize the engine.

        Args:
            rule_set: Birth/survival rule to apply
            workers: Number of row bands processed concurrently
                (defaults to the CPU count)

        Raises:
            ValueError: If workers is less than 1
        """
        if workers is None:
            workers = os.cpu_count() or 1
        if workers < 1:
            raise ValueError(f"Worker count must be at least 1, got {workers}")

        self.rule_set = rule_set
        self.workers = workers

        self._birth = rule_set.birth_table
        self._survive = rule_set.survive_table

    def advance(self, grid: Grid) -> None:
        """Compute the next generation into ``grid.next`` and swap buffers.

        Args:
            grid: Grid to advance (its current generation is replaced)
        """
        started = time.perf_counter()
        current = grid.current
        nxt = grid.next

        def kernel(row_start: int, row_stop: int) -> None:
            advance_rows(current, nxt, self._birth, self._survive, row_start, row_stop)

        parallel_map_rows(kernel, grid.height, self.workers)
        grid.swap()

        logger.debug(f"Advanced {grid.width}x{grid.height} grid in "
                     f"{(time.perf_counter() - started) * 1000:.2f}ms")

    def step_many(self, grid: Grid, generations: int) -> List[int]:
        """Advance several generations.

        Args:
            grid: Grid to advance
            generations: Number of generations

        Returns:
            Live cell count after each generation
        """
        live_counts = []
        for _ in range(generations):
            self.advance(grid)
            live_counts.append(grid.count_alive())
        return live_counts

    def __repr__(self) -> str:
        return f"StepEngine(rule='{self.rule_set}', workers={self.workers})"
