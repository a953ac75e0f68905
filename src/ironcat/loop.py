"""Timed animation loop.

Single-threaded: all parallelism lives inside StepEngine.advance. Each tick
steps the grid, draws the changed cells, bumps the generation counter,
checks for cancellation and sleeps out the rest of the frame interval.
Overrunning ticks start the next one immediately; skipped frames are not
caught up.
"""

import logging
import math
import time
from enum import Enum
from typing import Callable, Iterable, Optional, Protocol, Tuple

from .core.engine import StepEngine
from .core.grid import Grid
from .render.differ import FrameDiffer
from .render.terminal import ALIVE_GLYPH, DEAD_GLYPH

logger = logging.getLogger(__name__)


class TerminalOutput(Protocol):
    """Anything that can draw (row, column, glyph) triples."""

    def write_cells(self, cells: Iterable[Tuple[int, int, str]]) -> int: ...

    def flush(self) -> None: ...


class LoopState(Enum):
    """Lifecycle of an AnimationLoop."""
    IDLE = "idle"
    RUNNING = "running"
    CANCELLED = "cancelled"


class AnimationLoop:
    """Drives generations at a fixed frame interval.

    Attributes:
        grid: Grid being animated
        engine: StepEngine holding the rule
        terminal: Output collaborator receiving changed cells
        interval: Target seconds per generation
        generation: Completed generations since the last run() started
        state: Current LoopState
    """

    def __init__(self,
                 grid: Grid,
                 engine: StepEngine,
                 terminal: TerminalOutput,
                 interval: float = 1.0,
                 differ: Optional[FrameDiffer] = None,
                 glyphs: Tuple[str, str] = (DEAD_GLYPH, ALIVE_GLYPH),
                 clock: Callable[[], float] = time.monotonic,
                 sleep: Callable[[float], None] = time.sleep):
        """Initialize the loop.

        Args:
            grid: Grid to animate
            engine: Engine used to advance the grid
            terminal: Receives (row, column, glyph) triples
            interval: Seconds per frame, must be non-negative
            differ: Frame differ (a fresh one when omitted)
            glyphs: (dead, alive) glyph pair
            clock: Monotonic time source in seconds
            sleep: Sleep function taking seconds

        Raises:
            ValueError: If interval is negative or not finite
        """
        if not math.isfinite(interval) or interval < 0:
            raise ValueError(f"Frame interval must be a finite non-negative number, got {interval}")

        self.grid = grid
        self.engine = engine
        self.terminal = terminal
        self.interval = interval
        self.differ = differ if differ is not None else FrameDiffer()
        self.glyphs = glyphs
        self.generation = 0
        self.state = LoopState.IDLE

        self._clock = clock
        self._sleep = sleep

    def render(self) -> int:
        """Draw the cells that changed since the last frame.

        Returns:
            Number of cells written
        """
        dead, alive = self.glyphs
        cells = ((y, x, alive if state else dead) for x, y, state in self.differ.diff(self.grid))
        written = self.terminal.write_cells(cells)
        self.terminal.flush()
        return written

    def tick(self) -> int:
        """Advance one generation and draw it.

        Returns:
            Number of cells written
        """
        self.engine.advance(self.grid)
        written = self.render()
        self.generation += 1
        return written

    def run(self, cancelled: Callable[[], bool]) -> int:
        """Animate until ``cancelled()`` returns True.

        The seed generation is drawn first. Cancellation is checked once per
        tick, after the generation has been drawn. A KeyboardInterrupt that
        arrives while sleeping between frames also ends the loop, since the
        last generation is already fully drawn at that point.

        Args:
            cancelled: Polled once per tick; True ends the loop

        Returns:
            Number of generations completed
        """
        self.generation = 0
        self.state = LoopState.RUNNING
        logger.info(f"Animating {self.grid.width}x{self.grid.height} grid with "
                    f"rule {self.engine.rule_set}, interval={self.interval}s")

        self.render()

        while True:
            started = self._clock()
            written = self.tick()

            if cancelled():
                break

            logger.debug(f"Generation {self.generation}: {written} cells redrawn")

            remaining = self.interval - (self._clock() - started)
            if remaining > 0:
                try:
                    self._sleep(remaining)
                except KeyboardInterrupt:
                    logger.info("Interrupted between frames")
                    break
            elif self.interval > 0:
                logger.debug(f"Generation {self.generation} over frame budget by {-remaining:.3f}s")

        self.state = LoopState.CANCELLED
        logger.info(f"Stopped after {self.generation} generations")
        return self.generation
