"""
Simulation Configuration

Everything the animation needs to start, validated up front so that a bad
rule or grid size aborts before anything is drawn.
"""

import logging
import math
from typing import Optional

from .core.errors import InvalidDimensions
from .core.rules import RuleSet

logger = logging.getLogger(__name__)

DEFAULT_WIDTH = 38
DEFAULT_HEIGHT = 23
DEFAULT_INTERVAL = 1.0


class SimulationConfig:
    """Startup configuration for a terminal simulation."""

    def __init__(self,
                 rule: str,
                 width: int = DEFAULT_WIDTH,
                 height: int = DEFAULT_HEIGHT,
                 interval: float = DEFAULT_INTERVAL,
                 seed_cells: Optional[int] = None,
                 workers: Optional[int] = None,
                 generations: Optional[int] = None):
        """Initialize configuration. Call validate() before use.

        Args:
            rule: Rulestring in B/S notation
            width: Grid width in cells (terminal columns / 2)
            height: Grid height in cells (terminal rows)
            interval: Seconds between generations (0 runs flat out)
            seed_cells: Random cells set alive at start (default half the grid)
            workers: Concurrent row bands per step (default CPU count)
            generations: Stop after this many generations (default: never)
        """
        self.rule = rule
        self.width = width
        self.height = height
        self.interval = interval
        self.seed_cells = seed_cells
        self.workers = workers
        self.generations = generations
        self.rule_set: Optional[RuleSet] = None

    def validate(self) -> 'SimulationConfig':
        """Check every setting and parse the rule.

        Returns:
            self, with ``rule_set`` populated

        Raises:
            InvalidRuleSyntax: If the rulestring is malformed
            InvalidRuleDigit: If the rulestring contains a count outside 0-8
            InvalidDimensions: If width or height is not positive
            ValueError: If any other setting is out of range
        """
        self.rule_set = RuleSet.parse(self.rule)

        if isinstance(self.width, bool) or isinstance(self.height, bool):
            raise InvalidDimensions(self.width, self.height)
        if not isinstance(self.width, int) or not isinstance(self.height, int):
            raise InvalidDimensions(self.width, self.height)
        if self.width < 1 or self.height < 1:
            raise InvalidDimensions(self.width, self.height)

        if not math.isfinite(self.interval) or self.interval < 0:
            raise ValueError(f"Frame interval must be a finite non-negative number, got {self.interval}")
        if self.seed_cells is not None and self.seed_cells < 0:
            raise ValueError(f"Seed cell count must be non-negative, got {self.seed_cells}")
        if self.workers is not None and self.workers < 1:
            raise ValueError(f"Worker count must be at least 1, got {self.workers}")
        if self.generations is not None and self.generations < 1:
            raise ValueError(f"Generation limit must be at least 1, got {self.generations}")

        if self.workers is not None and self.workers > self.height:
            logger.warning(f"{self.workers} workers requested for {self.height} rows, "
                           f"only {self.height} will be used")

        return self

    def __repr__(self) -> str:
        return (f"SimulationConfig(rule={self.rule!r}, {self.width}x{self.height}, "
                f"interval={self.interval}, seed_cells={self.seed_cells}, "
                f"workers={self.workers}, generations={self.generations})")
