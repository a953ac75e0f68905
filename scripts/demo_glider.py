#!/usr/bin/env python3
"""
Headless Glider Demonstration

Runs a single glider on a toroidal grid without a terminal and checks that it
keeps its 5 cells and travels one cell diagonally every 4 generations, wrapping
across the edges. Also reports the mean step time for the chosen worker count.
"""

import sys
import time
import logging

import numpy as np

from ironcat.core.engine import StepEngine
from ironcat.core.grid import Grid
from ironcat.core.patterns import GLIDER, place
from ironcat.core.rules import RuleSet

logging.basicConfig(level=logging.INFO, format='%(asctime)s - %(levelname)s - %(message)s')
logger = logging.getLogger(__name__)


def run_glider_demo(grid_size=30, generations=120, start_x=5, start_y=5, workers=None):
    """Run the glider and return movement metrics."""
    logger.info("=== GLIDER DEMONSTRATION ===")
    logger.info(f"Grid size: {grid_size}x{grid_size}, generations: {generations}")

    grid = Grid(grid_size, grid_size, place(GLIDER, grid_size, grid_size, start_x, start_y))
    engine = StepEngine(RuleSet.conway(), workers=workers)
    initial = grid.to_array()

    step_times = []
    for generation in range(1, generations + 1):
        started = time.perf_counter()
        engine.advance(grid)
        step_times.append(time.perf_counter() - started)

        live = grid.count_alive()
        assert live == 5, f"Glider mass changed to {live} at generation {generation}"

        if generation % 4 == 0:
            shift = generation // 4
            expected = np.roll(initial, (shift, shift), axis=(0, 1))
            assert np.array_equal(grid.current, expected), \
                f"Glider shape broken at generation {generation}"

        if generation % 20 == 0:
            min_x, min_y, max_x, max_y = grid.bounds()
            logger.info(f"Generation {generation}: bounds=({min_x}, {min_y})-({max_x}, {max_y})")

    # Skip the first step, which includes kernel compilation
    mean_ms = float(np.mean(step_times[1:])) * 1000 if len(step_times) > 1 else 0.0
    results = {
        "grid_size": grid_size,
        "generations": generations,
        "workers": engine.workers,
        "cells_travelled": generations // 4,
        "final_live_count": grid.count_alive(),
        "mean_step_ms": mean_ms,
    }

    logger.info(f"Glider travelled {results['cells_travelled']} cells diagonally")
    logger.info(f"Mean step time: {mean_ms:.3f}ms with {engine.workers} workers")
    return results


if __name__ == "__main__":
    import argparse
    parser = argparse.ArgumentParser(description="Headless glider demonstration")
    parser.add_argument("--grid-size", type=int, default=30, help="Grid size (square)")
    parser.add_argument("--generations", type=int, default=120, help="Generations to run")
    parser.add_argument("--start-x", type=int, default=5, help="Glider start X position")
    parser.add_argument("--start-y", type=int, default=5, help="Glider start Y position")
    parser.add_argument("--workers", type=int, default=None, help="Parallel row bands")

    args = parser.parse_args()

    try:
        run_glider_demo(
            grid_size=args.grid_size,
            generations=args.generations,
            start_x=args.start_x,
            start_y=args.start_y,
            workers=args.workers,
        )
    except (AssertionError, ValueError) as e:
        logger.error(f"Demonstration failed: {e}")
        sys.exit(1)
