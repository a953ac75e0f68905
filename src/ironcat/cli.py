#!/usr/bin/env python3
"""
IronCAT command line

Runs an animated cellular automaton simulation in the terminal:

    ironcat -r B3/S23
    ironcat -m 40 -n 60 -r B36/S23 -s 800 -i 0.1

Stop with Ctrl-C.
"""

import argparse
import logging
import signal
import sys
import threading
from contextlib import contextmanager
from typing import Iterator, List, Optional

from .config import DEFAULT_HEIGHT, DEFAULT_INTERVAL, DEFAULT_WIDTH, SimulationConfig
from .core.engine import StepEngine
from .core.grid import Grid
from .core.patterns import random_cells
from .loop import AnimationLoop
from .render.terminal import AnsiTerminal

logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="ironcat",
        description="Runs an animated cellular automata simulation in the terminal.")
    parser.add_argument("-m", "--rows", type=int, default=DEFAULT_HEIGHT, help="Number of rows")
    parser.add_argument("-n", "--columns", type=int, default=DEFAULT_WIDTH, help="Number of columns")
    parser.add_argument("-r", "--rulestring", required=True,
                        help="Rulestring for the automata in B/S notation, e.g. B3/S23")
    parser.add_argument("-s", "--seed", type=int, default=None,
                        help="Set random cells SEED times (default: half the grid)")
    parser.add_argument("-i", "--interval", type=float, default=DEFAULT_INTERVAL,
                        help="Seconds between generations")
    parser.add_argument("-g", "--generations", type=int, default=None,
                        help="Stop after this many generations")
    parser.add_argument("-w", "--workers", type=int, default=None,
                        help="Row bands computed in parallel (default: CPU count)")
    parser.add_argument("--log-level", default="WARNING",
                        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
                        help="Logging level (logs go to stderr)")
    return parser


def config_from_args(args: argparse.Namespace) -> SimulationConfig:
    return SimulationConfig(
        rule=args.rulestring,
        width=args.columns,
        height=args.rows,
        interval=args.interval,
        seed_cells=args.seed,
        workers=args.workers,
        generations=args.generations,
    )


def run(config: SimulationConfig, terminal: AnsiTerminal, stop: threading.Event) -> int:
    """Seed a grid from a validated config and animate it.

    Returns:
        Number of generations completed
    """
    grid = Grid(config.width, config.height,
                random_cells(config.width, config.height, config.seed_cells))
    engine = StepEngine(config.rule_set, workers=config.workers)
    loop = AnimationLoop(grid, engine, terminal, interval=config.interval)

    def cancelled() -> bool:
        if stop.is_set():
            return True
        return config.generations is not None and loop.generation >= config.generations

    terminal.clear()
    try:
        return loop.run(cancelled)
    finally:
        terminal.finish(grid.height)


@contextmanager
def cancel_on_interrupt(stop: threading.Event) -> Iterator[threading.Event]:
    """Turn SIGINT into a stop request that the loop sees at the next tick.

    The previous handler is restored on exit.
    """
    def handler(signum, frame):
        stop.set()

    previous = signal.signal(signal.SIGINT, handler)
    try:
        yield stop
    finally:
        signal.signal(signal.SIGINT, previous)


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)

    logging.basicConfig(level=getattr(logging, args.log_level),
                        format='%(asctime)s - %(levelname)s - %(message)s')

    try:
        config = config_from_args(args).validate()
    except ValueError as e:
        logger.error(f"Invalid configuration: {e}")
        print(f"Error: {e}")
        return 1

    logger.info(f"Starting with {config}")
    with cancel_on_interrupt(threading.Event()) as stop:
        run(config, AnsiTerminal(), stop)
    return 0


if __name__ == "__main__":
    sys.exit(main())
