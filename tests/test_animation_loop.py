"""Tests for the animation loop, run headless with a fake clock."""

import pytest
from ironcat.core.engine import StepEngine
from ironcat.core.grid import Grid
from ironcat.core.patterns import BLINKER, place
from ironcat.core.rules import RuleSet
from ironcat.loop import AnimationLoop, LoopState


class RecordingTerminal:
    """Collects frames instead of drawing them."""

    def __init__(self):
        self.frames = []
        self.flushes = 0

    def write_cells(self, cells):
        frame = list(cells)
        self.frames.append(frame)
        return len(frame)

    def flush(self):
        self.flushes += 1


class FakeClock:
    """Monotonic clock advanced by sleeps and by a fixed cost per reading."""

    def __init__(self, cost_per_tick=0.0):
        self.now = 0.0
        self.cost_per_tick = cost_per_tick
        self.sleeps = []
        self._reads = 0

    def __call__(self):
        self._reads += 1
        # Every second reading ends a tick; charge the simulated work there
        if self._reads % 2 == 0:
            self.now += self.cost_per_tick
        return self.now

    def sleep(self, seconds):
        self.sleeps.append(seconds)
        self.now += seconds


def after(n):
    """Cancellation signal that fires once it has been polled n times."""
    calls = {"count": 0}

    def cancelled():
        calls["count"] += 1
        return calls["count"] >= n

    return cancelled


def make_loop(interval=0.5, cost=0.0, workers=1):
    grid = Grid(7, 7, place(BLINKER, 7, 7, 2, 3))
    engine = StepEngine(RuleSet.conway(), workers=workers)
    terminal = RecordingTerminal()
    clock = FakeClock(cost)
    loop = AnimationLoop(grid, engine, terminal, interval=interval,
                         glyphs=(".", "#"), clock=clock, sleep=clock.sleep)
    return loop, terminal, clock


class TestAnimationLoop:
    """Test tick ordering, pacing and cancellation."""

    def test_initial_state(self):
        loop, _, _ = make_loop()
        assert loop.state is LoopState.IDLE
        assert loop.generation == 0

    def test_negative_interval_rejected(self):
        grid = Grid(3, 3)
        with pytest.raises(ValueError, match="non-negative"):
            AnimationLoop(grid, StepEngine(RuleSet.conway()), RecordingTerminal(), interval=-0.1)

    def test_runs_until_cancelled(self):
        loop, terminal, _ = make_loop()
        generations = loop.run(after(5))

        assert generations == 5
        assert loop.generation == 5
        assert loop.state is LoopState.CANCELLED
        # Seed frame plus one frame per generation
        assert len(terminal.frames) == 6
        assert terminal.flushes == 6

    def test_cancellation_checked_after_render(self):
        """A pending cancellation still lets the current generation render."""
        loop, terminal, _ = make_loop()
        loop.run(lambda: True)

        assert loop.generation == 1
        assert len(terminal.frames) == 2

    def test_seed_frame_is_full(self):
        loop, terminal, _ = make_loop()
        loop.run(after(1))
        assert len(terminal.frames[0]) == 49

    def test_frames_carry_only_changes(self):
        """Blinker flips report 4 cells per generation as (row, column, glyph)."""
        loop, terminal, _ = make_loop()
        loop.run(after(3))

        for frame in terminal.frames[1:]:
            assert len(frame) == 4
        assert terminal.frames[1] == [
            (2, 3, "#"),
            (3, 2, "."),
            (3, 4, "."),
            (4, 3, "#"),
        ]

    def test_sleeps_remainder_of_interval(self):
        loop, _, clock = make_loop(interval=0.5, cost=0.2)
        loop.run(after(4))

        # No sleep after the cancelling tick
        assert len(clock.sleeps) == 3
        assert all(s == pytest.approx(0.3) for s in clock.sleeps)

    def test_no_sleep_when_over_budget(self):
        """Slow ticks proceed immediately with no catch-up."""
        loop, _, clock = make_loop(interval=0.1, cost=0.25)
        loop.run(after(4))

        assert clock.sleeps == []
        assert loop.generation == 4

    def test_zero_interval_never_sleeps(self):
        loop, _, clock = make_loop(interval=0.0)
        loop.run(after(3))
        assert clock.sleeps == []

    def test_tick_advances_and_renders(self):
        loop, terminal, _ = make_loop()
        loop.render()
        written = loop.tick()

        assert written == 4
        assert loop.generation == 1
        assert loop.grid.at(3, 2) is True

    def test_parallel_engine_same_frames(self):
        serial_loop, serial_terminal, _ = make_loop(workers=1)
        parallel_loop, parallel_terminal, _ = make_loop(workers=4)

        serial_loop.run(after(6))
        parallel_loop.run(after(6))

        assert serial_terminal.frames == parallel_terminal.frames

    def test_interrupt_while_sleeping_cancels(self):
        """Ctrl-C between frames ends the loop with the last frame complete."""
        loop, terminal, clock = make_loop(interval=0.5)

        def interrupted_sleep(seconds):
            raise KeyboardInterrupt

        loop._sleep = interrupted_sleep
        generations = loop.run(lambda: False)

        assert generations == 1
        assert loop.state is LoopState.CANCELLED
        assert len(terminal.frames) == 2
        assert len(terminal.frames[1]) == 4

    def test_run_resets_generation(self):
        """Each run() counts its own generations."""
        loop, _, _ = make_loop()
        loop.run(after(3))
        assert loop.run(after(2)) == 2
        assert loop.generation == 2

    @pytest.mark.parametrize("interval", [float("nan"), float("inf")])
    def test_non_finite_interval_rejected(self, interval):
        grid = Grid(3, 3)
        with pytest.raises(ValueError, match="finite"):
            AnimationLoop(grid, StepEngine(RuleSet.conway()), RecordingTerminal(), interval=interval)
