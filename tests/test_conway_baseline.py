"""
Conway Baseline Validation

Classic B3/S23 patterns: still lifes stay put, oscillators oscillate and
gliders glide, including across the toroidal seam.
"""

import pytest
import numpy as np
from ironcat.core.engine import StepEngine
from ironcat.core.grid import Grid
from ironcat.core.patterns import BLOCK, BLINKER, GLIDER, PATTERNS, place, random_cells, from_array
from ironcat.core.rules import RuleSet


@pytest.fixture(params=[1, 4])
def engine(request):
    """Conway engine, run both inline and with several bands."""
    return StepEngine(RuleSet.parse("B3/S23"), workers=request.param)


class TestConwayBaseline:
    """Test fundamental Conway behaviors to ensure correct implementation."""

    def test_block_stable_still_life(self, engine):
        """2x2 block remains unchanged across generations."""
        grid = Grid(6, 6, place(BLOCK, 6, 6, 2, 2))
        initial = grid.to_array()
        assert grid.count_alive() == 4

        for generation in range(20):
            engine.advance(grid)
            np.testing.assert_array_equal(grid.current, initial,
                                          err_msg=f"Block unstable at generation {generation}")

    def test_block_across_seam(self, engine):
        """A block straddling the corner of the torus is still a still life."""
        grid = Grid(5, 5, place(BLOCK, 5, 5, 4, 4))
        assert grid.at(4, 4) and grid.at(0, 0) and grid.at(4, 0) and grid.at(0, 4)
        initial = grid.to_array()

        for _ in range(6):
            engine.advance(grid)
        np.testing.assert_array_equal(grid.current, initial)

    def test_blinker_oscillates_period_2(self, engine):
        """Horizontal blinker turns vertical, then horizontal again."""
        grid = Grid(8, 8, place(BLINKER, 8, 8, 3, 4))
        horizontal = grid.to_array()

        engine.advance(grid)
        vertical = grid.to_array()
        assert grid.count_alive() == 3
        assert vertical[3, 4] and vertical[4, 4] and vertical[5, 4]

        engine.advance(grid)
        np.testing.assert_array_equal(grid.current, horizontal)

        engine.advance(grid)
        np.testing.assert_array_equal(grid.current, vertical)

    def test_glider_translates_after_4_generations(self, engine):
        """Glider reappears shifted by (1, 1) after 4 generations."""
        grid = Grid(20, 20, place(GLIDER, 20, 20, 5, 5))
        initial = grid.to_array()

        for _ in range(4):
            engine.advance(grid)

        expected = np.roll(initial, (1, 1), axis=(0, 1))
        np.testing.assert_array_equal(grid.current, expected)
        assert grid.count_alive() == 5

    def test_glider_wraps_on_small_grid(self, engine):
        """On a small torus the glider crosses the seam and keeps its shape."""
        grid = Grid(8, 8, place(GLIDER, 8, 8, 4, 4))
        initial = grid.to_array()

        for cycle in range(1, 9):
            for _ in range(4):
                engine.advance(grid)
            expected = np.roll(initial, (cycle, cycle), axis=(0, 1))
            np.testing.assert_array_equal(grid.current, expected,
                                          err_msg=f"Glider broken after {cycle * 4} generations")

        # 8 cycles on an 8x8 torus bring it home
        np.testing.assert_array_equal(grid.current, initial)

    def test_all_dead_stays_dead(self, engine):
        grid = Grid(3, 3)
        engine.advance(grid)
        assert grid.is_empty()


class TestPatterns:
    """Test seed initializers."""

    def test_pattern_library(self):
        assert set(PATTERNS) == {"block", "blinker", "glider"}
        assert BLOCK.sum() == 4
        assert BLINKER.sum() == 3
        assert GLIDER.sum() == 5

    def test_place_offsets(self):
        grid = Grid(6, 6, place(BLINKER, 6, 6, 1, 2))
        assert [x for x in range(6) if grid.at(x, 2)] == [1, 2, 3]
        assert grid.count_alive() == 3

    def test_place_wraps(self):
        grid = Grid(4, 4, place(BLINKER, 4, 4, 3, 0))
        assert grid.at(3, 0) and grid.at(0, 0) and grid.at(1, 0)

    def test_random_cells_count(self):
        """Random seeding never exceeds the requested picks."""
        rng = np.random.default_rng(42)
        grid = Grid(10, 10, random_cells(10, 10, cells=30, rng=rng))
        assert 0 < grid.count_alive() <= 30

    def test_random_cells_default_half(self):
        rng = np.random.default_rng(42)
        grid = Grid(20, 10, random_cells(20, 10, rng=rng))
        assert 0 < grid.count_alive() <= 100

    def test_random_cells_zero(self):
        grid = Grid(5, 5, random_cells(5, 5, cells=0))
        assert grid.is_empty()

    def test_random_cells_reproducible(self):
        a = Grid(12, 7, random_cells(12, 7, 20, np.random.default_rng(5)))
        b = Grid(12, 7, random_cells(12, 7, 20, np.random.default_rng(5)))
        assert a == b

    def test_from_array_initializer(self):
        state = np.array([[0, 1], [1, 0]])
        grid = Grid(2, 2, from_array(state))
        assert grid.at(1, 0) and grid.at(0, 1)
        assert grid.count_alive() == 2
