"""Tests for the FoodPlacer module."""

import numpy as np
import pytest

from neon_snake.food import FoodPlacer
from neon_snake.grid import Grid


class TestFoodPlacerInit:
    def test_invalid_max_draws(self):
        with pytest.raises(ValueError, match=">= 0"):
            FoodPlacer(Grid(size=5), max_draws=-1)


class TestFoodPlacement:
    def test_place_on_empty_grid(self):
        placer = FoodPlacer(Grid(size=5), rng=np.random.default_rng(42))
        x, y = placer.place([])
        assert 0 <= x < 5
        assert 0 <= y < 5

    def test_never_on_occupied_cell(self):
        grid = Grid(size=5)
        placer = FoodPlacer(grid, rng=np.random.default_rng(0))
        occupied = [(x, y) for x in range(5) for y in range(5) if (x, y) != (2, 3)]
        for _ in range(20):
            pos = placer.place(occupied)
            assert pos not in occupied

    def test_single_free_cell_found_without_rejection_draws(self):
        grid = Grid(size=4)
        placer = FoodPlacer(grid, rng=np.random.default_rng(1), max_draws=0)
        occupied = [(x, y) for x in range(4) for y in range(4) if (x, y) != (3, 0)]
        assert placer.place(occupied) == (3, 0)

    def test_full_grid_returns_none(self):
        grid = Grid(size=4)
        placer = FoodPlacer(grid)
        everything = [(x, y) for x in range(4) for y in range(4)]
        assert placer.place(everything) is None

    def test_deterministic(self):
        assert self._placements(42) == self._placements(42)

    def test_different_seeds(self):
        assert self._placements(1) != self._placements(2)

    def test_roughly_uniform(self):
        grid = Grid(size=4)
        placer = FoodPlacer(grid, rng=np.random.default_rng(3))
        counts = {}
        for _ in range(1600):
            pos = placer.place([(0, 0)])
            counts[pos] = counts.get(pos, 0) + 1
        assert (0, 0) not in counts
        assert len(counts) == 15
        assert min(counts.values()) > 50

    @staticmethod
    def _placements(seed: int, count: int = 5):
        placer = FoodPlacer(Grid(size=10), rng=np.random.default_rng(seed))
        return [placer.place([(5, 5)]) for _ in range(count)]
