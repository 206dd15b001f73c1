"""Food placement logic."""

from __future__ import annotations

import logging
from collections.abc import Collection

import numpy as np

from neon_snake.grid import Coordinate, Grid

logger = logging.getLogger(__name__)

# Rejection draws before switching to an explicit free-cell sample.
_MAX_REJECTION_DRAWS = 64


class FoodPlacer:
    """Places food uniformly at random on cells the snake does not occupy.

    Uses a seeded NumPy RNG for deterministic, reproducible placement.
    Rejection sampling is tried first; after ``max_draws`` misses the placer
    samples from the explicit free-cell list instead, so placement always
    terminates.
    """

    def __init__(
        self,
        grid: Grid,
        rng: np.random.Generator | None = None,
        max_draws: int = _MAX_REJECTION_DRAWS,
    ) -> None:
        if max_draws < 0:
            raise ValueError("max_draws must be >= 0.")
        self.grid = grid
        self.rng = rng if rng is not None else np.random.default_rng()
        self.max_draws = max_draws

    def place(self, occupied: Collection[Coordinate]) -> Coordinate | None:
        """Return a free coordinate, or ``None`` if the grid is full."""
        blocked = set(occupied)
        if len(blocked) >= self.grid.cell_count:
            logger.warning("No free cells available for food placement.")
            return None

        for _ in range(self.max_draws):
            x, y = self.rng.integers(0, self.grid.size, size=2).tolist()
            if (x, y) not in blocked:
                return x, y

        free = self.grid.free_cells(blocked)
        if not free:
            logger.warning("No free cells available for food placement.")
            return None
        return free[int(self.rng.integers(len(free)))]
