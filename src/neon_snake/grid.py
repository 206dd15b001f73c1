"""Square playing field for the snake game."""

from __future__ import annotations

from collections.abc import Iterable

import numpy as np

Coordinate = tuple[int, int]


class Grid:
    """Square game grid addressed by ``(x, y)`` coordinates.

    ``x`` grows to the right and ``y`` grows downwards. Occupancy is not
    stored on the grid itself; callers pass the occupied cells in and get a
    NumPy mask back, which keeps the snake body as the single source of truth.
    """

    def __init__(self, size: int = 20) -> None:
        if size < 4:
            raise ValueError("Grid size must be at least 4.")
        self.size = size

    @property
    def cell_count(self) -> int:
        return self.size * self.size

    def in_bounds(self, x: int, y: int) -> bool:
        """Check whether a coordinate lies within the grid."""
        return 0 <= x < self.size and 0 <= y < self.size

    def occupancy(self, occupied: Iterable[Coordinate]) -> np.ndarray:
        """Return a boolean ``(size, size)`` mask indexed as ``[y, x]``."""
        mask = np.zeros((self.size, self.size), dtype=bool)
        for x, y in occupied:
            mask[y, x] = True
        return mask

    def free_cells(self, occupied: Iterable[Coordinate]) -> list[Coordinate]:
        """Return every coordinate not present in *occupied*."""
        ys, xs = np.where(~self.occupancy(occupied))
        return list(zip(xs.tolist(), ys.tolist(), strict=True))
