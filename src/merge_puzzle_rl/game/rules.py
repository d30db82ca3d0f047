from __future__ import annotations

from dataclasses import dataclass
from typing import Optional, Tuple

import numpy as np

from .grid import empty_cells
from .randomness import RandomSource


BOARD_SIZE = 4
INITIAL_TILES = 2
# Upper bound for any tile on a 4x4 board
TILE_CEILING = 2 ** 18


@dataclass(frozen=True)
class SpawnRules:
    tile_values: Tuple[int, ...] = (2, 4)
    tile_weights: Tuple[float, ...] = (0.9, 0.1)

    def __post_init__(self) -> None:
        if len(self.tile_values) == 0 or len(self.tile_values) != len(self.tile_weights):
            raise ValueError("tile_values and tile_weights must be non-empty and the same length")
        for value in self.tile_values:
            if isinstance(value, bool) or not isinstance(value, (int, np.integer)):
                raise ValueError(f"Spawned tile values must be integers, got {value!r}")
            if value < 2 or value & (value - 1):
                raise ValueError(f"Spawned tile values must be powers of two >= 2, got {value}")
        if any(w < 0 for w in self.tile_weights):
            raise ValueError("tile_weights must be non-negative")
        if not np.isclose(sum(self.tile_weights), 1.0):
            raise ValueError(f"tile_weights must sum to 1, got {sum(self.tile_weights)}")

    def draw_value(self, rng: RandomSource) -> int:
        return int(rng.weighted_choice(self.tile_values, self.tile_weights))


def spawn_tile(grid: np.ndarray, rng: RandomSource, rules: Optional[SpawnRules] = None) -> np.ndarray:
    """Return a copy of ``grid`` with one new tile in a random empty cell.

    A full grid comes back unchanged.
    """
    rules = rules or SpawnRules()
    new_grid = np.array(grid, dtype=np.int64, copy=True)
    empty = empty_cells(new_grid)
    if not empty:
        return new_grid
    row, col = empty[rng.uniform_index(len(empty))]
    new_grid[row, col] = rules.draw_value(rng)
    return new_grid
