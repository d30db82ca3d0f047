from __future__ import annotations

from typing import Iterable, List, Sequence, Tuple

import numpy as np


Coordinate = Tuple[int, int]


def as_grid(values: Iterable[Sequence[int]] | np.ndarray) -> np.ndarray:
    """Copy ``values`` into an integer grid, rejecting anything not square or not integral."""
    raw = np.asarray(values)
    if raw.dtype.kind not in "iu":
        integral = raw.dtype.kind == "f" and bool(np.all(np.isfinite(raw))) and bool(np.all(raw == np.trunc(raw)))
        if not integral:
            raise ValueError(f"Grid cells must be integers, got dtype {raw.dtype}")
    grid = raw.astype(np.int64)
    if grid.ndim != 2 or grid.shape[0] != grid.shape[1]:
        raise ValueError(f"Expected a square 2-D grid, got shape {grid.shape}")
    return grid


def is_valid_grid(grid: np.ndarray) -> bool:
    """True if every cell is empty (0) or a power of two of at least 2."""
    g = np.asarray(grid, dtype=np.int64)
    powers = (g >= 2) & ((g & (g - 1)) == 0)
    return bool(np.all((g == 0) | powers))


def empty_cells(grid: np.ndarray) -> List[Coordinate]:
    rows, cols = np.where(np.asarray(grid) == 0)
    return [(int(r), int(c)) for r, c in zip(rows, cols)]


def compact_row(row: Sequence[int] | np.ndarray, width: int) -> Tuple[np.ndarray, int]:
    """Slide a line toward index 0 and merge equal neighbours.

    Each tile merges at most once: ``[2, 2, 2, 2]`` becomes ``[4, 4, 0, 0]``,
    never ``[8, 0, 0, 0]``. Returns the padded line and the sum of the merged
    tile values.
    """
    tiles = [int(v) for v in row if v != 0]
    merged: List[int] = []
    score_delta = 0
    i = 0
    while i < len(tiles):
        if i + 1 < len(tiles) and tiles[i] == tiles[i + 1]:
            value = tiles[i] * 2
            merged.append(value)
            score_delta += value
            i += 2
        else:
            merged.append(tiles[i])
            i += 1
    if len(merged) > width:
        raise ValueError(f"Row holds {len(merged)} tiles after compaction, wider than {width}")
    result = np.zeros(width, dtype=np.int64)
    result[: len(merged)] = merged
    return result, score_delta


def compact_left(grid: np.ndarray) -> Tuple[np.ndarray, int]:
    grid = np.asarray(grid)
    width = grid.shape[1]
    compacted = np.zeros(grid.shape, dtype=np.int64)
    score_delta = 0
    for r in range(grid.shape[0]):
        compacted[r], row_delta = compact_row(grid[r], width)
        score_delta += row_delta
    return compacted, score_delta


def is_terminal(grid: np.ndarray) -> bool:
    """True when no cell is empty and no orthogonal neighbours match."""
    g = np.asarray(grid)
    if np.any(g == 0):
        return False
    if np.any(g[:, :-1] == g[:, 1:]):
        return False
    if np.any(g[:-1, :] == g[1:, :]):
        return False
    return True
