from __future__ import annotations

from enum import IntEnum
from typing import Any, Dict, Optional

import numpy as np


class Direction(IntEnum):
    UP = 0
    RIGHT = 1
    DOWN = 2
    LEFT = 3

    @property
    def inverse(self) -> "Direction":
        return _INVERSE[self]

    @classmethod
    def parse(cls, token: Any) -> Optional["Direction"]:
        """Map an input token to a direction, or None if it is not one.

        Accepts members, integers in range (numpy integers included) and
        case-insensitive names such as ``"left"``.
        """
        if isinstance(token, cls):
            return token
        if isinstance(token, bool):
            return None
        if isinstance(token, (int, np.integer)):
            value = int(token)
            if 0 <= value < len(cls):
                return cls(value)
            return None
        if isinstance(token, str):
            return cls.__members__.get(token.strip().upper())
        return None


_INVERSE: Dict[Direction, Direction] = {
    Direction.UP: Direction.DOWN,
    Direction.DOWN: Direction.UP,
    Direction.LEFT: Direction.RIGHT,
    Direction.RIGHT: Direction.LEFT,
}

# Counter-clockwise quarter turns that bring each direction's target edge to column 0
QUARTER_TURNS: Dict[Direction, int] = {
    Direction.LEFT: 0,
    Direction.UP: 1,
    Direction.RIGHT: 2,
    Direction.DOWN: 3,
}


def rotate(grid: np.ndarray, direction: Direction, reverse: bool = False) -> np.ndarray:
    """Orient ``grid`` so that a move toward ``direction`` becomes a move left.

    With ``reverse=True`` the inverse transform is applied, restoring the
    original orientation of a grid produced by the forward call.
    """
    grid = np.asarray(grid)
    if grid.ndim != 2 or grid.shape[0] != grid.shape[1]:
        raise ValueError(f"Expected square grid, got shape {grid.shape}")
    k = QUARTER_TURNS[Direction(direction)]
    if reverse:
        k = -k
    return np.rot90(grid, k).copy()
