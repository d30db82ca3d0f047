from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, List, Optional, Tuple

import numpy as np

from .grid import as_grid, compact_left, empty_cells, is_terminal, is_valid_grid
from .orient import Direction, rotate
from .randomness import GeneratorSource, RandomSource
from .rules import BOARD_SIZE, INITIAL_TILES, TILE_CEILING, SpawnRules, spawn_tile


class Phase(Enum):
    IDLE = "idle"
    MOVE_IN_PROGRESS = "move_in_progress"
    TERMINAL = "terminal"


@dataclass
class GameConfig:
    random_seed: Optional[int] = None


@dataclass
class Board:
    grid: np.ndarray = field(default_factory=lambda: np.zeros((BOARD_SIZE, BOARD_SIZE), dtype=np.int64))
    score: int = 0

    def snapshot(self) -> np.ndarray:
        view = self.grid.copy()
        view.flags.writeable = False
        return view


@dataclass
class MoveResult:
    direction: Optional[Direction]
    moved: bool
    score_delta: int = 0
    merges: int = 0
    spawned: Optional[Tuple[int, int, int]] = None
    game_over: bool = False


def move_grid(grid: np.ndarray, direction: Direction) -> Tuple[np.ndarray, int]:
    """Apply a move to ``grid`` without spawning. Returns (new grid, score gained)."""
    oriented = rotate(grid, direction)
    compacted, score_delta = compact_left(oriented)
    return rotate(compacted, direction, reverse=True), score_delta


def _new_tile(before: np.ndarray, after: np.ndarray) -> Optional[Tuple[int, int, int]]:
    changed = np.argwhere(before != after)
    if changed.size == 0:
        return None
    r, c = (int(v) for v in changed[0])
    return r, c, int(after[r, c])


class MergePuzzleGame:
    """Board state plus the move state machine.

    A move is accepted only if it changes the grid. An accepted move adds its
    score, spawns one tile, and re-checks for a terminal board. Once terminal,
    further moves are rejected until ``reset``.
    """

    def __init__(self, config: Optional[GameConfig] = None, rules: Optional[SpawnRules] = None,
                 rng: Optional[RandomSource] = None) -> None:
        self.config = config or GameConfig()
        self.rules = rules or SpawnRules()
        self.rng: RandomSource = rng or GeneratorSource(seed=self.config.random_seed)
        self.board = Board()
        self.phase = Phase.IDLE
        self.moves_made = 0
        self.reset()

    def reset(self, seed: Optional[int] = None) -> None:
        if seed is not None:
            self.rng = GeneratorSource(seed=seed)
        self.board = Board()
        self.phase = Phase.IDLE
        self.moves_made = 0
        for _ in range(INITIAL_TILES):
            self.board.grid = spawn_tile(self.board.grid, self.rng, self.rules)

    def load(self, grid: Any, score: int = 0) -> None:
        """Replace the board with ``grid`` and ``score`` and recompute the phase."""
        new_grid = as_grid(grid)
        if new_grid.shape != (BOARD_SIZE, BOARD_SIZE):
            raise ValueError(f"Expected a {BOARD_SIZE}x{BOARD_SIZE} grid, got shape {new_grid.shape}")
        if not is_valid_grid(new_grid):
            raise ValueError("Grid cells must be 0 or positive powers of two")
        if int(new_grid.max()) > TILE_CEILING:
            raise ValueError(f"Grid cells must not exceed {TILE_CEILING}")
        if isinstance(score, bool) or not isinstance(score, (int, np.integer)):
            raise ValueError(f"Score must be an integer, got {score!r}")
        if score < 0:
            raise ValueError(f"Score must be non-negative, got {score}")
        self.board = Board(grid=new_grid, score=int(score))
        self.phase = Phase.TERMINAL if is_terminal(new_grid) else Phase.IDLE

    @property
    def grid(self) -> np.ndarray:
        return self.board.snapshot()

    @property
    def score(self) -> int:
        return self.board.score

    @property
    def game_over(self) -> bool:
        return self.phase is Phase.TERMINAL

    def preview(self, token: Any) -> Tuple[np.ndarray, int, bool]:
        """Look ahead at a move without touching the board or spawning.

        Returns (grid after the move, score gained, whether the grid changed).
        Unknown tokens report an unchanged grid.
        """
        direction = Direction.parse(token)
        if direction is None:
            return self.board.grid.copy(), 0, False
        after, score_delta = move_grid(self.board.grid, direction)
        return after, score_delta, not np.array_equal(self.board.grid, after)

    def legal_moves(self) -> List[Direction]:
        if self.game_over:
            return []
        return [d for d in Direction if self.preview(d)[2]]

    def action_mask(self) -> np.ndarray:
        mask = np.zeros(len(Direction), dtype=np.bool_)
        for d in self.legal_moves():
            mask[int(d)] = True
        return mask

    def step(self, token: Any) -> MoveResult:
        direction = Direction.parse(token)
        if direction is None:
            return MoveResult(direction=None, moved=False, game_over=self.game_over)
        if self.phase is Phase.TERMINAL:
            return MoveResult(direction=direction, moved=False, game_over=True)

        self.phase = Phase.MOVE_IN_PROGRESS
        before = self.board.grid
        after, score_delta = move_grid(before, direction)
        if np.array_equal(before, after):
            self.phase = Phase.IDLE
            return MoveResult(direction=direction, moved=False)

        merges = int(np.count_nonzero(before) - np.count_nonzero(after))
        self.board.score += score_delta
        spawned_grid = spawn_tile(after, self.rng, self.rules)
        self.board.grid = spawned_grid
        self.moves_made += 1
        # Checked on the post-spawn grid
        self.phase = Phase.TERMINAL if is_terminal(spawned_grid) else Phase.IDLE
        return MoveResult(
            direction=direction,
            moved=True,
            score_delta=score_delta,
            merges=merges,
            spawned=_new_tile(after, spawned_grid),
            game_over=self.game_over,
        )

    def max_tile(self) -> int:
        return int(np.max(self.board.grid))

    def get_state(self) -> dict:
        return {
            "grid": self.board.snapshot(),
            "score": self.board.score,
            "game_over": self.game_over,
            "phase": self.phase.value,
            "moves_made": self.moves_made,
            "max_tile": self.max_tile(),
            "empty_cells": len(empty_cells(self.board.grid)),
        }

    def __str__(self) -> str:
        return f"Score: {self.board.score}\n{self.board.grid}"
