"""Game module for Merge Puzzle RL.

Exports the rule engine for the 4x4 sliding-tile merge puzzle:
- Direction / rotate: orientation of the four moves onto one "left" move
- compact_row / compact_left / is_terminal: merging and terminal detection
- SpawnRules / spawn_tile: weighted random tile placement
- GeneratorSource / RandomSource: injectable randomness
- MergePuzzleGame: board state and the move state machine
"""

from .grid import as_grid, compact_left, compact_row, empty_cells, is_terminal, is_valid_grid
from .orient import Direction, rotate
from .randomness import GeneratorSource, RandomSource
from .rules import BOARD_SIZE, INITIAL_TILES, TILE_CEILING, SpawnRules, spawn_tile
from .core import Board, GameConfig, MergePuzzleGame, MoveResult, Phase, move_grid

__all__ = [
    "as_grid",
    "compact_left",
    "compact_row",
    "empty_cells",
    "is_terminal",
    "is_valid_grid",
    "Direction",
    "rotate",
    "GeneratorSource",
    "RandomSource",
    "BOARD_SIZE",
    "INITIAL_TILES",
    "TILE_CEILING",
    "SpawnRules",
    "spawn_tile",
    "Board",
    "GameConfig",
    "MergePuzzleGame",
    "MoveResult",
    "Phase",
    "move_grid",
]
