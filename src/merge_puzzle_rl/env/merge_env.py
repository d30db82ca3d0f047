from __future__ import annotations

from typing import Any, Dict, Optional, Tuple

import numpy as np
import gymnasium as gym
from gymnasium import spaces

from merge_puzzle_rl.game import (
    BOARD_SIZE,
    TILE_CEILING,
    Direction,
    GameConfig,
    GeneratorSource,
    MergePuzzleGame,
    SpawnRules,
)


class MergePuzzleEnv(gym.Env):
    """Gymnasium view of the merge puzzle.

    Actions are ``Direction`` values (0: up, 1: right, 2: down, 3: left). The
    observation is the raw grid. Reward is the score gained by the move, or
    ``invalid_action_penalty`` when the move leaves the grid unchanged.
    """

    metadata = {"render_modes": []}

    def __init__(
        self,
        config: Optional[GameConfig] = None,
        rules: Optional[SpawnRules] = None,
        invalid_action_penalty: float = -1.0,
        max_episode_steps: int = 10000,
    ) -> None:
        super().__init__()
        self.game = MergePuzzleGame(config, rules)
        self.invalid_action_penalty = float(invalid_action_penalty)
        self.max_episode_steps = int(max_episode_steps)
        self._steps = 0

        self.observation_space = spaces.Box(
            low=0, high=TILE_CEILING, shape=(BOARD_SIZE, BOARD_SIZE), dtype=np.int64
        )
        self.action_space = spaces.Discrete(len(Direction))

    def _get_obs(self) -> np.ndarray:
        return self.game.board.grid.astype(np.int64, copy=True)

    def _get_info(self) -> Dict[str, Any]:
        return {
            "action_mask": self.game.action_mask(),
            "score": self.game.score,
            "max_tile": self.game.max_tile(),
            "moves": self.game.moves_made,
        }

    def get_action_mask(self) -> np.ndarray:
        return self.game.action_mask()

    def reset(self, *, seed: Optional[int] = None, options: Optional[dict] = None) -> Tuple[np.ndarray, Dict[str, Any]]:
        super().reset(seed=seed)
        # Spawns draw from the env's seeded generator
        self.game.rng = GeneratorSource(self.np_random)
        self.game.reset()
        self._steps = 0
        return self._get_obs(), self._get_info()

    def step(self, action: int):
        result = self.game.step(int(action))

        reward = float(result.score_delta) if result.moved else self.invalid_action_penalty
        terminated = bool(result.game_over)
        self._steps += 1
        # Counts every env step, so repeated no-op moves also hit the limit
        truncated = not terminated and self._steps >= self.max_episode_steps

        info = self._get_info()
        info["moved"] = result.moved
        info["engine_score_delta"] = result.score_delta
        return self._get_obs(), reward, terminated, truncated, info

    def close(self) -> None:
        pass
