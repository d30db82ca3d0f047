from __future__ import annotations

import numpy as np
import gymnasium as gym
from gymnasium import spaces

from merge_puzzle_rl.game import TILE_CEILING


class ResampleInvalidActionWrapper(gym.Wrapper):
    """If a chosen direction does not move anything, resample uniformly among legal ones.

    Useful when training with vanilla PPO (no action masking).
    """

    def step(self, action):  # type: ignore[override]
        mask = self.get_action_mask()
        if 0 <= int(action) < mask.shape[0] and not bool(mask[int(action)]):
            valid_idxs = np.flatnonzero(mask)
            if valid_idxs.size > 0:
                action = int(self.np_random.choice(valid_idxs))
        return self.env.step(action)

    def get_action_mask(self) -> np.ndarray:
        base = self.env.unwrapped
        if hasattr(base, "get_action_mask"):
            return getattr(base, "get_action_mask")()
        raise AttributeError("Underlying env does not provide get_action_mask")


class OneHotObservationWrapper(gym.ObservationWrapper):
    """Encodes the grid as (channels, H, W) one-hot planes.

    Channel 0 marks empty cells; channel k marks tiles of value 2**k.
    """

    def __init__(self, env: gym.Env):
        super().__init__(env)
        assert isinstance(env.observation_space, spaces.Box)
        height, width = env.observation_space.shape
        self.num_channels = int(np.log2(TILE_CEILING)) + 1
        self.observation_space = spaces.Box(
            low=0.0, high=1.0, shape=(self.num_channels, height, width), dtype=np.float32
        )

    def observation(self, observation: np.ndarray) -> np.ndarray:
        grid = np.asarray(observation, dtype=np.int64)
        exponents = np.zeros(grid.shape, dtype=np.int64)
        filled = grid > 0
        exponents[filled] = np.log2(grid[filled]).astype(np.int64)
        state = np.zeros((self.num_channels,) + grid.shape, dtype=np.float32)
        rows, cols = np.indices(grid.shape)
        state[exponents, rows, cols] = 1.0
        return state
