"""Gymnasium environments for Merge Puzzle RL."""

from __future__ import annotations

from gymnasium.envs.registration import register

ENV_ID = "MergePuzzle-4x4-v0"

register(
    id=ENV_ID,
    entry_point="merge_puzzle_rl.env.merge_env:MergePuzzleEnv",
)

__all__ = ["ENV_ID"]
