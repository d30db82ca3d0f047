from __future__ import annotations

import argparse
from typing import List, Optional

import gymnasium as gym

# Ensure envs are registered
from merge_puzzle_rl.env import ENV_ID
from merge_puzzle_rl.env.wrappers import ResampleInvalidActionWrapper


def run_random(steps: int = 200, seed: Optional[int] = None, resample: bool = True) -> List[int]:
    """Play random moves for ``steps`` env steps and return each finished episode's score."""
    env = gym.make(ENV_ID)
    if resample:
        env = ResampleInvalidActionWrapper(env)
    env.action_space.seed(seed)
    obs, info = env.reset(seed=seed)
    total_reward = 0.0
    episode_scores: List[int] = []
    for _ in range(steps):
        action = env.action_space.sample()
        obs, reward, terminated, truncated, info = env.step(action)
        total_reward += float(reward)
        if terminated or truncated:
            episode_scores.append(int(info["score"]))
            print(f"episode {len(episode_scores)}: score={info['score']} max_tile={info['max_tile']} "
                  f"moves={info['moves']}")
            obs, info = env.reset()
    env.close()
    print(f"Random agent total reward: {total_reward:.2f}  finished episodes: {len(episode_scores)}")
    return episode_scores


def build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser()
    p.add_argument("--steps", type=int, default=200)
    p.add_argument("--seed", type=int, default=None)
    p.add_argument("--no-resample", action="store_true",
                   help="Keep illegal moves instead of resampling a legal direction")
    return p


def main() -> None:
    args = build_parser().parse_args()
    run_random(steps=args.steps, seed=args.seed, resample=not args.no_resample)


if __name__ == "__main__":  # pragma: no cover
    main()
