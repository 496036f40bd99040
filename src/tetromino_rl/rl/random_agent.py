from __future__ import annotations

import argparse
import logging
from typing import Any, Tuple

import gymnasium as gym

import tetromino_rl.env  # noqa: F401


logger = logging.getLogger(__name__)


def run_random(steps: int = 200, seed: int | None = None, **make_kwargs: Any) -> Tuple[float, int]:
    """Play uniformly random actions; returns the total reward and finished episodes."""
    env = gym.make("Tetromino-10x22-v0", **make_kwargs)
    obs, info = env.reset(seed=seed)
    env.action_space.seed(seed)
    total_reward = 0.0
    episodes = 0
    for _ in range(steps):
        action = env.action_space.sample()
        obs, reward, terminated, truncated, info = env.step(action)
        total_reward += float(reward)
        if terminated or truncated:
            episodes += 1
            logger.debug("episode %d ended: score=%d lines=%d", episodes, info["score"], info["lines"])
            obs, info = env.reset()
    env.close()
    return total_reward, episodes


def main() -> None:
    p = argparse.ArgumentParser()
    p.add_argument("--steps", type=int, default=200)
    p.add_argument("--seed", type=int, default=None)
    args = p.parse_args()
    logging.basicConfig(level=logging.INFO)
    total, episodes = run_random(args.steps, args.seed)
    print(f"Random agent total reward: {total:.2f} over {episodes} finished episodes")


if __name__ == "__main__":  # pragma: no cover
    main()
