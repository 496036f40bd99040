from __future__ import annotations

import gymnasium as gym
import numpy as np
import pytest

import tetromino_rl.env  # noqa: F401
from tetromino_rl.env.tetromino_env import TetrominoEnv
from tetromino_rl.game import Action


def test_registered_env_resets():
    env = gym.make("Tetromino-10x22-v0")
    obs, info = env.reset(seed=0)
    assert obs["board"].shape == (22, 10)
    assert obs["queue"].shape == (5,)
    assert info["status"] == "playing"
    env.close()


def test_observation_in_space():
    env = TetrominoEnv()
    obs, _ = env.reset(seed=1)
    assert env.observation_space.contains(obs)
    for _ in range(30):
        obs, reward, terminated, truncated, info = env.step(env.action_space.sample())
        assert env.observation_space.contains(obs)
        if terminated:
            break


def test_gravity_every_n_steps():
    env = TetrominoEnv(gravity_every=2)
    obs, _ = env.reset(seed=2)
    y0 = int(obs["current"][3])
    obs, *_ = env.step(Action.NONE)
    assert int(obs["current"][3]) == y0
    obs, *_ = env.step(Action.NONE)
    assert int(obs["current"][3]) == y0 + 1


def test_hard_drop_reward_and_termination():
    env = TetrominoEnv(gravity_every=1000)
    env.reset(seed=3)
    total = 0.0
    terminated = False
    for _ in range(200):
        _, reward, terminated, truncated, info = env.step(Action.HARD_DROP)
        total += reward
        if terminated:
            break
    assert terminated
    assert total == info["score"]


def test_truncation():
    env = TetrominoEnv(max_episode_steps=3, gravity_every=1000)
    env.reset(seed=4)
    results = [env.step(Action.NONE) for _ in range(3)]
    assert [r[3] for r in results] == [False, False, True]


def test_rgb_render():
    env = TetrominoEnv(render_mode="rgb_array")
    env.reset(seed=5)
    img = env.render()
    assert img.shape == (22 * 12, 10 * 12, 3)
    assert img.dtype == np.uint8


def test_bad_gravity_rejected():
    with pytest.raises(ValueError):
        TetrominoEnv(gravity_every=0)


def test_random_agent_resets_after_each_episode():
    from tetromino_rl.rl.random_agent import run_random

    # a 10-step time limit ends five episodes in 50 steps
    _, episodes = run_random(steps=50, seed=0, max_episode_steps=10)
    assert episodes == 5
