"""Gymnasium environments for Tetromino RL."""

from __future__ import annotations

from gymnasium.envs.registration import register

register(
    id="Tetromino-10x22-v0",
    entry_point="tetromino_rl.env.tetromino_env:TetrominoEnv",
)

__all__ = ["Tetromino-10x22-v0"]
