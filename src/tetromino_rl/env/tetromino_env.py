from __future__ import annotations

from typing import Any, Dict, Optional, Tuple

import numpy as np
import gymnasium as gym
from gymnasium import spaces

from tetromino_rl.game import Action, GameConfig, TetrominoGame
from tetromino_rl.game.engine import Status


_PALETTE = np.array(
    [
        (20, 20, 26),    # empty
        (0, 240, 240),   # I
        (0, 0, 240),     # J
        (240, 160, 0),   # L
        (240, 240, 0),   # O
        (0, 240, 0),     # S
        (160, 0, 240),   # T
        (240, 0, 0),     # Z
    ],
    dtype=np.uint8,
)


class TetrominoEnv(gym.Env):
    """Single-player falling-block game with one discrete action per step.

    Actions are the members of :class:`Action` (8 total). Gravity is applied
    by calling the engine's tick every ``gravity_every`` steps; cleared rows
    collapse immediately.
    """

    metadata = {"render_modes": ["human", "rgb_array"], "render_fps": 30}

    def __init__(self, config: Optional[GameConfig] = None, render_mode: Optional[str] = None,
                 gravity_every: int = 4,
                 max_episode_steps: int = 10000,
                 line_weight: float = 0.0,
                 score_weight: float = 1.0,
                 terminal_penalty: float = 0.0) -> None:
        super().__init__()
        if gravity_every < 1:
            raise ValueError(f"gravity_every must be >= 1, got {gravity_every}")
        self.game = TetrominoGame(config, auto_clear=True)
        self.render_mode = render_mode
        self.gravity_every = int(gravity_every)
        self.max_episode_steps = int(max_episode_steps)
        self.line_weight = float(line_weight)
        self.score_weight = float(score_weight)
        self.terminal_penalty = float(terminal_penalty)

        cfg = self.game.config
        h, w = cfg.height, cfg.width
        self.observation_space = spaces.Dict(
            {
                "board": spaces.Box(low=0, high=7, shape=(h, w), dtype=np.int8),
                # kind, rotation, x, y; kicks may push the anchor past the edges
                "current": spaces.Box(low=-h, high=h + w, shape=(4,), dtype=np.int16),
                "queue": spaces.Box(low=0, high=7, shape=(cfg.preview_size,), dtype=np.int8),
                "hold": spaces.Discrete(8),
                "can_hold": spaces.Discrete(2),
            }
        )
        self.action_space = spaces.Discrete(len(Action))

        self._steps = 0

    def _get_obs(self) -> Dict[str, Any]:
        s = self.game.state
        cfg = s.config
        queue = np.zeros((cfg.preview_size,), dtype=np.int8)
        for i, kind in enumerate(s.preview):
            queue[i] = int(kind)
        piece = s.current
        return {
            "board": s.board.clone_state(),
            "current": np.array([int(piece.kind), piece.rotation, piece.x, piece.y], dtype=np.int16),
            "queue": queue,
            "hold": int(s.hold) if s.hold is not None else 0,
            "can_hold": int(s.can_hold),
        }

    def _get_info(self) -> Dict[str, Any]:
        info = self.game.info()
        info["steps"] = self._steps
        info["stats"] = self.game.state.stats
        return info

    def reset(
        self,
        *,
        seed: Optional[int] = None,
        options: Optional[dict] = None,
    ) -> Tuple[Dict[str, Any], Dict[str, Any]]:
        super().reset(seed=seed)
        self.game.reset(seed)
        self._steps = 0
        return self._get_obs(), self._get_info()

    def step(self, action: int):
        action = Action(int(action))
        score_before = self.game.state.score
        lines_before = self.game.state.lines

        self.game.dispatch(action)
        self._steps += 1
        if self._steps % self.gravity_every == 0 and self.game.state.status is Status.PLAYING:
            self.game.tick()

        s = self.game.state
        terminated = s.status is Status.GAME_OVER
        truncated = self._steps >= self.max_episode_steps and not terminated

        reward = self.score_weight * float(s.score - score_before)
        reward += self.line_weight * float(s.lines - lines_before)
        if terminated:
            reward += self.terminal_penalty

        return self._get_obs(), reward, terminated, truncated, self._get_info()

    def render(self) -> Optional[np.ndarray]:
        if self.render_mode == "rgb_array":
            grid = self.game.get_state()
            cell = 12
            colors = _PALETTE[np.abs(grid).astype(np.intp)]
            return np.repeat(np.repeat(colors, cell, axis=0), cell, axis=1)
        # human rendering delegated to external UI; noop
        return None

    def close(self) -> None:
        pass
