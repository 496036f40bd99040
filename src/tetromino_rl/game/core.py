from __future__ import annotations

import logging
from enum import IntEnum
from typing import Optional, Tuple

import numpy as np

from . import engine
from .engine import GameConfig, SessionState, Status
from .randomizer import BagRandomizer, Randomizer
from .rules import ScoringRules


logger = logging.getLogger(__name__)


class Action(IntEnum):
    LEFT = 0
    RIGHT = 1
    ROTATE_CW = 2
    ROTATE_CCW = 3
    SOFT_DROP = 4
    HARD_DROP = 5
    HOLD = 6
    NONE = 7


class TetrominoGame:
    """Stateful host around the pure engine.

    Holds the current :class:`SessionState` and replaces it on every call.
    Not thread safe: callers must serialize access.
    """

    def __init__(self, config: Optional[GameConfig] = None, rules: Optional[ScoringRules] = None,
                 randomizer: Optional[Randomizer] = None, auto_clear: bool = True) -> None:
        self.config = config or GameConfig()
        self.rules = rules or ScoringRules()
        self.randomizer = randomizer or BagRandomizer()
        self.auto_clear = auto_clear
        self.state: SessionState = engine.initial_state(self.config, self.randomizer, self.rules)

    @property
    def status(self) -> Status:
        return self.state.status

    @property
    def game_over(self) -> bool:
        return self.state.status is Status.GAME_OVER

    @property
    def score(self) -> int:
        return self.state.score

    def reset(self, seed: Optional[int] = None) -> SessionState:
        """Start a new game; without a seed the entropy carries on from the last one."""
        if seed is not None:
            rng_state = self.randomizer.seed_state(seed)
        else:
            rng_state = self.state.rng_state
        self.state = engine.start_new_game(self.config, self.randomizer, self.rules, rng_state)
        logger.debug("new game, first piece %s", self.state.current.kind.name)
        return self.state

    def _apply(self, new_state: SessionState) -> SessionState:
        before = self.state
        if self.auto_clear and new_state.lines_to_clear:
            new_state = engine.apply_pending_clear(new_state)
        self.state = new_state
        if new_state.status is Status.GAME_OVER and before.status is not Status.GAME_OVER:
            logger.info("game over: score=%d lines=%d level=%d", new_state.score, new_state.lines, new_state.level)
        return new_state

    def dispatch(self, action: Action) -> SessionState:
        s = self.state
        if action == Action.LEFT:
            return self._apply(engine.move(s, -1, 0))
        if action == Action.RIGHT:
            return self._apply(engine.move(s, 1, 0))
        if action == Action.ROTATE_CW:
            return self._apply(engine.rotate(s, 1))
        if action == Action.ROTATE_CCW:
            return self._apply(engine.rotate(s, -1))
        if action == Action.SOFT_DROP:
            return self._apply(engine.move(s, 0, 1))
        if action == Action.HARD_DROP:
            return self._apply(engine.hard_drop(s))
        if action == Action.HOLD:
            return self._apply(engine.hold(s))
        if action == Action.NONE:
            return s
        raise ValueError(f"unknown action {action!r}")

    def tick(self) -> SessionState:
        return self._apply(engine.tick(self.state))

    def pause_toggle(self) -> SessionState:
        self.state = engine.pause_toggle(self.state)
        return self.state

    def apply_pending_clear(self) -> SessionState:
        return self._apply(engine.apply_pending_clear(self.state))

    def step(self, action: Action) -> Tuple[np.ndarray, int, bool, dict]:
        if self.game_over:
            return self.get_state(), 0, True, self.info()
        before = self.state.score
        self.dispatch(Action(action))
        reward = self.state.score - before
        return self.get_state(), reward, self.game_over, self.info()

    def info(self) -> dict:
        s = self.state
        return {
            "score": s.score,
            "lines": s.lines,
            "level": s.level,
            "combo": s.combo,
            "status": s.status.value,
            "lines_to_clear": list(s.lines_to_clear),
        }

    def get_state(self) -> np.ndarray:
        # Overlay current piece on a copy of the grid for observation
        state = self.state.board.clone_state()
        if self.state.status in (Status.PLAYING, Status.PAUSED) and not self.state.lines_to_clear:
            piece = self.state.current
            for x, y in piece.cells_at():
                if self.state.board.is_inside(x, y):
                    # Use negative to indicate falling piece overlay
                    state[y, x] = -int(piece.kind)
        return state
