from __future__ import annotations

from dataclasses import replace
from typing import Iterable, Sequence, Tuple

import numpy as np

from tetromino_rl.game import engine
from tetromino_rl.game.engine import GameConfig, SessionState
from tetromino_rl.game.grid import GameGrid
from tetromino_rl.game.pieces import ActivePiece, TetrominoType


class ScriptedRandomizer:
    """Deals the given kinds in order, then repeats the last one forever.

    The remaining script is the entropy value, so it stays immutable.
    """

    def __init__(self, kinds: Iterable[TetrominoType]) -> None:
        self.kinds = tuple(kinds)

    def seed_state(self, seed: int | None = None) -> Tuple[TetrominoType, ...]:
        return self.kinds

    def next_bag(self, rng_state: Tuple[TetrominoType, ...]) -> Tuple[Sequence[TetrominoType], Tuple[TetrominoType, ...]]:
        kinds = tuple(rng_state)
        if len(kinds) >= 7:
            return kinds[:7], kinds[7:]
        fill = kinds[-1] if kinds else TetrominoType.I
        return kinds + (fill,) * (7 - len(kinds)), (fill,)


def board_with(filled: Iterable[tuple[int, int]], width: int = 10, height: int = 22,
               value: int = int(TetrominoType.Z)) -> GameGrid:
    cells = np.zeros((height, width), dtype=np.int8)
    for x, y in filled:
        cells[y, x] = value
    return GameGrid(width, height, cells)


def rows_filled_except(rows: Iterable[int], gap_cols: Iterable[int], width: int = 10) -> list[tuple[int, int]]:
    gaps = set(gap_cols)
    return [(x, y) for y in rows for x in range(width) if x not in gaps]


def playing_state(kinds: Iterable[TetrominoType] = (TetrominoType.I,), board: GameGrid | None = None,
                  current: ActivePiece | None = None, **changes) -> SessionState:
    state = engine.start_new_game(GameConfig(), ScriptedRandomizer(kinds))
    if board is not None:
        changes["board"] = board
    if current is not None:
        changes["current"] = current
    return replace(state, **changes) if changes else state

