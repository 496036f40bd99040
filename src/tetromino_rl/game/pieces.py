from __future__ import annotations

from dataclasses import dataclass, replace
from enum import IntEnum
from typing import Dict, List, Tuple

import numpy as np


class TetrominoType(IntEnum):
    I = 1
    J = 2
    L = 3
    O = 4
    S = 5
    T = 6
    Z = 7


Shape = np.ndarray


def _frozen(rows: List[List[int]]) -> Shape:
    arr = np.array(rows, dtype=np.int8)
    arr.setflags(write=False)
    return arr


# Rotation states 0, R, 2, L. Every state of a kind shares one square box so
# rotating never moves the anchor.
ROTATIONS: Dict[TetrominoType, Tuple[Shape, ...]] = {
    TetrominoType.I: (
        _frozen([[0, 0, 0, 0], [1, 1, 1, 1], [0, 0, 0, 0], [0, 0, 0, 0]]),
        _frozen([[0, 0, 1, 0], [0, 0, 1, 0], [0, 0, 1, 0], [0, 0, 1, 0]]),
        _frozen([[0, 0, 0, 0], [0, 0, 0, 0], [1, 1, 1, 1], [0, 0, 0, 0]]),
        _frozen([[0, 1, 0, 0], [0, 1, 0, 0], [0, 1, 0, 0], [0, 1, 0, 0]]),
    ),
    TetrominoType.J: (
        _frozen([[1, 0, 0], [1, 1, 1], [0, 0, 0]]),
        _frozen([[0, 1, 1], [0, 1, 0], [0, 1, 0]]),
        _frozen([[0, 0, 0], [1, 1, 1], [0, 0, 1]]),
        _frozen([[0, 1, 0], [0, 1, 0], [1, 1, 0]]),
    ),
    TetrominoType.L: (
        _frozen([[0, 0, 1], [1, 1, 1], [0, 0, 0]]),
        _frozen([[0, 1, 0], [0, 1, 0], [0, 1, 1]]),
        _frozen([[0, 0, 0], [1, 1, 1], [1, 0, 0]]),
        _frozen([[1, 1, 0], [0, 1, 0], [0, 1, 0]]),
    ),
    # Symmetric: one state serves every rotation index.
    TetrominoType.O: (
        _frozen([[0, 1, 1, 0], [0, 1, 1, 0], [0, 0, 0, 0], [0, 0, 0, 0]]),
    ),
    TetrominoType.S: (
        _frozen([[0, 1, 1], [1, 1, 0], [0, 0, 0]]),
        _frozen([[0, 1, 0], [0, 1, 1], [0, 0, 1]]),
        _frozen([[0, 0, 0], [0, 1, 1], [1, 1, 0]]),
        _frozen([[1, 0, 0], [1, 1, 0], [0, 1, 0]]),
    ),
    TetrominoType.T: (
        _frozen([[0, 1, 0], [1, 1, 1], [0, 0, 0]]),
        _frozen([[0, 1, 0], [0, 1, 1], [0, 1, 0]]),
        _frozen([[0, 0, 0], [1, 1, 1], [0, 1, 0]]),
        _frozen([[0, 1, 0], [1, 1, 0], [0, 1, 0]]),
    ),
    TetrominoType.Z: (
        _frozen([[1, 1, 0], [0, 1, 1], [0, 0, 0]]),
        _frozen([[0, 0, 1], [0, 1, 1], [0, 1, 0]]),
        _frozen([[0, 0, 0], [1, 1, 0], [0, 1, 1]]),
        _frozen([[0, 1, 0], [1, 1, 0], [1, 0, 0]]),
    ),
}


def shape_for(kind: TetrominoType, rotation: int) -> Shape:
    states = ROTATIONS[kind]
    return states[rotation % len(states)]


def cells_of(kind: TetrominoType, rotation: int) -> List[Tuple[int, int]]:
    """Occupied (dx, dy) offsets of a rotation state, row-major."""
    ys, xs = np.nonzero(shape_for(kind, rotation))
    return [(int(x), int(y)) for y, x in zip(ys, xs)]


@dataclass(frozen=True)
class ActivePiece:
    kind: TetrominoType
    rotation: int = 0  # 0..3
    x: int = 0
    y: int = 0

    def shape(self) -> Shape:
        return shape_for(self.kind, self.rotation)

    def moved(self, dx: int, dy: int) -> "ActivePiece":
        return replace(self, x=self.x + dx, y=self.y + dy)

    def posed(self, x: int, y: int, rotation: int) -> "ActivePiece":
        return replace(self, x=x, y=y, rotation=rotation)

    def cells_at(self, origin_x: int | None = None, origin_y: int | None = None,
                 rotation: int | None = None) -> List[Tuple[int, int]]:
        ox = self.x if origin_x is None else origin_x
        oy = self.y if origin_y is None else origin_y
        rot = self.rotation if rotation is None else rotation
        return [(ox + dx, oy + dy) for dx, dy in cells_of(self.kind, rot)]
