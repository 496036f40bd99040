from __future__ import annotations

from typing import Iterable, List, Optional, Sequence, Tuple

import numpy as np

from .pieces import ActivePiece


Coordinate = Tuple[int, int]


def _readonly(arr: np.ndarray) -> np.ndarray:
    arr.setflags(write=False)
    return arr


class GameGrid:
    """Immutable playfield of locked cells.

    The grid uses 0 for empty cells and the tetromino value (1..7) for locked
    cells. Row 0 is the top; the topmost rows act as a hidden spawn buffer.
    Every mutating operation returns a new grid and leaves this one intact.
    """

    __slots__ = ("width", "height", "cells", "clearing")

    def __init__(self, width: int, height: int, cells: Optional[np.ndarray] = None,
                 clearing: Optional[np.ndarray] = None) -> None:
        self.width = int(width)
        self.height = int(height)
        if cells is None:
            cells = np.zeros((self.height, self.width), dtype=np.int8)
        if clearing is None:
            clearing = np.zeros((self.height, self.width), dtype=np.bool_)
        if cells.shape != (self.height, self.width):
            raise ValueError(f"cells shape {cells.shape} does not match {self.height}x{self.width}")
        self.cells = _readonly(cells)
        self.clearing = _readonly(clearing)

    @classmethod
    def from_rows(cls, rows: Sequence[Sequence[int]]) -> "GameGrid":
        cells = np.array(rows, dtype=np.int8)
        h, w = cells.shape
        return cls(w, h, cells)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, GameGrid):
            return NotImplemented
        return (
            np.array_equal(self.cells, other.cells)
            and np.array_equal(self.clearing, other.clearing)
        )

    def __hash__(self) -> int:
        return hash((self.width, self.height, self.cells.tobytes(), self.clearing.tobytes()))

    def __repr__(self) -> str:
        return f"GameGrid({self.width}x{self.height}, filled={self.filled_count()})"

    def is_inside(self, x: int, y: int) -> bool:
        return 0 <= x < self.width and 0 <= y < self.height

    def is_blocking(self, x: int, y: int) -> bool:
        if x < 0 or x >= self.width or y >= self.height:
            return True
        if y < 0:
            # Pieces may overhang the top while spawning.
            return False
        return bool(self.cells[y, x] != 0)

    def can_place(self, cells: Iterable[Coordinate]) -> bool:
        return not any(self.is_blocking(x, y) for x, y in cells)

    def merge(self, piece: ActivePiece) -> "GameGrid":
        """Lock the piece's cells as its kind; out-of-bounds cells are dropped."""
        cells = self.cells.copy()
        value = int(piece.kind)
        for x, y in piece.cells_at():
            if self.is_inside(x, y):
                cells[y, x] = value
        return GameGrid(self.width, self.height, cells, self.clearing.copy())

    def full_rows(self) -> List[int]:
        return [int(r) for r in np.flatnonzero(np.all(self.cells != 0, axis=1))]

    def mark_rows(self, rows: Sequence[int]) -> "GameGrid":
        """Flag every occupied cell of ``rows`` as about to clear."""
        if not rows:
            return self
        clearing = self.clearing.copy()
        idx = list(rows)
        clearing[idx, :] = self.cells[idx, :] != 0
        return GameGrid(self.width, self.height, self.cells.copy(), clearing)

    def collapse(self, rows: Sequence[int]) -> "GameGrid":
        """Remove ``rows`` and add as many empty rows on top, keeping order."""
        if not rows:
            return self
        drop = sorted(set(int(r) for r in rows if 0 <= r < self.height))
        kept = np.delete(self.cells, drop, axis=0)
        fresh = np.zeros((len(drop), self.width), dtype=np.int8)
        cells = np.vstack((fresh, kept))
        return GameGrid(self.width, self.height, cells)

    def visible(self, rows: int) -> np.ndarray:
        return self.cells[self.height - rows:].copy()

    def filled_count(self) -> int:
        return int(np.count_nonzero(self.cells))

    def clone_state(self) -> np.ndarray:
        return self.cells.copy()
