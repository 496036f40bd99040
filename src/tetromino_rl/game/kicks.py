"""Collision checks and SRS wall kicks.

Kick offsets are ``(dx, dy)`` in board coordinates, where ``dy`` grows
downward. Each list is tried in order and the first free pose wins.
"""

from __future__ import annotations

from typing import Dict, List, Optional, Tuple

from .grid import GameGrid
from .pieces import ActivePiece, TetrominoType


Offset = Tuple[int, int]
KickTable = Dict[Tuple[int, int], List[Offset]]


JLSTZ_KICKS: KickTable = {
    (0, 1): [(0, 0), (-1, 0), (-1, 1), (0, -2), (-1, -2)],
    (1, 0): [(0, 0), (1, 0), (1, -1), (0, 2), (1, 2)],
    (1, 2): [(0, 0), (1, 0), (1, -1), (0, 2), (1, 2)],
    (2, 1): [(0, 0), (-1, 0), (-1, 1), (0, -2), (-1, -2)],
    (2, 3): [(0, 0), (1, 0), (1, 1), (0, -2), (1, -2)],
    (3, 2): [(0, 0), (-1, 0), (-1, -1), (0, 2), (-1, 2)],
    (3, 0): [(0, 0), (-1, 0), (-1, -1), (0, 2), (-1, 2)],
    (0, 3): [(0, 0), (1, 0), (1, 1), (0, -2), (1, -2)],
}

I_KICKS: KickTable = {
    (0, 1): [(0, 0), (-2, 0), (1, 0), (-2, -1), (1, 2)],
    (1, 0): [(0, 0), (2, 0), (-1, 0), (2, 1), (-1, -2)],
    (1, 2): [(0, 0), (-1, 0), (2, 0), (-1, 2), (2, -1)],
    (2, 1): [(0, 0), (1, 0), (-2, 0), (1, -2), (-2, 1)],
    (2, 3): [(0, 0), (2, 0), (-1, 0), (2, 1), (-1, -2)],
    (3, 2): [(0, 0), (-2, 0), (1, 0), (-2, -1), (1, 2)],
    (3, 0): [(0, 0), (1, 0), (-2, 0), (1, -2), (-2, 1)],
    (0, 3): [(0, 0), (-1, 0), (2, 0), (-1, 2), (2, -1)],
}

NO_KICKS: List[Offset] = [(0, 0)]


def kicks_for(kind: TetrominoType, from_rotation: int, to_rotation: int) -> List[Offset]:
    if kind == TetrominoType.O:
        return NO_KICKS
    table = I_KICKS if kind == TetrominoType.I else JLSTZ_KICKS
    return table.get((from_rotation % 4, to_rotation % 4), NO_KICKS)


def collides(board: GameGrid, piece: ActivePiece, position: Optional[Tuple[int, int]] = None,
             rotation: Optional[int] = None) -> bool:
    """True if any cell of the candidate pose lands on a blocking cell."""
    x, y = position if position is not None else (piece.x, piece.y)
    return not board.can_place(piece.cells_at(x, y, rotation))


def resolve_rotation(board: GameGrid, piece: ActivePiece, direction: int) -> Optional[Tuple[int, int, int]]:
    """Return ``(x, y, rotation)`` of the first legal kick, or None."""
    if direction not in (1, -1):
        raise ValueError(f"rotation direction must be 1 or -1, got {direction!r}")
    target = (piece.rotation + direction) % 4
    for dx, dy in kicks_for(piece.kind, piece.rotation, target):
        candidate = (piece.x + dx, piece.y + dy)
        if not collides(board, piece, candidate, target):
            return candidate[0], candidate[1], target
    return None


def drop_distance(board: GameGrid, piece: ActivePiece) -> int:
    distance = 0
    while not collides(board, piece, (piece.x, piece.y + distance + 1)):
        distance += 1
    return distance
