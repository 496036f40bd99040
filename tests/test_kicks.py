from __future__ import annotations

import random

import pytest

from tetromino_rl.game.grid import GameGrid
from tetromino_rl.game.kicks import (
    I_KICKS,
    JLSTZ_KICKS,
    NO_KICKS,
    collides,
    drop_distance,
    kicks_for,
    resolve_rotation,
)
from tetromino_rl.game.pieces import ActivePiece, TetrominoType

from conftest import board_with


def _expected_collision(board: GameGrid, piece: ActivePiece) -> bool:
    for x, y in piece.cells_at():
        if x < 0 or x >= board.width or y >= board.height:
            return True
        if y >= 0 and board.cells[y, x] != 0:
            return True
    return False


def test_collision_matches_definition_on_random_boards():
    rng = random.Random(1234)
    for _ in range(300):
        filled = [(rng.randrange(10), rng.randrange(22)) for _ in range(rng.randrange(40))]
        board = board_with(filled)
        piece = ActivePiece(
            rng.choice(list(TetrominoType)),
            rng.randrange(4),
            rng.randrange(-3, 11),
            rng.randrange(-4, 23),
        )
        assert collides(board, piece) == _expected_collision(board, piece)


def test_collides_with_candidate_pose():
    board = GameGrid(10, 22)
    piece = ActivePiece(TetrominoType.T, 0, 3, 0)
    assert not collides(board, piece)
    assert collides(board, piece, position=(-1, 0))
    assert collides(board, piece, position=(3, 21))
    assert not collides(board, piece, position=(3, 20))
    # spawn overhang above the top is legal
    assert not collides(board, piece, position=(3, -1))


def test_kick_tables_mirror_under_reversal():
    for table in (JLSTZ_KICKS, I_KICKS):
        for (a, b), offsets in table.items():
            reverse = table[(b, a)]
            assert [(-dx, -dy) for dx, dy in offsets] == reverse


def test_kick_table_selection():
    assert kicks_for(TetrominoType.O, 0, 1) == NO_KICKS
    assert kicks_for(TetrominoType.I, 0, 1) == I_KICKS[(0, 1)]
    for kind in (TetrominoType.J, TetrominoType.L, TetrominoType.S, TetrominoType.T, TetrominoType.Z):
        assert kicks_for(kind, 3, 0) == JLSTZ_KICKS[(3, 0)]


def test_rotation_without_obstacles_keeps_position():
    piece = ActivePiece(TetrominoType.T, 0, 3, 5)
    assert resolve_rotation(GameGrid(10, 22), piece, 1) == (3, 5, 1)
    assert resolve_rotation(GameGrid(10, 22), piece, -1) == (3, 5, 3)


def test_o_rotation_changes_index_only():
    piece = ActivePiece(TetrominoType.O, 0, 3, 5)
    assert resolve_rotation(GameGrid(10, 22), piece, 1) == (3, 5, 1)


def test_i_wall_kick_off_left_wall():
    # Vertical I hugging the left wall cannot lie flat in place.
    piece = ActivePiece(TetrominoType.I, 1, -2, 5)
    board = GameGrid(10, 22)
    assert not collides(board, piece)
    # (0,0) and (-1,0) hit the wall; (2,0) is the first legal candidate
    assert resolve_rotation(board, piece, 1) == (0, 5, 2)


def test_first_legal_kick_wins():
    # T against the right wall rotating 1 -> 2: (0,0) hits the block, (1,0) and
    # (1,-1) hit the wall, (0,2) is free and wins over (1,2).
    board = board_with([(7, 6)])
    piece = ActivePiece(TetrominoType.T, 1, 7, 5)
    assert not collides(board, piece)
    assert resolve_rotation(board, piece, 1) == (7, 7, 2)


def test_kick_determinism():
    board = board_with([(0, 21), (1, 21), (5, 10), (6, 11)])
    piece = ActivePiece(TetrominoType.L, 2, 4, 9)
    results = {resolve_rotation(board, piece, 1) for _ in range(10)}
    assert len(results) == 1


def test_rotation_rejected_when_every_kick_collides():
    piece = ActivePiece(TetrominoType.T, 0, 3, 19)
    own = set(piece.cells_at())
    board = board_with([(x, y) for y in range(22) for x in range(10) if (x, y) not in own])
    assert not collides(board, piece)
    assert resolve_rotation(board, piece, 1) is None
    assert resolve_rotation(board, piece, -1) is None


def test_bad_direction_is_contract_violation():
    with pytest.raises(ValueError):
        resolve_rotation(GameGrid(10, 22), ActivePiece(TetrominoType.T), 2)


def test_drop_distance_to_floor_and_stack():
    piece = ActivePiece(TetrominoType.O, 0, 3, 0)
    assert drop_distance(GameGrid(10, 22), piece) == 20
    assert drop_distance(board_with([(4, 10)]), piece) == 8
