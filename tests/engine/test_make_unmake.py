from __future__ import annotations

import copy

from src.engine.board import Board
from src.engine.game import GameState
from src.engine.move import str_to_square
from src.engine.piece import Color


def _roundtrip(state: GameState, a: str, b: str) -> None:
    before = copy.deepcopy(state)
    assert state.commit_move(str_to_square(a), str_to_square(b)) is not None
    assert state != before
    assert state.undo() is True
    assert state == before


def test_undo_without_moves_is_a_noop() -> None:
    state = GameState.new()
    assert state.undo() is False
    assert state == GameState.new()


def test_undo_restores_quiet_move_and_double_step() -> None:
    state = GameState.new()
    _roundtrip(state, "g1", "f3")
    _roundtrip(state, "e2", "e4")


def test_undo_restores_capture_castling_rights_and_ep_target() -> None:
    rows = [
        "r...k..r",
        "........",
        "........",
        "...pP...",
        "........",
        "........",
        "........",
        "R...K..R",
    ]
    state = GameState.from_board(Board.from_rows(rows), en_passant=str_to_square("d6"))
    _roundtrip(state, "e5", "d6")  # en passant
    _roundtrip(state, "e1", "g1")  # castle
    _roundtrip(state, "e1", "c1")
    _roundtrip(state, "a1", "a8")  # rook takes rook, both sides lose a right
    _roundtrip(state, "h1", "h8")


def test_undo_restores_king_cache_and_turn() -> None:
    state = GameState.new()
    for a, b in (("e2", "e4"), ("e7", "e5"), ("e1", "e2")):
        state.commit_move(str_to_square(a), str_to_square(b))
    assert state.board.king_square(Color.WHITE) == str_to_square("e2")
    assert state.undo() is True
    assert state.board.king_square(Color.WHITE) == str_to_square("e1")
    assert state.turn is Color.WHITE


def test_undo_all_moves_returns_to_start() -> None:
    state = GameState.new()
    for a, b in (("e2", "e4"), ("d7", "d5"), ("e4", "d5"), ("d8", "d5"), ("b1", "c3")):
        assert state.commit_move(str_to_square(a), str_to_square(b)) is not None
    assert state.captured[Color.WHITE] and state.captured[Color.BLACK]
    while state.undo():
        pass
    assert state == GameState.new()
