from __future__ import annotations

from src.engine.game import GameState
from src.engine.move import square_to_str, str_to_square
from src.engine.piece import Color


def names(squares) -> set[str]:
    return {square_to_str(s) for s in squares}


def play(state: GameState, *moves: str) -> None:
    for mv in moves:
        a, b = mv.split("-")
        assert state.commit_move(str_to_square(a), str_to_square(b)) is not None, mv


def test_every_empty_square_has_no_legal_moves() -> None:
    state = GameState.new()
    for row in range(2, 6):
        for col in range(8):
            assert state.legal_moves_at((row, col)) == []


def test_opponent_pieces_have_no_legal_moves_for_side_to_move() -> None:
    state = GameState.new()
    assert state.legal_moves_at(str_to_square("e7")) == []


def test_each_opening_move_flips_turn_and_keeps_material() -> None:
    state = GameState.new()
    moves = state.legal_moves()
    assert len(moves) == 20
    for m in moves:
        assert state.commit_move(m.from_sq, m.to_sq) is not None
        assert state.turn is Color.BLACK
        assert state.board.count() == 32
        assert state.captured == {Color.WHITE: [], Color.BLACK: []}
        assert state.undo() is True


def test_king_pawn_opening_legal_move_sets() -> None:
    state = GameState.new()
    assert names(state.legal_moves_at(str_to_square("e2"))) == {"e3", "e4"}
    assert names(state.legal_moves_at(str_to_square("d1"))) == set()

    play(state, "e2-e4")
    assert state.turn is Color.BLACK
    assert state.en_passant == str_to_square("e3")
    assert names(state.legal_moves_at(str_to_square("e7"))) == {"e6", "e5"}
    assert names(state.legal_moves_at(str_to_square("g8"))) == {"f6", "h6"}

    play(state, "e7-e5")
    assert state.en_passant == str_to_square("e6")
    # The d-file is still closed by d2; the e2 square opened the d1-h5 diagonal.
    queen = names(state.legal_moves_at(str_to_square("d1")))
    assert queen == {"e2", "f3", "g4", "h5"}
    assert "d3" not in queen
    assert names(state.legal_moves_at(str_to_square("e1"))) == {"e2"}
    assert names(state.legal_moves_at(str_to_square("f1"))) == {"e2", "d3", "c4", "b5", "a6"}
    assert names(state.legal_moves_at(str_to_square("e4"))) == set()

    assert state.commit_move(str_to_square("d1"), str_to_square("d3")) is None
    assert state.commit_move(str_to_square("d1"), str_to_square("h5")) is not None
