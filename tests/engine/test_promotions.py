from __future__ import annotations

from src.engine.board import Board
from src.engine.game import GameState
from src.engine.move import MoveKind, str_to_square
from src.engine.piece import Color, Piece, PieceKind


ROWS = [
    "........",
    "P.......",
    ".......k",
    "........",
    "........",
    "K.......",
    ".......p",
    "........",
]


def test_white_pawn_reaching_row_zero_becomes_queen() -> None:
    state = GameState.from_board(Board.from_rows(ROWS))
    a7, a8 = str_to_square("a7"), str_to_square("a8")
    assert state.board.piece_at(a7) == Piece(PieceKind.PAWN, Color.WHITE)
    move = state.commit_move(a7, a8)
    assert move is not None
    assert move.kind is MoveKind.PROMOTION
    assert move.piece.kind is PieceKind.PAWN
    assert state.board.piece_at(a8) == Piece(PieceKind.QUEEN, Color.WHITE)


def test_black_pawn_reaching_row_seven_becomes_queen() -> None:
    state = GameState.from_board(Board.from_rows(ROWS), Color.BLACK)
    h2, h1 = str_to_square("h2"), str_to_square("h1")
    assert state.commit_move(h2, h1) is not None
    assert state.board.piece_at(h1) == Piece(PieceKind.QUEEN, Color.BLACK)


def test_capture_promotion_records_victim_and_undoes_to_pawn() -> None:
    rows = list(ROWS)
    rows[0] = ".r......"
    state = GameState.from_board(Board.from_rows(rows))
    a7, b8 = str_to_square("a7"), str_to_square("b8")
    move = state.commit_move(a7, b8)
    assert move is not None and move.kind is MoveKind.PROMOTION
    assert move.captured == Piece(PieceKind.ROOK, Color.BLACK)
    assert state.board.piece_at(b8) == Piece(PieceKind.QUEEN, Color.WHITE)

    assert state.undo() is True
    assert state.board.piece_at(a7) == Piece(PieceKind.PAWN, Color.WHITE)
    assert state.board.piece_at(b8) == Piece(PieceKind.ROOK, Color.BLACK)
    assert state.captured[Color.WHITE] == []
