"""Board-level move mechanics shared by the legality filter and the game.

``make_on_board`` and ``unmake_on_board`` only touch pieces and the king
cache; side to move, castling rights and the en-passant target belong to
:class:`src.engine.game.GameState`.
"""

from __future__ import annotations

from typing import Optional

from .board import PROMOTION_ROW, Board
from .move import Move, MoveKind, Square
from .piece import Piece, PieceKind


def build_move(board: Board, from_sq: Square, to_sq: Square) -> Move:
    """Classify the move of the piece on ``from_sq`` to ``to_sq``.

    The move is not validated; callers pass destinations produced by the
    move generator.

    Raises:
        ValueError: If ``from_sq`` is empty.
    """
    piece = board.piece_at(from_sq)
    if piece is None:
        raise ValueError("no piece to move from from_sq")
    captured = board.piece_at(to_sq)
    captured_sq: Optional[Square] = to_sq if captured is not None else None
    kind = MoveKind.NORMAL

    if piece.kind is PieceKind.PAWN:
        if from_sq[1] != to_sq[1] and captured is None:
            # Diagonal step onto an empty square: the victim sits beside the origin.
            captured_sq = (from_sq[0], to_sq[1])
            captured = board.piece_at(captured_sq)
            kind = MoveKind.EN_PASSANT
        elif to_sq[0] == PROMOTION_ROW[piece.color]:
            kind = MoveKind.PROMOTION
    elif piece.kind is PieceKind.KING and abs(to_sq[1] - from_sq[1]) == 2:
        kind = MoveKind.CASTLE

    return Move(from_sq, to_sq, piece, captured, captured_sq, kind)


def castle_rook_squares(move: Move) -> tuple[Square, Square]:
    """Return the rook's (origin, destination) for a castling move."""
    row = move.from_sq[0]
    if move.to_sq[1] > move.from_sq[1]:
        return (row, 7), (row, 5)
    return (row, 0), (row, 3)


def make_on_board(board: Board, move: Move) -> None:
    """Apply ``move`` to ``board`` in place."""
    if move.captured_sq is not None and move.captured_sq != move.to_sq:
        board.set_piece(move.captured_sq, None)
    board.move_piece(move.from_sq, move.to_sq)
    if move.kind is MoveKind.CASTLE:
        rook_from, rook_to = castle_rook_squares(move)
        board.move_piece(rook_from, rook_to)
    elif move.kind is MoveKind.PROMOTION:
        board.set_piece(move.to_sq, Piece(PieceKind.QUEEN, move.piece.color))


def unmake_on_board(board: Board, move: Move) -> None:
    """Revert ``move`` on ``board`` in place; ``move`` must be the last one made."""
    if move.kind is MoveKind.CASTLE:
        rook_from, rook_to = castle_rook_squares(move)
        board.move_piece(rook_to, rook_from)
    board.set_piece(move.to_sq, None)
    board.set_piece(move.from_sq, move.piece)
    if move.captured is not None and move.captured_sq is not None:
        board.set_piece(move.captured_sq, move.captured)


def simulate(board: Board, move: Move) -> Board:
    """Return a scratch copy of ``board`` with ``move`` applied."""
    scratch = board.copy()
    make_on_board(scratch, move)
    return scratch
