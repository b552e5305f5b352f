"""Per-piece movement rules.

Everything here is pure: the board is read, never written. Results are
pseudo-legal; the legality filter removes moves that leave the mover's king
in check.
"""

from __future__ import annotations

from typing import Callable, List, Optional

from .board import HOME_ROW, PAWN_DIRECTION, PAWN_START_ROW, Board
from .move import Square, on_board
from .piece import Piece, PieceKind
from .rules import CastlingRights


KNIGHT_OFFSETS = [(2, 1), (2, -1), (-2, 1), (-2, -1), (1, 2), (1, -2), (-1, 2), (-1, -2)]
KING_OFFSETS = [(dr, dc) for dr in (-1, 0, 1) for dc in (-1, 0, 1) if (dr, dc) != (0, 0)]
ORTHOGONAL = [(0, 1), (0, -1), (1, 0), (-1, 0)]
DIAGONAL = [(1, 1), (1, -1), (-1, 1), (-1, -1)]
SLIDER_DIRECTIONS = {
    PieceKind.BISHOP: DIAGONAL,
    PieceKind.ROOK: ORTHOGONAL,
    PieceKind.QUEEN: ORTHOGONAL + DIAGONAL,
}


def moves_for(
    board: Board,
    sq: Square,
    *,
    en_passant: Optional[Square] = None,
    castling: Optional[CastlingRights] = None,
    in_check: bool = False,
    is_attacked: Optional[Callable[[Square], bool]] = None,
) -> List[Square]:
    """Return pseudo-legal destinations for the piece on ``sq``.

    Args:
        board (Board): Position to read.
        sq (Square): Origin square; an empty square yields no moves.
        en_passant (Optional[Square]): Current en-passant target, if any.
        castling (Optional[CastlingRights]): Rights of the piece's side. Only
            consulted for kings; ``None`` disables castling.
        in_check (bool): Whether the piece's side is currently in check.
            Castling is never offered while in check.
        is_attacked (Optional[Callable[[Square], bool]]): When given, castling
            is also refused if the king would pass over a square for which it
            returns True.

    Returns:
        List[Square]: Destinations in generation order.
    """
    piece = board.piece_at(sq)
    if piece is None:
        return []
    if piece.kind is PieceKind.PAWN:
        return _pawn_moves(board, sq, piece, en_passant)
    if piece.kind is PieceKind.KNIGHT:
        return _step_moves(board, sq, piece, KNIGHT_OFFSETS)
    if piece.kind is PieceKind.KING:
        moves = _step_moves(board, sq, piece, KING_OFFSETS)
        if castling is not None and not in_check:
            moves.extend(_castling_moves(board, sq, piece, castling, is_attacked))
        return moves
    return _slider_moves(board, sq, piece, SLIDER_DIRECTIONS[piece.kind])


def attacks_from(board: Board, sq: Square) -> List[Square]:
    """Return the squares the piece on ``sq`` attacks.

    Same geometry as :func:`moves_for` except that pawns attack only their two
    forward diagonals (occupied or not) and kings never castle.
    """
    piece = board.piece_at(sq)
    if piece is None:
        return []
    if piece.kind is PieceKind.PAWN:
        row, col = sq
        r = row + PAWN_DIRECTION[piece.color]
        return [(r, c) for c in (col - 1, col + 1) if on_board(r, c)]
    if piece.kind is PieceKind.KNIGHT:
        return _step_moves(board, sq, piece, KNIGHT_OFFSETS)
    if piece.kind is PieceKind.KING:
        return _step_moves(board, sq, piece, KING_OFFSETS)
    return _slider_moves(board, sq, piece, SLIDER_DIRECTIONS[piece.kind])


def _pawn_moves(board: Board, sq: Square, piece: Piece, en_passant: Optional[Square]) -> List[Square]:
    row, col = sq
    d = PAWN_DIRECTION[piece.color]
    moves: List[Square] = []

    one = (row + d, col)
    if on_board(*one) and board.piece_at(one) is None:
        moves.append(one)
        two = (row + 2 * d, col)
        if row == PAWN_START_ROW[piece.color] and board.piece_at(two) is None:
            moves.append(two)

    for c in (col - 1, col + 1):
        target = (row + d, c)
        if not on_board(*target):
            continue
        occupant = board.piece_at(target)
        if occupant is not None:
            if occupant.color is not piece.color:
                moves.append(target)
        elif target == en_passant:
            # The double-stepped pawn must sit beside us, on our row.
            victim = board.piece_at((row, c))
            if victim is not None and victim.kind is PieceKind.PAWN and victim.color is not piece.color:
                moves.append(target)
    return moves


def _step_moves(board: Board, sq: Square, piece: Piece, offsets: List[tuple]) -> List[Square]:
    row, col = sq
    moves: List[Square] = []
    for dr, dc in offsets:
        r, c = row + dr, col + dc
        if not on_board(r, c):
            continue
        occupant = board.squares[r][c]
        if occupant is None or occupant.color is not piece.color:
            moves.append((r, c))
    return moves


def _slider_moves(board: Board, sq: Square, piece: Piece, directions: List[tuple]) -> List[Square]:
    row, col = sq
    moves: List[Square] = []
    for dr, dc in directions:
        r, c = row + dr, col + dc
        while on_board(r, c):
            occupant = board.squares[r][c]
            if occupant is None:
                moves.append((r, c))
            else:
                if occupant.color is not piece.color:
                    moves.append((r, c))
                break
            r += dr
            c += dc
    return moves


def _castling_moves(
    board: Board,
    sq: Square,
    king: Piece,
    rights: CastlingRights,
    is_attacked: Optional[Callable[[Square], bool]],
) -> List[Square]:
    home = HOME_ROW[king.color]
    if sq != (home, 4):
        return []
    moves: List[Square] = []
    # (right held, rook column, columns that must be empty, column the king passes over)
    for allowed, rook_col, between, transit in (
        (rights.kingside, 7, (5, 6), 5),
        (rights.queenside, 0, (1, 2, 3), 3),
    ):
        if not allowed:
            continue
        if any(board.squares[home][c] is not None for c in between):
            continue
        rook = board.squares[home][rook_col]
        if rook is None or rook.kind is not PieceKind.ROOK or rook.color is not king.color:
            continue
        if is_attacked is not None and is_attacked((home, transit)):
            continue
        moves.append((home, 6 if rook_col == 7 else 2))
    return moves
