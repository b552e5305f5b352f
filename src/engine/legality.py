"""Check detection and the legal-move filter."""

from __future__ import annotations

from typing import TYPE_CHECKING, Callable, List, Optional

from .apply import build_move, simulate
from .board import PAWN_DIRECTION, Board
from .move import Move, Square, on_board
from .movegen import DIAGONAL, KING_OFFSETS, KNIGHT_OFFSETS, ORTHOGONAL, moves_for
from .piece import Color, PieceKind

if TYPE_CHECKING:
    from .game import GameState


_ORTHOGONAL_SLIDERS = (PieceKind.ROOK, PieceKind.QUEEN)
_DIAGONAL_SLIDERS = (PieceKind.BISHOP, PieceKind.QUEEN)


def is_square_attacked(board: Board, sq: Square, by: Color) -> bool:
    """Return True if any piece of ``by`` attacks ``sq`` on ``board``.

    Attack geometry only: whether the attacking move would itself be legal is
    not considered. Scans outward from ``sq`` instead of enumerating every
    attacker's moves; the result is the same.
    """
    row, col = sq

    # Pawns of `by` attack diagonally forward, so look one row behind them.
    pr = row - PAWN_DIRECTION[by]
    for pc in (col - 1, col + 1):
        if on_board(pr, pc):
            p = board.squares[pr][pc]
            if p is not None and p.color is by and p.kind is PieceKind.PAWN:
                return True

    for offsets, kind in ((KNIGHT_OFFSETS, PieceKind.KNIGHT), (KING_OFFSETS, PieceKind.KING)):
        for dr, dc in offsets:
            r, c = row + dr, col + dc
            if on_board(r, c):
                p = board.squares[r][c]
                if p is not None and p.color is by and p.kind is kind:
                    return True

    for directions, kinds in ((ORTHOGONAL, _ORTHOGONAL_SLIDERS), (DIAGONAL, _DIAGONAL_SLIDERS)):
        for dr, dc in directions:
            r, c = row + dr, col + dc
            while on_board(r, c):
                p = board.squares[r][c]
                if p is not None:
                    if p.color is by and p.kind in kinds:
                        return True
                    break
                r += dr
                c += dc
    return False


def is_in_check(board: Board, color: Color) -> bool:
    """Return True if the king of ``color`` is attacked by the opponent."""
    return is_square_attacked(board, board.king_square(color), color.opponent)


def candidate_moves(state: "GameState", sq: Square) -> List[Square]:
    """Pseudo-legal destinations for ``sq`` given the game's rights and rules."""
    board = state.board
    piece = board.piece_at(sq)
    if piece is None:
        return []
    if piece.kind is not PieceKind.KING:
        return moves_for(board, sq, en_passant=state.en_passant)

    enemy = piece.color.opponent
    transit_check: Optional[Callable[[Square], bool]] = None
    if state.rules.castling_transit_check:
        transit_check = lambda s: is_square_attacked(board, s, enemy)  # noqa: E731
    return moves_for(
        board,
        sq,
        castling=state.castling[piece.color],
        in_check=is_in_check(board, piece.color),
        is_attacked=transit_check,
    )


def legal_moves_for(state: "GameState", sq: Square) -> List[Square]:
    """Return the legal destinations of the piece on ``sq``.

    Each candidate is played on a scratch copy of the board and dropped if
    the mover's king is attacked afterwards. The live board is never touched.
    Pieces of either color are considered; turn order is enforced by the game.
    """
    piece = state.board.piece_at(sq)
    if piece is None:
        return []
    legal: List[Square] = []
    for to_sq in candidate_moves(state, sq):
        after = simulate(state.board, build_move(state.board, sq, to_sq))
        if not is_in_check(after, piece.color):
            legal.append(to_sq)
    return legal


def all_legal_moves(state: "GameState", color: Color) -> List[Move]:
    """Every legal move of ``color``, pieces in row-major board order."""
    moves: List[Move] = []
    for sq, _piece in list(state.board.pieces(color)):
        for to_sq in legal_moves_for(state, sq):
            moves.append(build_move(state.board, sq, to_sq))
    return moves
