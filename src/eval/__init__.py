"""Evaluation terms used by the move selector.

Pure, deterministic, and side-effect free. Values are in pawns, not
centipawns: the selector only compares single-ply scores.
"""

from __future__ import annotations

from typing import Dict, Final, Optional

from src.engine.move import Move, Square
from src.engine.piece import Piece, PieceKind


# Material values in pawns
P_VAL: Final = 1
N_VAL: Final = 3
B_VAL: Final = 3
R_VAL: Final = 5
Q_VAL: Final = 9
K_VAL: Final = 0

PIECE_VALUES: Dict[PieceKind, int] = {
    PieceKind.PAWN: P_VAL,
    PieceKind.KNIGHT: N_VAL,
    PieceKind.BISHOP: B_VAL,
    PieceKind.ROOK: R_VAL,
    PieceKind.QUEEN: Q_VAL,
    PieceKind.KING: K_VAL,
}

# Heuristic weights
CAPTURE_WEIGHT: Final = 10
CENTER_WEIGHT: Final = 2.0
CENTER: Final = 3.5


def piece_value(piece: Optional[Piece]) -> int:
    """Material value of ``piece``; an empty square is worth 0."""
    if piece is None:
        return 0
    return PIECE_VALUES[piece.kind]


def center_distance(sq: Square) -> float:
    """Chebyshev distance from the middle of the board (0.5 .. 3.5)."""
    row, col = sq
    return max(abs(row - CENTER), abs(col - CENTER))


def centralization_bonus(sq: Square) -> float:
    """Bonus for squares near the center: 6.0 on the four central squares, 0.0 on the rim."""
    return (CENTER - center_distance(sq)) * CENTER_WEIGHT


def score_move(move: Move) -> float:
    """Single-ply score of ``move`` without any random component.

    ``captured value * 10 + centralization bonus of the destination``.
    """
    return piece_value(move.captured) * CAPTURE_WEIGHT + centralization_bonus(move.to_sq)
