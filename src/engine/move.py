from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Optional, Tuple

from .piece import Piece


# (row, col); row 0 is black's back rank, row 7 is white's.
Square = Tuple[int, int]


class MoveKind(str, Enum):
    NORMAL = "normal"
    CASTLE = "castle"
    EN_PASSANT = "en-passant"
    PROMOTION = "promotion"


@dataclass(frozen=True)
class Move:
    """A committed (or candidate) move.

    Attributes:
        from_sq (Square): Origin square.
        to_sq (Square): Destination square.
        piece (Piece): The moving piece as it stood before the move.
        captured (Optional[Piece]): Piece removed by the move, if any.
        captured_sq (Optional[Square]): Square the captured piece stood on.
            Equals ``to_sq`` except for en passant.
        kind (MoveKind): Special-move flag used when undoing.
    """

    from_sq: Square
    to_sq: Square
    piece: Piece
    captured: Optional[Piece] = None
    captured_sq: Optional[Square] = None
    kind: MoveKind = MoveKind.NORMAL

    @property
    def is_capture(self) -> bool:
        return self.captured is not None

    def to_coord(self) -> str:
        """Render the move as a coordinate pair like ``"e2-e4"``."""
        return square_to_str(self.from_sq) + "-" + square_to_str(self.to_sq)


def on_board(row: int, col: int) -> bool:
    return 0 <= row <= 7 and 0 <= col <= 7


def str_to_square(s: str) -> Square:
    """Convert a display name such as ``"e2"`` into a ``(row, col)`` square.

    Args:
        s (str): File letter ``a``..``h`` followed by rank ``1``..``8``.

    Returns:
        Square: ``(8 - rank, file index)``.

    Raises:
        ValueError: If ``s`` is not a valid square name.
    """
    if len(s) != 2 or s[0] < "a" or s[0] > "h" or s[1] < "1" or s[1] > "8":
        raise ValueError(f"invalid square: {s!r}")
    col = ord(s[0]) - ord("a")
    row = 8 - int(s[1])
    return (row, col)


def square_to_str(sq: Square) -> str:
    """Convert a ``(row, col)`` square into its display name.

    Raises:
        ValueError: If ``sq`` is off the board.
    """
    row, col = sq
    if not on_board(row, col):
        raise ValueError(f"invalid square: {sq!r}")
    return chr(ord("a") + col) + str(8 - row)
