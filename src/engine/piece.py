from __future__ import annotations

from dataclasses import dataclass
from enum import Enum


class Color(str, Enum):
    WHITE = "white"
    BLACK = "black"

    @property
    def opponent(self) -> "Color":
        return Color.BLACK if self is Color.WHITE else Color.WHITE


class PieceKind(str, Enum):
    PAWN = "pawn"
    KNIGHT = "knight"
    BISHOP = "bishop"
    ROOK = "rook"
    QUEEN = "queen"
    KING = "king"


KIND_TO_CHAR = {
    PieceKind.PAWN: "p",
    PieceKind.KNIGHT: "n",
    PieceKind.BISHOP: "b",
    PieceKind.ROOK: "r",
    PieceKind.QUEEN: "q",
    PieceKind.KING: "k",
}
CHAR_TO_KIND = {v: k for k, v in KIND_TO_CHAR.items()}


@dataclass(frozen=True)
class Piece:
    """A piece is its kind and its owner; it has no identity beyond its square."""

    kind: PieceKind
    color: Color

    @property
    def letter(self) -> str:
        """Raw piece letter: uppercase for white, lowercase for black."""
        ch = KIND_TO_CHAR[self.kind]
        return ch.upper() if self.color is Color.WHITE else ch

    @classmethod
    def from_letter(cls, ch: str) -> "Piece":
        """Parse a raw piece letter such as ``"K"`` or ``"p"``.

        Raises:
            ValueError: If ``ch`` is not one of ``PNBRQK`` in either case.
        """
        if len(ch) != 1 or ch.lower() not in CHAR_TO_KIND:
            raise ValueError(f"invalid piece letter: {ch!r}")
        color = Color.WHITE if ch.isupper() else Color.BLACK
        return cls(CHAR_TO_KIND[ch.lower()], color)
