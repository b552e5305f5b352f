from __future__ import annotations

from typing import Dict, Iterator, List, Optional, Sequence, Tuple

from .move import Square, on_board
from .piece import Color, Piece, PieceKind


BACK_RANK_ORDER = [
    PieceKind.ROOK,
    PieceKind.KNIGHT,
    PieceKind.BISHOP,
    PieceKind.QUEEN,
    PieceKind.KING,
    PieceKind.BISHOP,
    PieceKind.KNIGHT,
    PieceKind.ROOK,
]

# Row of each side's back rank and of its pawns' starting rank.
HOME_ROW = {Color.WHITE: 7, Color.BLACK: 0}
PAWN_START_ROW = {Color.WHITE: 6, Color.BLACK: 1}
# Row a pawn promotes on.
PROMOTION_ROW = {Color.WHITE: 0, Color.BLACK: 7}
# Row direction of a pawn step.
PAWN_DIRECTION = {Color.WHITE: -1, Color.BLACK: 1}


class BoardInvariantError(RuntimeError):
    """Raised when the board is in a state no legal sequence of moves reaches."""


class Board:
    """8x8 grid of optional pieces with a cached king square per color.

    Notes:
    - ``squares[row][col]``; row 0 is black's back rank.
    - The king cache must equal the real king squares; ``set_piece`` and
      ``move_piece`` keep it in sync.
    """

    def __init__(self, squares: Optional[List[List[Optional[Piece]]]] = None) -> None:
        self.squares: List[List[Optional[Piece]]] = (
            squares if squares is not None else [[None] * 8 for _ in range(8)]
        )
        self.kings: Dict[Color, Optional[Square]] = {Color.WHITE: None, Color.BLACK: None}
        for sq, piece in self.pieces():
            if piece.kind is PieceKind.KING:
                self.kings[piece.color] = sq

    @classmethod
    def empty(cls) -> "Board":
        return cls()

    @classmethod
    def startpos(cls) -> "Board":
        """Create a board holding the standard starting position."""
        b = cls()
        for col, kind in enumerate(BACK_RANK_ORDER):
            b.set_piece((0, col), Piece(kind, Color.BLACK))
            b.set_piece((1, col), Piece(PieceKind.PAWN, Color.BLACK))
            b.set_piece((6, col), Piece(PieceKind.PAWN, Color.WHITE))
            b.set_piece((7, col), Piece(kind, Color.WHITE))
        return b

    @classmethod
    def from_rows(cls, rows: Sequence[str]) -> "Board":
        """Build a board from eight diagram rows, row 0 (black's side) first.

        Each row holds eight characters: a raw piece letter or ``.`` for an
        empty square. Whitespace inside a row is ignored.

        Raises:
            ValueError: If the diagram is not 8x8 or holds unknown letters.
        """
        if len(rows) != 8:
            raise ValueError("board diagram must have 8 rows")
        b = cls()
        for row, line in enumerate(rows):
            cells = "".join(line.split())
            if len(cells) != 8:
                raise ValueError(f"board diagram row {row} must have 8 squares")
            for col, ch in enumerate(cells):
                if ch != ".":
                    b.set_piece((row, col), Piece.from_letter(ch))
        return b

    def copy(self) -> "Board":
        """Return an independent scratch copy (pieces are immutable and shared)."""
        b = Board.__new__(Board)
        b.squares = [list(r) for r in self.squares]
        b.kings = dict(self.kings)
        return b

    # --- Access ---
    def piece_at(self, sq: Square) -> Optional[Piece]:
        row, col = sq
        return self.squares[row][col]

    def set_piece(self, sq: Square, piece: Optional[Piece]) -> None:
        row, col = sq
        if not on_board(row, col):
            raise ValueError(f"square off board: {sq!r}")
        prev = self.squares[row][col]
        if prev is not None and prev.kind is PieceKind.KING and self.kings.get(prev.color) == sq:
            self.kings[prev.color] = None
        self.squares[row][col] = piece
        if piece is not None and piece.kind is PieceKind.KING:
            self.kings[piece.color] = sq

    def move_piece(self, from_sq: Square, to_sq: Square) -> None:
        """Relocate whatever stands on ``from_sq`` to ``to_sq``, clearing the origin."""
        piece = self.piece_at(from_sq)
        self.set_piece(from_sq, None)
        self.set_piece(to_sq, piece)

    def king_square(self, color: Color) -> Square:
        """Return the cached king square of ``color``.

        Raises:
            BoardInvariantError: If ``color`` has no king on the board.
        """
        sq = self.kings.get(color)
        if sq is None:
            raise BoardInvariantError(f"no {color.value} king on the board")
        return sq

    def pieces(self, color: Optional[Color] = None) -> Iterator[Tuple[Square, Piece]]:
        """Yield ``(square, piece)`` in row-major order, optionally for one color."""
        for row in range(8):
            for col in range(8):
                p = self.squares[row][col]
                if p is not None and (color is None or p.color is color):
                    yield (row, col), p

    def count(self) -> int:
        return sum(1 for _ in self.pieces())

    # --- Rendering ---
    def rows(self) -> List[str]:
        """Diagram rows as accepted by :meth:`from_rows`."""
        return ["".join(p.letter if p else "." for p in r) for r in self.squares]

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Board):
            return NotImplemented
        return self.squares == other.squares and self.kings == other.kings

    def __repr__(self) -> str:
        return "Board(" + "/".join(self.rows()) + ")"

    def __str__(self) -> str:
        lines = [f"{8 - i} {' '.join(r)}" for i, r in enumerate(self.rows())]
        lines.append("  a b c d e f g h")
        return "\n".join(lines)
