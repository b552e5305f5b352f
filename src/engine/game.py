from __future__ import annotations

import logging
from dataclasses import dataclass, field
from enum import Enum
from typing import Dict, List, Optional, Tuple

from .apply import build_move, make_on_board, unmake_on_board
from .board import HOME_ROW, Board
from .legality import all_legal_moves, is_in_check, legal_moves_for
from .move import Move, Square
from .piece import Color, Piece, PieceKind
from .rules import DEFAULT_RULES, CastlingRights, RuleSet


logger = logging.getLogger(__name__)


class ClickResult(str, Enum):
    SELECTED = "selected"
    DESELECTED = "deselected"
    MOVED = "moved"
    IGNORED = "ignored"


def _full_rights() -> Dict[Color, CastlingRights]:
    return {Color.WHITE: CastlingRights(), Color.BLACK: CastlingRights()}


def _empty_captures() -> Dict[Color, List[Piece]]:
    return {Color.WHITE: [], Color.BLACK: []}


def _rights_from_board(board: Board, color: Color) -> CastlingRights:
    home = HOME_ROW[color]
    if board.piece_at((home, 4)) != Piece(PieceKind.KING, color):
        return CastlingRights(kingside=False, queenside=False)
    rook = Piece(PieceKind.ROOK, color)
    return CastlingRights(
        kingside=board.piece_at((home, 7)) == rook,
        queenside=board.piece_at((home, 0)) == rook,
    )


@dataclass
class GameState:
    """Complete state of one game.

    Responsibility: own the board and its ancillary state, and funnel every
    mutation through ``commit_move`` / ``undo`` / ``reset``.

    ``captured[color]`` lists the pieces captured *by* ``color``.
    ``selection`` and ``selection_moves`` are transient UI state and are
    cleared by every commit, undo and reset.
    """

    board: Board
    turn: Color = Color.WHITE
    castling: Dict[Color, CastlingRights] = field(default_factory=_full_rights)
    en_passant: Optional[Square] = None
    move_history: List[Move] = field(default_factory=list)
    captured: Dict[Color, List[Piece]] = field(default_factory=_empty_captures)
    rules: RuleSet = DEFAULT_RULES
    selection: Optional[Square] = None
    selection_moves: List[Square] = field(default_factory=list)
    # castling rights and en-passant target as they were before each commit
    _undo: List[Tuple[Dict[Color, CastlingRights], Optional[Square]]] = field(
        default_factory=list, repr=False
    )

    @classmethod
    def new(cls, rules: Optional[RuleSet] = None) -> "GameState":
        return cls(board=Board.startpos(), rules=rules or DEFAULT_RULES)

    @classmethod
    def from_board(
        cls,
        board: Board,
        turn: Color = Color.WHITE,
        *,
        castling: Optional[Dict[Color, CastlingRights]] = None,
        en_passant: Optional[Square] = None,
        rules: Optional[RuleSet] = None,
    ) -> "GameState":
        """Start a game from an arbitrary position.

        Without explicit ``castling``, a right is granted only where the king
        and the matching rook stand on their home squares.

        Raises:
            BoardInvariantError: If either king is missing.
        """
        for color in Color:
            board.king_square(color)
        if castling is None:
            castling = {color: _rights_from_board(board, color) for color in Color}
        return cls(
            board=board,
            turn=turn,
            castling=dict(castling),
            en_passant=en_passant,
            rules=rules or DEFAULT_RULES,
        )

    def reset(self) -> None:
        """Return to the starting position, keeping the configured rules."""
        fresh = GameState.new(self.rules)
        self.__dict__.update(fresh.__dict__)
        logger.debug("game reset")

    # --- Queries ---
    def legal_moves_at(self, sq: Square) -> List[Square]:
        """Legal destinations from ``sq``; empty unless it holds a piece of the side to move."""
        piece = self.board.piece_at(sq)
        if piece is None or piece.color is not self.turn:
            return []
        return legal_moves_for(self, sq)

    def legal_moves(self) -> List[Move]:
        return all_legal_moves(self, self.turn)

    def in_check(self, color: Optional[Color] = None) -> bool:
        return is_in_check(self.board, self.turn if color is None else color)

    @property
    def last_move(self) -> Optional[Move]:
        return self.move_history[-1] if self.move_history else None

    # --- Mutation ---
    def commit_move(self, from_sq: Square, to_sq: Square) -> Optional[Move]:
        """Play ``from_sq`` -> ``to_sq`` for the side to move.

        Returns:
            Optional[Move]: The committed move, or ``None`` if the move is not
            legal. A rejected move leaves the state untouched.
        """
        if to_sq not in self.legal_moves_at(from_sq):
            logger.debug("rejected move %s -> %s", from_sq, to_sq)
            return None

        move = build_move(self.board, from_sq, to_sq)
        self._undo.append((dict(self.castling), self.en_passant))

        if move.captured is not None:
            self.captured[move.piece.color].append(move.captured)
        make_on_board(self.board, move)
        self._revoke_castling_rights(move)

        self.en_passant = None
        if move.piece.kind is PieceKind.PAWN and abs(to_sq[0] - from_sq[0]) == 2:
            self.en_passant = ((from_sq[0] + to_sq[0]) // 2, from_sq[1])

        self.move_history.append(move)
        self.turn = self.turn.opponent
        self.clear_selection()
        logger.debug("committed %s (%s)", move.to_coord(), move.kind.value)
        return move

    def undo(self) -> bool:
        """Revert the most recent commit exactly. Returns False if there is none."""
        if not self.move_history:
            return False
        move = self.move_history.pop()
        castling, en_passant = self._undo.pop()
        unmake_on_board(self.board, move)
        if move.captured is not None:
            self.captured[move.piece.color].pop()
        self.castling = castling
        self.en_passant = en_passant
        self.turn = move.piece.color
        self.clear_selection()
        logger.debug("undid %s", move.to_coord())
        return True

    def _revoke_castling_rights(self, move: Move) -> None:
        color = move.piece.color
        if move.piece.kind is PieceKind.KING:
            self.castling[color] = self.castling[color].revoke(kingside=True, queenside=True)
        elif move.piece.kind is PieceKind.ROOK and move.from_sq[0] == HOME_ROW[color]:
            if move.from_sq[1] == 7:
                self.castling[color] = self.castling[color].revoke(kingside=True)
            elif move.from_sq[1] == 0:
                self.castling[color] = self.castling[color].revoke(queenside=True)
        # A rook taken on its home corner takes the victim's right with it.
        victim = move.captured
        if victim is not None and victim.kind is PieceKind.ROOK:
            if move.to_sq == (HOME_ROW[victim.color], 7):
                self.castling[victim.color] = self.castling[victim.color].revoke(kingside=True)
            elif move.to_sq == (HOME_ROW[victim.color], 0):
                self.castling[victim.color] = self.castling[victim.color].revoke(queenside=True)

    # --- Selection state machine ---
    def select(self, sq: Square) -> bool:
        """Select ``sq`` if it holds a piece of the side to move with a legal move."""
        moves = self.legal_moves_at(sq)
        if not moves:
            return False
        self.selection = sq
        self.selection_moves = moves
        return True

    def clear_selection(self) -> None:
        self.selection = None
        self.selection_moves = []

    def click(self, sq: Square) -> ClickResult:
        """Feed one square click into the selection state machine.

        - Nothing selected: select ``sq`` if possible.
        - ``sq`` is a legal destination of the selection: commit.
        - Otherwise: re-select if ``sq`` is another movable piece of the side
          to move, else deselect.
        """
        if self.selection is None:
            return ClickResult.SELECTED if self.select(sq) else ClickResult.IGNORED
        if sq == self.selection:
            self.clear_selection()
            return ClickResult.DESELECTED
        if sq in self.selection_moves:
            self.commit_move(self.selection, sq)
            return ClickResult.MOVED
        if self.select(sq):
            return ClickResult.SELECTED
        self.clear_selection()
        return ClickResult.DESELECTED
