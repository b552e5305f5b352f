from __future__ import annotations

from enum import Enum
from typing import TYPE_CHECKING, Optional

from .legality import is_in_check, legal_moves_for
from .piece import Color

if TYPE_CHECKING:
    from .game import GameState


class GameStatus(str, Enum):
    NORMAL = "normal"
    IN_CHECK = "in-check"
    CHECKMATE = "checkmate"
    STALEMATE = "stalemate"

    @property
    def is_over(self) -> bool:
        return self in (GameStatus.CHECKMATE, GameStatus.STALEMATE)


def has_any_legal_move(state: "GameState", color: Color) -> bool:
    """Return True as soon as one piece of ``color`` has a legal move."""
    for sq, _piece in list(state.board.pieces(color)):
        if legal_moves_for(state, sq):
            return True
    return False


def status_for(state: "GameState", color: Color) -> GameStatus:
    check = is_in_check(state.board, color)
    if not has_any_legal_move(state, color):
        return GameStatus.CHECKMATE if check else GameStatus.STALEMATE
    return GameStatus.IN_CHECK if check else GameStatus.NORMAL


def winner(state: "GameState") -> Optional[Color]:
    """The side that delivered mate, or None while the game is undecided or drawn."""
    if status_for(state, state.turn) is GameStatus.CHECKMATE:
        return state.turn.opponent
    return None
