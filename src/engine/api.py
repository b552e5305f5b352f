"""Functional entry points for presentation code.

Each function takes the single live :class:`GameState` of a session. Illegal
input is an expected event and is reported through the return value.
"""

from __future__ import annotations

import random
from typing import List, Optional

from .game import GameState
from .move import Move, Square
from .piece import Color
from .rules import RuleSet
from ..search.selector import Difficulty, select_move
from .status import GameStatus, status_for as _status_for


def new_game(rules: Optional[RuleSet] = None) -> GameState:
    """Standard start position, white to move, full castling rights."""
    return GameState.new(rules)


def legal_moves_at(state: GameState, sq: Square) -> List[Square]:
    return state.legal_moves_at(sq)


def commit_move(state: GameState, from_sq: Square, to_sq: Square) -> bool:
    """Commit a move; False (and no change) if it is not legal."""
    return state.commit_move(from_sq, to_sq) is not None


def status_for(state: GameState, side: Color) -> GameStatus:
    return _status_for(state, side)


def undo(state: GameState) -> bool:
    """Revert the last commit; False (and no change) if there is nothing to undo."""
    return state.undo()


def pick_ai_move(
    state: GameState, side: Color, difficulty: str = "medium", rng: Optional[random.Random] = None
) -> Optional[Move]:
    """Pick (but do not commit) a move for ``side``; None if it has no legal move."""
    return select_move(state, side, Difficulty(difficulty), rng)
