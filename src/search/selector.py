from __future__ import annotations

import logging
import random
from dataclasses import dataclass
from enum import Enum
from typing import Dict, List, Optional, Protocol

from src.engine.game import GameState
from src.engine.legality import all_legal_moves
from src.engine.move import Move
from src.engine.piece import Color
from src.eval import score_move


logger = logging.getLogger(__name__)


class Difficulty(str, Enum):
    EASY = "easy"
    MEDIUM = "medium"
    HARD = "hard"


class MovePolicy(Protocol):
    def choose(self, moves: List[Move], rng: random.Random) -> Move: ...


class RandomPolicy:
    """Uniform choice over all legal moves."""

    def choose(self, moves: List[Move], rng: random.Random) -> Move:
        return rng.choice(moves)


@dataclass
class CaptureBiasedPolicy:
    """Prefer captures ``capture_chance`` of the time, otherwise play randomly."""

    capture_chance: float = 0.5

    def choose(self, moves: List[Move], rng: random.Random) -> Move:
        captures = [m for m in moves if m.is_capture]
        if captures and rng.random() < self.capture_chance:
            return rng.choice(captures)
        return rng.choice(moves)


@dataclass
class ScoredPolicy:
    """Single-ply scoring of the first ``max_candidates`` moves.

    Score is material won, centralization and a random jitter in
    ``[0, jitter]``. No reply is considered. The first highest score wins.
    """

    max_candidates: int = 20
    jitter: float = 5.0

    def choose(self, moves: List[Move], rng: random.Random) -> Move:
        # max() keeps the first of equal scores
        return max(
            moves[: self.max_candidates],
            key=lambda m: score_move(m) + rng.uniform(0, self.jitter),
        )


POLICIES: Dict[Difficulty, MovePolicy] = {
    Difficulty.EASY: RandomPolicy(),
    Difficulty.MEDIUM: CaptureBiasedPolicy(),
    Difficulty.HARD: ScoredPolicy(),
}


def select_move(
    state: GameState,
    side: Color,
    difficulty: Difficulty = Difficulty.MEDIUM,
    rng: Optional[random.Random] = None,
) -> Optional[Move]:
    """Pick a legal move for ``side`` with the policy for ``difficulty``.

    Args:
        state (GameState): Position to choose in; not modified.
        side (Color): Side to choose for.
        difficulty (Difficulty): Named policy.
        rng (Optional[random.Random]): Random source; a fresh unseeded
            generator is used when omitted.

    Returns:
        Optional[Move]: Chosen move, or ``None`` if ``side`` has no legal move.
    """
    moves = all_legal_moves(state, side)
    if not moves:
        return None
    move = POLICIES[difficulty].choose(moves, rng if rng is not None else random.Random())
    logger.debug("ai %s (%s) picked %s of %d", side.value, difficulty.value, move.to_coord(), len(moves))
    return move
