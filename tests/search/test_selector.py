from __future__ import annotations

import random

import pytest

from src.engine.board import Board
from src.engine.game import GameState
from src.engine.move import Move, str_to_square
from src.engine.piece import Color, Piece, PieceKind
from src.search.selector import (
    CaptureBiasedPolicy,
    Difficulty,
    RandomPolicy,
    ScoredPolicy,
    select_move,
)


class _FixedCoin:
    """Random source whose coin flips always return ``value``; choices stay seeded."""

    def __init__(self, value: float, seed: int = 0) -> None:
        self.value = value
        self._rng = random.Random(seed)

    def random(self) -> float:
        return self.value

    def choice(self, seq):
        return self._rng.choice(seq)

    def uniform(self, a: float, b: float) -> float:
        return self._rng.uniform(a, b)


HANGING_QUEEN = [
    ".......k",
    "........",
    "........",
    "q.......",
    "........",
    "........",
    "........",
    "R......K",
]


@pytest.mark.parametrize("difficulty", list(Difficulty))
def test_every_policy_returns_a_legal_move(difficulty: Difficulty) -> None:
    state = GameState.new()
    rng = random.Random(1234)
    for _ in range(6):
        move = select_move(state, state.turn, difficulty, rng)
        assert move is not None
        assert move.to_sq in state.legal_moves_at(move.from_sq)
        state.commit_move(move.from_sq, move.to_sq)


def test_no_move_when_mated_or_stalemated() -> None:
    rows = [
        ".......k",
        ".....Q..",
        "......K.",
        "........",
        "........",
        "........",
        "........",
        "........",
    ]
    state = GameState.from_board(Board.from_rows(rows), Color.BLACK)
    for difficulty in Difficulty:
        assert select_move(state, Color.BLACK, difficulty, random.Random(0)) is None


def test_hard_takes_the_hanging_queen() -> None:
    state = GameState.from_board(Board.from_rows(HANGING_QUEEN))
    for seed in range(10):
        move = select_move(state, Color.WHITE, Difficulty.HARD, random.Random(seed))
        assert move is not None
        assert move.to_sq == str_to_square("a5")
        assert move.captured == Piece(PieceKind.QUEEN, Color.BLACK)


def test_medium_takes_a_capture_when_the_coin_says_so() -> None:
    state = GameState.from_board(Board.from_rows(HANGING_QUEEN))
    move = select_move(state, Color.WHITE, Difficulty.MEDIUM, _FixedCoin(0.0))
    assert move is not None and move.is_capture


def test_capture_biased_falls_back_to_any_move() -> None:
    king = Piece(PieceKind.KING, Color.WHITE)
    quiet = [Move((7, 7), (6, 7), king), Move((7, 7), (7, 6), king)]
    capture = Move((7, 7), (6, 6), king, Piece(PieceKind.PAWN, Color.BLACK), (6, 6))
    moves = quiet + [capture]
    policy = CaptureBiasedPolicy()
    assert policy.choose(moves, _FixedCoin(0.0)) is capture
    assert policy.choose(quiet, _FixedCoin(0.0)) in quiet
    # With the coin failing, the pick is uniform over every move.
    seen = {policy.choose(moves, _FixedCoin(0.99, seed)) for seed in range(50)}
    assert seen == set(moves)


def test_scored_policy_only_looks_at_first_candidates() -> None:
    rook = Piece(PieceKind.ROOK, Color.WHITE)
    quiet = [Move((7, 0), (7, 0 if i % 2 else 7), rook) for i in range(20)]
    late_capture = Move((7, 0), (0, 0), rook, Piece(PieceKind.QUEEN, Color.BLACK), (0, 0))
    policy = ScoredPolicy(jitter=0.0)
    assert policy.choose(quiet + [late_capture], random.Random(0)) is quiet[0]
    assert policy.choose([late_capture] + quiet, random.Random(0)) is late_capture


def test_random_policy_is_uniform_over_moves() -> None:
    king = Piece(PieceKind.KING, Color.WHITE)
    moves = [Move((7, 7), (6, 7), king), Move((7, 7), (7, 6), king), Move((7, 7), (6, 6), king)]
    rng = random.Random(3)
    seen = {RandomPolicy().choose(moves, rng) for _ in range(100)}
    assert seen == set(moves)
