from __future__ import annotations

import pytest

from src.engine.game import GameState
from src.engine.perft import divide, perft


@pytest.mark.parametrize("depth,nodes", [(0, 1), (1, 20), (2, 400), (3, 8902)])
def test_startpos_perft(depth: int, nodes: int) -> None:
    state = GameState.new()
    assert perft(state, depth) == nodes
    assert state == GameState.new()


def test_divide_sums_to_perft() -> None:
    state = GameState.new()
    counts = divide(state, 2)
    assert len(counts) == 20
    assert counts["e2-e4"] == 20
    assert sum(counts.values()) == 400


def test_negative_depth_rejected() -> None:
    with pytest.raises(ValueError):
        perft(GameState.new(), -1)
