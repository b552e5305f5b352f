from __future__ import annotations

from typing import Dict

from .game import GameState


def perft(state: GameState, depth: int) -> int:
    """Compute perft node count for ``state`` at ``depth``.

    Definition:
    - depth == 0 returns 1 (the current node).
    - depth > 0 returns the sum over all legal child positions' perft(depth-1).

    Children are visited with commit/undo on ``state`` itself, so the state
    is restored on return. Promotions always yield a queen, so counts diverge
    from standard tables once promotions become reachable.
    """
    if depth < 0:
        raise ValueError("depth must be >= 0")
    if depth == 0:
        return 1

    nodes = 0
    for m in state.legal_moves():
        state.commit_move(m.from_sq, m.to_sq)
        nodes += perft(state, depth - 1)
        state.undo()
    return nodes


def divide(state: GameState, depth: int) -> Dict[str, int]:
    """Per-root-move perft counts keyed by coordinate pair (``"e2-e4"``)."""
    if depth < 1:
        raise ValueError("depth must be >= 1")
    out: Dict[str, int] = {}
    for m in state.legal_moves():
        state.commit_move(m.from_sq, m.to_sq)
        out[m.to_coord()] = perft(state, depth - 1)
        state.undo()
    return out
