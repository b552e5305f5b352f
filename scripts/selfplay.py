#!/usr/bin/env python3
# ruff: noqa: E402
from __future__ import annotations

import argparse
import json
import logging
import os
import random
import sys
import time
from collections import Counter
from typing import Dict

# Ensure repo root (which contains `src/`) is importable when running directly
REPO_ROOT = os.path.dirname(os.path.dirname(__file__))
if REPO_ROOT not in sys.path:
    sys.path.insert(0, REPO_ROOT)

from src.engine.game import GameState
from src.engine.piece import Color
from src.engine.status import GameStatus, status_for
from src.search.selector import Difficulty, select_move


logger = logging.getLogger("selfplay")


def play_game(
    white: Difficulty, black: Difficulty, rng: random.Random, max_plies: int
) -> Dict[str, object]:
    """Play one AI-vs-AI game; the result is ``"white"``, ``"black"``, ``"draw"`` or ``"unfinished"``."""
    state = GameState.new()
    policy = {Color.WHITE: white, Color.BLACK: black}
    for _ in range(max_plies):
        st = status_for(state, state.turn)
        if st is GameStatus.CHECKMATE:
            return {"result": state.turn.opponent.value, "ending": st.value, "plies": len(state.move_history)}
        if st is GameStatus.STALEMATE:
            return {"result": "draw", "ending": st.value, "plies": len(state.move_history)}
        move = select_move(state, state.turn, policy[state.turn], rng)
        assert move is not None
        state.commit_move(move.from_sq, move.to_sq)
    return {"result": "unfinished", "ending": None, "plies": len(state.move_history)}


def main() -> None:
    parser = argparse.ArgumentParser(description="Play AI-vs-AI games and tally results")
    parser.add_argument("--games", type=int, default=10)
    parser.add_argument("--white", type=str, default="hard", choices=[d.value for d in Difficulty])
    parser.add_argument("--black", type=str, default="easy", choices=[d.value for d in Difficulty])
    parser.add_argument("--max-plies", type=int, default=200)
    parser.add_argument("--seed", type=int, default=None)
    parser.add_argument("--json", action="store_true", help="Print a JSON summary")
    args = parser.parse_args()

    logging.basicConfig(level=logging.INFO)
    rng = random.Random(args.seed)
    tally: Counter = Counter()
    start = time.perf_counter()
    for i in range(args.games):
        res = play_game(Difficulty(args.white), Difficulty(args.black), rng, args.max_plies)
        tally[res["result"]] += 1
        logger.info("game %d: %s after %d plies", i + 1, res["result"], res["plies"])
    dt = time.perf_counter() - start

    summary: Dict[str, object] = {
        "games": args.games,
        "white_policy": args.white,
        "black_policy": args.black,
        "time_ms": int(dt * 1000),
    }
    summary.update({k: tally.get(k, 0) for k in ("white", "black", "draw", "unfinished")})
    if args.json:
        print(json.dumps(summary, indent=2))
    else:
        print(" ".join(f"{k}={v}" for k, v in summary.items()))


if __name__ == "__main__":
    main()
