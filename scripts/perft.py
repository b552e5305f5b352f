#!/usr/bin/env python3
# ruff: noqa: E402
from __future__ import annotations

import argparse
import time
import os
import sys

# Allow running this script directly via `python scripts/perft.py`
# by adding the repo root (which contains `src/`) to sys.path.
REPO_ROOT = os.path.dirname(os.path.dirname(__file__))
if REPO_ROOT not in sys.path:
    sys.path.insert(0, REPO_ROOT)

from src.engine.game import GameState
from src.engine.perft import divide, perft
from src.engine.rules import RuleSet


def main() -> None:
    parser = argparse.ArgumentParser(description="Count move-tree nodes from the start position")
    parser.add_argument("--depth", type=int, default=3, help="Perft depth (default: 3)")
    parser.add_argument("--divide", action="store_true", help="Print per-root-move counts")
    parser.add_argument(
        "--transit-check",
        action="store_true",
        help="Refuse castling through an attacked square",
    )
    args = parser.parse_args()

    state = GameState.new(RuleSet(castling_transit_check=args.transit_check))
    start = time.perf_counter()
    if args.divide:
        counts = divide(state, args.depth)
        for mv, n in sorted(counts.items()):
            print(f"{mv}: {n}")
        nodes = sum(counts.values())
    else:
        nodes = perft(state, args.depth)
    dt = time.perf_counter() - start
    print(f"nodes={nodes} depth={args.depth} time_ms={int(dt*1000)} nps={int(nodes/max(dt,1e-9))}")


if __name__ == "__main__":
    main()
