#!/usr/bin/env python3
"""
Benchmark: measure nodes visited and time per move at the search depth.

Each position is searched twice, with and without alpha-beta cutoffs. The
two searches must agree on move and score; the node counts show how much the
pruning saves and the times show the cost of a node.

Usage: python3 tools/bench.py
"""
import time

from tablut.board import Board
from tablut.move import Move
from tablut.search import find_move

# Fixed positions spanning the opening and a few tactical middlegames, given
# as move lists from the initial position. Same positions for every run so
# that results stay comparable.
POSITIONS = [
    ("Start",        []),
    ("Flank open",   ["a4-b4", "c5-c7"]),
    ("King walk",    ["e2-c2", "e4-c4", "b5-b7", "e5-e4"]),
    ("Side press",   ["i6-h6", "g5-g8", "e8-f8", "f5-f7", "h6-h7"]),
    ("Open file",    ["d1-d3", "e3-h3", "f9-f8", "e4-g4", "a6-c6"]),
]


def setup(moves: list[str]) -> Board:
    """Replay MOVES from the initial position."""
    board = Board()
    for text in moves:
        board.apply_move(Move.parse(text))
    return board


def run_position(label: str, moves: list[str]) -> dict:
    """
    Search one position with and without pruning.

    Args:
        label: Human-readable position name for display.
        moves: Moves from the initial position.

    Returns:
        Dict with keys: label, move, score, nodes, full_nodes, time_ms,
        full_time_ms, agree.
    """
    board = setup(moves)

    start = time.monotonic()
    pruned = find_move(board)
    time_ms = int((time.monotonic() - start) * 1000)

    start = time.monotonic()
    full = find_move(board, prune=False)
    full_time_ms = int((time.monotonic() - start) * 1000)

    return {
        "label": label,
        "move": str(pruned.move),
        "score": pruned.score,
        "nodes": pruned.nodes,
        "full_nodes": full.nodes,
        "time_ms": time_ms,
        "full_time_ms": full_time_ms,
        "agree": pruned.move == full.move and pruned.score == full.score,
    }


def main() -> None:
    """Run all benchmark positions and print a summary table."""
    print(
        f"{'Position':<12} {'Move':<7} {'Score':>8} {'Nodes':>8} "
        f"{'Full':>8} {'Time(ms)':>9} {'Full(ms)':>9} {'Agree':>6}"
    )
    print("-" * 75)

    results = []
    for label, moves in POSITIONS:
        r = run_position(label, moves)
        results.append(r)
        print(
            f"{r['label']:<12} {r['move']:<7} {r['score']:>8} {r['nodes']:>8,} "
            f"{r['full_nodes']:>8,} {r['time_ms']:>9,} {r['full_time_ms']:>9,} "
            f"{'yes' if r['agree'] else 'NO':>6}"
        )

    total = sum(r["nodes"] for r in results)
    total_full = sum(r["full_nodes"] for r in results)
    print("-" * 75)
    print(f"Pruning visited {total:,} of {total_full:,} nodes ({100 * total // total_full}%).")


if __name__ == "__main__":
    main()
