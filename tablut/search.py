"""
Search entry point: minimax with alpha-beta pruning at a fixed depth.

The defenders are the maximizer and the attackers the minimizer; whose node
it is follows board.turn. Leaves (depth exhausted) and decided positions are
scored by evaluate(), which is always from the defenders' point of view.

Every child is searched on its own board.copy(stack=False). Branches never
share a board, so the search never needs undo and the caller's board is left
untouched.

A child scoring exactly +/- WINNING_VALUE is a decided game. Its score is
decayed to WILL_WIN_VALUE minus WIN_DECAY_PER_MOVE for every move played
to reach it, so a win found nearer the root outranks the same win found
deeper and the engine takes the fastest forced win instead of delaying it.

Ties keep the earlier-generated move: a child replaces the best move only
when strictly better. Together with a fail-soft window this makes the pruned
search choose exactly the move and score of the exhaustive one.
"""

import logging
from dataclasses import dataclass

from tablut.board import Board
from tablut.constants import (
    INFINITY,
    SEARCH_DEPTH,
    WILL_WIN_VALUE,
    WIN_DECAY_PER_MOVE,
    WINNING_VALUE,
)
from tablut.evaluate import evaluate
from tablut.move import Move
from tablut.piece import Piece

_log = logging.getLogger(__name__)


@dataclass
class SearchState:
    """
    Per-search mutable state.

    Attributes:
        prune:      Whether alpha-beta cutoffs are taken. With prune=False the
                    search visits the whole tree; used to verify pruning and
                    to measure its effect.
        node_count: Number of positions visited, root included.
    """

    prune: bool = True
    node_count: int = 0


@dataclass(frozen=True)
class SearchResult:
    """
    Outcome of find_move().

    Attributes:
        move:  The chosen move, or None if the game was already over.
        score: Backed-up score of the move, from the defenders' point of view.
        depth: Plies searched.
        nodes: Positions visited.
    """

    move: Move | None
    score: int
    depth: int
    nodes: int


def _decay(score: int, board: Board) -> int:
    """Turn an exact win score into one that shrinks with the moves played to reach it."""
    if score == WINNING_VALUE:
        return WILL_WIN_VALUE - board.move_count * WIN_DECAY_PER_MOVE
    if score == -WINNING_VALUE:
        return -WILL_WIN_VALUE + board.move_count * WIN_DECAY_PER_MOVE
    return score


def minimax(
    board: Board,
    depth: int,
    alpha: int,
    beta: int,
    state: SearchState,
) -> tuple[int, Move | None]:
    """
    Minimax search with alpha-beta pruning.

    Args:
        board: The position to search. Not modified.
        depth: Remaining plies. At 0 the position is scored statically.
        alpha: Best score the maximizer can already guarantee.
        beta:  Best score the minimizer can already guarantee.
        state: Node counter and pruning switch.

    Returns:
        (score, move): the backed-up score and the move achieving it, or
        (static score, None) at a leaf or decided position.
    """
    state.node_count += 1

    if board.winner is not None or depth == 0:
        return evaluate(board), None

    maximizing = board.turn is Piece.DEFENDER
    best_score = -INFINITY if maximizing else INFINITY
    best_move = None

    for move in board.legal_moves(board.turn):
        child = board.copy(stack=False)
        child.apply_move(move)
        score, _ = minimax(child, depth - 1, alpha, beta, state)
        score = _decay(score, child)

        if maximizing:
            if score > best_score:
                best_score = score
                best_move = move
            alpha = max(alpha, best_score)
        else:
            if score < best_score:
                best_score = score
                best_move = move
            beta = min(beta, best_score)

        # Cutoff: the opponent already has a better option elsewhere and will
        # never let the game reach this node.
        if state.prune and beta <= alpha:
            break

    # Only reachable from a set-up position whose result was never decided.
    if best_move is None:
        return evaluate(board), None
    return best_score, best_move


def find_move(board: Board, depth: int = SEARCH_DEPTH, *, prune: bool = True) -> SearchResult:
    """
    Choose a move for the side to move on BOARD.

    Args:
        board: The current position. Not modified.
        depth: Plies to search; the engine plays with SEARCH_DEPTH.
        prune: Take alpha-beta cutoffs. prune=False searches the full tree
               and returns the same move and score.

    Returns:
        SearchResult with the chosen move (None if the game is over), its
        score from the defenders' point of view, the depth and the node count.
    """
    state = SearchState(prune=prune)
    score, move = minimax(board, depth, -INFINITY, INFINITY, state)

    _log.debug(
        "search side=%s depth=%d prune=%s move=%s score=%d nodes=%d",
        board.turn.name,
        depth,
        prune,
        move,
        score,
        state.node_count,
    )
    return SearchResult(move=move, score=score, depth=depth, nodes=state.node_count)
