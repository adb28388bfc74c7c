import random

import pytest

from tablut.board import Board
from tablut.constants import SEARCH_DEPTH, WILL_WIN_VALUE, WIN_DECAY_PER_MOVE, WINNING_VALUE
from tablut.evaluate import evaluate
from tablut.move import Move
from tablut.piece import Piece
from tablut.search import _decay, find_move


def random_position(seed: int, plies: int) -> Board:
    rng = random.Random(seed)
    board = Board()
    for _ in range(plies):
        if board.is_game_over():
            break
        board.apply_move(rng.choice(board.legal_moves(board.turn)))
    board.clear_undo()
    return board


def test_initial_search_returns_legal_move_and_leaves_board_alone():
    board = Board()
    encoded = board.encoded()
    result = find_move(board)
    assert result.move in board.legal_moves(Piece.ATTACKER)
    assert result.depth == SEARCH_DEPTH
    assert result.nodes > 1
    assert board.encoded() == encoded
    assert board.move_count == 0


def test_defenders_take_immediate_escape(position):
    board = position(Piece.DEFENDER, attackers=["g7"], king="c3")
    result = find_move(board)
    # Every king run to an edge wins at once; ties keep the first generated.
    assert result.move == Move.parse("c3-c9")
    assert result.score == WILL_WIN_VALUE - WIN_DECAY_PER_MOVE


def test_attackers_take_the_king(position):
    board = position(Piece.ATTACKER, attackers=["c2", "a4"], king="c3")
    result = find_move(board)
    assert result.move == Move.parse("a4-c4")
    assert result.score == -(WILL_WIN_VALUE - WIN_DECAY_PER_MOVE)


def test_finished_game_has_no_move(position):
    board = position(Piece.ATTACKER, attackers=["c2", "a4"], king="c3")
    board.apply_move(Move.parse("a4-c4"))
    result = find_move(board)
    assert result.move is None
    assert result.score == -WINNING_VALUE
    assert result.nodes == 1


def test_depth_zero_is_static_score():
    board = Board()
    result = find_move(board, depth=0)
    assert result.move is None
    assert result.score == evaluate(board)


def test_faster_wins_score_higher():
    near = Board()
    near.apply_move(Move.parse("a4-a1"))
    far = near.copy()
    far.apply_move(Move.parse("e4-b4"))
    far.apply_move(Move.parse("a1-a3"))
    assert WINNING_VALUE > _decay(WINNING_VALUE, near) > _decay(WINNING_VALUE, far)
    assert -WINNING_VALUE < _decay(-WINNING_VALUE, near) < _decay(-WINNING_VALUE, far)
    assert _decay(1234, near) == 1234


def test_pruning_matches_exhaustive_search_initial():
    board = Board()
    pruned = find_move(board)
    full = find_move(board, prune=False)
    assert pruned.move == full.move
    assert pruned.score == full.score
    assert pruned.nodes < full.nodes


@pytest.mark.parametrize("seed,plies", [(1, 5), (2, 10), (3, 17), (4, 24)])
def test_pruning_matches_exhaustive_search(seed, plies):
    board = random_position(seed, plies)
    pruned = find_move(board)
    full = find_move(board, prune=False)
    assert pruned.move == full.move
    assert pruned.score == full.score
    assert pruned.nodes <= full.nodes


def test_pruning_matches_exhaustive_search_at_depth_three(position):
    board = position(Piece.DEFENDER, attackers=["b2", "g7", "h3"], defenders=["e3"], king="d6")
    pruned = find_move(board, depth=3)
    full = find_move(board, depth=3, prune=False)
    assert pruned.move == full.move
    assert pruned.score == full.score


def test_undecided_position_without_moves_is_scored_statically(position):
    board = position(Piece.ATTACKER, defenders=["c3"], king="g7")
    assert board.winner is None
    result = find_move(board)
    assert result.move is None
    assert result.score == evaluate(board)
    assert result.nodes == 1
