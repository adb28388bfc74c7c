from tablut.board import Board
from tablut.constants import (
    ATTACKER_PIECE_PENALTY,
    ATTACKER_PIECE_WEIGHT,
    DEFENDER_PIECE_PENALTY,
    DEFENDER_PIECE_WEIGHT,
    ESCAPE_BONUS,
    KING_EDGE_WEIGHT,
    KING_PRESSURE_WEIGHT,
    MOVE_COUNT_PENALTY,
    WINNING_VALUE,
)
from tablut.evaluate import evaluate, evaluate_attacker, evaluate_defender
from tablut.move import Move
from tablut.piece import Piece
from tablut.square import Square


def test_initial_position_score():
    board = Board()
    assert evaluate_defender(board) == 9 * DEFENDER_PIECE_WEIGHT - 16 * ATTACKER_PIECE_PENALTY
    assert evaluate_attacker(board) == 16 * ATTACKER_PIECE_WEIGHT - 9 * DEFENDER_PIECE_PENALTY
    assert evaluate(board) == 800


def test_decided_games_score_winning_value(position):
    board = position(Piece.ATTACKER, attackers=["c2", "a4"], king="c3")
    board.apply_move(Move.parse("a4-c4"))
    assert evaluate(board) == -WINNING_VALUE

    board = position(Piece.DEFENDER, attackers=["h8"], king="c3")
    board.apply_move(Move.parse("c3-c1"))
    assert evaluate(board) == WINNING_VALUE


def test_open_run_to_edge_earns_escape_bonus(position):
    board = position(Piece.DEFENDER, attackers=["g7"], king="c3")
    assert board.king_escape_squares()
    assert evaluate_defender(board) == (
        2 * KING_EDGE_WEIGHT + ESCAPE_BONUS + DEFENDER_PIECE_WEIGHT - ATTACKER_PIECE_PENALTY
    )


def test_surrounded_king(position):
    board = position(Piece.DEFENDER, attackers=["c4", "d3", "c2", "b3"], king="c3")
    assert board.king_escape_squares() == []
    assert evaluate_defender(board) == 2 * KING_EDGE_WEIGHT + DEFENDER_PIECE_WEIGHT - 4 * ATTACKER_PIECE_PENALTY
    assert evaluate_attacker(board) == (
        4 * ATTACKER_PIECE_WEIGHT - DEFENDER_PIECE_PENALTY + 4 * KING_PRESSURE_WEIGHT
    )


def test_moves_played_cost_the_defenders():
    board = Board()
    before = evaluate_defender(board)
    board.apply_move(Move.parse("a4-a1"))
    assert evaluate_defender(board) == before - MOVE_COUNT_PENALTY


def test_no_escape_bonus_with_attackers_to_move(position):
    board = position(Piece.ATTACKER, attackers=["g7"], king="c3")
    assert board.king_escape_squares()
    assert not any(board.is_legal_move(Square.parse("c3"), edge) for edge in board.king_escape_squares())
    assert evaluate_defender(board) == 2 * KING_EDGE_WEIGHT + DEFENDER_PIECE_WEIGHT - ATTACKER_PIECE_PENALTY
