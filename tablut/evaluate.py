"""
Static position evaluation.

The search needs a number for every position it cannot search any deeper.
Scores are always from the defenders' point of view: the defenders maximise,
the attackers minimise. A decided game scores +/- WINNING_VALUE.

The score is the defenders' assessment minus the attackers' assessment:

Defenders (evaluate_defender):
    - the king's progress from the centre towards the nearest edge
    - remaining defenders, king included
    - a penalty for every surviving attacker
    - a large bonus when the king has a legal move to an edge square
      right now, i.e. the defenders are to move and can win at once
    - a small penalty per move played, so quicker plans score higher

Attackers (evaluate_attacker):
    - remaining attackers
    - a penalty for every surviving defender
    - attackers standing next to the king (encirclement pressure)
"""

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
from tablut.piece import Piece
from tablut.square import SIZE

# Edge distance of the throne: the largest possible.
_MAX_EDGE_DISTANCE = SIZE // 2


def evaluate_defender(board: Board) -> int:
    """Defenders' assessment of BOARD (higher is better for them)."""
    score = 0
    king = board.king_position()
    if king is not None:
        score += (_MAX_EDGE_DISTANCE - board.edge_distance(king)) * KING_EDGE_WEIGHT
        if any(board.is_legal_move(king, edge) for edge in board.king_escape_squares()):
            score += ESCAPE_BONUS
    score += board.count(Piece.DEFENDER) * DEFENDER_PIECE_WEIGHT
    score -= board.count(Piece.ATTACKER) * ATTACKER_PIECE_PENALTY
    score -= board.move_count * MOVE_COUNT_PENALTY
    return score


def evaluate_attacker(board: Board) -> int:
    """Attackers' assessment of BOARD (higher is better for them)."""
    score = board.count(Piece.ATTACKER) * ATTACKER_PIECE_WEIGHT
    score -= board.count(Piece.DEFENDER) * DEFENDER_PIECE_PENALTY
    king = board.king_position()
    if king is not None:
        score += len(board.neighbours(king, Piece.ATTACKER)) * KING_PRESSURE_WEIGHT
    return score


def evaluate(board: Board) -> int:
    """
    Score BOARD from the defenders' point of view.

    Args:
        board: The position to score. Not modified.

    Returns:
        +WINNING_VALUE if the defenders have won, -WINNING_VALUE if the
        attackers have won, otherwise evaluate_defender - evaluate_attacker.

    Example:
        >>> from tablut.board import Board
        >>> evaluate(Board())
        800
    """
    if board.winner is Piece.DEFENDER:
        return WINNING_VALUE
    if board.winner is Piece.ATTACKER:
        return -WINNING_VALUE
    return evaluate_defender(board) - evaluate_attacker(board)
