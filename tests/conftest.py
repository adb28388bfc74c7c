import pytest

from tablut.board import Board
from tablut.piece import Piece
from tablut.square import Square


@pytest.fixture
def position():
    """
    Build a board from square names.

    Usage: position(Piece.ATTACKER, attackers=["b4"], defenders=["c4"], king="g7")
    """

    def build(turn: Piece, attackers=(), defenders=(), king: str | None = None) -> Board:
        board = Board.empty(turn)
        for name in attackers:
            board.put(Piece.ATTACKER, Square.parse(name))
        for name in defenders:
            board.put(Piece.DEFENDER, Square.parse(name))
        if king is not None:
            board.put(Piece.KING, Square.parse(king))
        return board

    return build
