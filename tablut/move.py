"""
Rook moves and the precomputed move tables.

Every Tablut piece moves like a chess rook: any distance along a row or
column. Move generation runs in the innermost loop of the search, so the
candidate destinations for every (square, direction) pair are built once at
import time. ROOK_MOVES[sq.index][direction] lists the moves from sq along
direction in increasing distance, which lets the board stop scanning at the
first occupied square.

Notation:
    e3-e6   full destination square
    e3-6    same column, destination rank only
    e3-g    same row, destination file only
str(move) always produces the full form.
"""

from dataclasses import dataclass

from tablut.square import DIRECTIONS, SIZE, SQUARES, Square


@dataclass(frozen=True)
class Move:
    """
    An (origin, destination) pair on a single row or column.

    Raises:
        ValueError: the two squares are not a rook move apart.
    """

    from_square: Square
    to_square: Square

    def __post_init__(self) -> None:
        if not self.from_square.is_rook_move(self.to_square):
            raise ValueError(f"not a rook move: {self.from_square}-{self.to_square}")

    @classmethod
    def parse(cls, text: str) -> "Move":
        """
        Parse a move in any of the accepted notations.

        Raises:
            ValueError: malformed text or a non-rook move.
        """
        text = text.strip().lower()
        origin, sep, dest = text.partition("-")
        if not sep or not dest:
            raise ValueError(f"invalid move: {text!r}")
        from_square = Square.parse(origin)
        if len(dest) == 2:
            to_square = Square.parse(dest)
        elif dest.isdigit():
            to_square = Square.parse(f"{origin[0]}{dest}")
        else:
            to_square = Square.parse(f"{dest}{origin[1]}")
        return mv(from_square, to_square)

    def __str__(self) -> str:
        return f"{self.from_square}-{self.to_square}"


def _build_rook_moves() -> list[list[tuple[Move, ...]]]:
    table = []
    for sq in SQUARES:
        per_direction = []
        for direction in DIRECTIONS:
            moves = []
            for steps in range(1, SIZE):
                dest = sq.rook_move(direction, steps)
                if dest is None:
                    break
                moves.append(Move(sq, dest))
            per_direction.append(tuple(moves))
        table.append(per_direction)
    return table


ROOK_MOVES: list[list[tuple[Move, ...]]] = _build_rook_moves()

# Index of every rook move by (from index, to index), so parsed moves share
# the table's instances.
_MOVE_INDEX: dict[tuple[int, int], Move] = {
    (m.from_square.index, m.to_square.index): m
    for per_square in ROOK_MOVES
    for per_direction in per_square
    for m in per_direction
}


def mv(from_square: Square, to_square: Square) -> Move:
    """
    Return the precomputed move FROM_SQUARE-TO_SQUARE.

    Raises:
        ValueError: the squares are not a rook move apart.
    """
    try:
        return _MOVE_INDEX[(from_square.index, to_square.index)]
    except KeyError:
        raise ValueError(f"not a rook move: {from_square}-{to_square}") from None
