"""
Board coordinates and rook-line geometry.

Squares are addressed by (col, row) with 0 <= col, row < SIZE. Columns are
named with file letters a..i and rows with ranks 1..9, so the throne at
(4, 4) is "e5". Every square is created once at import time and looked up
through square(); two squares are equal iff their coordinates are equal.

The linear index is column-major (col * SIZE + row). The board scans squares
in this order, which fixes the order of generated moves.

Directions are numbered clockwise starting from north:
    NORTH = 0  (row + 1)
    EAST  = 1  (col + 1)
    SOUTH = 2  (row - 1)
    WEST  = 3  (col - 1)
"""

from dataclasses import dataclass

SIZE: int = 9

NORTH, EAST, SOUTH, WEST = 0, 1, 2, 3
DIRECTIONS: tuple[int, ...] = (NORTH, EAST, SOUTH, WEST)

# (delta col, delta row) per direction, indexed by the constants above.
_DELTAS: tuple[tuple[int, int], ...] = ((0, 1), (1, 0), (0, -1), (-1, 0))

_FILES = "abcdefghi"


@dataclass(frozen=True)
class Square:
    """
    A single board square.

    Attributes:
        col: Column (file) index, 0 = a.
        row: Row (rank) index, 0 = rank 1.
    """

    col: int
    row: int

    @property
    def index(self) -> int:
        """Position of this square in the board's piece array."""
        return self.col * SIZE + self.row

    @property
    def is_edge(self) -> bool:
        return self.col in (0, SIZE - 1) or self.row in (0, SIZE - 1)

    def is_rook_move(self, other: "Square") -> bool:
        """True iff OTHER is a different square on the same row or column."""
        return self != other and (self.col == other.col or self.row == other.row)

    def direction(self, other: "Square") -> int:
        """
        Direction of the rook line from this square to OTHER.

        Raises:
            ValueError: OTHER is not a rook move away.
        """
        if not self.is_rook_move(other):
            raise ValueError(f"{self} and {other} are not on a rook line")
        if other.row > self.row:
            return NORTH
        if other.col > self.col:
            return EAST
        if other.row < self.row:
            return SOUTH
        return WEST

    def rook_move(self, direction: int, steps: int) -> "Square | None":
        """Square STEPS away along DIRECTION, or None if it is off the board."""
        dc, dr = _DELTAS[direction]
        col = self.col + dc * steps
        row = self.row + dr * steps
        if 0 <= col < SIZE and 0 <= row < SIZE:
            return SQUARES[col * SIZE + row]
        return None

    def between(self, other: "Square") -> "Square":
        """
        The square strictly between this square and OTHER.

        Raises:
            ValueError: the two squares are not exactly two steps apart on a
                        rook line.
        """
        if not self.is_rook_move(other) or abs(self.col - other.col) + abs(self.row - other.row) != 2:
            raise ValueError(f"no single square between {self} and {other}")
        return SQUARES[((self.col + other.col) // 2) * SIZE + (self.row + other.row) // 2]

    def adjacent(self) -> list["Square"]:
        """Orthogonal neighbours in direction order, skipping off-board ones."""
        result = []
        for direction in DIRECTIONS:
            neighbour = self.rook_move(direction, 1)
            if neighbour is not None:
                result.append(neighbour)
        return result

    @classmethod
    def parse(cls, name: str) -> "Square":
        """
        Parse a square name such as "e5".

        Raises:
            ValueError: the name is not a file letter a-i followed by a rank 1-9.
        """
        name = name.strip().lower()
        if len(name) != 2 or name[0] not in _FILES or not name[1].isdigit():
            raise ValueError(f"invalid square: {name!r}")
        return square(_FILES.index(name[0]), int(name[1]) - 1)

    def __str__(self) -> str:
        return f"{_FILES[self.col]}{self.row + 1}"


def square(col: int, row: int) -> Square:
    """
    Return the square at (COL, ROW).

    Raises:
        ValueError: COL or ROW is outside [0, SIZE - 1].
    """
    if not (0 <= col < SIZE and 0 <= row < SIZE):
        raise ValueError(f"square out of range: col={col}, row={row}")
    return SQUARES[col * SIZE + row]


SQUARES: list[Square] = [Square(col, row) for col in range(SIZE) for row in range(SIZE)]

# ---------------------------------------------------------------------------
# Special squares
# ---------------------------------------------------------------------------
# Only the king may stop on the throne. An empty throne still anchors
# captures, and the throne plus its four neighbours count as attackers when
# deciding whether the king is surrounded.

THRONE: Square = square(4, 4)
NTHRONE: Square = square(4, 5)
ETHRONE: Square = square(5, 4)
STHRONE: Square = square(4, 3)
WTHRONE: Square = square(3, 4)

THRONE_NEIGHBOURS: frozenset[Square] = frozenset((NTHRONE, ETHRONE, STHRONE, WTHRONE))
HOSTILE_SQUARES: frozenset[Square] = THRONE_NEIGHBOURS | {THRONE}
