"""
The Tablut rules engine.

Board owns the position (one flat list of pieces indexed by Square.index),
the side to move, the move counter, the winner, an optional move limit, and
the history needed for undo and repetition detection. Every change to the
position goes through apply_move() or undo(); put() exists only to set up
positions before play.

Rules implemented here:
    - All pieces move like rooks. Only the king may stop on the throne;
      an empty throne may be passed over.
    - An ordinary piece is captured when the mover sandwiches it against a
      friendly piece (the king counts as a defender) or the empty throne.
    - With the king on the throne and three attackers around it, an attacker
      landing two squares from the throne on the fourth line captures the
      defender between them.
    - The king is captured by four attackers on the throne, by three attackers
      next to the throne, and by a plain sandwich elsewhere, where the throne
      and its neighbours count as attackers.
    - The attackers win when the king is captured, the defenders win when the
      king reaches an edge, and a side with no legal move loses.
    - Moving into a position that has already occurred wins for the mover.
    - With a move limit of N, the side to move loses once both sides have
      made N moves without a result.
"""

from typing import Iterator, NamedTuple

from tablut.move import ROOK_MOVES, Move
from tablut.piece import Piece
from tablut.square import (
    DIRECTIONS,
    HOSTILE_SQUARES,
    SIZE,
    SQUARES,
    THRONE,
    THRONE_NEIGHBOURS,
    Square,
    square,
)

# Initial layout: four T-shaped groups of attackers at the edges, defenders
# in a cross around the king on the throne.
INITIAL_ATTACKERS: tuple[Square, ...] = (
    square(0, 3), square(0, 4), square(0, 5), square(1, 4),
    square(8, 3), square(8, 4), square(8, 5), square(7, 4),
    square(3, 0), square(4, 0), square(5, 0), square(4, 1),
    square(3, 8), square(4, 8), square(5, 8), square(4, 7),
)

INITIAL_DEFENDERS: tuple[Square, ...] = (
    square(4, 5), square(5, 4), square(4, 3), square(3, 4),
    square(4, 6), square(4, 2), square(2, 4), square(6, 4),
)


class IllegalMoveError(ValueError):
    """
    Raised by Board.apply_move() for a move that is not legal.

    Submitting such a move is a programming error in the caller: surfaces
    must check Board.is_legal_move() before applying user input.
    """


class _BoardState(NamedTuple):
    """Snapshot pushed on the undo stack before each applied move."""

    pieces: tuple[Piece, ...]
    turn: Piece
    move_count: int
    winner: Piece | None
    move_limit: int | None
    repeated: bool
    fingerprint: str


class Board:
    """
    A Tablut position plus the history of how it was reached.

    Attributes (read-only properties):
        turn:       Side to move, Piece.ATTACKER or Piece.DEFENDER.
        move_count: Number of applied moves that have not been undone.
        winner:     Winning side, or None while the game is running.
        move_limit: Moves allowed per side, or None for no limit.
    """

    def __init__(self) -> None:
        self._pieces: list[Piece] = [Piece.EMPTY] * (SIZE * SIZE)
        self._turn = Piece.ATTACKER
        self._move_count = 0
        self._winner: Piece | None = None
        self._move_limit: int | None = None
        self._repeated = False
        self._positions: set[str] = set()
        self._stack: list[_BoardState] = []
        self.reset()

    @classmethod
    def empty(cls, turn: Piece = Piece.ATTACKER) -> "Board":
        """Return a board with no pieces and TURN to move, for setting up positions."""
        board = cls()
        board._pieces = [Piece.EMPTY] * (SIZE * SIZE)
        board._turn = turn
        return board

    def reset(self) -> None:
        """Restore the initial position and forget all history."""
        self._pieces = [Piece.EMPTY] * (SIZE * SIZE)
        for sq in INITIAL_ATTACKERS:
            self._pieces[sq.index] = Piece.ATTACKER
        for sq in INITIAL_DEFENDERS:
            self._pieces[sq.index] = Piece.DEFENDER
        self._pieces[THRONE.index] = Piece.KING
        self._turn = Piece.ATTACKER
        self._move_count = 0
        self._winner = None
        self._move_limit = None
        self._repeated = False
        self.clear_undo()

    def copy(self, *, stack: bool = True) -> "Board":
        """
        Return an independent copy of this board.

        The position, counters and repetition set are always copied. The undo
        stack is copied only if STACK is true; a copy made with stack=False
        can undo only the moves applied to it afterwards. The search clones
        with stack=False.
        """
        board = type(self).__new__(type(self))
        board._pieces = self._pieces.copy()
        board._turn = self._turn
        board._move_count = self._move_count
        board._winner = self._winner
        board._move_limit = self._move_limit
        board._repeated = self._repeated
        board._positions = self._positions.copy()
        board._stack = self._stack.copy() if stack else []
        return board

    # -----------------------------------------------------------------------
    # State
    # -----------------------------------------------------------------------

    @property
    def turn(self) -> Piece:
        return self._turn

    @property
    def move_count(self) -> int:
        return self._move_count

    @property
    def winner(self) -> Piece | None:
        return self._winner

    @property
    def move_limit(self) -> int | None:
        return self._move_limit

    @property
    def repeated_position(self) -> bool:
        """True iff the game ended because a position was repeated."""
        return self._repeated

    def is_game_over(self) -> bool:
        return self._winner is not None

    def set_move_limit(self, n: int) -> None:
        """
        Allow each side at most N moves.

        Raises:
            ValueError: 2 * N does not exceed the current move count, so the
                        limit would already be used up.
        """
        if 2 * n <= self._move_count:
            raise ValueError(f"move limit {n} already exceeded after {self._move_count} moves")
        self._move_limit = n

    # -----------------------------------------------------------------------
    # Squares
    # -----------------------------------------------------------------------

    def get(self, col: int, row: int) -> Piece:
        """
        Return the piece at (COL, ROW).

        Raises:
            ValueError: COL or ROW is outside [0, 8].
        """
        return self._pieces[square(col, row).index]

    def __getitem__(self, sq: Square) -> Piece:
        return self._pieces[sq.index]

    def put(self, piece: Piece, sq: Square) -> None:
        """Place PIECE on SQ. For position setup only; no rules are applied."""
        self._pieces[sq.index] = piece

    def king_position(self) -> Square | None:
        """The king's square, or None once it has been captured."""
        try:
            return SQUARES[self._pieces.index(Piece.KING)]
        except ValueError:
            return None

    def _occupied_by(self, side: Piece) -> Iterator[Square]:
        """Squares holding pieces of SIDE in scan order, king included for the defenders."""
        defending = side is Piece.DEFENDER
        for index, piece in enumerate(self._pieces):
            if (piece.is_defending if defending else piece is side):
                yield SQUARES[index]

    def piece_locations(self, side: Piece) -> set[Square]:
        """All squares of SIDE; the defenders' set includes the king."""
        return set(self._occupied_by(side))

    def count(self, side: Piece) -> int:
        """Number of pieces of SIDE; the defenders' count includes the king."""
        if side is Piece.DEFENDER:
            return self._pieces.count(Piece.DEFENDER) + self._pieces.count(Piece.KING)
        return self._pieces.count(side)

    def neighbours(self, sq: Square, piece: Piece) -> list[Square]:
        """Orthogonal neighbours of SQ that hold PIECE."""
        return [adj for adj in sq.adjacent() if self._pieces[adj.index] is piece]

    @staticmethod
    def edge_distance(sq: Square) -> int:
        """Number of steps from SQ to the nearest edge."""
        return min(sq.col, sq.row, SIZE - 1 - sq.col, SIZE - 1 - sq.row)

    # -----------------------------------------------------------------------
    # Legality
    # -----------------------------------------------------------------------

    def is_unblocked_move(self, from_square: Square, to_square: Square) -> bool:
        """True iff FROM-TO is a rook move and every square after FROM up to TO is empty."""
        if not from_square.is_rook_move(to_square):
            return False
        direction = from_square.direction(to_square)
        for move in ROOK_MOVES[from_square.index][direction]:
            if self._pieces[move.to_square.index] is not Piece.EMPTY:
                return False
            if move.to_square == to_square:
                return True
        return False

    def is_legal_origin(self, sq: Square) -> bool:
        """True iff the piece on SQ may move now: it belongs to the side to move."""
        piece = self._pieces[sq.index]
        return piece is self._turn or (piece is Piece.KING and self._turn is Piece.DEFENDER)

    def is_legal_move(self, from_square: Square | Move, to_square: Square | None = None) -> bool:
        """
        True iff FROM-TO (or the Move passed alone) is legal in this position.

        Ignores whether the game is already over; apply_move() checks that.
        """
        if isinstance(from_square, Move):
            from_square, to_square = from_square.from_square, from_square.to_square
        if not self.is_unblocked_move(from_square, to_square):
            return False
        if not self.is_legal_origin(from_square):
            return False
        return to_square != THRONE or self._pieces[from_square.index] is Piece.KING

    def legal_moves(self, side: Piece) -> list[Move]:
        """
        All legal moves for SIDE, whoever is to move.

        Order: origin squares in scan order, then direction order, then
        increasing distance.
        """
        moves = []
        pieces = self._pieces
        for origin in self._occupied_by(side):
            is_king = pieces[origin.index] is Piece.KING
            for candidates in ROOK_MOVES[origin.index]:
                for move in candidates:
                    if pieces[move.to_square.index] is not Piece.EMPTY:
                        break
                    if move.to_square == THRONE and not is_king:
                        continue
                    moves.append(move)
        return moves

    def has_move(self, side: Piece) -> bool:
        """True iff SIDE has at least one legal move."""
        pieces = self._pieces
        for origin in self._occupied_by(side):
            is_king = pieces[origin.index] is Piece.KING
            for candidates in ROOK_MOVES[origin.index]:
                for move in candidates:
                    if pieces[move.to_square.index] is not Piece.EMPTY:
                        break
                    if move.to_square != THRONE or is_king:
                        return True
        return False

    def king_escape_squares(self) -> list[Square]:
        """Edge squares the king could slide to right now, ignoring whose turn it is."""
        king = self.king_position()
        if king is None:
            return []
        escapes = []
        for candidates in ROOK_MOVES[king.index]:
            for move in candidates:
                if self._pieces[move.to_square.index] is not Piece.EMPTY:
                    break
                if move.to_square.is_edge:
                    escapes.append(move.to_square)
        return escapes

    # -----------------------------------------------------------------------
    # Making and unmaking moves
    # -----------------------------------------------------------------------

    def apply_move(self, move: Move) -> None:
        """
        Play MOVE for the side to move.

        Raises:
            IllegalMoveError: the game is over or MOVE is not legal.
        """
        if self._winner is not None:
            raise IllegalMoveError(f"game is over, cannot play {move}")
        if not self.is_legal_move(move):
            raise IllegalMoveError(f"illegal move: {move}")

        fingerprint = self.encoded()
        self._stack.append(_BoardState(
            tuple(self._pieces),
            self._turn,
            self._move_count,
            self._winner,
            self._move_limit,
            self._repeated,
            fingerprint,
        ))
        self._positions.add(fingerprint)

        mover = self._turn
        self._pieces[move.to_square.index] = self._pieces[move.from_square.index]
        self._pieces[move.from_square.index] = Piece.EMPTY
        self._resolve_captures(move.to_square)

        self._turn = mover.opponent
        self._move_count += 1
        self._update_winner(mover)

    def undo(self) -> None:
        """Take back the last applied move. Does nothing if there is none."""
        if not self._stack:
            return
        state = self._stack.pop()
        self._positions.discard(state.fingerprint)
        self._pieces = list(state.pieces)
        self._turn = state.turn
        self._move_count = state.move_count
        self._winner = state.winner
        self._move_limit = state.move_limit
        self._repeated = state.repeated

    def clear_undo(self) -> None:
        """Forget the undo history and recorded positions; the position itself is unchanged."""
        self._stack.clear()
        self._positions.clear()

    # -----------------------------------------------------------------------
    # Captures
    # -----------------------------------------------------------------------

    def _capture(self, sq0: Square, sq2: Square) -> None:
        """Remove the piece between SQ0 and SQ2."""
        self._pieces[sq0.between(sq2).index] = Piece.EMPTY

    def _resolve_captures(self, to: Square) -> None:
        """Remove every piece captured by the piece that just moved to TO."""
        pieces = self._pieces
        side = pieces[to.index].side
        victim = side.opponent

        for direction in DIRECTIONS:
            beyond = to.rook_move(direction, 2)
            if beyond is None:
                continue
            adjacent = to.rook_move(direction, 1)
            if pieces[adjacent.index] is not victim:
                continue
            anchor = pieces[beyond.index]
            if anchor.side is side or (anchor is Piece.EMPTY and beyond == THRONE):
                self._capture(to, beyond)

        if side is Piece.ATTACKER:
            self._throne_capture(to)
            self._king_capture(to)

    def _throne_capture(self, to: Square) -> None:
        """Capture a defender pinned against a throne held by a king with three attackers around it."""
        pieces = self._pieces
        if pieces[THRONE.index] is not Piece.KING:
            return
        if len(self.neighbours(THRONE, Piece.ATTACKER)) != 3:
            return
        if not THRONE.is_rook_move(to):
            return
        direction = THRONE.direction(to)
        if to != THRONE.rook_move(direction, 2):
            return
        if pieces[THRONE.rook_move(direction, 1).index] is Piece.DEFENDER:
            self._capture(to, THRONE)

    def _king_capture(self, to: Square) -> None:
        """Capture the king if the attacker that moved to TO completes its encirclement."""
        king = self.king_position()
        if king is None or not to.is_rook_move(king):
            return
        direction = to.direction(king)
        if to.rook_move(direction, 1) != king:
            return

        attackers = len(self.neighbours(king, Piece.ATTACKER))
        if king == THRONE:
            captured = attackers == 4
        elif king in THRONE_NEIGHBOURS:
            captured = attackers == 3
        else:
            opposite = king.rook_move(direction, 1)
            captured = opposite is not None and (
                self._pieces[opposite.index] is Piece.ATTACKER or opposite in HOSTILE_SQUARES
            )
        if captured:
            self._pieces[king.index] = Piece.EMPTY

    # -----------------------------------------------------------------------
    # Game end
    # -----------------------------------------------------------------------

    def _update_winner(self, mover: Piece) -> None:
        """Decide whether the move just made by MOVER ended the game."""
        king = self.king_position()
        if king is None:
            self._winner = Piece.ATTACKER
        elif not self.has_move(self._turn):
            self._winner = self._turn.opponent
        elif king.is_edge:
            self._winner = Piece.DEFENDER
        elif self.encoded() in self._positions:
            self._winner = mover
            self._repeated = True
        elif self._move_limit is not None and self._move_count >= 2 * self._move_limit:
            self._winner = self._turn.opponent

    # -----------------------------------------------------------------------
    # Text forms
    # -----------------------------------------------------------------------

    def encoded(self) -> str:
        """
        Position fingerprint: the side to move followed by every square in
        index order. Used only to recognise repeated positions.
        """
        return self._turn.value + "".join(piece.value for piece in self._pieces)

    def render(self, coordinates: bool = True) -> str:
        """
        Text picture of the board, rank 9 at the top.

        With COORDINATES, ranks are shown on the left and files a-i under the
        last row.
        """
        lines = []
        for row in range(SIZE - 1, -1, -1):
            prefix = f"{row + 1:2d}" if coordinates else "  "
            cells = " ".join(self._pieces[col * SIZE + row].value for col in range(SIZE))
            lines.append(f"{prefix} {cells}")
        if coordinates:
            lines.append("   " + " ".join("abcdefghi"))
        return "\n".join(lines) + "\n"

    def __str__(self) -> str:
        return self.render(coordinates=True)

    def __repr__(self) -> str:
        return f"<Board turn={self._turn.name} moves={self._move_count} winner={self._winner}>"
