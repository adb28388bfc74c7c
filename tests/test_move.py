import pytest

from tablut.move import ROOK_MOVES, Move, mv
from tablut.square import EAST, NORTH, SOUTH, THRONE, WEST, Square, square


def test_non_rook_move_rejected():
    with pytest.raises(ValueError):
        Move(square(0, 0), square(1, 1))
    with pytest.raises(ValueError):
        Move(THRONE, THRONE)


@pytest.mark.parametrize(
    "text,expected",
    [
        ("e3-e6", ("e3", "e6")),
        ("e3-6", ("e3", "e6")),
        ("e3-g", ("e3", "g3")),
        (" A4-C4 ", ("a4", "c4")),
    ],
)
def test_parse_notations(text, expected):
    move = Move.parse(text)
    assert move == Move(Square.parse(expected[0]), Square.parse(expected[1]))


@pytest.mark.parametrize("text", ["", "e3", "e3-", "e3-f4", "e3-e3", "z1-z2", "e3-x"])
def test_parse_rejects_bad_text(text):
    with pytest.raises(ValueError):
        Move.parse(text)


def test_str_is_full_notation():
    assert str(Move.parse("e3-6")) == "e3-e6"


def test_rook_move_tables():
    a1 = square(0, 0)
    north = ROOK_MOVES[a1.index][NORTH]
    assert [str(m.to_square) for m in north] == ["a2", "a3", "a4", "a5", "a6", "a7", "a8", "a9"]
    assert ROOK_MOVES[a1.index][SOUTH] == ()
    assert ROOK_MOVES[a1.index][WEST] == ()
    assert len(ROOK_MOVES[a1.index][EAST]) == 8
    for direction in (NORTH, EAST, SOUTH, WEST):
        assert len(ROOK_MOVES[THRONE.index][direction]) == 4


def test_mv_returns_table_instances():
    move = mv(square(0, 0), square(0, 3))
    assert move is ROOK_MOVES[0][NORTH][2]
    assert Move.parse("a1-a4") is move
    with pytest.raises(ValueError):
        mv(square(0, 0), square(1, 1))
