"""
Piece kinds.

Tablut has two sides. The attackers (traditionally black, the Muscovites)
move first. The defenders (traditionally white, the Swedes) protect the king.
The king belongs to the defending side for movement and for anchoring
captures, but it is captured and scored differently from ordinary defenders,
so it is a separate piece kind.
"""

from enum import Enum


class Piece(Enum):
    """A square's content. The value is the single-character text form."""

    EMPTY = "-"
    ATTACKER = "B"
    DEFENDER = "W"
    KING = "K"

    @property
    def side(self) -> "Piece":
        """The side this piece plays for: KING maps to DEFENDER."""
        return Piece.DEFENDER if self is Piece.KING else self

    @property
    def opponent(self) -> "Piece":
        """The opposing side. EMPTY has no opponent and maps to itself."""
        if self is Piece.ATTACKER:
            return Piece.DEFENDER
        if self is Piece.EMPTY:
            return Piece.EMPTY
        return Piece.ATTACKER

    @property
    def is_defending(self) -> bool:
        """True for the defenders and the king."""
        return self is Piece.DEFENDER or self is Piece.KING

    def __str__(self) -> str:
        return self.value
