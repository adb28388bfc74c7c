"""
Tablut engine package.

This package implements the rules of Tablut (9x9 hnefatafl) and a fixed-depth
minimax search with alpha-beta pruning and a hand-crafted evaluation function.

Modules:
    square    — Immutable board coordinates and rook-line geometry
    piece     — Piece kinds and side membership
    move      — Rook moves, move notation, precomputed move tables
    board     — Rules engine: legality, captures, win detection, undo
    constants — Evaluation weights, win scores, and search parameters
    evaluate  — Static position evaluation
    search    — Minimax search with alpha-beta pruning
"""

from tablut.board import Board, IllegalMoveError
from tablut.move import Move
from tablut.piece import Piece
from tablut.search import SearchResult, find_move
from tablut.square import Square, square

__all__ = [
    "Board",
    "IllegalMoveError",
    "Move",
    "Piece",
    "SearchResult",
    "Square",
    "find_move",
    "square",
]
