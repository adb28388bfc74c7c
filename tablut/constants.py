"""
Engine constants: evaluation weights, win scores, and search parameters.

All numeric constants used by the evaluation and search are defined here so
that tuning never means hunting for magic numbers inside the algorithms.

Scores are integers from the defenders' point of view: positive favours the
defenders (the maximizer), negative favours the attackers (the minimizer).
"""

# ---------------------------------------------------------------------------
# Special scores
# ---------------------------------------------------------------------------
# INFINITY bounds the alpha-beta window and is never produced by evaluation.
# WINNING_VALUE is the score of a decided game. A win found below the root is
# reported as WILL_WIN_VALUE minus a per-move penalty so that the search
# prefers the fastest forced win over a slower one.

INFINITY: int = 2**31 - 1
WINNING_VALUE: int = INFINITY - 20
WILL_WIN_VALUE: int = INFINITY - 40_000
WIN_DECAY_PER_MOVE: int = 1_000

# ---------------------------------------------------------------------------
# Defender evaluation weights
# ---------------------------------------------------------------------------
# KING_EDGE_WEIGHT is paid per square of progress from the centre towards
# the nearest edge. ESCAPE_BONUS is paid when the king has an open straight
# run to an edge square: unless the attackers block it, the next defender
# move wins. It stays far below WILL_WIN_VALUE so that a real forced win
# always outranks a threat.

KING_EDGE_WEIGHT: int = 1_000
DEFENDER_PIECE_WEIGHT: int = 400
ATTACKER_PIECE_PENALTY: int = 200
ESCAPE_BONUS: int = 1_000_000
MOVE_COUNT_PENALTY: int = 30

# ---------------------------------------------------------------------------
# Attacker evaluation weights
# ---------------------------------------------------------------------------

ATTACKER_PIECE_WEIGHT: int = 200
DEFENDER_PIECE_PENALTY: int = 400
KING_PRESSURE_WEIGHT: int = 100

# ---------------------------------------------------------------------------
# Search parameters
# ---------------------------------------------------------------------------
# The search is fixed-depth: SEARCH_DEPTH plies, no iterative deepening and
# no time control.

SEARCH_DEPTH: int = 2
