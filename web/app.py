"""
FastAPI web application for the Tablut engine.

Exposes a single REST endpoint (POST /api/move) that accepts a game as a list
of moves from the initial position, runs the engine search, and returns the
engine's reply together with the resulting board.

Architecture notes:
- Sync endpoint (not async): FastAPI runs sync handlers in a thread pool,
  which is the correct pattern for CPU-bound blocking calls like the search.
- Stateless per request: the client sends the whole move list each time; no
  server-side game state is kept between requests.
"""

import logging

from fastapi import FastAPI, HTTPException
from pydantic import BaseModel, field_validator

from tablut.board import Board
from tablut.move import Move
from tablut.search import find_move

# ---------------------------------------------------------------------------
# Setup
# ---------------------------------------------------------------------------

logging.basicConfig(level=logging.INFO)
_log = logging.getLogger(__name__)

app = FastAPI(title="Tablut AI", version="1.0.0")


# ---------------------------------------------------------------------------
# Request / response models
# ---------------------------------------------------------------------------


class MoveRequest(BaseModel):
    """
    Client request to the engine.

    Fields:
        moves: Moves played so far from the initial position, in any notation
               accepted by Move.parse() (e.g. "e1-e3", "e1-3", "a4-c").
        move_limit: Optional per-side move limit applied before replaying.
    """

    moves: list[str] = []
    move_limit: int | None = None

    @field_validator("moves")
    @classmethod
    def strip_moves(cls, v: list[str]) -> list[str]:
        """Drop surrounding whitespace and empty entries."""
        return [m.strip() for m in v if m.strip()]


class MoveResponse(BaseModel):
    """
    Engine response after computing its move.

    Fields:
        move: The engine's move in full notation (e.g. "e3-e6").
        score: Search score from the defenders' point of view.
        nodes: Positions visited by the search.
        board: Text rendering of the board after the engine's move.
        winner: "attacker" or "defender" if the move ended the game, else None.
        move_count: Moves played after the engine's move.
    """

    move: str
    score: int
    nodes: int
    board: str
    winner: str | None
    move_count: int


# ---------------------------------------------------------------------------
# API routes
# ---------------------------------------------------------------------------


def _replay(request: MoveRequest) -> Board:
    """
    Build the position described by REQUEST.

    Raises:
        HTTPException 400: Bad move limit, bad notation or an illegal move.
    """
    board = Board()
    if request.move_limit is not None:
        try:
            board.set_move_limit(request.move_limit)
        except ValueError as exc:
            raise HTTPException(status_code=400, detail=f"Invalid move limit: {exc}") from exc

    for ply, text in enumerate(request.moves, start=1):
        try:
            move = Move.parse(text)
        except ValueError as exc:
            raise HTTPException(status_code=400, detail=f"Invalid move {ply}: {exc}") from exc
        if board.is_game_over() or not board.is_legal_move(move):
            raise HTTPException(status_code=400, detail=f"Illegal move {ply}: {move}")
        board.apply_move(move)
    return board


@app.post("/api/move", response_model=MoveResponse)
def api_move(request: MoveRequest) -> MoveResponse:
    """
    Compute the engine's move for the given game.

    Replays the moves, confirms the game is not over, runs the fixed-depth
    search, applies the chosen move, and returns the result.

    Args:
        request: MoveRequest with the moves played so far.

    Returns:
        MoveResponse with the move, score, node count, board and winner.

    Raises:
        HTTPException 400: Malformed or illegal moves, or game already over.
        HTTPException 500: The search failed or returned no move.
    """
    board = _replay(request)

    if board.is_game_over():
        raise HTTPException(
            status_code=400,
            detail=f"Game is already over: {board.winner.name.lower()} won",
        )

    try:
        result = find_move(board)
    except Exception as exc:
        _log.exception("Engine search failed after moves=%s", request.moves)
        raise HTTPException(status_code=500, detail=f"Engine error: {exc}") from exc

    if result.move is None:
        raise HTTPException(status_code=500, detail="Engine returned no move")

    _log.info(
        "Move=%s score=%d nodes=%d ply=%d",
        result.move,
        result.score,
        result.nodes,
        board.move_count,
    )

    board.apply_move(result.move)
    return MoveResponse(
        move=str(result.move),
        score=result.score,
        nodes=result.nodes,
        board=board.render(),
        winner=board.winner.name.lower() if board.winner is not None else None,
        move_count=board.move_count,
    )
