"""
Line-oriented text protocol for driving the Tablut engine.

The engine reads one command per line from stdin and writes responses to
stdout. Every output line is flushed immediately so that a controlling
program reading line by line never waits on a buffer.

Protocol overview:
    Controller -> Engine: new, position, move, undo, limit, go, board, quit
    Engine -> Controller: info, bestmove, winner, board dumps

Commands:
    new                                  reset to the initial position
    position startpos [moves m1 m2 ...]  set the position by replaying moves
    move <m>                             play one move, e.g. "move e1-e3"
    undo                                 take back the last move
    limit <n>                            allow each side at most n moves
    go                                   search and reply with the best move
    board                                print the board between "===" lines
    quit                                 exit

Moves use the notation accepted by Move.parse(): "e3-e6", "e3-6", "e3-g".

The search is fixed-depth and runs inline: "go" answers before the next
command is read.

Critical rule: NEVER print to stdout except for protocol responses.
Diagnostics go to stderr.
"""

import sys

from tablut.board import Board
from tablut.move import Move
from tablut.search import find_move


def _send(line: str) -> None:
    """
    Write a line to stdout and flush immediately.

    Args:
        line: The response line to send (without trailing newline).
    """
    print(line, flush=True)


def _log(message: str) -> None:
    """
    Write a diagnostic message to stderr.

    stdout is reserved for protocol responses; anything else written there
    would be read as a response by the controller.

    Args:
        message: The log message (without trailing newline).
    """
    print(message, file=sys.stderr, flush=True)


class ProtocolHandler:
    """
    Stateful handler for the text protocol.

    Holds the authoritative game board. The main loop creates one instance and
    dispatches commands to it.

    Attributes:
        board: The current game, updated by "position", "move" and "undo".
    """

    def __init__(self) -> None:
        self.board: Board = Board()

    # -----------------------------------------------------------------------
    # Command handlers
    # -----------------------------------------------------------------------

    def handle_new(self) -> None:
        """Start a new game from the initial position with no move limit."""
        self.board = Board()

    def handle_position(self, tokens: list[str]) -> None:
        """
        Parse and apply a "position" command.

        Command format:
            position startpos
            position startpos moves e1-e3 e4-c ...

        Replaying stops at the first malformed or illegal move, which is
        reported on stderr; the moves before it stay applied.

        Args:
            tokens: The command tokens with "position" already stripped.
        """
        if not tokens:
            return
        if tokens[0] != "startpos":
            _log(f"protocol: unknown position type: {tokens[0]}")
            return

        self.board = Board()
        move_tokens = tokens[2:] if len(tokens) > 1 and tokens[1] == "moves" else []
        for text in move_tokens:
            if not self._play(text):
                break

    def handle_move(self, tokens: list[str]) -> None:
        """
        Play a single move for the side to move.

        Args:
            tokens: The command tokens with "move" already stripped.
        """
        if not tokens:
            _log("protocol: move needs an argument")
            return
        self._play(tokens[0])

    def handle_undo(self) -> None:
        """Take back the last move, if any."""
        self.board.undo()

    def handle_limit(self, tokens: list[str]) -> None:
        """
        Set the per-side move limit.

        An invalid or already-exceeded limit is reported on stderr and leaves
        the current limit unchanged.

        Args:
            tokens: The command tokens with "limit" already stripped.
        """
        try:
            self.board.set_move_limit(int(tokens[0]))
        except (ValueError, IndexError) as e:
            _log(f"protocol: bad limit: {e}")

    def handle_go(self) -> None:
        """
        Search the current position and reply with the best move.

        Emits an info line (depth, score, nodes) and a bestmove line. The move
        is not played; the controller sends it back with "move" if it wants
        it applied. A finished game answers "bestmove (none)".
        """
        if self.board.is_game_over():
            _send("bestmove (none)")
            return

        result = find_move(self.board)
        _send(f"info depth {result.depth} score {result.score} nodes {result.nodes}")
        _send(f"bestmove {result.move}")

    def handle_board(self) -> None:
        """Print the current board between "===" lines."""
        _send("===")
        for line in self.board.render().splitlines():
            _send(line)
        _send("===")

    def handle_quit(self) -> None:
        """Exit the process. No reply is sent."""
        sys.exit(0)

    # -----------------------------------------------------------------------
    # Internal helpers
    # -----------------------------------------------------------------------

    def _play(self, text: str) -> bool:
        """
        Parse TEXT and play it on the board if it is legal.

        Returns:
            True if the move was played.
        """
        try:
            move = Move.parse(text)
        except ValueError as e:
            _log(f"protocol: {e}")
            return False

        if self.board.is_game_over():
            _log(f"protocol: game is over, ignoring {move}")
            return False
        if not self.board.is_legal_move(move):
            _log(f"protocol: illegal move: {move}")
            return False

        self.board.apply_move(move)
        if self.board.winner is not None:
            _send(f"winner {self.board.winner.side.name.lower()}")
        return True


def run_loop() -> None:
    """
    Main protocol loop.

    Reads lines from stdin and dispatches each command to the
    ProtocolHandler. Runs until "quit" is received or stdin is closed.

    Error handling:
        Each command is wrapped in a try/except so that a bug in one command
        handler does not kill the engine. Errors are logged to stderr and the
        loop continues.
    """
    handler = ProtocolHandler()

    for raw_line in sys.stdin:
        line = raw_line.strip()
        if not line:
            continue

        tokens = line.split()
        command = tokens[0]
        args = tokens[1:]

        try:
            if command == "new":
                handler.handle_new()
            elif command == "position":
                handler.handle_position(args)
            elif command == "move":
                handler.handle_move(args)
            elif command == "undo":
                handler.handle_undo()
            elif command == "limit":
                handler.handle_limit(args)
            elif command == "go":
                handler.handle_go()
            elif command == "board":
                handler.handle_board()
            elif command == "quit":
                handler.handle_quit()
            else:
                _log(f"protocol: ignoring unknown command: {command!r}")

        except Exception as e:
            _log(f"protocol: unhandled error for command {command!r}: {e}")


if __name__ == "__main__":
    run_loop()
