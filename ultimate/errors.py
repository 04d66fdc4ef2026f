"""Errors raised by the Ultimate Tic Tac Toe engine and its adapters.

Every ``GameError`` is recoverable: the engine validates before it
mutates, so a rejected move leaves the game exactly as it was and the
caller may simply ask for another move.
"""


class GameError(Exception):
    """Base class for rejected moves and bad input."""


class OutOfBounds(GameError):
    def __init__(self, position):
        super().__init__(f"Position out of bounds {tuple(position)}")
        self.position = position


class CellOccupied(GameError):
    def __init__(self, position):
        super().__init__(f"Cell {tuple(position)} already played")
        self.position = position


class GameAlreadyDecided(GameError):
    def __init__(self, outer, winner):
        super().__init__(f"Outer game {tuple(outer)} already won by {winner}")
        self.outer = outer
        self.winner = winner


class IllegalBoardChoice(GameError):
    def __init__(self, forced, outer):
        super().__init__(f"Must play in game {tuple(forced)}, not {tuple(outer)}")
        self.forced = forced
        self.outer = outer


class GameOver(GameError):
    def __init__(self, winner=None):
        msg = f"Game is over, {winner} won" if winner else "Game is over, it was a draw"
        super().__init__(msg)
        self.winner = winner


class MalformedEncoding(GameError):
    pass


class MalformedPosition(GameError):
    pass


class InvariantViolation(RuntimeError):
    """The meta-board was changed outside ``MetaGame.play``.

    Not a ``GameError``: this is a bug, never a prompt to retry.
    """
