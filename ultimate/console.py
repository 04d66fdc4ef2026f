"""Text console for a two-player game on one terminal.

Reads coordinates as ``row,col`` and hands them to a GameSession; any
GameError is printed and the turn starts over.
"""
import os
import sys

from .errors import GameError, MalformedPosition
from .logic import Cell, GameSession, Position

# ── Colours ───────────────────────────────────────────────────────────────────
_RESET = "\033[0m"
_BLUE = "\033[34m"
_BOLD_GREEN = "\033[1;32m"
_BOLD_MAGENTA = "\033[1;35m"
_BOLD_RED = "\033[1;31m"


def _painter(code, enabled):
    if not enabled:
        return str
    return lambda text: f"{code}{text}{_RESET}"


def parse_position(text) -> Position:
    row_col = text.split(",")
    if len(row_col) != 2:
        raise MalformedPosition(f"Invalid format, must have a comma: {text.strip()!r}")
    values = []
    for part in row_col:
        try:
            values.append(int(part.strip()))
        except ValueError:
            raise MalformedPosition(f"{part.strip()!r} is not a valid number") from None
    return Position(*values)


class Console:
    def __init__(self, session=None, stdin=None, stdout=None, color=None):
        self.session = session or GameSession()
        self.stdin = stdin or sys.stdin
        self.stdout = stdout or sys.stdout
        if color is None:
            color = "NO_COLOR" not in os.environ and self.stdout.isatty()
        self.plain = _painter(_BLUE, color)
        self.players = {
            Cell.O: _painter(_BOLD_GREEN, color),
            Cell.X: _painter(_BOLD_MAGENTA, color),
        }
        self.error = _painter(_BOLD_RED, color)

    def _say(self, text=""):
        print(text, file=self.stdout)

    def _ask(self, prompt):
        self._say(prompt)
        line = self.stdin.readline()
        if not line:
            raise EOFError
        return parse_position(line)

    def render(self):
        return self.session.game.render(self.players[Cell.X], self.players[Cell.O], self.plain)

    def turn(self):
        """Play one move, returning once it is accepted or rejected."""
        s = self.session
        mark = s.current_player
        self.stdout.write(self.render())
        self._say(f"It's {self.players[mark](mark)}'s turn")
        try:
            outer = s.forced_board
            if outer is None:
                outer = self._ask("You may play anywhere! Enter the game coordinates as row,col")
            inner = self._ask(f"Enter move for game at {outer.row},{outer.col} as row,col coordinates")
            s.submit(outer, inner)
        except GameError as e:
            self._say(self.error(str(e)))

    def run(self):
        s = self.session
        try:
            while not s.decided:
                self.turn()
        except EOFError:
            return None
        self.stdout.write(self.render())
        if s.drawn:
            self._say("Draw!")
        else:
            self._say(self.players[s.winner](f"{s.winner} wins!"))
        return s.winner


def main():
    Console().run()
    return 0


if __name__ == "__main__":
    sys.exit(main())
