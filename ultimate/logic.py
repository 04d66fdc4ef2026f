from enum import Enum
from typing import NamedTuple

from .errors import (
    CellOccupied, GameAlreadyDecided, GameOver, IllegalBoardChoice,
    InvariantViolation, MalformedEncoding, OutOfBounds,
)

SIZE = 3


class Cell(Enum):
    X = "X"
    O = "O"
    EMPTY = "-"

    def __str__(self):
        return self.value

    @classmethod
    def parse(cls, ch):
        try:
            return cls(ch)
        except ValueError:
            raise MalformedEncoding(f"Invalid character in string: {ch!r}") from None

    def other(self):
        if self is Cell.EMPTY:
            raise ValueError("Empty has no opponent")
        return Cell.O if self is Cell.X else Cell.X


class Position(NamedTuple):
    row: int
    col: int

    def shift(self, vector):
        return Position(self.row + vector.row, self.col + vector.col)

    def in_bounds(self):
        return 0 <= self.row < SIZE and 0 <= self.col < SIZE


ALL_POSITIONS = [Position(r, c) for r in range(SIZE) for c in range(SIZE)]

# (start, direction): rows, columns, then the two diagonals
WIN_LINES = (
    [(Position(r, 0), Position(0, 1)) for r in range(SIZE)]
    + [(Position(0, c), Position(1, 0)) for c in range(SIZE)]
    + [(Position(0, 0), Position(1, 1)), (Position(SIZE - 1, 0), Position(-1, 1))]
)


def _checked(p) -> Position:
    p = Position(*p)
    if not p.in_bounds():
        raise OutOfBounds(p)
    return p


def line_winner(cell_at) -> Cell:
    """Scan every win line through ``cell_at`` and return the first owner found.

    ``cell_at`` maps a Position to a Cell, so the same scan serves a single
    board and the meta-board alike.
    """
    for start, step in WIN_LINES:
        owner = cell_at(start)
        if owner is Cell.EMPTY:
            continue
        pos = start
        for _ in range(SIZE - 1):
            pos = pos.shift(step)
            if cell_at(pos) is not owner:
                break
        else:
            return owner
    return Cell.EMPTY


class Board:
    def __init__(self):
        self.cells = [[Cell.EMPTY] * SIZE for _ in range(SIZE)]

    def cell_at(self, p) -> Cell:
        p = _checked(p)
        return self.cells[p.row][p.col]

    def play(self, mark: Cell, p) -> Cell:
        if mark is Cell.EMPTY:
            raise ValueError("Cannot play an empty mark")
        p = _checked(p)
        if self.cells[p.row][p.col] is not Cell.EMPTY:
            raise CellOccupied(p)
        self.cells[p.row][p.col] = mark
        return self.winner()

    # Recomputed on every call: the cells are the only state.
    def winner(self) -> Cell:
        return line_winner(self.cell_at)

    def is_full(self):
        return all(cell is not Cell.EMPTY for row in self.cells for cell in row)

    def empty_positions(self):
        return [p for p in ALL_POSITIONS if self.cells[p.row][p.col] is Cell.EMPTY]

    @classmethod
    def parse(cls, text):
        """Build a board from three lines of ``X``, ``O`` and ``-``::

            XXO
            OO-
            OXX

        Blank lines and indentation are ignored, so fixtures can be written
        as indented triple-quoted strings.
        """
        rows = [line.strip() for line in text.strip().splitlines() if line.strip()]
        if len(rows) != SIZE:
            raise MalformedEncoding(f"Expected {SIZE} rows, got {len(rows)}")
        board = cls()
        for r, row in enumerate(rows):
            if len(row) != SIZE:
                raise MalformedEncoding(f"Row {r} must be {SIZE} characters wide: {row!r}")
            board.cells[r] = [Cell.parse(ch) for ch in row]
        return board

    def __str__(self):
        return "\n".join("".join(str(cell) for cell in row) for row in self.cells)

    def __eq__(self, other):
        if not isinstance(other, Board):
            return NotImplemented
        return self.cells == other.cells

    def __repr__(self):
        return f"Board.parse({str(self)!r})"


_BORDER = "+-----++-----++-----+"


class MetaGame:
    def __init__(self):
        self.boards = [[Board() for _ in range(SIZE)] for _ in range(SIZE)]
        self.meta = Board()   # cell P = winner of sub-board P

    @classmethod
    def from_boards(cls, boards):
        """Build a game from copies of ``{outer position: Board}``, deriving the meta-board."""
        game = cls()
        for outer, board in boards.items():
            outer = _checked(outer)
            board = Board.parse(str(board))
            game.boards[outer.row][outer.col] = board
            won_by = board.winner()
            if won_by is not Cell.EMPTY:
                game.meta.play(won_by, outer)
        return game

    def cell_at(self, p) -> Cell:
        return self.meta.cell_at(p)

    def board_at(self, p) -> Board:
        p = _checked(p)
        return self.boards[p.row][p.col]

    def winner(self) -> Cell:
        return self.meta.winner()

    def play(self, outer, inner, mark: Cell) -> Cell:
        outer = _checked(outer)
        won_by = self.meta.cell_at(outer)
        if won_by is not Cell.EMPTY:
            raise GameAlreadyDecided(outer, won_by)
        if self.board_at(outer).play(mark, inner) is not Cell.EMPTY:
            try:
                self.meta.play(mark, outer)
            except CellOccupied as e:
                raise InvariantViolation(
                    f"Precondition failed- should not have been able to play inner game {outer}"
                ) from e
        return self.meta.winner()

    def is_open(self, p):
        return self.cell_at(p) is Cell.EMPTY and not self.board_at(p).is_full()

    def legal_moves(self, forced=None):
        outers = ALL_POSITIONS if forced is None else [_checked(forced)]
        return [(outer, inner)
                for outer in outers if self.is_open(outer)
                for inner in self.board_at(outer).empty_positions()]

    def render(self, x_fmt=str, o_fmt=str, plain_fmt=str):
        """Draw all nine boards; cells of a won board go through that winner's formatter."""
        lines = [""]
        for outer_row in range(SIZE):
            lines.append(_BORDER)
            for inner_row in range(SIZE):
                chunks = []
                for outer_col in range(SIZE):
                    fmt = {Cell.X: x_fmt, Cell.O: o_fmt}.get(
                        self.meta.cells[outer_row][outer_col], plain_fmt)
                    row = self.boards[outer_row][outer_col].cells[inner_row]
                    chunks.append("".join(fmt(str(cell)) for cell in row))
                lines.append("| " + " || ".join(chunks) + " |")
        lines.append(_BORDER)
        return "\n".join(lines) + "\n"

    def __str__(self):
        return self.render()


def _mark(cell):
    return None if cell is Cell.EMPTY else cell.value


class GameSession:
    """Whose turn it is and which board they are sent to.

    ``forced_board`` is None when the player may pick any open board.
    The session is decided once someone wins the meta-board, or drawn
    once no legal move is left anywhere.
    """

    def __init__(self, first=Cell.O):
        self.game = MetaGame()
        self.current_player = first
        self.forced_board = None
        self.winner = Cell.EMPTY
        self.drawn = False

    @property
    def decided(self):
        return self.winner is not Cell.EMPTY or self.drawn

    def submit(self, outer, inner) -> Cell:
        if self.decided:
            raise GameOver(_mark(self.winner))
        outer, inner = _checked(outer), Position(*inner)
        if self.forced_board is not None and outer != self.forced_board:
            raise IllegalBoardChoice(self.forced_board, outer)

        winner = self.game.play(outer, inner, self.current_player)
        if winner is not Cell.EMPTY:
            self.winner = winner
            self.forced_board = None
            return winner

        # a won or full board can't be played in, so it frees the choice
        self.forced_board = inner if self.game.is_open(inner) else None
        self.current_player = self.current_player.other()
        if not self.legal_moves():
            self.drawn = True
        return winner

    def legal_moves(self):
        if self.decided:
            return []
        return self.game.legal_moves(self.forced_board)

    def cell_at(self, outer, inner) -> Cell:
        return self.game.board_at(outer).cell_at(inner)

    def board_winner(self, outer) -> Cell:
        return self.game.cell_at(outer)

    def state(self):
        winners = []
        for outer in ALL_POSITIONS:
            won_by = self.game.cell_at(outer)
            if won_by is Cell.EMPTY and self.game.board_at(outer).is_full():
                winners.append("D")
            else:
                winners.append(_mark(won_by))
        return {
            "boards": [[_mark(self.cell_at(outer, inner)) for inner in ALL_POSITIONS]
                       for outer in ALL_POSITIONS],
            "winners": winners,
            "player": self.current_player.value,
            "forced": list(self.forced_board) if self.forced_board is not None else None,
            "gameWinner": "D" if self.drawn else _mark(self.winner),
            "decided": self.decided,
        }
