"""Unit tests for single-board logic: cells, positions, win lines and fixtures."""

import pytest

from ultimate.errors import CellOccupied, MalformedEncoding, OutOfBounds
from ultimate.logic import WIN_LINES, Board, Cell, Position, line_winner


def test_cell_display_and_opponent():
    assert [str(c) for c in Cell] == ["X", "O", "-"]
    assert Cell.X.other() is Cell.O
    assert Cell.O.other() is Cell.X
    with pytest.raises(ValueError):
        Cell.EMPTY.other()


def test_position_shift_is_vector_addition():
    assert Position(2, 0).shift(Position(-1, 1)) == Position(1, 1)
    assert Position(0, 0).shift(Position(-1, -1)) == Position(-1, -1)
    assert not Position(-1, -1).in_bounds()
    assert Position(2, 2).in_bounds()


def test_parse_and_str():
    board = Board.parse("""
        XO-
        -O-
        XO-
    """)
    assert str(board) == "XO-\n-O-\nXO-"
    assert board.cell_at((0, 0)) is Cell.X
    assert board.cell_at(Position(1, 1)) is Cell.O
    assert board.cell_at((2, 2)) is Cell.EMPTY


def test_str_parse_round_trip():
    board = Board()
    for mark, p in [(Cell.X, (0, 0)), (Cell.O, (1, 1)), (Cell.X, (2, 1))]:
        board.play(mark, p)
    assert Board.parse(str(board)) == board


@pytest.mark.parametrize("text", [
    "XO-\n-Z-\nXO-",
    "XO\n-O-\nXO-",
    "XO--\n-O-\nXO-",
    "XO-\n-O-",
    "XO-\n-O-\nXO-\n---",
    "xo-\n-o-\nxo-",
])
def test_parse_rejects_malformed_text(text):
    with pytest.raises(MalformedEncoding):
        Board.parse(text)


@pytest.mark.parametrize("text,winner", [
    ("X-X\nOOO\n-X-", Cell.O),
    ("XOX\nXOO\nX-O", Cell.X),
    ("OXO\nXXX\nOO-", Cell.X),
    ("-XO\nO-X\nXOX", Cell.EMPTY),
    ("OXO\nXOX\nO-X", Cell.O),
    ("XO-\n-XO\nO-X", Cell.X),
])
def test_detect_win(text, winner):
    assert Board.parse(text).winner() is winner


@pytest.mark.parametrize("start,step", WIN_LINES)
def test_every_line_wins_for_either_mark(start, step):
    for mark in (Cell.X, Cell.O):
        board = Board()
        p = start
        for _ in range(3):
            board.cells[p.row][p.col] = mark
            p = p.shift(step)
        assert board.winner() is mark


def test_eight_distinct_lines():
    covered = set()
    for start, step in WIN_LINES:
        covered.add(frozenset([start, start.shift(step), start.shift(step).shift(step)]))
    assert len(covered) == 8


def test_full_board_without_line_reports_empty():
    board = Board.parse("XOX\nXOO\nOXX")
    assert board.winner() is Cell.EMPTY
    assert board.is_full()
    assert board.empty_positions() == []


def test_line_winner_takes_any_accessor():
    owned = {Position(0, 2), Position(1, 1), Position(2, 0)}
    assert line_winner(lambda p: Cell.O if p in owned else Cell.EMPTY) is Cell.O
    assert line_winner(lambda p: Cell.EMPTY) is Cell.EMPTY


def test_play_returns_winner_after_move():
    board = Board.parse("XX-\nOO-\n---")
    assert board.play(Cell.O, (2, 2)) is Cell.EMPTY
    assert board.play(Cell.X, (0, 2)) is Cell.X


def test_play_into_occupied_cell_changes_nothing():
    board = Board.parse("X--\n-O-\n---")
    before = str(board)
    for mark in (Cell.X, Cell.O):
        with pytest.raises(CellOccupied):
            board.play(mark, (0, 0))
        with pytest.raises(CellOccupied):
            board.play(mark, (1, 1))
    assert str(board) == before


@pytest.mark.parametrize("p", [(3, 0), (0, 3), (-1, 0), (0, -1), (5, 5)])
def test_out_of_bounds(p):
    board = Board()
    with pytest.raises(OutOfBounds):
        board.cell_at(p)
    with pytest.raises(OutOfBounds):
        board.play(Cell.X, p)
    assert board == Board()


def test_cannot_play_empty_mark():
    with pytest.raises(ValueError):
        Board().play(Cell.EMPTY, (0, 0))
