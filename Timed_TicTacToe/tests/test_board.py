"""Board container: creation, bounds checks and plain accessors."""

import pytest

from Timed_TicTacToe.Board import Board
from Timed_TicTacToe.engine.errors import IndexOutOfRange, InvalidSize
from Timed_TicTacToe.engine.states import CellState


@pytest.mark.parametrize("size", [1, 3, 4, 5, 7])
def test_create_is_all_empty(size):
    b = Board.create(size)
    assert len(b) == size * size
    assert all(c is CellState.EMPTY for c in b.cells)


@pytest.mark.parametrize("size", [0, -1, 2.5, None, True])
def test_invalid_size_rejected(size):
    with pytest.raises(InvalidSize):
        Board(size)


def test_invalid_size_is_a_value_error():
    with pytest.raises(ValueError):
        Board(0)


def test_get_set_row_major():
    b = Board(size=3)
    b.set(b.index_of(1, 2), CellState.CROSS)
    assert b.get(5) is CellState.CROSS
    assert b.rows()[1] == (CellState.EMPTY, CellState.EMPTY, CellState.CROSS)


@pytest.mark.parametrize("index", [-1, 9, 100])
def test_out_of_range_index(index):
    b = Board(size=3)
    with pytest.raises(IndexOutOfRange):
        b.get(index)
    with pytest.raises(IndexOutOfRange):
        b.set(index, CellState.NOUGHT)


def test_index_of_out_of_range():
    with pytest.raises(IndexError):
        Board(size=3).index_of(3, 0)


def test_clone_and_clear_are_independent():
    b = Board(size=2)
    b.set(0, CellState.NOUGHT)
    copy = b.clone()
    b.clear()
    assert b.empty_count() == 4
    assert copy.get(0) is CellState.NOUGHT
    assert copy.empty_count() == 3


def test_cells_is_a_read_only_view():
    b = Board(size=2)
    cells = b.cells
    assert isinstance(cells, tuple)
    b.set(3, CellState.CROSS)
    assert cells[3] is CellState.EMPTY


def test_bool_is_not_an_index():
    b = Board(size=3)
    assert b.in_bounds(1)
    assert not b.in_bounds(True)
    with pytest.raises(IndexOutOfRange):
        b.get(True)
