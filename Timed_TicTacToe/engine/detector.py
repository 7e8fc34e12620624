"""Win/draw detection over rows, columns and both main diagonals."""

from functools import lru_cache
from typing import Sequence, Tuple

try:
    from .errors import InvalidSize
    from .states import CellState, GameState
except ImportError:
    from engine.errors import InvalidSize
    from engine.states import CellState, GameState


@lru_cache(maxsize=32, typed=True)
def winning_lines(size: int) -> Tuple[Tuple[int, ...], ...]:
    """Return the 2*size + 2 index lines: rows, columns, main diagonal, anti-diagonal."""
    if not isinstance(size, int) or isinstance(size, bool) or size < 1:
        raise InvalidSize(size)
    lines = []
    for row in range(size):
        lines.append(tuple(row * size + col for col in range(size)))
    for col in range(size):
        lines.append(tuple(row * size + col for row in range(size)))
    lines.append(tuple(i * size + i for i in range(size)))
    lines.append(tuple(i * size + (size - 1 - i) for i in range(size)))
    return tuple(lines)


def evaluate(board, size: int = None) -> GameState:
    """
    Compute the outcome of a board.

    The first fully owned line wins, scanning rows, then columns, then
    diagonals, with Cross checked before Nought on each line. Otherwise the
    board is a draw when full and in progress when any cell is empty.
    """
    if size is None:
        size = board.size
    cells: Sequence[CellState] = board.cells if hasattr(board, "cells") else board
    if len(cells) != size * size:
        raise ValueError(f"expected {size * size} cells for size {size}, got {len(cells)}")

    for line in winning_lines(size):
        if all(cells[i] is CellState.CROSS for i in line):
            return GameState.CROSS_WIN
        if all(cells[i] is CellState.NOUGHT for i in line):
            return GameState.NOUGHT_WIN

    if any(c is CellState.EMPTY for c in cells):
        return GameState.IN_PROGRESS
    return GameState.DRAW
