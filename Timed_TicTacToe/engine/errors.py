"""Exceptions for caller bugs; illegal moves are no-ops, not errors."""


class TicTacToeError(Exception):
    pass


class InvalidSize(TicTacToeError, ValueError):
    def __init__(self, size):
        super().__init__(f"board size must be an integer >= 1, got {size!r}")
        self.size = size


class IndexOutOfRange(TicTacToeError, IndexError):
    def __init__(self, index, cell_count):
        super().__init__(f"cell index {index!r} out of range for {cell_count} cells")
        self.index = index
        self.cell_count = cell_count
