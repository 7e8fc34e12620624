"""Board state container: row-major cells for an N x N grid."""

try:
    from engine.errors import IndexOutOfRange, InvalidSize
    from engine.states import CellState
except ImportError:
    from Timed_TicTacToe.engine.errors import IndexOutOfRange, InvalidSize
    from Timed_TicTacToe.engine.states import CellState


class Board:
    def __init__(self, size=3):
        # bool is an int subclass but never a meaningful size
        if not isinstance(size, int) or isinstance(size, bool) or size < 1:
            raise InvalidSize(size)
        self.size = size
        self._cells = [CellState.EMPTY] * (size * size)

    @classmethod
    def create(cls, size):
        return cls(size)

    def __len__(self):
        return len(self._cells)

    def __iter__(self):
        return iter(self._cells)

    def __repr__(self):
        return f"Board(size={self.size}, cells={self.cells!r})"

    @property
    def cells(self):
        return tuple(self._cells)

    def in_bounds(self, index):
        return isinstance(index, int) and not isinstance(index, bool) and 0 <= index < len(self._cells)

    def index_of(self, row, col):
        if not (0 <= row < self.size and 0 <= col < self.size):
            raise IndexOutOfRange((row, col), len(self._cells))
        return row * self.size + col

    def get(self, index):
        self._check(index)
        return self._cells[index]

    def set(self, index, state):
        """Write a cell; raise IndexOutOfRange for a bad index."""
        if not isinstance(state, CellState):
            raise ValueError(f"state must be a CellState, got {state!r}")
        self._check(index)
        self._cells[index] = state

    def is_empty(self, index):
        return self.get(index) is CellState.EMPTY

    def empty_count(self):
        return sum(1 for c in self._cells if c is CellState.EMPTY)

    def clear(self):
        self._cells = [CellState.EMPTY] * (self.size * self.size)

    def clone(self):
        new_board = Board(self.size)
        new_board._cells = self._cells[:]
        return new_board

    def rows(self):
        n = self.size
        return [tuple(self._cells[r * n:(r + 1) * n]) for r in range(n)]

    def _check(self, index):
        if not self.in_bounds(index):
            raise IndexOutOfRange(index, len(self._cells))
