"""Cell, player and game-state enums shared by the engine and its views."""

from enum import Enum


class CellState(Enum):
    EMPTY = 0
    CROSS = 1
    NOUGHT = 2

    @property
    def symbol(self) -> str:
        return _SYMBOLS[self]


class Player(Enum):
    CROSS = 1
    NOUGHT = 2

    @property
    def mark(self) -> CellState:
        return mark_of(self)

    @property
    def other(self) -> "Player":
        return Player.NOUGHT if self is Player.CROSS else Player.CROSS

    @property
    def symbol(self) -> str:
        return self.mark.symbol


class GameState(Enum):
    IN_PROGRESS = "in_progress"
    CROSS_WIN = "cross_win"
    NOUGHT_WIN = "nought_win"
    DRAW = "draw"

    @property
    def is_terminal(self) -> bool:
        return self is not GameState.IN_PROGRESS

    @property
    def winner(self):
        """Winning Player, or None for a draw or an unfinished round."""
        if self is GameState.CROSS_WIN:
            return Player.CROSS
        if self is GameState.NOUGHT_WIN:
            return Player.NOUGHT
        return None

    @staticmethod
    def win_for(player: Player) -> "GameState":
        return GameState.CROSS_WIN if player is Player.CROSS else GameState.NOUGHT_WIN


_SYMBOLS = {CellState.EMPTY: "", CellState.CROSS: "X", CellState.NOUGHT: "O"}


def mark_of(player: Player) -> CellState:
    """Map a player to the cell state it writes on the board."""
    if player is Player.CROSS:
        return CellState.CROSS
    return CellState.NOUGHT
