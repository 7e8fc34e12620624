"""Timed_TicTacToe package exports."""

from .Board import Board
from .MatchSession import MatchSession, STATE_CHANGED, ROUND_ENDED
from .engine.states import CellState, GameState, Player, mark_of
from .engine.errors import TicTacToeError, InvalidSize, IndexOutOfRange
from .engine.detector import evaluate, winning_lines

# Subpackages for the rule engine, GUI, and helpers
from . import engine, gui, utils

__all__ = [
    "Board",
    "MatchSession",
    "STATE_CHANGED",
    "ROUND_ENDED",
    "CellState",
    "GameState",
    "Player",
    "mark_of",
    "TicTacToeError",
    "InvalidSize",
    "IndexOutOfRange",
    "evaluate",
    "winning_lines",
    "engine",
    "gui",
    "utils",
]
