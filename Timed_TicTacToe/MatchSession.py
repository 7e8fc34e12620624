"""Match session: board, turns, countdown and score across rounds."""

import threading
import time

try:
    from Board import Board
    from engine import referee
    from engine.states import GameState, Player
    from utils import timer
    from utils.logger import log_event
except ImportError:
    from Timed_TicTacToe.Board import Board
    from Timed_TicTacToe.engine import referee
    from Timed_TicTacToe.engine.states import GameState, Player
    from Timed_TicTacToe.utils import timer
    from Timed_TicTacToe.utils.logger import log_event


STATE_CHANGED = "state_changed"
ROUND_ENDED = "round_ended"


class MatchSession:
    """
    One player pair playing rounds on a board of fixed size.

    All commands are serialized behind a per-session lock. Listeners added
    with subscribe() are called as listener(event, session) after each
    observable change and once more with ROUND_ENDED when a round finishes.

    scheduler, when given, is called as scheduler(callback, interval) at the
    start of every turn and must return a handle with cancel(); the session
    cancels the previous handle first, so at most one is live. Without a
    scheduler the host drives the countdown through tick() or poll().
    """

    def __init__(self, board_size=3, turn_seconds=5, tick_seconds=1.0, logger=log_event, scheduler=None, clock=time.monotonic):
        self.board = Board(size=board_size)
        self.timer = timer.TurnTimer(initial=turn_seconds, unit_seconds=tick_seconds, clock=clock)
        self.logger = logger
        self.scheduler = scheduler
        self.current_player = Player.CROSS
        self.game_state = GameState.IN_PROGRESS
        self.wins = {Player.CROSS: 0, Player.NOUGHT: 0}
        self.move_count = 0
        self._handle = None
        self._listeners = []
        self._lock = threading.RLock()
        self._restart_timer()

    # --- read accessors ---

    @property
    def size(self):
        return self.board.size

    @property
    def cells(self):
        return self.board.cells

    @property
    def cross_wins(self):
        return self.wins[Player.CROSS]

    @property
    def nought_wins(self):
        return self.wins[Player.NOUGHT]

    def wins_of(self, player):
        return self.wins[player]

    @property
    def remaining_time(self):
        return self.timer.remaining

    @property
    def timer_running(self):
        return self.timer.running

    def snapshot(self):
        with self._lock:
            return {
                "size": self.board.size,
                "cells": self.board.cells,
                "current_player": self.current_player,
                "game_state": self.game_state,
                "cross_wins": self.cross_wins,
                "nought_wins": self.nought_wins,
                "remaining_time": self.timer.remaining,
            }

    # --- notifications ---

    def subscribe(self, listener):
        """Register listener(event, session); returns a callable that unsubscribes it."""
        self._listeners.append(listener)

        def unsubscribe():
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    def _notify(self, event):
        for listener in list(self._listeners):
            listener(event, self)

    # --- commands ---

    def apply_move(self, index):
        with self._lock:
            before = self.game_state
            if not referee.apply_move(self, index):
                return False
            self._changed(before)
            return True

    def apply_timeout(self):
        with self._lock:
            before = self.game_state
            if not referee.apply_timeout(self):
                return False
            self._changed(before)
            return True

    def tick(self, generation=None):
        """Consume one time unit of the running turn; stale generations are ignored."""
        with self._lock:
            if generation is not None and generation != self.timer.generation:
                return False
            if self.game_state is not GameState.IN_PROGRESS or not self.timer.running:
                return False
            expired = self.timer.tick()
            self._notify(STATE_CHANGED)
            if expired:
                self.apply_timeout()
            return True

    def poll(self):
        """Advance the countdown by wall-clock (or injected clock) time; no-op under a scheduler."""
        with self._lock:
            if self.scheduler is not None:
                return False
            if self.game_state is not GameState.IN_PROGRESS or not self.timer.running:
                return False
            before = self.timer.remaining
            expired = self.timer.poll()
            if self.timer.remaining != before:
                self._notify(STATE_CHANGED)
            if expired:
                self.apply_timeout()
            return self.timer.remaining != before

    def new_round(self):
        """Reset: empty board, Cross to move, fresh timer; scores kept."""
        with self._lock:
            self.board.clear()
            self._start_round()
            self.logger(f"New round on {self.board.size}x{self.board.size} (X {self.cross_wins} : O {self.nought_wins})")
            self._notify(STATE_CHANGED)

    def new_match(self):
        """New Game: a new round with both win counters zeroed."""
        with self._lock:
            self.board.clear()
            self._reset_scores()
            self._start_round()
            self.logger(f"New match on {self.board.size}x{self.board.size}")
            self._notify(STATE_CHANGED)

    def change_board_size(self, new_size):
        with self._lock:
            board = Board(size=new_size)
            self.board = board
            self._reset_scores()
            self._start_round()
            self.logger(f"Board size changed to {new_size}x{new_size}")
            self._notify(STATE_CHANGED)

    def close(self):
        """Cancel any scheduled countdown; the session stays readable."""
        with self._lock:
            self.timer.stop()
            self._cancel_handle()

    # --- internals used by the referee ---

    def _start_round(self):
        self.current_player = Player.CROSS
        self.game_state = GameState.IN_PROGRESS
        self.move_count = 0
        self._restart_timer()

    def _reset_scores(self):
        for player in self.wins:
            self.wins[player] = 0

    def _restart_timer(self):
        self._cancel_handle()
        generation = self.timer.start()
        if self.scheduler is not None:
            self._handle = self.scheduler(lambda: self.tick(generation), self.timer.unit_seconds)

    def _stop_timer(self):
        self.timer.stop()
        self._cancel_handle()

    def _cancel_handle(self):
        if self._handle is not None:
            self._handle.cancel()
            self._handle = None

    def _changed(self, before):
        self._notify(STATE_CHANGED)
        if before is GameState.IN_PROGRESS and self.game_state.is_terminal:
            self._notify(ROUND_ENDED)
