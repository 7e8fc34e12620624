"""Match session: rounds, resets, notifications and timer ownership."""

import time

import pytest

from Timed_TicTacToe.MatchSession import MatchSession, ROUND_ENDED, STATE_CHANGED
from Timed_TicTacToe.engine.errors import InvalidSize
from Timed_TicTacToe.engine.states import CellState, GameState, Player
from Timed_TicTacToe.utils import timer
from Timed_TicTacToe.utils.logger import quiet


class FakeClock:
    def __init__(self):
        self.now = 0.0

    def __call__(self):
        return self.now

    def advance(self, seconds):
        self.now += seconds


class FakeHandle:
    def __init__(self, callback, interval):
        self.callback = callback
        self.interval = interval
        self.cancelled = False

    def cancel(self):
        self.cancelled = True

    def fire(self):
        self.callback()


class FakeScheduler:
    """Records every scheduled countdown instead of starting threads."""

    def __init__(self):
        self.handles = []

    def __call__(self, callback, interval):
        handle = FakeHandle(callback, interval)
        self.handles.append(handle)
        return handle

    @property
    def live(self):
        return [h for h in self.handles if not h.cancelled]


def make_session(**kwargs):
    kwargs.setdefault("logger", quiet)
    return MatchSession(**kwargs)


def play(session, moves):
    for index in moves:
        session.apply_move(index)


def test_initial_state():
    s = make_session(board_size=4)
    assert s.size == 4
    assert s.cells == (CellState.EMPTY,) * 16
    assert s.current_player is Player.CROSS
    assert s.game_state is GameState.IN_PROGRESS
    assert (s.cross_wins, s.nought_wins) == (0, 0)
    assert s.remaining_time == 5
    assert s.timer_running


def test_invalid_board_size():
    with pytest.raises(InvalidSize):
        make_session(board_size=0)


def test_left_column_win_counts_once():
    s = make_session()
    play(s, [0, 1, 3, 4, 6])
    assert s.game_state is GameState.CROSS_WIN
    assert s.wins_of(Player.CROSS) == 1
    play(s, [2, 5])
    assert s.cross_wins == 1
    assert s.cells[2] is CellState.EMPTY


@pytest.mark.parametrize("moves", [[], [4], [0, 1, 3, 4, 6], [0, 1, 2, 4, 3, 5, 7, 6, 8]])
def test_new_round_clears_board_and_keeps_scores(moves):
    s = make_session()
    play(s, moves)
    scores = (s.cross_wins, s.nought_wins)
    s.new_round()
    assert all(c is CellState.EMPTY for c in s.cells)
    assert s.game_state is GameState.IN_PROGRESS
    assert s.current_player is Player.CROSS
    assert (s.cross_wins, s.nought_wins) == scores
    assert s.remaining_time == 5 and s.timer_running


def test_new_match_zeroes_scores():
    s = make_session()
    play(s, [0, 1, 3, 4, 6])
    s.new_match()
    assert (s.cross_wins, s.nought_wins) == (0, 0)
    assert s.game_state is GameState.IN_PROGRESS
    assert s.move_count == 0


def test_change_board_size_rebuilds_board():
    s = make_session()
    play(s, [0, 1, 3, 4, 6])
    s.change_board_size(5)
    assert s.size == 5
    assert len(s.cells) == 25
    assert s.cross_wins == 0
    assert s.current_player is Player.CROSS


def test_change_board_size_invalid_leaves_session_alone():
    s = make_session()
    play(s, [0, 1, 3, 4, 6])
    with pytest.raises(InvalidSize):
        s.change_board_size(0)
    assert s.size == 3
    assert s.cross_wins == 1


def test_countdown_forfeit_through_ticks():
    s = make_session()
    for _ in range(4):
        s.tick()
    assert s.remaining_time == 1
    assert s.game_state is GameState.IN_PROGRESS
    s.tick()
    assert s.game_state is GameState.NOUGHT_WIN
    assert s.nought_wins == 1
    assert s.current_player is Player.CROSS
    assert s.apply_timeout() is False
    assert s.tick() is False
    assert s.nought_wins == 1


def test_timeout_with_cross_to_move_gives_nought_one_win():
    s = make_session()
    assert s.apply_timeout() is True
    assert s.game_state is GameState.NOUGHT_WIN
    assert s.nought_wins == 1
    assert s.current_player is Player.CROSS
    assert s.apply_timeout() is False
    assert (s.cross_wins, s.nought_wins) == (0, 1)


def test_host_timeout_mid_countdown():
    s = make_session()
    for _ in range(4):
        s.tick()
    assert s.apply_timeout() is True
    assert s.game_state is GameState.NOUGHT_WIN
    assert s.remaining_time == 0
    s.tick()
    assert s.nought_wins == 1


def test_move_resets_countdown_for_next_player():
    s = make_session()
    s.tick()
    s.tick()
    s.apply_move(0)
    assert s.remaining_time == 5
    for _ in range(5):
        s.tick()
    assert s.game_state is GameState.CROSS_WIN


def test_poll_with_fake_clock():
    clock = FakeClock()
    s = make_session(clock=clock)
    clock.advance(2.5)
    assert s.poll() is True
    assert s.remaining_time == 3
    clock.advance(10)
    s.poll()
    assert s.game_state is GameState.NOUGHT_WIN
    assert s.nought_wins == 1
    clock.advance(10)
    assert s.poll() is False
    assert s.nought_wins == 1


def test_stale_generation_tick_is_ignored():
    s = make_session()
    old = s.timer.generation
    s.apply_move(0)
    assert s.tick(generation=old) is False
    assert s.remaining_time == 5
    assert s.tick(generation=s.timer.generation) is True
    assert s.remaining_time == 4


def test_scheduler_keeps_one_live_timer():
    sched = FakeScheduler()
    s = make_session(scheduler=sched)
    assert len(sched.live) == 1
    play(s, [0, 1, 2])
    assert len(sched.handles) == 4
    assert len(sched.live) == 1
    s.new_round()
    s.new_match()
    s.change_board_size(4)
    assert len(sched.live) == 1
    assert sched.live[0].interval == 1.0


def test_scheduler_cancelled_on_round_end_and_close():
    sched = FakeScheduler()
    s = make_session(scheduler=sched)
    play(s, [0, 1, 3, 4, 6])
    assert sched.live == []
    s.new_round()
    s.close()
    assert sched.live == []
    assert not s.timer_running


def test_late_fire_of_cancelled_handle_is_harmless():
    sched = FakeScheduler()
    s = make_session(scheduler=sched)
    first = sched.handles[0]
    s.apply_move(4)
    for _ in range(10):
        first.fire()
    assert s.remaining_time == 5
    assert s.game_state is GameState.IN_PROGRESS


def test_scheduled_countdown_forfeits():
    sched = FakeScheduler()
    s = make_session(scheduler=sched, turn_seconds=3)
    s.apply_move(4)
    handle = sched.live[0]
    for _ in range(3):
        handle.fire()
    assert s.game_state is GameState.CROSS_WIN
    assert s.cross_wins == 1
    assert sched.live == []
    handle.fire()
    assert s.cross_wins == 1


def test_win_and_timeout_race_counts_once():
    s = make_session()
    play(s, [0, 1, 3, 4])
    for _ in range(4):
        s.tick()
    s.apply_move(6)
    s.tick()
    s.apply_timeout()
    assert s.game_state is GameState.CROSS_WIN
    assert (s.cross_wins, s.nought_wins) == (1, 0)


def test_timeout_then_late_move_counts_once():
    s = make_session()
    for _ in range(5):
        s.tick()
    assert s.apply_move(4) is False
    assert s.cells[4] is CellState.EMPTY
    assert (s.cross_wins, s.nought_wins) == (0, 1)


def test_notifications():
    s = make_session()
    events = []
    unsubscribe = s.subscribe(lambda event, session: events.append((event, session.game_state)))
    s.apply_move(0)
    assert events == [(STATE_CHANGED, GameState.IN_PROGRESS)]
    s.apply_move(0)
    assert len(events) == 1
    play(s, [1, 3, 4, 6])
    assert events[-2:] == [(STATE_CHANGED, GameState.CROSS_WIN), (ROUND_ENDED, GameState.CROSS_WIN)]
    assert [e for e, _ in events].count(ROUND_ENDED) == 1
    unsubscribe()
    s.new_round()
    assert events[-1] == (ROUND_ENDED, GameState.CROSS_WIN)


def test_round_ended_on_timeout():
    s = make_session(turn_seconds=1)
    events = []
    s.subscribe(lambda event, session: events.append(event))
    s.tick()
    assert events.count(ROUND_ENDED) == 1
    assert events[-1] == ROUND_ENDED


def test_logger_receives_round_events():
    lines = []
    s = MatchSession(logger=lines.append)
    play(s, [0, 1, 3, 4, 6])
    assert any("Winner: X" in line for line in lines)
    assert any(line.startswith("Move 5: X") for line in lines)


def test_snapshot():
    s = make_session(board_size=2)
    s.apply_move(3)
    snap = s.snapshot()
    assert snap["size"] == 2
    assert snap["cells"][3] is CellState.CROSS
    assert snap["current_player"] is Player.NOUGHT
    assert snap["remaining_time"] == 5


def test_size_one_board_first_move_wins():
    s = make_session(board_size=1)
    s.apply_move(0)
    assert s.game_state is GameState.CROSS_WIN
    assert s.cross_wins == 1


def test_host_timeout_cancels_scheduled_countdown():
    sched = FakeScheduler()
    s = make_session(scheduler=sched)
    s.apply_timeout()
    assert sched.live == []
    assert s.nought_wins == 1


def test_poll_is_idle_under_a_scheduler():
    clock = FakeClock()
    s = make_session(scheduler=FakeScheduler(), clock=clock)
    clock.advance(30)
    assert s.poll() is False
    assert s.remaining_time == 5
    assert s.game_state is GameState.IN_PROGRESS


class RecordingThreadScheduler:
    """Starts real countdown threads and keeps them for inspection."""

    def __init__(self):
        self.handles = []

    def __call__(self, callback, interval):
        handle = timer.thread_scheduler(callback, interval)
        self.handles.append(handle)
        return handle


def test_background_thread_countdown_forfeits_once():
    sched = RecordingThreadScheduler()
    s = make_session(turn_seconds=3, tick_seconds=0.01, scheduler=sched)
    deadline = time.monotonic() + 5.0
    while s.game_state is GameState.IN_PROGRESS and time.monotonic() < deadline:
        time.sleep(0.005)
    assert s.game_state is GameState.NOUGHT_WIN
    assert (s.cross_wins, s.nought_wins) == (0, 1)
    assert s.remaining_time == 0
    for handle in sched.handles:
        handle.join(1.0)
        assert not handle.is_alive()


def test_background_thread_restarts_per_turn_and_stops_on_close():
    sched = RecordingThreadScheduler()
    s = make_session(turn_seconds=50, tick_seconds=0.01, scheduler=sched)
    s.apply_move(4)
    s.apply_move(0)
    s.close()
    assert len(sched.handles) == 3
    for handle in sched.handles:
        handle.join(1.0)
        assert handle.cancelled
        assert not handle.is_alive()
    assert s.game_state is GameState.IN_PROGRESS
    assert s.nought_wins == 0 and s.cross_wins == 0
