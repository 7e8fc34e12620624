"""Text front end: render the board and read moves with a per-turn deadline."""

import queue
import sys
import threading

try:
    from engine.states import CellState, GameState
    from utils import timer
except ImportError:
    from Timed_TicTacToe.engine.states import CellState, GameState
    from Timed_TicTacToe.utils import timer


def render_board(board):
    """Return the board as text rows, '.' for empty cells."""
    lines = []
    for row in board.rows():
        lines.append(" ".join(c.symbol if c is not CellState.EMPTY else "." for c in row))
    return "\n".join(lines)


def result_text(game_state):
    if game_state is GameState.DRAW:
        return "Draw"
    if game_state.winner is not None:
        return f"Winner: {game_state.winner.symbol}"
    return ""


def parse_move(raw, board):
    """Turn 'row col' into a cell index; raises ValueError or IndexError."""
    try:
        row_str, col_str = raw.split()
        row, col = int(row_str), int(col_str)
    except ValueError as exc:
        raise ValueError("Invalid input format; expected two integers") from exc
    return board.index_of(row, col)


# One daemon thread owns stdin so a line typed after a timeout is not lost.
_lines = queue.Queue()
_reader = None


def _start_reader():
    global _reader
    if _reader is None:
        _reader = threading.Thread(target=_pump_stdin, daemon=True)
        _reader.start()


def _pump_stdin():
    for line in sys.stdin:
        _lines.put(line)
    _lines.put(None)


def _take(timeout=None):
    line = _lines.get(timeout=timeout)
    if line is None:
        _lines.put(None)
        raise EOFError("stdin closed")
    return line


def read_line(prompt):
    """Blocking prompt that shares stdin with read_move."""
    print(prompt, end="", flush=True)
    _start_reader()
    return _take().strip()


def read_move(board, deadline=None):
    """Stdin reader with deadline guard (raises TimeoutError on timeout)."""
    prompt = "Enter move as 'row col' (0-indexed): "
    if deadline is None:
        return parse_move(input(prompt).strip(), board)

    remaining = timer.time_remaining(deadline)
    if remaining <= 0:
        raise TimeoutError("Move exceeded allotted time")
    print(prompt, end="", flush=True)
    _start_reader()
    try:
        raw = _take(timeout=remaining)
    except queue.Empty:
        raise TimeoutError("Move exceeded allotted time") from None
    return parse_move(raw.strip(), board)


def play(session, reader=read_move, out=print, rounds=1):
    """
    Drive `session` from a move reader until `rounds` rounds have finished.
    Returns the list of final game states, one per round.
    """
    results = []
    while len(results) < rounds:
        out(render_board(session.board))
        if session.game_state.is_terminal:
            out(result_text(session.game_state))
            out(f"Score  X: {session.cross_wins}  O: {session.nought_wins}")
            results.append(session.game_state)
            if len(results) < rounds:
                session.new_round()
            continue

        out(f"Turn: {session.current_player.symbol}  Time: {session.remaining_time} s")
        seconds_left = session.remaining_time * session.timer.unit_seconds
        try:
            index = reader(session.board, timer.deadline_after(seconds_left))
        except TimeoutError as exc:
            out(f"!! {exc}")
            session.apply_timeout()
            continue
        except (ValueError, IndexError) as exc:
            out(f"!! {exc}")
            session.poll()
            continue

        session.poll()
        if session.game_state.is_terminal:
            continue
        if not session.apply_move(index):
            out("!! Cell already taken. Try again.")
    return results
