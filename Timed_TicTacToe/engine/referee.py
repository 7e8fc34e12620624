"""Turn control: move application, turn hand-over and timeout forfeiture."""

try:
    from . import detector
    from .states import CellState, GameState
except ImportError:
    from engine import detector
    from engine.states import CellState, GameState


def can_move(board, game_state, index):
    """
    True when the round is running and the cell is free.
    Raises IndexOutOfRange for a bad index; a False result is not an error.
    """
    if board.get(index) is not CellState.EMPTY:
        return False
    return game_state is GameState.IN_PROGRESS


def can_forfeit(game_state):
    return game_state is GameState.IN_PROGRESS


def apply_move(session, index):
    """Place the current player's mark; returns False when the move is ignored."""
    if not can_move(session.board, session.game_state, index):
        return False

    player = session.current_player
    session.board.set(index, player.mark)
    session.logger(f"Move {session.move_count + 1}: {player.symbol} -> {index}")
    session.move_count += 1

    result = detector.evaluate(session.board, session.board.size)
    if result is GameState.IN_PROGRESS:
        session.current_player = player.other
        session._restart_timer()
    else:
        _conclude(session, result)
    return True


def apply_timeout(session):
    """The player to move forfeits; a no-op once the round is over."""
    if not can_forfeit(session.game_state):
        return False
    loser = session.current_player
    session.timer.expire()
    session.logger(f"Timeout: {loser.symbol} forfeits the round")
    _conclude(session, GameState.win_for(loser.other))
    return True


def _conclude(session, result):
    """Single exit from IN_PROGRESS; the only place a win counter moves."""
    if session.game_state is not GameState.IN_PROGRESS or not result.is_terminal:
        return
    session.game_state = result
    session._stop_timer()
    winner = result.winner
    if winner is None:
        session.logger("Result: Draw (board full)")
    else:
        session.wins[winner] += 1
        session.logger(f"Winner: {winner.symbol}")
