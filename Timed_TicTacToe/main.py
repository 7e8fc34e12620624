"""Entry point for Timed Tic-Tac-Toe. Load config, pick a front end, start a session."""

try:
    from utils.cli import parse_args
    from utils.logger import log_event
    from utils.settings import apply_overrides, load_settings
    from utils import timer
    from MatchSession import MatchSession
    import Console
except ImportError:
    from Timed_TicTacToe.utils.cli import parse_args
    from Timed_TicTacToe.utils.logger import log_event
    from Timed_TicTacToe.utils.settings import apply_overrides, load_settings
    from Timed_TicTacToe.utils import timer
    from Timed_TicTacToe.MatchSession import MatchSession
    from Timed_TicTacToe import Console


def main(argv=None):
    args = parse_args(argv)
    settings = apply_overrides(load_settings(args.settings), args)

    if args.gui:
        try:
            from gui.pygame_view import PygameView
        except ImportError:
            from Timed_TicTacToe.gui.pygame_view import PygameView

        PygameView(settings, logger=log_event).run()
        return

    session = MatchSession(
        board_size=settings["board_size"],
        turn_seconds=settings["turn_seconds"],
        tick_seconds=settings["tick_seconds"],
        logger=log_event,
        scheduler=timer.thread_scheduler,
    )
    try:
        while True:
            Console.play(session)
            again = Console.read_line("Next round [r], new game [g], quit [anything else]: ").strip().lower()
            if again == "r":
                session.new_round()
            elif again == "g":
                session.new_match()
            else:
                break
    except (EOFError, KeyboardInterrupt):
        print()
    finally:
        session.close()
    print(f"Final score  X: {session.cross_wins}  O: {session.nought_wins}")


if __name__ == "__main__":
    main()
