"""CLI options for board size, turn time, front end and config path."""


def parse_args(argv=None):
    import argparse

    parser = argparse.ArgumentParser(description="Timed Tic-Tac-Toe (N x N, per-turn countdown)")
    parser.add_argument("--board-size", type=int, help="Board size N for an N x N grid (default from settings)")
    parser.add_argument("--timeout", type=int, help="Time units per turn (default from settings)")
    parser.add_argument("--settings", default="config/settings.yaml", help="Path to settings YAML")
    parser.add_argument("--gui", action="store_true", help="Open the pygame window instead of the text console")
    parser.add_argument("--theme", choices=["light", "dark"], default=None, help="Colour theme for the pygame window")
    return parser.parse_args(argv)
