"""Load and validate YAML match settings."""

from pathlib import Path

import yaml

PROJECT_DIR = Path(__file__).resolve().parent.parent
DEFAULT_SETTINGS_PATH = "config/settings.yaml"
THEMES = ("light", "dark")

DEFAULTS = {
    "board_size": 3,
    "board_sizes": [3, 4, 5],
    "turn_seconds": 5,
    "tick_seconds": 1.0,
    "warning_seconds": 3,
    "theme": "light",
    "window_size": 560,
}


def resolve_project_path(path: str | Path) -> Path:
    """Resolve a package-relative path when invoked from outside `Timed_TicTacToe/`."""
    p = Path(path)
    if p.is_absolute() or p.exists():
        return p
    candidate = PROJECT_DIR / p
    return candidate if candidate.exists() else p


def load_settings(path=DEFAULT_SETTINGS_PATH):
    """Read settings YAML merged over DEFAULTS. A missing file yields the defaults."""
    path = resolve_project_path(path)
    raw = {}
    if path.exists():
        with open(path, "r", encoding="utf-8") as f:
            raw = yaml.safe_load(f) or {}
    if not isinstance(raw, dict):
        raise ValueError(f"settings file {path} must contain a mapping")
    settings = dict(DEFAULTS)
    settings.update(raw)
    validate(settings)
    return settings


def validate(settings):
    sizes = settings["board_sizes"]
    if not sizes or any(not isinstance(s, int) or s < 1 for s in sizes):
        raise ValueError(f"board_sizes must be a non-empty list of integers >= 1, got {sizes!r}")
    size = settings["board_size"]
    if not isinstance(size, int) or size < 1:
        raise ValueError(f"board_size must be an integer >= 1, got {size!r}")
    if not isinstance(settings["turn_seconds"], int) or settings["turn_seconds"] < 1:
        raise ValueError("turn_seconds must be a positive integer")
    if settings["tick_seconds"] <= 0:
        raise ValueError("tick_seconds must be positive")
    if settings["warning_seconds"] < 0:
        raise ValueError("warning_seconds must not be negative")
    if settings["theme"] not in THEMES:
        raise ValueError(f"theme must be one of {THEMES}, got {settings['theme']!r}")


def apply_overrides(settings, args):
    """Fold parsed CLI options over loaded settings (None means not given)."""
    merged = dict(settings)
    if getattr(args, "board_size", None) is not None:
        merged["board_size"] = args.board_size
    if getattr(args, "timeout", None) is not None:
        merged["turn_seconds"] = args.timeout
    if getattr(args, "theme", None) is not None:
        merged["theme"] = args.theme
    validate(merged)
    return merged
