"""Timestamped console logging for sessions and front ends."""

import datetime
import sys


def log_event(message, stream=None):
    timestamp = datetime.datetime.now().strftime("%H:%M:%S")
    print(f"[{timestamp}] {message}", file=stream or sys.stdout)


def quiet(message):
    """Logger that drops every message (tests, embedded hosts)."""
