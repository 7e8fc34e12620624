"""Helpers for enforcing per-turn time limits."""

import threading
import time


def deadline_after(seconds, clock=time.time):
    return clock() + seconds


def time_remaining(deadline, clock=time.time):
    return deadline - clock()


class TurnTimer:
    """
    Countdown for the current turn, measured in whole time units.

    The timer holds no thread of its own. It advances when the owner calls
    tick() (one unit) or poll() (every unit elapsed on `clock` since the last
    advance). Each start() or stop() bumps `generation`, so callbacks bound to
    an earlier turn can be recognised and dropped.
    """

    def __init__(self, initial=5, unit_seconds=1.0, clock=time.monotonic):
        if initial < 1:
            raise ValueError("initial must be at least one time unit")
        if unit_seconds <= 0:
            raise ValueError("unit_seconds must be positive")
        self.initial = initial
        self.unit_seconds = unit_seconds
        self.clock = clock
        self.remaining = initial
        self.running = False
        self.generation = 0
        self._mark = None

    @property
    def expired(self):
        return self.remaining == 0

    def start(self):
        self.remaining = self.initial
        self.running = True
        self.generation += 1
        self._mark = self.clock()
        return self.generation

    def expire(self):
        """Run the countdown out at once, e.g. when the host reports expiry itself."""
        self.remaining = 0
        self.stop()

    def stop(self):
        if self.running:
            self.running = False
            self.generation += 1
        self._mark = None

    def tick(self):
        """Consume one unit. Returns True only on the tick that reaches zero."""
        if not self.running:
            return False
        self.remaining -= 1
        if self._mark is not None:
            self._mark += self.unit_seconds
        if self.remaining <= 0:
            self.remaining = 0
            self.running = False
            self._mark = None
            return True
        return False

    def poll(self):
        """Consume every whole unit elapsed since the last advance."""
        if not self.running or self._mark is None:
            return False
        elapsed = self.clock() - self._mark
        while self.running and elapsed >= self.unit_seconds:
            elapsed -= self.unit_seconds
            if self.tick():
                return True
        return False


class RepeatingTimer(threading.Thread):
    """Daemon thread calling `callback` every `interval` seconds until cancelled."""

    def __init__(self, interval, callback):
        super().__init__(daemon=True)
        self.interval = interval
        self.callback = callback
        self._cancelled = threading.Event()

    def run(self):
        while not self._cancelled.wait(self.interval):
            self.callback()

    def cancel(self):
        self._cancelled.set()

    @property
    def cancelled(self):
        return self._cancelled.is_set()


def thread_scheduler(callback, interval):
    """Default background scheduler: start a RepeatingTimer and return it as the handle."""
    handle = RepeatingTimer(interval, callback)
    handle.start()
    return handle
