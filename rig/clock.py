from __future__ import annotations
"""Manually advanced clock for simulations and tests."""

from threading import Lock


class ManualClock:
    """Callable returning unix seconds; only moves when told to."""

    def __init__(self, start: int = 1_700_000_000) -> None:
        self._now = int(start)
        self._lock = Lock()

    def __call__(self) -> int:
        return self._now

    def advance(self, seconds: int) -> int:
        if seconds < 0:
            raise ValueError("clock cannot move backwards")
        with self._lock:
            self._now += int(seconds)
            return self._now

    def set(self, ts: int) -> None:
        with self._lock:
            if ts < self._now:
                raise ValueError("clock cannot move backwards")
            self._now = int(ts)


__all__ = ["ManualClock"]
