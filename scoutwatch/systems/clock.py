"""Millisecond clocks: a monotonic wall clock and a manually-advanced one."""

from __future__ import annotations

import threading
import time
from typing import Callable

Clock = Callable[[], float]


def monotonic_ms() -> float:
    """Wall-clock milliseconds from a monotonic source."""
    return time.monotonic() * 1000.0


class ManualClock:
    """Clock that only moves when told to.

    Headless runs advance it by one tick duration per tick so that cooldowns
    and cache expiry are reproducible.
    """

    __slots__ = ("_now", "_lock")

    def __init__(self, start_ms: float = 0.0) -> None:
        self._now = start_ms
        self._lock = threading.Lock()

    def __call__(self) -> float:
        with self._lock:
            return self._now

    def advance(self, ms: float) -> None:
        with self._lock:
            self._now += ms
