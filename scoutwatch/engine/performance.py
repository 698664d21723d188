"""Aggregate counters for periodic operational reporting."""

from __future__ import annotations

import threading
from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class PerformanceStats:
    updates: int
    errors: int
    last_process_ms: float
    avg_process_ms: float

    def to_dict(self) -> dict:
        return {
            "updates": self.updates,
            "errors": self.errors,
            "last_process_ms": round(self.last_process_ms, 3),
            "avg_process_ms": round(self.avg_process_ms, 3),
        }


class PerformanceMonitor:
    """Thread-safe tick/error counters with a running mean of scan duration."""

    __slots__ = ("_lock", "_updates", "_errors", "_last_ms", "_total_ms")

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._updates = 0
        self._errors = 0
        self._last_ms = 0.0
        self._total_ms = 0.0

    def record_update(self, duration_ms: float) -> None:
        with self._lock:
            self._updates += 1
            self._last_ms = duration_ms
            self._total_ms += duration_ms

    def record_error(self) -> None:
        with self._lock:
            self._errors += 1

    @property
    def errors(self) -> int:
        with self._lock:
            return self._errors

    @property
    def updates(self) -> int:
        with self._lock:
            return self._updates

    def stats(self) -> PerformanceStats:
        with self._lock:
            avg = self._total_ms / self._updates if self._updates else 0.0
            return PerformanceStats(self._updates, self._errors, self._last_ms, avg)

    def report_lines(self, active_agents: int, cache_size: int) -> list[str]:
        s = self.stats()
        return [
            f"§7[PERFORMANCE] Updates: {s.updates} | Errors: {s.errors} | "
            f"Avg Time: {s.avg_process_ms:.1f}ms",
            f"§7[TRACKING] Active Agents: {active_agents} | Cache Size: {cache_size}",
        ]
