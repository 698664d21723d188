"""Per-key cooldown tracking for rate-limited notifications."""

from __future__ import annotations

import threading

from scoutwatch.systems.clock import Clock, monotonic_ms

_SEP = ":"


def cooldown_key(category: str, agent_id: str, subtype: str | None = None) -> str:
    """Composite key scoping suppression per agent per category (and subtype)."""
    if subtype:
        return f"{category}{_SEP}{agent_id}{_SEP}{subtype}"
    return f"{category}{_SEP}{agent_id}"


def _owned_by(key: str, agent_id: str) -> bool:
    # The agent id may itself contain the separator.
    rest = key.partition(_SEP)[2]
    return rest == agent_id or rest.startswith(agent_id + _SEP)


class CooldownRegistry:
    """Records the last time each notification key fired.

    Windows are given in ticks and converted with ``tick_duration_ms``.
    """

    __slots__ = ("_tick_ms", "_clock", "_last_fired", "_lock")

    def __init__(self, tick_duration_ms: float = 50, clock: Clock = monotonic_ms) -> None:
        self._tick_ms = tick_duration_ms
        self._clock = clock
        self._last_fired: dict[str, float] = {}
        self._lock = threading.Lock()

    def is_on_cooldown(self, key: str, window_ticks: int) -> bool:
        with self._lock:
            last = self._last_fired.get(key)
        if last is None:
            return False
        return (self._clock() - last) < window_ticks * self._tick_ms

    def set_cooldown(self, key: str) -> None:
        with self._lock:
            self._last_fired[key] = self._clock()

    def forget_agent(self, agent_id: str) -> int:
        """Drop every key belonging to *agent_id*. Returns how many were removed."""
        with self._lock:
            doomed = [k for k in self._last_fired if _owned_by(k, agent_id)]
            for k in doomed:
                del self._last_fired[k]
        return len(doomed)

    def prune(self, max_window_ticks: int) -> int:
        """Drop keys whose last fire is older than the longest window in use."""
        horizon = self._clock() - max_window_ticks * self._tick_ms
        with self._lock:
            doomed = [k for k, t in self._last_fired.items() if t <= horizon]
            for k in doomed:
                del self._last_fired[k]
        return len(doomed)

    def __len__(self) -> int:
        with self._lock:
            return len(self._last_fired)
