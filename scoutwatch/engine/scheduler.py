"""Tick-driven scheduler: repeating interval tasks and one-shot delayed calls.

Repeating tasks first fire one full interval after they are registered,
then every interval after that. Intervals are independent of each other.
"""

from __future__ import annotations

import heapq
import itertools
import logging
from dataclasses import dataclass, field
from typing import Callable

logger = logging.getLogger(__name__)

TickCallback = Callable[[int], None]
ErrorHook = Callable[[str, Exception], None]


@dataclass(slots=True)
class IntervalTask:
    name: str
    interval: int
    callback: TickCallback
    next_due: int
    runs: int = 0


@dataclass(order=True, slots=True)
class _DelayedCall:
    due: int
    seq: int
    name: str = field(compare=False)
    callback: TickCallback = field(compare=False)


class IntervalScheduler:
    """Runs whatever is due at each tick, in registration order.

    A task that raises is logged, reported to *on_error* when one is given,
    and does not prevent the others from running in the same tick.
    """

    __slots__ = ("_tasks", "_delayed", "_seq", "_tick", "_on_error")

    def __init__(self, on_error: ErrorHook | None = None) -> None:
        self._on_error = on_error
        self._tasks: list[IntervalTask] = []
        self._delayed: list[_DelayedCall] = []
        self._seq = itertools.count()
        self._tick = 0

    @property
    def tick(self) -> int:
        return self._tick

    @property
    def tasks(self) -> list[IntervalTask]:
        return list(self._tasks)

    @property
    def pending_calls(self) -> int:
        return len(self._delayed)

    def every(self, name: str, interval: int, callback: TickCallback) -> IntervalTask:
        if interval <= 0:
            raise ValueError(f"Interval for '{name}' must be positive, got {interval}")
        task = IntervalTask(name, interval, callback, next_due=self._tick + interval)
        self._tasks.append(task)
        logger.debug("Scheduled '%s' every %d ticks", name, interval)
        return task

    def call_later(self, delay: int, name: str, callback: TickCallback, now: int | None = None) -> None:
        """Run *callback* once, *delay* ticks after *now* (default: the last advanced tick)."""
        due = (self._tick if now is None else now) + max(delay, 0)
        heapq.heappush(self._delayed, _DelayedCall(due, next(self._seq), name, callback))

    def advance(self, tick: int) -> list[str]:
        """Run everything due at or before *tick*. Returns the names that ran."""
        self._tick = tick
        ran: list[str] = []

        for task in self._tasks:
            if tick < task.next_due:
                continue
            task.next_due = tick + task.interval
            task.runs += 1
            self._run(task.name, task.callback, tick)
            ran.append(task.name)

        while self._delayed and self._delayed[0].due <= tick:
            call = heapq.heappop(self._delayed)
            self._run(call.name, call.callback, tick)
            ran.append(call.name)

        return ran

    def cancel(self, name: str) -> int:
        """Drop pending one-shot calls registered under *name*. Returns how many."""
        kept = [c for c in self._delayed if c.name != name]
        dropped = len(self._delayed) - len(kept)
        if dropped:
            heapq.heapify(kept)
            self._delayed = kept
        return dropped

    def clear(self) -> None:
        self._tasks.clear()
        self._delayed.clear()
        self._tick = 0

    def _run(self, name: str, callback: TickCallback, tick: int) -> None:
        try:
            callback(tick)
        except Exception as exc:
            logger.exception("Tick %d: scheduled task '%s' failed", tick, name)
            if self._on_error is not None:
                self._on_error(name, exc)
