"""Tests for the tick-driven interval scheduler."""

import sys
import os
sys.path.insert(0, os.path.join(os.path.dirname(__file__), ".."))

import pytest

from scoutwatch.engine.scheduler import IntervalScheduler


def _run(scheduler: IntervalScheduler, ticks: int) -> None:
    for t in range(1, ticks + 1):
        scheduler.advance(t)


class TestIntervalTasks:
    def test_first_run_after_one_interval(self):
        sched = IntervalScheduler()
        fired: list[int] = []
        sched.every("scan", 60, fired.append)
        _run(sched, 59)
        assert fired == []
        sched.advance(60)
        assert fired == [60]

    def test_repeats_every_interval(self):
        sched = IntervalScheduler()
        fired: list[int] = []
        sched.every("threats", 30, fired.append)
        _run(sched, 100)
        assert fired == [30, 60, 90]

    def test_independent_intervals(self):
        sched = IntervalScheduler()
        scans: list[int] = []
        threats: list[int] = []
        sched.every("scan", 60, scans.append)
        sched.every("threats", 30, threats.append)
        _run(sched, 120)
        assert scans == [60, 120]
        assert threats == [30, 60, 90, 120]

    def test_registration_order_within_tick(self):
        sched = IntervalScheduler()
        order: list[str] = []
        sched.every("a", 10, lambda t: order.append("a"))
        sched.every("b", 10, lambda t: order.append("b"))
        sched.advance(10)
        assert order == ["a", "b"]

    def test_non_positive_interval_rejected(self):
        with pytest.raises(ValueError):
            IntervalScheduler().every("bad", 0, lambda t: None)

    def test_failing_task_does_not_block_others(self):
        sched = IntervalScheduler()
        ran: list[int] = []

        def boom(tick: int) -> None:
            raise RuntimeError("boom")

        sched.every("boom", 5, boom)
        sched.every("ok", 5, ran.append)
        assert sched.advance(5) == ["boom", "ok"]
        assert ran == [5]

    def test_failure_reported_to_error_hook(self):
        failures: list[tuple[str, str]] = []
        sched = IntervalScheduler(on_error=lambda name, exc: failures.append((name, str(exc))))

        def boom(tick: int) -> None:
            raise RuntimeError("boom")

        sched.every("boom", 5, boom)
        sched.call_later(7, "late", boom)
        _run(sched, 10)
        assert failures == [("boom", "boom"), ("late", "boom"), ("boom", "boom")]


class TestDelayedCalls:
    def test_call_later_fires_once_after_delay(self):
        sched = IntervalScheduler()
        fired: list[int] = []
        sched.advance(10)
        sched.call_later(40, "welcome", fired.append)
        for t in range(11, 100):
            sched.advance(t)
        assert fired == [50]
        assert sched.pending_calls == 0

    def test_call_later_relative_to_explicit_tick(self):
        sched = IntervalScheduler()
        fired: list[int] = []
        sched.advance(4)
        sched.call_later(40, "welcome", fired.append, now=5)
        _run(sched, 60)
        assert fired == [45]

    def test_delayed_calls_keep_fifo_order_for_same_tick(self):
        sched = IntervalScheduler()
        order: list[str] = []
        sched.call_later(3, "first", lambda t: order.append("first"))
        sched.call_later(3, "second", lambda t: order.append("second"))
        _run(sched, 3)
        assert order == ["first", "second"]

    def test_cancel_drops_only_named_calls(self):
        sched = IntervalScheduler()
        fired: list[str] = []
        sched.call_later(5, "welcome:a1", lambda t: fired.append("a1"))
        sched.call_later(5, "welcome:a2", lambda t: fired.append("a2"))
        assert sched.cancel("welcome:a1") == 1
        assert sched.cancel("welcome:a1") == 0
        _run(sched, 10)
        assert fired == ["a2"]
        assert sched.pending_calls == 0

    def test_clear_drops_everything(self):
        sched = IntervalScheduler()
        sched.every("scan", 10, lambda t: None)
        sched.call_later(5, "x", lambda t: None)
        sched.clear()
        assert sched.tasks == []
        assert sched.pending_calls == 0
