"""EngineManager — hosts one MonitorLoop on a daemon thread for the API.

Only the engine thread touches the loop, the context and the simulated
world. Request handlers see the monitor through the last published
MonitorSnapshot and the lock-guarded NotificationLog.
"""

from __future__ import annotations

import logging
import threading
import time
from typing import TYPE_CHECKING

from scoutwatch.engine.context import MonitorContext
from scoutwatch.engine.monitor_loop import MonitorLoop
from scoutwatch.sim import build_world
from scoutwatch.systems.clock import monotonic_ms
from scoutwatch.utils.notification_log import FanoutSink, LoggingSink, NotificationLog

if TYPE_CHECKING:
    from scoutwatch.config import MonitorConfig
    from scoutwatch.engine.snapshot import MonitorSnapshot
    from scoutwatch.systems.clock import Clock

logger = logging.getLogger(__name__)

MIN_TICK_SECONDS = 0.01
MAX_TICK_SECONDS = 2.0
IDLE_POLL_SECONDS = 0.01
JOIN_TIMEOUT_SECONDS = 5.0


class EngineManager:
    """Start/pause/step/reset control over a background monitor.

    State flags are ``threading.Event`` objects so the API thread can flip
    them without holding a lock; the snapshot reference is swapped under
    ``_snapshot_lock``.
    """

    def __init__(self, config: MonitorConfig, clock: Clock = monotonic_ms) -> None:
        self.config = config
        self._clock = clock
        self._tick_rate = config.tick_duration_ms / 1000.0
        self._notifications = NotificationLog(tick_source=self._current_tick)
        self._loop: MonitorLoop | None = None

        self._snapshot_lock = threading.Lock()
        self._snapshot: MonitorSnapshot | None = None

        self._thread: threading.Thread | None = None
        self._running = threading.Event()
        self._paused = threading.Event()
        self._step_requested = threading.Event()
        self._stop_requested = threading.Event()

        self._build()

    # -- read side --

    @property
    def running(self) -> bool:
        return self._running.is_set()

    @property
    def paused(self) -> bool:
        return self._paused.is_set()

    @property
    def tick_rate(self) -> float:
        """Seconds slept between free-running ticks."""
        return self._tick_rate

    @tick_rate.setter
    def tick_rate(self, seconds: float) -> None:
        self._tick_rate = min(max(seconds, MIN_TICK_SECONDS), MAX_TICK_SECONDS)

    @property
    def notifications(self) -> NotificationLog:
        return self._notifications

    def get_snapshot(self) -> MonitorSnapshot | None:
        with self._snapshot_lock:
            return self._snapshot

    # -- control --

    def start(self, paused: bool = False) -> None:
        """Launch the engine thread; with *paused* it waits for a step or resume."""
        if self.running:
            return
        self._stop_requested.clear()
        self._step_requested.clear()
        if paused:
            self._paused.set()
        else:
            self._paused.clear()
        self._running.set()
        self._thread = threading.Thread(target=self._engine_main, name="monitor-engine", daemon=True)
        self._thread.start()
        logger.info("Engine thread launched (%s, %.3fs per tick)",
                    "paused" if paused else "running", self._tick_rate)

    def pause(self) -> None:
        self._paused.set()
        logger.info("Monitor paused at tick %d", self._current_tick())

    def resume(self) -> None:
        self._paused.clear()
        logger.info("Monitor resumed at tick %d", self._current_tick())

    def step(self) -> None:
        """Ask the engine for exactly one tick, pausing it first if needed."""
        self._paused.set()
        self._step_requested.set()

    def stop(self) -> None:
        self._stop_requested.set()
        self._paused.clear()
        thread = self._thread
        if thread is not None and thread.is_alive():
            thread.join(timeout=JOIN_TIMEOUT_SECONDS)
        self._running.clear()
        self._thread = None
        logger.info("Engine thread stopped at tick %d", self._current_tick())

    def reset(self) -> None:
        """Stop the engine and rebuild world, context and log from the seed."""
        self.stop()
        self._notifications.clear()
        self._build()
        logger.info("Monitor rebuilt from seed %d", self.config.world_seed)

    # -- engine thread --

    def _build(self) -> None:
        world = build_world(self.config)
        ctx = MonitorContext(self.config, self._clock)
        sink = FanoutSink(self._notifications, LoggingSink())
        self._loop = MonitorLoop(ctx, world, sink, events=world)
        self._publish()

    def _engine_main(self) -> None:
        loop = self._loop
        if loop is None:
            self._running.clear()
            return

        while not self._stop_requested.is_set():
            stepping = self._step_requested.is_set()
            if self._paused.is_set() and not stepping:
                time.sleep(IDLE_POLL_SECONDS)
                continue
            self._step_requested.clear()

            advanced = loop.tick_once()
            self._publish()
            if not advanced:
                logger.info("Monitor reached max_ticks (%d)", loop.tick)
                break
            if not stepping:
                time.sleep(self._tick_rate)

        self._running.clear()

    def _publish(self) -> None:
        if self._loop is None:
            return
        snapshot = self._loop.create_snapshot()
        with self._snapshot_lock:
            self._snapshot = snapshot

    def _current_tick(self) -> int:
        return self._loop.tick if self._loop is not None else 0
