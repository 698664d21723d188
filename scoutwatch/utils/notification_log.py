"""Message sinks: a thread-safe ring buffer for the API and a logging sink."""

from __future__ import annotations

import logging
import threading
from collections import deque
from dataclasses import dataclass
from typing import Callable

from scoutwatch.core.enums import NotificationChannel
from scoutwatch.core.environment import MessageSink, strip_markup

logger = logging.getLogger(__name__)

BROADCAST = "*"


@dataclass(frozen=True, slots=True)
class Notification:
    """One delivered line. ``agent_id`` is ``"*"`` for broadcasts."""

    seq: int
    tick: int
    agent_id: str
    channel: NotificationChannel
    text: str

    @property
    def plain_text(self) -> str:
        return strip_markup(self.text)


class NotificationLog(MessageSink):
    """Bounded log of delivered messages. Writers append; readers copy a slice.

    The oldest entries fall off once ``maxlen`` is reached. Thread-safe via
    a simple lock: the monitor thread writes, API threads read.
    """

    __slots__ = ("_buffer", "_lock", "_tick_source", "_seq")

    def __init__(self, maxlen: int = 2000, tick_source: Callable[[], int] | None = None) -> None:
        self._buffer: deque[Notification] = deque(maxlen=maxlen)
        self._lock = threading.Lock()
        self._tick_source = tick_source or (lambda: 0)
        self._seq = 0

    def bind_tick_source(self, tick_source: Callable[[], int]) -> None:
        self._tick_source = tick_source

    def send(
        self,
        agent_id: str,
        text: str,
        channel: NotificationChannel = NotificationChannel.SYSTEM,
    ) -> None:
        self._append(agent_id, text, channel)

    def broadcast(self, text: str) -> None:
        self._append(BROADCAST, text, NotificationChannel.SYSTEM)

    def _append(self, agent_id: str, text: str, channel: NotificationChannel) -> None:
        tick = self._tick_source()
        with self._lock:
            self._seq += 1
            self._buffer.append(Notification(self._seq, tick, agent_id, channel, text))

    def since_tick(self, tick: int, limit: int | None = None) -> list[Notification]:
        """Entries with tick >= *tick*, oldest first, capped to the newest *limit*."""
        with self._lock:
            items = [n for n in self._buffer if n.tick >= tick]
        return items[-limit:] if limit else items

    def for_agent(self, agent_id: str, since_tick: int = 0) -> list[Notification]:
        """Entries addressed to *agent_id* plus broadcasts, oldest first."""
        with self._lock:
            return [n for n in self._buffer
                    if n.tick >= since_tick and n.agent_id in (agent_id, BROADCAST)]

    def latest(self, count: int = 50) -> list[Notification]:
        with self._lock:
            items = list(self._buffer)
        return items[-count:]

    def clear(self) -> None:
        with self._lock:
            self._buffer.clear()

    def __len__(self) -> int:
        with self._lock:
            return len(self._buffer)


class LoggingSink(MessageSink):
    """Writes every delivered line to the log at INFO, markup stripped."""

    def send(
        self,
        agent_id: str,
        text: str,
        channel: NotificationChannel = NotificationChannel.SYSTEM,
    ) -> None:
        logger.info("[%s -> %s] %s", channel.value, agent_id, strip_markup(text))

    def broadcast(self, text: str) -> None:
        logger.info("[broadcast] %s", strip_markup(text))


class FanoutSink(MessageSink):
    """Delivers each line to several sinks in order."""

    def __init__(self, *sinks: MessageSink) -> None:
        self._sinks = sinks

    def send(
        self,
        agent_id: str,
        text: str,
        channel: NotificationChannel = NotificationChannel.SYSTEM,
    ) -> None:
        for sink in self._sinks:
            sink.send(agent_id, text, channel)

    def broadcast(self, text: str) -> None:
        for sink in self._sinks:
            sink.broadcast(text)
