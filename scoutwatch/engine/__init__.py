"""Engine layer: shared context, scheduler, dispatcher, monitor loop."""

from scoutwatch.engine.context import MonitorContext
from scoutwatch.engine.dispatcher import NotificationDispatcher
from scoutwatch.engine.monitor_loop import MonitorLoop
from scoutwatch.engine.performance import PerformanceMonitor
from scoutwatch.engine.scheduler import IntervalScheduler
from scoutwatch.engine.snapshot import MonitorSnapshot

__all__ = [
    "IntervalScheduler",
    "MonitorContext",
    "MonitorLoop",
    "MonitorSnapshot",
    "NotificationDispatcher",
    "PerformanceMonitor",
]
