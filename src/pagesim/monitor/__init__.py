"""Bounded-queue producer/consumer simulator.

Independent of the replacement-policy core: it shares only the error
and logging modules.  Re-exports::

    from pagesim.monitor import MonitorQueue, QueueConfig, run_simulation
"""

from pagesim.monitor.queue import MonitorQueue
from pagesim.monitor.simulation import QueueConfig, QueueReport, run_simulation

__all__ = [
    "MonitorQueue",
    "QueueConfig",
    "QueueReport",
    "run_simulation",
]
