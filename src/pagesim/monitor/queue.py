"""Monitor queue — a bounded FIFO that grows and shrinks with demand.

A **monitor** bundles shared data with the lock that protects it and
the condition variables threads wait on.  Here the data is a FIFO of
ints with a *capacity* that changes at runtime:

    - ``push`` waits while the queue is full.  If the insertion fills
      the queue to capacity, the capacity doubles.
    - ``pop`` waits while the queue is empty.  If occupancy falls to a
      quarter of capacity or below, the capacity halves (never below 1).

Two conditions share one lock: producers wait on ``not_full`` and
consumers on ``not_empty``.  Each successful operation wakes one
waiter of the opposite kind.

Every push, pop, and resize is recorded as a line of the event log,
e.g. ``Pushed: 101 | Queue size: 3`` or ``Queue size doubled to: 8``.
"""

import threading
from collections import deque

from pagesim.errors import ConfigurationError
from pagesim.logging import Logger, LogLevel

_SOURCE = "monitor"


class MonitorQueue:
    """Thread-safe bounded queue with dynamic capacity."""

    def __init__(self, initial_capacity: int, *, log: Logger | None = None) -> None:
        """Create an empty queue.

        Args:
            initial_capacity: Starting capacity, at least 1.
            log: Optional logger that mirrors every event line.

        Raises:
            ConfigurationError: If initial_capacity is not positive.

        """
        if initial_capacity <= 0:
            msg = f"Queue capacity must be positive, got {initial_capacity}"
            raise ConfigurationError(msg)
        self._items: deque[int] = deque()
        self._capacity = initial_capacity
        self._lock = threading.Lock()
        self._not_full = threading.Condition(self._lock)
        self._not_empty = threading.Condition(self._lock)
        self._events: list[str] = []
        self._log = log

    @property
    def capacity(self) -> int:
        """Return the current capacity."""
        with self._lock:
            return self._capacity

    @property
    def events(self) -> list[str]:
        """Return the event log lines recorded so far."""
        with self._lock:
            return list(self._events)

    def __len__(self) -> int:
        """Return the number of queued items."""
        with self._lock:
            return len(self._items)

    def _record(self, line: str) -> None:
        # Caller holds the lock.
        self._events.append(line)
        if self._log is not None:
            self._log.log(LogLevel.INFO, line, source=_SOURCE)

    def push(self, value: int) -> None:
        """Append ``value``, blocking while the queue is full."""
        with self._not_full:
            self._not_full.wait_for(lambda: len(self._items) < self._capacity)
            self._items.append(value)
            self._record(f"Pushed: {value} | Queue size: {len(self._items)}")
            if len(self._items) == self._capacity:
                self._capacity *= 2
                self._record(f"Queue size doubled to: {self._capacity}")
            self._not_empty.notify()

    def pop(self, timeout: float | None = None) -> int | None:
        """Remove and return the oldest item, blocking while empty.

        Args:
            timeout: Seconds to wait for an item (None waits forever).

        Returns:
            The item, or None if the timeout expired first.

        """
        with self._not_empty:
            if not self._not_empty.wait_for(lambda: len(self._items) > 0, timeout=timeout):
                return None
            value = self._items.popleft()
            self._record(f"Popped: {value} | Queue size: {len(self._items)}")
            if len(self._items) <= self._capacity // 4 and self._capacity > 1:
                self._capacity //= 2
                self._record(f"Queue size reduced to: {self._capacity}")
            self._not_full.notify()
            return value
