"""Tests for the monitor queue.

The queue doubles its capacity when a push fills it and halves it
when a pop leaves it a quarter full or less (never below 1).  Every
operation is recorded in the event log.
"""

import threading

import pytest

from pagesim.errors import ConfigurationError
from pagesim.logging import Logger
from pagesim.monitor.queue import MonitorQueue


class TestPush:
    """Verify push and capacity doubling."""

    def test_push_records_event(self) -> None:
        """A push logs the value and the new size."""
        queue = MonitorQueue(4)
        queue.push(101)
        assert queue.events == ["Pushed: 101 | Queue size: 1"]
        assert len(queue) == 1

    def test_filling_queue_doubles_capacity(self) -> None:
        """Reaching capacity doubles it."""
        queue = MonitorQueue(2)
        queue.push(1)
        queue.push(2)
        expected_capacity = 4
        assert queue.capacity == expected_capacity
        assert queue.events[-1] == "Queue size doubled to: 4"

    def test_push_never_blocks_after_doubling(self) -> None:
        """Because a full queue grows, pushes keep succeeding."""
        queue = MonitorQueue(1)
        for value in range(5):
            queue.push(value)
        expected_len = 5
        assert len(queue) == expected_len
        expected_capacity = 8
        assert queue.capacity == expected_capacity

    def test_non_positive_capacity_raises(self) -> None:
        """A queue needs room for at least one item."""
        with pytest.raises(ConfigurationError):
            MonitorQueue(0)


class TestPop:
    """Verify pop and capacity halving."""

    def test_pop_is_fifo(self) -> None:
        """Items come out in the order they went in."""
        queue = MonitorQueue(8)
        queue.push(1)
        queue.push(2)
        assert queue.pop() == 1
        expected_second = 2
        assert queue.pop() == expected_second

    def test_pop_to_quarter_halves_capacity(self) -> None:
        """Dropping to a quarter of capacity halves it."""
        queue = MonitorQueue(2)
        queue.push(1)
        queue.push(2)  # capacity 4
        queue.pop()  # size 1 <= 4 // 4
        expected_capacity = 2
        assert queue.capacity == expected_capacity
        assert queue.events[-2:] == ["Popped: 1 | Queue size: 1", "Queue size reduced to: 2"]

    def test_capacity_never_below_one(self) -> None:
        """Halving stops at a capacity of 1."""
        queue = MonitorQueue(1)
        queue.push(7)  # capacity 2
        queue.pop()  # size 0 -> capacity 1
        assert queue.capacity == 1
        queue.push(8)  # capacity 2
        queue.pop()  # capacity 1
        assert queue.capacity == 1

    def test_pop_timeout_on_empty(self) -> None:
        """An empty queue returns None once the timeout expires."""
        queue = MonitorQueue(2)
        assert queue.pop(timeout=0.01) is None
        assert queue.events == []

    def test_pop_waits_for_push(self) -> None:
        """A blocked consumer is woken by a producer."""
        queue = MonitorQueue(2)
        received: list[int | None] = []
        consumer = threading.Thread(target=lambda: received.append(queue.pop(timeout=5)))
        consumer.start()
        queue.push(42)
        consumer.join(timeout=5)
        assert received == [42]


class TestLogMirror:
    """Verify events are mirrored into a Logger."""

    def test_events_logged(self) -> None:
        """Each event line also becomes a log entry."""
        log = Logger()
        queue = MonitorQueue(1, log=log)
        queue.push(3)
        assert [e.message for e in log.filter(source="monitor")] == queue.events
