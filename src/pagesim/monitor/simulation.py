"""Producer/consumer run over a MonitorQueue.

Producers each push a fixed number of items, numbered so the producer
can be read off the value (producer ``i`` pushes ``i*100``,
``i*100 + 1``, ...).  Consumers pop until their time budget runs out.
When every thread has finished, the event log is written to a file,
replacing any previous contents.

The run uses real threads and real sleeps, so it is not deterministic;
only the totals in the report are.
"""

import threading
import time
from dataclasses import dataclass, field
from pathlib import Path

from pagesim.errors import ConfigurationError
from pagesim.logging import Logger
from pagesim.monitor.queue import MonitorQueue

# Consumers wake at least this often to check their deadline.
_POLL_INTERVAL = 0.05


@dataclass(frozen=True)
class QueueConfig:
    """Parameters for one producer/consumer run.

    Attributes:
        producers: Number of producer threads.
        consumers: Number of consumer threads.
        initial_capacity: Starting queue capacity.
        max_wait: Seconds each consumer keeps consuming.
        items_per_producer: Items each producer pushes.
        log_path: Where the event log is written.
        produce_delay: Pause after each push, in seconds.
        consume_delay: Pause after each pop, in seconds.

    """

    producers: int
    consumers: int
    initial_capacity: int
    max_wait: float
    items_per_producer: int = 10
    log_path: Path = field(default_factory=lambda: Path("log.txt"))
    produce_delay: float = 0.1
    consume_delay: float = 0.15

    def validate(self) -> None:
        """Raise ConfigurationError unless every count is positive."""
        checks = {
            "producers": self.producers,
            "consumers": self.consumers,
            "initial_capacity": self.initial_capacity,
            "max_wait": self.max_wait,
            "items_per_producer": self.items_per_producer,
        }
        for name, value in checks.items():
            if value <= 0:
                msg = f"{name} must be positive, got {value}"
                raise ConfigurationError(msg)
        if self.produce_delay < 0 or self.consume_delay < 0:
            msg = "Delays must not be negative"
            raise ConfigurationError(msg)


@dataclass(frozen=True)
class QueueReport:
    """Totals from a finished run."""

    produced: int
    consumed: int
    final_capacity: int
    events: list[str]


def _producer(queue: MonitorQueue, producer_id: int, config: QueueConfig) -> None:
    for i in range(config.items_per_producer):
        queue.push(producer_id * 100 + i)
        time.sleep(config.produce_delay)


def _consumer(queue: MonitorQueue, config: QueueConfig, consumed: list[int]) -> None:
    deadline = time.monotonic() + config.max_wait
    while (remaining := deadline - time.monotonic()) > 0:
        value = queue.pop(timeout=min(remaining, _POLL_INTERVAL))
        if value is None:
            continue
        consumed.append(value)
        time.sleep(config.consume_delay)


def run_simulation(config: QueueConfig, *, log: Logger | None = None) -> QueueReport:
    """Run producers and consumers to completion and write the event log.

    Raises:
        ConfigurationError: If the config is invalid.
        OSError: If the event log cannot be written.

    """
    config.validate()
    queue = MonitorQueue(config.initial_capacity, log=log)
    consumed: list[int] = []

    threads = [
        threading.Thread(target=_producer, args=(queue, pid, config), name=f"producer-{pid}")
        for pid in range(1, config.producers + 1)
    ]
    threads += [
        threading.Thread(target=_consumer, args=(queue, config, consumed), name=f"consumer-{cid}")
        for cid in range(1, config.consumers + 1)
    ]
    for thread in threads:
        thread.start()
    for thread in threads:
        thread.join()

    events = queue.events
    text = "".join(f"{line}\n" for line in events)
    Path(config.log_path).write_text(text, encoding="utf-8")
    return QueueReport(
        produced=config.producers * config.items_per_producer,
        consumed=len(consumed),
        final_capacity=queue.capacity,
        events=events,
    )
