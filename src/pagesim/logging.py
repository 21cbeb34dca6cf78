"""Run log — structured diagnostics for simulations.

Every simulation run can record what happened along the way: when it
started, which pages each policy evicted, and the final tally.  The
log is kept in memory so tests can inspect it and the CLI can print
it on ``--verbose``.

- **LogLevel** — severity levels ordered for filtering (DEBUG < ERROR).
- **LogEntry** — a single structured record (level, message, source, run).
- **Logger** — an append-only buffer with a minimum level, filtering,
  and clearing.

Design choices:
    - **IntEnum for levels** so they compare naturally with ``<``.
    - **Frozen dataclass for entries** — log records should be immutable.
    - **Threshold at write time** — per-eviction DEBUG records can be
      numerous on long traces, so a logger built with ``min_level=INFO``
      never stores them at all.
"""

from dataclasses import dataclass
from enum import IntEnum


class LogLevel(IntEnum):
    """Severity levels for log entries."""

    DEBUG = 0
    INFO = 1
    WARNING = 2
    ERROR = 3


@dataclass(frozen=True)
class LogEntry:
    """A single structured log record.

    Attributes:
        level: The severity of this event.
        message: A human-readable description of what happened.
        source: The component that generated the event (e.g. "simulator",
            or a policy name such as "LRU").
        run: Label of the run the event belongs to ("" when not tied
            to a run).

    """

    level: LogLevel
    message: str
    source: str
    run: str = ""

    def __str__(self) -> str:
        """Format as ``[LEVEL] source: message``."""
        return f"[{self.level.name}] {self.source}: {self.message}"


class Logger:
    """Append-only log buffer with filtering."""

    def __init__(self, *, min_level: LogLevel = LogLevel.DEBUG) -> None:
        """Create an empty logger that keeps entries at or above ``min_level``."""
        self._min_level = min_level
        self._entries: list[LogEntry] = []

    @property
    def min_level(self) -> LogLevel:
        """Return the lowest level this logger stores."""
        return self._min_level

    @property
    def entries(self) -> list[LogEntry]:
        """Return all log entries in chronological order."""
        return list(self._entries)

    def enabled_for(self, level: LogLevel) -> bool:
        """Return True if an entry at ``level`` would be stored."""
        return level >= self._min_level

    def log(
        self,
        level: LogLevel,
        message: str,
        *,
        source: str,
        run: str = "",
    ) -> None:
        """Append a new entry to the log (dropped if below ``min_level``).

        Args:
            level: Severity of the event.
            message: Human-readable event description.
            source: Component that generated the event.
            run: Label of the run the event belongs to.

        """
        if level < self._min_level:
            return
        self._entries.append(LogEntry(level=level, message=message, source=source, run=run))

    def filter(
        self,
        *,
        min_level: LogLevel | None = None,
        source: str | None = None,
    ) -> list[LogEntry]:
        """Return entries matching the given criteria.

        Args:
            min_level: If set, only return entries at or above this level.
            source: If set, only return entries from this source.

        Returns:
            A filtered list of log entries.

        """
        result = self._entries
        if min_level is not None:
            result = [e for e in result if e.level >= min_level]
        if source is not None:
            result = [e for e in result if e.source == source]
        return result if result is not self._entries else list(result)

    def clear(self) -> None:
        """Remove all log entries."""
        self._entries.clear()

    def __len__(self) -> int:
        """Return the number of stored entries."""
        return len(self._entries)
