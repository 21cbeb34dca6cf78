"""Tests for the run log."""

from pagesim.logging import LogEntry, Logger, LogLevel


class TestLogLevel:
    """Verify log level ordering."""

    def test_levels_are_ordered(self) -> None:
        """DEBUG < INFO < WARNING < ERROR."""
        assert LogLevel.DEBUG < LogLevel.INFO
        assert LogLevel.INFO < LogLevel.WARNING
        assert LogLevel.WARNING < LogLevel.ERROR


class TestLogEntry:
    """Verify log entry structure."""

    def test_entry_has_fields(self) -> None:
        """A log entry stores level, message, source, and run."""
        entry = LogEntry(level=LogLevel.INFO, message="started", source="simulator", run="LRU/3")
        assert entry.level is LogLevel.INFO
        assert entry.message == "started"
        assert entry.source == "simulator"
        assert entry.run == "LRU/3"

    def test_entry_str(self) -> None:
        """String form is ``[LEVEL] source: message``."""
        entry = LogEntry(level=LogLevel.DEBUG, message="evicted page 4", source="FIFO")
        assert str(entry) == "[DEBUG] FIFO: evicted page 4"


class TestLogger:
    """Verify the logger."""

    def test_log_stores_entries(self) -> None:
        """Logged entries are retrievable in order."""
        logger = Logger()
        logger.log(LogLevel.INFO, "first", source="test")
        logger.log(LogLevel.INFO, "second", source="test")
        assert [e.message for e in logger.entries] == ["first", "second"]
        expected_len = 2
        assert len(logger) == expected_len

    def test_min_level_drops_lower_entries(self) -> None:
        """Entries below the threshold are never stored."""
        logger = Logger(min_level=LogLevel.WARNING)
        logger.log(LogLevel.INFO, "chatty", source="test")
        logger.log(LogLevel.ERROR, "bad", source="test")
        assert [e.message for e in logger.entries] == ["bad"]
        assert not logger.enabled_for(LogLevel.INFO)
        assert logger.enabled_for(LogLevel.WARNING)

    def test_filter_by_level(self) -> None:
        """Filtering by min_level returns that level and above."""
        logger = Logger()
        logger.log(LogLevel.DEBUG, "d", source="test")
        logger.log(LogLevel.WARNING, "w", source="test")
        logger.log(LogLevel.ERROR, "e", source="test")
        result = logger.filter(min_level=LogLevel.WARNING)
        assert [e.message for e in result] == ["w", "e"]

    def test_filter_by_source(self) -> None:
        """Filtering by source returns only matching entries."""
        logger = Logger()
        logger.log(LogLevel.INFO, "run", source="simulator")
        logger.log(LogLevel.DEBUG, "evict", source="LRU")
        result = logger.filter(source="LRU")
        assert [e.message for e in result] == ["evict"]

    def test_filter_returns_copy(self) -> None:
        """Mutating a filter result does not touch the log."""
        logger = Logger()
        logger.log(LogLevel.INFO, "kept", source="test")
        logger.filter().clear()
        assert len(logger.entries) == 1

    def test_clear(self) -> None:
        """Clearing empties the log."""
        logger = Logger()
        logger.log(LogLevel.INFO, "gone", source="test")
        logger.clear()
        assert logger.entries == []
