"""Tests for the ``pagesim`` command line.

``main`` returns the exit status instead of exiting, so it can be
called directly; output is checked with ``capsys``.
"""

from pathlib import Path

import pytest

from pagesim.cli import format_comparison, main
from pagesim.policies import PolicyName
from pagesim.simulator import compare

BELADY_TRACE = "1 2 3 4 1 2 5 1 2 3 4 5\n"
EXIT_FAILURE = 1
EXIT_USAGE = 2


@pytest.fixture
def trace_file(tmp_path: Path) -> Path:
    """Write the classic trace to a temporary file."""
    path = tmp_path / "trace.txt"
    path.write_text(BELADY_TRACE)
    return path


class TestSingleRun:
    """Verify the single-policy invocation."""

    def test_prints_fault_count(self, trace_file: Path, capsys: pytest.CaptureFixture[str]) -> None:
        """The output is one line with the fault count."""
        status = main(["-m", "3", "-a", "FIFO", "-f", str(trace_file)])
        assert status == 0
        assert capsys.readouterr().out == "Page Faults: 9\n"

    def test_long_options(self, trace_file: Path, capsys: pytest.CaptureFixture[str]) -> None:
        """Long option names work too."""
        status = main(["--frames", "3", "--algorithm", "Optimal", "--file", str(trace_file)])
        assert status == 0
        assert capsys.readouterr().out == "Page Faults: 7\n"

    def test_lru_clock(self, trace_file: Path, capsys: pytest.CaptureFixture[str]) -> None:
        """LRU_Clock is selectable by name."""
        main(["-m", "3", "-a", "LRU_Clock", "-f", str(trace_file)])
        assert capsys.readouterr().out == "Page Faults: 9\n"

    def test_empty_trace(self, tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
        """An empty trace file reports zero faults."""
        path = tmp_path / "empty.txt"
        path.write_text("")
        assert main(["-m", "2", "-a", "LRU", "-f", str(path)]) == 0
        assert capsys.readouterr().out == "Page Faults: 0\n"

    def test_verbose_prints_log(self, trace_file: Path, capsys: pytest.CaptureFixture[str]) -> None:
        """--verbose writes the run log to stderr, leaving stdout alone."""
        main(["-m", "3", "-a", "LRU", "-f", str(trace_file), "-v"])
        captured = capsys.readouterr()
        assert captured.out == "Page Faults: 10\n"
        assert "[INFO] simulator" in captured.err
        assert "[DEBUG] LRU" in captured.err


class TestErrors:
    """Verify diagnostics and exit codes."""

    def test_missing_file(self, tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
        """An unreadable trace exits 1 with a diagnostic and no count."""
        status = main(["-m", "3", "-a", "FIFO", "-f", str(tmp_path / "missing.txt")])
        captured = capsys.readouterr()
        assert status == EXIT_FAILURE
        assert captured.out == ""
        assert "cannot read trace" in captured.err

    def test_malformed_trace(self, tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
        """A trace with a non-integer token exits 1."""
        path = tmp_path / "bad.txt"
        path.write_text("1 2 z")
        assert main(["-m", "3", "-a", "FIFO", "-f", str(path)]) == EXIT_FAILURE
        assert "'z'" in capsys.readouterr().err

    def test_undecodable_trace(self, tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
        """A trace that is not UTF-8 text exits 1 with a diagnostic."""
        path = tmp_path / "binary.txt"
        path.write_bytes(b"1 2 \xff 3")
        status = main(["-m", "3", "-a", "FIFO", "-f", str(path)])
        captured = capsys.readouterr()
        assert status == EXIT_FAILURE
        assert captured.out == ""
        assert "pagesim: error: cannot read trace" in captured.err
        assert "UTF-8" in captured.err

    def test_unknown_policy(self, trace_file: Path, capsys: pytest.CaptureFixture[str]) -> None:
        """An unknown policy exits 1 and lists the choices."""
        status = main(["-m", "3", "-a", "MRU", "-f", str(trace_file)])
        assert status == EXIT_FAILURE
        assert "Unknown replacement policy 'MRU'" in capsys.readouterr().err

    @pytest.mark.parametrize("frames", ["0", "-2"])
    def test_non_positive_frames(
        self, trace_file: Path, frames: str, capsys: pytest.CaptureFixture[str]
    ) -> None:
        """A non-positive frame count exits 1."""
        assert main(["-m", frames, "-a", "FIFO", "-f", str(trace_file)]) == EXIT_FAILURE
        assert "positive" in capsys.readouterr().err

    def test_non_numeric_frames(self, trace_file: Path) -> None:
        """A non-numeric frame count is a usage error."""
        with pytest.raises(SystemExit) as excinfo:
            main(["-m", "three", "-a", "FIFO", "-f", str(trace_file)])
        assert excinfo.value.code == EXIT_USAGE

    def test_missing_arguments(self) -> None:
        """Leaving out required arguments is a usage error."""
        with pytest.raises(SystemExit) as excinfo:
            main(["-a", "FIFO"])
        assert excinfo.value.code == EXIT_USAGE

    def test_policy_or_compare_required(self, trace_file: Path) -> None:
        """Without -a or --compare there is nothing to run."""
        with pytest.raises(SystemExit) as excinfo:
            main(["-m", "3", "-f", str(trace_file)])
        assert excinfo.value.code == EXIT_USAGE


class TestCompare:
    """Verify --compare output."""

    def test_one_line_per_policy(
        self, trace_file: Path, capsys: pytest.CaptureFixture[str]
    ) -> None:
        """Every policy gets a line with its fault count."""
        assert main(["-m", "3", "--compare", "-f", str(trace_file)]) == 0
        lines = capsys.readouterr().out.splitlines()
        assert len(lines) == len(PolicyName)
        assert lines[0].split() == ["FIFO:", "9"]
        assert lines[2].split() == ["Optimal:", "7"]

    def test_format_alignment(self) -> None:
        """Counts line up in one column."""
        text = format_comparison(compare((1, 2, 1), capacity=1))
        columns = {line.index(line.split()[1]) for line in text.splitlines()}
        assert len(columns) == 1
