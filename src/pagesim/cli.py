"""Command-line entry point for the replacement-policy simulator.

Usage::

    pagesim -m <frames> -a <policy> -f <trace>
    pagesim -m <frames> --compare -f <trace>

The single-policy form prints exactly one line, ``Page Faults: N``.
``--compare`` prints one ``Policy: N`` line per policy instead.

Exit status is 0 on success and 1 when the run cannot start (bad
frame count, unknown policy, unreadable trace).  Missing or malformed
arguments are rejected by argparse with status 2.

The formatting helpers are pure so they can be tested without I/O;
``main`` is the thin wrapper that touches argv, stdout, and stderr.
"""

import argparse
import sys
from collections.abc import Mapping, Sequence
from pathlib import Path

from pagesim.errors import SimulationError
from pagesim.frames import check_capacity
from pagesim.logging import Logger, LogLevel
from pagesim.policies import PolicyName
from pagesim.simulator import SimulationConfig, SimulationResult, compare, run_config
from pagesim.trace import load_trace

_PROG = "pagesim"
_EXIT_FAILURE = 1


def format_result(result: SimulationResult) -> str:
    """Format a single run as ``Page Faults: N``."""
    return f"Page Faults: {result.faults}"


def format_comparison(results: Mapping[PolicyName, SimulationResult]) -> str:
    """Format one ``Policy: N`` line per run, aligned on the colon."""
    width = max((len(name.value) for name in results), default=0)
    return "\n".join(f"{name.value + ':':<{width + 1}} {r.faults}" for name, r in results.items())


def build_parser() -> argparse.ArgumentParser:
    """Build the argument parser."""
    parser = argparse.ArgumentParser(
        prog=_PROG,
        description="Replay a page-reference trace and count page faults.",
    )
    parser.add_argument(
        "-m",
        "--frames",
        type=int,
        required=True,
        help="number of physical frames (positive integer)",
    )
    parser.add_argument(
        "-a",
        "--algorithm",
        metavar="POLICY",
        help=f"replacement policy: {', '.join(p.value for p in PolicyName)}",
    )
    parser.add_argument(
        "-f",
        "--file",
        type=Path,
        required=True,
        help="trace file of whitespace-separated page numbers",
    )
    parser.add_argument(
        "--compare",
        action="store_true",
        help="run every policy and print one fault count per policy",
    )
    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help="print the run log (evictions included) to stderr",
    )
    return parser


def _print_log(logger: Logger) -> None:
    for entry in logger.entries:
        print(entry, file=sys.stderr)  # noqa: T201


def main(argv: Sequence[str] | None = None) -> int:
    """Parse ``argv``, run the simulation, and return the exit status."""
    parser = build_parser()
    args = parser.parse_args(argv)
    if not args.compare and args.algorithm is None:
        parser.error("one of -a/--algorithm or --compare is required")

    logger = Logger(min_level=LogLevel.DEBUG if args.verbose else LogLevel.INFO)
    try:
        if args.compare:
            check_capacity(args.frames)
            trace = load_trace(args.file)
            output = format_comparison(compare(trace, capacity=args.frames, logger=logger))
        else:
            config = SimulationConfig(
                frames=args.frames, policy=args.algorithm, trace_path=args.file
            )
            output = format_result(run_config(config, logger=logger))
    except SimulationError as e:
        print(f"{_PROG}: error: {e}", file=sys.stderr)  # noqa: T201
        return _EXIT_FAILURE
    except OSError as e:
        print(f"{_PROG}: error: cannot read trace {args.file}: {e}", file=sys.stderr)  # noqa: T201
        return _EXIT_FAILURE

    if args.verbose:
        _print_log(logger)
    print(output)  # noqa: T201
    return 0


def run() -> None:
    """Console-script entry point (``pagesim``)."""
    sys.exit(main())
