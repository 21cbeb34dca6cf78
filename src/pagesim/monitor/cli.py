"""Command-line entry point for the producer/consumer simulator.

Usage::

    pagesim-queue -p <producers> -c <consumers> -s <initial_size> -t <seconds>

All four values must be positive; otherwise a usage line is printed
and the exit status is 1.
"""

import argparse
import sys
from collections.abc import Sequence
from pathlib import Path

from pagesim.errors import ConfigurationError
from pagesim.monitor.simulation import QueueConfig, run_simulation

_PROG = "pagesim-queue"
_USAGE = f"{_PROG} -p <num_producers> -c <num_consumers> -s <initial_queue_size> -t <max_wait_time>"
_EXIT_FAILURE = 1


def build_parser() -> argparse.ArgumentParser:
    """Build the argument parser (all values optional so we can report them together)."""
    parser = argparse.ArgumentParser(prog=_PROG, usage=_USAGE)
    parser.add_argument("-p", dest="producers", type=int, default=0, help="producer threads")
    parser.add_argument("-c", dest="consumers", type=int, default=0, help="consumer threads")
    parser.add_argument("-s", dest="size", type=int, default=0, help="initial queue capacity")
    parser.add_argument("-t", dest="wait", type=float, default=0, help="consumer time budget (s)")
    parser.add_argument("--log", type=Path, default=Path("log.txt"), help="event log file")
    return parser


def main(argv: Sequence[str] | None = None) -> int:
    """Parse ``argv``, run the simulation, and return the exit status."""
    args = build_parser().parse_args(argv)
    config = QueueConfig(
        producers=args.producers,
        consumers=args.consumers,
        initial_capacity=args.size,
        max_wait=args.wait,
        log_path=args.log,
    )
    try:
        report = run_simulation(config)
    except ConfigurationError as e:
        print(f"Invalid arguments ({e}). Usage: {_USAGE}", file=sys.stderr)  # noqa: T201
        return _EXIT_FAILURE
    except OSError as e:
        print(f"{_PROG}: error: cannot write log {args.log}: {e}", file=sys.stderr)  # noqa: T201
        return _EXIT_FAILURE

    summary = (
        f"Produced {report.produced}, consumed {report.consumed}, "
        f"final capacity {report.final_capacity}"
    )
    print(summary)  # noqa: T201
    print("Simulation complete.")  # noqa: T201
    return 0


def run() -> None:
    """Console-script entry point (``pagesim-queue``)."""
    sys.exit(main())
