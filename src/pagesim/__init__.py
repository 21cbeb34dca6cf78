"""pagesim — compare page replacement policies on reference traces.

Re-exports public symbols so callers can write::

    from pagesim import load_trace, simulate
"""

from pagesim.errors import (
    ConfigurationError,
    FrameTableError,
    SimulationError,
    TraceFormatError,
    UnknownPolicyError,
)
from pagesim.frames import FrameTable
from pagesim.logging import LogEntry, Logger, LogLevel
from pagesim.policies import (
    Access,
    ClockPolicy,
    FIFOPolicy,
    LRUClockPolicy,
    LRUPolicy,
    OptimalPolicy,
    PolicyName,
    ReplacementPolicy,
    create_policy,
)
from pagesim.simulator import (
    SimulationConfig,
    SimulationResult,
    compare,
    fault_curve,
    run_config,
    simulate,
)
from pagesim.trace import Trace, load_trace, parse_trace

__all__ = [
    "Access",
    "ClockPolicy",
    "ConfigurationError",
    "FIFOPolicy",
    "FrameTable",
    "FrameTableError",
    "LRUClockPolicy",
    "LRUPolicy",
    "LogEntry",
    "LogLevel",
    "Logger",
    "OptimalPolicy",
    "PolicyName",
    "ReplacementPolicy",
    "SimulationConfig",
    "SimulationError",
    "SimulationResult",
    "Trace",
    "TraceFormatError",
    "UnknownPolicyError",
    "compare",
    "create_policy",
    "fault_curve",
    "load_trace",
    "parse_trace",
    "run_config",
    "simulate",
]
