"""Simulation driver — replay a trace under a policy and count faults.

The driver is the *context* of the Strategy pattern: it picks a policy
once, before the loop, then feeds it every reference in trace order
and tallies the outcome.  No string comparison happens per reference.

A run is atomic: it either finishes and yields one result, or it fails
during configuration and yields nothing.  Once the replay starts no
operation can fail, because a full table always has a victim.

Cost per run (n = trace length, m = frames):
    - FIFO, LRU, Clock, LRU_Clock: O(n).
    - Optimal: O(n*m) worst case, from scanning the m residents on
      each fault (next uses are precomputed, see ``OptimalPolicy``).

Runs are deterministic: no randomness, no clock.  Each run builds its
own policy state, and traces are immutable tuples, so several runs may
share one trace, even from different threads.
"""

from collections.abc import Iterable, Sequence
from dataclasses import asdict, dataclass
from pathlib import Path

from pagesim.frames import check_capacity
from pagesim.logging import Logger, LogLevel
from pagesim.policies import Access, PolicyName, create_policy, resolve_policy_name
from pagesim.trace import load_trace


@dataclass(frozen=True)
class SimulationResult:
    """Outcome of replaying one trace under one policy.

    Attributes:
        policy: The policy that was simulated.
        capacity: Number of frames.
        references: Length of the trace.
        faults: References that missed (the headline number).
        hits: References that found their page resident.
        evictions: Faults that also had to evict a page.
        peak_occupancy: Most pages ever resident at once.

    """

    policy: PolicyName
    capacity: int
    references: int
    faults: int
    hits: int
    evictions: int
    peak_occupancy: int

    @property
    def fault_rate(self) -> float:
        """Return faults per reference (0.0 for an empty trace)."""
        if self.references == 0:
            return 0.0
        return self.faults / self.references

    def to_dict(self) -> dict[str, object]:
        """Return a JSON-friendly dict of the result."""
        data: dict[str, object] = asdict(self)
        data["policy"] = self.policy.value
        data["fault_rate"] = self.fault_rate
        return data


@dataclass(frozen=True)
class SimulationConfig:
    """Parameters for one run as given on the command line."""

    frames: int
    policy: str
    trace_path: Path

    def validate(self) -> PolicyName:
        """Check the frame count and policy name before any work is done.

        Returns:
            The resolved policy name.

        Raises:
            ConfigurationError: If the frame count is not positive.
            UnknownPolicyError: If the policy name is not supported.

        """
        check_capacity(self.frames)
        return resolve_policy_name(self.policy)


def simulate(
    trace: Sequence[int],
    *,
    capacity: int,
    policy: str,
    logger: Logger | None = None,
) -> SimulationResult:
    """Replay ``trace`` once and count page faults.

    Args:
        trace: The page references, in order.
        capacity: Number of frames.
        policy: A PolicyName or its string value.
        logger: Optional run log for start/summary and eviction events.

    Returns:
        The run's tallies.

    Raises:
        ConfigurationError: If capacity is not a positive integer.
        UnknownPolicyError: If the policy name is not supported.

    """
    check_capacity(capacity)
    name = resolve_policy_name(policy)
    engine = create_policy(name, capacity=capacity, trace=trace)
    run = f"{name.value}/{capacity}"

    if logger is not None:
        logger.log(
            LogLevel.INFO,
            f"replaying {len(trace)} references with {capacity} frames",
            source="simulator",
            run=run,
        )
    debug_log = logger if logger is not None and logger.enabled_for(LogLevel.DEBUG) else None

    faults = 0
    for index, page in enumerate(trace):
        if engine.reference(page) is Access.FAULT:
            faults += 1
            victim = engine.last_victim
            if debug_log is not None and victim is not None:
                debug_log.log(
                    LogLevel.DEBUG,
                    f"ref #{index} page {page}: evicted page {victim}",
                    source=name.value,
                    run=run,
                )

    result = SimulationResult(
        policy=name,
        capacity=capacity,
        references=len(trace),
        faults=faults,
        hits=len(trace) - faults,
        evictions=engine.evictions,
        peak_occupancy=engine.frames.peak_occupancy,
    )
    if logger is not None:
        logger.log(
            LogLevel.INFO,
            f"{result.faults} faults, {result.hits} hits, {result.evictions} evictions",
            source="simulator",
            run=run,
        )
    return result


def compare(
    trace: Sequence[int],
    *,
    capacity: int,
    policies: Iterable[str] | None = None,
    logger: Logger | None = None,
) -> dict[PolicyName, SimulationResult]:
    """Run several policies over the same trace, each with fresh state.

    Args:
        trace: The page references, in order.
        capacity: Number of frames.
        policies: Names to run (default: every policy, in PolicyName order).
        logger: Optional run log shared by all runs.

    Returns:
        Results keyed by policy, in the order they were run.

    """
    check_capacity(capacity)
    names = [resolve_policy_name(p) for p in (policies if policies is not None else PolicyName)]
    return {
        name: simulate(trace, capacity=capacity, policy=name, logger=logger) for name in names
    }


def fault_curve(
    trace: Sequence[int],
    *,
    policy: str,
    capacities: Iterable[int],
) -> dict[int, int]:
    """Return the fault count for each capacity, for anomaly studies.

    Belady's anomaly shows up as a capacity whose count is *higher*
    than that of a smaller capacity.
    """
    return {
        capacity: simulate(trace, capacity=capacity, policy=policy).faults
        for capacity in capacities
    }


def run_config(config: SimulationConfig, *, logger: Logger | None = None) -> SimulationResult:
    """Validate ``config``, load its trace, and simulate it.

    Configuration is checked before the trace is read, so a bad frame
    count or policy name is reported without touching the file.

    Raises:
        ConfigurationError: If the frame count is not positive.
        UnknownPolicyError: If the policy name is not supported.
        OSError: If the trace cannot be read or parsed.

    """
    name = config.validate()
    trace = load_trace(config.trace_path)
    return simulate(trace, capacity=config.frames, policy=name, logger=logger)
