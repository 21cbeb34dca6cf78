"""Error taxonomy for the simulator.

Every failure here is caused by bad input, never by a transient
condition, so nothing is retried.  The CLI turns these into a
diagnostic and a non-zero exit status.

- **ConfigurationError** — non-positive frame count or a malformed
  numeric argument.
- **UnknownPolicyError** — the policy name is not one we ship.
- **TraceFormatError** — a trace token is not a decimal integer.  It
  subclasses ``OSError`` so a caller can treat "the trace cannot be
  read" (missing file *or* garbage inside it) with a single ``except``.
- **FrameTableError** — a frame-table invariant was about to be broken.
  A valid run never raises it; it guards the policies themselves.
"""


class SimulationError(Exception):
    """Base class for simulator configuration and invariant errors."""


class ConfigurationError(SimulationError, ValueError):
    """Raised when a run is configured with invalid parameters."""


class UnknownPolicyError(SimulationError, ValueError):
    """Raised when a replacement policy name is not recognised."""

    def __init__(self, name: str, known: list[str]) -> None:
        """Record the rejected name and the names that would be accepted."""
        self.name = name
        self.known = known
        super().__init__(f"Unknown replacement policy '{name}' (choose from: {', '.join(known)})")


class FrameTableError(SimulationError):
    """Raised when a frame-table operation would break its invariants."""


class TraceFormatError(OSError):
    """Raised when a trace contains a token that is not an integer."""

    def __init__(self, token: str, position: int) -> None:
        """Record the offending token and its 0-based position."""
        self.token = token
        self.position = position
        super().__init__(f"Invalid page reference {token!r} at position {position}")
