"""Flask application factory for the simulator's HTTP API.

- ``GET /api/policies`` — return ``{"policies": [...]}``.
- ``POST /api/simulate`` — body ``{"frames": 3, "policy": "LRU",
  "trace": [1, 2, 3]}``.  ``trace`` may also be a whitespace-separated
  string.  With ``"policy": "all"`` every policy is run and the reply is
  ``{"results": {name: result, ...}}``.

Bad input (missing fields, bad or oversized frame count, unknown
policy, malformed trace) is answered with 400 and ``{"error": "..."}``.
"""

from __future__ import annotations

from typing import Any

from flask import Flask, Response, jsonify, request

from pagesim.errors import SimulationError, TraceFormatError
from pagesim.policies import PolicyName
from pagesim.simulator import compare, simulate
from pagesim.trace import Trace, parse_trace

_HTTP_BAD_REQUEST = 400
_ALL_POLICIES = "all"
_MAX_FRAMES = 1 << 20


class _BadRequest(Exception):
    """Request body is structurally invalid."""


def _trace_from(value: Any) -> Trace:
    """Accept a list of ints or a whitespace-separated string."""
    if isinstance(value, str):
        return parse_trace(value)
    if isinstance(value, list) and all(
        isinstance(v, int) and not isinstance(v, bool) for v in value
    ):
        return tuple(value)
    msg = "'trace' must be a list of integers or a whitespace-separated string"
    raise _BadRequest(msg)


def _frames_from(value: Any) -> int:
    """Accept a frame count the server is willing to simulate."""
    if isinstance(value, int) and not isinstance(value, bool) and value > _MAX_FRAMES:
        msg = f"'frames' must be at most {_MAX_FRAMES}, got {value}"
        raise _BadRequest(msg)
    return value


def create_app() -> Flask:
    """Create and configure the Flask application.

    Returns:
        A configured Flask application ready to serve.

    """
    app = Flask(__name__)

    @app.route("/api/policies")
    def policies() -> Response:  # pyright: ignore[reportUnusedFunction]
        """Return the selectable policy names."""
        return jsonify({"policies": [p.value for p in PolicyName]})

    @app.route("/api/simulate", methods=["POST"])
    def replay() -> tuple[Response, int] | Response:  # pyright: ignore[reportUnusedFunction]
        """Replay the posted trace and return the result as JSON."""
        data = request.get_json(silent=True)
        if not isinstance(data, dict):
            return jsonify({"error": "Expected a JSON object body"}), _HTTP_BAD_REQUEST
        missing = [key for key in ("frames", "policy", "trace") if key not in data]
        if missing:
            msg = f"Missing field(s): {', '.join(missing)}"
            return jsonify({"error": msg}), _HTTP_BAD_REQUEST

        try:
            trace = _trace_from(data["trace"])
            frames = _frames_from(data["frames"])
            policy = str(data["policy"])
            if policy.lower() == _ALL_POLICIES:
                results = compare(trace, capacity=frames)
                return jsonify({"results": {n.value: r.to_dict() for n, r in results.items()}})
            return jsonify(simulate(trace, capacity=frames, policy=policy).to_dict())
        except (_BadRequest, SimulationError, TraceFormatError) as e:
            return jsonify({"error": str(e)}), _HTTP_BAD_REQUEST

    return app


def main() -> None:
    """Run the development server.

    This is the ``pagesim-web`` console entry point.
    """
    app = create_app()
    app.run(debug=True, port=8080)
