"""Flask application factory for the simulator's JSON API.

The ``create_app`` function builds a simulation and returns a Flask app
with three endpoints:

- ``GET /api/config`` — return cylinders and the request count limits.
- ``POST /api/simulate`` — run FCFS, SCAN and C-SCAN and return JSON.
- ``GET /api/log`` — return the simulation log as a list of lines.
"""

from __future__ import annotations

from typing import Any

from flask import Flask, Response, jsonify, request

from py_disksim.config import DiskConfig
from py_disksim.disk import Direction, DiskRangeError
from py_disksim.simulation import Simulation, WorkloadTooLargeError

_HTTP_BAD_REQUEST = 400
_HTTP_SERVICE_UNAVAILABLE = 503


class _PayloadError(ValueError):
    """Raise when a simulate request body is unusable."""


def _read_int(data: dict[str, Any], key: str) -> int:
    value = data.get(key)
    # bool is an int subclass; a JSON true is not a cylinder
    if isinstance(value, bool) or not isinstance(value, int):
        msg = f"'{key}' must be an integer"
        raise _PayloadError(msg)
    return value


def _read_direction(data: dict[str, Any]) -> Direction:
    raw = data.get("direction", Direction.OUTWARD.value)
    try:
        return Direction.parse(str(raw))
    except ValueError as exc:
        raise _PayloadError(str(exc)) from None


def _read_requests(data: dict[str, Any], simulation: Simulation) -> list[int]:
    if "requests" not in data:
        count = data.get("count")
        if count is None:
            return simulation.generate()
        if isinstance(count, bool) or not isinstance(count, int) or count < 0:
            msg = "'count' must be a non-negative integer"
            raise _PayloadError(msg)
        return simulation.generate(count)
    raw = data["requests"]
    if not isinstance(raw, list) or not all(
        isinstance(r, int) and not isinstance(r, bool) for r in raw
    ):
        msg = "'requests' must be a list of integers"
        raise _PayloadError(msg)
    return list(raw)


def create_app(config: DiskConfig | None = None) -> Flask:
    """Create and configure the Flask application.

    Args:
        config: Simulation settings (read from the environment if omitted).

    Returns:
        A configured Flask application ready to serve.

    """
    simulation = Simulation(config if config is not None else DiskConfig.from_env())

    app = Flask(__name__)

    @app.route("/api/config")
    def show_config() -> Response:  # pyright: ignore[reportUnusedFunction]
        """Return the disk geometry and default workload size."""
        cfg = simulation.config
        return jsonify(
            {
                "cylinders": cfg.cylinders,
                "request_count": cfg.request_count,
                "max_requests": cfg.max_requests,
                "always_to_boundary": cfg.always_to_boundary,
            }
        )

    @app.route("/api/simulate", methods=["POST"])
    def simulate() -> tuple[Response, int] | Response:  # pyright: ignore[reportUnusedFunction]
        """Run every policy over one workload.

        Expects JSON body: ``{"head": 53, "direction": "outward",
        "requests": [98, 183, ...]}``.  ``requests`` may be replaced by
        ``count`` (or omitted) to use a generated workload.
        Workloads larger than ``max_requests`` are rejected with 400, and
        a workload that cannot be allocated answers 503.

        Returns:
            JSON with the workload and one result per policy.

        """
        data = request.get_json(silent=True)
        if not isinstance(data, dict) or "head" not in data:
            return jsonify({"error": "Missing 'head' field"}), _HTTP_BAD_REQUEST

        try:
            head = _read_int(data, "head")
            direction = _read_direction(data)
            requests = _read_requests(data, simulation)
            report = simulation.run(requests, head=head, direction=direction)
        except (_PayloadError, DiskRangeError, WorkloadTooLargeError) as exc:
            return jsonify({"error": str(exc)}), _HTTP_BAD_REQUEST
        except MemoryError:
            return jsonify({"error": "out of memory"}), _HTTP_SERVICE_UNAVAILABLE

        return jsonify(report.to_dict())

    @app.route("/api/log")
    def show_log() -> Response:  # pyright: ignore[reportUnusedFunction]
        """Return the simulation log collected since startup."""
        return jsonify({"entries": simulation.logger.lines()})

    return app


def main() -> None:
    """Run the API development server.

    This is the ``py-disksim-web`` console entry point.
    """
    app = create_app()
    app.run(debug=True, port=8080)
