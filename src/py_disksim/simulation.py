"""Simulation driver — run every policy against the same workload.

The driver is the caller the policies assume: it validates input once,
hands each policy its own view of the request set, collects one
``PolicyOutcome`` per policy, and logs what happened.  The policies stay
pure; the driver owns all the bookkeeping.

A policy that runs out of memory while building its working copy does
not take the whole run down.  Its outcome is recorded as failed (no
movement, an error message), an ERROR entry goes to the log, and the
remaining policies still run.
"""

import random
from collections.abc import Sequence
from dataclasses import dataclass, field

from py_disksim.config import DiskConfig
from py_disksim.disk import (
    CSCANPolicy,
    Direction,
    DiskPolicy,
    FCFSPolicy,
    SCANPolicy,
    check_range,
    total_movement,
)
from py_disksim.logging import DEFAULT_MAX_ENTRIES, Logger, LogLevel
from py_disksim.workload import generate_requests

_SOURCE = "simulation"
_PREVIEW_COUNT = 10
_SECTION_RULE = "=" * 10


class WorkloadTooLargeError(ValueError):
    """Raised when a workload exceeds the configured ``max_requests``."""


# Closed-form reminders printed above each policy's total.
_FORMULAS: dict[str, dict[Direction | None, str]] = {
    "FCFS": {None: "Total = sum of |next - current|"},
    "SCAN": {
        Direction.OUTWARD: "(edge - initial) + (edge - min)",
        Direction.INWARD: "(initial - 0) + (max - 0)",
    },
    "C-SCAN": {
        Direction.OUTWARD: "(edge - initial) + edge + (last_before_initial)",
        Direction.INWARD: "(initial - 0) + edge + (edge - first_after_initial)",
    },
}


@dataclass(frozen=True)
class PolicyOutcome:
    """The result of running one policy.

    Attributes:
        policy: Policy name ("FCFS", "SCAN", "C-SCAN").
        movement: Total head movement, or ``None`` if the run failed.
        order: Service order of the real requests.
        trace: Every head stop, edge stops included.
        error: Why the run failed, if it did.

    """

    policy: str
    movement: int | None
    order: list[int] = field(default_factory=list)
    trace: list[int] = field(default_factory=list)
    error: str | None = None

    @property
    def ok(self) -> bool:
        """Return True if the policy produced a movement total."""
        return self.error is None


@dataclass(frozen=True)
class SimulationReport:
    """Everything one simulation run produced."""

    requests: list[int]
    head: int
    direction: Direction
    cylinders: int
    outcomes: list[PolicyOutcome]

    def outcome(self, policy: str) -> PolicyOutcome:
        """Return the outcome for *policy*.

        Raises:
            KeyError: If no policy by that name ran.

        """
        for result in self.outcomes:
            if result.policy == policy:
                return result
        raise KeyError(policy)

    def movements(self) -> dict[str, int | None]:
        """Return ``{policy: movement}`` for every policy."""
        return {r.policy: r.movement for r in self.outcomes}

    def to_dict(self) -> dict[str, object]:
        """Return a JSON-friendly view of the report."""
        return {
            "cylinders": self.cylinders,
            "head": self.head,
            "direction": str(self.direction),
            "requests": list(self.requests),
            "results": [
                {
                    "policy": r.policy,
                    "movement": r.movement,
                    "order": r.order,
                    "trace": r.trace,
                    "error": r.error,
                }
                for r in self.outcomes
            ],
        }


class Simulation:
    """Run FCFS, SCAN and C-SCAN over one request set."""

    def __init__(self, config: DiskConfig | None = None, *, logger: Logger | None = None) -> None:
        """Create a simulation.

        Args:
            config: Disk geometry and workload settings.
            logger: Where to record events (a fresh bounded logger if
                omitted).

        """
        self._config = config if config is not None else DiskConfig()
        self._logger = logger if logger is not None else Logger(max_entries=DEFAULT_MAX_ENTRIES)
        self._rng = random.Random(self._config.seed)

    @property
    def config(self) -> DiskConfig:
        """Return the simulation configuration."""
        return self._config

    @property
    def logger(self) -> Logger:
        """Return the simulation log."""
        return self._logger

    def policies(self, direction: Direction) -> list[DiskPolicy]:
        """Return the policies to compare, configured for *direction*."""
        cylinders = self._config.cylinders
        edge = self._config.always_to_boundary
        return [
            FCFSPolicy(cylinders=cylinders),
            SCANPolicy(direction=direction, cylinders=cylinders, always_to_boundary=edge),
            CSCANPolicy(direction=direction, cylinders=cylinders, always_to_boundary=edge),
        ]

    def generate(self, count: int | None = None) -> list[int]:
        """Generate a random workload sized by the configuration.

        Raises:
            WorkloadTooLargeError: If *count* exceeds ``max_requests``.
            MemoryError: If the workload cannot be allocated (logged first).

        """
        wanted = self._config.request_count if count is None else count
        self._check_size(wanted)
        try:
            requests = generate_requests(wanted, cylinders=self._config.cylinders, rng=self._rng)
        except MemoryError:
            self._logger.log(
                LogLevel.ERROR,
                f"out of memory generating {wanted} requests",
                source=_SOURCE,
            )
            raise
        self._logger.log(LogLevel.DEBUG, f"generated {len(requests)} requests", source=_SOURCE)
        return requests

    def run(
        self,
        requests: Sequence[int],
        *,
        head: int,
        direction: Direction,
    ) -> SimulationReport:
        """Run every policy against *requests*.

        Args:
            requests: The request set, in arrival order.  Never mutated.
            head: Initial head position.
            direction: Initial sweep direction for SCAN and C-SCAN.

        Raises:
            DiskRangeError: If the head or a request lies off the disk.
            WorkloadTooLargeError: If there are more than ``max_requests``
                requests.

        """
        self._check_size(len(requests))
        check_range(requests, head=head, cylinders=self._config.cylinders)
        snapshot = list(requests)
        self._logger.log(
            LogLevel.INFO,
            f"run: {len(snapshot)} requests, head={head}, direction={direction}",
            source=_SOURCE,
        )
        outcomes = [self._run_policy(p, snapshot, head) for p in self.policies(direction)]
        return SimulationReport(
            requests=snapshot,
            head=head,
            direction=direction,
            cylinders=self._config.cylinders,
            outcomes=outcomes,
        )

    def _check_size(self, count: int) -> None:
        limit = self._config.max_requests
        if count > limit:
            msg = f"workload of {count} requests exceeds the limit of {limit}"
            raise WorkloadTooLargeError(msg)

    def _run_policy(self, policy: DiskPolicy, requests: list[int], head: int) -> PolicyOutcome:
        try:
            order = policy.schedule(list(requests), head=head)
            trace = policy.trace(list(requests), head=head)
            movement = total_movement(trace, head=head)
        except MemoryError:
            self._logger.log(
                LogLevel.ERROR,
                "out of memory building the working copy",
                source=_SOURCE,
                policy=policy.name,
            )
            return PolicyOutcome(policy=policy.name, movement=None, error="out of memory")
        self._logger.log(
            LogLevel.INFO,
            f"total head movement {movement}",
            source=_SOURCE,
            policy=policy.name,
        )
        return PolicyOutcome(policy=policy.name, movement=movement, order=order, trace=trace)


def describe_direction(direction: Direction) -> str:
    """Return a human-friendly description of *direction*."""
    if direction is Direction.OUTWARD:
        return "Outward (toward higher cylinders)"
    return "Inward (toward lower cylinders)"


def format_report(report: SimulationReport) -> str:
    """Format a report the way the classic console simulator prints it.

    Returns:
        A multi-line string: the workload preview, then one section per
        policy with its formula reminder and total.

    """
    preview = " ".join(str(r) for r in report.requests[:_PREVIEW_COUNT])
    direction_text = describe_direction(report.direction)
    lines = [
        f"First {_PREVIEW_COUNT} cylinder requests: {preview} ...",
        f"Initial head position: {report.head}",
        f"Initial direction: {direction_text}",
    ]
    for result in report.outcomes:
        formulas = _FORMULAS.get(result.policy, {})
        formula = formulas.get(None) or formulas.get(report.direction, "")
        lines.append("")
        lines.append(f"{_SECTION_RULE} {result.policy} {_SECTION_RULE}")
        if formula:
            lines.append(f"    Formula: {formula}")
            lines.append("")
        if result.ok:
            suffix = "" if result.policy == "FCFS" else f" (Direction: {direction_text})"
            lines.append(
                f"    [{result.policy}] Total head movement: "
                f"{result.movement} cylinders{suffix}"
            )
        else:
            lines.append(f"    [{result.policy}] Failed: {result.error}")
    return "\n".join(lines)
