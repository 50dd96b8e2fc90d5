"""Disk scheduling algorithms — measuring how far the head travels.

When several I/O requests are waiting, the disk arm must move between
cylinders to service them.  The dominant cost is **seek distance** — how
many cylinders the head crosses.  A scheduling policy decides the
*order* of service, and that order decides the total head movement.

Think of a disk arm like an elevator in a building:
    - **FCFS** — stop at every floor in the order people pressed buttons.
    - **SCAN** — go all the way up, then all the way down (elevator).
    - **C-SCAN** — go all the way up, ride the express back to the
      ground floor, then go up again.

Policies:
    - ``FCFSPolicy`` — simple and fair, but the arm zigzags.
    - ``SCANPolicy`` — bounded wait, one reversal at a disk edge.
    - ``CSCANPolicy`` — uniform wait, a non-servicing return sweep
      that still costs the full width of the disk.

All policies implement the ``DiskPolicy`` protocol (Strategy pattern).
Each exposes three views of the same run:

    - ``schedule()`` — the order in which real requests are serviced.
    - ``trace()`` — every stop the head makes, including the synthetic
      stops at a disk edge (the boundary pad and the wraparound jump).
    - ``movement()`` — the sum of ``|next - current|`` over the trace.

SCAN and C-SCAN share one ordering helper, ``sorted_view()``, which
sorts a private copy of the requests and splits it into the batch
*ahead* of the head (served first) and the batch *behind* it.
"""

from bisect import bisect_left, bisect_right
from collections.abc import Sequence
from dataclasses import dataclass
from enum import StrEnum
from typing import Protocol

DEFAULT_CYLINDERS = 5000

# Numeric codes used by the classic prompt (0 = outward, 1 = inward).
_DIRECTION_ALIASES = {
    "0": "outward",
    "1": "inward",
    "up": "outward",
    "down": "inward",
    "out": "outward",
    "in": "inward",
}


class DiskRangeError(ValueError):
    """Raise when a head position or request lies outside the disk."""


class Direction(StrEnum):
    """The initial sweep direction of the head."""

    OUTWARD = "outward"  # toward cylinder N-1
    INWARD = "inward"  # toward cylinder 0

    @classmethod
    def parse(cls, text: str) -> "Direction":
        """Parse a direction name, alias, or numeric code.

        Args:
            text: ``"outward"``/``"inward"``, ``"up"``/``"down"``, or the
                numeric codes ``"0"``/``"1"``.

        Raises:
            ValueError: If *text* names no direction.

        """
        key = text.strip().lower()
        try:
            return cls(_DIRECTION_ALIASES.get(key, key))
        except ValueError:
            msg = f"Unknown direction: {text!r} (expected 0/outward or 1/inward)"
            raise ValueError(msg) from None


def check_range(requests: Sequence[int], *, head: int, cylinders: int) -> None:
    """Verify that the head and every request lie in ``[0, cylinders)``.

    Values are never clamped — an out-of-range cylinder is a caller bug.

    Raises:
        DiskRangeError: On the first out-of-range value.

    """
    if cylinders <= 0:
        msg = f"Cylinder count must be positive, got {cylinders}"
        raise DiskRangeError(msg)
    if not 0 <= head < cylinders:
        msg = f"Head position {head} outside 0-{cylinders - 1}"
        raise DiskRangeError(msg)
    for cylinder in requests:
        if not 0 <= cylinder < cylinders:
            msg = f"Request {cylinder} outside 0-{cylinders - 1}"
            raise DiskRangeError(msg)


@dataclass(frozen=True)
class SortedView:
    """A sorted copy of a request set, split around the head.

    Attributes:
        ordered: All requests in ascending order.
        split: Outward — first index whose value is ``>= head``.
            Inward — last index whose value is ``<= head`` (``-1`` if none).
        direction: The sweep direction the split was computed for.

    """

    ordered: tuple[int, ...]
    split: int
    direction: Direction

    @property
    def ahead(self) -> list[int]:
        """Return requests served on the first pass, in service order.

        A request equal to the head is always part of this batch.
        """
        if self.direction is Direction.OUTWARD:
            return list(self.ordered[self.split :])
        return list(reversed(self.ordered[: self.split + 1]))

    @property
    def behind(self) -> list[int]:
        """Return the remaining requests in ascending order."""
        if self.direction is Direction.OUTWARD:
            return list(self.ordered[: self.split])
        return list(self.ordered[self.split + 1 :])


def sorted_view(requests: Sequence[int], *, head: int, direction: Direction) -> SortedView:
    """Sort a private copy of *requests* and split it around *head*."""
    ordered = tuple(sorted(requests))
    if direction is Direction.OUTWARD:
        split = bisect_left(ordered, head)
    else:
        split = bisect_right(ordered, head) - 1
    return SortedView(ordered=ordered, split=split, direction=direction)


def total_movement(stops: Sequence[int], *, head: int) -> int:
    """Sum ``|next - current|`` over *stops*, starting from *head*."""
    total = 0
    current = head
    for stop in stops:
        total += abs(stop - current)
        current = stop
    return total


class DiskPolicy(Protocol):
    """Protocol for disk scheduling policies (Strategy pattern)."""

    name: str

    def schedule(self, requests: Sequence[int], *, head: int) -> list[int]:
        """Return the order in which requests are serviced.

        Args:
            requests: Cylinder numbers to visit, in arrival order.
            head: Current position of the disk head.

        Returns:
            Ordered list of cylinder numbers.

        """
        ...  # pragma: no cover

    def trace(self, requests: Sequence[int], *, head: int) -> list[int]:
        """Return every head stop, including synthetic edge stops."""
        ...  # pragma: no cover

    def movement(self, requests: Sequence[int], *, head: int) -> int:
        """Return the total head movement in cylinders."""
        ...  # pragma: no cover


class FCFSPolicy:
    """First Come, First Served — service in arrival order.

    The simplest policy.  Fair (no starvation), but the arm zigzags
    wildly across the disk, producing high total seek distance.
    Direction plays no part.

    Args:
        cylinders: Number of cylinders on the disk (used for range checks).

    """

    name = "FCFS"

    def __init__(self, *, cylinders: int = DEFAULT_CYLINDERS) -> None:
        """Create an FCFS policy for a disk of *cylinders* cylinders."""
        self._cylinders = cylinders

    @property
    def cylinders(self) -> int:
        """Return the number of cylinders on the disk."""
        return self._cylinders

    def schedule(self, requests: Sequence[int], *, head: int) -> list[int]:
        """Return requests in their original order."""
        check_range(requests, head=head, cylinders=self._cylinders)
        return list(requests)

    def trace(self, requests: Sequence[int], *, head: int) -> list[int]:
        """FCFS never stops anywhere but at a request."""
        return self.schedule(requests, head=head)

    def movement(self, requests: Sequence[int], *, head: int) -> int:
        """Return the total head movement in arrival order."""
        return total_movement(self.trace(requests, head=head), head=head)


class _SweepGeometry:
    """Direction, disk size and edge helpers shared by SCAN and C-SCAN."""

    def __init__(
        self,
        *,
        direction: Direction = Direction.OUTWARD,
        cylinders: int = DEFAULT_CYLINDERS,
        always_to_boundary: bool = False,
    ) -> None:
        """Record the sweep direction and disk geometry."""
        self._direction = direction
        self._cylinders = cylinders
        self._always_to_boundary = always_to_boundary

    @property
    def direction(self) -> Direction:
        """Return the initial sweep direction."""
        return self._direction

    @property
    def cylinders(self) -> int:
        """Return the number of cylinders on the disk."""
        return self._cylinders

    @property
    def always_to_boundary(self) -> bool:
        """Return whether the head always runs to the disk edge."""
        return self._always_to_boundary

    def _far_edge(self) -> int:
        return self._cylinders - 1 if self._direction is Direction.OUTWARD else 0

    def _near_edge(self) -> int:
        return 0 if self._direction is Direction.OUTWARD else self._cylinders - 1

    def _view(self, requests: Sequence[int], head: int) -> SortedView:
        check_range(requests, head=head, cylinders=self._cylinders)
        return sorted_view(requests, head=head, direction=self._direction)

    def _visits_edge(self, view: SortedView) -> bool:
        # Edge stop only when a reversal or wrap follows, or in classic mode.
        if not view.ordered:
            return False
        return bool(view.behind) or self._always_to_boundary


class SCANPolicy(_SweepGeometry):
    """SCAN (Elevator algorithm) — sweep one direction, then reverse.

    The arm moves toward the far edge servicing everything on the way,
    carries on to the edge itself, then reverses and services the rest
    on the way back.

    Args:
        direction: Initial sweep direction.
        cylinders: Number of cylinders on the disk.
        always_to_boundary: Travel to the far edge even when nothing is
            left behind the head (the classic textbook trace).

    """

    name = "SCAN"

    def schedule(self, requests: Sequence[int], *, head: int) -> list[int]:
        """Return requests in SCAN (elevator) order."""
        view = self._view(requests, head)
        if self._direction is Direction.OUTWARD:
            return view.ahead + list(reversed(view.behind))
        return view.ahead + view.behind

    def trace(self, requests: Sequence[int], *, head: int) -> list[int]:
        """Return head stops: ahead batch, edge, then the reversed batch."""
        view = self._view(requests, head)
        stops = view.ahead
        if self._visits_edge(view):
            edge = self._far_edge()
            last = stops[-1] if stops else head
            if last != edge:
                stops.append(edge)
        if self._direction is Direction.OUTWARD:
            stops.extend(reversed(view.behind))
        else:
            stops.extend(view.behind)
        return stops

    def movement(self, requests: Sequence[int], *, head: int) -> int:
        """Return the total head movement, edge run included."""
        return total_movement(self.trace(requests, head=head), head=head)


class CSCANPolicy(_SweepGeometry):
    """Circular SCAN — sweep one direction, jump back, sweep again.

    Unlike SCAN, C-SCAN services requests in one direction only.  After
    reaching the far edge the arm returns to the opposite edge without
    servicing anything.  That return still crosses the whole disk, so
    it is charged ``cylinders - 1``.

    Args:
        direction: Sweep direction.
        cylinders: Number of cylinders on the disk.
        always_to_boundary: Run to the edge and charge the return sweep
            on every non-empty run, even when nothing waits on the
            wrapped side.

    """

    name = "C-SCAN"

    def schedule(self, requests: Sequence[int], *, head: int) -> list[int]:
        """Return requests in C-SCAN order."""
        view = self._view(requests, head)
        if self._direction is Direction.OUTWARD:
            return view.ahead + view.behind
        return view.ahead + list(reversed(view.behind))

    def trace(self, requests: Sequence[int], *, head: int) -> list[int]:
        """Return head stops: ahead batch, far edge, near edge, wrapped batch."""
        view = self._view(requests, head)
        stops = view.ahead
        if not self._visits_edge(view):
            return stops
        far, near = self._far_edge(), self._near_edge()
        last = stops[-1] if stops else head
        if last != far:
            stops.append(far)
        stops.append(near)
        if self._direction is Direction.OUTWARD:
            stops.extend(view.behind)
        else:
            stops.extend(reversed(view.behind))
        return stops

    def movement(self, requests: Sequence[int], *, head: int) -> int:
        """Return the total head movement, wraparound jump included."""
        return total_movement(self.trace(requests, head=head), head=head)


# -- Function-style entry points ----------------------------------------------


def fcfs(
    requests: Sequence[int],
    initial_position: int,
    *,
    cylinders: int = DEFAULT_CYLINDERS,
) -> int:
    """Return the FCFS head movement for *requests*."""
    return FCFSPolicy(cylinders=cylinders).movement(requests, head=initial_position)


def scan(
    requests: Sequence[int],
    initial_position: int,
    direction: Direction,
    *,
    cylinders: int = DEFAULT_CYLINDERS,
    always_to_boundary: bool = False,
) -> int:
    """Return the SCAN head movement for *requests*."""
    policy = SCANPolicy(
        direction=direction,
        cylinders=cylinders,
        always_to_boundary=always_to_boundary,
    )
    return policy.movement(requests, head=initial_position)


def cscan(
    requests: Sequence[int],
    initial_position: int,
    direction: Direction,
    *,
    cylinders: int = DEFAULT_CYLINDERS,
    always_to_boundary: bool = False,
) -> int:
    """Return the C-SCAN head movement for *requests*."""
    policy = CSCANPolicy(
        direction=direction,
        cylinders=cylinders,
        always_to_boundary=always_to_boundary,
    )
    return policy.movement(requests, head=initial_position)
