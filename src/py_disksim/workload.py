"""Workloads — where request sets come from.

A request set is just an ordered list of cylinder numbers.  The order
matters to FCFS (it is the arrival order) and is thrown away by the
sweeping policies.  Three sources are supported:

- ``generate_requests`` — uniformly random cylinders, like a busy disk
  with no locality at all.
- ``parse_requests`` — a list typed by a person, e.g. ``"98, 183 37"``.
- ``load_requests`` — a text file with one cylinder per line.

Every source validates against the disk geometry, so the policies only
ever see cylinders that exist.
"""

import random
import re
from pathlib import Path

from py_disksim.disk import DEFAULT_CYLINDERS, DiskRangeError

_SEPARATORS = re.compile(r"[,\s]+")


class InputError(ValueError):
    """Raise when user-supplied text cannot be turned into input."""


def generate_requests(
    count: int,
    *,
    cylinders: int = DEFAULT_CYLINDERS,
    rng: random.Random | None = None,
) -> list[int]:
    """Return *count* cylinders drawn uniformly from ``[0, cylinders)``.

    Args:
        count: Number of requests to produce.
        cylinders: Number of cylinders on the disk.
        rng: Random source; pass a seeded ``random.Random`` for
            reproducible workloads.

    """
    if count < 0:
        msg = f"Request count must not be negative, got {count}"
        raise ValueError(msg)
    source = rng if rng is not None else random.Random()
    return [source.randrange(cylinders) for _ in range(count)]


def parse_cylinder(text: str, *, cylinders: int = DEFAULT_CYLINDERS) -> int:
    """Parse one cylinder number and check it lies on the disk.

    Raises:
        InputError: If *text* is not an integer.
        DiskRangeError: If the value is outside ``[0, cylinders)``.

    """
    try:
        value = int(text.strip())
    except ValueError:
        msg = f"Not a cylinder number: {text.strip()!r}"
        raise InputError(msg) from None
    if not 0 <= value < cylinders:
        msg = f"Cylinder {value} outside 0-{cylinders - 1}"
        raise DiskRangeError(msg)
    return value


def parse_requests(text: str, *, cylinders: int = DEFAULT_CYLINDERS) -> list[int]:
    """Parse a comma- or whitespace-separated list of cylinders."""
    tokens = [t for t in _SEPARATORS.split(text.strip()) if t]
    return [parse_cylinder(t, cylinders=cylinders) for t in tokens]


def load_requests(path: Path | str, *, cylinders: int = DEFAULT_CYLINDERS) -> list[int]:
    """Read a request file: one cylinder per line, blank lines ignored.

    Raises:
        InputError: If a line is not an integer (the message names the line).
        DiskRangeError: If a cylinder lies outside the disk.

    """
    requests: list[int] = []
    text = Path(path).read_text(encoding="utf-8")
    for lineno, line in enumerate(text.splitlines(), start=1):
        if not line.strip():
            continue
        try:
            requests.append(parse_cylinder(line, cylinders=cylinders))
        except InputError as exc:
            msg = f"{path}:{lineno}: {exc}"
            raise InputError(msg) from None
    return requests
