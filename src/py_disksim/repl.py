"""Interactive console front end for the disk scheduling simulator.

The console session follows the classic lab exercise:

    1. **Ask** for the initial head position and sweep direction.
    2. **Generate** a random workload sized by the configuration.
    3. **Run** FCFS, SCAN and C-SCAN over that workload.
    4. **Print** one report section per policy.

This module keeps the I/O separate from the simulation.  The parsing
helpers (``read_position``, ``read_direction``) and ``format_banner``
are pure and testable; ``run()`` is the thin I/O wrapper that connects
them to ``stdin``/``stdout``.
"""

import sys

from py_disksim.config import ConfigError, DiskConfig
from py_disksim.disk import Direction, DiskRangeError
from py_disksim.simulation import Simulation, format_report
from py_disksim.workload import InputError, parse_cylinder

_BANNER = "===== Disk Scheduling Simulation ====="
_EXIT_OK = 0
_EXIT_BAD_INPUT = 1


def format_banner() -> str:
    """Return the session banner."""
    return f"\n{_BANNER}"


def read_position(text: str, *, cylinders: int) -> int:
    """Parse the initial head position typed at the prompt.

    Raises:
        InputError: If *text* is not a cylinder on this disk.

    """
    try:
        return parse_cylinder(text, cylinders=cylinders)
    except (InputError, DiskRangeError):
        msg = f"Initial position must be between 0 and {cylinders - 1}"
        raise InputError(msg) from None


def read_direction(text: str) -> Direction:
    """Parse the direction typed at the prompt (``0`` or ``1``).

    Raises:
        InputError: If *text* names no direction.

    """
    try:
        return Direction.parse(text)
    except ValueError:
        msg = "Direction must be 0 (outward) or 1 (inward)"
        raise InputError(msg) from None


def direction_menu() -> str:
    """Return the direction prompt text."""
    return (
        "\nSelect initial direction of head movement:\n"
        "0 - Outward (toward higher cylinder numbers)\n"
        "1 - Inward (toward lower cylinder numbers)\n"
        "Choice: "
    )


def run(config: DiskConfig | None = None) -> int:
    """Run one interactive simulation session.

    Args:
        config: Settings to use (read from the environment if omitted).

    Returns:
        The process exit status: 0 on success, 1 on invalid input.

    """
    try:
        config = config if config is not None else DiskConfig.from_env()
    except ConfigError as exc:
        print(f"\nError: {exc}")  # noqa: T201
        return _EXIT_BAD_INPUT

    simulation = Simulation(config)
    print(format_banner())  # noqa: T201

    try:
        head = read_position(
            input(f"Enter initial head position (0-{config.max_cylinder}): "),
            cylinders=config.cylinders,
        )
        direction = read_direction(input(direction_menu()))
    except InputError as exc:
        print(f"\nError: {exc}")  # noqa: T201
        return _EXIT_BAD_INPUT
    except (EOFError, KeyboardInterrupt):
        # Ctrl+D / Ctrl+C at a prompt — leave quietly
        print("\nInterrupted.")  # noqa: T201
        return _EXIT_BAD_INPUT

    requests = simulation.generate()
    report = simulation.run(requests, head=head, direction=direction)
    print()  # noqa: T201
    print(format_report(report))  # noqa: T201

    if config.verbose:
        print()  # noqa: T201
        print("\n".join(simulation.logger.lines()))  # noqa: T201
    return _EXIT_OK


def main() -> None:
    """Console entry point (``py-disksim``)."""
    sys.exit(run())
