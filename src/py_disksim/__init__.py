"""Disk scheduling simulator — FCFS, SCAN and C-SCAN head movement.

Re-exports the core symbols so callers can write::

    from py_disksim import Direction, fcfs, scan, cscan

The console front end lives in ``py_disksim.repl`` and the optional
JSON API in ``py_disksim.web``.
"""

from py_disksim.config import ConfigError, DiskConfig
from py_disksim.disk import (
    DEFAULT_CYLINDERS,
    CSCANPolicy,
    Direction,
    DiskPolicy,
    DiskRangeError,
    FCFSPolicy,
    SCANPolicy,
    SortedView,
    cscan,
    fcfs,
    scan,
    sorted_view,
    total_movement,
)
from py_disksim.simulation import (
    PolicyOutcome,
    Simulation,
    SimulationReport,
    WorkloadTooLargeError,
    format_report,
)
from py_disksim.workload import InputError, generate_requests, load_requests, parse_requests

__all__ = [
    "DEFAULT_CYLINDERS",
    "CSCANPolicy",
    "ConfigError",
    "Direction",
    "DiskConfig",
    "DiskPolicy",
    "DiskRangeError",
    "FCFSPolicy",
    "InputError",
    "PolicyOutcome",
    "SCANPolicy",
    "Simulation",
    "SimulationReport",
    "SortedView",
    "WorkloadTooLargeError",
    "cscan",
    "fcfs",
    "format_report",
    "generate_requests",
    "load_requests",
    "parse_requests",
    "scan",
    "sorted_view",
    "total_movement",
]
