"""Simulation configuration — disk geometry and workload size.

Nothing in the simulator reads a process-wide constant: the cylinder
count and the number of generated requests travel in a ``DiskConfig``
that is handed to whoever needs them.

A configuration can also be read from environment variables, the same
``KEY=VALUE`` strings every process inherits from its parent:

    ============================  ===========================  =======
    Variable                      Field                        Default
    ============================  ===========================  =======
    ``DISKSIM_CYLINDERS``         ``cylinders``                5000
    ``DISKSIM_REQUESTS``          ``request_count``            5
    ``DISKSIM_MAX_REQUESTS``      ``max_requests``             100000
    ``DISKSIM_SEED``              ``seed``                     (none)
    ``DISKSIM_ALWAYS_TO_EDGE``    ``always_to_boundary``       0
    ``DISKSIM_VERBOSE``           ``verbose``                  0
    ============================  ===========================  =======
"""

import os
from collections.abc import Mapping
from dataclasses import dataclass

from py_disksim.disk import DEFAULT_CYLINDERS

DEFAULT_REQUEST_COUNT = 5
DEFAULT_MAX_REQUESTS = 100_000

_ENV_PREFIX = "DISKSIM_"
_TRUE_WORDS = frozenset({"1", "true", "yes", "on"})
_FALSE_WORDS = frozenset({"0", "false", "no", "off", ""})


class ConfigError(ValueError):
    """Raise when a configuration value is invalid."""


@dataclass(frozen=True)
class DiskConfig:
    """Settings shared by the workload generator and the policies.

    Attributes:
        cylinders: Number of cylinders on the disk (valid indices are
            ``0`` to ``cylinders - 1``).
        request_count: How many requests the generator produces.
        max_requests: Largest workload a single run accepts.
        seed: Seed for the request generator (``None`` = unseeded).
        always_to_boundary: Make SCAN/C-SCAN run to the disk edge even
            when nothing waits behind the head.
        verbose: Show the simulation log after the report.

    """

    cylinders: int = DEFAULT_CYLINDERS
    request_count: int = DEFAULT_REQUEST_COUNT
    max_requests: int = DEFAULT_MAX_REQUESTS
    seed: int | None = None
    always_to_boundary: bool = False
    verbose: bool = False

    def __post_init__(self) -> None:
        """Reject geometry the simulator cannot represent."""
        if self.cylinders <= 0:
            msg = f"cylinders must be positive, got {self.cylinders}"
            raise ConfigError(msg)
        if self.request_count < 0:
            msg = f"request_count must not be negative, got {self.request_count}"
            raise ConfigError(msg)
        if self.max_requests <= 0:
            msg = f"max_requests must be positive, got {self.max_requests}"
            raise ConfigError(msg)
        if self.request_count > self.max_requests:
            msg = f"request_count {self.request_count} exceeds max_requests {self.max_requests}"
            raise ConfigError(msg)

    @property
    def max_cylinder(self) -> int:
        """Return the highest valid cylinder index."""
        return self.cylinders - 1

    @classmethod
    def from_env(cls, environ: Mapping[str, str] | None = None) -> "DiskConfig":
        """Build a configuration from ``DISKSIM_*`` variables.

        Args:
            environ: Variables to read (defaults to ``os.environ``).

        Raises:
            ConfigError: If a variable holds an unusable value.

        """
        env = os.environ if environ is None else environ
        seed_text = env.get(f"{_ENV_PREFIX}SEED", "").strip()
        return cls(
            cylinders=_int_var(env, "CYLINDERS", DEFAULT_CYLINDERS),
            request_count=_int_var(env, "REQUESTS", DEFAULT_REQUEST_COUNT),
            max_requests=_int_var(env, "MAX_REQUESTS", DEFAULT_MAX_REQUESTS),
            seed=_parse_int("SEED", seed_text) if seed_text else None,
            always_to_boundary=_bool_var(env, "ALWAYS_TO_EDGE"),
            verbose=_bool_var(env, "VERBOSE"),
        )


def _parse_int(name: str, text: str) -> int:
    try:
        return int(text)
    except ValueError:
        msg = f"{_ENV_PREFIX}{name} must be an integer, got {text!r}"
        raise ConfigError(msg) from None


def _int_var(env: Mapping[str, str], name: str, default: int) -> int:
    text = env.get(f"{_ENV_PREFIX}{name}", "").strip()
    return _parse_int(name, text) if text else default


def _bool_var(env: Mapping[str, str], name: str) -> bool:
    text = env.get(f"{_ENV_PREFIX}{name}", "").strip().lower()
    if text in _TRUE_WORDS:
        return True
    if text in _FALSE_WORDS:
        return False
    msg = f"{_ENV_PREFIX}{name} must be a boolean flag, got {text!r}"
    raise ConfigError(msg)
