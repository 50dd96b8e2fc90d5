"""Simulation log — a structured record of what each run did.

The scheduling policies themselves are pure: they never log or print.
Everything observable about a run (which workload was used, which
policy produced which total, which policy failed) is recorded here by
the ``Simulation`` driver, and the presentation layer decides whether
and how to show it.

- **LogLevel** — severity levels ordered for filtering (DEBUG < ERROR).
- **LogEntry** — a single structured record (level, message, source,
  and the policy the entry is about, if any).
- **Logger** — an append-only log with filtering and clearing, optionally
  capped so the oldest entries fall off once it is full.

Design choices:
    - **IntEnum for levels** so they compare naturally with ``<``.
    - **Frozen dataclass for entries** — log records should be immutable.
    - **In memory, per simulation** — no global logger, so two
      simulations never interleave their records.
    - **Bounded by default in the driver** — a long-lived web app runs
      many simulations against one log, so the log keeps only the most
      recent ``DEFAULT_MAX_ENTRIES`` records.
"""

from collections import deque
from dataclasses import dataclass
from enum import IntEnum

DEFAULT_MAX_ENTRIES = 1000


class LogLevel(IntEnum):
    """Severity levels for log entries."""

    DEBUG = 0
    INFO = 1
    WARNING = 2
    ERROR = 3


@dataclass(frozen=True)
class LogEntry:
    """A single structured log record.

    Attributes:
        level: The severity of this event.
        message: A human-readable description of what happened.
        source: The component that generated the event (e.g. "simulation").
        policy: Name of the scheduling policy involved, if any.

    """

    level: LogLevel
    message: str
    source: str
    policy: str | None = None

    def __str__(self) -> str:
        """Format as ``[LEVEL] source(policy): message``."""
        where = f"{self.source}({self.policy})" if self.policy else self.source
        return f"[{self.level.name}] {where}: {self.message}"


class Logger:
    """Append-only log buffer with filtering."""

    def __init__(
        self,
        *,
        min_level: LogLevel = LogLevel.DEBUG,
        max_entries: int | None = None,
    ) -> None:
        """Create an empty logger.

        Args:
            min_level: Entries below this level are dropped on arrival.
            max_entries: Keep at most this many entries, discarding the
                oldest first.  ``None`` keeps everything.

        Raises:
            ValueError: If *max_entries* is not positive.

        """
        if max_entries is not None and max_entries <= 0:
            msg = f"max_entries must be positive, got {max_entries}"
            raise ValueError(msg)
        self._entries: deque[LogEntry] = deque(maxlen=max_entries)
        self._min_level = min_level

    @property
    def max_entries(self) -> int | None:
        """Return the entry cap, or None if the log is unbounded."""
        return self._entries.maxlen

    @property
    def entries(self) -> list[LogEntry]:
        """Return all log entries in chronological order."""
        return list(self._entries)

    def log(
        self,
        level: LogLevel,
        message: str,
        *,
        source: str,
        policy: str | None = None,
    ) -> None:
        """Append a new entry to the log."""
        if level < self._min_level:
            return
        self._entries.append(LogEntry(level=level, message=message, source=source, policy=policy))

    def filter(
        self,
        *,
        min_level: LogLevel | None = None,
        source: str | None = None,
        policy: str | None = None,
    ) -> list[LogEntry]:
        """Return entries matching the given criteria.

        Args:
            min_level: If set, only return entries at or above this level.
            source: If set, only return entries from this source.
            policy: If set, only return entries about this policy.

        Returns:
            A filtered list of log entries.

        """
        result = list(self._entries)
        if min_level is not None:
            result = [e for e in result if e.level >= min_level]
        if source is not None:
            result = [e for e in result if e.source == source]
        if policy is not None:
            result = [e for e in result if e.policy == policy]
        return result

    def lines(self) -> list[str]:
        """Return every entry formatted for display."""
        return [str(e) for e in self._entries]

    def clear(self) -> None:
        """Remove all log entries."""
        self._entries.clear()
