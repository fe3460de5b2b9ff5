"""Audit log for shell activity.

Every command the shell dispatches, and every change an operation makes
to the host filesystem, is recorded here as a structured entry.  The log
lives in memory only and keeps the most recent ``DEFAULT_CAPACITY``
entries.  It never writes to stdout, so it cannot disturb
the command output the user sees.

- **LogLevel** — severity levels ordered DEBUG < INFO < WARNING < ERROR.
- **LogEntry** — a single structured record (level, message, source).
- **Logger** — a bounded log that drops its oldest entries when full.
"""

from collections import deque
from dataclasses import dataclass
from enum import IntEnum

DEFAULT_CAPACITY = 1000


class LogLevel(IntEnum):
    """Severity levels for log entries.

    Using IntEnum means levels compare with ``<`` / ``>`` naturally,
    which makes severity checks trivial.
    """

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
        source: The component that generated the event (``shell``,
            ``path``, ``file`` or ``dir``).

    """

    level: LogLevel
    message: str
    source: str

    def __str__(self) -> str:
        """Format as ``[LEVEL] source: message``."""
        return f"[{self.level.name}] {self.source}: {self.message}"


class Logger:
    """Bounded audit buffer that keeps the most recent entries."""

    def __init__(self, capacity: int = DEFAULT_CAPACITY) -> None:
        """Create an empty logger holding at most *capacity* entries.

        Raises:
            ValueError: If *capacity* is not positive.

        """
        if capacity < 1:
            msg = f"Log capacity must be positive, got {capacity}"
            raise ValueError(msg)
        self._entries: deque[LogEntry] = deque(maxlen=capacity)

    @property
    def capacity(self) -> int:
        """Return the maximum number of entries kept."""
        return self._entries.maxlen or 0

    @property
    def entries(self) -> list[LogEntry]:
        """Return the retained entries in chronological order."""
        return list(self._entries)

    def log(self, level: LogLevel, message: str, *, source: str) -> None:
        """Append a new entry, dropping the oldest once the log is full.

        Args:
            level: Severity of the event.
            message: Human-readable event description.
            source: Component that generated the event.

        """
        self._entries.append(LogEntry(level=level, message=message, source=source))
