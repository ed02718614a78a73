"""Bounded in-memory audit trail of operational messages."""

from collections import deque

from payment_monitor.models.payment_failure import LogEntry, iso_timestamp
from payment_monitor.utils.logging import get_logger

logger = get_logger(__name__)

DEFAULT_CAPACITY = 50


class AuditLog:
    """Ring buffer keeping the most recent log entries for the /logs endpoint.

    Every entry is mirrored to the Python logging stream. Entries live only
    for the lifetime of the process.
    """

    def __init__(self, capacity: int = DEFAULT_CAPACITY) -> None:
        self._entries: deque[LogEntry] = deque(maxlen=capacity)

    @property
    def capacity(self) -> int:
        return self._entries.maxlen or 0

    def append(self, message: str) -> LogEntry:
        """Record a timestamped message, evicting the oldest past capacity.

        Args:
            message: Operational message to record.

        Returns:
            The created entry.
        """
        entry = LogEntry(timestamp=iso_timestamp(), message=message)
        self._entries.append(entry)
        logger.info("[%s] %s", entry.timestamp, entry.message)
        return entry

    def snapshot(self, n: int | None = None) -> list[LogEntry]:
        """Return the most recent ``n`` entries in insertion order.

        Args:
            n: Number of entries to return (default: all retained entries)

        Returns:
            A new list; mutating it does not affect the log.
        """
        entries = list(self._entries)
        if n is None:
            return entries
        if n <= 0:
            return []
        return entries[-n:]

    def __len__(self) -> int:
        return len(self._entries)
