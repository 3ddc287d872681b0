"""Append-only audit trail of engine state transitions."""

import logging
from collections import deque

from ulid import ULID

from booking_engine.clock import Clock
from booking_engine.models import SystemLogEntry

logger = logging.getLogger(__name__)


class SystemLog:
    """
    Bounded audit log.

    Keeps the most recent ``capacity`` entries; older ones fall off the end.
    Each entry is also written to the ``booking_engine.system_log`` logger.
    """

    def __init__(self, clock: Clock, capacity: int = 100):
        self.clock = clock
        self.capacity = capacity
        self._entries: deque[SystemLogEntry] = deque(maxlen=capacity)

    def append(
        self,
        action: str,
        details: str,
        flight_id: str | None = None,
        passenger_id: str | None = None,
        level: int = logging.INFO,
    ) -> SystemLogEntry:
        entry = SystemLogEntry(
            id=f"LOG-{ULID()}",
            timestamp=self.clock.now(),
            action=action,
            details=details,
            flight_id=flight_id,
            passenger_id=passenger_id,
        )
        self._entries.append(entry)
        logger.log(level, f"[{action}] {details}" + (f" (flight {flight_id})" if flight_id else ""))
        return entry

    def list_entries(
        self,
        limit: int | None = None,
        flight_id: str | None = None,
    ) -> list[SystemLogEntry]:
        """Newest first."""
        entries = [
            e for e in reversed(self._entries)
            if flight_id is None or e.flight_id == flight_id
        ]
        return entries[:limit] if limit is not None else entries

    def __len__(self) -> int:
        return len(self._entries)
