"""In-memory audit store (append-only list).

Reads walk the list backwards so equal timestamps still come out newest first.
"""

import asyncio
from datetime import datetime

from gatehouse.domain.entities import AuditEvent, AuditFilters


class MemoryAuditStore:
    """In-memory AuditStoreProtocol. Events are immutable, so no copying."""

    def __init__(self) -> None:
        self._events: list[AuditEvent] = []
        self._lock = asyncio.Lock()

    async def append(self, event: AuditEvent) -> None:
        async with self._lock:
            self._events.append(event)

    async def query(
        self, filters: AuditFilters, *, limit: int, offset: int
    ) -> list[AuditEvent]:
        async with self._lock:
            matching = [e for e in reversed(self._events) if filters.matches(e)]
        matching.sort(key=lambda e: e.created_at, reverse=True)
        return matching[offset : offset + limit]

    async def since(self, start: datetime) -> list[AuditEvent]:
        async with self._lock:
            events = [e for e in reversed(self._events) if e.created_at >= start]
        events.sort(key=lambda e: e.created_at, reverse=True)
        return events

    def __len__(self) -> int:
        return len(self._events)
