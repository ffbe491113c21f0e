"""Best-effort audit logger.

Wraps an AuditStoreProtocol (database or memory) and implements
AuditProtocol on top of it:

- ``record`` never raises. A store failure or timeout parks the event in a
  bounded in-memory ring, logs the error, and returns ``Failure(AuditError)``
  that callers are free to ignore.
- ``query`` and ``stats`` read the store and fall back to the ring when the
  store is unavailable.
- ``export`` renders recent events as JSON or CSV.
"""

from __future__ import annotations

import asyncio
import csv
import io
import json
from collections import deque
from datetime import UTC, datetime, timedelta
from typing import TYPE_CHECKING, Any

from gatehouse.core.constants import AUDIT_EXPORT_MAX_ROWS, AUDIT_QUERY_MAX_LIMIT
from gatehouse.core.enums import ErrorCode
from gatehouse.core.result import Failure, Result, Success
from gatehouse.domain.entities import AuditEvent, AuditFilters, AuditStats
from gatehouse.domain.errors import AuditError

if TYPE_CHECKING:
    from gatehouse.domain.protocols import (
        AuditStoreProtocol,
        ExportFormat,
        LoggerProtocol,
    )

CSV_COLUMNS: tuple[str, ...] = (
    "timestamp",
    "action",
    "status",
    "actor_id",
    "endpoint",
    "ip_address",
    "user_agent",
    "details",
)


class AuditLogger:
    """AuditProtocol implementation with a fallback ring.

    Args:
        store: Append-only event store.
        logger: Structured logger.
        timeout_seconds: Upper bound on every store call.
        fallback_capacity: Ring size; the oldest parked events drop first.
    """

    def __init__(
        self,
        *,
        store: AuditStoreProtocol,
        logger: LoggerProtocol,
        timeout_seconds: float = 5.0,
        fallback_capacity: int = 1000,
    ) -> None:
        self._store = store
        self._logger = logger
        self._timeout = timeout_seconds
        self._fallback: deque[AuditEvent] = deque(maxlen=fallback_capacity)

    @property
    def fallback_events(self) -> list[AuditEvent]:
        """Events that could not be stored, oldest first."""
        return list(self._fallback)

    async def record(self, event: AuditEvent) -> Result[None, AuditError]:
        """Append an event. Never raises."""
        try:
            async with asyncio.timeout(self._timeout):
                await self._store.append(event)
        except Exception as exc:  # noqa: BLE001
            self._fallback.append(event)
            self._logger.error(
                "Audit record failed, event parked in fallback",
                error=exc,
                action=event.action.value,
                event_id=str(event.id),
                fallback_size=len(self._fallback),
            )
            return Failure(
                error=AuditError(
                    code=ErrorCode.AUDIT_RECORD_FAILED,
                    message=f"Failed to record audit event: {type(exc).__name__}",
                    details={"event_id": str(event.id)},
                )
            )
        return Success(value=None)

    async def query(
        self,
        filters: AuditFilters,
        *,
        limit: int = 50,
        offset: int = 0,
    ) -> Result[list[AuditEvent], AuditError]:
        """Newest-first page of matching events.

        ``limit`` is clamped to 1..1000 and ``offset`` to >= 0.
        """
        limit = min(max(limit, 1), AUDIT_QUERY_MAX_LIMIT)
        offset = max(offset, 0)
        return await self._fetch(filters, limit=limit, offset=offset)

    async def stats(
        self, *, window_seconds: int = 3600
    ) -> Result[AuditStats, AuditError]:
        """Counts over the trailing ``window_seconds``."""
        start = datetime.now(UTC) - timedelta(seconds=window_seconds)
        try:
            async with asyncio.timeout(self._timeout):
                events = await self._store.since(start)
        except Exception as exc:  # noqa: BLE001
            self._logger.error("Audit stats read failed, using fallback", error=exc)
            events = [e for e in self._fallback if e.created_at >= start]
        return Success(value=AuditStats.from_events(events))

    async def export(self, fmt: ExportFormat = "json") -> Result[str, AuditError]:
        """Serialise the newest events (at most 10000) as JSON or CSV."""
        match await self._fetch(AuditFilters(), limit=AUDIT_EXPORT_MAX_ROWS, offset=0):
            case Failure(error=error):
                return Failure(error=error)
            case Success(value=events):
                pass

        if fmt == "csv":
            return Success(value=_to_csv(events))
        if fmt == "json":
            return Success(value=json.dumps([_to_row(e) for e in events], indent=2))
        return Failure(
            error=AuditError(
                code=ErrorCode.VALIDATION_FAILED,
                message=f"Unsupported export format: {fmt}",
            )
        )

    async def _fetch(
        self, filters: AuditFilters, *, limit: int, offset: int
    ) -> Result[list[AuditEvent], AuditError]:
        try:
            async with asyncio.timeout(self._timeout):
                events = await self._store.query(filters, limit=limit, offset=offset)
            return Success(value=events)
        except Exception as exc:  # noqa: BLE001
            self._logger.error("Audit query failed, using fallback", error=exc)
            parked = sorted(
                (e for e in self._fallback if filters.matches(e)),
                key=lambda e: e.created_at,
                reverse=True,
            )
            return Success(value=parked[offset : offset + limit])


def _to_row(event: AuditEvent) -> dict[str, Any]:
    return {
        "id": str(event.id),
        "timestamp": event.created_at.isoformat(),
        "action": event.action.value,
        "status": event.status.value,
        "actor_id": event.actor_id,
        "actor_type": event.actor_type.value,
        "resource_type": event.resource_type,
        "resource_id": event.resource_id,
        "endpoint": event.endpoint,
        "ip_address": event.ip_address,
        "user_agent": event.user_agent,
        "details": event.details,
    }


def _to_csv(events: list[AuditEvent]) -> str:
    buffer = io.StringIO()
    writer = csv.writer(buffer, quoting=csv.QUOTE_ALL, lineterminator="\n")
    writer.writerow(CSV_COLUMNS)
    for event in events:
        row = _to_row(event)
        writer.writerow(["" if row[col] is None else row[col] for col in CSV_COLUMNS])
    return buffer.getvalue()
