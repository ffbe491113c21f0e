"""Audit protocols (ports).

Two ports:
    - AuditStoreProtocol: append-only persistence (database, memory).
    - AuditProtocol: the best-effort logger every component writes to.

``AuditProtocol.record`` never raises. It returns a Result that callers are
free to ignore: a failed audit write must not fail the operation it
accompanies.
"""

from datetime import datetime
from typing import Literal, Protocol

from gatehouse.core.result import Result
from gatehouse.domain.entities import AuditEvent, AuditFilters, AuditStats
from gatehouse.domain.errors import AuditError

ExportFormat = Literal["json", "csv"]


class AuditStoreProtocol(Protocol):
    """Append-only audit persistence port.

    Implementations may raise on storage failure; the AuditLogger bounds and
    absorbs those failures.
    """

    async def append(self, event: AuditEvent) -> None:
        """Persist one event."""
        ...

    async def query(
        self, filters: AuditFilters, *, limit: int, offset: int
    ) -> list[AuditEvent]:
        """Matching events, newest first."""
        ...

    async def since(self, start: datetime) -> list[AuditEvent]:
        """All events created at or after ``start``."""
        ...


class AuditProtocol(Protocol):
    """Best-effort audit logger port."""

    async def record(self, event: AuditEvent) -> Result[None, AuditError]:
        """Append an event. Never raises."""
        ...

    async def query(
        self,
        filters: AuditFilters,
        *,
        limit: int = 50,
        offset: int = 0,
    ) -> Result[list[AuditEvent], AuditError]:
        """Read path for administrative review, newest first, paginated."""
        ...

    async def stats(self, *, window_seconds: int = 3600) -> Result[AuditStats, AuditError]:
        """Aggregate counts over the trailing window."""
        ...

    async def export(self, fmt: ExportFormat = "json") -> Result[str, AuditError]:
        """Serialise recent events as JSON or CSV."""
        ...
