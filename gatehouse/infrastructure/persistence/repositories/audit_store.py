"""DatabaseAuditStore - append-only audit persistence on PostgreSQL.

Only INSERT and SELECT are issued. Rows are never updated or deleted from
this code path; retention is an operational concern.
"""

from datetime import datetime

from sqlalchemy import Select, select

from gatehouse.domain.entities import AuditEvent, AuditFilters
from gatehouse.domain.enums import ActorType, AuditAction, AuditStatus
from gatehouse.infrastructure.persistence.database import Database
from gatehouse.infrastructure.persistence.models.audit_event import AuditEventModel


class DatabaseAuditStore:
    """SQLAlchemy implementation of AuditStoreProtocol."""

    def __init__(self, database: Database) -> None:
        self._database = database

    async def append(self, event: AuditEvent) -> None:
        async with self._database.get_session() as db:
            db.add(
                AuditEventModel(
                    id=event.id,
                    action=event.action.value,
                    actor_id=event.actor_id,
                    actor_type=event.actor_type.value,
                    resource_type=event.resource_type,
                    resource_id=event.resource_id,
                    status=event.status.value,
                    details=event.details,
                    endpoint=event.endpoint,
                    ip_address=event.ip_address,
                    user_agent=event.user_agent,
                    created_at=event.created_at,
                )
            )

    async def query(
        self, filters: AuditFilters, *, limit: int, offset: int
    ) -> list[AuditEvent]:
        """Matching events, newest first."""
        stmt = self._apply_filters(select(AuditEventModel), filters)
        stmt = (
            stmt.order_by(AuditEventModel.created_at.desc())
            .limit(limit)
            .offset(offset)
        )
        async with self._database.get_session() as db:
            result = await db.execute(stmt)
            return [self._to_entity(model) for model in result.scalars().all()]

    async def since(self, start: datetime) -> list[AuditEvent]:
        async with self._database.get_session() as db:
            result = await db.execute(
                select(AuditEventModel)
                .where(AuditEventModel.created_at >= start)
                .order_by(AuditEventModel.created_at.desc())
            )
            return [self._to_entity(model) for model in result.scalars().all()]

    @staticmethod
    def _apply_filters(
        stmt: Select[tuple[AuditEventModel]], filters: AuditFilters
    ) -> Select[tuple[AuditEventModel]]:
        if filters.actor_id is not None:
            stmt = stmt.where(AuditEventModel.actor_id == filters.actor_id)
        if filters.action is not None:
            stmt = stmt.where(AuditEventModel.action == filters.action.value)
        if filters.resource_type is not None:
            stmt = stmt.where(AuditEventModel.resource_type == filters.resource_type)
        if filters.resource_id is not None:
            stmt = stmt.where(AuditEventModel.resource_id == filters.resource_id)
        if filters.start is not None:
            stmt = stmt.where(AuditEventModel.created_at >= filters.start)
        if filters.end is not None:
            stmt = stmt.where(AuditEventModel.created_at <= filters.end)
        return stmt

    @staticmethod
    def _to_entity(model: AuditEventModel) -> AuditEvent:
        return AuditEvent(
            id=model.id,
            action=AuditAction(model.action),
            actor_id=model.actor_id,
            actor_type=ActorType(model.actor_type),
            resource_type=model.resource_type,
            resource_id=model.resource_id,
            status=AuditStatus(model.status),
            details=model.details,
            endpoint=model.endpoint,
            ip_address=model.ip_address,
            user_agent=model.user_agent,
            created_at=model.created_at,
        )
