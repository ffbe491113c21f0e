"""Audit trail and security overview router.

Endpoints:
    GET /api/v1/admin/audit-logs         - Filtered, paginated trail (admin)
    GET /api/v1/admin/security/stats     - Counts over a window (super_admin)
    GET /api/v1/admin/security/export    - JSON or CSV download (super_admin)
"""

from datetime import datetime

from fastapi import APIRouter, Query
from fastapi.responses import Response

from gatehouse.core.constants import AUDIT_QUERY_MAX_LIMIT
from gatehouse.core.result import Failure, Success
from gatehouse.domain.entities import AuditFilters
from gatehouse.domain.enums import AuditAction
from gatehouse.domain.protocols import ExportFormat
from gatehouse.presentation.routers.api.dependencies import (
    ContainerDep,
    CurrentAdmin,
    SuperAdmin,
)
from gatehouse.presentation.routers.api.v1.errors import http_error_for
from gatehouse.schemas.audit_schemas import (
    AuditEventResponse,
    AuditLogListResponse,
    SecurityStatsResponse,
)

router = APIRouter(prefix="/admin", tags=["Audit"])

_EXPORT_MEDIA_TYPES: dict[str, str] = {
    "json": "application/json",
    "csv": "text/csv",
}


@router.get("/audit-logs", response_model=AuditLogListResponse, summary="Audit trail")
async def list_audit_logs(
    principal: CurrentAdmin,
    container: ContainerDep,
    actor_id: str | None = Query(None),
    action: AuditAction | None = Query(None),
    resource_type: str | None = Query(None),
    resource_id: str | None = Query(None),
    start: datetime | None = Query(None, description="Inclusive lower bound"),
    end: datetime | None = Query(None, description="Inclusive upper bound"),
    limit: int = Query(50, ge=1, le=AUDIT_QUERY_MAX_LIMIT),
    offset: int = Query(0, ge=0),
) -> AuditLogListResponse:
    """Audit events, newest first."""
    filters = AuditFilters(
        actor_id=actor_id,
        action=action,
        resource_type=resource_type,
        resource_id=resource_id,
        start=start,
        end=end,
    )
    match await container.audit.query(filters, limit=limit, offset=offset):
        case Failure(error=error):
            raise http_error_for(error)
        case Success(value=events):
            return AuditLogListResponse(
                events=[
                    AuditEventResponse.model_validate(e, from_attributes=True)
                    for e in events
                ],
                limit=limit,
                offset=offset,
            )


@router.get(
    "/security/stats",
    response_model=SecurityStatsResponse,
    summary="Security statistics",
)
async def security_stats(
    principal: SuperAdmin,
    container: ContainerDep,
    window_seconds: int = Query(3600, ge=60, le=30 * 86400),
) -> SecurityStatsResponse:
    """Event counts over the trailing window plus the active session count."""
    match await container.audit.stats(window_seconds=window_seconds):
        case Failure(error=error):
            raise http_error_for(error)
        case Success(value=stats):
            pass

    active = await container.session_store.count_active()
    return SecurityStatsResponse(
        window_seconds=window_seconds,
        total=stats.total,
        violations=stats.violations,
        by_action=stats.by_action,
        by_endpoint=stats.by_endpoint,
        active_sessions=active.value if isinstance(active, Success) else None,
    )


@router.get(
    "/security/export",
    response_class=Response,
    summary="Export audit events",
    responses={
        200: {
            "content": {"application/json": {}, "text/csv": {}},
            "description": "Recent audit events",
        }
    },
)
async def export_audit_events(
    principal: SuperAdmin,
    container: ContainerDep,
    export_format: ExportFormat = Query("json", alias="format"),
) -> Response:
    """Download recent events as JSON or CSV."""
    match await container.audit.export(export_format):
        case Failure(error=error):
            raise http_error_for(error)
        case Success(value=body):
            return Response(
                content=body,
                media_type=_EXPORT_MEDIA_TYPES[export_format],
                headers={
                    "Content-Disposition": (
                        f'attachment; filename="audit-events.{export_format}"'
                    )
                },
            )
