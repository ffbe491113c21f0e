"""Audit logging."""

from gatehouse.infrastructure.audit.audit_logger import CSV_COLUMNS, AuditLogger

__all__ = ["CSV_COLUMNS", "AuditLogger"]
