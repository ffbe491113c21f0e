"""Relational persistence: engine, models and repositories."""

from gatehouse.infrastructure.persistence.database import Database

__all__ = ["Database"]
