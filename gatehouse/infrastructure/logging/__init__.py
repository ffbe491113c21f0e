"""Structured logging adapters."""

from gatehouse.core.config import Settings
from gatehouse.infrastructure.logging.console_adapter import ConsoleAdapter


def create_logger(settings: Settings) -> ConsoleAdapter:
    """Logger for the configured environment.

    JSON lines in production and CI, console rendering elsewhere.
    """
    use_json = settings.is_production or settings.is_ci
    return ConsoleAdapter(use_json=use_json, level=settings.log_level)


__all__ = ["ConsoleAdapter", "create_logger"]
