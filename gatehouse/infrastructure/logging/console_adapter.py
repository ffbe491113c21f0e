"""Console logging adapter.

Outputs structured logs to stdout using structlog.
- Development/testing: human-readable console renderer
- Production/CI: JSON renderer for machine parsing

Request-scoped fields (trace_id) bound through ``structlog.contextvars`` by
the trace middleware are merged into every line.

Implementation does NOT inherit from LoggerProtocol (PEP 544 structural
subtyping).
"""

from __future__ import annotations

import logging
import sys
from typing import Any

import structlog


def configure_structlog(*, use_json: bool, level: str = "INFO") -> None:
    """Configure structlog once for the process.

    Args:
        use_json: JSON output when True, console renderer when False.
        level: Minimum level name (DEBUG, INFO, ...).
    """
    processors: list[structlog.types.Processor] = [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_log_level,
        structlog.processors.TimeStamper(fmt="iso", utc=True),
    ]

    if use_json:
        processors.append(structlog.processors.JSONRenderer())
    else:
        processors.append(structlog.dev.ConsoleRenderer(colors=False))

    structlog.configure(
        processors=processors,
        wrapper_class=structlog.make_filtering_bound_logger(
            logging.getLevelNamesMapping().get(level.upper(), logging.INFO)
        ),
        context_class=dict,
        logger_factory=structlog.PrintLoggerFactory(file=sys.stdout),
        cache_logger_on_first_use=False,
    )


class ConsoleAdapter:
    """Console logger satisfying LoggerProtocol.

    Args:
        use_json: JSON output when True, human-readable when False.
        level: Minimum level name.
    """

    def __init__(self, *, use_json: bool = False, level: str = "INFO") -> None:
        configure_structlog(use_json=use_json, level=level)
        self._logger = structlog.get_logger()

    def debug(self, message: str, /, **context: Any) -> None:
        """Log a debug message."""
        self._logger.debug(message, **context)

    def info(self, message: str, /, **context: Any) -> None:
        """Log an info message."""
        self._logger.info(message, **context)

    def warning(self, message: str, /, **context: Any) -> None:
        """Log a warning message."""
        self._logger.warning(message, **context)

    def error(
        self, message: str, /, *, error: Exception | None = None, **context: Any
    ) -> None:
        """Log an error message with optional exception details."""
        if error is not None:
            context["error_type"] = type(error).__name__
            context["error_message"] = str(error)
        self._logger.error(message, **context)

    def critical(
        self, message: str, /, *, error: Exception | None = None, **context: Any
    ) -> None:
        """Log a critical message with optional exception details."""
        if error is not None:
            context["error_type"] = type(error).__name__
            context["error_message"] = str(error)
        self._logger.critical(message, **context)

    def bind(self, **context: Any) -> ConsoleAdapter:
        """Return new adapter with bound context.

        Returns:
            ConsoleAdapter: New adapter instance with bound context.
        """
        bound_adapter = ConsoleAdapter.__new__(ConsoleAdapter)
        bound_adapter._logger = self._logger.bind(**context)
        return bound_adapter
