"""LoggerProtocol definition for structured logging.

Standardizes structured logging across the codebase while remaining
backend-agnostic. Implementations MUST ensure logs are structured
(key-value context) and safe (no secrets).

Security:
    - NEVER log OTP codes, session tokens, CSRF tokens or passwords
    - Sessions are referenced by their public UUID only

Usage:
    logger.info("Session created", session_id=str(session.id))
    request_logger = logger.bind(trace_id=trace_id)
"""

from __future__ import annotations

from typing import Any, Protocol


class LoggerProtocol(Protocol):
    """Protocol for structured logging adapters."""

    def debug(self, message: str, /, **context: Any) -> None:
        """Log a debug-level message."""
        ...

    def info(self, message: str, /, **context: Any) -> None:
        """Log an info-level message."""
        ...

    def warning(self, message: str, /, **context: Any) -> None:
        """Log a warning-level message."""
        ...

    def error(
        self, message: str, /, *, error: Exception | None = None, **context: Any
    ) -> None:
        """Log an error-level message with optional exception details.

        Args:
            message: Human-readable message (avoid f-strings; use context).
            error: Optional exception instance; implementation may include
                error_type and error_message fields.
            **context: Structured key-value context fields.
        """
        ...

    def critical(
        self, message: str, /, *, error: Exception | None = None, **context: Any
    ) -> None:
        """Log a critical-level message for system-wide failures."""
        ...

    def bind(self, **context: Any) -> LoggerProtocol:
        """Return new logger with permanently bound context.

        The original logger instance remains unchanged.
        """
        ...
