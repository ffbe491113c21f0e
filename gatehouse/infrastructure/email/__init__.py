"""Email adapters.

- LoggingEmailAdapter: logs instead of sending (development/testing)
"""

from gatehouse.infrastructure.email.logging_email_adapter import LoggingEmailAdapter

__all__ = ["LoggingEmailAdapter"]
