"""Logging email adapter for development and testing.

Logs outbound messages instead of sending them. Only the recipient and the
subject are logged; the body carries one-time codes and never reaches the
log stream.
"""

from uuid import uuid4

from gatehouse.core.errors import DomainError
from gatehouse.core.result import Result, Success
from gatehouse.domain.protocols import LoggerProtocol


class LoggingEmailAdapter:
    """EmailProtocol adapter that records sends and logs them.

    Attributes:
        sent: (to, subject, body) of every accepted message, oldest first.
            Kept in memory so development tooling and tests can read codes.
    """

    def __init__(self, *, logger: LoggerProtocol) -> None:
        self._logger = logger
        self.sent: list[tuple[str, str, str]] = []

    async def send(self, *, to: str, subject: str, body: str) -> Result[str, DomainError]:
        """Accept a message and return a synthetic message id."""
        message_id = str(uuid4())
        self.sent.append((to, subject, body))
        self._logger.info(
            "Email accepted (not delivered)",
            to=to,
            subject=subject,
            message_id=message_id,
        )
        return Success(value=message_id)
