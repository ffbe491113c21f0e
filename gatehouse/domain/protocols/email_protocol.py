"""Email sender port.

The auth core only needs "deliver this subject and body to this address".
Templates, providers and retries are the adapter's business.
"""

from typing import Protocol

from gatehouse.core.errors import DomainError
from gatehouse.core.result import Result


class EmailProtocol(Protocol):
    """Outbound email port."""

    async def send(self, *, to: str, subject: str, body: str) -> Result[str, DomainError]:
        """Send one message.

        Returns:
            Success(message_id) on acceptance, Failure otherwise.
        """
        ...
