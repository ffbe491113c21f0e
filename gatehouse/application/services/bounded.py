"""Timeout-bounded calls into stores and outbound collaborators.

Every repository and email call on an auth path goes through ``bounded``.
A timeout or any exception becomes a ``Failure`` the caller must handle, so
an unreachable store can only ever produce "not authenticated".
"""

import asyncio
from collections.abc import Awaitable
from typing import TypeVar

from gatehouse.core.enums import ErrorCode
from gatehouse.core.errors import DomainError
from gatehouse.core.result import Failure, Result, Success
from gatehouse.domain.protocols import LoggerProtocol

T = TypeVar("T")


async def bounded(
    call: Awaitable[T],
    *,
    timeout: float,
    logger: LoggerProtocol,
    operation: str,
) -> Result[T, DomainError]:
    """Await ``call`` for at most ``timeout`` seconds.

    Args:
        call: The pending store or email call.
        timeout: Seconds before giving up.
        logger: Where failures are reported.
        operation: Short name for logs and error messages ("session.save").

    Returns:
        Success(result) or Failure(DomainError) with TIMEOUT or INTERNAL_ERROR.
    """
    try:
        async with asyncio.timeout(timeout):
            return Success(value=await call)
    except TimeoutError:
        logger.error(
            "Store call timed out", operation=operation, timeout_seconds=timeout
        )
        return Failure(
            error=DomainError(
                code=ErrorCode.TIMEOUT, message=f"{operation} timed out"
            )
        )
    except Exception as exc:  # noqa: BLE001
        logger.error("Store call failed", error=exc, operation=operation)
        return Failure(
            error=DomainError(
                code=ErrorCode.INTERNAL_ERROR, message=f"{operation} failed"
            )
        )
