"""Fixed-window limiter implementing RateLimitProtocol.

Coordinates:
    - Storage: atomic per-key counters (Redis or memory)
    - Policy presets: limit and window per RateLimitPolicy
    - Logger: structured logging of denials and storage failures

Fail-open:
    ``check`` and ``get_status`` return an allowing decision when storage
    fails. Counting is advisory; an unreachable counter store must never turn
    into a denial of service. ``reset`` reports real failures.

Usage:
    result = await limiter.check(client_key="203.0.113.7:/api/v1/csrf",
                                 policy=RateLimitPolicy.AUTH)
"""

from __future__ import annotations

import math
import time
from collections.abc import Callable
from typing import TYPE_CHECKING

from gatehouse.core.result import Failure, Result, Success
from gatehouse.domain.errors import RateLimitError
from gatehouse.domain.value_objects import RateLimitDecision, RateLimitPolicy

if TYPE_CHECKING:
    from gatehouse.domain.protocols import LoggerProtocol, RateLimitStorageProtocol


class FixedWindowRateLimiter:
    """Policy-aware fixed-window rate limiter.

    Args:
        storage: Counter storage satisfying RateLimitStorageProtocol.
        logger: Structured logger.
        clock: Epoch-seconds source used for ``reset_at``.
    """

    def __init__(
        self,
        *,
        storage: RateLimitStorageProtocol,
        logger: LoggerProtocol,
        clock: Callable[[], float] = time.time,
    ) -> None:
        self._storage = storage
        self._logger = logger
        self._clock = clock

    async def check(
        self, *, client_key: str, policy: RateLimitPolicy
    ) -> Result[RateLimitDecision, RateLimitError]:
        """Count this request and decide."""
        rule = policy.rule
        key = self.build_key(client_key, policy)
        now = self._clock()

        match await self._storage.increment(key, rule.window_seconds):
            case Success(value=(count, ttl)):
                decision = RateLimitDecision.from_count(
                    rule=rule, count=count, ttl_seconds=ttl, now=now
                )
            case Failure(error=error):
                self._logger.warning(
                    "Rate limit storage failed, allowing request",
                    policy=policy.value,
                    error_code=error.code.value,
                    error_message=error.message,
                )
                return Success(value=self._open_decision(policy, now))

        if not decision.allowed:
            self._logger.info(
                "Rate limit exceeded",
                policy=policy.value,
                client_key=client_key,
                retry_after=decision.retry_after,
            )
        return Success(value=decision)

    async def get_status(
        self, *, client_key: str, policy: RateLimitPolicy
    ) -> Result[RateLimitDecision, RateLimitError]:
        """Decision for the next request, without counting anything."""
        rule = policy.rule
        now = self._clock()

        match await self._storage.peek(self.build_key(client_key, policy)):
            case Success(value=(count, ttl)):
                pass
            case Failure(error=error):
                self._logger.warning(
                    "Rate limit storage failed on status read",
                    policy=policy.value,
                    error_code=error.code.value,
                )
                return Success(value=self._open_decision(policy, now))

        allowed = count < rule.limit
        retry_after = 0 if allowed else min(max(1, math.ceil(ttl)), rule.window_seconds)
        return Success(
            value=RateLimitDecision(
                allowed=allowed,
                limit=rule.limit,
                remaining=max(0, rule.limit - count),
                reset_at=now + min(max(ttl, 0.0), float(rule.window_seconds)),
                retry_after=retry_after,
            )
        )

    async def reset(
        self, *, client_key: str, policy: RateLimitPolicy
    ) -> Result[None, RateLimitError]:
        """Clear the window for (client_key, policy)."""
        result = await self._storage.delete(self.build_key(client_key, policy))
        match result:
            case Success():
                self._logger.info(
                    "Rate limit reset", policy=policy.value, client_key=client_key
                )
            case Failure(error=error):
                self._logger.error(
                    "Rate limit reset failed",
                    policy=policy.value,
                    error_code=error.code.value,
                    error_message=error.message,
                )
        return result

    @staticmethod
    def build_key(client_key: str, policy: RateLimitPolicy) -> str:
        """``rate:{policy}:{client_key}``."""
        return f"rate:{policy.value}:{client_key}"

    @staticmethod
    def _open_decision(policy: RateLimitPolicy, now: float) -> RateLimitDecision:
        rule = policy.rule
        return RateLimitDecision(
            allowed=True,
            limit=rule.limit,
            remaining=rule.limit,
            reset_at=now + rule.window_seconds,
        )
