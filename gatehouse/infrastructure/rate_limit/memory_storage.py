"""In-memory fixed-window counters.

Single-process only: counters are neither shared across workers nor kept
across restarts. Fine for development and tests; use the Redis storage when
more than one instance serves traffic.
"""

import asyncio
import time
from collections.abc import Callable
from dataclasses import dataclass

from gatehouse.core.constants import RATE_LIMIT_GRACE_SECONDS
from gatehouse.core.result import Result, Success
from gatehouse.domain.errors import RateLimitError

_PURGE_EVERY = 256


@dataclass(slots=True)
class _Window:
    count: int
    ends_at: float


class MemoryFixedWindowStorage:
    """Lock-guarded dict of fixed windows.

    Args:
        clock: Epoch-seconds source (injectable for tests).
        grace_seconds: How long an elapsed window lingers before purge.
    """

    def __init__(
        self,
        *,
        clock: Callable[[], float] = time.time,
        grace_seconds: int = RATE_LIMIT_GRACE_SECONDS,
    ) -> None:
        self._clock = clock
        self._grace = grace_seconds
        self._windows: dict[str, _Window] = {}
        self._lock = asyncio.Lock()
        self._ops = 0

    async def increment(
        self, key: str, window_seconds: int
    ) -> Result[tuple[int, float], RateLimitError]:
        async with self._lock:
            now = self._clock()
            window = self._windows.get(key)
            if window is None or now >= window.ends_at:
                window = _Window(count=0, ends_at=now + window_seconds)
                self._windows[key] = window
            window.count += 1
            result = (window.count, window.ends_at - now)

            self._ops += 1
            if self._ops % _PURGE_EVERY == 0:
                self._purge(now)
        return Success(value=result)

    async def peek(self, key: str) -> Result[tuple[int, float], RateLimitError]:
        async with self._lock:
            now = self._clock()
            window = self._windows.get(key)
            if window is None or now >= window.ends_at:
                return Success(value=(0, 0.0))
            return Success(value=(window.count, window.ends_at - now))

    async def delete(self, key: str) -> Result[None, RateLimitError]:
        async with self._lock:
            self._windows.pop(key, None)
        return Success(value=None)

    async def purge_expired(self) -> int:
        """Evict windows that ended more than ``grace_seconds`` ago."""
        async with self._lock:
            return self._purge(self._clock())

    def _purge(self, now: float) -> int:
        stale = [
            key
            for key, window in self._windows.items()
            if window.ends_at + self._grace <= now
        ]
        for key in stale:
            del self._windows[key]
        return len(stale)

    def __len__(self) -> int:
        return len(self._windows)
