"""Redis-backed fixed-window counters using an atomic Lua script.

Storage concerns only: key shaping and policy lookup live in the limiter.
Every Redis failure is returned as ``Failure(RateLimitError)``; deciding to
fail open is the limiter's job, not the storage's.
"""

from __future__ import annotations

import asyncio
from dataclasses import dataclass
from functools import partial
from pathlib import Path
from typing import Any

from redis.exceptions import RedisError

from gatehouse.core.enums import ErrorCode
from gatehouse.core.result import Failure, Result, Success
from gatehouse.domain.errors import RateLimitError


@dataclass(slots=True)
class _LuaRefs:
    """Holds loaded Lua script SHA references."""

    fixed_window_sha: str | None = None


class RedisFixedWindowStorage:
    """Redis storage for fixed-window rate limiting.

    Loads the fixed-window Lua script once and runs it through EVALSHA, so
    INCR and the first-hit expiry happen as one atomic step per key.

    Args:
        redis_client: An async Redis client (redis.asyncio.Redis compatible).
    """

    def __init__(self, *, redis_client: Any) -> None:
        self.redis = redis_client
        self._lua = _LuaRefs()
        self._script_lock = asyncio.Lock()

    async def load_scripts(self) -> None:
        """Preload the Lua script (called from container init)."""
        await self._ensure_fixed_window_script()

    async def increment(
        self, key: str, window_seconds: int
    ) -> Result[tuple[int, float], RateLimitError]:
        try:
            sha = await self._ensure_fixed_window_script()
            resp = await self.redis.evalsha(sha, 1, key, int(window_seconds * 1000))
            count = int(resp[0])
            ttl_ms = int(resp[1])
            return Success(value=(count, max(ttl_ms, 0) / 1000.0))
        except (RedisError, OSError, IndexError, ValueError) as exc:
            return Failure(
                error=RateLimitError(
                    code=ErrorCode.RATE_LIMIT_CHECK_FAILED,
                    message=f"Failed to increment rate limit window: {exc}",
                    details={"key": key},
                )
            )

    async def peek(self, key: str) -> Result[tuple[int, float], RateLimitError]:
        try:
            pipe = self.redis.pipeline(transaction=True)
            pipe.get(key)
            pipe.pttl(key)
            raw_count, ttl_ms = await pipe.execute()
            if raw_count is None:
                return Success(value=(0, 0.0))
            return Success(value=(int(raw_count), max(int(ttl_ms), 0) / 1000.0))
        except (RedisError, OSError, ValueError) as exc:
            return Failure(
                error=RateLimitError(
                    code=ErrorCode.RATE_LIMIT_CHECK_FAILED,
                    message=f"Failed to read rate limit window: {exc}",
                    details={"key": key},
                )
            )

    async def delete(self, key: str) -> Result[None, RateLimitError]:
        try:
            await self.redis.delete(key)
            return Success(value=None)
        except (RedisError, OSError) as exc:
            return Failure(
                error=RateLimitError(
                    code=ErrorCode.RATE_LIMIT_RESET_FAILED,
                    message=f"Failed to reset rate limit for '{key}': {exc}",
                    details={"key": key},
                )
            )

    async def _ensure_fixed_window_script(self) -> str:
        if self._lua.fixed_window_sha:
            return self._lua.fixed_window_sha
        async with self._script_lock:
            if self._lua.fixed_window_sha:
                return self._lua.fixed_window_sha
            script = await _read_lua_script("lua_scripts/fixed_window.lua")
            sha: str = await self.redis.script_load(script)
            self._lua.fixed_window_sha = sha
            return sha


def _read_lua_script_sync(path: Path) -> str:
    return path.read_text(encoding="utf-8")


async def _read_lua_script(rel_path: str) -> str:
    """Read a Lua script next to this module without blocking the loop."""
    full_path = Path(__file__).parent / rel_path
    loop = asyncio.get_running_loop()
    return await loop.run_in_executor(None, partial(_read_lua_script_sync, full_path))
