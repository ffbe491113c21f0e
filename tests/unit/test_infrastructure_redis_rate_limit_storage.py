"""Unit tests for RedisFixedWindowStorage with a mocked Redis client.

The Lua script itself runs against a real Redis only; here we check the
EVALSHA call shape, result parsing and error mapping.
"""

from unittest.mock import AsyncMock, Mock

import pytest
from redis.exceptions import ConnectionError as RedisConnectionError
from redis.exceptions import ResponseError

from gatehouse.core.enums import ErrorCode
from gatehouse.core.result import Failure, Success
from gatehouse.infrastructure.rate_limit import RedisFixedWindowStorage


@pytest.fixture
def redis_client() -> AsyncMock:
    client = AsyncMock()
    client.script_load.return_value = "sha-fixed-window"
    client.evalsha.return_value = [1, 60000]
    return client


@pytest.fixture
def storage(redis_client: AsyncMock) -> RedisFixedWindowStorage:
    return RedisFixedWindowStorage(redis_client=redis_client)


@pytest.mark.unit
class TestIncrement:
    @pytest.mark.asyncio
    async def test_runs_script_with_window_in_ms(
        self, storage: RedisFixedWindowStorage, redis_client: AsyncMock
    ) -> None:
        """Should call EVALSHA with one key and the window in milliseconds."""
        redis_client.evalsha.return_value = [3, 41500]

        result = await storage.increment("rate:auth:k", 60)

        redis_client.evalsha.assert_awaited_once_with(
            "sha-fixed-window", 1, "rate:auth:k", 60000
        )
        assert result == Success(value=(3, 41.5))

    @pytest.mark.asyncio
    async def test_script_loaded_once(
        self, storage: RedisFixedWindowStorage, redis_client: AsyncMock
    ) -> None:
        """Should cache the script SHA after the first load."""
        await storage.load_scripts()
        await storage.increment("k", 60)
        await storage.increment("k", 60)

        redis_client.script_load.assert_awaited_once()
        script = redis_client.script_load.await_args.args[0]
        assert "INCR" in script.upper()

    @pytest.mark.asyncio
    async def test_negative_ttl_is_zero(
        self, storage: RedisFixedWindowStorage, redis_client: AsyncMock
    ) -> None:
        redis_client.evalsha.return_value = [2, -1]

        assert await storage.increment("k", 60) == Success(value=(2, 0.0))

    @pytest.mark.asyncio
    @pytest.mark.parametrize(
        "exc",
        [RedisConnectionError("refused"), ResponseError("NOSCRIPT"), OSError("reset")],
    )
    async def test_redis_errors_become_failure(
        self, storage: RedisFixedWindowStorage, redis_client: AsyncMock, exc: Exception
    ) -> None:
        """Should map Redis failures to RATE_LIMIT_CHECK_FAILED."""
        redis_client.evalsha.side_effect = exc

        result = await storage.increment("k", 60)

        assert isinstance(result, Failure)
        assert result.error.code is ErrorCode.RATE_LIMIT_CHECK_FAILED
        assert result.error.details == {"key": "k"}

    @pytest.mark.asyncio
    async def test_malformed_reply_becomes_failure(
        self, storage: RedisFixedWindowStorage, redis_client: AsyncMock
    ) -> None:
        redis_client.evalsha.return_value = []

        result = await storage.increment("k", 60)

        assert isinstance(result, Failure)


@pytest.mark.unit
class TestPeekAndDelete:
    @staticmethod
    def _pipeline(redis_client: AsyncMock, reply: list) -> Mock:
        pipe = Mock()
        pipe.execute = AsyncMock(return_value=reply)
        redis_client.pipeline = Mock(return_value=pipe)
        return pipe

    @pytest.mark.asyncio
    async def test_peek_reads_count_and_ttl(
        self, storage: RedisFixedWindowStorage, redis_client: AsyncMock
    ) -> None:
        pipe = self._pipeline(redis_client, [b"7", 30000])

        result = await storage.peek("k")

        pipe.get.assert_called_once_with("k")
        pipe.pttl.assert_called_once_with("k")
        assert result == Success(value=(7, 30.0))

    @pytest.mark.asyncio
    async def test_peek_missing_key(
        self, storage: RedisFixedWindowStorage, redis_client: AsyncMock
    ) -> None:
        self._pipeline(redis_client, [None, -2])

        assert await storage.peek("k") == Success(value=(0, 0.0))

    @pytest.mark.asyncio
    async def test_peek_error(
        self, storage: RedisFixedWindowStorage, redis_client: AsyncMock
    ) -> None:
        pipe = self._pipeline(redis_client, [])
        pipe.execute.side_effect = RedisConnectionError("down")

        result = await storage.peek("k")

        assert isinstance(result, Failure)
        assert result.error.code is ErrorCode.RATE_LIMIT_CHECK_FAILED

    @pytest.mark.asyncio
    async def test_delete(
        self, storage: RedisFixedWindowStorage, redis_client: AsyncMock
    ) -> None:
        assert await storage.delete("k") == Success(value=None)
        redis_client.delete.assert_awaited_once_with("k")

    @pytest.mark.asyncio
    async def test_delete_error(
        self, storage: RedisFixedWindowStorage, redis_client: AsyncMock
    ) -> None:
        """Should report RATE_LIMIT_RESET_FAILED."""
        redis_client.delete.side_effect = RedisConnectionError("down")

        result = await storage.delete("k")

        assert isinstance(result, Failure)
        assert result.error.code is ErrorCode.RATE_LIMIT_RESET_FAILED
