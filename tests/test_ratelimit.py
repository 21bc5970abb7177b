"""Tests for rate limiters."""

from unittest.mock import AsyncMock

import pytest
from redis.exceptions import ConnectionError as RedisConnectionError

from shortlink.ratelimit import InMemoryRateLimiter, RedisRateLimiter


class FakeClock:
    def __init__(self, now: float = 1_000_000.0):
        self.now = now

    def __call__(self) -> float:
        return self.now


@pytest.mark.asyncio
class TestInMemoryRateLimiter:
    """Test the per-process limiter."""

    async def test_allows_up_to_limit(self):
        limiter = InMemoryRateLimiter(max_requests=3, window_seconds=60, clock=FakeClock())

        results = [await limiter.hit("1.2.3.4") for _ in range(4)]

        assert [r.allowed for r in results] == [True, True, True, False]
        assert [r.remaining for r in results] == [2, 1, 0, 0]
        assert all(r.limit == 3 for r in results)

    async def test_keys_are_independent(self):
        limiter = InMemoryRateLimiter(max_requests=1, window_seconds=60, clock=FakeClock())

        assert (await limiter.hit("a")).allowed
        assert (await limiter.hit("b")).allowed
        assert not (await limiter.hit("a")).allowed

    async def test_window_resets(self):
        clock = FakeClock(now=600.0)
        limiter = InMemoryRateLimiter(max_requests=1, window_seconds=900, clock=clock)

        first = await limiter.hit("a")
        assert first.allowed
        assert first.reset_after == 300
        assert not (await limiter.hit("a")).allowed

        clock.now = 900.0
        assert (await limiter.hit("a")).allowed


def test_rejects_bad_settings():
    with pytest.raises(ValueError):
        InMemoryRateLimiter(max_requests=0)
    with pytest.raises(ValueError):
        InMemoryRateLimiter(window_seconds=0)


@pytest.mark.asyncio
class TestRedisRateLimiter:
    """Test the Redis-backed limiter against a mocked client."""

    def _limiter(self, client, max_requests=2):
        limiter = RedisRateLimiter(
            "redis://localhost:6379/0",
            max_requests=max_requests,
            window_seconds=900,
            clock=FakeClock(now=1800.0),
        )
        limiter.client = client
        return limiter

    async def test_counts_with_incr_and_sets_expiry_once(self):
        client = AsyncMock()
        client.incr.side_effect = [1, 2, 3]
        limiter = self._limiter(client)

        results = [await limiter.hit("1.2.3.4") for _ in range(3)]

        assert [r.allowed for r in results] == [True, True, False]
        client.incr.assert_awaited_with("shortlink:ratelimit:1.2.3.4:2")
        client.expire.assert_awaited_once_with("shortlink:ratelimit:1.2.3.4:2", 900)

    async def test_fails_open_on_redis_error(self):
        client = AsyncMock()
        client.incr.side_effect = RedisConnectionError("down")
        limiter = self._limiter(client, max_requests=1)

        result = await limiter.hit("1.2.3.4")

        assert result.allowed
        assert result.remaining == 1

    async def test_close(self):
        client = AsyncMock()
        limiter = self._limiter(client)

        await limiter.close()

        client.aclose.assert_awaited_once()
        assert limiter.client is None
