"""Fixed-window rate limiting for URL shortener."""

import asyncio
import logging
import time
from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Callable, Dict, Optional, Tuple

import redis.asyncio as redis
from redis.exceptions import RedisError


@dataclass(frozen=True)
class RateLimitResult:
    """Outcome of counting one request."""

    allowed: bool
    limit: int
    remaining: int
    reset_after: int  # seconds until the current window ends


class RateLimiter(ABC):
    """Allow at most max_requests per key in each window of window_seconds."""

    def __init__(
        self,
        max_requests: int = 100,
        window_seconds: int = 900,
        clock: Callable[[], float] = time.time,
        logger: Optional[logging.Logger] = None,
    ):
        if max_requests < 1 or window_seconds < 1:
            raise ValueError("max_requests and window_seconds must be positive")
        self.max_requests = max_requests
        self.window_seconds = window_seconds
        self.clock = clock
        self.logger = logger or logging.getLogger(__name__)

    def _window(self) -> Tuple[int, int]:
        """Current window index and seconds left in it."""
        now = self.clock()
        index = int(now // self.window_seconds)
        reset_after = int((index + 1) * self.window_seconds - now) or 1
        return index, reset_after

    def _result(self, count: int, reset_after: int) -> RateLimitResult:
        return RateLimitResult(
            allowed=count <= self.max_requests,
            limit=self.max_requests,
            remaining=max(self.max_requests - count, 0),
            reset_after=reset_after,
        )

    @abstractmethod
    async def hit(self, key: str) -> RateLimitResult:
        """Count a request for key and report whether it is allowed."""
        pass

    async def close(self) -> None:
        """Release resources."""
        pass


class InMemoryRateLimiter(RateLimiter):
    """Per-process counters. Each replica enforces its own limit."""

    def __init__(self, *args, **kwargs):
        super().__init__(*args, **kwargs)
        self._counts: Dict[str, int] = {}
        self._current_window = -1
        self._lock = asyncio.Lock()

    async def hit(self, key: str) -> RateLimitResult:
        index, reset_after = self._window()
        async with self._lock:
            if index != self._current_window:
                # Counters from earlier windows can never match again
                self._counts.clear()
                self._current_window = index
            count = self._counts.get(key, 0) + 1
            self._counts[key] = count
        return self._result(count, reset_after)


class RedisRateLimiter(RateLimiter):
    """Counters shared by all replicas through Redis INCR."""

    KEY_PREFIX = "shortlink:ratelimit"

    def __init__(self, redis_url: str, *args, **kwargs):
        super().__init__(*args, **kwargs)
        self.redis_url = redis_url
        self.client: Optional[redis.Redis] = None

    async def connect(self) -> None:
        """Connect to Redis."""
        self.client = redis.from_url(
            self.redis_url,
            encoding="utf-8",
            decode_responses=True,
        )
        await self.client.ping()
        self.logger.info("Connected to Redis for rate limiting")

    def get_key(self, key: str, window_index: int) -> str:
        return f"{self.KEY_PREFIX}:{key}:{window_index}"

    async def hit(self, key: str) -> RateLimitResult:
        index, reset_after = self._window()
        if self.client is None:
            return self._result(0, reset_after)

        redis_key = self.get_key(key, index)
        try:
            count = await self.client.incr(redis_key)
            if count == 1:
                await self.client.expire(redis_key, self.window_seconds)
        except RedisError as e:
            # Fail open
            self.logger.error(f"Rate limit counter error: {e}")
            return self._result(0, reset_after)

        return self._result(count, reset_after)

    async def close(self) -> None:
        """Close Redis connection."""
        if self.client:
            await self.client.aclose()
            self.client = None
            self.logger.info("Redis connection closed")
