# Standard library imports
from dataclasses import dataclass
import math
import time
from uuid import uuid4

# Third-party imports
import redis.asyncio as redis

# Local application imports
from consulta.core.monitoring.logging import get_logger

logger = get_logger(__name__)


@dataclass(frozen=True)
class RateLimitStatus:
    allowed: bool
    limit: int
    remaining: int
    retry_after: int


class RateLimiter:
    """
    Sliding-window attempt log stored in a Redis sorted set.

    Each recorded attempt is a member scored by its timestamp, so the limit
    applies to any `window_seconds` span rather than to clock-aligned
    buckets. `check` only reads the log, `hit` records one attempt. Callers
    that must not count successes (login) call `hit` on failure only.
    """

    def __init__(self, client: redis.Redis, scope: str, limit: int, window_seconds: int) -> None:
        self.client = client
        self.scope = scope
        self.limit = limit
        self.window_seconds = window_seconds

    def key_for(self, identifier: str) -> str:
        return f"rate_limit:{self.scope}:{identifier}"

    async def check(self, identifier: str, now: float | None = None) -> RateLimitStatus:
        now = time.time() if now is None else now
        key = self.key_for(identifier)
        async with self.client.pipeline(transaction=True) as pipe:
            pipe.zremrangebyscore(key, "-inf", now - self.window_seconds)
            pipe.zcard(key)
            pipe.zrange(key, 0, 0, withscores=True)
            _, count, oldest = await pipe.execute()

        allowed = count < self.limit
        retry_after = 0
        if not allowed:
            logger.warning(f"Rate limit exceeded: scope={self.scope} identifier={identifier}")
            # Blocked until the oldest attempt in the window ages out
            oldest_at = oldest[0][1] if oldest else now
            retry_after = max(1, math.ceil(oldest_at + self.window_seconds - now))
        return RateLimitStatus(
            allowed=allowed,
            limit=self.limit,
            remaining=max(0, self.limit - count),
            retry_after=retry_after,
        )

    async def hit(self, identifier: str, now: float | None = None) -> int:
        now = time.time() if now is None else now
        key = self.key_for(identifier)
        async with self.client.pipeline(transaction=True) as pipe:
            pipe.zremrangebyscore(key, "-inf", now - self.window_seconds)
            pipe.zadd(key, {f"{now}:{uuid4().hex}": now})
            pipe.zcard(key)
            pipe.expire(key, self.window_seconds)
            _, _, count, _ = await pipe.execute()
        return int(count)

    async def reset(self, identifier: str) -> None:
        await self.client.delete(self.key_for(identifier))
