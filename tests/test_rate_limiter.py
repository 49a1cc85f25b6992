"""Sliding-window rate limiter backed by Redis."""

# Third-party imports
from fakeredis import aioredis as fake_aioredis
import pytest

# Local application imports
from consulta.services.auth.rate_limit_services import RateLimiter

# A multiple of the 900 s window, so clock-aligned buckets would reset here
BOUNDARY = 1_700_000_100.0


@pytest.fixture
def limiter():
    client = fake_aioredis.FakeRedis(decode_responses=True)
    return RateLimiter(client, scope="login", limit=3, window_seconds=900)


async def test_check_does_not_count(limiter):
    for _ in range(5):
        status = await limiter.check("10.0.0.1", now=BOUNDARY)
    assert status.allowed
    assert status.remaining == 3


async def test_blocks_after_limit_hits(limiter):
    for attempt in range(1, 4):
        assert await limiter.hit("10.0.0.1", now=BOUNDARY) == attempt

    status = await limiter.check("10.0.0.1", now=BOUNDARY + 10)
    assert not status.allowed
    assert status.remaining == 0
    assert status.retry_after == 890


async def test_attempts_straddling_a_clock_boundary_still_block(limiter):
    await limiter.hit("10.0.0.1", now=BOUNDARY - 60)
    await limiter.hit("10.0.0.1", now=BOUNDARY - 50)
    await limiter.hit("10.0.0.1", now=BOUNDARY + 10)

    status = await limiter.check("10.0.0.1", now=BOUNDARY + 30)
    assert not status.allowed
    assert status.retry_after == 810


async def test_steady_attempts_never_exceed_limit_per_window(limiter):
    accepted = 0
    for step in range(12):
        now = BOUNDARY - 60 + step * 10
        if (await limiter.check("10.0.0.1", now=now)).allowed:
            await limiter.hit("10.0.0.1", now=now)
            accepted += 1
    assert accepted == 3


async def test_window_slides_from_the_oldest_attempt(limiter):
    for offset in (0, 100, 200):
        await limiter.hit("10.0.0.1", now=BOUNDARY + offset)

    blocked = await limiter.check("10.0.0.1", now=BOUNDARY + 899)
    assert not blocked.allowed
    assert blocked.retry_after == 1

    reopened = await limiter.check("10.0.0.1", now=BOUNDARY + 901)
    assert reopened.allowed
    assert reopened.remaining == 1


async def test_identifiers_are_independent(limiter):
    for _ in range(3):
        await limiter.hit("10.0.0.1", now=BOUNDARY)
    assert (await limiter.check("10.0.0.2", now=BOUNDARY)).allowed


async def test_keys_expire_with_the_window(limiter):
    await limiter.hit("10.0.0.1", now=BOUNDARY)
    ttl = await limiter.client.ttl(limiter.key_for("10.0.0.1"))
    assert 0 < ttl <= 900


async def test_reset_clears_the_counter(limiter):
    for _ in range(3):
        await limiter.hit("10.0.0.1", now=BOUNDARY)
    await limiter.reset("10.0.0.1")
    assert (await limiter.check("10.0.0.1", now=BOUNDARY)).allowed
