"""Async token bucket used for provider calls."""

import asyncio

import pytest

from content_moderation.utils.rate_limiter import TokenBucketRateLimiter


def test_burst_is_immediate():
    limiter = TokenBucketRateLimiter(requests_per_second=5)

    async def go():
        return [await limiter.acquire() for _ in range(5)]

    assert asyncio.run(go()) == [0.0] * 5


def test_waits_once_bucket_is_empty():
    limiter = TokenBucketRateLimiter(requests_per_second=50, burst_size=1)

    async def go():
        await limiter.acquire()
        return await limiter.acquire()

    assert asyncio.run(go()) > 0


def test_invalid_arguments():
    with pytest.raises(ValueError):
        TokenBucketRateLimiter(0)

    limiter = TokenBucketRateLimiter(2)
    with pytest.raises(ValueError):
        asyncio.run(limiter.acquire(tokens=3))
