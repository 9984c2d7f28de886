"""Rate limiting for calls to external moderation providers."""

import asyncio
import time
from typing import Optional


class TokenBucketRateLimiter:
    """
    Async token bucket.

    Allows bursts up to max_tokens, then spaces calls at the sustained
    rate. Waiting uses asyncio.sleep so other classification tasks keep
    running.

    Args:
        requests_per_second: Maximum sustained request rate
        burst_size: Maximum burst capacity (defaults to requests_per_second)

    Examples:
        >>> limiter = TokenBucketRateLimiter(requests_per_second=2)
        >>> await limiter.acquire()  # immediate
        >>> await limiter.acquire()  # immediate
        >>> await limiter.acquire()  # waits ~0.5s
    """

    def __init__(self, requests_per_second: float, burst_size: Optional[int] = None):
        if requests_per_second <= 0:
            raise ValueError("requests_per_second must be positive")

        self.rate = requests_per_second
        self.max_tokens = burst_size if burst_size is not None else max(1, int(requests_per_second))
        self.tokens = float(self.max_tokens)
        self.last_update = time.monotonic()
        self._lock = asyncio.Lock()

    def _refill(self) -> None:
        now = time.monotonic()
        self.tokens = min(self.max_tokens, self.tokens + (now - self.last_update) * self.rate)
        self.last_update = now

    async def acquire(self, tokens: int = 1) -> float:
        """
        Take tokens, waiting cooperatively if the bucket is empty.

        Args:
            tokens: Number of tokens to take

        Returns:
            Seconds spent waiting
        """
        if tokens > self.max_tokens:
            raise ValueError(f"Cannot acquire {tokens} tokens (max: {self.max_tokens})")

        async with self._lock:
            waited = 0.0

            while True:
                self._refill()

                if self.tokens >= tokens:
                    self.tokens -= tokens
                    return waited

                delay = (tokens - self.tokens) / self.rate
                await asyncio.sleep(delay)
                waited += delay
