"""Sliding-window rate limiting for the official API."""
import asyncio
import time
from collections import deque
from typing import Deque, Dict, List, Optional, Sequence, Tuple
import logging

logger = logging.getLogger(__name__)

Window = Tuple[int, float]  # (max requests, window length in seconds)


class RateLimiter:
    """
    Sliding-window limiter over any number of windows.

    Riot applies two at once to every key:
      - short : N requests per 1 second
      - long  : N requests per 120 seconds
    A request is admitted only when every window has room.
    """

    def __init__(self, windows: Sequence[Window]):
        self.windows: List[Window] = [(int(n), float(s)) for n, s in windows if n > 0]
        self._stamps: List[Deque[float]] = [deque() for _ in self.windows]
        self._lock = asyncio.Lock()

    @classmethod
    def riot(cls, requests_per_1_sec: int = 18, requests_per_2_min: int = 90) -> "RateLimiter":
        return cls([(requests_per_1_sec, 1.0), (requests_per_2_min, 120.0)])

    def _prune(self, now: float) -> None:
        for (_, span), stamps in zip(self.windows, self._stamps):
            while stamps and now - stamps[0] > span:
                stamps.popleft()

    def _wait_needed(self, now: float) -> float:
        wait = 0.0
        for (limit, span), stamps in zip(self.windows, self._stamps):
            if len(stamps) >= limit:
                wait = max(wait, span - (now - stamps[0]) + 0.01)
        return wait

    async def acquire(self) -> None:
        async with self._lock:
            while True:
                now = time.monotonic()
                self._prune(now)
                wait = self._wait_needed(now)
                if wait <= 0:
                    for stamps in self._stamps:
                        stamps.append(now)
                    return
                logger.debug(f"Rate limit, waiting {wait:.2f}s")
                await asyncio.sleep(wait)

    def get_status(self) -> List[Tuple[int, int, float]]:
        """(used, limit, window seconds) per window."""
        now = time.monotonic()
        return [
            (sum(1 for t in stamps if now - t <= span), limit, span)
            for (limit, span), stamps in zip(self.windows, self._stamps)
        ]

    async def reset(self) -> None:
        async with self._lock:
            for stamps in self._stamps:
                stamps.clear()


class EndpointRateLimiter:
    """Per-endpoint-family limiters with a shared default."""

    def __init__(self, default: Optional[RateLimiter] = None):
        self.limiters: Dict[str, RateLimiter] = {}
        self._default = default

    def add_endpoint_limiter(self, endpoint: str, limiter: RateLimiter) -> None:
        self.limiters[endpoint] = limiter

    def _for(self, endpoint: str) -> Optional[RateLimiter]:
        return self.limiters.get(endpoint, self._default)

    async def acquire(self, endpoint: str = "default") -> None:
        limiter = self._for(endpoint)
        if limiter:
            await limiter.acquire()

    async def reset_endpoint(self, endpoint: str = "default") -> None:
        limiter = self._for(endpoint)
        if limiter:
            await limiter.reset()
