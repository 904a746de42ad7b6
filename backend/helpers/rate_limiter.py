"""Rate limiter configuration module.

Holds the process-wide limiter used by the share tracking endpoint. It lives
outside main.py so routers, services and tests can import it without
circular imports.

Counters are kept in memory by the ``limits`` library, so every worker
process owns an independent table. Swap ``MemoryStorage`` for a shared
``limits`` storage (e.g. Redis) to enforce one budget across processes.
"""

import math
import time
from typing import Protocol

from limits import RateLimitItem, RateLimitItemPerSecond
from limits.storage import MemoryStorage
from limits.strategies import FixedWindowRateLimiter

from models.config import settings


class RateLimiter(Protocol):
    """Per-client request budget."""

    def hit(self, key: str) -> bool:
        """Count one request for ``key``; False once the budget is spent."""
        ...

    def retry_after(self, key: str) -> int:
        """Seconds until ``key`` may be accepted again."""
        ...

    def reset(self) -> None:
        """Forget every client's counters."""
        ...


class MemoryRateLimiter:
    """
    In-memory fixed window limiter allowing ``limit`` requests per
    ``window_seconds``.

    Every hit is counted, including rejected ones, so a client that keeps
    retrying while blocked stays blocked until the window ends.
    ``MemoryStorage`` serializes counter updates with a lock, so concurrent
    requests handled on FastAPI's thread pool cannot lose increments.
    """

    def __init__(self, limit: int, window_seconds: int):
        self.item: RateLimitItem = RateLimitItemPerSecond(limit, window_seconds)
        self.storage = MemoryStorage()
        self.strategy = FixedWindowRateLimiter(self.storage)

    @property
    def limit(self) -> int:
        return self.item.amount

    def hit(self, key: str) -> bool:
        return self.strategy.hit(self.item, key)

    def hits(self, key: str) -> int:
        """Requests counted for ``key`` this window, rejected ones included."""
        return self.storage.get(self.item.key_for(key))

    def remaining(self, key: str) -> int:
        """Requests still allowed for ``key`` in the current window."""
        return self.strategy.get_window_stats(self.item, key).remaining

    def retry_after(self, key: str) -> int:
        reset_time = self.strategy.get_window_stats(self.item, key).reset_time
        return max(1, math.ceil(reset_time - time.time()))

    def reset(self) -> None:
        self.storage.reset()


# Share tracking limiter - imported by the social router and tests
share_limiter = MemoryRateLimiter(
    limit=settings.SHARE_RATE_LIMIT,
    window_seconds=settings.SHARE_RATE_LIMIT_WINDOW_SECONDS,
)


def get_rate_limiter() -> RateLimiter:
    """Dependency returning the share tracking limiter."""
    return share_limiter
