"""Tests for the in-memory share rate limiter."""

import time

from helpers.rate_limiter import MemoryRateLimiter, get_rate_limiter, share_limiter
from models.config import settings


class TestMemoryRateLimiter:
    """Tests for MemoryRateLimiter."""

    def test_allows_up_to_limit(self):
        """Exactly ``limit`` hits are accepted per window."""
        limiter = MemoryRateLimiter(limit=5, window_seconds=60)

        results = [limiter.hit("client") for _ in range(6)]

        assert results == [True] * 5 + [False]

    def test_keys_are_independent(self):
        """One client's count does not affect another."""
        limiter = MemoryRateLimiter(limit=1, window_seconds=60)

        assert limiter.hit("a")
        assert not limiter.hit("a")
        assert limiter.hit("b")

    def test_remaining(self):
        """Remaining budget decreases with each hit."""
        limiter = MemoryRateLimiter(limit=3, window_seconds=60)
        limiter.hit("a")

        assert limiter.remaining("a") == 2
        assert limiter.remaining("b") == 3

    def test_retry_after_within_window(self):
        """Retry-After is positive and bounded by the window length."""
        limiter = MemoryRateLimiter(limit=1, window_seconds=60)
        limiter.hit("a")
        limiter.hit("a")

        assert 1 <= limiter.retry_after("a") <= 60

    def test_window_expiry(self):
        """Counts are forgotten once the window has elapsed."""
        limiter = MemoryRateLimiter(limit=1, window_seconds=1)
        assert limiter.hit("a")
        assert not limiter.hit("a")

        time.sleep(1.1)

        assert limiter.hit("a")

    def test_reset(self):
        """Reset clears every client's counters."""
        limiter = MemoryRateLimiter(limit=1, window_seconds=60)
        limiter.hit("a")

        limiter.reset()

        assert limiter.hit("a")

    def test_rejected_hits_are_counted(self):
        """Hits over the limit still count toward the window."""
        limiter = MemoryRateLimiter(limit=2, window_seconds=60)

        results = [limiter.hit("a") for _ in range(4)]

        assert results == [True, True, False, False]
        assert limiter.hits("a") == 4
        assert limiter.remaining("a") == 0

    def test_blocked_client_stays_blocked_while_retrying(self):
        """Retrying while blocked never frees budget within the window."""
        limiter = MemoryRateLimiter(limit=1, window_seconds=60)
        limiter.hit("a")

        results = [limiter.hit("a") for _ in range(10)]

        assert results == [False] * 10
        assert limiter.hits("a") == 11


class TestShareLimiter:
    """Tests for the process-wide share limiter."""

    def test_uses_configured_budget(self):
        """Default budget is 20 shares per 60 seconds."""
        assert share_limiter.limit == settings.SHARE_RATE_LIMIT == 20
        assert share_limiter.item.get_expiry() == 60

    def test_dependency_returns_shared_instance(self):
        assert get_rate_limiter() is share_limiter
