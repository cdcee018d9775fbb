"""
Rate limiting data models.

RateLimitRecord and RateLimitMetrics are mutable and owned by a single
RateLimiter instance; everything handed out to callers is a frozen snapshot.
"""

import math
from dataclasses import dataclass, field
from typing import Optional


@dataclass
class RateLimitRecord:
    """
    Request count for one client key in its current window.

    Created on the first request from a key, incremented while the window is
    live, replaced once `now > window_reset_at`.
    """

    key: str
    count: int
    window_reset_at: float

    def is_expired(self, now: float) -> bool:
        return now > self.window_reset_at


@dataclass(frozen=True)
class RateLimitResult:
    """Outcome of a single check_and_consume call."""

    allowed: bool
    remaining: int
    reset_at: Optional[float] = None  # Only set when the request was blocked

    def retry_after_seconds(self, now: float) -> int:
        """Whole seconds until the window resets (never negative)."""
        if self.reset_at is None:
            return 0
        return max(0, math.ceil(self.reset_at - now))


@dataclass
class RateLimitMetrics:
    """Process-wide aggregate counters. Monotonic except for blocked_keys."""

    total_requests: int = 0
    blocked_requests: int = 0
    unique_keys: set[str] = field(default_factory=set)
    blocked_keys: set[str] = field(default_factory=set)
    last_cleanup_at: Optional[float] = None
    cleanup_count: int = 0


@dataclass(frozen=True)
class RateLimitStats:
    total_keys: int
    active_records: int


@dataclass(frozen=True)
class RateLimitMetricsSnapshot:
    """Point-in-time copy of RateLimitMetrics plus derived values."""

    total_requests: int
    blocked_requests: int
    unique_keys: int
    currently_blocked: int
    active_records: int
    last_cleanup_at: Optional[float]
    cleanup_count: int
    block_rate: str
