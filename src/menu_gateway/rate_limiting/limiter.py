"""
In-memory fixed-window rate limiter.

One RateLimitRecord per client key. A record counts requests until its window
expires, after which the next request starts a fresh window. A periodic sweep
deletes expired records so memory stays bounded by the number of keys seen in
the last window.

State is process-local: every instance behind a load balancer keeps its own
view of each client's usage.
"""

import threading
import time
from dataclasses import replace
from typing import Callable, Optional, Protocol

import structlog

from menu_gateway.models.rate_limit import (
    RateLimitMetrics,
    RateLimitMetricsSnapshot,
    RateLimitRecord,
    RateLimitResult,
    RateLimitStats,
)
from menu_gateway.monitoring.metrics import (
    rate_limit_decisions_total,
    rate_limit_swept_records_total,
)
from menu_gateway.rate_limiting.cleanup import CleanupScheduler

logger = structlog.get_logger(__name__)


class RateLimitStore(Protocol):
    """What the request handler needs from a rate limiter."""

    max_requests: int

    def now(self) -> float: ...

    def check_and_consume(self, key: str) -> RateLimitResult: ...

    def get_stats(self) -> RateLimitStats: ...

    def get_metrics(self) -> RateLimitMetricsSnapshot: ...


def format_block_rate(blocked: int, total: int) -> str:
    """Percentage string with two decimals, exactly "0%" before any request."""
    if total <= 0:
        return "0%"
    return f"{blocked / total * 100:.2f}%"


class RateLimiter:
    """
    Fixed-window per-key request limiter.

    check_and_consume() never blocks beyond a short in-memory critical
    section and never raises under normal operation. The lock makes the
    read-compare-increment sequence atomic when handlers run on worker
    threads; on the event loop it is uncontended.

    Attributes:
        window_seconds: Length of each counting window
        max_requests: Allowed requests per key per window
        cleanup_interval_seconds: Period of the expired-record sweep
    """

    def __init__(
        self,
        window_seconds: float = 3600.0,
        max_requests: int = 20,
        cleanup_interval_seconds: float = 1800.0,
        clock: Callable[[], float] = time.time,
    ):
        if window_seconds <= 0:
            raise ValueError("window_seconds must be > 0")
        if max_requests < 1:
            raise ValueError("max_requests must be >= 1")

        self.window_seconds = window_seconds
        self.max_requests = max_requests
        self.cleanup_interval_seconds = cleanup_interval_seconds
        self._clock = clock
        self._records: dict[str, RateLimitRecord] = {}
        self._metrics = RateLimitMetrics()
        self._lock = threading.Lock()
        self._cleanup = CleanupScheduler(self.cleanup_expired, cleanup_interval_seconds)

        logger.info(
            "Rate limiter initialized",
            window_seconds=window_seconds,
            max_requests=max_requests,
            cleanup_interval_seconds=cleanup_interval_seconds,
        )

    def now(self) -> float:
        return self._clock()

    def _new_record(self, key: str, now: float) -> RateLimitRecord:
        record = RateLimitRecord(key=key, count=1, window_reset_at=now + self.window_seconds)
        self._records[key] = record
        return record

    def check_and_consume(self, key: str) -> RateLimitResult:
        """
        Count one request for `key` and decide whether it may proceed.

        Returns:
            RateLimitResult with allowed/remaining; reset_at is set only when
            the request was blocked.
        """
        with self._lock:
            now = self._clock()
            self._metrics.total_requests += 1
            self._metrics.unique_keys.add(key)

            record = self._records.get(key)

            if record is None or record.is_expired(now):
                if record is not None:
                    self._metrics.blocked_keys.discard(key)
                self._new_record(key, now)
                result = RateLimitResult(allowed=True, remaining=self.max_requests - 1)

            elif record.count >= self.max_requests:
                self._metrics.blocked_requests += 1
                self._metrics.blocked_keys.add(key)
                result = RateLimitResult(
                    allowed=False, remaining=0, reset_at=record.window_reset_at
                )

            else:
                record.count += 1
                result = RateLimitResult(
                    allowed=True, remaining=self.max_requests - record.count
                )

        rate_limit_decisions_total.labels(
            outcome="allowed" if result.allowed else "blocked"
        ).inc()
        if not result.allowed:
            logger.warning("Rate limit exceeded", client_key=key, reset_at=result.reset_at)
        return result

    def cleanup_expired(self) -> int:
        """Delete every expired record. Returns the number removed."""
        with self._lock:
            now = self._clock()
            expired = [key for key, record in self._records.items() if record.is_expired(now)]
            for key in expired:
                del self._records[key]
                self._metrics.blocked_keys.discard(key)
            self._metrics.last_cleanup_at = now
            self._metrics.cleanup_count += 1

        if expired:
            rate_limit_swept_records_total.inc(len(expired))
            logger.debug("Expired rate limit records removed", removed=len(expired))
        return len(expired)

    def _count_active(self, now: float) -> int:
        return sum(1 for record in self._records.values() if not record.is_expired(now))

    def get_stats(self) -> RateLimitStats:
        with self._lock:
            now = self._clock()
            return RateLimitStats(
                total_keys=len(self._records),
                active_records=self._count_active(now),
            )

    def get_metrics(self) -> RateLimitMetricsSnapshot:
        with self._lock:
            now = self._clock()
            metrics = self._metrics
            return RateLimitMetricsSnapshot(
                total_requests=metrics.total_requests,
                blocked_requests=metrics.blocked_requests,
                unique_keys=len(metrics.unique_keys),
                currently_blocked=len(metrics.blocked_keys),
                active_records=self._count_active(now),
                last_cleanup_at=metrics.last_cleanup_at,
                cleanup_count=metrics.cleanup_count,
                block_rate=format_block_rate(metrics.blocked_requests, metrics.total_requests),
            )

    def get_record(self, key: str) -> Optional[RateLimitRecord]:
        """Copy of the record for `key`, if any (expired records included until swept)."""
        with self._lock:
            record = self._records.get(key)
            return replace(record) if record is not None else None

    # === Cleanup lifecycle ===

    def start_cleanup(self) -> None:
        self._cleanup.start()

    def stop_cleanup(self) -> None:
        self._cleanup.stop()

    def is_cleanup_running(self) -> bool:
        return self._cleanup.is_running()

    async def aclose(self) -> None:
        """Stop the sweep and wait for its task to wind down."""
        await self._cleanup.aclose()
