"""
Periodic sweep lifecycle for the rate limiter.

Runs a synchronous sweep callable on a fixed interval inside the event loop.
Owned by the RateLimiter; started on application startup, closed on shutdown.
"""

import asyncio
import contextlib
from typing import Callable, Optional

import structlog

logger = structlog.get_logger(__name__)


class CleanupScheduler:
    """
    Explicit start/stop lifecycle around an asyncio background task.

    start() and stop() are idempotent: calling start() twice never creates a
    second task, calling stop() on a stopped scheduler is a no-op.
    """

    def __init__(self, sweep: Callable[[], int], interval_seconds: float):
        if interval_seconds <= 0:
            raise ValueError("interval_seconds must be > 0")
        self._sweep = sweep
        self.interval_seconds = interval_seconds
        self._task: Optional[asyncio.Task] = None

    def is_running(self) -> bool:
        return self._task is not None and not self._task.done()

    def start(self) -> None:
        """Schedule the sweep loop on the running event loop."""
        if self.is_running():
            return
        self._task = asyncio.get_running_loop().create_task(
            self._run(), name="rate-limit-cleanup"
        )
        logger.debug("Rate limit cleanup started", interval_seconds=self.interval_seconds)

    def stop(self) -> None:
        if self._task is None:
            return
        if not self._task.done():
            self._task.cancel()
        self._task = None
        logger.debug("Rate limit cleanup stopped")

    async def aclose(self) -> None:
        """Stop the loop and wait until the cancelled task has finished."""
        task = self._task
        self.stop()
        if task is not None:
            with contextlib.suppress(asyncio.CancelledError):
                await task

    async def _run(self) -> None:
        while True:
            await asyncio.sleep(self.interval_seconds)
            try:
                self._sweep()
            except Exception:
                # A failed sweep must not kill the loop; the next tick retries
                logger.exception("Rate limit cleanup sweep failed")
