"""
Per-client request gating.

- client_identifier: resolves a client key from proxy headers
- limiter: fixed-window RateLimiter and the RateLimitStore protocol
- cleanup: CleanupScheduler lifecycle for the expired-record sweep
"""

from menu_gateway.rate_limiting.cleanup import CleanupScheduler
from menu_gateway.rate_limiting.client_identifier import UNKNOWN_CLIENT, identify_client
from menu_gateway.rate_limiting.limiter import RateLimiter, RateLimitStore, format_block_rate

__all__ = [
    "CleanupScheduler",
    "RateLimiter",
    "RateLimitStore",
    "UNKNOWN_CLIENT",
    "format_block_rate",
    "identify_client",
]
