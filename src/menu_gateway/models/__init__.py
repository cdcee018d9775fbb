"""
Data models for the menu generation gateway.

- enums: ErrorKind, ProviderName, GatewayState
- provider_models: ProviderConfig and the per-provider response envelopes
- rate_limit: rate limiter records, results and metrics snapshots
"""

from menu_gateway.models.enums import ErrorKind, GatewayState, ProviderName
from menu_gateway.models.provider_models import (
    AnthropicResponse,
    GoogleResponse,
    GroqResponse,
    ProviderConfig,
)
from menu_gateway.models.rate_limit import (
    RateLimitMetrics,
    RateLimitMetricsSnapshot,
    RateLimitRecord,
    RateLimitResult,
    RateLimitStats,
)

__all__ = [
    "ErrorKind",
    "GatewayState",
    "ProviderName",
    "ProviderConfig",
    "GroqResponse",
    "GoogleResponse",
    "AnthropicResponse",
    "RateLimitRecord",
    "RateLimitResult",
    "RateLimitMetrics",
    "RateLimitMetricsSnapshot",
    "RateLimitStats",
]
