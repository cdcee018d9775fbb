"""Monitoring and metrics instrumentation for the menu generation gateway."""

from menu_gateway.monitoring.metrics import (
    classified_errors_total,
    provider_attempts_total,
    provider_latency_seconds,
    rate_limit_decisions_total,
    rate_limit_swept_records_total,
    sanitizer_failures_total,
)

__all__ = [
    "classified_errors_total",
    "provider_attempts_total",
    "provider_latency_seconds",
    "rate_limit_decisions_total",
    "rate_limit_swept_records_total",
    "sanitizer_failures_total",
]
