"""Custom Prometheus metrics for the menu generation gateway.

Exposed at /metrics alongside the HTTP instrumentation. Worth alerting on:
- provider_attempts_total{outcome="error"} (provider outage or bad credentials)
- rate_limit_decisions_total{outcome="blocked"} (abusive clients or a limit set too low)
- classified_errors_total{kind="UNKNOWN"} (errors nobody anticipated)
"""

from prometheus_client import Counter, Histogram

# === Rate Limiting ===

rate_limit_decisions_total = Counter(
    "rate_limit_decisions_total",
    "Rate limiter decisions by outcome",
    ["outcome"],
)
"""
Labels:
- outcome: allowed, blocked
"""

rate_limit_swept_records_total = Counter(
    "rate_limit_swept_records_total",
    "Expired rate limit records removed by the periodic sweep",
)

# === Provider Calls ===

provider_attempts_total = Counter(
    "provider_attempts_total",
    "Provider model attempts by outcome",
    ["provider", "model", "outcome"],
)
"""
Labels:
- provider: groq, google, anthropic
- model: model identifier sent to the provider
- outcome: success, fallback (404/429 or empty content, next model tried), error
"""

provider_latency_seconds = Histogram(
    "provider_latency_seconds",
    "Latency of a single provider call in seconds",
    ["provider", "model"],
    buckets=[0.5, 1.0, 2.0, 5.0, 10.0, 20.0, 30.0, 60.0],
)

# === Response Handling ===

sanitizer_failures_total = Counter(
    "sanitizer_failures_total",
    "Provider replies rejected by the response sanitizer",
    ["provider", "reason"],
)
"""
Labels:
- provider: provider identifier (groq, google, anthropic)
- reason: empty_content, json_decode_error
"""

classified_errors_total = Counter(
    "classified_errors_total",
    "Errors returned to clients by taxonomy kind",
    ["kind"],
)
