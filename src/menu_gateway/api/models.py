"""
API-specific response models for the FastAPI endpoints.

The generation endpoint returns the provider payload verbatim, so only the
auxiliary endpoints and error bodies are modelled here.
"""

from typing import Optional

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from menu_gateway.models.rate_limit import RateLimitMetricsSnapshot


class ProviderInfoResponse(BaseModel):
    """Active provider summary."""

    provider: Optional[str] = Field(
        default=None,
        description="Provider identifier, null when none is configured",
        examples=["groq", "google", "anthropic"],
    )
    name: str = Field(description="Friendly provider name", examples=["Groq (Llama 3.3 70B)"])
    configured: bool = Field(description="Whether any provider credential is set")


class HealthResponse(BaseModel):
    """Response for health check endpoint."""

    status: str = Field(default="ok", examples=["ok"])
    message: str = Field(default="Server running")
    version: str = Field(description="Application version")
    provider: ProviderInfoResponse


class RateLimitMetricsResponse(BaseModel):
    """Rate limiter metrics, serialized with camelCase keys."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    total_requests: int = Field(ge=0)
    blocked_requests: int = Field(ge=0)
    unique_keys: int = Field(ge=0, description="Distinct client keys seen since startup")
    currently_blocked: int = Field(ge=0, description="Client keys blocked in their current window")
    active_records: int = Field(ge=0, description="Records whose window has not expired")
    last_cleanup_at: Optional[float] = Field(
        default=None, description="Epoch seconds of the last sweep"
    )
    cleanup_count: int = Field(ge=0)
    block_rate: str = Field(examples=["0%", "3.33%"])

    @classmethod
    def from_snapshot(cls, snapshot: RateLimitMetricsSnapshot) -> "RateLimitMetricsResponse":
        return cls(
            total_requests=snapshot.total_requests,
            blocked_requests=snapshot.blocked_requests,
            unique_keys=snapshot.unique_keys,
            currently_blocked=snapshot.currently_blocked,
            active_records=snapshot.active_records,
            last_cleanup_at=snapshot.last_cleanup_at,
            cleanup_count=snapshot.cleanup_count,
            block_rate=snapshot.block_rate,
        )


class ErrorResponse(BaseModel):
    """Error body shared by every endpoint."""

    error: str = Field(description="Client-safe error message")
    details: Optional[dict] = Field(
        default=None, description="Structured context (non-production only)"
    )
    retry_after: Optional[int] = Field(
        default=None,
        alias="retryAfter",
        description="Seconds until the rate limit window resets (429 only)",
    )
