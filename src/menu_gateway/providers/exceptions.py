"""
Custom exceptions for the provider adapter layer.

These let the gateway distinguish "this model is unavailable" (404/429),
"the reply had no text" and everything else, and apply the right transition.
"""

from typing import Optional

from fastapi import status

from menu_gateway.errors.exceptions import ApiError

# Upstream statuses that mean "try the next model" rather than "give up"
MODEL_UNAVAILABLE_STATUSES = frozenset({404, 429})


class UpstreamError(ApiError):
    """
    A provider call did not produce usable text.

    Attributes:
        provider: Provider name (groq, google, anthropic)
        model: Model identifier that was called
        upstream_status: HTTP status returned by the provider (None if no response)
        provider_message: Error text reported by the provider, if any
    """

    def __init__(
        self,
        message: str,
        provider: str,
        model: Optional[str] = None,
        upstream_status: Optional[int] = None,
        provider_message: Optional[str] = None,
    ):
        details = {"provider": provider, "model": model}
        if upstream_status is not None:
            details["upstream_status"] = upstream_status
        if provider_message:
            details["provider_message"] = provider_message

        super().__init__(message, details)
        self.provider = provider
        self.model = model
        self.upstream_status = upstream_status
        self.provider_message = provider_message

    @property
    def model_unavailable(self) -> bool:
        """True for failures that should fall through to the next model."""
        return self.upstream_status in MODEL_UNAVAILABLE_STATUSES


class UpstreamTimeoutError(UpstreamError):
    """The provider did not answer within the per-call timeout."""

    status_code = status.HTTP_504_GATEWAY_TIMEOUT


class MissingContentError(UpstreamError):
    """The provider answered 2xx but the expected text field was absent or empty."""
