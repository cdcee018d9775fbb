"""
Abstract base adapter for text-generation providers.

Defines the interface every provider adapter (Groq, Google, Anthropic) must
implement and the shared HTTP plumbing around it. Swapping or adding a
provider never touches the gateway or the API layer.
"""

import time
from abc import ABC, abstractmethod
from typing import Any, Optional

import httpx
import structlog
from pydantic import ValidationError as PydanticValidationError

from menu_gateway.models.provider_models import ProviderConfig
from menu_gateway.monitoring.metrics import provider_latency_seconds
from menu_gateway.providers.exceptions import (
    MissingContentError,
    UpstreamError,
    UpstreamTimeoutError,
)

logger = structlog.get_logger(__name__)


class BaseProviderAdapter(ABC):
    """
    Abstract base class for provider adapters.

    Responsibilities:
    - Build the provider-specific request (URL, headers, body)
    - Call the provider's endpoint with an explicit timeout
    - Extract the single text field from the provider's response envelope

    Does NOT handle:
    - JSON parsing of the generated content (that's ResponseSanitizer's job)
    - Model fallback (that's ProviderGateway's job)

    No retries happen here: one generate() call is exactly one HTTP request.
    """

    response_model: type = None  # Set by subclasses to their envelope model

    def __init__(
        self,
        config: ProviderConfig,
        timeout: float = 60.0,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        """
        Args:
            config: Static provider configuration
            timeout: Per-call timeout in seconds
            transport: Optional httpx transport (tests use httpx.MockTransport)
        """
        self.config = config
        self.timeout = timeout
        self._transport = transport
        self._client: Optional[httpx.AsyncClient] = None

        logger.info(
            "Initialized provider adapter",
            adapter_class=self.__class__.__name__,
            provider=config.name.value,
            models=list(config.models),
            timeout=timeout,
        )

    @property
    def name(self) -> str:
        return self.config.name.value

    async def _get_client(self) -> httpx.AsyncClient:
        """Get or create the pooled async HTTP client."""
        if self._client is None or self._client.is_closed:
            self._client = httpx.AsyncClient(
                timeout=httpx.Timeout(self.timeout),
                limits=httpx.Limits(
                    max_keepalive_connections=5,
                    max_connections=20,
                    keepalive_expiry=30.0,
                ),
                transport=self._transport,
            )
        return self._client

    @abstractmethod
    def build_request(
        self, prompt: str, credentials: str, model: str
    ) -> tuple[str, dict[str, str], dict[str, Any]]:
        """
        Build the provider-specific request.

        Returns:
            (url, headers, json_body)
        """

    def _error(self, message: str, model: str, **kwargs: Any) -> UpstreamError:
        return UpstreamError(
            f"{self.config.display_name} API error ({model}): {message}",
            provider=self.name,
            model=model,
            **kwargs,
        )

    @staticmethod
    def _provider_error_message(response: httpx.Response) -> str:
        """Pull `error.message` out of an error body, falling back to the reason phrase."""
        try:
            body = response.json()
        except ValueError:
            return response.reason_phrase
        error = body.get("error") if isinstance(body, dict) else None
        if isinstance(error, dict) and error.get("message"):
            return str(error["message"])
        if isinstance(error, str) and error:
            return error
        return response.reason_phrase

    async def generate(self, prompt: str, credentials: str, model: Optional[str] = None) -> str:
        """
        Call the provider once and return the raw generated text.

        Args:
            prompt: Sanitized user prompt
            credentials: API key for this provider
            model: Model identifier (defaults to the first configured model)

        Returns:
            Non-empty generated text, not yet parsed

        Raises:
            UpstreamTimeoutError: No answer within the timeout
            UpstreamError: Transport failure or non-2xx status
            MissingContentError: 2xx response without the expected text field
        """
        model = model or self.config.default_model
        url, headers, body = self.build_request(prompt, credentials, model)

        logger.info(
            "Sending generation request",
            provider=self.name,
            model=model,
            prompt_length=len(prompt),
        )

        client = await self._get_client()
        start_time = time.perf_counter()
        try:
            response = await client.post(url, json=body, headers=headers)
        except httpx.TimeoutException as e:
            logger.warning("Provider request timeout", provider=self.name, model=model, timeout=self.timeout)
            raise UpstreamTimeoutError(
                f"{self.config.display_name} API request timed out after {self.timeout}s",
                provider=self.name,
                model=model,
            ) from e
        except httpx.HTTPError as e:
            logger.warning(
                "Provider network error",
                provider=self.name,
                model=model,
                error_type=type(e).__name__,
            )
            raise self._error(f"network failure ({type(e).__name__})", model) from e
        finally:
            provider_latency_seconds.labels(provider=self.name, model=model).observe(
                time.perf_counter() - start_time
            )

        if not response.is_success:
            provider_message = self._provider_error_message(response)
            logger.warning(
                "Provider HTTP error",
                provider=self.name,
                model=model,
                status_code=response.status_code,
                provider_message=provider_message,
            )
            raise self._error(
                f"{response.status_code} - {provider_message}",
                model,
                upstream_status=response.status_code,
                provider_message=provider_message,
            )

        try:
            envelope = self.response_model.model_validate(response.json())
        except (ValueError, PydanticValidationError) as e:
            raise MissingContentError(
                f"{self.config.display_name} API response ({model}) has an unexpected shape",
                provider=self.name,
                model=model,
                upstream_status=response.status_code,
            ) from e

        text = envelope.text()
        if not text or not text.strip():
            raise MissingContentError(
                f"{self.config.display_name} API response ({model}) does not contain valid content",
                provider=self.name,
                model=model,
                upstream_status=response.status_code,
            )

        logger.info(
            "Provider generation successful",
            provider=self.name,
            model=model,
            latency_ms=int((time.perf_counter() - start_time) * 1000),
            content_length=len(text),
        )
        return text

    async def close(self) -> None:
        """Close the pooled HTTP client. Called on application shutdown."""
        if self._client is not None and not self._client.is_closed:
            await self._client.aclose()
            logger.debug("Closed provider adapter client", provider=self.name)

    def __repr__(self) -> str:
        return (
            f"{self.__class__.__name__}("
            f"models={list(self.config.models)}, "
            f"timeout={self.timeout}s)"
        )
