"""
Provider gateway: provider selection and per-provider model fallback.

The gateway is an explicit state machine:

    SELECT_PROVIDER -> TRY_MODEL -> SUCCESS | NEXT_MODEL | FAIL

- SELECT_PROVIDER: first provider (Groq, Google, Anthropic) with a credential
- TRY_MODEL: call the adapter with the current model
- NEXT_MODEL: 404/429 or empty content, move to the next model if any
- SUCCESS: sanitize the text and return the parsed JSON
- FAIL: raise the last observed error

There is no sleep or backoff anywhere: fallback is immediate and bounded by
the length of the model list. Any adapter failure other than 404/429 or
missing content propagates at once.

Usage:
    gateway = ProviderGateway(configs, adapters, settings.provider_credentials())
    result = await gateway.generate(prompt)
"""

import time
from collections.abc import Mapping
from typing import Any, Optional

import structlog

from menu_gateway.errors.exceptions import ApiError, ConfigurationError
from menu_gateway.gateway.generation import GenerationResult, ModelAttempt
from menu_gateway.models.enums import GatewayState, ProviderName
from menu_gateway.models.provider_models import ProviderConfig
from menu_gateway.monitoring.metrics import provider_attempts_total
from menu_gateway.providers.base_adapter import BaseProviderAdapter
from menu_gateway.providers.exceptions import MissingContentError, UpstreamError
from menu_gateway.validation.response_sanitizer import ResponseSanitizer

logger = structlog.get_logger(__name__)


class ProviderGateway:
    """
    Selects the active provider and walks its model list.

    Attributes:
        configs: Provider configurations in priority order
        adapters: Adapter per provider name
        sanitizer: ResponseSanitizer applied to successful replies
    """

    def __init__(
        self,
        configs: tuple[ProviderConfig, ...],
        adapters: Mapping[ProviderName, BaseProviderAdapter],
        credentials: Mapping[str, str],
        sanitizer: Optional[ResponseSanitizer] = None,
    ):
        """
        Args:
            configs: Provider configurations, highest priority first
            adapters: Adapter instance for each configured provider name
            credentials: Non-empty credentials keyed by environment variable name
            sanitizer: Response sanitizer (a fresh one by default)
        """
        self.configs = configs
        self.adapters = adapters
        self._credentials = dict(credentials)
        self.sanitizer = sanitizer or ResponseSanitizer()

    @property
    def credential_env_vars(self) -> list[str]:
        return [config.credential_env_var for config in self.configs]

    def active_provider(self) -> Optional[ProviderConfig]:
        """First provider in priority order whose credential is configured."""
        for config in self.configs:
            if self._credentials.get(config.credential_env_var):
                return config
        return None

    def select_provider(self) -> ProviderConfig:
        """
        Raises:
            ConfigurationError: No provider has a credential configured
        """
        config = self.active_provider()
        if config is None:
            env_vars = self.credential_env_vars
            raise ConfigurationError(
                "No AI provider configured. Set one of: " + ", ".join(env_vars),
                {"required_env_vars": env_vars},
            )
        return config

    def provider_info(self) -> dict[str, Any]:
        """Active provider summary for health checks and startup logs."""
        config = self.active_provider()
        if config is None:
            return {"provider": None, "name": "None", "configured": False}
        return {
            "provider": config.name.value,
            "name": config.display_name,
            "configured": True,
        }

    async def generate(self, prompt: str) -> GenerationResult:
        """
        Run the state machine for one prompt.

        Args:
            prompt: Validated, sanitized prompt

        Returns:
            GenerationResult with the parsed payload

        Raises:
            ConfigurationError: No provider configured
            UpstreamError: Non-recoverable adapter failure, or 404/429 on the last model
            ApiError: No model returned any content
            ParseError: The reply was not valid JSON
        """
        state = GatewayState.SELECT_PROVIDER
        config: Optional[ProviderConfig] = None
        model_index = 0
        text: Optional[str] = None
        last_error: Optional[UpstreamError] = None
        attempts: list[ModelAttempt] = []

        while True:
            if state is GatewayState.SELECT_PROVIDER:
                config = self.select_provider()
                logger.info(
                    "Provider selected",
                    provider=config.name.value,
                    models=list(config.models),
                )
                state = GatewayState.TRY_MODEL

            elif state is GatewayState.TRY_MODEL:
                model = config.models[model_index]
                adapter = self.adapters[config.name]
                credentials = self._credentials[config.credential_env_var]
                start_time = time.perf_counter()
                try:
                    text = await adapter.generate(prompt, credentials, model)
                except UpstreamError as e:
                    latency_ms = int((time.perf_counter() - start_time) * 1000)
                    recoverable = isinstance(e, MissingContentError) or e.model_unavailable
                    outcome = "fallback" if recoverable else "error"
                    attempts.append(ModelAttempt(model, outcome, e.upstream_status, latency_ms))
                    provider_attempts_total.labels(
                        provider=config.name.value, model=model, outcome=outcome
                    ).inc()
                    if not recoverable:
                        logger.error(
                            "Provider call failed, not retrying",
                            provider=config.name.value,
                            model=model,
                            upstream_status=e.upstream_status,
                            attempt=len(attempts),
                        )
                        raise
                    logger.warning(
                        "Model unavailable, trying next model",
                        provider=config.name.value,
                        model=model,
                        upstream_status=e.upstream_status,
                        error_type=type(e).__name__,
                    )
                    last_error = e
                    state = GatewayState.NEXT_MODEL
                else:
                    latency_ms = int((time.perf_counter() - start_time) * 1000)
                    attempts.append(ModelAttempt(model, "success", None, latency_ms))
                    provider_attempts_total.labels(
                        provider=config.name.value, model=model, outcome="success"
                    ).inc()
                    state = GatewayState.SUCCESS

            elif state is GatewayState.NEXT_MODEL:
                model_index += 1
                state = (
                    GatewayState.TRY_MODEL
                    if model_index < len(config.models)
                    else GatewayState.FAIL
                )

            elif state is GatewayState.SUCCESS:
                model = config.models[model_index]
                payload = self.sanitizer.sanitize(
                    text, config.display_name, provider=config.name.value, model=model
                )
                logger.info(
                    "Generation succeeded",
                    provider=config.name.value,
                    model=model,
                    attempts=len(attempts),
                )
                return GenerationResult(
                    payload=payload,
                    provider=config.name.value,
                    model=model,
                    attempts=tuple(attempts),
                )

            elif state is GatewayState.FAIL:
                logger.error(
                    "All models exhausted",
                    provider=config.name.value,
                    models=list(config.models),
                    attempts=len(attempts),
                )
                if isinstance(last_error, MissingContentError):
                    raise ApiError(
                        f"{config.display_name} API returned no valid content",
                        {
                            "provider": config.name.value,
                            "models_tried": [attempt.model for attempt in attempts],
                        },
                    ) from last_error
                raise last_error
