"""
Provider registry.

Builds the static provider configurations from Settings, in priority order,
and the matching adapter instances.
"""

from typing import Optional

import httpx

from menu_gateway.config import Settings
from menu_gateway.models.enums import ProviderName
from menu_gateway.models.provider_models import ProviderConfig
from menu_gateway.providers.anthropic_adapter import AnthropicAdapter
from menu_gateway.providers.base_adapter import BaseProviderAdapter
from menu_gateway.providers.google_adapter import GoogleAdapter
from menu_gateway.providers.groq_adapter import GroqAdapter

ADAPTER_CLASSES: dict[ProviderName, type[BaseProviderAdapter]] = {
    ProviderName.GROQ: GroqAdapter,
    ProviderName.GOOGLE: GoogleAdapter,
    ProviderName.ANTHROPIC: AnthropicAdapter,
}


def build_provider_configs(settings: Settings) -> tuple[ProviderConfig, ...]:
    """Provider configurations, highest priority first (Groq, Google, Anthropic)."""
    return (
        ProviderConfig(
            name=ProviderName.GROQ,
            display_name="Groq (Llama 3.3 70B)",
            endpoint_template=settings.GROQ_ENDPOINT,
            credential_env_var="GROQ_API_KEY",
            models=tuple(settings.GROQ_MODELS),
            request_template={
                "system_message": settings.GROQ_SYSTEM_MESSAGE,
                "temperature": settings.GROQ_TEMPERATURE,
                "max_tokens": settings.GROQ_MAX_TOKENS,
            },
        ),
        ProviderConfig(
            name=ProviderName.GOOGLE,
            display_name="Google Gemini",
            endpoint_template=settings.GOOGLE_ENDPOINT,
            credential_env_var="GOOGLE_API_KEY",
            models=tuple(settings.GOOGLE_MODELS),
            request_template={
                "temperature": settings.GOOGLE_TEMPERATURE,
                "top_k": settings.GOOGLE_TOP_K,
                "top_p": settings.GOOGLE_TOP_P,
                "max_output_tokens": settings.GOOGLE_MAX_OUTPUT_TOKENS,
                "response_mime_type": settings.GOOGLE_RESPONSE_MIME_TYPE,
            },
        ),
        ProviderConfig(
            name=ProviderName.ANTHROPIC,
            display_name="Anthropic Claude",
            endpoint_template=settings.ANTHROPIC_ENDPOINT,
            credential_env_var="ANTHROPIC_API_KEY",
            models=tuple(settings.ANTHROPIC_MODELS),
            request_template={
                "max_tokens": settings.ANTHROPIC_MAX_TOKENS,
                "anthropic_version": settings.ANTHROPIC_VERSION,
            },
        ),
    )


def build_adapters(
    configs: tuple[ProviderConfig, ...],
    timeout: float,
    transport: Optional[httpx.AsyncBaseTransport] = None,
) -> dict[ProviderName, BaseProviderAdapter]:
    """One adapter per provider configuration, sharing the same timeout."""
    return {
        config.name: ADAPTER_CLASSES[config.name](config, timeout=timeout, transport=transport)
        for config in configs
    }
