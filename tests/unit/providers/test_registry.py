"""
Unit tests for the provider registry.
"""

from menu_gateway.models.enums import ProviderName
from menu_gateway.providers.anthropic_adapter import AnthropicAdapter
from menu_gateway.providers.google_adapter import GoogleAdapter
from menu_gateway.providers.groq_adapter import GroqAdapter
from menu_gateway.providers.registry import build_adapters, build_provider_configs


def test_configs_in_priority_order(test_settings):
    configs = build_provider_configs(test_settings)

    assert [config.name for config in configs] == [
        ProviderName.GROQ,
        ProviderName.GOOGLE,
        ProviderName.ANTHROPIC,
    ]
    assert [config.credential_env_var for config in configs] == [
        "GROQ_API_KEY",
        "GOOGLE_API_KEY",
        "ANTHROPIC_API_KEY",
    ]


def test_google_has_model_fallback_list(test_settings):
    google = build_provider_configs(test_settings)[1]

    assert google.models == (
        "gemini-2.0-flash",
        "gemini-1.5-flash-latest",
        "gemini-pro",
    )
    assert google.endpoint_for("gemini-pro").endswith("/models/gemini-pro:generateContent")


def test_request_templates_come_from_settings(test_settings):
    settings = test_settings.model_copy(update={"GROQ_TEMPERATURE": 0.2, "ANTHROPIC_MAX_TOKENS": 100})

    groq, _, anthropic = build_provider_configs(settings)

    assert groq.request_template["temperature"] == 0.2
    assert anthropic.request_template["max_tokens"] == 100


def test_build_adapters(test_settings):
    adapters = build_adapters(build_provider_configs(test_settings), timeout=12.5)

    assert isinstance(adapters[ProviderName.GROQ], GroqAdapter)
    assert isinstance(adapters[ProviderName.GOOGLE], GoogleAdapter)
    assert isinstance(adapters[ProviderName.ANTHROPIC], AnthropicAdapter)
    assert all(adapter.timeout == 12.5 for adapter in adapters.values())
