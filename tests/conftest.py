"""Shared test fixtures and configuration for all tests.

This conftest.py provides common fixtures used across unit and integration tests.
"""

import pytest

from menu_gateway.config import Settings
from menu_gateway.models.enums import ProviderName
from menu_gateway.models.provider_models import ProviderConfig


class FakeClock:
    """Manually advanced clock for time-dependent components."""

    def __init__(self, start: float = 1_700_000_000.0):
        self.now = start

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


@pytest.fixture
def fake_clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def test_settings() -> Settings:
    """Test settings with safe defaults for local testing.

    No provider credentials and no .env lookup, so tests never reach a real
    provider. Override specific settings in individual tests as needed:
        settings = test_settings.model_copy(update={"RATE_LIMIT_MAX_REQUESTS": 2})
    """
    return Settings(
        _env_file=None,
        # === Application ===
        APP_NAME="Menu Generation Gateway (Test)",
        APP_VERSION="0.1.0",
        DEBUG=True,
        LOG_LEVEL="DEBUG",
        ENVIRONMENT="development",
        PORT=3001,
        # === Credentials ===
        GROQ_API_KEY=None,
        GOOGLE_API_KEY=None,
        ANTHROPIC_API_KEY=None,
        # === Rate Limiting ===
        RATE_LIMIT_WINDOW_SECONDS=3600,
        RATE_LIMIT_MAX_REQUESTS=20,
        RATE_LIMIT_CLEANUP_INTERVAL_SECONDS=1800,
        # === Monitoring ===
        PROMETHEUS_ENABLED=False,  # Disable metrics in tests unless explicitly needed
    )


@pytest.fixture
def google_config() -> ProviderConfig:
    """Google provider with two models, for fallback tests."""
    return ProviderConfig(
        name=ProviderName.GOOGLE,
        display_name="Google Gemini",
        endpoint_template="https://google.test/v1beta/models/{model}:generateContent",
        credential_env_var="GOOGLE_API_KEY",
        models=("m1", "m2"),
        request_template={"temperature": 0.7},
    )


@pytest.fixture
def groq_config() -> ProviderConfig:
    return ProviderConfig(
        name=ProviderName.GROQ,
        display_name="Groq (Llama 3.3 70B)",
        endpoint_template="https://groq.test/openai/v1/chat/completions",
        credential_env_var="GROQ_API_KEY",
        models=("llama-3.3-70b-versatile",),
        request_template={"temperature": 0.7, "max_tokens": 8000, "system_message": "JSON only"},
    )


@pytest.fixture
def anthropic_config() -> ProviderConfig:
    return ProviderConfig(
        name=ProviderName.ANTHROPIC,
        display_name="Anthropic Claude",
        endpoint_template="https://anthropic.test/v1/messages",
        credential_env_var="ANTHROPIC_API_KEY",
        models=("claude-sonnet-4-20250514",),
        request_template={"max_tokens": 6000, "anthropic_version": "2023-06-01"},
    )
