"""Unit test fixtures (mocks and stubs).

Provides mock objects for testing without external dependencies.
"""

from unittest.mock import AsyncMock, MagicMock

import pytest

from menu_gateway.models.provider_models import ProviderConfig
from menu_gateway.providers.base_adapter import BaseProviderAdapter


def make_mock_adapter(config: ProviderConfig) -> MagicMock:
    """Adapter stub whose generate() is an AsyncMock (set side_effect per test)."""
    adapter = MagicMock(spec=BaseProviderAdapter)
    adapter.config = config
    adapter.name = config.name.value
    adapter.generate = AsyncMock()
    adapter.close = AsyncMock()
    return adapter


@pytest.fixture
def mock_google_adapter(google_config) -> MagicMock:
    return make_mock_adapter(google_config)


@pytest.fixture
def mock_groq_adapter(groq_config) -> MagicMock:
    return make_mock_adapter(groq_config)


@pytest.fixture
def mock_anthropic_adapter(anthropic_config) -> MagicMock:
    return make_mock_adapter(anthropic_config)
