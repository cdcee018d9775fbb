"""Integration test fixtures.

Builds the full FastAPI application from test settings. Provider HTTP calls
are served by an httpx.MockTransport, so no test reaches a real provider.
"""

from collections.abc import Callable

import httpx
import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient
from pydantic import SecretStr

from menu_gateway.config import Settings
from menu_gateway.gateway.provider_gateway import ProviderGateway
from menu_gateway.main import create_app
from menu_gateway.providers.registry import build_adapters, build_provider_configs


def install_provider_transport(
    app: FastAPI,
    settings: Settings,
    handler: Callable[[httpx.Request], httpx.Response],
) -> list[httpx.Request]:
    """Rebuild the app's gateway with adapters that call `handler` instead of the network.

    Returns the list that collects every outbound provider request.
    """
    requests: list[httpx.Request] = []

    def recording_handler(request: httpx.Request) -> httpx.Response:
        requests.append(request)
        return handler(request)

    configs = build_provider_configs(settings)
    app.state.gateway = ProviderGateway(
        configs=configs,
        adapters=build_adapters(
            configs,
            timeout=settings.PROVIDER_TIMEOUT_SECONDS,
            transport=httpx.MockTransport(recording_handler),
        ),
        credentials=settings.provider_credentials(),
    )
    return requests


@pytest.fixture
def app(test_settings) -> FastAPI:
    return create_app(test_settings)


@pytest.fixture
def client(app) -> TestClient:
    with TestClient(app) as test_client:
        yield test_client


@pytest.fixture
def google_settings(test_settings) -> Settings:
    return test_settings.model_copy(update={"GOOGLE_API_KEY": SecretStr("test-google-key")})


@pytest.fixture
def provider_transport() -> Callable[..., list[httpx.Request]]:
    """Hands tests the install_provider_transport helper."""
    return install_provider_transport
