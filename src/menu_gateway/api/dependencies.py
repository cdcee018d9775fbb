"""
FastAPI dependency injection.

Every long-lived component is built once by create_app() and stored on
app.state; these providers hand them to the routes. Tests swap components by
building the app with their own settings or by replacing app.state entries.
"""

from fastapi import Request

from menu_gateway.config import Settings
from menu_gateway.errors.classifier import ErrorClassifier
from menu_gateway.gateway.provider_gateway import ProviderGateway
from menu_gateway.rate_limiting.limiter import RateLimitStore


def get_settings(request: Request) -> Settings:
    return request.app.state.settings


def get_rate_limiter(request: Request) -> RateLimitStore:
    """Process-wide rate limit store (one per application instance)."""
    return request.app.state.rate_limiter


def get_gateway(request: Request) -> ProviderGateway:
    return request.app.state.gateway


def get_error_classifier(request: Request) -> ErrorClassifier:
    return request.app.state.classifier
