"""
FastAPI application entry point for the menu generation gateway.
"""

from contextlib import asynccontextmanager
from typing import Optional

import structlog
from fastapi import FastAPI
from prometheus_fastapi_instrumentator import Instrumentator

from menu_gateway.api.cors import configure_cors
from menu_gateway.api.error_handlers import EXCEPTION_HANDLERS
from menu_gateway.api.middleware import RequestTracingMiddleware
from menu_gateway.api.routes import router
from menu_gateway.config import Settings, settings as default_settings
from menu_gateway.env_validation import validate_env
from menu_gateway.errors.classifier import ErrorClassifier
from menu_gateway.gateway.provider_gateway import ProviderGateway
from menu_gateway.logging_config import configure_logging
from menu_gateway.providers.registry import build_adapters, build_provider_configs
from menu_gateway.rate_limiting.limiter import RateLimiter
from menu_gateway.validation.response_sanitizer import ResponseSanitizer

logger = structlog.get_logger(__name__)

DEFAULT_PORT = 3001


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Start the rate-limit sweep; on shutdown stop it and close provider clients."""
    settings: Settings = app.state.settings
    rate_limiter: RateLimiter = app.state.rate_limiter
    gateway: ProviderGateway = app.state.gateway

    logger.info(
        "Application startup",
        version=settings.APP_VERSION,
        environment=settings.ENVIRONMENT,
    )
    validate_env(settings)

    info = gateway.provider_info()
    if info["configured"]:
        logger.info("Active provider", provider=info["provider"], name=info["name"])
    else:
        logger.warning(
            "No provider configured",
            required_env_vars=gateway.credential_env_vars,
        )
    logger.info(
        "Rate limit policy",
        max_requests=rate_limiter.max_requests,
        window_seconds=rate_limiter.window_seconds,
    )

    rate_limiter.start_cleanup()
    try:
        yield
    finally:
        logger.info("Application shutdown")
        await rate_limiter.aclose()
        for adapter in app.state.gateway.adapters.values():
            await adapter.close()
        logger.info("Application shutdown complete")


def create_app(settings: Optional[Settings] = None) -> FastAPI:
    """
    Build the application and every long-lived component it owns.

    Args:
        settings: Settings to use (the environment-loaded instance by default)
    """
    settings = settings or default_settings
    configure_logging(settings.LOG_LEVEL, settings.ENVIRONMENT)

    app = FastAPI(
        title=settings.APP_NAME,
        description="Rate-limited multi-provider gateway for menu generation",
        version=settings.APP_VERSION,
        debug=settings.DEBUG,
        docs_url="/docs",
        redoc_url="/redoc",
        lifespan=lifespan,
    )

    configs = build_provider_configs(settings)
    app.state.settings = settings
    app.state.rate_limiter = RateLimiter(
        window_seconds=settings.RATE_LIMIT_WINDOW_SECONDS,
        max_requests=settings.RATE_LIMIT_MAX_REQUESTS,
        cleanup_interval_seconds=settings.RATE_LIMIT_CLEANUP_INTERVAL_SECONDS,
    )
    app.state.gateway = ProviderGateway(
        configs=configs,
        adapters=build_adapters(configs, timeout=settings.PROVIDER_TIMEOUT_SECONDS),
        credentials=settings.provider_credentials(),
        sanitizer=ResponseSanitizer(),
    )
    app.state.classifier = ErrorClassifier()

    # Request tracing middleware (request_id in all logs)
    app.add_middleware(RequestTracingMiddleware)
    configure_cors(app, settings.ALLOWED_ORIGINS)

    for exc_class, handler in EXCEPTION_HANDLERS.items():
        app.add_exception_handler(exc_class, handler)

    app.include_router(router, tags=["menu"])

    if settings.PROMETHEUS_ENABLED:
        Instrumentator().instrument(app).expose(app)

    return app


app = create_app()


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "menu_gateway.main:app",
        host=default_settings.HOST,
        port=default_settings.PORT or DEFAULT_PORT,
        reload=default_settings.DEBUG,
    )
