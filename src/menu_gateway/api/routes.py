"""
HTTP routes for menu generation.

POST /api/generate-menu runs the full gating pipeline:

    client key -> rate limit -> body/prompt validation -> provider gateway

Every response from this endpoint, errors included, carries the
X-RateLimit-Limit and X-RateLimit-Remaining headers, so errors are rendered
here instead of by the global exception handlers.
"""

import json
from typing import Any, Optional

import structlog
from fastapi import APIRouter, Depends, Request, status
from fastapi.responses import JSONResponse

from menu_gateway.api.dependencies import (
    get_error_classifier,
    get_gateway,
    get_rate_limiter,
    get_settings,
)
from menu_gateway.api.models import ErrorResponse, HealthResponse, RateLimitMetricsResponse
from menu_gateway.config import Settings
from menu_gateway.errors.classifier import ErrorClassifier
from menu_gateway.errors.exceptions import RateLimitExceededError, RequestValidationError
from menu_gateway.gateway.provider_gateway import ProviderGateway
from menu_gateway.models.enums import ErrorKind
from menu_gateway.rate_limiting.client_identifier import identify_client
from menu_gateway.rate_limiting.limiter import RateLimitStore
from menu_gateway.validation.request_validation import validate_prompt

logger = structlog.get_logger(__name__)

RATE_LIMIT_MESSAGE = "Too many requests. Please wait before generating a new menu."
BODY_TOO_LARGE = "Request body too large"
BODY_NOT_JSON = "Request body is not valid JSON"

router = APIRouter()


async def read_json_body(request: Request, max_bytes: int) -> Optional[Any]:
    """
    Read and decode the JSON request body.

    Returns:
        Decoded JSON, or None for an empty body

    Raises:
        RequestValidationError: Body larger than max_bytes, or not valid JSON
    """
    declared = request.headers.get("content-length")
    if declared and declared.isdigit() and int(declared) > max_bytes:
        raise RequestValidationError(BODY_TOO_LARGE, {"max_bytes": max_bytes})

    raw = await request.body()
    if len(raw) > max_bytes:
        raise RequestValidationError(BODY_TOO_LARGE, {"max_bytes": max_bytes})
    if not raw.strip():
        return None

    try:
        return json.loads(raw)
    except ValueError as e:
        raise RequestValidationError(BODY_NOT_JSON, {"parse_error": str(e)}) from e


@router.post(
    "/api/generate-menu",
    summary="Generate a menu from a prompt",
    description="""
    Forward the prompt to the highest-priority configured provider and return
    its JSON reply verbatim. Subject to a per-client fixed-window rate limit.
    """,
    responses={
        200: {"description": "Provider JSON payload"},
        400: {"model": ErrorResponse, "description": "Invalid request body or prompt"},
        429: {"model": ErrorResponse, "description": "Rate limit exceeded"},
        500: {"model": ErrorResponse, "description": "No provider configured or internal error"},
        502: {"model": ErrorResponse, "description": "Provider failure"},
        504: {"model": ErrorResponse, "description": "Provider timeout"},
    },
)
async def generate_menu(
    request: Request,
    rate_limiter: RateLimitStore = Depends(get_rate_limiter),
    gateway: ProviderGateway = Depends(get_gateway),
    classifier: ErrorClassifier = Depends(get_error_classifier),
    settings: Settings = Depends(get_settings),
) -> JSONResponse:
    client_key = identify_client(
        request.headers, request.client.host if request.client else None
    )
    structlog.contextvars.bind_contextvars(client_key=client_key)

    decision = rate_limiter.check_and_consume(client_key)
    headers = {
        "X-RateLimit-Limit": str(rate_limiter.max_requests),
        "X-RateLimit-Remaining": str(decision.remaining),
    }
    retry_after: Optional[int] = None

    try:
        if not decision.allowed:
            retry_after = decision.retry_after_seconds(rate_limiter.now())
            headers["Retry-After"] = str(retry_after)
            raise RateLimitExceededError(
                RATE_LIMIT_MESSAGE,
                {"retry_after": retry_after, "reset_at": decision.reset_at},
            )

        body = await read_json_body(request, settings.MAX_BODY_BYTES)
        prompt = validate_prompt(
            body,
            min_length=settings.MIN_PROMPT_LENGTH,
            max_length=settings.MAX_PROMPT_LENGTH,
        )
        result = await gateway.generate(prompt)
    except Exception as exc:
        envelope = classifier.handle(exc)
        content = envelope.to_body(include_details=not settings.is_production)
        if envelope.kind is ErrorKind.RATE_LIMIT and retry_after is not None:
            content["retryAfter"] = retry_after
        return JSONResponse(status_code=envelope.http_status, content=content, headers=headers)

    logger.info(
        "Menu generated",
        provider=result.provider,
        model=result.model,
        attempts=len(result.attempts),
        fallbacks=result.fallback_count,
    )
    return JSONResponse(status_code=status.HTTP_200_OK, content=result.payload, headers=headers)


@router.get(
    "/api/health",
    response_model=HealthResponse,
    summary="Health check",
)
async def health_check(
    gateway: ProviderGateway = Depends(get_gateway),
    settings: Settings = Depends(get_settings),
) -> HealthResponse:
    """Liveness plus the active provider. Never calls a provider."""
    return HealthResponse(version=settings.APP_VERSION, provider=gateway.provider_info())


@router.get(
    "/api/metrics",
    response_model=RateLimitMetricsResponse,
    summary="Rate limiter metrics",
)
async def rate_limit_metrics(
    rate_limiter: RateLimitStore = Depends(get_rate_limiter),
) -> RateLimitMetricsResponse:
    return RateLimitMetricsResponse.from_snapshot(rate_limiter.get_metrics())
