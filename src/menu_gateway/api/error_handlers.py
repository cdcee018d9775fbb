"""
FastAPI exception handlers for structured error responses.

Every handler funnels through the application's ErrorClassifier so that all
error bodies share one shape: {"error": message[, "details": {...}]}.
"""

from fastapi import Request, status
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError as FastAPIRequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from menu_gateway.errors.exceptions import AppError, RequestValidationError
from menu_gateway.models.enums import ErrorKind


def render_error(request: Request, exc: BaseException, headers: dict | None = None) -> JSONResponse:
    """Classify `exc` and build the JSON response for it."""
    classifier = request.app.state.classifier
    settings = request.app.state.settings

    envelope = classifier.handle(exc)
    return JSONResponse(
        status_code=envelope.http_status,
        content=envelope.to_body(include_details=not settings.is_production),
        headers=headers,
    )


async def app_error_handler(request: Request, exc: AppError) -> JSONResponse:
    """Errors raised deliberately by the application (explicit kind and status)."""
    return render_error(request, exc)


async def http_exception_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    """
    Starlette HTTP errors: unmatched routes, wrong methods, etc.

    A 404 becomes "Route not found: <METHOD> <path>".
    """
    if exc.status_code == status.HTTP_404_NOT_FOUND:
        message = f"Route not found: {request.method} {request.url.path}"
    else:
        message = str(exc.detail)

    kind = ErrorKind.VALIDATION if exc.status_code < 500 else ErrorKind.SYSTEM
    error = AppError(message, kind=kind, status_code=exc.status_code)
    return render_error(request, error, headers=getattr(exc, "headers", None))


async def request_validation_error_handler(
    request: Request, exc: FastAPIRequestValidationError
) -> JSONResponse:
    """Request parsing errors from FastAPI map to 400, not 422."""
    error = RequestValidationError(
        "Invalid request format",
        {"errors": jsonable_encoder(exc.errors())},
    )
    return render_error(request, error)


async def generic_error_handler(request: Request, exc: Exception) -> JSONResponse:
    """Anything unexpected. The classifier logs the traceback server-side."""
    return render_error(request, exc)


# Exception handler mapping for FastAPI app.add_exception_handler()
EXCEPTION_HANDLERS = {
    AppError: app_error_handler,
    StarletteHTTPException: http_exception_handler,
    FastAPIRequestValidationError: request_validation_error_handler,
    Exception: generic_error_handler,
}
