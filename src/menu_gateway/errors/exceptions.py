"""
Application exception hierarchy.

Every deliberately raised error carries an explicit ErrorKind and HTTP status
so the ErrorClassifier never has to guess for errors we construct ourselves.
"""

from typing import Any

from fastapi import status

from menu_gateway.models.enums import ErrorKind


class AppError(Exception):
    """
    Base exception for all gateway errors.

    Attributes:
        message: Human-readable, client-safe description
        kind: Taxonomy bucket (API, VALIDATION, ...)
        status_code: HTTP status to respond with
        details: Structured data for logs (and non-production responses)
    """

    kind: ErrorKind = ErrorKind.UNKNOWN
    status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR

    def __init__(
        self,
        message: str,
        details: dict[str, Any] | None = None,
        *,
        kind: ErrorKind | None = None,
        status_code: int | None = None,
    ):
        super().__init__(message)
        self.message = message
        self.details = details or {}
        if kind is not None:
            self.kind = kind
        if status_code is not None:
            self.status_code = status_code


class ApiError(AppError):
    """An upstream provider failed or returned unusable content."""

    kind = ErrorKind.API
    status_code = status.HTTP_502_BAD_GATEWAY


class RequestValidationError(AppError):
    """Client input is malformed or out of bounds. Never retried."""

    kind = ErrorKind.VALIDATION
    status_code = status.HTTP_400_BAD_REQUEST


class RateLimitExceededError(AppError):
    """Client exceeded its request quota for the current window."""

    kind = ErrorKind.RATE_LIMIT
    status_code = status.HTTP_429_TOO_MANY_REQUESTS


class ConfigurationError(AppError):
    """Local misconfiguration that only an operator can fix."""

    kind = ErrorKind.SYSTEM
    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR
