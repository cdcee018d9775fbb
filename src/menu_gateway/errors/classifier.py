"""
Error classification into the client-facing taxonomy.

Any exception that reaches the HTTP layer goes through ErrorClassifier, which
decides the ErrorKind, the HTTP status and a message that is safe to show.
"""

import re
from dataclasses import dataclass, field
from typing import Any, Optional

import structlog
from fastapi import status

from menu_gateway.errors.exceptions import AppError
from menu_gateway.models.enums import ErrorKind
from menu_gateway.monitoring.metrics import classified_errors_total

logger = structlog.get_logger(__name__)


# Ordered: the first bucket with a matching token wins
KEYWORD_BUCKETS: tuple[tuple[ErrorKind, tuple[str, ...]], ...] = (
    (
        ErrorKind.API,
        ("api", "fetch", "network", "upstream", "groq", "google", "gemini", "anthropic", "claude"),
    ),
    (
        ErrorKind.VALIDATION,
        ("validation", "invalid", "required", "must be", "too short", "too large", "too long"),
    ),
    (
        ErrorKind.RATE_LIMIT,
        ("rate limit", "too many requests"),
    ),
    (
        ErrorKind.SYSTEM,
        ("internal", "server", "address already in use", "name or service not known", "errno"),
    ),
)

STATUS_BY_KIND: dict[ErrorKind, int] = {
    ErrorKind.VALIDATION: status.HTTP_400_BAD_REQUEST,
    ErrorKind.RATE_LIMIT: status.HTTP_429_TOO_MANY_REQUESTS,
    ErrorKind.API: status.HTTP_502_BAD_GATEWAY,
    ErrorKind.SYSTEM: status.HTTP_500_INTERNAL_SERVER_ERROR,
    ErrorKind.UNKNOWN: status.HTTP_500_INTERNAL_SERVER_ERROR,
}

GENERIC_ERROR_MESSAGE = "Error generating menu. Please try again."

CANNED_MESSAGES: dict[ErrorKind, str] = {
    ErrorKind.API: "Temporary problem communicating with the AI service. Please try again shortly.",
    ErrorKind.VALIDATION: "Prompt not provided",
    ErrorKind.RATE_LIMIT: "Too many requests. Please wait a moment before trying again.",
    ErrorKind.SYSTEM: GENERIC_ERROR_MESSAGE,
    ErrorKind.UNKNOWN: GENERIC_ERROR_MESSAGE,
}

_STACK_TRACE_PATTERN = re.compile(
    r"Traceback \(most recent call last\)"
    r"|File \"[^\"]*\", line \d+"
    r"|\n\s+at\s"
    r"|\b\w*(?:Error|Exception):"
)


@dataclass(frozen=True)
class ErrorEnvelope:
    """Classified error, ready to be rendered as an HTTP response."""

    kind: ErrorKind
    http_status: int
    message: str
    details: Optional[dict[str, Any]] = field(default=None)

    def to_body(self, include_details: bool = False) -> dict[str, Any]:
        """Client-visible JSON body. Details are opt-in (non-production only)."""
        body: dict[str, Any] = {"error": self.message}
        if include_details and self.details:
            body["details"] = self.details
        return body


def is_user_safe(message: str) -> bool:
    """True when the message is non-empty and carries nothing trace-like."""
    return bool(message and message.strip()) and not _STACK_TRACE_PATTERN.search(message)


def _message_of(error: BaseException) -> str:
    for attr in ("message", "detail"):
        value = getattr(error, attr, None)
        if isinstance(value, str) and value:
            return value
    return str(error)


class ErrorClassifier:
    """
    Maps any exception to an ErrorEnvelope.

    Precedence for the kind:
    1. An explicit kind carried by the error (AppError subclasses)
    2. Keyword buckets matched against the lowercased message
    3. UNKNOWN

    An explicit status on the error always wins over the kind's default.
    """

    def categorize(self, error: BaseException | None) -> ErrorKind:
        if error is None:
            return ErrorKind.UNKNOWN
        if isinstance(error, AppError):
            return error.kind

        message = _message_of(error).lower()
        for kind, tokens in KEYWORD_BUCKETS:
            if any(token in message for token in tokens):
                return kind
        return ErrorKind.UNKNOWN

    def status_for(self, error: BaseException | None, kind: ErrorKind) -> int:
        explicit = getattr(error, "status_code", None)
        if isinstance(explicit, int) and 400 <= explicit <= 599:
            return explicit
        return STATUS_BY_KIND[kind]

    def format_message(self, error: BaseException | None, kind: ErrorKind) -> str:
        message = _message_of(error) if error is not None else ""
        if is_user_safe(message):
            return message
        return CANNED_MESSAGES[kind]

    def classify(self, error: BaseException | None) -> ErrorEnvelope:
        """Pure classification, no logging or metrics."""
        kind = self.categorize(error)
        details = error.details if isinstance(error, AppError) and error.details else None
        return ErrorEnvelope(
            kind=kind,
            http_status=self.status_for(error, kind),
            message=self.format_message(error, kind),
            details=details,
        )

    def handle(self, error: BaseException) -> ErrorEnvelope:
        """Classify, then log and count the error."""
        envelope = self.classify(error)
        classified_errors_total.labels(kind=envelope.kind.value).inc()

        log_fields = {
            "error_kind": envelope.kind.value,
            "status_code": envelope.http_status,
            "error_type": type(error).__name__,
            "error_message": _message_of(error),
            "details": envelope.details,
        }
        if envelope.kind in (ErrorKind.VALIDATION, ErrorKind.RATE_LIMIT):
            logger.warning("Request rejected", **log_fields)
        elif isinstance(error, AppError):
            logger.error("Request failed", **log_fields)
        else:
            # Unexpected exception type: keep the traceback server-side
            logger.error("Request failed", exc_info=error, **log_fields)
        return envelope
