"""
Incoming request validation and prompt sanitization.

The prompt is checked against length bounds, stripped of control characters
and whitespace-normalized before it is forwarded to any provider.
"""

import re
from typing import Any

import structlog

from menu_gateway.errors.exceptions import RequestValidationError

logger = structlog.get_logger(__name__)

PROMPT_REQUIRED = "Prompt not provided"
PROMPT_NOT_STRING = "Prompt must be a string"
PROMPT_TOO_SHORT = "Prompt too short. Provide more details."
PROMPT_TOO_LARGE = "Prompt too large"
PROMPT_INVALID_AFTER_SANITIZATION = "Prompt invalid after sanitization"
BODY_REQUIRED = "Request body not provided"

_CONTROL_CHARS = re.compile(r"[\x00-\x1f\x7f]")
_WHITESPACE_RUN = re.compile(r"\s+")


def sanitize_prompt(prompt: str) -> str:
    """Drop ASCII control characters, collapse whitespace runs, trim."""
    prompt = _CONTROL_CHARS.sub("", prompt)
    return _WHITESPACE_RUN.sub(" ", prompt).strip()


def validate_prompt(body: Any, min_length: int = 10, max_length: int = 50000) -> str:
    """
    Validate a decoded request body and return the sanitized prompt.

    Length bounds apply to the prompt as received; the sanitized prompt must
    still meet the minimum.

    Raises:
        RequestValidationError: On any violation (400)
    """
    if not isinstance(body, dict):
        raise RequestValidationError(BODY_REQUIRED)

    prompt = body.get("prompt")

    if prompt is None or prompt == "":
        raise RequestValidationError(PROMPT_REQUIRED)

    if not isinstance(prompt, str):
        raise RequestValidationError(
            PROMPT_NOT_STRING, {"received_type": type(prompt).__name__}
        )

    if len(prompt) < min_length:
        raise RequestValidationError(
            PROMPT_TOO_SHORT, {"length": len(prompt), "min_length": min_length}
        )

    if len(prompt) > max_length:
        raise RequestValidationError(
            PROMPT_TOO_LARGE, {"length": len(prompt), "max_length": max_length}
        )

    sanitized = sanitize_prompt(prompt)
    if len(sanitized) < min_length:
        raise RequestValidationError(
            PROMPT_INVALID_AFTER_SANITIZATION,
            {"length": len(sanitized), "min_length": min_length},
        )

    logger.debug("Prompt validated", prompt_length=len(sanitized))
    return sanitized
