"""
Provider reply sanitization.

Strips markdown code fences and parses the remainder as strict JSON.
This is a hard-fail step: no lenient repair of broken JSON is attempted.
"""

import json
import re
from typing import Any, Optional

import structlog

from menu_gateway.monitoring.metrics import sanitizer_failures_total
from menu_gateway.validation.exceptions import ParseError

logger = structlog.get_logger(__name__)

_LEADING_FENCE = re.compile(r"^\s*```(?:json)?[ \t]*\r?\n?", re.IGNORECASE)
_TRAILING_FENCE = re.compile(r"\r?\n?```\s*$")


def strip_code_fences(content: str) -> str:
    """Remove one leading ``` / ```json marker and one trailing ``` marker."""
    content = _LEADING_FENCE.sub("", content, count=1)
    content = _TRAILING_FENCE.sub("", content, count=1)
    return content.strip()


def _reject_constant(name: str) -> Any:
    # json.loads accepts NaN/Infinity by default; strict JSON does not
    raise ValueError(f"Non-standard JSON constant: {name}")


class ResponseSanitizer:
    """
    Turns a raw provider reply into parsed JSON.

    The result may be any JSON value; the menu payload is opaque here.
    """

    def sanitize(
        self,
        raw_text: Optional[str],
        provider_label: str,
        provider: Optional[str] = None,
        model: Optional[str] = None,
    ) -> Any:
        """
        Args:
            raw_text: Text extracted from the provider response
            provider_label: Friendly provider name used in error messages
            provider: Provider identifier for the failure metric (defaults to the label)
            model: Model that produced the reply, recorded in error details

        Returns:
            Parsed JSON value

        Raises:
            ParseError: Empty/None input, or invalid JSON after fence stripping
        """
        metric_provider = provider or provider_label

        if not raw_text or not raw_text.strip():
            sanitizer_failures_total.labels(provider=metric_provider, reason="empty_content").inc()
            raise ParseError(
                f"{provider_label} API response does not contain valid content",
                provider_label=provider_label,
                model=model,
            )

        cleaned = strip_code_fences(raw_text)

        try:
            parsed = json.loads(cleaned, parse_constant=_reject_constant)
        except ValueError as e:
            # json.JSONDecodeError is a ValueError subclass
            sanitizer_failures_total.labels(provider=metric_provider, reason="json_decode_error").inc()
            logger.error(
                "Invalid JSON from provider",
                provider=provider_label,
                model=model,
                content_snippet=cleaned[:200],
                parse_error=str(e),
            )
            raise ParseError(
                f"{provider_label} API response does not contain valid JSON",
                provider_label=provider_label,
                model=model,
                raw_content=cleaned,
                parse_error=str(e),
            ) from e

        logger.debug("Provider JSON parsed", provider=provider_label)
        return parsed
