"""
Validation-specific exceptions.

ParseError is an upstream failure (the provider answered, but not with JSON),
so it lives in the API bucket rather than the client VALIDATION bucket.
"""

from menu_gateway.errors.exceptions import ApiError


class ParseError(ApiError):
    """
    Provider reply was empty or not valid JSON after fence stripping.

    Raised by ResponseSanitizer; never retried at the sanitizer level.
    """

    def __init__(
        self,
        message: str,
        provider_label: str,
        model: str | None = None,
        raw_content: str | None = None,
        parse_error: str | None = None,
    ):
        """
        Args:
            message: Error description
            provider_label: Friendly name of the provider the reply came from
            model: Model that produced the reply, if known
            raw_content: First 200 chars of the rejected reply (for debugging)
            parse_error: Original json.JSONDecodeError message
        """
        details = {"provider": provider_label}
        if model:
            details["model"] = model
        if raw_content:
            details["content_snippet"] = raw_content[:200]
        if parse_error:
            details["parse_error"] = parse_error

        super().__init__(message, details)
        self.provider_label = provider_label
        self.model = model
