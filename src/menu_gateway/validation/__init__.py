"""
Input and output validation.

- request_validation: prompt bounds checks and sanitization (client input)
- response_sanitizer: fence stripping and strict JSON parsing (provider output)
"""

from menu_gateway.validation.exceptions import ParseError
from menu_gateway.validation.request_validation import sanitize_prompt, validate_prompt
from menu_gateway.validation.response_sanitizer import ResponseSanitizer, strip_code_fences

__all__ = [
    "ParseError",
    "ResponseSanitizer",
    "sanitize_prompt",
    "strip_code_fences",
    "validate_prompt",
]
