"""
Error taxonomy and classification.

- exceptions: AppError hierarchy carrying explicit kind and HTTP status
- classifier: ErrorClassifier mapping any exception to an ErrorEnvelope
"""

from menu_gateway.errors.classifier import ErrorClassifier, ErrorEnvelope
from menu_gateway.errors.exceptions import (
    ApiError,
    AppError,
    ConfigurationError,
    RateLimitExceededError,
    RequestValidationError,
)

__all__ = [
    "AppError",
    "ApiError",
    "ConfigurationError",
    "RateLimitExceededError",
    "RequestValidationError",
    "ErrorClassifier",
    "ErrorEnvelope",
]
