"""
Enumerations for the menu generation gateway.

All enums are closed taxonomies - no values outside these sets are permitted.
"""

from enum import Enum


class ErrorKind(str, Enum):
    """
    Failure taxonomy used for every client-visible error.

    - API: upstream provider failed or returned unusable content
    - VALIDATION: malformed or out-of-bounds client input
    - RATE_LIMIT: client exceeded its quota for the current window
    - SYSTEM: local misconfiguration (e.g. no provider credentials)
    - UNKNOWN: anything that could not be categorized
    """

    API = "API"
    VALIDATION = "VALIDATION"
    RATE_LIMIT = "RATE_LIMIT"
    SYSTEM = "SYSTEM"
    UNKNOWN = "UNKNOWN"


class ProviderName(str, Enum):
    """
    Supported text-generation providers.

    Declaration order is the selection priority.
    """

    GROQ = "groq"
    GOOGLE = "google"
    ANTHROPIC = "anthropic"


class GatewayState(str, Enum):
    """States of the provider gateway's model fallback machine."""

    SELECT_PROVIDER = "select_provider"
    TRY_MODEL = "try_model"
    NEXT_MODEL = "next_model"
    SUCCESS = "success"
    FAIL = "fail"
