"""
Startup environment validation.

Reports missing provider credentials and optional settings that fell back
to defaults. Never raises: a misconfigured service still starts so that
/api/health stays reachable, and generation requests fail with a 500.
"""

from dataclasses import dataclass, field

import structlog

from menu_gateway.config import Settings

logger = structlog.get_logger(__name__)

CREDENTIAL_ENV_VARS = ("GROQ_API_KEY", "GOOGLE_API_KEY", "ANTHROPIC_API_KEY")


@dataclass(frozen=True)
class EnvValidationResult:
    """
    Attributes:
        is_valid: At least one provider credential is configured
        missing: Requirements that are not met
        warnings: Optional settings left at their defaults
    """

    is_valid: bool
    missing: list[str] = field(default_factory=list)
    warnings: list[str] = field(default_factory=list)


def validate_env(settings: Settings) -> EnvValidationResult:
    """Check provider credentials and optional settings, logging the outcome."""
    missing: list[str] = []
    warnings: list[str] = []

    if not settings.provider_credentials():
        missing.append(f"AI provider credential (one of: {', '.join(CREDENTIAL_ENV_VARS)})")

    if settings.PORT is None and not settings.is_production:
        warnings.append("PORT not set, using default 3001")

    for item in missing:
        logger.error("Missing required configuration", requirement=item)
    for item in warnings:
        logger.warning("Configuration warning", warning=item)

    if not missing:
        logger.info(
            "Environment validated",
            configured_env_vars=sorted(settings.provider_credentials()),
        )

    return EnvValidationResult(is_valid=not missing, missing=missing, warnings=warnings)
