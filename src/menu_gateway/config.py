"""
Configuration settings for the menu generation gateway.

All settings are loaded from environment variables with sensible defaults.
Use .env file for local development (see .env.example).
"""

from typing import Optional

from pydantic import SecretStr
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # === Application ===
    APP_NAME: str = "Menu Generation Gateway"
    APP_VERSION: str = "0.1.0"
    DEBUG: bool = False
    LOG_LEVEL: str = "INFO"
    ENVIRONMENT: str = "development"  # "production" hides error details
    HOST: str = "0.0.0.0"
    PORT: Optional[int] = None  # Falls back to 3001 when unset

    # === Provider Credentials (presence selects the provider) ===
    GROQ_API_KEY: Optional[SecretStr] = None
    GOOGLE_API_KEY: Optional[SecretStr] = None
    ANTHROPIC_API_KEY: Optional[SecretStr] = None

    # === Provider Endpoints ===
    GROQ_ENDPOINT: str = "https://api.groq.com/openai/v1/chat/completions"
    GOOGLE_ENDPOINT: str = "https://generativelanguage.googleapis.com/v1beta/models/{model}:generateContent"
    ANTHROPIC_ENDPOINT: str = "https://api.anthropic.com/v1/messages"

    # === Provider Models (ordered, first is preferred) ===
    GROQ_MODELS: list[str] = ["llama-3.3-70b-versatile"]
    GOOGLE_MODELS: list[str] = [
        "gemini-2.0-flash",
        "gemini-1.5-flash-latest",
        "gemini-pro",
    ]
    ANTHROPIC_MODELS: list[str] = ["claude-sonnet-4-20250514"]

    # === Generation Parameters ===
    GROQ_TEMPERATURE: float = 0.7
    GROQ_MAX_TOKENS: int = 8000
    GROQ_SYSTEM_MESSAGE: str = (
        "You are a specialist nutritionist. ALWAYS reply ONLY with valid JSON, "
        "no markdown, no additional text."
    )
    GOOGLE_TEMPERATURE: float = 0.7
    GOOGLE_TOP_K: int = 40
    GOOGLE_TOP_P: float = 0.95
    GOOGLE_MAX_OUTPUT_TOKENS: int = 8192
    GOOGLE_RESPONSE_MIME_TYPE: str = "application/json"
    ANTHROPIC_MAX_TOKENS: int = 6000
    ANTHROPIC_VERSION: str = "2023-06-01"

    # Per-call timeout for outbound provider requests
    PROVIDER_TIMEOUT_SECONDS: float = 60.0

    # === Rate Limiting ===
    RATE_LIMIT_WINDOW_SECONDS: float = 3600.0  # 1 hour
    RATE_LIMIT_MAX_REQUESTS: int = 20
    RATE_LIMIT_CLEANUP_INTERVAL_SECONDS: float = 1800.0  # 30 minutes

    # === Request Limits ===
    MIN_PROMPT_LENGTH: int = 10
    MAX_PROMPT_LENGTH: int = 50000
    MAX_BODY_BYTES: int = 1_048_576  # 1 MB

    # === CORS ===
    ALLOWED_ORIGINS: list[str] = [
        "https://cardapio-familiar-inteligente.vercel.app",
        "http://localhost:3000",
        "http://localhost:5173",
    ]

    # === Monitoring ===
    PROMETHEUS_ENABLED: bool = True

    @property
    def is_production(self) -> bool:
        return self.ENVIRONMENT.lower() == "production"

    def provider_credentials(self) -> dict[str, str]:
        """
        Credentials keyed by environment variable name.

        Only non-empty values are returned; a variable that is unset or
        blank is treated as absent.
        """
        credentials = {}
        for env_var in ("GROQ_API_KEY", "GOOGLE_API_KEY", "ANTHROPIC_API_KEY"):
            secret: Optional[SecretStr] = getattr(self, env_var)
            if secret is not None and secret.get_secret_value().strip():
                credentials[env_var] = secret.get_secret_value().strip()
        return credentials


# Global settings instance
settings = Settings()
