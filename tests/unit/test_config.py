"""
Unit tests for Settings.
"""

from pydantic import SecretStr

from menu_gateway.config import Settings


def make_settings(**overrides) -> Settings:
    values = {"GROQ_API_KEY": None, "GOOGLE_API_KEY": None, "ANTHROPIC_API_KEY": None}
    values.update(overrides)
    return Settings(_env_file=None, **values)


def test_defaults():
    settings = make_settings()

    assert settings.RATE_LIMIT_WINDOW_SECONDS == 3600
    assert settings.RATE_LIMIT_MAX_REQUESTS == 20
    assert settings.RATE_LIMIT_CLEANUP_INTERVAL_SECONDS == 1800
    assert settings.MIN_PROMPT_LENGTH == 10
    assert settings.MAX_PROMPT_LENGTH == 50000
    assert settings.GOOGLE_MODELS[0] == "gemini-2.0-flash"


def test_no_credentials():
    assert make_settings().provider_credentials() == {}


def test_blank_credential_is_absent():
    settings = make_settings(GROQ_API_KEY="   ", GOOGLE_API_KEY="g-key")

    assert settings.provider_credentials() == {"GOOGLE_API_KEY": "g-key"}


def test_credentials_are_secret():
    settings = make_settings(ANTHROPIC_API_KEY="sk-ant-secret")

    assert isinstance(settings.ANTHROPIC_API_KEY, SecretStr)
    assert "sk-ant-secret" not in repr(settings)
    assert settings.provider_credentials()["ANTHROPIC_API_KEY"] == "sk-ant-secret"


def test_loaded_from_environment(monkeypatch):
    monkeypatch.setenv("GROQ_API_KEY", "from-env")
    monkeypatch.setenv("RATE_LIMIT_MAX_REQUESTS", "7")

    settings = Settings(_env_file=None)

    assert settings.provider_credentials()["GROQ_API_KEY"] == "from-env"
    assert settings.RATE_LIMIT_MAX_REQUESTS == 7


def test_is_production():
    assert make_settings(ENVIRONMENT="production").is_production
    assert make_settings(ENVIRONMENT="Production").is_production
    assert not make_settings(ENVIRONMENT="development").is_production
