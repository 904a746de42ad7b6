"""Tests for application settings."""

import pytest

from models.config import Settings, get_settings, settings


class TestSettings:
    """Tests for Settings defaults and validation."""

    def test_share_rate_limit_defaults(self):
        """Default share budget is 20 requests per 60 seconds."""
        defaults = Settings()

        assert defaults.SHARE_RATE_LIMIT == 20
        assert defaults.SHARE_RATE_LIMIT_WINDOW_SECONDS == 60

    def test_environment_from_env(self):
        assert settings.ENVIRONMENT == "test"

    def test_cors_origins_comma_separated(self):
        """Origins passed as a string are split on commas."""
        parsed = Settings(CORS_ORIGINS="https://a.example, https://b.example")

        assert parsed.CORS_ORIGINS == ["https://a.example", "https://b.example"]

    def test_cors_origins_comma_separated_env(self, monkeypatch: pytest.MonkeyPatch):
        """A comma-separated env value is accepted, not parsed as JSON."""
        monkeypatch.setenv("CORS_ORIGINS", "https://a.example,https://b.example")

        assert Settings().CORS_ORIGINS == ["https://a.example", "https://b.example"]

    def test_cors_origins_json_env(self, monkeypatch: pytest.MonkeyPatch):
        """A JSON list env value is still accepted."""
        monkeypatch.setenv("CORS_ORIGINS", '["https://a.example", "https://b.example"]')

        assert Settings().CORS_ORIGINS == ["https://a.example", "https://b.example"]

    def test_cors_origins_single_origin_env(self, monkeypatch: pytest.MonkeyPatch):
        monkeypatch.setenv("CORS_ORIGINS", "*")

        assert Settings().CORS_ORIGINS == ["*"]

    def test_get_settings_returns_singleton(self):
        assert get_settings() is settings
