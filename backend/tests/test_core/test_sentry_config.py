"""Tests for Sentry SDK configuration with privacy-compliant settings."""

import os
from typing import Any
from unittest.mock import patch

import pytest

from core.sentry_config import (
    _before_send,
    _before_send_transaction,
    _traces_sampler,
    init_sentry,
)


class TestBeforeSendPIIScrubbing:
    """Tests for PII scrubbing in _before_send."""

    def test_anonymizes_ip_address(self) -> None:
        """IP address should be anonymized."""
        event: dict[str, Any] = {"user": {"ip_address": "192.168.1.100"}}
        result = _before_send(event, {})  # type: ignore[arg-type]
        assert result is not None
        assert result["user"]["ip_address"] == "{{auto}}"

    def test_removes_cookies_from_request(self) -> None:
        """Cookies should be removed from request data."""
        event: dict[str, Any] = {
            "request": {"url": "/api/social/track-share", "cookies": {"a": "b"}}
        }
        result = _before_send(event, {})  # type: ignore[arg-type]
        assert result is not None
        assert "cookies" not in result["request"]

    @pytest.mark.parametrize(
        "header", ["X-Forwarded-For", "X-Real-IP", "x-forwarded-for", "x-real-ip"]
    )
    def test_filters_proxy_ip_headers(self, header: str) -> None:
        """Proxy headers carrying the visitor IP should be filtered."""
        event: dict[str, Any] = {
            "request": {"headers": {header: "203.0.113.7", "Accept": "*/*"}}
        }
        result = _before_send(event, {})  # type: ignore[arg-type]
        assert result is not None
        assert result["request"]["headers"][header] == "[Filtered]"
        assert result["request"]["headers"]["Accept"] == "*/*"

    def test_handles_event_without_user(self) -> None:
        """Events without user data should pass through."""
        event: dict[str, Any] = {"message": "test"}
        assert _before_send(event, {}) == {"message": "test"}  # type: ignore[arg-type]

    def test_handles_event_without_request(self) -> None:
        """Events without request data should pass through."""
        event: dict[str, Any] = {"user": {"id": "1"}}
        result = _before_send(event, {})  # type: ignore[arg-type]
        assert result == {"user": {"id": "1"}}


class TestBeforeSendTransaction:
    """Tests for transaction filtering."""

    @pytest.mark.parametrize("path", ["/api/health", "GET /api/health", "health_check"])
    def test_filters_health_check_paths(self, path: str) -> None:
        """Health check transactions should be dropped."""
        event: dict[str, Any] = {"transaction": path}
        assert _before_send_transaction(event, {}) is None  # type: ignore[arg-type]

    def test_allows_share_transactions(self) -> None:
        """Other transactions should be kept."""
        event: dict[str, Any] = {"transaction": "track_share"}
        assert _before_send_transaction(event, {}) == event  # type: ignore[arg-type]


class TestTracesSampler:
    """Tests for dynamic trace sampling."""

    def test_never_samples_health_checks(self) -> None:
        """Health checks should never be sampled."""
        context: dict[str, Any] = {"asgi_scope": {"path": "/api/health"}}
        assert _traces_sampler(context) == 0.0

    def test_lower_sampling_for_share_endpoints(self) -> None:
        """Share endpoints should have 5% sampling."""
        context: dict[str, Any] = {"asgi_scope": {"path": "/api/social/track-share"}}
        assert _traces_sampler(context) == 0.05

    def test_default_sampling_rate(self) -> None:
        """Default sampling rate should be 20%."""
        context: dict[str, Any] = {"asgi_scope": {"path": "/"}}
        assert _traces_sampler(context) == 0.2

    def test_respects_parent_sampling(self) -> None:
        """Should always sample if parent was sampled."""
        context: dict[str, Any] = {
            "parent_sampled": True,
            "asgi_scope": {"path": "/api/social/track-share"},
        }
        assert _traces_sampler(context) == 1.0

    def test_handles_missing_asgi_scope(self) -> None:
        """Default rate when path can't be determined."""
        assert _traces_sampler({}) == 0.2


class TestInitSentry:
    """Tests for Sentry initialization."""

    def test_init_sentry_without_dsn_does_nothing(self) -> None:
        """Sentry should not initialize without DSN."""
        with patch("sentry_sdk.init") as mock_init:
            with patch.dict(os.environ, {}, clear=True):
                init_sentry()
        mock_init.assert_not_called()

    def test_init_sentry_with_dsn_initializes(self) -> None:
        """Sentry should initialize with valid DSN."""
        test_dsn = "https://test@o0.ingest.sentry.io/0"
        with patch("sentry_sdk.init") as mock_init:
            with patch.dict(os.environ, {"SENTRY_DSN": test_dsn}):
                init_sentry()
                mock_init.assert_called_once()
                call_kwargs = mock_init.call_args.kwargs
                assert call_kwargs["send_default_pii"] is False
                assert call_kwargs["traces_sampler"] is _traces_sampler

    def test_init_sentry_uses_environment_variables(self) -> None:
        """Sentry should use environment variables for configuration."""
        env_vars = {
            "SENTRY_DSN": "https://test@o0.ingest.sentry.io/0",
            "ENVIRONMENT": "production",
            "SENTRY_RELEASE": "1.2.3",
        }
        with patch("sentry_sdk.init") as mock_init:
            with patch.dict(os.environ, env_vars):
                init_sentry()
                call_kwargs = mock_init.call_args.kwargs
                assert call_kwargs["dsn"] == env_vars["SENTRY_DSN"]
                assert call_kwargs["environment"] == "production"
                assert call_kwargs["release"] == "1.2.3"

    def test_init_sentry_defaults(self) -> None:
        """Sentry should use defaults when env vars not set."""
        with patch("sentry_sdk.init") as mock_init:
            with patch.dict(
                os.environ, {"SENTRY_DSN": "https://test@o0.ingest.sentry.io/0"}
            ):
                os.environ.pop("ENVIRONMENT", None)
                os.environ.pop("SENTRY_RELEASE", None)
                init_sentry()
                call_kwargs = mock_init.call_args.kwargs
                assert call_kwargs["environment"] == "development"
                assert call_kwargs["release"] == "unknown"
