"""Settings parsing and application startup."""

from unittest.mock import AsyncMock, patch

import pytest
from pydantic import ValidationError

from app.core.config import Settings
from app.main import create_app
from helpers import make_settings


class TestSettings:
    def test_defaults(self):
        settings = Settings(_env_file=None)
        assert settings.smtp_port == 465
        assert settings.use_implicit_tls is True
        assert settings.smtp_tls_verify is True
        assert settings.allowed_origin_list == ["http://localhost:3000"]
        assert settings.max_body_bytes == 10240
        assert (settings.form_rate_limit, settings.form_rate_window_seconds) == (5, 900)
        assert (settings.global_rate_limit, settings.global_rate_window_seconds) == (60, 60)

    def test_reads_environment(self, monkeypatch):
        monkeypatch.setenv("SMTP_USER", "info@lwa.example.com")
        monkeypatch.setenv("SMTP_PASS", "hunter2")
        monkeypatch.setenv("SMTP_PORT", "587")
        monkeypatch.setenv("BUSINESS_EMAIL", "owner@lwa.example.com")
        monkeypatch.setenv("ALLOWED_ORIGINS", "https://a.example.com, https://b.example.com,,")
        monkeypatch.setenv("SMTP_TLS_VERIFY", "false")

        settings = Settings(_env_file=None)

        assert settings.smtp_username == "info@lwa.example.com"
        assert settings.smtp_password == "hunter2"
        assert settings.use_implicit_tls is False
        assert settings.business_email == "owner@lwa.example.com"
        assert settings.allowed_origin_list == ["https://a.example.com", "https://b.example.com"]
        assert settings.smtp_tls_verify is False

    def test_sender_address_falls_back_to_username(self):
        assert make_settings().sender_address == "info@lwa.example.com"
        assert make_settings(mail_from="leads@lwa.example.com").sender_address == "leads@lwa.example.com"

    def test_settings_are_immutable(self):
        settings = make_settings()
        with pytest.raises(ValidationError):
            settings.business_email = "attacker@example.net"


class TestStartup:
    @pytest.mark.asyncio
    async def test_verifies_smtp_on_startup(self):
        app = create_app(make_settings(smtp_verify_on_startup=True))
        with patch.object(app.state.email_service, "verify_connection", new=AsyncMock(return_value=False)) as verify:
            async with app.router.lifespan_context(app):
                pass

        verify.assert_awaited_once()

    @pytest.mark.asyncio
    async def test_verification_can_be_disabled(self):
        app = create_app(make_settings(smtp_verify_on_startup=False))
        with patch.object(app.state.email_service, "verify_connection", new=AsyncMock()) as verify:
            async with app.router.lifespan_context(app):
                pass

        verify.assert_not_awaited()
