"""Shared fixtures for API and unit tests."""

from __future__ import annotations

from unittest.mock import AsyncMock, patch

import httpx
import pytest
import pytest_asyncio

from app.core.config import Settings
from app.main import create_app
from helpers import make_settings


@pytest.fixture
def settings(tmp_path) -> Settings:
    return make_settings(static_dir=str(tmp_path / "public"))


@pytest.fixture
def app(settings):
    return create_app(settings)


@pytest.fixture
def mock_send():
    """Replace the SMTP transport; the mock records every dispatched message."""
    with patch("app.services.email_service.aiosmtplib.send", new_callable=AsyncMock) as send:
        send.return_value = ({}, "OK")
        yield send


@pytest_asyncio.fixture
async def client(app):
    transport = httpx.ASGITransport(app=app)
    async with httpx.AsyncClient(transport=transport, base_url="http://testserver") as c:
        yield c
