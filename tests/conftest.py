"""Shared test fixtures for pytest"""
import os
from unittest.mock import AsyncMock

import pytest
from httpx import ASGITransport, AsyncClient

from src.application.interfaces import UpstreamProfile
from src.application.services.image_proxy import ImageProxy
from tests.factories import PROXY, TEST_SUBKEY

# main reads settings at import time; give them a credential first
os.environ["SUBKEY"] = TEST_SUBKEY


@pytest.fixture
def image_proxy() -> ImageProxy:
    return ImageProxy(PROXY)


@pytest.fixture
def link_previews() -> AsyncMock:
    previews = AsyncMock()
    previews.preview.return_value = None
    return previews


@pytest.fixture
def alice_profile() -> UpstreamProfile:
    return UpstreamProfile(
        id="profile-alice",
        author="con1alice",
        username="alice",
        avatar="https://cdn.example/alice.png",
    )


@pytest.fixture
async def api_client():
    """HTTP client for API testing (lifespan is not run)"""
    from main import app
    from src.presentation.middleware.rate_limit import limiter

    limiter.reset()
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac

    app.dependency_overrides.clear()
    limiter.reset()
