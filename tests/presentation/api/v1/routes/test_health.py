"""Tests for service endpoints"""

from unittest.mock import AsyncMock

import pytest

from src.presentation.api.dependencies import set_timeline_client


@pytest.mark.asyncio
async def test_root(api_client):
    response = await api_client.get("/")

    assert response.status_code == 200
    assert response.json()["status"] == "running"


@pytest.mark.asyncio
async def test_health_unavailable_before_startup(api_client):
    response = await api_client.get("/health")

    assert response.status_code == 503
    assert response.json()["checks"] == {"api": True, "upstream": False}


@pytest.mark.asyncio
async def test_health_ready(api_client):
    set_timeline_client(AsyncMock())
    try:
        response = await api_client.get("/health")
    finally:
        set_timeline_client(None)

    assert response.status_code == 200
    assert response.json()["status"] == "healthy"


@pytest.mark.asyncio
async def test_echo(api_client):
    response = await api_client.get("/test", headers={"X-Forwarded-For": "203.0.113.7"})

    assert response.status_code == 200
    assert response.text == "ok"
