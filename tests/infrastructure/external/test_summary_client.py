"""Tests for the summary-service link preview client"""

import httpx
import pytest

from src.application.services.image_proxy import ImageProxy
from src.infrastructure.external.summary.client import \
    SummaryLinkPreviewService
from tests.factories import PROXY

SERVICE = "https://summary.example/summary"


def _service(handler) -> tuple[SummaryLinkPreviewService, httpx.AsyncClient]:
    http = httpx.AsyncClient(transport=httpx.MockTransport(handler))
    return SummaryLinkPreviewService(http, SERVICE, ImageProxy(PROXY)), http


@pytest.mark.asyncio
async def test_preview_with_thumbnail():
    seen = []

    def handler(request):
        seen.append(request)
        return httpx.Response(
            200,
            json={"title": "Example", "description": "An example", "thumbnail": "https://img.example/t.png"},
        )

    service, http = _service(handler)
    async with http:
        preview = await service.preview("https://example.com/a")

    assert seen[0].url.params["url"] == "https://example.com/a"
    assert preview.url == "https://example.com/a"
    assert preview.title == "Example"
    assert preview.thumbnail == PROXY + "https://img.example/t.png"


@pytest.mark.asyncio
async def test_icon_is_used_without_thumbnail():
    service, http = _service(lambda request: httpx.Response(200, json={"icon": "https://img.example/i.ico"}))
    async with http:
        preview = await service.preview("https://example.com/a")

    assert preview.thumbnail == PROXY + "https://img.example/i.ico"
    assert preview.title is None


@pytest.mark.asyncio
async def test_empty_url_makes_no_request():
    def handler(request):
        raise AssertionError("no request expected")

    service, http = _service(handler)
    async with http:
        assert await service.preview("") is None


@pytest.mark.asyncio
@pytest.mark.parametrize(
    "response",
    [
        httpx.Response(500),
        httpx.Response(200, text="not json"),
        httpx.Response(200, json=["a", "list"]),
    ],
)
async def test_failures_yield_no_preview(response):
    service, http = _service(lambda request: response)
    async with http:
        assert await service.preview("https://example.com/a") is None


@pytest.mark.asyncio
async def test_transport_error_yields_no_preview():
    def handler(request):
        raise httpx.ConnectError("refused", request=request)

    service, http = _service(handler)
    async with http:
        assert await service.preview("https://example.com/a") is None


@pytest.mark.asyncio
async def test_non_text_fields_are_ignored():
    """
    GIVEN a summary payload with a numeric thumbnail and a list description
    WHEN the preview is built
    THEN only the text fields survive and nothing raises.
    """
    payload = {"title": "t", "thumbnail": 123, "icon": {"src": "x"}, "description": ["x"]}
    service, http = _service(lambda request: httpx.Response(200, json=payload))
    async with http:
        preview = await service.preview("https://example.com/a")

    assert preview.title == "t"
    assert preview.thumbnail is None
    assert preview.description is None
