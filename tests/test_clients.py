"""
Tests for the shared request helper and response normalization.
"""
import httpx
import pytest

from whoiswho.clients.clanker import normalize_clanker_token
from whoiswho.clients.http import get_json
from whoiswho.clients.images import fetch_image
from whoiswho.errors import UpstreamError
from whoiswho.rendering.renderer import banner_colors, to_jpeg
from conftest import png_bytes


def mock_client(handler):
    return httpx.AsyncClient(transport=httpx.MockTransport(handler))


@pytest.mark.asyncio
async def test_network_failure_maps_to_bad_gateway():
    def handler(request):
        raise httpx.ConnectError("connection refused", request=request)

    with pytest.raises(UpstreamError) as exc_info:
        await get_json(mock_client(handler), "https://down.test/x", "Down")

    assert exc_info.value.status_code == 502
    assert exc_info.value.to_dict()["code"] == "UPSTREAM_ERROR"


@pytest.mark.asyncio
async def test_error_status_is_carried():
    client = mock_client(lambda request: httpx.Response(418, text="teapot"))

    with pytest.raises(UpstreamError) as exc_info:
        await get_json(client, "https://tea.test/x", "Tea")

    assert exc_info.value.status_code == 418


@pytest.mark.asyncio
async def test_invalid_json_is_upstream_error():
    client = mock_client(lambda request: httpx.Response(200, text="<html>"))

    with pytest.raises(UpstreamError):
        await get_json(client, "https://html.test/x", "Html")


@pytest.mark.asyncio
async def test_fetch_image_requires_image_content_type():
    image = mock_client(lambda request: httpx.Response(200, content=b"\x89PNG", headers={"content-type": "image/png"}))
    html = mock_client(lambda request: httpx.Response(200, text="<html>", headers={"content-type": "text/html"}))
    missing = mock_client(lambda request: httpx.Response(404))

    assert await fetch_image(image, "https://img.test/a.png") == b"\x89PNG"
    assert await fetch_image(html, "https://img.test/a.png") is None
    assert await fetch_image(missing, "https://img.test/a.png") is None


def test_normalize_clanker_token_without_market():
    record = normalize_clanker_token({"name": "T", "symbol": "T", "contract_address": "0x1"}, "0xabc")
    assert record.market_cap is None
    assert record.deployer_address == "0xabc"
    assert record.source == "clanker"


def test_to_jpeg_flattens_alpha():
    jpeg = to_jpeg(png_bytes())
    assert jpeg[:2] == b"\xff\xd8"


def test_banner_colors_are_deterministic():
    assert banner_colors(3) == banner_colors("3")
    assert banner_colors(3) != banner_colors(4)
