"""
Tests for the Pillow placeholder renderer.
"""
import io

import httpx
import pytest
from PIL import Image

from conftest import png_bytes
from whoiswho.rendering.renderer import PlaceholderRenderer


def avatar_client(requests):
    def handler(request):
        requests.append(str(request.url))
        return httpx.Response(200, content=png_bytes(), headers={"content-type": "image/png"})
    return httpx.AsyncClient(transport=httpx.MockTransport(handler))


@pytest.mark.asyncio
async def test_renders_profile_card_with_avatar():
    requests = []
    renderer = PlaceholderRenderer(avatar_client(requests))
    user = {
        "fid": 3,
        "username": "dan",
        "display_name": "Dan",
        "pfp_url": "https://img.test/dan.png",
        "score": 0.8,
        "follower_count": 100,
        "following_count": 10,
        "farcaster": {"extras": {"publicSpamLabel": "2 (unlikely to engage in spammy behavior)"}},
        "quotientScore": {"score": 0.82, "rank": 40},
    }

    png = await renderer.render(user)

    with Image.open(io.BytesIO(png)) as image:
        assert image.format == "PNG"
        assert image.size == (1200, 800)
    assert requests == ["https://img.test/dan.png"]


@pytest.mark.asyncio
async def test_renders_not_found_card():
    requests = []
    png = await PlaceholderRenderer(avatar_client(requests)).render(None)

    with Image.open(io.BytesIO(png)) as image:
        assert image.size == (1200, 800)
    assert requests == []


def test_metric_rows():
    rows = PlaceholderRenderer._metrics({"score": 0.4, "follower_count": 1, "following_count": 100})
    assert rows[0] == ("Neynar Score", "0.40", "red")
    assert rows[1][0] == "Followers / Following"
