"""
Shared fixtures: test settings, a canned upstream behind httpx.MockTransport,
and an app wired to both.
"""
import io
from typing import Any, Callable, Dict, List, Optional, Tuple

import httpx
import pytest
from fastapi.testclient import TestClient
from PIL import Image

from whoiswho.config import Settings
from whoiswho.core.rate_limit import SlidingWindowRateLimiter
from whoiswho.errors import UnauthorizedError
from whoiswho.main import create_app
from whoiswho.services import build_services

NEYNAR_URL = "https://neynar.test/v2/farcaster"
FARCASTER_URL = "https://farcaster.test/v2"
WARPCAST_URL = "https://warpcast.test/v1"
CLANKER_URL = "https://clanker.test/api"
STREME_URL = "https://streme.test/api"
QUOTIENT_URL = "https://quotient.test/v1"
TALENT_URL = "https://talent.test"
PINATA_URL = "https://pinata.test"
GATEWAY_URL = "https://gateway.test/ipfs"


class FakeClock:
    def __init__(self, now: float = 1000.0):
        self.now = now

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


class Upstream:
    """Canned upstream APIs keyed by method and URL without query string."""

    def __init__(self):
        self.routes: Dict[Tuple[str, str], Callable[[httpx.Request], httpx.Response]] = {}
        self.calls: List[httpx.Request] = []

    def add(self, method: str, url: str, handler: Callable[[httpx.Request], httpx.Response]) -> None:
        self.routes[(method, url)] = handler

    def json(self, method: str, url: str, payload: Any, status_code: int = 200) -> None:
        self.add(method, url, lambda request: httpx.Response(status_code, json=payload))

    def count(self, url: str, method: Optional[str] = None) -> int:
        return len([
            r for r in self.calls
            if _base_url(r) == url and (method is None or r.method == method)
        ])

    def requests_to(self, url: str) -> List[httpx.Request]:
        return [r for r in self.calls if _base_url(r) == url]

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.calls.append(request)
        handler = self.routes.get((request.method, _base_url(request)))
        if handler is None:
            return httpx.Response(404, json={"error": "no route"})
        return handler(request)


def _base_url(request: httpx.Request) -> str:
    return f"{request.url.scheme}://{request.url.host}{request.url.path}"


class FakeVerifier:
    """Accepts tokens of the form "token-<fid>"."""

    def __init__(self):
        self.calls = 0

    async def verify(self, token: str, domain: str) -> int:
        self.calls += 1
        if not token.startswith("token-"):
            raise UnauthorizedError("Invalid authentication token")
        return int(token[len("token-"):])


class FakeRenderer:
    def __init__(self):
        self.users: List[Optional[Dict[str, Any]]] = []

    async def render(self, user: Optional[Dict[str, Any]]) -> bytes:
        self.users.append(user)
        out = io.BytesIO()
        Image.new("RGB", (12, 8), (255, 0, 0)).save(out, format="PNG")
        return out.getvalue()


def png_bytes() -> bytes:
    out = io.BytesIO()
    Image.new("RGBA", (4, 4), (0, 0, 255, 255)).save(out, format="PNG")
    return out.getvalue()


def neynar_user(fid: int = 3, username: str = "dan", **extra) -> Dict[str, Any]:
    user = {"fid": fid, "username": username, "score": 0.8}
    user.update(extra)
    return user


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def settings() -> Settings:
    return Settings(
        neynar_api_key="neynar-key",
        quotient_api_key="quotient-key",
        talent_protocol_api_key="talent-key",
        pinata_jwt="pinata-jwt",
        app_url="https://whoiswho.test",
        neynar_api_url=NEYNAR_URL,
        farcaster_api_url=FARCASTER_URL,
        warpcast_api_url=WARPCAST_URL,
        clanker_api_url=CLANKER_URL,
        streme_api_url=STREME_URL,
        quotient_api_url=QUOTIENT_URL,
        talent_protocol_api_url=TALENT_URL,
        pinata_api_url=PINATA_URL,
        pinata_gateway_url=GATEWAY_URL,
        farcaster_enrichment_enabled=True,
    )


@pytest.fixture
def upstream() -> Upstream:
    return Upstream()


@pytest.fixture
def verifier() -> FakeVerifier:
    return FakeVerifier()


@pytest.fixture
def renderer() -> FakeRenderer:
    return FakeRenderer()


@pytest.fixture
def rate_limiter() -> SlidingWindowRateLimiter:
    return SlidingWindowRateLimiter(5, 3600)


@pytest.fixture
def make_client(upstream, verifier, renderer, rate_limiter, clock):
    """Build a TestClient for the given settings, sharing the canned upstream and cache clock."""
    clients = []

    def _make(settings: Settings) -> TestClient:
        services = build_services(
            settings,
            http_client=httpx.AsyncClient(transport=httpx.MockTransport(upstream)),
            verifier=verifier,
            renderer=renderer,
            rate_limiter=rate_limiter,
            clock=clock,
        )
        client = TestClient(create_app(services))
        client.__enter__()
        clients.append(client)
        return client

    yield _make
    for client in clients:
        client.__exit__(None, None, None)


@pytest.fixture
def client(make_client, settings) -> TestClient:
    return make_client(settings)
