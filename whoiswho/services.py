# /whoiswho/services.py
"""
Service container: the shared http client, caches, rate limiter and
aggregators, built once per app and handed to endpoints through
FastAPI dependencies.
"""
import functools
import logging
import time
from dataclasses import dataclass
from typing import Callable, Optional

import httpx
from fastapi import Request

from whoiswho import config
from whoiswho.aggregators.scores import ScoreService
from whoiswho.aggregators.search import SearchAggregator
from whoiswho.aggregators.snapshot import SnapshotService, TokenVerifier
from whoiswho.aggregators.tokens import TokenAggregator
from whoiswho.aggregators.users import UserAggregator
from whoiswho.clients import clanker, streme
from whoiswho.clients.http import create_http_client
from whoiswho.clients.pinata import PinataClient
from whoiswho.clients.quick_auth import QuickAuthVerifier
from whoiswho.config import Settings
from whoiswho.core.cache import TTLCache
from whoiswho.core.image_cache import ImageCache
from whoiswho.core.rate_limit import SlidingWindowRateLimiter
from whoiswho.errors import require_secret
from whoiswho.rendering.renderer import PlaceholderRenderer, ProfileImageRenderer

# Set up logging
logger = logging.getLogger(__name__)


@dataclass
class Services:
    settings: Settings
    http_client: httpx.AsyncClient
    users: UserAggregator
    search: SearchAggregator
    clanker_tokens: TokenAggregator
    streme_tokens: TokenAggregator
    scores: ScoreService
    snapshot: SnapshotService
    renderer: ProfileImageRenderer
    image_cache: ImageCache

    async def close(self) -> None:
        await self.http_client.aclose()
        logger.info("HTTP client closed")


def build_services(
    settings: Settings,
    http_client: Optional[httpx.AsyncClient] = None,
    verifier: Optional[TokenVerifier] = None,
    renderer: Optional[ProfileImageRenderer] = None,
    rate_limiter: Optional[SlidingWindowRateLimiter] = None,
    clock: Callable[[], float] = time.monotonic,
) -> Services:
    """Wire every aggregator to one shared client; collaborators and the cache clock can be swapped in tests."""
    client = http_client or create_http_client(settings.http_timeout_seconds)

    users = UserAggregator(client, settings, TTLCache(config.USER_CACHE_TTL, name="user", clock=clock))
    scores = ScoreService(client, settings, TTLCache(config.SCORES_CACHE_TTL, name="scores", clock=clock))
    renderer = renderer or PlaceholderRenderer(client, settings.image_fetch_timeout_seconds)

    def pinata_factory() -> PinataClient:
        token = require_secret(settings.pinata_jwt, "PINATA_JWT")
        return PinataClient(client, token, settings.pinata_api_url, settings.pinata_gateway_url)

    snapshot = SnapshotService(
        users=users,
        scores=scores,
        rate_limiter=rate_limiter or SlidingWindowRateLimiter(
            settings.max_mints_per_hour, settings.rate_limit_window_seconds
        ),
        verifier=verifier or QuickAuthVerifier(client, settings.quick_auth_issuer),
        renderer=renderer,
        pinata_factory=pinata_factory,
        auth_domain=settings.auth_domain,
    )

    return Services(
        settings=settings,
        http_client=client,
        users=users,
        search=SearchAggregator(client, settings, TTLCache(config.SEARCH_CACHE_TTL, name="search", clock=clock)),
        clanker_tokens=TokenAggregator(
            "clanker",
            functools.partial(clanker.fetch_tokens_for_address, client, settings.clanker_api_url),
            users,
            TTLCache(config.TOKENS_CACHE_TTL, name="clanker-tokens", clock=clock),
        ),
        streme_tokens=TokenAggregator(
            "streme",
            functools.partial(streme.fetch_tokens_for_address, client, settings.streme_api_url),
            users,
            TTLCache(config.TOKENS_CACHE_TTL, name="streme-tokens", clock=clock),
        ),
        scores=scores,
        snapshot=snapshot,
        renderer=renderer,
        image_cache=ImageCache(config.IMAGE_CACHE_TTL, config.IMAGE_CACHE_MAX_ENTRIES, clock=clock),
    )


def get_services(request: Request) -> Services:
    """FastAPI dependency returning the app's service container."""
    return request.app.state.services
