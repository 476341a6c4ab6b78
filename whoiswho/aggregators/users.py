"""
User aggregation: Neynar as the mandatory primary source, the Farcaster
client API as an optional secondary one.
"""
import asyncio
import logging
from typing import Any, Awaitable, Dict, List, Optional, TypeVar

import httpx

from whoiswho.clients import farcaster, neynar
from whoiswho.config import Settings
from whoiswho.core.cache import TTLCache, make_cache_key
from whoiswho.errors import require_secret
from whoiswho.models.user_models import AggregatedUser

logger = logging.getLogger(__name__)

T = TypeVar("T")


async def optional(awaitable: Awaitable[T], label: str) -> Optional[T]:
    """Await an enrichment branch; any failure is logged and becomes None."""
    try:
        return await awaitable
    except Exception as e:
        logger.warning(f"Optional source {label} failed: {e}")
        return None


def verified_addresses(user: Dict[str, Any]) -> List[str]:
    """Verified Ethereum addresses, lower-cased, de-duplicated in order."""
    eth = ((user or {}).get("verified_addresses") or {}).get("eth_addresses") or []
    seen = []
    for address in eth:
        if address and address.lower() not in seen:
            seen.append(address.lower())
    return seen


class UserAggregator:
    """Builds the aggregated user record for a FID."""

    def __init__(self, client: httpx.AsyncClient, settings: Settings, cache: TTLCache):
        self.client = client
        self.settings = settings
        self.cache = cache

    async def get_user(self, fid: int, viewer_fid: Optional[int] = None, use_cache: bool = True) -> AggregatedUser:
        key = make_cache_key("user", fid=fid, viewer_fid=viewer_fid)
        if use_cache:
            cached = self.cache.get(key)
            if cached is not None:
                return cached

        api_key = require_secret(self.settings.neynar_api_key, "NEYNAR_API_KEY")

        primary_call = neynar.fetch_user(self.client, self.settings.neynar_api_url, api_key, fid, viewer_fid)
        if self.settings.farcaster_enrichment_enabled:
            secondary_call = optional(
                farcaster.fetch_user_by_fid(self.client, self.settings.farcaster_api_url, fid),
                "farcaster user-by-fid",
            )
            primary, secondary = await asyncio.gather(primary_call, secondary_call)
        else:
            primary, secondary = await primary_call, None

        user = AggregatedUser(primary=primary, farcaster=secondary)
        self.cache.set(key, user)
        logger.info(f"Aggregated user {fid} (farcaster data: {'yes' if secondary else 'no'})")
        return user
