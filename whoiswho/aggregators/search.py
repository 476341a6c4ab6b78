"""
User search: text search plus a direct FID lookup for numeric queries.
"""
import asyncio
import logging
from typing import Any, Dict, List, Optional

import httpx

from whoiswho.aggregators.users import optional
from whoiswho.clients import farcaster
from whoiswho.config import Settings
from whoiswho.core.cache import TTLCache, make_cache_key
from whoiswho.models.user_models import SearchUser
from whoiswho.utils.helpers import is_ascii_number

logger = logging.getLogger(__name__)


def to_search_user(user: Dict[str, Any]) -> Dict[str, Any]:
    """Reshape a user-by-fid payload into the search result shape."""
    return SearchUser(
        fid=user["fid"],
        displayName=user.get("displayName"),
        username=user.get("username"),
        pfp=user.get("pfp"),
        profile=user.get("profile"),
        followerCount=user.get("followerCount"),
        followingCount=user.get("followingCount"),
        viewerContext=user.get("viewerContext"),
    ).model_dump()


def merge_search_results(users: List[Dict[str, Any]], direct: Optional[Dict[str, Any]]) -> List[Dict[str, Any]]:
    """Put the direct FID hit first and drop any text hit that duplicates it."""
    if direct is None:
        return list(users)
    return [direct] + [u for u in users if u.get("fid") != direct["fid"]]


class SearchAggregator:

    def __init__(self, client: httpx.AsyncClient, settings: Settings, cache: TTLCache):
        self.client = client
        self.settings = settings
        self.cache = cache

    async def _direct_lookup(self, fid: int) -> Optional[Dict[str, Any]]:
        found = await farcaster.fetch_user_by_fid(self.client, self.settings.farcaster_api_url, fid)
        return to_search_user(found["user"]) if found else None

    async def search(self, query: str, limit: int) -> List[Dict[str, Any]]:
        query = query.strip()
        key = make_cache_key("search", q=query, limit=limit)
        cached = self.cache.get(key)
        if cached is not None:
            return cached

        text_call = optional(
            farcaster.search_users(self.client, self.settings.farcaster_api_url, query, limit),
            "farcaster search",
        )
        if is_ascii_number(query):
            users, direct = await asyncio.gather(
                text_call,
                optional(self._direct_lookup(int(query)), "farcaster user-by-fid"),
            )
        else:
            users, direct = await text_call, None

        results = merge_search_results(users or [], direct)
        logger.info(f"Search '{query}' returned {len(results)} users (direct hit: {direct is not None})")
        if users is not None:
            self.cache.set(key, results)
        return results
