"""
Farcaster client API: user-by-fid lookups and user search.
"""
import logging
from typing import Any, Dict, List, Optional

import httpx

from whoiswho.clients.http import get_json

logger = logging.getLogger(__name__)


async def fetch_user_by_fid(client: httpx.AsyncClient, base_url: str, fid: int) -> Optional[Dict[str, Any]]:
    """
    Return {"user": ..., "extras": ...} for a FID, or None if the lookup
    fails or comes back empty. Extras carry wallet labels and the public
    spam label.
    """
    data = await get_json(client, f"{base_url}/user-by-fid", "Farcaster", params={"fid": str(fid)})
    result = (data or {}).get("result") or {}
    user = result.get("user")
    if not user:
        return None
    return {"user": user, "extras": result.get("extras")}


async def search_users(client: httpx.AsyncClient, base_url: str, query: str, limit: int) -> List[Dict[str, Any]]:
    data = await get_json(
        client,
        f"{base_url}/search-summary",
        "Farcaster search",
        params={"q": query, "maxChannels": "0", "maxUsers": str(limit)},
    )
    return ((data or {}).get("result") or {}).get("users") or []
