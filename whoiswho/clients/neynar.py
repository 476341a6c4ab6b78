"""
Neynar client: the mandatory primary source for user profiles and scores.
"""
import logging
from typing import Any, Dict, Optional

import httpx

from whoiswho.clients.http import get_json
from whoiswho.errors import NotFoundError

logger = logging.getLogger(__name__)


async def fetch_user(
    client: httpx.AsyncClient,
    base_url: str,
    api_key: str,
    fid: int,
    viewer_fid: Optional[int] = None,
) -> Dict[str, Any]:
    """
    Fetch one user from the bulk users endpoint.

    Only a user whose fid equals the requested one is accepted, so the
    record handed back can never carry a different identifier.
    """
    params = {"fids": str(fid)}
    if viewer_fid is not None:
        params["viewer_fid"] = str(viewer_fid)

    data = await get_json(
        client,
        f"{base_url}/user/bulk/",
        "Neynar",
        params=params,
        headers={"x-api-key": api_key},
    )

    for user in (data or {}).get("users") or []:
        if str(user.get("fid")) == str(fid):
            return user

    logger.warning(f"Neynar returned no user for FID {fid}")
    raise NotFoundError("User not found")
