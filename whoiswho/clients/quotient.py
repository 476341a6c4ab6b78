"""
Quotient reputation client.
"""
import logging
from typing import Any, Dict

import httpx

from whoiswho.clients.http import request_json

logger = logging.getLogger(__name__)


async def fetch_reputation(client: httpx.AsyncClient, base_url: str, api_key: str, fid: int) -> Dict[str, Any]:
    """POST /user-reputation for a single FID; the body is passed through as-is."""
    data = await request_json(
        client,
        "POST",
        f"{base_url}/user-reputation",
        "Quotient",
        json={"fids": [fid], "api_key": api_key},
    )
    logger.info(f"Quotient returned {(data or {}).get('count', 0)} records for FID {fid}")
    return data
