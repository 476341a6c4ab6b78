"""
Shared httpx client and request helpers for the upstream adapters.
"""
import logging
from typing import Any, Dict, Optional

import httpx

from whoiswho.errors import UpstreamError
from whoiswho.utils.helpers import body_excerpt

# Set up logging
logger = logging.getLogger(__name__)

JSON_HEADERS = {"accept": "application/json"}


def create_http_client(timeout: float = 10.0) -> httpx.AsyncClient:
    """Create the process-wide async client; closed on app shutdown."""
    return httpx.AsyncClient(timeout=timeout, headers=JSON_HEADERS, follow_redirects=True)


async def request_json(
    client: httpx.AsyncClient,
    method: str,
    url: str,
    provider: str,
    **kwargs: Any,
) -> Any:
    """
    Issue one request and return the decoded JSON body.

    Raises UpstreamError for network failures, non-success statuses and
    undecodable bodies; the upstream status code is carried on the error.
    """
    try:
        r = await client.request(method, url, **kwargs)
    except httpx.HTTPError as e:
        logger.error(f"{provider} request failed: {e}")
        raise UpstreamError(f"Failed to reach {provider}", provider=provider) from e

    if r.is_error:
        logger.error(f"{provider} API error: {r.status_code} {body_excerpt(r.text)}")
        raise UpstreamError(f"Failed to fetch data from {provider}", status_code=r.status_code, provider=provider)

    try:
        return r.json()
    except ValueError as e:
        logger.error(f"{provider} returned invalid JSON: {body_excerpt(r.text)}")
        raise UpstreamError(f"Invalid response from {provider}", provider=provider) from e


async def get_json(client: httpx.AsyncClient, url: str, provider: str,
                   params: Optional[Dict[str, Any]] = None,
                   headers: Optional[Dict[str, str]] = None) -> Any:
    return await request_json(client, "GET", url, provider, params=params, headers=headers)
