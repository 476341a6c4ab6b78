"""
Fetch remote images (avatars, banners) with a short timeout so a slow
image host cannot stall rendering.
"""
import logging
from typing import Optional

import httpx

logger = logging.getLogger(__name__)


async def fetch_image(client: httpx.AsyncClient, url: Optional[str], timeout: float = 3.0) -> Optional[bytes]:
    """Return the image bytes, or None unless the host answers 2xx with an image/* body."""
    if not url:
        return None
    try:
        r = await client.get(url, timeout=timeout)
    except httpx.HTTPError as e:
        logger.warning(f"Failed to load image from {url}: {e}")
        return None

    if r.is_error or not r.headers.get("content-type", "").startswith("image/"):
        return None
    return r.content
