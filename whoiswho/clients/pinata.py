"""
Pinata IPFS pinning client.
"""
import logging
from typing import Any, Dict

import httpx

from whoiswho.clients.http import request_json
from whoiswho.errors import UpstreamError

logger = logging.getLogger(__name__)


class PinataClient:
    """Pins files and JSON documents, returning their IPFS content identifiers."""

    def __init__(self, client: httpx.AsyncClient, jwt_token: str, api_url: str, gateway_url: str):
        self.client = client
        self.api_url = api_url.rstrip("/")
        self.gateway_url = gateway_url.rstrip("/")
        self._headers = {"Authorization": f"Bearer {jwt_token}"}

    def gateway(self, cid: str) -> str:
        return f"{self.gateway_url}/{cid}"

    @staticmethod
    def _cid(data: Dict[str, Any]) -> str:
        cid = (data or {}).get("IpfsHash")
        if not cid:
            raise UpstreamError("Pinata response did not include an IpfsHash", provider="Pinata")
        return cid

    async def pin_file(self, content: bytes, filename: str, content_type: str = "image/jpeg") -> str:
        r = await request_json(
            self.client,
            "POST",
            f"{self.api_url}/pinning/pinFileToIPFS",
            "Pinata",
            files={"file": (filename, content, content_type)},
            headers=self._headers,
        )
        cid = self._cid(r)
        logger.info(f"Pinned {filename} ({len(content)} bytes) as {cid}")
        return cid

    async def pin_json(self, document: Dict[str, Any]) -> str:
        r = await request_json(
            self.client,
            "POST",
            f"{self.api_url}/pinning/pinJSONToIPFS",
            "Pinata",
            json=document,
            headers=self._headers,
        )
        cid = self._cid(r)
        logger.info(f"Pinned metadata as {cid}")
        return cid

    async def unpin(self, cid: str) -> None:
        try:
            r = await self.client.delete(f"{self.api_url}/pinning/unpin/{cid}", headers=self._headers)
        except httpx.HTTPError as e:
            raise UpstreamError(f"Failed to unpin {cid}", provider="Pinata") from e
        if r.is_error:
            raise UpstreamError(f"Failed to unpin {cid}", status_code=r.status_code, provider="Pinata")
        logger.info(f"Unpinned {cid}")
