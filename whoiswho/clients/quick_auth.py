"""
Farcaster Quick Auth token verification.

Tokens are JWTs issued by the Quick Auth server for a specific domain; the
subject is the authenticated FID. Signing keys come from the issuer's JWKS
and are cached for an hour.
"""
import logging
from typing import Any, Dict

import httpx
import jwt

from whoiswho.clients.http import get_json
from whoiswho.core.cache import TTLCache
from whoiswho.errors import UnauthorizedError, UpstreamError

logger = logging.getLogger(__name__)

JWKS_CACHE_TTL = 60 * 60


class QuickAuthVerifier:
    """Verify Quick Auth JWTs and return the authenticated FID."""

    def __init__(self, client: httpx.AsyncClient, issuer: str = "https://auth.farcaster.xyz"):
        self.client = client
        self.issuer = issuer.rstrip("/")
        self._jwks = TTLCache(JWKS_CACHE_TTL, name="jwks")

    async def _signing_keys(self) -> Dict[str, Any]:
        keys = self._jwks.get("keys")
        if keys is None:
            data = await get_json(self.client, f"{self.issuer}/.well-known/jwks.json", "Quick Auth JWKS")
            keys = {}
            for jwk in jwt.PyJWKSet.from_dict(data).keys:
                keys[jwk.key_id] = jwk
            self._jwks.set("keys", keys)
        return keys

    async def verify(self, token: str, domain: str) -> int:
        try:
            header = jwt.get_unverified_header(token)
        except jwt.PyJWTError as e:
            raise UnauthorizedError("Invalid authentication token") from e

        try:
            keys = await self._signing_keys()
        except (UpstreamError, jwt.PyJWTError) as e:
            logger.error(f"Could not load Quick Auth signing keys: {e}")
            raise

        signing_key = keys.get(header.get("kid"))
        if signing_key is None and len(keys) == 1:
            signing_key = next(iter(keys.values()))
        if signing_key is None:
            raise UnauthorizedError("Invalid authentication token")

        try:
            payload = jwt.decode(
                token,
                signing_key.key,
                algorithms=[signing_key.algorithm_name],
                audience=domain,
                issuer=self.issuer,
                # Quick Auth subjects are numeric FIDs
                options={"require": ["exp", "sub"], "verify_sub": False},
            )
            return int(payload["sub"])
        except (jwt.PyJWTError, ValueError, TypeError) as e:
            logger.warning(f"Quick Auth token rejected: {e}")
            raise UnauthorizedError("Invalid authentication token") from e
