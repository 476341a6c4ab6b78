# /whoiswho/config.py
"""
Configuration settings for the application.
Loads environment variables and provides them throughout the app.
"""
import os
from typing import Optional
from dotenv import load_dotenv
from pydantic import BaseModel

# Load environment variables
load_dotenv(override=True)

# API Keys
NEYNAR_API_KEY = os.getenv("NEYNAR_API_KEY")
QUOTIENT_API_KEY = os.getenv("QUOTIENT_API_KEY")
TALENT_PROTOCOL_API_KEY = os.getenv("TALENT_PROTOCOL_API_KEY")
PINATA_JWT = os.getenv("PINATA_JWT")

# Public URL of this app; its host is the Quick Auth domain
APP_URL = os.getenv("APP_URL", "http://localhost:8000")

# Upstream base URLs
NEYNAR_API_URL = os.getenv("NEYNAR_API_URL", "https://api.neynar.com/v2/farcaster")
FARCASTER_API_URL = os.getenv("FARCASTER_API_URL", "https://client.farcaster.xyz/v2")
WARPCAST_API_URL = os.getenv("WARPCAST_API_URL", "https://client.warpcast.com/v1")
CLANKER_API_URL = os.getenv("CLANKER_API_URL", "https://www.clanker.world/api")
STREME_API_URL = os.getenv("STREME_API_URL", "https://api.streme.fun/api")
QUOTIENT_API_URL = os.getenv("QUOTIENT_API_URL", "https://api.quotient.social/v1")
TALENT_PROTOCOL_API_URL = os.getenv("TALENT_PROTOCOL_API_URL", "https://api.talentprotocol.com")
PINATA_API_URL = os.getenv("PINATA_API_URL", "https://api.pinata.cloud")
PINATA_GATEWAY_URL = os.getenv("PINATA_GATEWAY_URL", "https://gateway.pinata.cloud/ipfs")
QUICK_AUTH_ISSUER = os.getenv("QUICK_AUTH_ISSUER", "https://auth.farcaster.xyz")

# Behaviour
FARCASTER_ENRICHMENT_ENABLED = os.getenv("FARCASTER_ENRICHMENT_ENABLED", "true").lower() == "true"
HTTP_TIMEOUT_SECONDS = float(os.getenv("HTTP_TIMEOUT_SECONDS", "10"))
IMAGE_FETCH_TIMEOUT_SECONDS = float(os.getenv("IMAGE_FETCH_TIMEOUT_SECONDS", "3"))
MAX_MINTS_PER_HOUR = int(os.getenv("MAX_MINTS_PER_HOUR", "5"))
RATE_LIMIT_WINDOW_SECONDS = 60 * 60

# Cache TTLs (seconds)
USER_CACHE_TTL = 300
SEARCH_CACHE_TTL = 60
TOKENS_CACHE_TTL = 300
SCORES_CACHE_TTL = 300
IMAGE_CACHE_TTL = 600
IMAGE_CACHE_MAX_ENTRIES = 500


class Settings(BaseModel):
    """Snapshot of the environment handed to the service container."""
    neynar_api_key: Optional[str] = None
    quotient_api_key: Optional[str] = None
    talent_protocol_api_key: Optional[str] = None
    pinata_jwt: Optional[str] = None
    app_url: str = APP_URL

    neynar_api_url: str = NEYNAR_API_URL
    farcaster_api_url: str = FARCASTER_API_URL
    warpcast_api_url: str = WARPCAST_API_URL
    clanker_api_url: str = CLANKER_API_URL
    streme_api_url: str = STREME_API_URL
    quotient_api_url: str = QUOTIENT_API_URL
    talent_protocol_api_url: str = TALENT_PROTOCOL_API_URL
    pinata_api_url: str = PINATA_API_URL
    pinata_gateway_url: str = PINATA_GATEWAY_URL
    quick_auth_issuer: str = QUICK_AUTH_ISSUER

    farcaster_enrichment_enabled: bool = FARCASTER_ENRICHMENT_ENABLED
    http_timeout_seconds: float = HTTP_TIMEOUT_SECONDS
    image_fetch_timeout_seconds: float = IMAGE_FETCH_TIMEOUT_SECONDS
    max_mints_per_hour: int = MAX_MINTS_PER_HOUR
    rate_limit_window_seconds: int = RATE_LIMIT_WINDOW_SECONDS

    @property
    def auth_domain(self) -> str:
        """Host part of APP_URL, as Quick Auth tokens are issued for it."""
        domain = self.app_url
        for scheme in ("https://", "http://"):
            if domain.startswith(scheme):
                domain = domain[len(scheme):]
        return domain.rstrip("/") or "localhost:8000"

    @classmethod
    def from_env(cls) -> "Settings":
        return cls(
            neynar_api_key=NEYNAR_API_KEY,
            quotient_api_key=QUOTIENT_API_KEY,
            talent_protocol_api_key=TALENT_PROTOCOL_API_KEY,
            pinata_jwt=PINATA_JWT,
        )
