"""
Clanker token registry client.
"""
import logging
from typing import Any, Dict, List

import httpx

from whoiswho.clients.http import get_json
from whoiswho.models.token_models import TokenRecord

logger = logging.getLogger(__name__)


def extract_rows(data: Any) -> List[Dict[str, Any]]:
    """Registries answer with a bare list or wrap it under data/tokens."""
    if isinstance(data, list):
        return data
    if isinstance(data, dict):
        for key in ("data", "tokens"):
            if isinstance(data.get(key), list):
                return data[key]
    return []


def normalize_clanker_token(row: Dict[str, Any], deployer_address: str) -> TokenRecord:
    market = ((row.get("related") or {}).get("market")) or {}
    return TokenRecord(
        name=row.get("name"),
        symbol=row.get("symbol"),
        contract_address=row.get("contract_address") or "",
        img_url=row.get("img_url"),
        market_cap=market.get("marketCap"),
        price_change_24h=market.get("priceChangePercent24h"),
        deployer_address=deployer_address,
        source="clanker",
    )


async def fetch_tokens_for_address(client: httpx.AsyncClient, base_url: str, address: str) -> List[TokenRecord]:
    """Tokens Clanker lists for a creator address, with market data."""
    data = await get_json(
        client,
        f"{base_url}/search-creator",
        "Clanker",
        params={"q": address, "includeMarket": "true"},
    )
    tokens = [normalize_clanker_token(row, address) for row in extract_rows(data) if row.get("contract_address")]
    logger.info(f"Clanker returned {len(tokens)} tokens for {address}")
    return tokens
