"""
Streme token registry client.
"""
import logging
from typing import Any, Dict, List

import httpx

from whoiswho.clients.clanker import extract_rows
from whoiswho.clients.http import get_json
from whoiswho.models.token_models import TokenRecord

logger = logging.getLogger(__name__)


def normalize_streme_token(row: Dict[str, Any], deployer_address: str) -> TokenRecord:
    market = row.get("marketData") or {}
    return TokenRecord(
        name=row.get("name"),
        symbol=row.get("symbol"),
        contract_address=row.get("contract_address") or "",
        img_url=row.get("img_url"),
        market_cap=market.get("marketCap"),
        price_change_24h=market.get("priceChange24h"),
        deployer_address=deployer_address,
        source="streme",
    )


async def fetch_tokens_for_address(client: httpx.AsyncClient, base_url: str, address: str) -> List[TokenRecord]:
    # Streme takes the deployer as a path parameter
    data = await get_json(client, f"{base_url}/tokens/deployer/{address}", "Streme")
    tokens = [normalize_streme_token(row, address) for row in extract_rows(data) if row.get("contract_address")]
    logger.info(f"Streme returned {len(tokens)} tokens for {address}")
    return tokens
