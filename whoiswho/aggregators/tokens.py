"""
Token aggregation across a user's verified addresses.
"""
import asyncio
import logging
from typing import Awaitable, Callable, Iterable, List

from whoiswho.aggregators.users import UserAggregator, verified_addresses
from whoiswho.core.cache import TTLCache, make_cache_key
from whoiswho.models.token_models import TokenRecord, TokensResponse

logger = logging.getLogger(__name__)

MAX_TOKENS_RETURNED = 10

TokenFetcher = Callable[[str], Awaitable[List[TokenRecord]]]


def merge_tokens(partials: Iterable[List[TokenRecord]]) -> List[TokenRecord]:
    """
    Concatenate per-address results, keep the first record per contract
    address, and order by market cap descending. Unknown or zero market
    caps go last; ties keep their input order.
    """
    seen = set()
    unique = []
    for partial in partials:
        for token in partial:
            address = token.contract_address.lower()
            if address in seen:
                continue
            seen.add(address)
            unique.append(token)
    return sorted(unique, key=lambda t: -(t.market_cap or 0))


class TokenAggregator:
    """Tokens one registry reports for every verified address of a FID."""

    def __init__(self, source: str, fetcher: TokenFetcher, users: UserAggregator, cache: TTLCache,
                 max_returned: int = MAX_TOKENS_RETURNED):
        self.source = source
        self.fetcher = fetcher
        self.users = users
        self.cache = cache
        self.max_returned = max_returned

    async def _fetch_address(self, address: str) -> List[TokenRecord]:
        try:
            return await self.fetcher(address)
        except Exception as e:
            logger.error(f"{self.source} lookup failed for {address}: {e}")
            return []

    async def get_tokens(self, fid: int) -> TokensResponse:
        key = make_cache_key(f"{self.source}-tokens", fid=fid)
        cached = self.cache.get(key)
        if cached is not None:
            return cached

        user = await self.users.get_user(fid)
        addresses = verified_addresses(user.primary)
        if not addresses:
            logger.info(f"FID {fid} has no verified addresses, skipping {self.source}")
            return TokensResponse(tokens=[], total=0)

        partials = await asyncio.gather(*(self._fetch_address(a) for a in addresses))
        tokens = merge_tokens(partials)
        logger.info(f"Found {len(tokens)} {self.source} tokens for FID {fid} across {len(addresses)} addresses")

        response = TokensResponse(tokens=tokens[: self.max_returned], total=len(tokens))
        self.cache.set(key, response)
        return response
