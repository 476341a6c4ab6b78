"""
Warpcast creator rewards client.
"""
import asyncio
import logging

import httpx

from whoiswho.clients.http import get_json
from whoiswho.models.reputation_models import CreatorRewardsResponse

logger = logging.getLogger(__name__)


async def fetch_creator_rewards(client: httpx.AsyncClient, base_url: str, fid: int) -> CreatorRewardsResponse:
    """Scores for the user and the current period metadata, fetched in parallel."""
    scores_data, metadata_data = await asyncio.gather(
        get_json(client, f"{base_url}/creator-rewards-scores-for-user", "Creator Rewards scores", params={"fid": str(fid)}),
        get_json(client, f"{base_url}/creator-rewards-metadata", "Creator Rewards metadata"),
    )
    return CreatorRewardsResponse(
        scores=((scores_data or {}).get("result") or {}).get("scores"),
        metadata=((metadata_data or {}).get("result") or {}).get("metadata"),
    )
