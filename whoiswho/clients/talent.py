"""
Talent Protocol client: profile ID plus builder and creator scores.
"""
import logging
from typing import Any, Dict, List, Optional

import httpx

from whoiswho.clients.http import get_json
from whoiswho.errors import UpstreamError
from whoiswho.models.reputation_models import TalentProtocolResponse, TalentScore

logger = logging.getLogger(__name__)


def _find_score(scores: List[Dict[str, Any]], slug: str) -> Optional[TalentScore]:
    for score in scores or []:
        if score.get("slug") == slug:
            return TalentScore(
                points=score.get("points"),
                rank=score.get("rank_position"),
                lastCalculated=score.get("last_calculated_at"),
            )
    return None


async def fetch_talent_profile(client: httpx.AsyncClient, base_url: str, api_key: str, fid: int) -> TalentProtocolResponse:
    """
    Two sequential lookups by Farcaster account. Either may fail on its own;
    the failed half comes back as nulls rather than an error.
    """
    headers = {"X-API-KEY": api_key}
    params = {"id": str(fid), "account_source": "farcaster"}

    profile_id = None
    try:
        account = await get_json(client, f"{base_url}/profile", "Talent Protocol profile", params=params, headers=headers)
        profile_id = ((account or {}).get("profile") or {}).get("id")
    except UpstreamError as e:
        logger.warning(f"No Talent Protocol profile for FID {fid}: {e}")

    builder_score = creator_score = None
    try:
        scores = await get_json(client, f"{base_url}/scores", "Talent Protocol scores", params=params, headers=headers)
        builder_score = _find_score((scores or {}).get("scores"), "builder_score")
        creator_score = _find_score((scores or {}).get("scores"), "creator_score")
    except UpstreamError as e:
        logger.warning(f"No Talent Protocol scores for FID {fid}: {e}")

    return TalentProtocolResponse(
        profileId=str(profile_id) if profile_id is not None else None,
        builderScore=builder_score,
        creatorScore=creator_score,
    )
