"""
Supplementary reputation sources: Quotient, Talent Protocol and Warpcast
creator rewards.
"""
import logging
from typing import Any, Dict, Optional

import httpx

from whoiswho.aggregators.users import optional
from whoiswho.clients import creator_rewards, quotient, talent
from whoiswho.config import Settings
from whoiswho.core.cache import TTLCache, make_cache_key
from whoiswho.errors import require_secret
from whoiswho.models.reputation_models import CreatorRewardsResponse, ReputationResponse, TalentProtocolResponse
from whoiswho.utils.profile_metrics import calculate_reward

logger = logging.getLogger(__name__)


def quotient_summary(data: Optional[Dict[str, Any]]) -> Optional[Dict[str, Any]]:
    if not data:
        return None
    rows = ReputationResponse(**data).data
    if not rows:
        return None
    return {"score": rows[0].quotientScore, "rank": rows[0].quotientRank}


def creator_rewards_summary(rewards: Optional[CreatorRewardsResponse]) -> Optional[Dict[str, Any]]:
    if rewards is None or not rewards.scores:
        return None
    scores = rewards.scores
    tiers = (rewards.metadata or {}).get("tiers") or []
    return {
        "allTimeScore": scores.get("allTimeScore"),
        "currentPeriodScore": scores.get("currentPeriodScore"),
        "currentPeriodRank": scores.get("currentPeriodRank"),
        "estimatedReward": calculate_reward(scores.get("currentPeriodRank"), tiers),
    }


class ScoreService:
    """Route-level access to each score source, cached per FID."""

    def __init__(self, client: httpx.AsyncClient, settings: Settings, cache: TTLCache):
        self.client = client
        self.settings = settings
        self.cache = cache

    async def creator_rewards(self, fid: int) -> CreatorRewardsResponse:
        key = make_cache_key("creator-rewards", fid=fid)
        cached = self.cache.get(key)
        if cached is not None:
            return cached
        rewards = await creator_rewards.fetch_creator_rewards(self.client, self.settings.warpcast_api_url, fid)
        self.cache.set(key, rewards)
        return rewards

    async def quotient(self, fid: int) -> Dict[str, Any]:
        api_key = require_secret(self.settings.quotient_api_key, "QUOTIENT_API_KEY")
        key = make_cache_key("quotient-score", fid=fid)
        cached = self.cache.get(key)
        if cached is not None:
            return cached
        data = await quotient.fetch_reputation(self.client, self.settings.quotient_api_url, api_key, fid)
        self.cache.set(key, data)
        return data

    async def talent(self, fid: int) -> TalentProtocolResponse:
        api_key = require_secret(self.settings.talent_protocol_api_key, "TALENT_PROTOCOL_API_KEY")
        key = make_cache_key("talent-protocol", fid=fid)
        cached = self.cache.get(key)
        if cached is not None:
            return cached
        data = await talent.fetch_talent_profile(self.client, self.settings.talent_protocol_api_url, api_key, fid)
        self.cache.set(key, data)
        return data

    # Enrichment variants used at mint time: never raise

    async def optional_quotient(self, fid: int) -> Optional[Dict[str, Any]]:
        async def summary():
            return quotient_summary(await self.quotient(fid))
        return await optional(summary(), "quotient")

    async def optional_talent(self, fid: int) -> Optional[Dict[str, Any]]:
        data = await optional(self.talent(fid), "talent protocol")
        return data.model_dump() if data is not None else None

    async def optional_creator_rewards(self, fid: int) -> Optional[Dict[str, Any]]:
        return creator_rewards_summary(await optional(self.creator_rewards(fid), "creator rewards"))
