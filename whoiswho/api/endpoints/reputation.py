# /whoiswho/api/endpoints/reputation.py
"""
Reputation-related API endpoints: creator rewards, Quotient and Talent Protocol.
"""
import logging
from fastapi import APIRouter, Depends, Query, Response
from whoiswho.config import SCORES_CACHE_TTL
from whoiswho.errors import InternalError, WhoIsWhoError
from whoiswho.models.reputation_models import CreatorRewardsResponse, ReputationResponse, TalentProtocolResponse
from whoiswho.services import Services, get_services
from whoiswho.utils.helpers import cache_control, parse_fid
from typing import Any, Dict, Optional

# Set up logger for this module
logger = logging.getLogger(__name__)

# Create router
router = APIRouter()


@router.get(
    "/creator-rewards",
    summary="Get Warpcast creator rewards",
    description="Returns the user's creator reward scores and the current period metadata.",
    response_model=CreatorRewardsResponse,
    responses={
        200: {"description": "Successfully retrieved creator rewards", "model": CreatorRewardsResponse},
        400: {"description": "Missing or invalid FID"},
        500: {"description": "Internal Server Error"}
    }
)
async def get_creator_rewards(
    response: Response,
    fid: Optional[str] = Query(None, description="Farcaster ID"),
    services: Services = Depends(get_services),
) -> Dict[str, Any]:
    fid_value = parse_fid(fid)
    try:
        rewards = await services.scores.creator_rewards(fid_value)
        response.headers["Cache-Control"] = cache_control(SCORES_CACHE_TTL)
        return rewards.model_dump()
    except WhoIsWhoError:
        raise
    except Exception as e:
        logger.error(f"Error fetching creator rewards data: {str(e)}")
        raise InternalError("Internal server error")


@router.get(
    "/quotient-score",
    summary="Get Quotient reputation",
    description="Proxies the Quotient user-reputation endpoint for a single FID.",
    response_model=ReputationResponse,
    responses={
        200: {"description": "Successfully retrieved reputation data", "model": ReputationResponse},
        400: {"description": "Missing or invalid FID"},
        500: {"description": "Internal Server Error or missing QUOTIENT_API_KEY"}
    }
)
async def get_quotient_score(
    response: Response,
    fid: Optional[str] = Query(None, description="Farcaster ID"),
    services: Services = Depends(get_services),
) -> Dict[str, Any]:
    """
    Quotient reputation for a FID.

    - Returns quotient score, raw score, and ranking as Quotient reports them
    """
    fid_value = parse_fid(fid)
    try:
        data = await services.scores.quotient(fid_value)
        response.headers["Cache-Control"] = cache_control(SCORES_CACHE_TTL)
        return data
    except WhoIsWhoError:
        raise
    except Exception as e:
        logger.error(f"Error fetching quotient score data: {str(e)}")
        raise InternalError("Internal server error")


@router.get(
    "/talent-protocol",
    summary="Get Talent Protocol scores",
    description="Returns the Talent Protocol profile ID with builder and creator scores.",
    response_model=TalentProtocolResponse,
    responses={
        200: {"description": "Successfully retrieved Talent Protocol data", "model": TalentProtocolResponse},
        400: {"description": "Missing or invalid FID"},
        500: {"description": "Internal Server Error or missing TALENT_PROTOCOL_API_KEY"}
    }
)
async def get_talent_protocol(
    response: Response,
    fid: Optional[str] = Query(None, description="Farcaster ID"),
    services: Services = Depends(get_services),
) -> Dict[str, Any]:
    fid_value = parse_fid(fid)
    try:
        data = await services.scores.talent(fid_value)
        response.headers["Cache-Control"] = cache_control(SCORES_CACHE_TTL)
        return data.model_dump()
    except WhoIsWhoError:
        raise
    except Exception as e:
        logger.error(f"Error fetching Talent Protocol data: {str(e)}")
        raise InternalError("Internal server error")
