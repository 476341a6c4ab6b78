# /whoiswho/api/endpoints/tokens.py
"""
Token-deployment API endpoints (Clanker and Streme).
"""
import logging
from fastapi import APIRouter, Depends, Query, Response
from whoiswho.aggregators.tokens import TokenAggregator
from whoiswho.config import TOKENS_CACHE_TTL
from whoiswho.errors import InternalError, WhoIsWhoError
from whoiswho.models.token_models import TokensResponse
from whoiswho.services import Services, get_services
from whoiswho.utils.helpers import cache_control, parse_fid
from typing import Any, Dict, Optional

# Set up logging
logger = logging.getLogger(__name__)

# Create router
router = APIRouter()

TOKEN_RESPONSES = {
    200: {"description": "Successfully retrieved tokens", "model": TokensResponse},
    400: {"description": "Missing or invalid FID"},
    404: {"description": "User not found"},
    500: {"description": "Internal Server Error"}
}


async def _tokens_response(aggregator: TokenAggregator, fid: Optional[str], response: Response) -> Dict[str, Any]:
    fid_value = parse_fid(fid)
    try:
        result = await aggregator.get_tokens(fid_value)
        response.headers["Cache-Control"] = cache_control(TOKENS_CACHE_TTL)
        return result.model_dump()
    except WhoIsWhoError:
        raise
    except Exception as e:
        logger.error(f"Error fetching {aggregator.source} tokens: {str(e)}")
        raise InternalError("Internal server error")


@router.get(
    "/clanker-tokens",
    summary="Get Clanker tokens deployed by a user",
    description="Looks up every verified address of the user on Clanker and returns the top 10 tokens by market cap.",
    response_model=TokensResponse,
    responses=TOKEN_RESPONSES
)
async def get_clanker_tokens(
    response: Response,
    fid: Optional[str] = Query(None, description="Farcaster ID"),
    services: Services = Depends(get_services),
) -> Dict[str, Any]:
    """
    Get Clanker tokens for a FID.

    - Tokens are de-duplicated by contract address across addresses
    - `total` counts every unique token; `tokens` holds at most 10
    """
    return await _tokens_response(services.clanker_tokens, fid, response)


@router.get(
    "/streme-tokens",
    summary="Get Streme tokens deployed by a user",
    description="Looks up every verified address of the user on Streme and returns the top 10 tokens by market cap.",
    response_model=TokensResponse,
    responses=TOKEN_RESPONSES
)
async def get_streme_tokens(
    response: Response,
    fid: Optional[str] = Query(None, description="Farcaster ID"),
    services: Services = Depends(get_services),
) -> Dict[str, Any]:
    """Get Streme tokens for a FID."""
    return await _tokens_response(services.streme_tokens, fid, response)
