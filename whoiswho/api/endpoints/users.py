# /whoiswho/api/endpoints/users.py
"""
User lookup and search API endpoints.
"""
import logging
from fastapi import APIRouter, Depends, Query, Response
from whoiswho.config import SEARCH_CACHE_TTL, USER_CACHE_TTL
from whoiswho.errors import InvalidInputError, InternalError, WhoIsWhoError
from whoiswho.models.user_models import SearchResponse, UserResponse
from whoiswho.services import Services, get_services
from whoiswho.utils.helpers import cache_control, parse_fid, parse_optional_fid, parse_search_limit
from typing import Any, Dict, Optional

# Set up logging
logger = logging.getLogger(__name__)

# Create router
router = APIRouter()


@router.get(
    "/user",
    summary="Get aggregated Farcaster user",
    description="Fetches a user from Neynar and merges in Farcaster client data when it is available.",
    response_model=UserResponse,
    responses={
        200: {"description": "Successfully retrieved user", "model": UserResponse},
        400: {"description": "Missing or invalid FID"},
        404: {"description": "User not found"},
        500: {"description": "Internal Server Error"}
    }
)
async def get_user(
    response: Response,
    fid: Optional[str] = Query(None, description="Farcaster ID"),
    viewer_fid: Optional[str] = Query(None, description="Viewer FID, used for personalization only"),
    services: Services = Depends(get_services),
) -> Dict[str, Any]:
    """
    Get the aggregated user record for one FID.

    - Neynar is mandatory: its failures end the request
    - Farcaster client data is attached under `farcaster` when the lookup succeeds
    - Cached for 5 minutes
    """
    fid_value = parse_fid(fid)
    viewer = parse_optional_fid(viewer_fid, "viewer_fid")

    try:
        user = await services.users.get_user(fid_value, viewer)
        response.headers["Cache-Control"] = cache_control(USER_CACHE_TTL)
        return {"user": user.to_dict()}
    except WhoIsWhoError:
        raise
    except Exception as e:
        logger.error(f"Error fetching user data: {str(e)}")
        raise InternalError("Internal server error")


@router.get(
    "/search",
    summary="Search Farcaster users",
    description="Searches users by username, display name or FID. A numeric query also looks the FID up directly.",
    response_model=SearchResponse,
    responses={
        200: {"description": "Successfully searched users", "model": SearchResponse},
        400: {"description": "Missing search query"},
        500: {"description": "Internal Server Error"}
    }
)
async def search_users(
    response: Response,
    q: Optional[str] = Query(None, description="Search query: username, display name, or FID"),
    limit: Optional[str] = Query(None, description="Max results (default 10, max 50)"),
    services: Services = Depends(get_services),
) -> Dict[str, Any]:
    """
    Search users.

    - A direct FID match always comes first and is not repeated
    - A failed text search returns an empty list instead of an error
    """
    if q is None or not q.strip():
        raise InvalidInputError("Search query parameter 'q' is required")

    try:
        users = await services.search.search(q, parse_search_limit(limit))
        response.headers["Cache-Control"] = cache_control(SEARCH_CACHE_TTL)
        return {"users": users}
    except WhoIsWhoError:
        raise
    except Exception as e:
        logger.error(f"Error searching users: {str(e)}")
        raise InternalError("Internal server error")
