# /whoiswho/api/endpoints/snapshot.py
"""
Profile snapshot endpoints: NFT minting and the cached profile image.
"""
import logging
from fastapi import APIRouter, Depends, Path, Response
from whoiswho.errors import InvalidInputError, InternalError, NotFoundError, WhoIsWhoError
from whoiswho.models.snapshot_models import SnapshotRequest, SnapshotResponse
from whoiswho.rendering.renderer import to_jpeg
from whoiswho.services import Services, get_services
from whoiswho.utils.helpers import parse_fid
from typing import Any, Dict

# Set up logging
logger = logging.getLogger(__name__)

# Create router
router = APIRouter()

IMAGE_CACHE_CONTROL = "public, s-maxage=600, stale-while-revalidate=3600, max-age=600"


@router.post(
    "/generate-snapshot",
    summary="Mint a profile snapshot",
    description="Renders the caller's profile and pins the image and NFT metadata to IPFS. Quick Auth token required.",
    response_model=SnapshotResponse,
    responses={
        200: {"description": "Snapshot pinned", "model": SnapshotResponse},
        400: {"description": "Missing fid or token"},
        401: {"description": "Unauthorized - Invalid authentication token"},
        403: {"description": "Token belongs to a different FID"},
        429: {"description": "Too Many Requests - mint limit reached"},
        500: {"description": "Internal Server Error"}
    }
)
async def generate_snapshot(
    request: SnapshotRequest,
    services: Services = Depends(get_services),
) -> Dict[str, Any]:
    """
    Mint a snapshot of the caller's own profile.

    - Requires a Quick Auth token whose subject matches `fid`
    - At most 5 mints per FID per rolling hour
    - Returns IPFS CIDs and gateway URLs for the image and metadata
    """
    if not request.fid or not request.token:
        raise InvalidInputError("Missing fid or token")

    try:
        result = await services.snapshot.create_snapshot(request.fid, request.token)
        return result.model_dump()
    except WhoIsWhoError:
        raise
    except Exception as e:
        logger.error(f"Snapshot generation error: {str(e)}")
        raise InternalError(f"Failed to generate snapshot: {str(e)}")


@router.get(
    "/profile/{fid}/image",
    summary="Get a profile image",
    description="Rendered profile card as JPEG, cached for 10 minutes with one generation per FID at a time.",
    response_class=Response,
    responses={
        200: {"description": "JPEG image", "content": {"image/jpeg": {}}},
        400: {"description": "Invalid FID"}
    }
)
async def get_profile_image(
    fid: str = Path(..., description="Farcaster ID"),
    services: Services = Depends(get_services),
) -> Response:
    fid_value = parse_fid(fid)

    async def generate() -> bytes:
        try:
            user = (await services.users.get_user(fid_value)).to_dict()
        except NotFoundError:
            user = None
        return to_jpeg(await services.renderer.render(user))

    image = await services.image_cache.get_or_generate(str(fid_value), generate)
    return Response(content=image, media_type="image/jpeg", headers={"Cache-Control": IMAGE_CACHE_CONTROL})
