"""
Profile snapshot minting.

received -> authenticated -> rate-checked -> data-gathered ->
image-generated -> uploaded(image) -> uploaded(metadata) -> success

Any failing step raises and ends the request. If the metadata upload fails
after the image was pinned, the image is unpinned again; a failed unpin is
logged and the orphaned CID left behind.
"""
import asyncio
import dataclasses
import logging
import time
from datetime import datetime, timezone
from typing import Callable, List, Protocol

from whoiswho.aggregators.scores import ScoreService
from whoiswho.aggregators.users import UserAggregator
from whoiswho.clients.pinata import PinataClient
from whoiswho.core.rate_limit import SlidingWindowRateLimiter
from whoiswho.errors import ForbiddenError, RateLimitedError, UnauthorizedError, WhoIsWhoError
from whoiswho.models.snapshot_models import NFTAttribute, NFTMetadata, SnapshotResponse
from whoiswho.models.user_models import AggregatedUser
from whoiswho.rendering.renderer import ProfileImageRenderer, to_jpeg

logger = logging.getLogger(__name__)


class TokenVerifier(Protocol):
    async def verify(self, token: str, domain: str) -> int:
        ...


def build_attributes(user: AggregatedUser, mint_date: str) -> List[NFTAttribute]:
    """NFT traits from the gathered record; optional scores only when present."""
    record = user.primary
    fc_user = (user.farcaster or {}).get("user") or {}

    attributes = [
        NFTAttribute(trait_type="FID", value=user.fid),
        NFTAttribute(trait_type="Username", value=user.username),
        NFTAttribute(trait_type="Neynar Score", value=record.get("score") or 0),
        NFTAttribute(trait_type="Mint Date", value=mint_date),
        NFTAttribute(trait_type="Followers", value=fc_user.get("followerCount") or record.get("follower_count") or 0),
        NFTAttribute(trait_type="Following", value=fc_user.get("followingCount") or record.get("following_count") or 0),
    ]

    optional_traits = []
    quotient = user.quotient_score or {}
    optional_traits += [("Quotient Score", quotient.get("score")), ("Quotient Rank", quotient.get("rank"))]

    talent = user.talent_score or {}
    builder = talent.get("builderScore") or {}
    creator = talent.get("creatorScore") or {}
    optional_traits += [
        ("Talent Builder Score", builder.get("points")),
        ("Talent Builder Rank", builder.get("rank")),
        ("Talent Creator Score", creator.get("points")),
        ("Talent Creator Rank", creator.get("rank")),
    ]

    rewards = user.creator_rewards or {}
    optional_traits += [
        ("Creator Rewards Score", rewards.get("allTimeScore")),
        ("Creator Rewards Rank", rewards.get("currentPeriodRank")),
    ]

    for trait_type, value in optional_traits:
        if value:
            attributes.append(NFTAttribute(trait_type=trait_type, value=value))
    return attributes


def build_metadata(user: AggregatedUser, image_cid: str, mint_date: str) -> NFTMetadata:
    username = user.username
    return NFTMetadata(
        name=f"WhoIsWho Profile - @{username}",
        description=(
            f"Verified Farcaster profile snapshot for @{username} (FID: {user.fid}) captured on {mint_date}. "
            "This immutable NFT preserves the user's reputation metrics at this moment in time."
        ),
        image=f"ipfs://{image_cid}",
        external_url=f"https://warpcast.com/{username}",
        attributes=build_attributes(user, mint_date),
    )


class SnapshotService:
    """Runs one mint request through every state, or fails with a reason."""

    def __init__(
        self,
        users: UserAggregator,
        scores: ScoreService,
        rate_limiter: SlidingWindowRateLimiter,
        verifier: TokenVerifier,
        renderer: ProfileImageRenderer,
        pinata_factory: Callable[[], PinataClient],
        auth_domain: str,
    ):
        self.users = users
        self.scores = scores
        self.rate_limiter = rate_limiter
        self.verifier = verifier
        self.renderer = renderer
        self.pinata_factory = pinata_factory
        self.auth_domain = auth_domain

    async def authenticate(self, token: str) -> int:
        try:
            return await self.verifier.verify(token, self.auth_domain)
        except WhoIsWhoError:
            raise
        except Exception as e:
            logger.warning(f"Token verification failed: {e}")
            raise UnauthorizedError("Invalid authentication token") from e

    async def gather(self, fid: int) -> AggregatedUser:
        """Fresh user record plus each configured score source, concurrently."""
        user, quotient, talent, rewards = await asyncio.gather(
            self.users.get_user(fid, use_cache=False),
            self.scores.optional_quotient(fid),
            self.scores.optional_talent(fid),
            self.scores.optional_creator_rewards(fid),
        )
        # the cached record stays free of mint-time enrichments
        return dataclasses.replace(user, quotient_score=quotient, talent_score=talent, creator_rewards=rewards)

    async def create_snapshot(self, fid: int, token: str) -> SnapshotResponse:
        # missing pinning credentials fail before any state is touched
        pinata = self.pinata_factory()

        authenticated_fid = await self.authenticate(token)
        if authenticated_fid != fid:
            raise ForbiddenError("You can only mint your own profile")

        if not self.rate_limiter.check(fid):
            raise RateLimitedError(
                f"Rate limit exceeded. Maximum {self.rate_limiter.max_actions} mints per hour."
            )

        user = await self.gather(fid)
        logger.info(f"Gathered snapshot data for FID {fid}")

        png = await self.renderer.render(user.to_dict())
        jpeg = to_jpeg(png)

        filename = f"whoiswho-{fid}-{int(time.time() * 1000)}.jpg"
        image_cid = await pinata.pin_file(jpeg, filename)

        mint_date = datetime.now(timezone.utc).strftime("%Y-%m-%d")
        metadata = build_metadata(user, image_cid, mint_date)
        try:
            metadata_cid = await pinata.pin_json(metadata.model_dump())
        except Exception:
            await self._unpin_orphan(pinata, image_cid)
            raise

        logger.info(f"Snapshot for FID {fid}: image {image_cid}, metadata {metadata_cid}")
        return SnapshotResponse(
            success=True,
            imageHash=image_cid,
            metadataHash=metadata_cid,
            imageUrl=pinata.gateway(image_cid),
            metadataUrl=pinata.gateway(metadata_cid),
        )

    @staticmethod
    async def _unpin_orphan(pinata: PinataClient, cid: str) -> None:
        try:
            await pinata.unpin(cid)
        except Exception as e:
            logger.error(f"Could not unpin orphaned image {cid}: {e}")
