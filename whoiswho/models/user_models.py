# /whoiswho/models/user_models.py
"""
Models for the aggregated Farcaster user record.
"""
from dataclasses import dataclass
from pydantic import BaseModel, Field
from typing import Any, Dict, List, Optional


@dataclass
class AggregatedUser:
    """
    A primary Neynar user payload plus optional sub-records, each tagged by
    the source it came from. Sub-records are additive: a missing one never
    hides the primary fields.
    """
    primary: Dict[str, Any]
    farcaster: Optional[Dict[str, Any]] = None
    quotient_score: Optional[Dict[str, Any]] = None
    talent_score: Optional[Dict[str, Any]] = None
    creator_rewards: Optional[Dict[str, Any]] = None

    @property
    def fid(self) -> int:
        return int(self.primary["fid"])

    @property
    def username(self) -> str:
        return self.primary.get("username") or ""

    def to_dict(self) -> Dict[str, Any]:
        record = dict(self.primary)
        if self.farcaster is not None:
            record["farcaster"] = self.farcaster
        if self.quotient_score is not None:
            record["quotientScore"] = self.quotient_score
        if self.talent_score is not None:
            record["talentScore"] = self.talent_score
        if self.creator_rewards is not None:
            record["creatorRewards"] = self.creator_rewards
        return record


class UserResponse(BaseModel):
    """Response model for /api/user."""
    user: Dict[str, Any] = Field(..., description="Neynar user merged with optional Farcaster client data")


class SearchUser(BaseModel):
    """A user as returned by the Farcaster search API."""
    fid: int = Field(..., description="Farcaster user ID")
    displayName: Optional[str] = Field(None, description="Display name")
    username: Optional[str] = Field(None, description="Farcaster username")
    pfp: Optional[Dict[str, Any]] = Field(None, description="Profile picture url and verification flag")
    profile: Optional[Dict[str, Any]] = Field(None, description="Bio, location and account level")
    followerCount: Optional[int] = Field(None, description="Follower count")
    followingCount: Optional[int] = Field(None, description="Following count")
    viewerContext: Optional[Dict[str, Any]] = Field(None, description="Viewer relationship flags")


class SearchResponse(BaseModel):
    """Response model for /api/search."""
    users: List[Dict[str, Any]] = Field(..., description="Matching users; a direct FID hit always comes first")
