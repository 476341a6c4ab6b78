# /whoiswho/models/reputation_models.py
"""
Pydantic models for the supplementary reputation sources.
"""
from pydantic import BaseModel, ConfigDict, Field
from typing import Any, Dict, List, Optional


class ReputationData(BaseModel):
    """Quotient reputation data for one user."""
    model_config = ConfigDict(extra="allow")

    fid: int = Field(..., description="Farcaster user ID")
    username: Optional[str] = Field(None, description="Farcaster username")
    quotientScore: Optional[float] = Field(None, description="Normalized quotient score. Account quality drops signifigantly beneath .5")
    quotientScoreRaw: Optional[float] = Field(None, description="Raw quotient score")
    quotientRank: Optional[int] = Field(None, description="Account rank across Farcaster based on Quotient score.")
    quotientProfileUrl: Optional[str] = Field(None, description="Quotient discovery portal URL for the user")


class ReputationResponse(BaseModel):
    """Passthrough shape of the Quotient /user-reputation endpoint."""
    model_config = ConfigDict(extra="allow")

    data: List[ReputationData] = Field(default_factory=list, description="Reputation data for the requested FIDs")
    count: int = Field(0, description="Number of users found")


class TalentScore(BaseModel):
    """One Talent Protocol score."""
    points: Optional[float] = Field(None, description="Score points")
    rank: Optional[int] = Field(None, description="Rank position")
    lastCalculated: Optional[str] = Field(None, description="When the score was last calculated")


class TalentProtocolResponse(BaseModel):
    """Response model for /api/talent-protocol."""
    profileId: Optional[str] = Field(None, description="Talent Protocol profile ID")
    builderScore: Optional[TalentScore] = Field(None, description="Builder score")
    creatorScore: Optional[TalentScore] = Field(None, description="Creator score")


class CreatorRewardsResponse(BaseModel):
    """Response model for /api/creator-rewards."""
    scores: Optional[Dict[str, Any]] = Field(None, description="User scores and current period rank")
    metadata: Optional[Dict[str, Any]] = Field(None, description="Current period info and reward tiers")
