# /whoiswho/models/snapshot_models.py
"""
Pydantic models for the snapshot mint endpoint.
"""
from pydantic import BaseModel, Field
from typing import List, Optional, Union


class SnapshotRequest(BaseModel):
    """Request model for /api/generate-snapshot."""
    fid: Optional[int] = Field(None, description="FID the caller wants to mint a snapshot of")
    token: Optional[str] = Field(None, description="Farcaster Quick Auth JWT")


class SnapshotResponse(BaseModel):
    """Content identifiers of the pinned image and metadata."""
    success: bool = Field(True, description="Always true on success")
    imageHash: str = Field(..., description="IPFS CID of the snapshot image")
    metadataHash: str = Field(..., description="IPFS CID of the NFT metadata document")
    imageUrl: str = Field(..., description="Gateway URL of the image")
    metadataUrl: str = Field(..., description="Gateway URL of the metadata")


class NFTAttribute(BaseModel):
    trait_type: str
    value: Union[str, int, float]


class NFTMetadata(BaseModel):
    """ERC-721 metadata document pinned next to the image."""
    name: str
    description: str
    image: str
    external_url: str
    attributes: List[NFTAttribute]
