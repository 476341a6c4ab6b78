# /whoiswho/models/token_models.py
"""
Pydantic models for token-deployment endpoints.
"""
from pydantic import BaseModel, Field
from typing import List, Optional


class TokenRecord(BaseModel):
    """Normalized descriptor of a token deployed from a verified address."""
    name: Optional[str] = Field(None, description="Token name")
    symbol: Optional[str] = Field(None, description="Token $symbol")
    contract_address: str = Field(..., description="Token contract address")
    img_url: Optional[str] = Field(None, description="Token image URL")
    market_cap: Optional[float] = Field(None, description="Token market capitalization in USD")
    price_change_24h: Optional[float] = Field(None, description="24h price change, in percent")
    deployer_address: Optional[str] = Field(None, description="Verified address the token was found under")
    source: str = Field(..., description="Registry the token came from: clanker or streme")


class TokensResponse(BaseModel):
    """Response model for the clanker/streme token endpoints."""
    tokens: List[TokenRecord] = Field(..., description="Top tokens by market cap (at most 10)")
    total: int = Field(..., description="Number of unique tokens found across all verified addresses")
