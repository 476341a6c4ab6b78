# /whoiswho/api/router.py
"""
API router that includes all endpoint routers.
"""
from fastapi import APIRouter
from whoiswho.api.endpoints import (
    users,
    tokens,
    reputation,
    snapshot
)

# Create main router
router = APIRouter()

# Include all endpoint routers
router.include_router(users.router, tags=["Users"])
router.include_router(tokens.router, tags=["Tokens"])
router.include_router(reputation.router, tags=["Reputation"])
router.include_router(snapshot.router, tags=["Snapshots"])
