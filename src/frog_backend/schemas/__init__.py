"""
Pydantic schemas for API request/response models.

These schemas define the structure of API data for serialization and validation.
"""

from .leaderboard import LeaderboardResponse
from .post import PostCreate, PostCreated, PostDeleted, PostResponse, PostsByHashResponse
from .tip import TipClaimRequest, TipClaimResponse

__all__ = [
    "LeaderboardResponse",
    "PostCreate", "PostCreated", "PostDeleted", "PostResponse", "PostsByHashResponse",
    "TipClaimRequest", "TipClaimResponse",
]
