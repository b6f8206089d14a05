# src/frog_backend/api/v1/endpoints/__init__.py
"""API endpoint modules for version 1."""

from .leaderboard import router as leaderboard_router
from .posts import router as posts_router
from .tips import router as tips_router

__all__ = [
    "leaderboard_router",
    "posts_router",
    "tips_router",
]
