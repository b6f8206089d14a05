# src/frog_backend/api/v1/__init__.py
"""Version 1 API endpoints."""

from .endpoints import leaderboard_router, posts_router, tips_router

__all__ = [
    "leaderboard_router",
    "posts_router",
    "tips_router",
]
