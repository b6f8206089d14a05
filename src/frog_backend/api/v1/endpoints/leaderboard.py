# src/frog_backend/api/v1/endpoints/leaderboard.py
"""Tip leaderboard endpoint."""

from fastapi import APIRouter, Query

from frog_backend.api.v1.dependencies import SessionDep
from frog_backend.core.settings import settings
from frog_backend.schemas.leaderboard import (
    LeaderboardResponse,
    Leaders,
    PostLeaderResponse,
)
from frog_backend.services.leaderboard import build_leaderboard

router = APIRouter(prefix="/leaderboard", tags=["leaderboard"])


@router.get("", response_model=LeaderboardResponse)
async def get_leaderboard(
    db: SessionDep,
    range_name: str | None = Query(None, alias="range", description="Window: weekly or monthly"),
) -> LeaderboardResponse:
    """Rank posts by the tips credited to them within the window."""
    board = build_leaderboard(db, range_name, limit=settings.leaderboard_limit)
    return LeaderboardResponse(
        updated_at=board.updated_at.isoformat(),
        range=board.range,
        leaders=Leaders(
            posts=[
                PostLeaderResponse(
                    rank=item.rank,
                    content_hash=item.content_hash,
                    post_id=item.post_id,
                    total_tip_micro_stx=str(item.total_tip_micro_stx),
                    tip_count=item.tip_count,
                    text_preview=item.text_preview,
                )
                for item in board.posts
            ]
        ),
    )
