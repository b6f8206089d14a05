"""Tip leaderboard built from the receipt ledger."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime, timedelta
from typing import Final

from sqlalchemy.orm import Session

from frog_backend.db.time import utcnow
from frog_backend.repositories.post_repo import PostRepository
from frog_backend.repositories.tip_receipt_repo import TipReceiptRepository
from frog_backend.services.errors import InvalidInput

LEADERBOARD_WINDOWS: Final[dict[str, timedelta]] = {
    "weekly": timedelta(days=7),
    "monthly": timedelta(days=30),
}
DEFAULT_RANGE: Final[str] = "weekly"
PREVIEW_LENGTH: Final[int] = 120


@dataclass(frozen=True)
class PostLeader:
    rank: int
    content_hash: str
    post_id: str
    total_tip_micro_stx: int
    tip_count: int
    text_preview: str


@dataclass(frozen=True)
class Leaderboard:
    range: str
    updated_at: datetime
    posts: list[PostLeader]


def build_leaderboard(
    session: Session,
    range_name: str | None,
    *,
    limit: int,
    now: datetime | None = None,
) -> Leaderboard:
    """Rank posts by tips credited within the requested window.

    Raises:
        InvalidInput: If ``range_name`` is not a known window.
    """
    key = (range_name or DEFAULT_RANGE).strip().lower()
    window = LEADERBOARD_WINDOWS.get(key)
    if window is None:
        raise InvalidInput("invalid range")

    current = now or utcnow()
    aggregates = TipReceiptRepository(session).top_posts_since(current - window, limit)
    posts = {
        post.content_hash: post
        for post in PostRepository(session).list_by_hashes([item.content_hash for item in aggregates])
    }

    leaders = []
    for rank, item in enumerate(aggregates, start=1):
        post = posts.get(item.content_hash)
        leaders.append(
            PostLeader(
                rank=rank,
                content_hash=item.content_hash,
                post_id=item.post_id,
                total_tip_micro_stx=item.total_tip_micro_stx,
                tip_count=item.tip_count,
                text_preview=post.text[:PREVIEW_LENGTH] if post is not None else "",
            )
        )
    return Leaderboard(range=key, updated_at=current, posts=leaders)
