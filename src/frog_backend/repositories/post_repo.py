"""Data access helpers for working with posts."""
from __future__ import annotations

from collections.abc import Sequence

from sqlalchemy import select, update
from sqlalchemy.orm import Session

from frog_backend.models.post import Post

__all__ = ["PostRepository"]


class PostRepository:
    """Thin wrapper around database access for post entities."""

    def __init__(self, session: Session) -> None:
        """Initialize the repository with a SQLAlchemy session."""
        self.session = session

    def get_by_hash(self, content_hash: str, *, refresh: bool = False) -> Post | None:
        """Return a post by content hash, optionally reloading it from the database."""
        return self.session.get(Post, content_hash, populate_existing=refresh)

    def list_by_hashes(self, hashes: Sequence[str]) -> list[Post]:
        """Return the posts whose hashes appear in ``hashes``."""
        if not hashes:
            return []
        result = self.session.execute(select(Post).where(Post.content_hash.in_(hashes)))
        return list(result.scalars())

    def create(
        self,
        *,
        content_hash: str,
        text: str,
        links: list[str],
        images: list[str],
    ) -> Post:
        """Insert a new post and return the pending ORM instance.

        Args:
            content_hash: Hex digest of the normalized payload, used as primary key.
            text: Trimmed post text.
            links: Normalized link URLs.
            images: Normalized image URLs.
        """
        post = Post(
            content_hash=content_hash,
            text=text,
            links=links,
            images=images,
            total_tip_micro_stx=0,
            tip_count=0,
        )
        self.session.add(post)
        self.session.flush()
        return post

    def delete(self, post: Post) -> None:
        """Delete a post row."""
        self.session.delete(post)
        self.session.flush()

    def increment_tip_totals(self, content_hash: str, amount_micro_stx: int) -> tuple[int, int] | None:
        """Atomically add one tip to a post's totals.

        Runs as a single ``UPDATE ... RETURNING`` so concurrent tips on the
        same post never lose an increment. Returns the new
        ``(total_tip_micro_stx, tip_count)`` as stored, or ``None`` when the
        post does not exist.
        """
        table = Post.__table__
        stmt = (
            update(table)
            .where(table.c.content_hash == content_hash)
            .values(
                total_tip_micro_stx=table.c.total_tip_micro_stx + amount_micro_stx,
                tip_count=table.c.tip_count + 1,
            )
            .returning(table.c.total_tip_micro_stx, table.c.tip_count)
        )
        row = self.session.execute(stmt).first()
        if row is None:
            return None
        return int(row[0]), int(row[1])
