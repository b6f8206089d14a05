"""SQLAlchemy models for content-addressed posts."""

from datetime import datetime

from sqlalchemy import JSON, BigInteger, CheckConstraint, DateTime, Integer, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from frog_backend.db.session import Base
from frog_backend.db.time import utcnow


class Post(Base):
    """Off-chain post body keyed by the hash of its normalized payload.

    The on-chain feed only stores the content hash; this row carries the text,
    links and image referenced by it together with the credited tip totals.
    """

    __tablename__ = "post"
    __table_args__ = (
        CheckConstraint("total_tip_micro_stx >= 0", name="ck_post_total_tip_non_negative"),
        CheckConstraint("tip_count >= 0", name="ck_post_tip_count_non_negative"),
    )

    # sha256 over the canonical {"text","links","images"} JSON payload.
    content_hash: Mapped[str] = mapped_column(String(64), primary_key=True)
    text: Mapped[str] = mapped_column(Text, nullable=False)
    links: Mapped[list[str]] = mapped_column(JSON, nullable=False, default=list)
    images: Mapped[list[str]] = mapped_column(JSON, nullable=False, default=list)

    # Only ever changed through PostRepository.increment_tip_totals.
    total_tip_micro_stx: Mapped[int] = mapped_column(BigInteger, nullable=False, default=0)
    tip_count: Mapped[int] = mapped_column(Integer, nullable=False, default=0)

    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=utcnow,
    )
