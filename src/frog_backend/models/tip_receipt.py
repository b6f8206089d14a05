"""Ledger of verified tip transactions."""

from datetime import datetime

from sqlalchemy import BigInteger, DateTime, String
from sqlalchemy.orm import Mapped, mapped_column

from frog_backend.db.session import Base
from frog_backend.db.time import utcnow


class TipReceipt(Base):
    """Record proving that a chain transaction has been credited to a post.

    The primary key on ``txid`` is what serializes concurrent claims for the
    same transaction. ``content_hash`` is intentionally not a foreign key so a
    receipt survives the deletion of its post.
    """

    __tablename__ = "tip_receipt"

    txid: Mapped[str] = mapped_column(String(64), primary_key=True)
    content_hash: Mapped[str] = mapped_column(String(64), nullable=False, index=True)
    post_id: Mapped[str] = mapped_column(String(40), nullable=False)
    amount_micro_stx: Mapped[int] = mapped_column(BigInteger, nullable=False)
    verified_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=utcnow,
        index=True,
    )
    block_height: Mapped[int | None] = mapped_column(BigInteger, nullable=True)
