"""Data access helpers for the tip receipt ledger."""
from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime

from sqlalchemy import delete, func, select
from sqlalchemy.orm import Session

from frog_backend.models.tip_receipt import TipReceipt

__all__ = ["TipReceiptRepository", "TipAggregate"]


@dataclass(frozen=True)
class TipAggregate:
    """Credited tips of one post inside a time window."""

    content_hash: str
    post_id: str
    total_tip_micro_stx: int
    tip_count: int


class TipReceiptRepository:
    """Thin wrapper around database access for tip receipts."""

    def __init__(self, session: Session) -> None:
        self.session = session

    def get(self, txid: str) -> TipReceipt | None:
        """Return the receipt for a transaction id, bypassing stale identity state."""
        result = self.session.execute(
            select(TipReceipt)
            .where(TipReceipt.txid == txid)
            .execution_options(populate_existing=True)
        )
        return result.scalars().first()

    def add(
        self,
        *,
        txid: str,
        content_hash: str,
        post_id: str,
        amount_micro_stx: int,
        block_height: int | None,
    ) -> TipReceipt:
        """Insert a receipt; a duplicate txid surfaces as ``IntegrityError`` on flush."""
        receipt = TipReceipt(
            txid=txid,
            content_hash=content_hash,
            post_id=post_id,
            amount_micro_stx=amount_micro_stx,
            block_height=block_height,
        )
        self.session.add(receipt)
        self.session.flush()
        return receipt

    def delete(self, txid: str) -> bool:
        """Delete the receipt for ``txid`` and report whether a row was removed."""
        result = self.session.execute(delete(TipReceipt).where(TipReceipt.txid == txid))
        return bool(result.rowcount)

    def top_posts_since(self, since: datetime, limit: int) -> list[TipAggregate]:
        """Aggregate receipts verified at or after ``since`` per post, best first."""
        total = func.sum(TipReceipt.amount_micro_stx).label("total")
        count = func.count(TipReceipt.txid).label("count")
        stmt = (
            select(
                TipReceipt.content_hash,
                func.max(TipReceipt.post_id).label("post_id"),
                total,
                count,
            )
            .where(TipReceipt.verified_at >= since)
            .group_by(TipReceipt.content_hash)
            .order_by(total.desc(), count.desc(), TipReceipt.content_hash)
            .limit(limit)
        )
        return [
            TipAggregate(
                content_hash=row.content_hash,
                post_id=row.post_id,
                total_tip_micro_stx=int(row.total),
                tip_count=int(row.count),
            )
            for row in self.session.execute(stmt)
        ]
