"""Verification and idempotent crediting of post tips.

A tip claim moves through ``Received -> Validated -> {DuplicateResolved |
Verifying} -> {Credited | Rejected | Unavailable}``. The receipt row keyed by
the transaction id is what makes crediting happen at most once: concurrent
claims race on its primary key and the loser resolves as a duplicate.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass

from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session

from frog_backend.models import Post, TipReceipt
from frog_backend.repositories.post_repo import PostRepository
from frog_backend.repositories.tip_receipt_repo import TipReceiptRepository
from frog_backend.services.chain import ChainVerifier, VerificationResult
from frog_backend.services.errors import (
    InternalError,
    NotFound,
    PayloadMismatch,
    VerificationFailed,
)
from frog_backend.services.validation import TipClaim

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class TipOutcome:
    """Totals of a post after a claim was credited or resolved as duplicate."""

    txid: str
    content_hash: str
    total_tip_micro_stx: int
    tip_count: int
    duplicate: bool = False


def _receipt_matches(receipt: TipReceipt, claim: TipClaim) -> bool:
    return (
        receipt.content_hash == claim.content_hash
        and receipt.post_id == str(claim.post_id)
        and int(receipt.amount_micro_stx) == claim.amount_micro_stx
    )


class TipLedgerService:
    """Credit verified tips to posts exactly once per chain transaction."""

    def __init__(self, session: Session, verifier: ChainVerifier) -> None:
        self.session = session
        self.verifier = verifier
        self.posts = PostRepository(session)
        self.receipts = TipReceiptRepository(session)

    async def claim_tip(self, claim: TipClaim) -> TipOutcome:
        """Verify and credit a tip claim.

        Raises:
            NotFound: The post does not exist.
            PayloadMismatch: The txid was already credited for another tip.
            VerificationFailed: The chain transaction does not match the claim.
            VerificationUnavailable: The chain API could not be queried.
            InternalError: A storage step failed.
        """
        try:
            post = self.posts.get_by_hash(claim.content_hash)
            existing = self.receipts.get(claim.txid) if post is not None else None
        except SQLAlchemyError as exc:
            self.session.rollback()
            logger.exception("Failed to load tip state for tx %s", claim.txid)
            raise InternalError("failed to load tip state") from exc

        if post is None:
            raise NotFound("post not found")
        if existing is not None:
            return self._resolve_duplicate(existing, claim)

        # Release the read transaction before network I/O.
        self.session.rollback()

        result = await self.verifier.verify_tip(
            claim.txid,
            post_id=claim.post_id,
            amount_micro_stx=claim.amount_micro_stx,
        )
        if not result.success:
            raise VerificationFailed(result.reason or "unknown reason")

        return self._credit(claim, result)

    def _credit(self, claim: TipClaim, result: VerificationResult) -> TipOutcome:
        # Receipt and totals commit together: no other claim can observe the
        # receipt before the increment it stands for.
        try:
            self.receipts.add(
                txid=claim.txid,
                content_hash=claim.content_hash,
                post_id=str(claim.post_id),
                amount_micro_stx=claim.amount_micro_stx,
                block_height=result.block_height,
            )
        except IntegrityError:
            self.session.rollback()
            return self._resolve_insert_conflict(claim)
        except SQLAlchemyError as exc:
            self.session.rollback()
            logger.exception("Failed to record tip receipt for tx %s", claim.txid)
            raise InternalError("failed to record tip receipt") from exc

        try:
            totals = self.posts.increment_tip_totals(claim.content_hash, claim.amount_micro_stx)
            if totals is not None:
                self.session.commit()
        except SQLAlchemyError as exc:
            self.session.rollback()
            logger.exception("Failed to apply tip totals for tx %s", claim.txid)
            self._compensate_receipt(claim.txid)
            raise InternalError("failed to apply tip totals") from exc

        if totals is None:
            self.session.rollback()
            logger.warning("Post %s vanished before tx %s was credited", claim.content_hash, claim.txid)
            self._compensate_receipt(claim.txid)
            raise InternalError("failed to apply tip totals")

        total, count = totals
        logger.info(
            "Credited tx %s to post %s (block %s): total=%s count=%s",
            claim.txid,
            claim.content_hash,
            result.block_height,
            total,
            count,
        )
        return TipOutcome(
            txid=claim.txid,
            content_hash=claim.content_hash,
            total_tip_micro_stx=total,
            tip_count=count,
        )

    def _compensate_receipt(self, txid: str) -> None:
        """Ensure no receipt remains for a credit whose totals were not applied.

        Raises:
            InternalError: If the receipt could not be removed.
        """
        try:
            self.receipts.delete(txid)
            self.session.commit()
        except SQLAlchemyError as exc:
            self.session.rollback()
            logger.exception("Failed to roll back tip receipt for tx %s", txid)
            raise InternalError("failed to roll back tip receipt") from exc
        logger.warning("Rolled back tip receipt for tx %s", txid)

    def _resolve_insert_conflict(self, claim: TipClaim) -> TipOutcome:
        try:
            receipt = self.receipts.get(claim.txid)
        except SQLAlchemyError as exc:
            self.session.rollback()
            logger.exception("Failed to reload tip receipt for tx %s", claim.txid)
            raise InternalError("failed to record tip receipt") from exc
        if receipt is None:
            logger.error("Insert of tip receipt for tx %s failed without a conflicting row", claim.txid)
            raise InternalError("failed to record tip receipt")
        return self._resolve_duplicate(receipt, claim)

    def _resolve_duplicate(self, receipt: TipReceipt, claim: TipClaim) -> TipOutcome:
        if not _receipt_matches(receipt, claim):
            logger.warning("Tx %s replayed with a different tip payload", claim.txid)
            raise PayloadMismatch("txid already used for a different tip")

        try:
            post: Post | None = self.posts.get_by_hash(claim.content_hash, refresh=True)
        except SQLAlchemyError as exc:
            self.session.rollback()
            logger.exception("Failed to load post %s", claim.content_hash)
            raise InternalError("failed to load tip state") from exc
        if post is None:
            raise NotFound("post not found")

        logger.info("Tx %s already credited to post %s", claim.txid, claim.content_hash)
        return TipOutcome(
            txid=claim.txid,
            content_hash=claim.content_hash,
            total_tip_micro_stx=int(post.total_tip_micro_stx),
            tip_count=int(post.tip_count),
            duplicate=True,
        )
