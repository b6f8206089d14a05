# src/frog_backend/api/v1/endpoints/tips.py
"""Tip claim endpoints."""

from fastapi import APIRouter, status

from frog_backend.api.v1.dependencies import TipServiceDep
from frog_backend.schemas.tip import TipClaimRequest, TipClaimResponse
from frog_backend.services.validation import normalize_tip_claim

router = APIRouter(prefix="/tips", tags=["tips"])


@router.post(
    "",
    response_model=TipClaimResponse,
    response_model_exclude_none=True,
    status_code=status.HTTP_200_OK,
)
async def claim_tip(body: TipClaimRequest, tips: TipServiceDep) -> TipClaimResponse:
    """Verify a tip transaction on chain and credit it to a post once.

    Args:
        body: Claimed post hash, on-chain post id, amount and transaction id
        tips: Tip ledger service

    Returns:
        The post's tip totals; ``duplicate`` is set when the transaction was
        already credited by an earlier claim.

    Raises:
        TipError: Mapped to 400/404/409/500 by the application error handlers.
    """
    claim = normalize_tip_claim(
        content_hash=body.content_hash,
        post_id=body.post_id,
        amount_micro_stx=body.amount_micro_stx,
        txid=body.txid,
    )
    outcome = await tips.claim_tip(claim)
    return TipClaimResponse(
        duplicate=True if outcome.duplicate else None,
        txid=outcome.txid,
        content_hash=outcome.content_hash,
        total_tip_micro_stx=str(outcome.total_tip_micro_stx),
        tip_count=outcome.tip_count,
    )
