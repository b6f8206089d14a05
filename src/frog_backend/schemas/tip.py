"""Tip claim Pydantic schemas."""

from pydantic import BaseModel, ConfigDict, Field, field_validator


class TipClaimRequest(BaseModel):
    """Body of a tip claim; values are validated further by the ledger."""

    content_hash: str = Field(..., alias="contentHash", description="64-char hex post hash")
    post_id: str = Field(..., alias="postId", description="On-chain post id as a decimal string")
    amount_micro_stx: str = Field(
        ...,
        alias="amountMicroStx",
        description="Tipped amount in micro-STX as a decimal string",
    )
    txid: str = Field(..., description="64-char hex id of the tip transaction")

    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    @field_validator("post_id", "amount_micro_stx", mode="before")
    @classmethod
    def _stringify_integers(cls, value: object) -> object:
        if isinstance(value, int) and not isinstance(value, bool):
            return str(value)
        return value


class TipClaimResponse(BaseModel):
    """Totals of the tipped post after the claim."""

    ok: bool = True
    duplicate: bool | None = None
    txid: str
    content_hash: str = Field(..., alias="contentHash")
    total_tip_micro_stx: str = Field(..., alias="totalTipMicroStx")
    tip_count: int = Field(..., alias="tipCount")

    model_config = ConfigDict(populate_by_name=True)
