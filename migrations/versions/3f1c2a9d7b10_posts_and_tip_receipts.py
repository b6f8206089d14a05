"""posts and tip receipts

Revision ID: 3f1c2a9d7b10
Revises:
Create Date: 2026-10-19 09:12:44.204518

"""
from __future__ import annotations

from typing import Sequence, Union

import sqlalchemy as sa
from alembic import op

# revision identifiers, used by Alembic.
revision: str = "3f1c2a9d7b10"
down_revision: Union[str, Sequence[str], None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    """Create the post store and the tip receipt ledger."""
    op.create_table(
        "post",
        sa.Column("content_hash", sa.String(length=64), nullable=False),
        sa.Column("text", sa.Text(), nullable=False),
        sa.Column("links", sa.JSON(), nullable=False),
        sa.Column("images", sa.JSON(), nullable=False),
        sa.Column("total_tip_micro_stx", sa.BigInteger(), nullable=False, server_default="0"),
        sa.Column("tip_count", sa.Integer(), nullable=False, server_default="0"),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False),
        sa.PrimaryKeyConstraint("content_hash"),
        sa.CheckConstraint("total_tip_micro_stx >= 0", name="ck_post_total_tip_non_negative"),
        sa.CheckConstraint("tip_count >= 0", name="ck_post_tip_count_non_negative"),
    )
    op.create_table(
        "tip_receipt",
        sa.Column("txid", sa.String(length=64), nullable=False),
        sa.Column("content_hash", sa.String(length=64), nullable=False),
        sa.Column("post_id", sa.String(length=40), nullable=False),
        sa.Column("amount_micro_stx", sa.BigInteger(), nullable=False),
        sa.Column("verified_at", sa.DateTime(timezone=True), nullable=False),
        sa.Column("block_height", sa.BigInteger(), nullable=True),
        sa.PrimaryKeyConstraint("txid"),
    )
    op.create_index("ix_tip_receipt_content_hash", "tip_receipt", ["content_hash"])
    op.create_index("ix_tip_receipt_verified_at", "tip_receipt", ["verified_at"])


def downgrade() -> None:
    """Drop the tip ledger and the post store."""
    op.drop_index("ix_tip_receipt_verified_at", table_name="tip_receipt")
    op.drop_index("ix_tip_receipt_content_hash", table_name="tip_receipt")
    op.drop_table("tip_receipt")
    op.drop_table("post")
