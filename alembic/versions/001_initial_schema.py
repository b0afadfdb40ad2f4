"""initial schema: verification hashes and witness trees

Revision ID: 001
Revises:
Create Date: 2026-10-19
"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa

# revision identifiers
revision: str = "001"
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    op.create_table(
        "page_verification",
        sa.Column("rev_id", sa.Integer(), primary_key=True, autoincrement=False),
        sa.Column("verification_hash", sa.String(), nullable=False),
        sa.Column("created_at", sa.DateTime(), nullable=False),
    )
    op.create_index("ix_page_verification_verification_hash", "page_verification", ["verification_hash"])

    op.create_table(
        "witness_events",
        sa.Column("id", sa.String(), primary_key=True),
        sa.Column("recorded_root", sa.String(), nullable=False),
        sa.Column("domain_id", sa.String(), nullable=True),
        sa.Column("witness_network", sa.String(), nullable=True),
        sa.Column("smart_contract_address", sa.String(), nullable=True),
        sa.Column("transaction_hash", sa.String(), nullable=True),
        sa.Column("sender_account_address", sa.String(), nullable=True),
        sa.Column("meta_json", sa.JSON(), nullable=True),
        sa.Column("created_at", sa.DateTime(), nullable=False),
    )
    op.create_index("ix_witness_events_recorded_root", "witness_events", ["recorded_root"])
    op.create_index("ix_witness_events_domain_id", "witness_events", ["domain_id"])
    op.create_index("ix_witness_events_created_at", "witness_events", ["created_at"])

    # ── One row per (left, right) → successor step; several per depth ──
    op.create_table(
        "witness_merkle_tree",
        sa.Column("id", sa.Integer(), primary_key=True, autoincrement=True),
        sa.Column("witness_event_id", sa.String(), sa.ForeignKey("witness_events.id"), nullable=False),
        sa.Column("depth", sa.Integer(), nullable=False, server_default="0"),
        sa.Column("left_leaf", sa.String(), nullable=False),
        sa.Column("right_leaf", sa.String(), nullable=False),
        sa.Column("successor", sa.String(), nullable=False),
    )
    op.create_index("ix_witness_merkle_tree_witness_event_id", "witness_merkle_tree", ["witness_event_id"])
    op.create_index("ix_witness_merkle_tree_depth", "witness_merkle_tree", ["depth"])
    op.create_index("ix_witness_merkle_tree_left_leaf", "witness_merkle_tree", ["left_leaf"])
    op.create_index("ix_witness_merkle_tree_right_leaf", "witness_merkle_tree", ["right_leaf"])


def downgrade() -> None:
    op.drop_table("witness_merkle_tree")
    op.drop_table("witness_events")
    op.drop_table("page_verification")
