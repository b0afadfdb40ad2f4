"""add da_settings

Revision ID: 002
Revises: 001
Create Date: 2026-10-19
"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa

# revision identifiers
revision: str = "002"
down_revision: Union[str, None] = "001"
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    op.create_table(
        "da_settings",
        sa.Column("das_name", sa.String(), primary_key=True),
        sa.Column("das_value", sa.Text(), nullable=False),
    )


def downgrade() -> None:
    op.drop_table("da_settings")
