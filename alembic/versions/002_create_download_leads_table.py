"""Create download_leads table

Revision ID: 002
Revises: 001
Create Date: 2025-01-06 00:10:00.000000

"""

from collections.abc import Sequence
from typing import Union

import sqlalchemy as sa

from alembic import op

# revision identifiers, used by Alembic.
revision: str = "002"
down_revision: Union[str, None] = "001"
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    # Create download_leads table
    op.create_table(
        "download_leads",
        sa.Column("id", sa.String(), nullable=False),
        sa.Column("name", sa.String(), nullable=False),
        sa.Column("email", sa.String(), nullable=False),
        sa.Column("phone", sa.String(), nullable=True),
        sa.Column("company", sa.String(), nullable=True),
        sa.Column("tool_id", sa.String(), nullable=True),
        sa.Column("article_id", sa.String(), nullable=True),
        sa.Column("otp_code", sa.String(length=6), nullable=True),
        sa.Column("otp_expires_at", sa.DateTime(timezone=True), nullable=True),
        sa.Column("verified", sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column("downloaded_at", sa.DateTime(timezone=True), nullable=True),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False),
        sa.Column("updated_at", sa.DateTime(timezone=True), nullable=False),
        sa.PrimaryKeyConstraint("id"),
        sa.ForeignKeyConstraint(["tool_id"], ["tools.id"], ondelete="CASCADE"),
        sa.ForeignKeyConstraint(["article_id"], ["articles.id"], ondelete="CASCADE"),
        sa.UniqueConstraint("email", "tool_id", name="uq_download_leads_email_tool"),
        sa.UniqueConstraint("email", "article_id", name="uq_download_leads_email_article"),
        sa.CheckConstraint(
            "(tool_id IS NULL) <> (article_id IS NULL)",
            name="ck_download_leads_single_resource",
        ),
    )
    op.create_index(
        op.f("ix_download_leads_email"),
        "download_leads",
        ["email"],
        unique=False,
    )
    op.create_index(
        "ix_download_leads_verified_created_at",
        "download_leads",
        ["verified", "created_at"],
        unique=False,
    )


def downgrade() -> None:
    op.drop_index("ix_download_leads_verified_created_at", table_name="download_leads")
    op.drop_index(op.f("ix_download_leads_email"), table_name="download_leads")
    op.drop_table("download_leads")
