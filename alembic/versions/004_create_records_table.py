"""Create records table

Revision ID: 004
Revises: 003
Create Date: 2026-10-19

"""

from collections.abc import Sequence

import sqlalchemy as sa

from alembic import op

revision: str = "004"
down_revision: str | None = "003"
branch_labels: str | Sequence[str] | None = None
depends_on: str | Sequence[str] | None = None


def upgrade() -> None:
    op.create_table(
        "records",
        sa.Column("id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("user_id", sa.Integer(), sa.ForeignKey("users.id", ondelete="CASCADE"), nullable=False),
        sa.Column(
            "category_id",
            sa.Integer(),
            sa.ForeignKey("categories.id", name="fk_records_category", ondelete="SET NULL"),
            nullable=True,
        ),
        sa.Column("title", sa.String(length=256), nullable=False),
        sa.Column("description", sa.Text(), nullable=False),
        sa.Column("date_logged", sa.Date(), nullable=False),
        sa.Column("image_url", sa.String(length=512), nullable=True),
        sa.Column("invalidation_flag", sa.Boolean(), nullable=False, server_default="0"),
        sa.Column("delete_at", sa.DateTime(), nullable=True),
        sa.Column("created_at", sa.DateTime(), nullable=False),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index(op.f("ix_records_user_id"), "records", ["user_id"])
    op.create_index(op.f("ix_records_category_id"), "records", ["category_id"])


def downgrade() -> None:
    op.drop_index(op.f("ix_records_category_id"), table_name="records")
    op.drop_index(op.f("ix_records_user_id"), table_name="records")
    op.drop_table("records")
