from __future__ import annotations

from alembic import op
import sqlalchemy as sa
from sqlalchemy import inspect


revision = "0001_create_coupons"
down_revision = None
branch_labels = None
depends_on = None


def _has_index(inspector, table_name: str, index_name: str) -> bool:
    return any(idx["name"] == index_name for idx in inspector.get_indexes(table_name))


def upgrade() -> None:
    bind = op.get_bind()
    inspector = inspect(bind)

    if "coupons" not in inspector.get_table_names():
        op.create_table(
            "coupons",
            sa.Column("id", sa.Integer(), primary_key=True, autoincrement=True),
            sa.Column("name", sa.String(length=100), nullable=False),
            sa.Column("percent", sa.Integer(), nullable=False),
            sa.Column("is_active", sa.Boolean(), nullable=False, server_default=sa.false()),
            sa.Column("created", sa.DateTime(timezone=True), nullable=True),
            sa.Column("last_updated", sa.DateTime(timezone=True), nullable=True),
        )

    inspector = inspect(bind)
    if not _has_index(inspector, "coupons", "uq_coupons_name_lower"):
        op.create_index(
            "uq_coupons_name_lower",
            "coupons",
            [sa.text("lower(name)")],
            unique=True,
        )


def downgrade() -> None:
    bind = op.get_bind()
    inspector = inspect(bind)

    if "coupons" in inspector.get_table_names():
        if _has_index(inspector, "coupons", "uq_coupons_name_lower"):
            op.drop_index("uq_coupons_name_lower", table_name="coupons")
        op.drop_table("coupons")
