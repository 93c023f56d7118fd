"""Create medications catalog table.

Revision ID: 20261018_0001
Revises: 
Create Date: 2026-10-18

"""

from __future__ import annotations

from alembic import op
import sqlalchemy as sa
from sqlalchemy.dialects import postgresql


revision = "20261018_0001"
down_revision = None
branch_labels = None
depends_on = None


def _json() -> sa.types.TypeEngine:
    return sa.JSON().with_variant(postgresql.JSONB(), "postgresql")


def upgrade() -> None:
    op.create_table(
        "medications",
        sa.Column("id", sa.Uuid(), primary_key=True),
        sa.Column("name", sa.String(length=200), nullable=False),
        sa.Column("brand_names", _json(), nullable=False),
        sa.Column("generic_name", sa.String(length=200), nullable=False),
        sa.Column("category", sa.String(length=50), nullable=False),
        sa.Column("sub_category", sa.String(length=100), nullable=False),
        sa.Column("symptoms", _json(), nullable=False),
        sa.Column("description", sa.Text(), nullable=False),
        sa.Column("dosage_adult", sa.Text(), nullable=False),
        sa.Column("dosage_children", sa.Text(), nullable=True),
        sa.Column("dosage_elderly", sa.Text(), nullable=True),
        sa.Column("max_daily_dose", sa.String(length=100), nullable=False),
        sa.Column("side_effects", _json(), nullable=False),
        sa.Column("warnings", _json(), nullable=False),
        sa.Column("contraindications", _json(), nullable=False),
        sa.Column("interactions", _json(), nullable=False),
        sa.Column("pregnancy_category", sa.String(length=1), nullable=False),
        sa.Column("storage_instructions", sa.Text(), nullable=False),
        sa.Column("sources", _json(), nullable=False),
        sa.Column("verified", sa.Boolean(), nullable=False, server_default=sa.text("false")),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()),
        sa.Column("updated_at", sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()),
        sa.UniqueConstraint("name", name="uq_medications_name"),
    )
    op.create_index(op.f("ix_medications_category"), "medications", ["category"], unique=False)
    op.create_index(
        "ix_medications_category_sub_category",
        "medications",
        ["category", "sub_category"],
        unique=False,
    )


def downgrade() -> None:
    op.drop_index("ix_medications_category_sub_category", table_name="medications")
    op.drop_index(op.f("ix_medications_category"), table_name="medications")
    op.drop_table("medications")
