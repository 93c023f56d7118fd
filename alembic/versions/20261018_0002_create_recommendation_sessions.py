"""Create recommendation_sessions table.

Revision ID: 20261018_0002
Revises: 20261018_0001
Create Date: 2026-10-18
"""

from __future__ import annotations

from alembic import op
import sqlalchemy as sa
from sqlalchemy.dialects import postgresql


revision = "20261018_0002"
down_revision = "20261018_0001"
branch_labels = None
depends_on = None


def _json() -> sa.types.TypeEngine:
    return sa.JSON().with_variant(postgresql.JSONB(), "postgresql")


def upgrade() -> None:
    op.create_table(
        "recommendation_sessions",
        sa.Column("id", sa.Integer(), primary_key=True),
        sa.Column("session_id", sa.String(length=128), nullable=False),
        sa.Column("owner_id", sa.String(length=128), nullable=True),
        sa.Column("primary_symptom", sa.String(length=50), nullable=False),
        sa.Column("secondary_symptoms", _json(), nullable=False),
        sa.Column("duration", sa.String(length=30), nullable=False),
        sa.Column("medical_history", _json(), nullable=False),
        sa.Column("recommended", _json(), nullable=False),
        sa.Column("excluded", _json(), nullable=False),
        sa.Column("additional_recommendations", sa.Text(), nullable=True),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False),
        sa.Column("expires_at", sa.DateTime(timezone=True), nullable=False),
    )
    op.create_index(
        op.f("ix_recommendation_sessions_session_id"),
        "recommendation_sessions",
        ["session_id"],
        unique=True,
    )
    op.create_index(
        op.f("ix_recommendation_sessions_expires_at"),
        "recommendation_sessions",
        ["expires_at"],
        unique=False,
    )
    op.create_index(
        "ix_recommendation_sessions_owner_id_created_at",
        "recommendation_sessions",
        ["owner_id", "created_at"],
        unique=False,
    )


def downgrade() -> None:
    op.drop_index("ix_recommendation_sessions_owner_id_created_at", table_name="recommendation_sessions")
    op.drop_index(op.f("ix_recommendation_sessions_expires_at"), table_name="recommendation_sessions")
    op.drop_index(op.f("ix_recommendation_sessions_session_id"), table_name="recommendation_sessions")
    op.drop_table("recommendation_sessions")
