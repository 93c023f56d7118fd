"""SQLAlchemy model for stored recommendation sessions.

Rows are written once and never updated. ``expires_at`` carries the retention
window; expired rows are invisible to reads and removed by the purge script.
"""

from __future__ import annotations

from datetime import datetime

from sqlalchemy import JSON, DateTime, Index, Integer, String, Text
from sqlalchemy.dialects.postgresql import JSONB
from sqlalchemy.orm import Mapped, mapped_column

from app.db.base import Base

JSONDocument = JSON().with_variant(JSONB(), "postgresql")


class RecommendationSessionRecord(Base):
    __tablename__ = "recommendation_sessions"

    id: Mapped[int] = mapped_column(Integer, primary_key=True)
    session_id: Mapped[str] = mapped_column(String(128), nullable=False, unique=True, index=True)
    owner_id: Mapped[str | None] = mapped_column(String(128), nullable=True)

    primary_symptom: Mapped[str] = mapped_column(String(50), nullable=False)
    secondary_symptoms: Mapped[list[str]] = mapped_column(JSONDocument, nullable=False, default=list)
    duration: Mapped[str] = mapped_column(String(30), nullable=False)
    medical_history: Mapped[list[str]] = mapped_column(JSONDocument, nullable=False, default=list)

    recommended: Mapped[list[dict]] = mapped_column(JSONDocument, nullable=False, default=list)
    excluded: Mapped[list[dict]] = mapped_column(JSONDocument, nullable=False, default=list)
    additional_recommendations: Mapped[str | None] = mapped_column(Text, nullable=True)

    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False)
    expires_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False, index=True)

    __table_args__ = (Index("ix_recommendation_sessions_owner_id_created_at", "owner_id", "created_at"),)
