"""SQLAlchemy model for the OTC medication catalog.

The catalog is owned by catalog management; the recommendation engine only
reads it through ``MedicationCatalogRepository``.
"""

from __future__ import annotations

from datetime import datetime
from uuid import UUID, uuid4

from sqlalchemy import JSON, Boolean, DateTime, Index, String, Text, Uuid, func, text
from sqlalchemy.dialects.postgresql import JSONB
from sqlalchemy.orm import Mapped, mapped_column

from app.db.base import Base

JSONList = JSON().with_variant(JSONB(), "postgresql")


class Medication(Base):
    __tablename__ = "medications"

    id: Mapped[UUID] = mapped_column(Uuid(as_uuid=True), primary_key=True, default=uuid4)
    name: Mapped[str] = mapped_column(String(200), nullable=False, unique=True)
    brand_names: Mapped[list[str]] = mapped_column(JSONList, nullable=False, default=list)
    generic_name: Mapped[str] = mapped_column(String(200), nullable=False)
    category: Mapped[str] = mapped_column(String(50), nullable=False, index=True)
    sub_category: Mapped[str] = mapped_column(String(100), nullable=False)
    symptoms: Mapped[list[str]] = mapped_column(JSONList, nullable=False, default=list)
    description: Mapped[str] = mapped_column(Text, nullable=False)

    dosage_adult: Mapped[str] = mapped_column(Text, nullable=False)
    dosage_children: Mapped[str | None] = mapped_column(Text, nullable=True)
    dosage_elderly: Mapped[str | None] = mapped_column(Text, nullable=True)
    max_daily_dose: Mapped[str] = mapped_column(String(100), nullable=False)

    side_effects: Mapped[list[str]] = mapped_column(JSONList, nullable=False, default=list)
    warnings: Mapped[list[str]] = mapped_column(JSONList, nullable=False, default=list)
    contraindications: Mapped[list[str]] = mapped_column(JSONList, nullable=False, default=list)
    interactions: Mapped[list[str]] = mapped_column(JSONList, nullable=False, default=list)
    pregnancy_category: Mapped[str] = mapped_column(String(1), nullable=False)  # A B C D X N
    storage_instructions: Mapped[str] = mapped_column(Text, nullable=False)
    sources: Mapped[list[dict]] = mapped_column(JSONList, nullable=False, default=list)
    verified: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False, server_default=text("false"))

    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False, server_default=func.now())
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, server_default=func.now(), onupdate=func.now()
    )

    __table_args__ = (Index("ix_medications_category_sub_category", "category", "sub_category"),)
