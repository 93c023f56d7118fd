from __future__ import annotations

from typing import Sequence

from sqlalchemy import select
from sqlalchemy.orm import Session

from app.clinical.otc.vocabulary import Category
from app.models.medication import Medication
from app.services.recommendation_types import CatalogMedication


class MedicationCatalogRepository:
    """Read-only catalog access for the recommendation engine."""

    def __init__(self, db: Session) -> None:
        self.db = db

    def find_by_categories_and_symptoms(
        self,
        categories: Sequence[Category],
        symptoms: frozenset[str],
    ) -> list[CatalogMedication]:
        if not categories or not symptoms:
            return []

        stmt = (
            select(Medication)
            .where(Medication.category.in_([c.value for c in categories]))
            .order_by(Medication.created_at.asc(), Medication.name.asc())
        )
        rows = self.db.execute(stmt).scalars().all()

        # Symptom lists are JSON arrays; overlap is checked here so the query
        # stays portable across PostgreSQL and SQLite.
        matches = [row for row in rows if symptoms.intersection(row.symptoms or ())]
        return [self.to_catalog_medication(row) for row in matches]

    @staticmethod
    def to_catalog_medication(row: Medication) -> CatalogMedication:
        return CatalogMedication(
            id=str(row.id),
            name=row.name,
            category=Category(row.category),
            symptoms=frozenset(row.symptoms or ()),
            adult_dosage=row.dosage_adult,
            contraindications=tuple(row.contraindications or ()),
        )
