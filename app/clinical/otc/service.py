"""Read-only OTC catalog views.

Catalog ingestion and free-text search live outside this service; these
helpers only browse what is already stored.
"""

from __future__ import annotations

from typing import Any, List, Optional
from uuid import UUID

from sqlalchemy import func, select
from sqlalchemy.orm import Session

from app.clinical.otc.vocabulary import Category
from app.models.medication import Medication


def get_medication_by_id_in_session(db: Session, medication_id: str) -> Optional[Medication]:
    try:
        key = UUID(medication_id.strip())
    except (AttributeError, ValueError):
        return None

    stmt = select(Medication).where(Medication.id == key)
    return db.execute(stmt).scalar_one_or_none()


def list_categories_in_session(db: Session) -> List[dict[str, Any]]:
    stmt = (
        select(Medication.category, Medication.sub_category, func.count().label("count"))
        .group_by(Medication.category, Medication.sub_category)
        .order_by(Medication.category.asc())
    )

    by_category: dict[str, dict[str, Any]] = {}
    for row in db.execute(stmt).all():
        entry = by_category.setdefault(
            row.category,
            {"category": row.category, "count": 0, "sub_categories": []},
        )
        entry["count"] += int(row.count)
        entry["sub_categories"].append(row.sub_category)

    results = []
    for entry in by_category.values():
        try:
            display_name = Category(entry["category"]).display_name
        except ValueError:
            display_name = entry["category"]
        results.append({**entry, "display_name": display_name, "sub_categories": sorted(entry["sub_categories"])})
    return results


def list_medications_by_category_in_session(
    db: Session,
    category: Category,
    sub_category: Optional[str] = None,
) -> List[Medication]:
    stmt = select(Medication).where(Medication.category == category.value)
    if sub_category:
        stmt = stmt.where(Medication.sub_category == sub_category)

    return list(db.execute(stmt.order_by(Medication.name.asc())).scalars().all())
