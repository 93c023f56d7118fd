"""FastAPI router for browsing the OTC medication catalog."""

from __future__ import annotations

from typing import List, Optional

from fastapi import APIRouter, Depends, HTTPException, Query
from sqlalchemy.orm import Session

from app.clinical.otc.service import (
    get_medication_by_id_in_session,
    list_categories_in_session,
    list_medications_by_category_in_session,
)
from app.clinical.otc.vocabulary import Category
from app.db.session import get_db
from app.schemas.medication import (
    CategoryMedicationsResponse,
    CategorySummary,
    MedicationDetail,
    MedicationSummary,
)

router = APIRouter()


@router.get("/categories", response_model=List[CategorySummary])
def get_categories(db: Session = Depends(get_db)) -> List[CategorySummary]:
    return [CategorySummary(**item) for item in list_categories_in_session(db)]


@router.get("/categories/{category}", response_model=CategoryMedicationsResponse)
def get_medications_by_category(
    category: str,
    sub_category: Optional[str] = Query(default=None, description="Restrict to one sub-category"),
    db: Session = Depends(get_db),
) -> CategoryMedicationsResponse:
    try:
        selected = Category(category.strip().lower())
    except ValueError:
        raise HTTPException(status_code=404, detail=f"Unknown medication category: {category}")

    sub_category = sub_category.strip() if sub_category else None
    medications = [
        MedicationSummary.model_validate(row)
        for row in list_medications_by_category_in_session(db, selected, sub_category)
    ]

    if sub_category:
        return CategoryMedicationsResponse(
            category=selected.value,
            display_name=selected.display_name,
            sub_category=sub_category,
            grouped=False,
            medications=medications,
        )

    grouped: dict[str, list[MedicationSummary]] = {}
    for medication in medications:
        grouped.setdefault(medication.sub_category, []).append(medication)

    return CategoryMedicationsResponse(
        category=selected.value,
        display_name=selected.display_name,
        grouped=True,
        medications=grouped,
    )


@router.get("/{medication_id}", response_model=MedicationDetail)
def get_by_id(medication_id: str, db: Session = Depends(get_db)) -> MedicationDetail:
    item = get_medication_by_id_in_session(db, medication_id)
    if not item:
        raise HTTPException(status_code=404, detail="Medication not found")

    return MedicationDetail.model_validate(item)
