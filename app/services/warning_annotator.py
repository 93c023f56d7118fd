from __future__ import annotations

from typing import AbstractSet, Mapping, Sequence

from app.clinical.otc.vocabulary import Category, MedicalCondition
from app.services.recommendation_types import CatalogMedication


class WarningAnnotator:
    """Condition-specific safety warnings for included medications.

    Warnings are informational only; exclusion is decided by the
    contraindication filter.
    """

    def __init__(
        self,
        condition_warnings: Mapping[MedicalCondition, str],
        warning_categories: AbstractSet[Category],
    ) -> None:
        self.condition_warnings = condition_warnings
        self.warning_categories = warning_categories

    def warnings_for(
        self,
        medication: CatalogMedication,
        medical_history: Sequence[MedicalCondition],
    ) -> tuple[str, ...]:
        if medication.category not in self.warning_categories:
            return ()

        warnings: list[str] = []
        for condition in medical_history:
            text = self.condition_warnings.get(condition)
            if text:
                warnings.append(f"{condition.label}: {text}")
        return tuple(warnings)
