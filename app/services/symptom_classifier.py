from __future__ import annotations

from typing import Iterable, Mapping

from app.clinical.otc.vocabulary import Category, Symptom
from app.services.recommendation_errors import NoCategoryFoundError


class SymptomClassifier:
    """Maps reported symptoms to medication categories via a fixed table."""

    def __init__(self, symptom_categories: Mapping[Symptom, tuple[Category, ...]]) -> None:
        self.symptom_categories = symptom_categories

    def classify(self, primary: Symptom, secondary: Iterable[Symptom] = ()) -> list[Category]:
        """Return categories for the primary symptom, then unseen ones from secondaries.

        Order is first-seen; duplicates from overlapping symptoms are dropped.
        """
        primary_categories = self.symptom_categories.get(primary)
        if not primary_categories:
            raise NoCategoryFoundError(f"No medication categories found for symptom: {primary.value}")

        categories: list[Category] = []
        for category in primary_categories:
            if category not in categories:
                categories.append(category)

        for symptom in secondary:
            for category in self.symptom_categories.get(symptom, ()):
                if category not in categories:
                    categories.append(category)

        return categories
