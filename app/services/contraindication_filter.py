"""Contraindication triage for candidate medications.

Every candidate lands in exactly one of the included/excluded lists. Whether a
history condition hits a medication's contraindication phrases is decided by a
``ContraindicationMatcher`` so the matching rule can be tightened without
touching the partition logic.
"""

from __future__ import annotations

import logging
from typing import Iterable, Protocol, Sequence

from app.clinical.otc.vocabulary import MedicalCondition, normalize_condition
from app.services.recommendation_errors import AllContraindicatedError
from app.services.recommendation_types import CatalogMedication, ExclusionEntry, TriageResult

logger = logging.getLogger(__name__)


class ContraindicationMatcher(Protocol):
    def matches(self, condition: MedicalCondition, contraindication_phrases: Sequence[str]) -> bool: ...


class SubstringContraindicationMatcher:
    """Matches when the normalized condition occurs inside any phrase, ignoring case.

    Favours recall: "kidney disease" matches "Chronic kidney disease" as well
    as "Kidney disease".
    """

    def matches(self, condition: MedicalCondition, contraindication_phrases: Sequence[str]) -> bool:
        needle = normalize_condition(condition.value)
        if not needle:
            return False
        return any(needle in (phrase or "").casefold() for phrase in contraindication_phrases)


class ContraindicationFilter:
    def __init__(self, matcher: ContraindicationMatcher | None = None) -> None:
        self.matcher = matcher or SubstringContraindicationMatcher()

    def partition(
        self,
        candidates: Iterable[CatalogMedication],
        medical_history: Sequence[MedicalCondition],
    ) -> TriageResult:
        included: list[CatalogMedication] = []
        excluded: list[ExclusionEntry] = []

        for medication in candidates:
            condition = self._first_match(medication, medical_history)
            if condition is None:
                included.append(medication)
                continue

            logger.info("MEDICATION_EXCLUDED: medication=%s condition=%s", medication.name, condition.value)
            excluded.append(
                ExclusionEntry(
                    medication_id=medication.id,
                    medication_name=medication.name,
                    reason=f"Contraindicated for {condition.label}",
                )
            )

        if not included:
            raise AllContraindicatedError(
                "All potential medications are contraindicated based on your medical history. "
                "Please consult a healthcare professional."
            )

        return TriageResult(included=tuple(included), excluded=tuple(excluded))

    def _first_match(
        self,
        medication: CatalogMedication,
        medical_history: Sequence[MedicalCondition],
    ) -> MedicalCondition | None:
        if not medication.contraindications:
            return None
        for condition in medical_history:
            if self.matcher.matches(condition, medication.contraindications):
                return condition
        return None
