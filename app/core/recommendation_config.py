"""Recommendation rules for the OTC recommendation engine.

Centralizes the symptom->category table, the condition->warning table and the
duration policy texts. The tables are read-only mappings handed to the engine
at construction time. Either table can be replaced per environment with a JSON
file named by ``RECOMMENDATION_RULES_PATH``::

    {
        "symptom_categories": {"headache": ["pain_fever"]},
        "condition_warnings": {"diabetes": "Some medications may affect blood sugar levels."},
        "warning_categories": ["pain_fever"]
    }
"""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass, field
from functools import lru_cache
from pathlib import Path
from types import MappingProxyType
from typing import Any, Mapping

from app.clinical.otc.vocabulary import Category, Duration, MedicalCondition, Symptom
from app.core.config import get_settings

logger = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# Default tables
# ---------------------------------------------------------------------------

DEFAULT_SYMPTOM_CATEGORIES: dict[Symptom, tuple[Category, ...]] = {
    Symptom.HEADACHE: (Category.PAIN_FEVER,),
    Symptom.FEVER: (Category.PAIN_FEVER,),
    Symptom.COUGH: (Category.COUGH_COLD,),
    Symptom.SORE_THROAT: (Category.COUGH_COLD, Category.PAIN_FEVER),
    Symptom.ALLERGIES: (Category.ALLERGY_SINUS,),
    Symptom.INDIGESTION: (Category.DIGESTIVE_HEALTH,),
    Symptom.DIARRHEA: (Category.DIGESTIVE_HEALTH,),
    Symptom.BODY_ACHE: (Category.PAIN_FEVER,),
    Symptom.NASAL_CONGESTION: (Category.ALLERGY_SINUS, Category.COUGH_COLD),
    Symptom.HEARTBURN: (Category.DIGESTIVE_HEALTH,),
    Symptom.NAUSEA: (Category.DIGESTIVE_HEALTH,),
}

DEFAULT_CONDITION_WARNINGS: dict[MedicalCondition, str] = {
    MedicalCondition.DIABETES: "Some medications may affect blood sugar levels.",
    MedicalCondition.HEART_DISEASE: "NSAIDs may increase risk of heart attack or stroke.",
    MedicalCondition.HIGH_BP: "Some decongestants may raise blood pressure.",
    MedicalCondition.LIVER_DISEASE: "Avoid acetaminophen. Dose adjustment may be needed.",
    MedicalCondition.KIDNEY_DISEASE: "Avoid NSAIDs. May worsen kidney function.",
    MedicalCondition.ASTHMA: "Some medications may trigger asthma attacks.",
    MedicalCondition.PREGNANT: "Consult doctor before taking any medication.",
}

CONSULT_SUFFIX = " (Consult doctor if symptoms persist beyond 7 days)"
PERSISTENCE_NOTE = (
    "Symptoms have persisted for more than 1 week. "
    "Please consult a healthcare professional for proper diagnosis."
)


@dataclass(frozen=True)
class RecommendationRules:
    """Immutable rule set injected into the recommendation engine."""

    symptom_categories: Mapping[Symptom, tuple[Category, ...]] = field(
        default_factory=lambda: MappingProxyType(dict(DEFAULT_SYMPTOM_CATEGORIES)),
    )
    condition_warnings: Mapping[MedicalCondition, str] = field(
        default_factory=lambda: MappingProxyType(dict(DEFAULT_CONDITION_WARNINGS)),
    )
    # Categories whose included medications receive condition warnings
    warning_categories: frozenset[Category] = frozenset({Category.PAIN_FEVER})
    long_duration: Duration = Duration.LONG
    consult_suffix: str = CONSULT_SUFFIX
    persistence_note: str = PERSISTENCE_NOTE

    @classmethod
    def from_mapping(cls, data: Mapping[str, Any]) -> RecommendationRules:
        """Build rules from plain JSON-style data, keeping defaults for absent keys."""
        overrides: dict[str, Any] = {}

        if "symptom_categories" in data:
            overrides["symptom_categories"] = MappingProxyType(
                {
                    Symptom(symptom): tuple(Category(c) for c in categories)
                    for symptom, categories in data["symptom_categories"].items()
                }
            )
        if "condition_warnings" in data:
            overrides["condition_warnings"] = MappingProxyType(
                {
                    MedicalCondition(condition): str(text)
                    for condition, text in data["condition_warnings"].items()
                }
            )
        if "warning_categories" in data:
            overrides["warning_categories"] = frozenset(Category(c) for c in data["warning_categories"])

        return cls(**overrides)


def load_recommendation_rules(path: str | None = None) -> RecommendationRules:
    if not path:
        return RecommendationRules()

    rules_path = Path(path)
    if not rules_path.exists():
        raise FileNotFoundError(f"Recommendation rules file not found: {rules_path}")

    with open(rules_path, encoding="utf-8") as f:
        data = json.load(f)

    rules = RecommendationRules.from_mapping(data)
    logger.info(
        "RECOMMENDATION_RULES_LOADED: path=%s symptoms=%s conditions=%s",
        rules_path.as_posix(),
        len(rules.symptom_categories),
        len(rules.condition_warnings),
    )
    return rules


@lru_cache
def get_recommendation_rules() -> RecommendationRules:
    return load_recommendation_rules(get_settings().recommendation_rules_path)
