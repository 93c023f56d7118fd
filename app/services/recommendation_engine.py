"""Symptom-to-medication recommendation engine.

Turns a reported symptom profile and medical history into a stored, immutable
recommendation session. The pipeline is strictly linear:

1) classify symptoms into medication categories
2) select catalog candidates (category match and symptom overlap)
3) partition candidates by contraindication
4) annotate included medications with condition warnings
5) derive dosage text from the duration policy
6) assemble the session and persist it through the session store

Evaluation is synchronous and holds no shared mutable state; the only I/O is
the catalog read and the session write. Collaborator failures propagate
unchanged and nothing is retried here.
"""

from __future__ import annotations

import logging
from datetime import datetime, timedelta, timezone
from enum import Enum
from typing import Callable, Optional, Sequence, TypeVar

from app.clinical.otc.vocabulary import Category, Duration, MedicalCondition, Symptom, humanize_symptom
from app.core.recommendation_config import RecommendationRules
from app.schemas.recommendation import RecommendationRequest
from app.services.contraindication_filter import ContraindicationFilter, ContraindicationMatcher
from app.services.dosage_policy import DosagePolicy
from app.services.recommendation_errors import NoMedicationFoundError, RecommendationValidationError
from app.services.recommendation_types import (
    CatalogMedication,
    MedicationCatalog,
    RecommendationEntry,
    RecommendationResult,
    RecommendationSession,
    SessionStore,
    SymptomProfile,
)
from app.services.session_ids import SessionIdGenerator, timestamp_session_id
from app.services.symptom_classifier import SymptomClassifier
from app.services.warning_annotator import WarningAnnotator

logger = logging.getLogger(__name__)

DEFAULT_RETENTION = timedelta(days=30)

E = TypeVar("E", bound=Enum)


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class RecommendationEngine:
    def __init__(
        self,
        catalog: MedicationCatalog,
        store: SessionStore,
        rules: Optional[RecommendationRules] = None,
        *,
        matcher: Optional[ContraindicationMatcher] = None,
        session_id_generator: SessionIdGenerator = timestamp_session_id,
        retention: timedelta = DEFAULT_RETENTION,
        clock: Callable[[], datetime] = _utcnow,
    ) -> None:
        self.catalog = catalog
        self.store = store
        self.rules = rules or RecommendationRules()
        self.classifier = SymptomClassifier(self.rules.symptom_categories)
        self.contraindication_filter = ContraindicationFilter(matcher)
        self.warning_annotator = WarningAnnotator(self.rules.condition_warnings, self.rules.warning_categories)
        self.dosage_policy = DosagePolicy(
            long_duration=self.rules.long_duration,
            consult_suffix=self.rules.consult_suffix,
        )
        self.session_id_generator = session_id_generator
        self.retention = retention
        self.clock = clock

    def recommend(self, payload: RecommendationRequest) -> RecommendationSession:
        profile = self.parse_request(payload)

        categories = self.classifier.classify(profile.primary_symptom, profile.secondary_symptoms)
        candidates = self.select_candidates(categories, profile.symptoms)
        triage = self.contraindication_filter.partition(candidates, profile.medical_history)

        recommended = tuple(self._build_entry(medication, profile) for medication in triage.included)
        result = RecommendationResult(
            primary_symptom=profile.primary_symptom,
            secondary_symptoms=profile.secondary_symptoms,
            duration=profile.duration,
            medical_history=profile.medical_history,
            recommended=recommended,
            excluded=triage.excluded,
            additional_recommendations=(
                self.rules.persistence_note if profile.duration == self.rules.long_duration else None
            ),
        )

        session = self._assemble_session(result, profile)
        stored_id = self.store.create(session)

        logger.info(
            "RECOMMENDATION_GENERATED: session_id=%s categories=%s candidates=%s recommended=%s excluded=%s",
            stored_id,
            ",".join(c.value for c in categories),
            len(candidates),
            len(result.recommended),
            len(result.excluded),
        )
        return session

    @staticmethod
    def parse_request(payload: RecommendationRequest) -> SymptomProfile:
        """Map a request onto the closed vocabularies, deduplicating in input order."""
        primary = _parse_term(Symptom, payload.primary_symptom, "primary symptom")
        secondary = _unique(_parse_term(Symptom, v, "secondary symptom") for v in payload.secondary_symptoms)
        duration = _parse_term(Duration, payload.duration, "duration")
        history = _unique(_parse_term(MedicalCondition, v, "medical condition") for v in payload.medical_history)

        return SymptomProfile(
            primary_symptom=primary,
            secondary_symptoms=secondary,
            duration=duration,
            medical_history=history,
            session_id=payload.session_id,
            owner_id=payload.owner_id,
        )

    def select_candidates(self, categories: Sequence[Category], symptoms: frozenset[str]) -> list[CatalogMedication]:
        """Catalog medications in the given categories that treat a reported symptom.

        Catalog order is kept as returned.
        """
        wanted = set(categories)
        found = self.catalog.find_by_categories_and_symptoms(categories, symptoms)
        candidates = [m for m in found if m.category in wanted and m.symptoms & symptoms]

        if len(candidates) != len(found):
            logger.warning(
                "Catalog returned %s medications outside the requested categories/symptoms",
                len(found) - len(candidates),
            )
        if not candidates:
            raise NoMedicationFoundError("No medications found for the provided symptoms")
        return candidates

    def _build_entry(self, medication: CatalogMedication, profile: SymptomProfile) -> RecommendationEntry:
        return RecommendationEntry(
            medication_id=medication.id,
            medication_name=medication.name,
            reason=self._inclusion_reason(profile),
            dosage_recommendation=self.dosage_policy.recommend(medication.adult_dosage, profile.duration),
            warnings=self.warning_annotator.warnings_for(medication, profile.medical_history),
        )

    @staticmethod
    def _inclusion_reason(profile: SymptomProfile) -> str:
        reason = f"Effective for {humanize_symptom(profile.primary_symptom.value)}"
        if profile.secondary_symptoms:
            reason += " and related symptoms"
        return reason

    def _assemble_session(self, result: RecommendationResult, profile: SymptomProfile) -> RecommendationSession:
        created_at = self.clock()
        return RecommendationSession(
            session_id=profile.session_id or self.session_id_generator(),
            result=result,
            created_at=created_at,
            expires_at=created_at + self.retention,
            owner_id=profile.owner_id,
        )


def _parse_term(vocabulary: type[E], value: str, label: str) -> E:
    if not value:
        raise RecommendationValidationError(f"{label} is required")
    try:
        return vocabulary(value)
    except ValueError as exc:
        raise RecommendationValidationError(f"Unknown {label}: {value}") from exc


def _unique(values) -> tuple:
    seen: list = []
    for value in values:
        if value not in seen:
            seen.append(value)
    return tuple(seen)
