"""Domain records and collaborator contracts for the recommendation engine.

Every record here is frozen: a stored session is never mutated, and a new
computation produces a new session.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Any, Optional, Protocol, Sequence

from app.clinical.otc.vocabulary import Category, Duration, MedicalCondition, Symptom


@dataclass(frozen=True)
class CatalogMedication:
    """The slice of a catalog medication the engine reads."""

    id: str
    name: str
    category: Category
    symptoms: frozenset[str]
    adult_dosage: str
    contraindications: tuple[str, ...] = ()


@dataclass(frozen=True)
class SymptomProfile:
    """A validated recommendation request."""

    primary_symptom: Symptom
    secondary_symptoms: tuple[Symptom, ...]
    duration: Duration
    medical_history: tuple[MedicalCondition, ...]
    session_id: Optional[str] = None
    owner_id: Optional[str] = None

    @property
    def symptoms(self) -> frozenset[str]:
        return frozenset(s.value for s in (self.primary_symptom, *self.secondary_symptoms))


@dataclass(frozen=True)
class RecommendationEntry:
    medication_id: str
    medication_name: str
    reason: str
    dosage_recommendation: str
    warnings: tuple[str, ...] = ()

    def to_dict(self) -> dict[str, Any]:
        return {
            "medication_id": self.medication_id,
            "medication_name": self.medication_name,
            "reason": self.reason,
            "dosage_recommendation": self.dosage_recommendation,
            "warnings": list(self.warnings),
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> RecommendationEntry:
        return cls(
            medication_id=str(data["medication_id"]),
            medication_name=data.get("medication_name") or "",
            reason=data["reason"],
            dosage_recommendation=data["dosage_recommendation"],
            warnings=tuple(data.get("warnings") or ()),
        )


@dataclass(frozen=True)
class ExclusionEntry:
    medication_id: str
    medication_name: str
    reason: str

    def to_dict(self) -> dict[str, Any]:
        return {
            "medication_id": self.medication_id,
            "medication_name": self.medication_name,
            "reason": self.reason,
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> ExclusionEntry:
        return cls(
            medication_id=str(data["medication_id"]),
            medication_name=data.get("medication_name") or "",
            reason=data["reason"],
        )


@dataclass(frozen=True)
class RecommendationResult:
    primary_symptom: Symptom
    secondary_symptoms: tuple[Symptom, ...]
    duration: Duration
    medical_history: tuple[MedicalCondition, ...]
    recommended: tuple[RecommendationEntry, ...] = ()
    excluded: tuple[ExclusionEntry, ...] = ()
    additional_recommendations: Optional[str] = None

    @property
    def total_medications_found(self) -> int:
        return len(self.recommended) + len(self.excluded)


@dataclass(frozen=True)
class RecommendationSession:
    session_id: str
    result: RecommendationResult
    created_at: datetime
    expires_at: datetime
    owner_id: Optional[str] = None


@dataclass(frozen=True)
class TriageResult:
    """Contraindication partition of the candidate list."""

    included: tuple[CatalogMedication, ...] = ()
    excluded: tuple[ExclusionEntry, ...] = ()


class MedicationCatalog(Protocol):
    def find_by_categories_and_symptoms(
        self,
        categories: Sequence[Category],
        symptoms: frozenset[str],
    ) -> list[CatalogMedication]: ...


class SessionStore(Protocol):
    def create(self, session: RecommendationSession) -> str: ...

    def read_by_session_id(self, session_id: str) -> Optional[RecommendationSession]: ...

    def read_by_owner(self, owner_id: str, *, limit: int) -> list[RecommendationSession]: ...

    def purge_expired(self, now: Optional[datetime] = None) -> int: ...
