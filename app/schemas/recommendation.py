from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel, Field, field_validator

from app.services.recommendation_types import RecommendationSession


def _vocabulary_key(value: object) -> str:
    return "_".join(str(value).strip().lower().split())


class RecommendationRequest(BaseModel):
    primary_symptom: str = Field(..., min_length=1, max_length=50)
    secondary_symptoms: list[str] = Field(default_factory=list, max_length=20)
    duration: str = Field(..., min_length=1, max_length=30)
    medical_history: list[str] = Field(default_factory=list, max_length=20)
    session_id: str | None = Field(default=None, max_length=128)
    owner_id: str | None = Field(default=None, max_length=128)

    @field_validator("primary_symptom", mode="before")
    @classmethod
    def _normalize_primary(cls, value: object) -> str:
        if value is None:
            raise ValueError("primary_symptom is required")
        cleaned = _vocabulary_key(value)
        if not cleaned:
            raise ValueError("primary_symptom must not be empty")
        return cleaned

    @field_validator("secondary_symptoms", "medical_history", mode="before")
    @classmethod
    def _normalize_terms(cls, value: object) -> list[str]:
        if value is None:
            return []
        if isinstance(value, str):
            value = [value]
        return [key for key in (_vocabulary_key(v) for v in value) if key]

    @field_validator("duration", mode="before")
    @classmethod
    def _normalize_duration(cls, value: object) -> str:
        if value is None:
            raise ValueError("duration is required")
        cleaned = " ".join(str(value).strip().lower().split())
        if not cleaned:
            raise ValueError("duration must not be empty")
        return cleaned

    @field_validator("session_id", "owner_id", mode="before")
    @classmethod
    def _strip_optional(cls, value: object) -> str | None:
        if value is None:
            return None
        cleaned = str(value).strip()
        return cleaned or None


class RecommendedMedicationOut(BaseModel):
    medication_id: str
    medication_name: str
    reason: str
    dosage_recommendation: str
    warnings: list[str]


class ExcludedMedicationOut(BaseModel):
    medication_id: str
    medication_name: str
    reason: str


class RequestEcho(BaseModel):
    primary_symptom: str
    secondary_symptoms: list[str]
    duration: str
    medical_history: list[str]


class RecommendationSummary(BaseModel):
    total_medications_found: int
    recommended_count: int
    excluded_count: int


class RecommendationSessionResponse(BaseModel):
    session_id: str
    owner_id: str | None = None
    created_at: datetime
    expires_at: datetime
    request: RequestEcho
    recommended: list[RecommendedMedicationOut]
    excluded: list[ExcludedMedicationOut]
    additional_recommendations: str | None = None
    summary: RecommendationSummary

    @classmethod
    def from_session(cls, session: RecommendationSession) -> RecommendationSessionResponse:
        result = session.result
        return cls(
            session_id=session.session_id,
            owner_id=session.owner_id,
            created_at=session.created_at,
            expires_at=session.expires_at,
            request=RequestEcho(
                primary_symptom=result.primary_symptom.value,
                secondary_symptoms=[s.value for s in result.secondary_symptoms],
                duration=result.duration.value,
                medical_history=[c.value for c in result.medical_history],
            ),
            recommended=[RecommendedMedicationOut(**entry.to_dict()) for entry in result.recommended],
            excluded=[ExcludedMedicationOut(**entry.to_dict()) for entry in result.excluded],
            additional_recommendations=result.additional_recommendations,
            summary=RecommendationSummary(
                total_medications_found=result.total_medications_found,
                recommended_count=len(result.recommended),
                excluded_count=len(result.excluded),
            ),
        )
