from __future__ import annotations

from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field


class MedicationSource(BaseModel):
    name: str
    url: str


class MedicationSummary(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: UUID
    name: str
    brand_names: list[str]
    generic_name: str
    category: str
    sub_category: str
    symptoms: list[str]
    description: str
    dosage_adult: str


class MedicationDetail(MedicationSummary):
    dosage_children: str | None = None
    dosage_elderly: str | None = None
    max_daily_dose: str
    side_effects: list[str]
    warnings: list[str]
    contraindications: list[str]
    interactions: list[str]
    pregnancy_category: str
    storage_instructions: str
    sources: list[MedicationSource] = Field(default_factory=list)
    verified: bool


class CategorySummary(BaseModel):
    category: str
    display_name: str
    count: int
    sub_categories: list[str]


class CategoryMedicationsResponse(BaseModel):
    category: str
    display_name: str
    sub_category: str | None = None
    grouped: bool
    medications: list[MedicationSummary] | dict[str, list[MedicationSummary]]
