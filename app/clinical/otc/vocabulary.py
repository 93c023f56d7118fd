"""Closed vocabularies shared by the OTC catalog and the recommendation engine.

Values are the wire values used in requests, catalog rows and stored sessions.
"""

from __future__ import annotations

from enum import Enum


class Symptom(str, Enum):
    HEADACHE = "headache"
    FEVER = "fever"
    COUGH = "cough"
    SORE_THROAT = "sore_throat"
    ALLERGIES = "allergies"
    INDIGESTION = "indigestion"
    DIARRHEA = "diarrhea"
    BODY_ACHE = "body_ache"
    NASAL_CONGESTION = "nasal_congestion"
    HEARTBURN = "heartburn"
    NAUSEA = "nausea"
    # Catalog-only symptoms: listed on medications, not mapped to categories
    INFLAMMATION = "inflammation"
    RUNNY_NOSE = "runny_nose"
    ITCHY_EYES = "itchy_eyes"
    ACID_REFLUX = "acid_reflux"


class Category(str, Enum):
    PAIN_FEVER = "pain_fever"
    ALLERGY_SINUS = "allergy_sinus"
    DIGESTIVE_HEALTH = "digestive_health"
    COUGH_COLD = "cough_cold"
    FIRST_AID = "first_aid"
    SKIN_CARE = "skin_care"
    EYE_CARE = "eye_care"
    VITAMINS_SUPPLEMENTS = "vitamins_supplements"

    @property
    def display_name(self) -> str:
        return CATEGORY_DISPLAY_NAMES[self]


CATEGORY_DISPLAY_NAMES: dict[Category, str] = {
    Category.PAIN_FEVER: "Pain & Fever Relief",
    Category.ALLERGY_SINUS: "Allergy & Sinus",
    Category.DIGESTIVE_HEALTH: "Digestive Health",
    Category.COUGH_COLD: "Cough & Cold",
    Category.FIRST_AID: "First Aid",
    Category.SKIN_CARE: "Skin Care",
    Category.EYE_CARE: "Eye Care",
    Category.VITAMINS_SUPPLEMENTS: "Vitamins & Supplements",
}


class MedicalCondition(str, Enum):
    DIABETES = "diabetes"
    HEART_DISEASE = "heart_disease"
    HIGH_BP = "high_bp"
    LIVER_DISEASE = "liver_disease"
    KIDNEY_DISEASE = "kidney_disease"
    ASTHMA = "asthma"
    PREGNANT = "pregnant"
    STOMACH_ULCERS = "stomach_ulcers"
    BLEEDING_DISORDERS = "bleeding_disorders"
    ALCOHOLISM = "alcoholism"
    MAO_INHIBITOR_USE = "mao_inhibitor_use"

    @property
    def label(self) -> str:
        """Free-text form used in reasons, warnings and phrase matching."""
        return normalize_condition(self.value)


class Duration(str, Enum):
    SHORT = "1-3 days"
    MEDIUM = "3-7 days"
    LONG = "more than 1 week"


def normalize_condition(value: str) -> str:
    return value.replace("_", " ").strip().casefold()


def humanize_symptom(value: str) -> str:
    return value.replace("_", " ")
