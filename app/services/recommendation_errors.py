from __future__ import annotations


class RecommendationError(Exception):
    code = "recommendation_error"


class RecommendationValidationError(RecommendationError, ValueError):
    code = "validation_error"


class NoRecommendationError(RecommendationError, LookupError):
    """A deterministic "no result" outcome, not a system failure."""

    code = "no_recommendation"


class NoCategoryFoundError(NoRecommendationError):
    code = "no_category_found"


class NoMedicationFoundError(NoRecommendationError):
    code = "no_medication_found"


class AllContraindicatedError(NoRecommendationError):
    code = "all_contraindicated"


class SessionConflictError(RecommendationError):
    code = "session_conflict"
