import pytest

from app.clinical.otc.vocabulary import Category, Symptom
from app.core.recommendation_config import RecommendationRules
from app.services.recommendation_errors import NoCategoryFoundError
from app.services.symptom_classifier import SymptomClassifier


@pytest.fixture
def classifier() -> SymptomClassifier:
    return SymptomClassifier(RecommendationRules().symptom_categories)


def test_primary_symptom_seeds_categories(classifier):
    assert classifier.classify(Symptom.HEADACHE) == [Category.PAIN_FEVER]


def test_overlapping_symptoms_are_collapsed(classifier):
    categories = classifier.classify(Symptom.HEADACHE, [Symptom.FEVER, Symptom.BODY_ACHE])
    assert categories == [Category.PAIN_FEVER]


def test_first_seen_order_across_primary_and_secondary(classifier):
    categories = classifier.classify(
        Symptom.NASAL_CONGESTION,
        [Symptom.SORE_THROAT, Symptom.HEARTBURN],
    )
    assert categories == [
        Category.ALLERGY_SINUS,
        Category.COUGH_COLD,
        Category.PAIN_FEVER,
        Category.DIGESTIVE_HEALTH,
    ]
    assert len(categories) == len(set(categories))


def test_secondary_symptom_without_mapping_adds_nothing(classifier):
    assert classifier.classify(Symptom.COUGH, [Symptom.ITCHY_EYES]) == [Category.COUGH_COLD]


def test_unmapped_primary_symptom_raises(classifier):
    with pytest.raises(NoCategoryFoundError):
        classifier.classify(Symptom.ACID_REFLUX, [Symptom.HEARTBURN])


def test_classifier_uses_injected_table():
    classifier = SymptomClassifier({Symptom.ACID_REFLUX: (Category.DIGESTIVE_HEALTH,)})
    assert classifier.classify(Symptom.ACID_REFLUX) == [Category.DIGESTIVE_HEALTH]
    with pytest.raises(NoCategoryFoundError):
        classifier.classify(Symptom.HEADACHE)
