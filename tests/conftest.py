import os

os.environ.setdefault("DATABASE_URL", "sqlite://")

from datetime import datetime, timedelta, timezone
from typing import Optional
from uuid import UUID

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import Session, sessionmaker
from sqlalchemy.pool import StaticPool

from app.clinical.otc.vocabulary import Category
from app.db.models import Base, Medication
from app.db.session import get_db
from app.main import app
from app.services.recommendation_engine import RecommendationEngine
from app.services.recommendation_errors import SessionConflictError
from app.services.recommendation_types import CatalogMedication, RecommendationSession

FIXED_NOW = datetime(2026, 10, 18, 12, 0, tzinfo=timezone.utc)

REFERENCE_MEDICATIONS = [
    {
        "id": UUID("00000000-0000-0000-0000-000000000001"),
        "name": "Ibuprofen",
        "brand_names": ["Advil", "Motrin"],
        "generic_name": "Ibuprofen",
        "category": "pain_fever",
        "sub_category": "NSAIDs",
        "symptoms": ["headache", "fever", "body_ache", "inflammation"],
        "description": "Nonsteroidal anti-inflammatory drug for pain, fever, and inflammation.",
        "dosage_adult": "200-400mg every 4-6 hours as needed",
        "dosage_children": "Consult pediatric dosage chart",
        "dosage_elderly": "Use lowest effective dose",
        "max_daily_dose": "1200mg",
        "side_effects": ["Upset stomach", "Heartburn", "Dizziness", "Nausea"],
        "warnings": ["Avoid if you have stomach ulcers", "Take with food to reduce stomach upset"],
        "contraindications": ["Kidney disease", "Stomach ulcers", "Bleeding disorders"],
        "interactions": ["Blood thinners", "Other NSAIDs", "ACE inhibitors"],
        "pregnancy_category": "C",
        "storage_instructions": "Store at room temperature away from moisture and heat",
        "sources": [{"name": "Drugs.com", "url": "https://www.drugs.com/ibuprofen.html"}],
        "verified": True,
    },
    {
        "id": UUID("00000000-0000-0000-0000-000000000002"),
        "name": "Acetaminophen",
        "brand_names": ["Tylenol"],
        "generic_name": "Acetaminophen",
        "category": "pain_fever",
        "sub_category": "Analgesics",
        "symptoms": ["headache", "fever", "body_ache"],
        "description": "Pain reliever and fever reducer.",
        "dosage_adult": "325-650mg every 4-6 hours",
        "dosage_children": "Consult pediatric dosage chart",
        "dosage_elderly": "Use lowest effective dose",
        "max_daily_dose": "3000mg",
        "side_effects": ["Rare at recommended doses", "Liver damage at high doses"],
        "warnings": ["Do not exceed daily limit", "Avoid with alcohol"],
        "contraindications": ["Liver disease", "Alcoholism"],
        "interactions": ["Warfarin", "Isoniazid"],
        "pregnancy_category": "B",
        "storage_instructions": "Store at room temperature away from moisture and heat",
        "sources": [{"name": "Drugs.com", "url": "https://www.drugs.com/acetaminophen.html"}],
        "verified": True,
    },
    {
        "id": UUID("00000000-0000-0000-0000-000000000003"),
        "name": "Loratadine",
        "brand_names": ["Claritin"],
        "generic_name": "Loratadine",
        "category": "allergy_sinus",
        "sub_category": "Antihistamines",
        "symptoms": ["allergies", "nasal_congestion", "runny_nose", "itchy_eyes"],
        "description": "Non-drowsy allergy relief for sneezing, runny nose, itchy eyes.",
        "dosage_adult": "10mg once daily",
        "dosage_children": "5mg once daily for ages 6+",
        "dosage_elderly": "10mg once daily",
        "max_daily_dose": "10mg",
        "side_effects": ["Headache", "Dry mouth", "Fatigue"],
        "warnings": ["May cause drowsiness in some people"],
        "contraindications": [],
        "interactions": ["Some antibiotics", "Antifungals"],
        "pregnancy_category": "B",
        "storage_instructions": "Store at room temperature away from light and moisture",
        "sources": [],
        "verified": True,
    },
    {
        "id": UUID("00000000-0000-0000-0000-000000000004"),
        "name": "Omeprazole",
        "brand_names": ["Prilosec"],
        "generic_name": "Omeprazole",
        "category": "digestive_health",
        "sub_category": "Proton Pump Inhibitors",
        "symptoms": ["heartburn", "indigestion", "acid_reflux"],
        "description": "Acid reducer for heartburn and acid reflux.",
        "dosage_adult": "20mg once daily before eating",
        "dosage_children": "Consult doctor",
        "dosage_elderly": "20mg once daily",
        "max_daily_dose": "40mg",
        "side_effects": ["Headache", "Diarrhea", "Nausea", "Abdominal pain"],
        "warnings": ["Do not use for more than 14 days continuously"],
        "contraindications": [],
        "interactions": ["Clopidogrel", "Ketoconazole"],
        "pregnancy_category": "C",
        "storage_instructions": "Store at room temperature away from moisture",
        "sources": [],
        "verified": True,
    },
    {
        "id": UUID("00000000-0000-0000-0000-000000000005"),
        "name": "Dextromethorphan",
        "brand_names": ["Robitussin", "Delsym"],
        "generic_name": "Dextromethorphan",
        "category": "cough_cold",
        "sub_category": "Cough Suppressants",
        "symptoms": ["cough"],
        "description": "Suppresses the urge to cough.",
        "dosage_adult": "10-20mg every 4 hours or 30mg every 6-8 hours",
        "dosage_children": "Consult pediatric dosage chart",
        "dosage_elderly": "Use lowest effective dose",
        "max_daily_dose": "120mg",
        "side_effects": ["Drowsiness", "Dizziness", "Nausea"],
        "warnings": ["Do not use with MAO inhibitors"],
        "contraindications": ["MAO inhibitor use"],
        "interactions": ["MAO inhibitors", "Antidepressants"],
        "pregnancy_category": "C",
        "storage_instructions": "Store at room temperature",
        "sources": [],
        "verified": True,
    },
]


def to_catalog_medication(data: dict) -> CatalogMedication:
    return CatalogMedication(
        id=str(data["id"]),
        name=data["name"],
        category=Category(data["category"]),
        symptoms=frozenset(data["symptoms"]),
        adult_dosage=data["dosage_adult"],
        contraindications=tuple(data["contraindications"]),
    )


class InMemoryCatalog:
    def __init__(self, medications: list[CatalogMedication]) -> None:
        self.medications = medications
        self.calls: list[tuple] = []

    def find_by_categories_and_symptoms(self, categories, symptoms) -> list[CatalogMedication]:
        self.calls.append((list(categories), set(symptoms)))
        return [m for m in self.medications if m.category in categories and m.symptoms & symptoms]


class InMemorySessionStore:
    def __init__(self) -> None:
        self.sessions: dict[str, RecommendationSession] = {}

    def create(self, session: RecommendationSession) -> str:
        if session.session_id in self.sessions:
            raise SessionConflictError(f"Session already exists: {session.session_id}")
        self.sessions[session.session_id] = session
        return session.session_id

    def read_by_session_id(self, session_id: str) -> Optional[RecommendationSession]:
        return self.sessions.get(session_id)

    def read_by_owner(self, owner_id: str, *, limit: int) -> list[RecommendationSession]:
        owned = [s for s in self.sessions.values() if s.owner_id == owner_id]
        return sorted(owned, key=lambda s: s.created_at, reverse=True)[:limit]

    def purge_expired(self, now: Optional[datetime] = None) -> int:
        now = now or FIXED_NOW
        expired = [sid for sid, s in self.sessions.items() if s.expires_at <= now]
        for sid in expired:
            del self.sessions[sid]
        return len(expired)


@pytest.fixture
def reference_catalog() -> list[CatalogMedication]:
    return [to_catalog_medication(data) for data in REFERENCE_MEDICATIONS]


@pytest.fixture
def catalog(reference_catalog) -> InMemoryCatalog:
    return InMemoryCatalog(reference_catalog)


@pytest.fixture
def store() -> InMemorySessionStore:
    return InMemorySessionStore()


@pytest.fixture
def engine(catalog, store) -> RecommendationEngine:
    counter = iter(range(1, 1000))
    return RecommendationEngine(
        catalog=catalog,
        store=store,
        session_id_generator=lambda: f"session_test_{next(counter)}",
        clock=lambda: FIXED_NOW,
    )


@pytest.fixture
def db() -> Session:
    sql_engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(sql_engine)
    session = sessionmaker(bind=sql_engine, expire_on_commit=False, autoflush=False)()
    try:
        yield session
    finally:
        session.close()
        Base.metadata.drop_all(sql_engine)
        sql_engine.dispose()


@pytest.fixture
def seeded_db(db: Session) -> Session:
    base = datetime(2026, 1, 1, tzinfo=timezone.utc)
    for offset, data in enumerate(REFERENCE_MEDICATIONS):
        created_at = base + timedelta(minutes=offset)
        db.add(Medication(**data, created_at=created_at, updated_at=created_at))
    db.commit()
    return db


@pytest.fixture
def client(seeded_db: Session):
    def _get_db():
        yield seeded_db

    app.dependency_overrides[get_db] = _get_db
    try:
        with TestClient(app) as test_client:
            yield test_client
    finally:
        app.dependency_overrides.clear()
