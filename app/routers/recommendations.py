"""Recommendation router.

Runs the recommendation engine for a reported symptom profile and serves
stored sessions by id or by owner. Authentication lives in front of this
service; ``owner_id`` arrives already resolved (absent for anonymous users).
"""

from __future__ import annotations

import logging
from datetime import timedelta

from fastapi import APIRouter, Depends, HTTPException, Query, status
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from app.core.config import Settings, get_settings
from app.core.recommendation_config import RecommendationRules, get_recommendation_rules
from app.db.session import get_db
from app.repositories.medication_repository import MedicationCatalogRepository
from app.repositories.recommendation_session_repository import RecommendationSessionRepository
from app.schemas.recommendation import RecommendationRequest, RecommendationSessionResponse
from app.services.recommendation_engine import RecommendationEngine
from app.services.recommendation_errors import (
    NoRecommendationError,
    RecommendationValidationError,
    SessionConflictError,
)
from app.services.session_ids import get_session_id_generator

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/recommendations", tags=["recommendations"])


def get_recommendation_engine(
    db: Session = Depends(get_db),
    settings: Settings = Depends(get_settings),
    rules: RecommendationRules = Depends(get_recommendation_rules),
) -> RecommendationEngine:
    return RecommendationEngine(
        catalog=MedicationCatalogRepository(db),
        store=RecommendationSessionRepository(db),
        rules=rules,
        session_id_generator=get_session_id_generator(settings.session_id_strategy),
        retention=timedelta(days=settings.session_retention_days),
    )


@router.post("", response_model=RecommendationSessionResponse, status_code=status.HTTP_201_CREATED)
def create_recommendation(
    payload: RecommendationRequest,
    engine: RecommendationEngine = Depends(get_recommendation_engine),
    db: Session = Depends(get_db),
) -> RecommendationSessionResponse:
    try:
        session = engine.recommend(payload)
    except RecommendationValidationError as exc:
        raise HTTPException(status_code=status.HTTP_422_UNPROCESSABLE_ENTITY, detail=str(exc)) from exc
    except NoRecommendationError as exc:
        logger.warning("No recommendation: code=%s primary_symptom=%s", exc.code, payload.primary_symptom)
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail={"code": exc.code, "message": str(exc)},
        ) from exc
    except SessionConflictError as exc:
        raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail=str(exc)) from exc
    except SQLAlchemyError as exc:
        db.rollback()
        logger.exception("Failed to generate recommendation")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="failed to generate recommendation",
        ) from exc

    return RecommendationSessionResponse.from_session(session)


@router.get("/session/{session_id}", response_model=RecommendationSessionResponse)
def get_recommendation_by_session(session_id: str, db: Session = Depends(get_db)) -> RecommendationSessionResponse:
    try:
        session = RecommendationSessionRepository(db).read_by_session_id(session_id.strip())
    except SQLAlchemyError as exc:
        logger.exception("Failed to read recommendation session")
        raise HTTPException(status_code=500, detail="failed to read recommendation") from exc

    if session is None:
        raise HTTPException(status_code=404, detail="Recommendation not found")
    return RecommendationSessionResponse.from_session(session)


@router.get("/history", response_model=list[RecommendationSessionResponse])
def get_recommendation_history(
    owner_id: str = Query(..., min_length=1, max_length=128),
    limit: int | None = Query(default=None, ge=1, le=100),
    settings: Settings = Depends(get_settings),
    db: Session = Depends(get_db),
) -> list[RecommendationSessionResponse]:
    owner = owner_id.strip()
    if not owner:
        raise HTTPException(status_code=400, detail="owner_id must not be empty")

    try:
        sessions = RecommendationSessionRepository(db).read_by_owner(owner, limit=limit or settings.history_limit)
    except SQLAlchemyError as exc:
        logger.exception("Failed to read recommendation history")
        raise HTTPException(status_code=500, detail="failed to read recommendation history") from exc

    return [RecommendationSessionResponse.from_session(s) for s in sessions]
