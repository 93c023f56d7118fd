from __future__ import annotations

import logging
from datetime import datetime, timezone
from typing import Optional

from sqlalchemy import delete, select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from app.clinical.otc.vocabulary import Duration, MedicalCondition, Symptom
from app.models.recommendation_session import RecommendationSessionRecord
from app.services.recommendation_errors import SessionConflictError
from app.services.recommendation_types import (
    ExclusionEntry,
    RecommendationEntry,
    RecommendationResult,
    RecommendationSession,
)

logger = logging.getLogger(__name__)


def _as_utc(value: datetime) -> datetime:
    # SQLite hands back naive datetimes; everything stored here is UTC.
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)


class RecommendationSessionRepository:
    """Write-once store for recommendation sessions.

    Expired sessions are never returned; ``purge_expired`` deletes them.
    """

    def __init__(self, db: Session) -> None:
        self.db = db

    def create(self, session: RecommendationSession) -> str:
        if self._exists(session.session_id):
            raise SessionConflictError(f"Session already exists: {session.session_id}")

        result = session.result
        row = RecommendationSessionRecord(
            session_id=session.session_id,
            owner_id=session.owner_id,
            primary_symptom=result.primary_symptom.value,
            secondary_symptoms=[s.value for s in result.secondary_symptoms],
            duration=result.duration.value,
            medical_history=[c.value for c in result.medical_history],
            recommended=[entry.to_dict() for entry in result.recommended],
            excluded=[entry.to_dict() for entry in result.excluded],
            additional_recommendations=result.additional_recommendations,
            created_at=session.created_at,
            expires_at=session.expires_at,
        )
        self.db.add(row)
        try:
            self.db.commit()
        except IntegrityError as exc:
            self.db.rollback()
            raise SessionConflictError(f"Session already exists: {session.session_id}") from exc
        return row.session_id

    def read_by_session_id(self, session_id: str, *, now: Optional[datetime] = None) -> Optional[RecommendationSession]:
        stmt = select(RecommendationSessionRecord).where(
            RecommendationSessionRecord.session_id == session_id,
            RecommendationSessionRecord.expires_at > (now or datetime.now(timezone.utc)),
        )
        row = self.db.execute(stmt).scalar_one_or_none()
        return self.to_session(row) if row is not None else None

    def read_by_owner(
        self,
        owner_id: str,
        *,
        limit: int = 20,
        now: Optional[datetime] = None,
    ) -> list[RecommendationSession]:
        stmt = (
            select(RecommendationSessionRecord)
            .where(
                RecommendationSessionRecord.owner_id == owner_id,
                RecommendationSessionRecord.expires_at > (now or datetime.now(timezone.utc)),
            )
            .order_by(RecommendationSessionRecord.created_at.desc(), RecommendationSessionRecord.id.desc())
            .limit(limit)
        )
        rows = self.db.execute(stmt).scalars().all()
        return [self.to_session(row) for row in rows]

    def purge_expired(self, now: Optional[datetime] = None) -> int:
        stmt = delete(RecommendationSessionRecord).where(
            RecommendationSessionRecord.expires_at <= (now or datetime.now(timezone.utc))
        )
        deleted = self.db.execute(stmt).rowcount or 0
        self.db.commit()
        logger.info("EXPIRED_SESSIONS_PURGED: deleted=%s", deleted)
        return deleted

    def _exists(self, session_id: str) -> bool:
        stmt = select(RecommendationSessionRecord.id).where(RecommendationSessionRecord.session_id == session_id).limit(1)
        return self.db.execute(stmt).scalar_one_or_none() is not None

    @staticmethod
    def to_session(row: RecommendationSessionRecord) -> RecommendationSession:
        return RecommendationSession(
            session_id=row.session_id,
            owner_id=row.owner_id,
            created_at=_as_utc(row.created_at),
            expires_at=_as_utc(row.expires_at),
            result=RecommendationResult(
                primary_symptom=Symptom(row.primary_symptom),
                secondary_symptoms=tuple(Symptom(s) for s in row.secondary_symptoms or ()),
                duration=Duration(row.duration),
                medical_history=tuple(MedicalCondition(c) for c in row.medical_history or ()),
                recommended=tuple(RecommendationEntry.from_dict(d) for d in row.recommended or ()),
                excluded=tuple(ExclusionEntry.from_dict(d) for d in row.excluded or ()),
                additional_recommendations=row.additional_recommendations,
            ),
        )
