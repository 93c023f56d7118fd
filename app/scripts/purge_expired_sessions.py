"""Delete recommendation sessions past their retention window.

Meant to run on a schedule (cron, platform scheduler):

    python -m app.scripts.purge_expired_sessions
"""

from __future__ import annotations

import argparse
import logging
from datetime import datetime, timezone

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from app.db.session import SessionLocal
from app.repositories.recommendation_session_repository import RecommendationSessionRepository

logger = logging.getLogger(__name__)


def _configure_logging() -> None:
    logging.basicConfig(
        level=logging.INFO,
        format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
    )


def purge_expired_sessions(now: datetime | None = None) -> int:
    db: Session = SessionLocal()
    try:
        return RecommendationSessionRepository(db).purge_expired(now or datetime.now(timezone.utc))
    except SQLAlchemyError:
        db.rollback()
        logger.exception("Purging expired recommendation sessions failed")
        raise
    finally:
        db.close()


def main() -> None:
    parser = argparse.ArgumentParser(description="Delete expired recommendation sessions")
    parser.add_argument(
        "--as-of",
        default=None,
        help="ISO-8601 timestamp to treat as now (defaults to the current UTC time)",
    )
    args = parser.parse_args()

    _configure_logging()
    now = datetime.fromisoformat(args.as_of) if args.as_of else None
    if now is not None and now.tzinfo is None:
        now = now.replace(tzinfo=timezone.utc)
    purge_expired_sessions(now)


if __name__ == "__main__":
    main()
