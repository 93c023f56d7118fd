"""OTC recommendation FastAPI application.

Turns a patient-reported symptom profile and medical history into filtered,
annotated over-the-counter medication recommendations, and serves the
read-only medication catalog those recommendations come from.

Accounts, authentication, catalog ingestion and free-text search are provided
by other services and must not be added here.
"""

import logging

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from app.clinical.otc.router import router as medications_router
from app.core.config import get_settings
from app.routers import recommendations


def _configure_logging(level: str) -> None:
    logging.basicConfig(
        level=level.upper(),
        format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
    )


def create_app() -> FastAPI:
    settings = get_settings()
    _configure_logging(settings.log_level)

    app = FastAPI(
        title="OTC Recommendation Engine",
        version="0.1.0",
        description="Symptom-driven over-the-counter medication recommendations.",
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.include_router(medications_router, prefix="/medications", tags=["medications"])
    app.include_router(recommendations.router)

    @app.get("/health")
    def health_check() -> dict:
        return {"status": "healthy", "service": "otc_recommendation_engine", "version": app.version}

    return app


app = create_app()
