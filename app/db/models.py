from app.db.base import Base

# Import all models here
from app.models.medication import Medication
from app.models.recommendation_session import RecommendationSessionRecord

__all__ = ["Base", "Medication", "RecommendationSessionRecord"]
