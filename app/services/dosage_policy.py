from __future__ import annotations

from dataclasses import dataclass

from app.clinical.otc.vocabulary import Duration
from app.core.recommendation_config import CONSULT_SUFFIX


@dataclass(frozen=True)
class DosagePolicy:
    long_duration: Duration = Duration.LONG
    consult_suffix: str = CONSULT_SUFFIX

    def recommend(self, adult_dosage: str, duration: Duration) -> str:
        if duration == self.long_duration:
            return f"{adult_dosage}{self.consult_suffix}"
        return adult_dosage
