"""Numeric hospitalization-risk result from the structured prediction model.

This is a separate collaborator from the free-text analysis: it returns a
0-100 score and a decision string.  Its banding is independent of
``classification.classify_risk`` and the two are never mixed.
"""

from __future__ import annotations

from typing import Literal

from pydantic import BaseModel, Field

ScoreBand = Literal["low", "medium", "high"]

LOW_BAND_CEILING = 30
MEDIUM_BAND_CEILING = 70


def score_band(risk: float) -> ScoreBand:
    """``< 30`` low, ``< 70`` medium, otherwise high."""
    if risk < LOW_BAND_CEILING:
        return "low"
    if risk < MEDIUM_BAND_CEILING:
        return "medium"
    return "high"


class PredictionResult(BaseModel):
    """Response of the risk-prediction collaborator."""

    risk: float = Field(ge=0, le=100)
    decision: str

    @property
    def band(self) -> ScoreBand:
        return score_band(self.risk)

    @property
    def is_negative(self) -> bool:
        """True when the decision reads as a "no" (e.g. "No admission needed")."""
        return "no" in self.decision.casefold()


class PredictionSummary(BaseModel):
    """API rendering of a ``PredictionResult``."""

    risk: float
    decision: str
    band: ScoreBand
    negative: bool

    @classmethod
    def from_result(cls, result: PredictionResult) -> PredictionSummary:
        return cls(
            risk=result.risk,
            decision=result.decision,
            band=result.band,
            negative=result.is_negative,
        )
