"""Risk-prediction result endpoint."""

from __future__ import annotations

from fastapi import APIRouter

from sonicscribe.prediction import PredictionResult, PredictionSummary

router = APIRouter(prefix="/risk-prediction", tags=["prediction"])


@router.post("/result", response_model=PredictionSummary)
async def prediction_result(result: PredictionResult) -> PredictionSummary:
    """Band a numeric prediction score and flag negative decisions."""
    return PredictionSummary.from_result(result)
