"""Tests for the numeric risk-prediction result model."""

from __future__ import annotations

import pytest
from pydantic import ValidationError

from sonicscribe.classification import RiskTier, classify_risk
from sonicscribe.prediction import PredictionResult, PredictionSummary, score_band


class TestScoreBand:
    @pytest.mark.parametrize(
        "risk, band",
        [(0, "low"), (29.9, "low"), (30, "medium"), (69.9, "medium"), (70, "high"), (100, "high")],
    )
    def test_boundaries(self, risk: float, band: str) -> None:
        assert score_band(risk) == band


class TestPredictionResult:
    def test_band_property(self) -> None:
        assert PredictionResult(risk=42, decision="Admit for observation").band == "medium"

    @pytest.mark.parametrize(
        "decision, negative",
        [("No admission needed", True), ("NO", True), ("Admit", False), ("Readmission likely", False)],
    )
    def test_negative_decision(self, decision: str, negative: bool) -> None:
        assert PredictionResult(risk=50, decision=decision).is_negative is negative

    @pytest.mark.parametrize("risk", [-1, 100.5])
    def test_risk_out_of_range(self, risk: float) -> None:
        with pytest.raises(ValidationError):
            PredictionResult(risk=risk, decision="Admit")

    def test_summary(self) -> None:
        summary = PredictionSummary.from_result(PredictionResult(risk=80, decision="No"))
        assert summary.band == "high"
        assert summary.negative is True


class TestIndependentOfTextRisk:
    def test_text_classifier_ignores_numbers(self) -> None:
        # A score that bands "high" numerically still reads as low free text.
        assert score_band(90) == "high"
        assert classify_risk("90").tier is RiskTier.LOW
