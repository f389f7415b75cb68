"""Tests for triage and risk classification."""

from __future__ import annotations

import logging

import pytest

from sonicscribe.classification import (
    RiskAssessment,
    RiskTier,
    TriageTier,
    classify_report,
    classify_risk,
    classify_triage,
)
from sonicscribe.styles import RISK_STYLES, TRIAGE_STYLES


class TestClassifyTriage:
    @pytest.mark.parametrize(
        "text, expected",
        [
            ("Emergency", TriageTier.EMERGENCY),
            ("CRITICAL condition", TriageTier.EMERGENCY),
            ("URGENT - see specialist within 24h", TriageTier.URGENT),
            ("semi-urgent", TriageTier.URGENT),
            ("Routine", TriageTier.NORMAL),
            ("", TriageTier.NORMAL),
        ],
    )
    def test_levels(self, text: str, expected: TriageTier) -> None:
        assert classify_triage(text) is expected

    def test_emergency_wins_over_urgent(self) -> None:
        assert classify_triage("Emergency and urgent") is TriageTier.EMERGENCY
        assert classify_triage("urgent, possibly critical") is TriageTier.EMERGENCY

    def test_substring_match_has_no_negation(self) -> None:
        assert classify_triage("non-urgent") is TriageTier.URGENT

    def test_idempotent(self) -> None:
        text = "Urgent care recommended"
        assert classify_triage(text) is classify_triage(text)

    def test_unmatched_text_logged(self, caplog: pytest.LogCaptureFixture) -> None:
        caplog.set_level(logging.DEBUG, logger="sonicscribe.classification")
        assert classify_triage("Priority 2") is TriageTier.NORMAL
        assert "matched no rule" in caplog.text

    def test_style_tokens(self) -> None:
        assert TriageTier.EMERGENCY.style is TRIAGE_STYLES["emergency"]
        assert TriageTier.URGENT.style.key == "triage-urgent"
        assert TriageTier.NORMAL.style.key == "triage-normal"


class TestClassifyRisk:
    @pytest.mark.parametrize(
        "text, tier, percent",
        [
            ("High", RiskTier.HIGH, 85),
            ("Moderate risk", RiskTier.MODERATE, 60),
            ("medium", RiskTier.MODERATE, 60),
            ("Low", RiskTier.LOW, 30),
            ("", RiskTier.LOW, 30),
        ],
    )
    def test_levels(self, text: str, tier: RiskTier, percent: int) -> None:
        assert classify_risk(text) == RiskAssessment(tier, percent)

    def test_high_wins_over_moderate(self) -> None:
        result = classify_risk("High readmission risk, moderate comorbidities")
        assert result == RiskAssessment(RiskTier.HIGH, 85)

    def test_style_follows_tier(self) -> None:
        assert classify_risk("HIGH").style is RISK_STYLES["high"]
        assert classify_risk("unknown").style.key == "risk-low"


class TestClassifyReport:
    def test_sample_report(self, sample_report) -> None:
        tiers = classify_report(sample_report)
        assert tiers.triage is TriageTier.URGENT
        assert tiers.risk == RiskAssessment(RiskTier.HIGH, 85)

    def test_minimal_report(self, minimal_report) -> None:
        tiers = classify_report(minimal_report)
        assert tiers.triage is TriageTier.NORMAL
        assert tiers.risk.tier is RiskTier.LOW

    def test_report_text_untouched(self, sample_report) -> None:
        before = sample_report.triage.level
        classify_report(sample_report)
        assert sample_report.triage.level == before
