"""Severity classification from free-text triage and risk descriptions.

The upstream model phrases urgency and risk as natural language.  This module
is the single place where that text is resolved into a bounded tier.  Rules
are case-insensitive substring matches evaluated in priority order; the first
matching rule wins and unmatched text falls through to the lowest tier.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import Enum

from sonicscribe.models import AnalysisReport
from sonicscribe.styles import RISK_STYLES, TRIAGE_STYLES, StyleToken

log = logging.getLogger(__name__)


class TriageTier(str, Enum):
    """Triage urgency, lowest to highest."""

    NORMAL = "normal"
    URGENT = "urgent"
    EMERGENCY = "emergency"

    @property
    def style(self) -> StyleToken:
        return TRIAGE_STYLES[self.value]


class RiskTier(str, Enum):
    """Risk level, lowest to highest."""

    LOW = "low"
    MODERATE = "moderate"
    HIGH = "high"

    @property
    def style(self) -> StyleToken:
        return RISK_STYLES[self.value]


@dataclass(frozen=True)
class RiskAssessment:
    """Risk tier plus the meter percentage shown alongside it."""

    tier: RiskTier
    percent: int

    @property
    def style(self) -> StyleToken:
        return self.tier.style


@dataclass(frozen=True)
class ReportClassification:
    """Both tiers for one report, computed once and shared by every projector."""

    triage: TriageTier
    risk: RiskAssessment


# Ordered: earlier rules win when text matches more than one.
TRIAGE_RULES: list[tuple[TriageTier, tuple[str, ...]]] = [
    (TriageTier.EMERGENCY, ("emergency", "critical")),
    (TriageTier.URGENT, ("urgent",)),
]
TRIAGE_DEFAULT = TriageTier.NORMAL

RISK_RULES: list[tuple[RiskAssessment, tuple[str, ...]]] = [
    (RiskAssessment(RiskTier.HIGH, 85), ("high",)),
    (RiskAssessment(RiskTier.MODERATE, 60), ("moderate", "medium")),
]
RISK_DEFAULT = RiskAssessment(RiskTier.LOW, 30)


def classify_triage(level_text: str) -> TriageTier:
    """Map a free-text triage level to a ``TriageTier``."""
    text = level_text.casefold()
    for tier, keywords in TRIAGE_RULES:
        if any(keyword in text for keyword in keywords):
            return tier
    if text.strip():
        log.debug("Triage level %r matched no rule; defaulting to %s", level_text, TRIAGE_DEFAULT.value)
    return TRIAGE_DEFAULT


def classify_risk(risk_text: str) -> RiskAssessment:
    """Map a free-text risk prediction to a ``RiskAssessment``."""
    text = risk_text.casefold()
    for assessment, keywords in RISK_RULES:
        if any(keyword in text for keyword in keywords):
            return assessment
    if text.strip():
        log.debug("Risk prediction matched no rule; defaulting to %s", RISK_DEFAULT.tier.value)
    return RISK_DEFAULT


def classify_report(report: AnalysisReport) -> ReportClassification:
    """Classify both severity indicators of *report*."""
    return ReportClassification(
        triage=classify_triage(report.triage.level),
        risk=classify_risk(report.risk_prediction),
    )
