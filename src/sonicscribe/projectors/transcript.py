"""Transcript projector: the verbatim transcript plus its download filename."""

from __future__ import annotations

from dataclasses import dataclass

from sonicscribe.classification import RiskAssessment, TriageTier
from sonicscribe.models import AnalysisReport
from sonicscribe.projectors._common import hyphenate

TRANSCRIPT_CONTENT_TYPE = "text/plain"


@dataclass(frozen=True)
class TranscriptExport:
    """Transcript text exactly as received, ready for a ``text/plain`` download.

    The tiers travel with the export so a download surface can badge it with
    the same severity the other renderings show; they never alter ``text``.
    """

    text: str
    filename: str
    triage: TriageTier
    risk: RiskAssessment
    content_type: str = TRANSCRIPT_CONTENT_TYPE


def transcript_filename(patient_name: str) -> str:
    return f"transcript-{hyphenate(patient_name)}.txt"


def project_transcript(
    report: AnalysisReport,
    triage: TriageTier,
    risk: RiskAssessment,
) -> TranscriptExport:
    return TranscriptExport(
        text=report.transcript,
        filename=transcript_filename(report.patient.name),
        triage=triage,
        risk=risk,
    )
