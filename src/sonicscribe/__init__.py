"""sonicscribe: normalize AI medical analyses and render them for review and export.

Public API::

    from sonicscribe import (
        AppSettings,
        AnalysisReport, parse, parse_upload_response, serialize,
        classify_report, classify_triage, classify_risk,
        project_dashboard, project_transcript, project_document,
        ExportCoordinator,
    )
"""

from __future__ import annotations

from sonicscribe.classification import (
    ReportClassification,
    RiskAssessment,
    RiskTier,
    TriageTier,
    classify_report,
    classify_risk,
    classify_triage,
)
from sonicscribe.core.config import AppSettings
from sonicscribe.exceptions import ExportError, MalformedReportError, SonicScribeError, UpstreamError
from sonicscribe.export import ExportCoordinator, ExportNotice
from sonicscribe.loader import load_report, parse, parse_upload_response, serialize
from sonicscribe.models import AnalysisReport, Patient, Recommendation, SourceFile, Triage
from sonicscribe.prediction import PredictionResult, score_band
from sonicscribe.projectors import (
    DashboardView,
    PrintDocument,
    TranscriptExport,
    ViewState,
    project_dashboard,
    project_document,
    project_transcript,
)

__all__ = [
    "AnalysisReport",
    "AppSettings",
    "DashboardView",
    "ExportCoordinator",
    "ExportError",
    "ExportNotice",
    "MalformedReportError",
    "Patient",
    "PredictionResult",
    "PrintDocument",
    "Recommendation",
    "ReportClassification",
    "RiskAssessment",
    "RiskTier",
    "SonicScribeError",
    "SourceFile",
    "TranscriptExport",
    "Triage",
    "TriageTier",
    "UpstreamError",
    "ViewState",
    "classify_report",
    "classify_risk",
    "classify_triage",
    "load_report",
    "parse",
    "parse_upload_response",
    "project_dashboard",
    "project_document",
    "project_transcript",
    "score_band",
    "serialize",
]
