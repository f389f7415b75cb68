"""Render projectors: one canonical report, three target shapes.

Each projector takes ``(report, triage_tier, risk_assessment)`` and never
re-derives severity from the report text.

Usage::

    from sonicscribe.classification import classify_report
    from sonicscribe.projectors import project_dashboard, project_document, project_transcript

    tiers = classify_report(report)
    view = project_dashboard(report, tiers.triage, tiers.risk)
    export = project_transcript(report, tiers.triage, tiers.risk)
    document = project_document(report, tiers.triage, tiers.risk, generated_at=now)
"""

from __future__ import annotations

from sonicscribe.projectors.dashboard import (
    DashboardSection,
    DashboardView,
    FieldEntry,
    FileHeader,
    ViewState,
    project_dashboard,
)
from sonicscribe.projectors.document import (
    AdmissionWarningBlock,
    Block,
    BulletListBlock,
    DisclaimerBlock,
    FooterBlock,
    HeaderBlock,
    HeadingBlock,
    KeyValueBlock,
    PrintDocument,
    TagListBlock,
    project_document,
)
from sonicscribe.projectors.transcript import TranscriptExport, project_transcript

__all__ = [
    "AdmissionWarningBlock",
    "Block",
    "BulletListBlock",
    "DashboardSection",
    "DashboardView",
    "DisclaimerBlock",
    "FieldEntry",
    "FileHeader",
    "FooterBlock",
    "HeaderBlock",
    "HeadingBlock",
    "KeyValueBlock",
    "PrintDocument",
    "TagListBlock",
    "TranscriptExport",
    "ViewState",
    "project_dashboard",
    "project_document",
    "project_transcript",
]
