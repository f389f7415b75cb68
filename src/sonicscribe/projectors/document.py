"""Document projector: an ordered list of typed blocks for print and PDF capture.

Block order is fixed::

    header, patient_info, medical_history?, symptoms?, triage, risk,
    possible_diseases?, recommendations, source_file, disclaimer, footer

Sections marked ``?`` are omitted entirely when their backing list is empty.
Every block records the section it belongs to, so renderers (HTML, PDF) can
group blocks without re-deriving anything from the report.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import ClassVar, Optional

from sonicscribe.classification import RiskAssessment, TriageTier
from sonicscribe.core.config import DEFAULT_APP_NAME
from sonicscribe.models import AnalysisReport
from sonicscribe.projectors._common import DEFAULT_DATE_FORMAT, format_timestamp, hyphenate
from sonicscribe.styles import (
    ADMISSION_STYLE,
    ADMISSION_WARNING_TEXT,
    DISCLAIMER_TEXT,
    DISCLAIMER_TITLE,
    REPORT_TITLE,
    SECTION_TITLES,
    StyleToken,
)

DOCUMENT_SECTION_ORDER: tuple[str, ...] = (
    "header",
    "patient_info",
    "medical_history",
    "symptoms",
    "triage",
    "risk",
    "possible_diseases",
    "recommendations",
    "source_file",
    "disclaimer",
    "footer",
)


# ── Block types ──────────────────────────────────────────────────────


@dataclass(frozen=True)
class Block:
    kind: ClassVar[str] = "block"

    section: str


@dataclass(frozen=True)
class HeaderBlock(Block):
    kind: ClassVar[str] = "header"

    app_name: str
    title: str
    generated_on: str


@dataclass(frozen=True)
class HeadingBlock(Block):
    kind: ClassVar[str] = "heading"

    text: str


@dataclass(frozen=True)
class KeyValueBlock(Block):
    kind: ClassVar[str] = "key_value"

    label: str
    value: str
    style: Optional[StyleToken] = None
    meter: Optional[int] = None


@dataclass(frozen=True)
class BulletListBlock(Block):
    kind: ClassVar[str] = "bullet_list"

    items: tuple[str, ...]
    label: str = ""
    columns: int = 1


@dataclass(frozen=True)
class TagListBlock(Block):
    kind: ClassVar[str] = "tag_list"

    items: tuple[str, ...]


@dataclass(frozen=True)
class AdmissionWarningBlock(Block):
    kind: ClassVar[str] = "admission_warning"

    text: str
    style: StyleToken = ADMISSION_STYLE


@dataclass(frozen=True)
class DisclaimerBlock(Block):
    kind: ClassVar[str] = "disclaimer"

    title: str
    text: str


@dataclass(frozen=True)
class FooterBlock(Block):
    kind: ClassVar[str] = "footer"

    lines: tuple[str, ...]


@dataclass(frozen=True)
class PrintDocument:
    """A static, print-ready projection of one report."""

    title: str
    app_name: str
    filename: str
    blocks: tuple[Block, ...]
    triage: TriageTier
    risk: RiskAssessment

    @property
    def section_keys(self) -> tuple[str, ...]:
        """Sections present in the document, in block order."""
        seen: list[str] = []
        for block in self.blocks:
            if block.section not in seen:
                seen.append(block.section)
        return tuple(seen)

    def blocks_for(self, section: str) -> tuple[Block, ...]:
        return tuple(block for block in self.blocks if block.section == section)


def pdf_filename(app_name: str, patient_name: str) -> str:
    """``<AppName>-Medical-Report-<patient-name-with-hyphens>.pdf``."""
    return f"{hyphenate(app_name)}-Medical-Report-{hyphenate(patient_name)}.pdf"


# ── Projector ────────────────────────────────────────────────────────


def project_document(
    report: AnalysisReport,
    triage: TriageTier,
    risk: RiskAssessment,
    *,
    generated_at: datetime,
    app_name: str = DEFAULT_APP_NAME,
    date_format: str = DEFAULT_DATE_FORMAT,
) -> PrintDocument:
    """Project *report* into print blocks.

    *generated_at* is passed in rather than read from the clock so the same
    inputs always produce the same document.
    """
    generated_on = format_timestamp(generated_at, date_format)
    blocks: list[Block] = [
        HeaderBlock("header", app_name=app_name, title=REPORT_TITLE, generated_on=generated_on),
    ]

    blocks.extend(_patient_info(report))
    if report.medical_history:
        blocks.append(HeadingBlock("medical_history", SECTION_TITLES["medical_history"]))
        blocks.append(BulletListBlock("medical_history", items=report.medical_history))
    if report.symptoms:
        blocks.append(HeadingBlock("symptoms", SECTION_TITLES["symptoms"]))
        blocks.append(BulletListBlock("symptoms", items=report.symptoms, columns=2))
    blocks.extend(_triage(report, triage))
    blocks.extend(_risk(report, risk))
    if report.possible_diseases:
        blocks.append(HeadingBlock("possible_diseases", SECTION_TITLES["possible_diseases"]))
        blocks.append(TagListBlock("possible_diseases", items=report.possible_diseases))
    blocks.extend(_recommendations(report))
    blocks.extend(_source_file(report, date_format))

    disclaimer = DISCLAIMER_TEXT
    if report.triage.advice:
        disclaimer = f"{disclaimer} {report.triage.advice}"
    blocks.append(DisclaimerBlock("disclaimer", title=DISCLAIMER_TITLE, text=disclaimer))
    blocks.append(
        FooterBlock(
            "footer",
            lines=(
                f"Report generated by {app_name} Medical Analysis System",
                f"Generated on {generated_on}",
            ),
        )
    )

    return PrintDocument(
        title=f"{REPORT_TITLE} - {report.patient.name}",
        app_name=app_name,
        filename=pdf_filename(app_name, report.patient.name),
        blocks=tuple(blocks),
        triage=triage,
        risk=risk,
    )


def _patient_info(report: AnalysisReport) -> list[Block]:
    return [
        HeadingBlock("patient_info", SECTION_TITLES["patient_info"]),
        KeyValueBlock("patient_info", label="Patient Name", value=report.patient.name),
        KeyValueBlock("patient_info", label="Age & Gender", value=report.patient.age_gender),
    ]


def _triage(report: AnalysisReport, triage: TriageTier) -> list[Block]:
    blocks: list[Block] = [
        HeadingBlock("triage", SECTION_TITLES["triage"]),
        KeyValueBlock("triage", label="Priority Level", value=report.triage.level, style=triage.style),
        KeyValueBlock("triage", label="Recommended Specialist", value=report.triage.specialist_to_consult),
    ]
    if report.triage.probable_conditions:
        blocks.append(
            BulletListBlock(
                "triage",
                items=report.triage.probable_conditions,
                label="Probable Conditions",
            )
        )
    return blocks


def _risk(report: AnalysisReport, risk: RiskAssessment) -> list[Block]:
    # Always rendered, whatever else is empty.
    return [
        HeadingBlock("risk", SECTION_TITLES["risk"]),
        KeyValueBlock(
            "risk",
            label="Risk Prediction",
            value=report.risk_prediction,
            style=risk.style,
            meter=risk.percent,
        ),
    ]


def _recommendations(report: AnalysisReport) -> list[Block]:
    blocks: list[Block] = [HeadingBlock("recommendations", SECTION_TITLES["recommendations"])]
    if report.recommendation.should_be_admitted:
        blocks.append(AdmissionWarningBlock("recommendations", text=ADMISSION_WARNING_TEXT))
    blocks.append(KeyValueBlock("recommendations", label="Next Steps", value=report.recommendation.next_steps))
    if report.notes:
        blocks.append(KeyValueBlock("recommendations", label="Clinical Notes", value=report.notes))
    return blocks


def _source_file(report: AnalysisReport, date_format: str) -> list[Block]:
    source = report.source_file
    blocks: list[Block] = [
        HeadingBlock("source_file", SECTION_TITLES["source_file"]),
        KeyValueBlock("source_file", label="Audio File", value=source.original_name),
        KeyValueBlock(
            "source_file",
            label="Upload Date",
            value=format_timestamp(source.uploaded_at, date_format),
        ),
    ]
    if source.url:
        blocks.append(KeyValueBlock("source_file", label="File URL", value=source.url))
    return blocks
