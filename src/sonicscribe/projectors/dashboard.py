"""Interactive projector: the dashboard view-model.

The projector supplies data and style only.  Which sections are expanded and
which tab is active is caller-owned state kept in ``ViewState``; the projector
contributes nothing beyond the initial default (every section expanded,
overview tab active).
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from sonicscribe.classification import RiskAssessment, TriageTier
from sonicscribe.loader import serialize
from sonicscribe.models import AnalysisReport
from sonicscribe.projectors._common import DEFAULT_DATE_FORMAT, format_timestamp
from sonicscribe.styles import ADMISSION_STYLE, SECTION_TITLES, StyleToken

DASHBOARD_TABS: tuple[str, ...] = ("overview", "transcript", "raw")
DEFAULT_TAB = "overview"

DASHBOARD_SECTION_ORDER: tuple[str, ...] = (
    "patient_info",
    "medical_history",
    "symptoms",
    "triage",
    "risk",
    "possible_diseases",
    "recommendations",
)


@dataclass(frozen=True)
class FieldEntry:
    """A labelled value inside a dashboard section."""

    label: str
    value: str
    style: Optional[StyleToken] = None


@dataclass(frozen=True)
class DashboardSection:
    """One collapsible card on the overview tab."""

    key: str
    title: str
    style: Optional[StyleToken] = None
    fields: tuple[FieldEntry, ...] = ()
    items: tuple[str, ...] = ()
    badge: Optional[str] = None
    badge_style: Optional[StyleToken] = None
    meter: Optional[int] = None
    initially_expanded: bool = True


@dataclass(frozen=True)
class FileHeader:
    original_name: str
    uploaded_on: str
    url: Optional[str] = None


@dataclass(frozen=True)
class DashboardView:
    """Everything the dashboard renders for one report."""

    patient_name: str
    file: FileHeader
    sections: tuple[DashboardSection, ...]
    transcript: str
    raw_json: str
    triage: TriageTier
    risk: RiskAssessment
    tabs: tuple[str, ...] = DASHBOARD_TABS
    default_tab: str = DEFAULT_TAB

    @property
    def section_keys(self) -> tuple[str, ...]:
        return tuple(section.key for section in self.sections)

    def section(self, key: str) -> Optional[DashboardSection]:
        for section in self.sections:
            if section.key == key:
                return section
        return None


class ViewState:
    """Caller-owned UI state: per-section expansion and the active tab."""

    def __init__(
        self,
        expanded: dict[str, bool],
        active_tab: str = DEFAULT_TAB,
        tabs: tuple[str, ...] = DASHBOARD_TABS,
    ) -> None:
        self.expanded = dict(expanded)
        self.tabs = tabs
        self.active_tab = active_tab

    @classmethod
    def for_view(cls, view: DashboardView) -> ViewState:
        """Initial state for *view*: every section at its default expansion."""
        return cls(
            expanded={s.key: s.initially_expanded for s in view.sections},
            active_tab=view.default_tab,
            tabs=view.tabs,
        )

    def is_expanded(self, key: str) -> bool:
        return self.expanded.get(key, False)

    def toggle(self, key: str) -> bool:
        """Flip one section's expansion and return its new state."""
        if key not in self.expanded:
            raise KeyError(f"Unknown dashboard section: {key}")
        self.expanded[key] = not self.expanded[key]
        return self.expanded[key]

    def select_tab(self, tab: str) -> None:
        if tab not in self.tabs:
            raise ValueError(f"Unknown tab {tab!r}; expected one of {', '.join(self.tabs)}")
        self.active_tab = tab


def project_dashboard(
    report: AnalysisReport,
    triage: TriageTier,
    risk: RiskAssessment,
    *,
    date_format: str = DEFAULT_DATE_FORMAT,
) -> DashboardView:
    """Build the dashboard view-model for *report*.

    List-backed sections (history, symptoms, possible diseases) are left out
    when their list is empty.
    """
    sections: list[DashboardSection] = [
        DashboardSection(
            key="patient_info",
            title=SECTION_TITLES["patient_info"],
            fields=(
                FieldEntry("Name", report.patient.name),
                FieldEntry("Age & Gender", report.patient.age_gender),
            ),
        ),
    ]

    if report.medical_history:
        sections.append(
            DashboardSection(
                key="medical_history",
                title=SECTION_TITLES["medical_history"],
                items=report.medical_history,
            )
        )

    if report.symptoms:
        sections.append(
            DashboardSection(
                key="symptoms",
                title=SECTION_TITLES["symptoms"],
                items=report.symptoms,
                badge=str(len(report.symptoms)),
            )
        )

    sections.append(
        DashboardSection(
            key="triage",
            title=SECTION_TITLES["triage"],
            style=triage.style,
            fields=(
                FieldEntry("Priority Level", report.triage.level, triage.style),
                FieldEntry("Recommended Specialist", report.triage.specialist_to_consult),
                FieldEntry("Medical Advice", report.triage.advice),
            ),
            items=report.triage.probable_conditions,
            badge=report.triage.level,
            badge_style=triage.style,
        )
    )

    sections.append(
        DashboardSection(
            key="risk",
            title=SECTION_TITLES["risk"],
            style=risk.style,
            fields=(FieldEntry("Risk Prediction", report.risk_prediction, risk.style),),
            badge=risk.tier.value,
            badge_style=risk.style,
            meter=risk.percent,
        )
    )

    if report.possible_diseases:
        sections.append(
            DashboardSection(
                key="possible_diseases",
                title=SECTION_TITLES["possible_diseases"],
                items=report.possible_diseases,
            )
        )

    recommendation_fields = [FieldEntry("Next Steps", report.recommendation.next_steps)]
    if report.notes:
        recommendation_fields.append(FieldEntry("Clinical Notes", report.notes))
    admitted = report.recommendation.should_be_admitted
    sections.append(
        DashboardSection(
            key="recommendations",
            title=SECTION_TITLES["recommendations"],
            style=ADMISSION_STYLE if admitted else None,
            fields=tuple(recommendation_fields),
            badge="Admission Required" if admitted else None,
            badge_style=ADMISSION_STYLE if admitted else None,
        )
    )

    return DashboardView(
        patient_name=report.patient.name,
        file=FileHeader(
            original_name=report.source_file.original_name,
            uploaded_on=format_timestamp(report.source_file.uploaded_at, date_format),
            url=report.source_file.url,
        ),
        sections=tuple(sections),
        transcript=report.transcript,
        raw_json=serialize(report),
        triage=triage,
        risk=risk,
    )
