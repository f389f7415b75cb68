"""Centralized style tokens and layout constants for every render surface.

Each severity tier maps to one ``StyleToken``.  The dashboard reads the CSS
class identifiers, the print markup and the PDF read the hex colors; both
halves live on the same token so the surfaces cannot disagree.
"""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class StyleToken:
    """Visual treatment attached to a severity tier."""

    key: str
    bg: str
    border: str
    text: str
    badge: str
    meter: str
    print_bg: str
    print_border: str
    print_text: str


# ── Triage tiers ─────────────────────────────────────────────────────

TRIAGE_STYLES: dict[str, StyleToken] = {
    "emergency": StyleToken(
        key="triage-emergency",
        bg="bg-red-900/30",
        border="border-red-500/50",
        text="text-red-400",
        badge="bg-red-900/50 text-red-300 border-red-500",
        meter="bg-red-500",
        print_bg="#fee2e2",
        print_border="#ef4444",
        print_text="#991b1b",
    ),
    "urgent": StyleToken(
        key="triage-urgent",
        bg="bg-orange-900/30",
        border="border-orange-500/50",
        text="text-orange-400",
        badge="bg-orange-900/50 text-orange-300 border-orange-500",
        meter="bg-orange-500",
        print_bg="#fef3c7",
        print_border="#f59e0b",
        print_text="#92400e",
    ),
    "normal": StyleToken(
        key="triage-normal",
        bg="bg-green-900/30",
        border="border-green-500/50",
        text="text-green-400",
        badge="bg-green-900/50 text-green-300 border-green-500",
        meter="bg-green-500",
        print_bg="#d1fae5",
        print_border="#10b981",
        print_text="#065f46",
    ),
}

# ── Risk tiers ───────────────────────────────────────────────────────

RISK_STYLES: dict[str, StyleToken] = {
    "high": StyleToken(
        key="risk-high",
        bg="bg-red-900/20",
        border="border-red-700/50",
        text="text-red-400",
        badge="bg-red-900/50 text-red-300 border-red-500",
        meter="bg-red-500",
        print_bg="#fee2e2",
        print_border="#ef4444",
        print_text="#991b1b",
    ),
    "moderate": StyleToken(
        key="risk-moderate",
        bg="bg-orange-900/20",
        border="border-orange-700/50",
        text="text-orange-400",
        badge="bg-orange-900/50 text-orange-300 border-orange-500",
        meter="bg-orange-500",
        print_bg="#fef3c7",
        print_border="#f59e0b",
        print_text="#92400e",
    ),
    "low": StyleToken(
        key="risk-low",
        bg="bg-green-900/20",
        border="border-green-700/50",
        text="text-green-400",
        badge="bg-green-900/50 text-green-300 border-green-500",
        meter="bg-green-500",
        print_bg="#d1fae5",
        print_border="#10b981",
        print_text="#065f46",
    ),
}

ADMISSION_STYLE = StyleToken(
    key="admission-required",
    bg="bg-red-900/30",
    border="border-red-500/50",
    text="text-red-300",
    badge="bg-red-900/50 text-red-300 border-red-500",
    meter="bg-red-500",
    print_bg="#fef3c7",
    print_border="#ef4444",
    print_text="#991b1b",
)

# ── Section titles ───────────────────────────────────────────────────

SECTION_TITLES: dict[str, str] = {
    "patient_info": "Patient Information",
    "medical_history": "Medical History",
    "symptoms": "Reported Symptoms",
    "triage": "Triage Assessment",
    "risk": "Risk Assessment",
    "possible_diseases": "Possible Diseases/Conditions",
    "recommendations": "Medical Recommendations",
    "source_file": "Source Information",
}

REPORT_TITLE = "Medical Analysis Report"
ADMISSION_WARNING_TEXT = "HOSPITAL ADMISSION RECOMMENDED"
DISCLAIMER_TITLE = "IMPORTANT MEDICAL DISCLAIMER"
DISCLAIMER_TEXT = (
    "This AI-generated analysis is for informational purposes only and should not be "
    "considered as professional medical advice, diagnosis, or treatment. Always consult "
    "with qualified healthcare professionals for proper medical evaluation and care."
)

# ── Print layout colors ──────────────────────────────────────────────

PAGE_BG_COLOR = "#FFF2E0"
BODY_TEXT_COLOR = "#333333"
APP_NAME_COLOR = "#7F55B1"
HEADER_RULE_COLOR = "#7469B6"
SECTION_RULE_COLOR = "#F0A04B"
INFO_ITEM_BG_COLOR = "#BDDDE4"
INFO_ITEM_BORDER_COLOR = "#727D73"
MUTED_TEXT_COLOR = "#6B7280"
LABEL_TEXT_COLOR = "#374151"
TAG_BG_COLOR = "#EDE9FE"
TAG_BORDER_COLOR = "#C4B5FD"
TAG_TEXT_COLOR = "#5B21B6"
DISCLAIMER_BG_COLOR = "#FEF3C7"
DISCLAIMER_BORDER_COLOR = "#F59E0B"
DISCLAIMER_TITLE_COLOR = "#92400E"
DISCLAIMER_TEXT_COLOR = "#78350F"
