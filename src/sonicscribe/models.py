"""Canonical analysis report models.

An ``AnalysisReport`` is built once per upload response by
``sonicscribe.loader.parse`` and is immutable afterwards: every dataclass is
frozen and list-valued fields are stored as tuples.  The free-text
``triage.level`` and ``risk_prediction`` values are kept verbatim; derived
severity tiers live in ``sonicscribe.classification``.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Mapping, Optional


@dataclass(frozen=True)
class Patient:
    """Patient identity as reported by the upstream analysis."""

    name: str
    age_gender: str


@dataclass(frozen=True)
class Recommendation:
    """Next-step guidance and the admission flag."""

    next_steps: str
    should_be_admitted: bool = False


@dataclass(frozen=True)
class Triage:
    """Triage output; ``level`` is free text such as ``"Urgent"``."""

    level: str
    advice: str
    specialist_to_consult: str
    probable_conditions: tuple[str, ...] = ()


@dataclass(frozen=True)
class SourceFile:
    """The uploaded file the analysis was produced from."""

    original_name: str
    uploaded_at: datetime
    url: Optional[str] = None


@dataclass(frozen=True)
class AnalysisReport:
    """Validated, defaulted in-memory representation of one analysis result."""

    patient: Patient
    risk_prediction: str
    recommendation: Recommendation
    triage: Triage
    transcript: str
    source_file: SourceFile
    medical_history: tuple[str, ...] = ()
    symptoms: tuple[str, ...] = ()
    possible_diseases: tuple[str, ...] = ()
    notes: Optional[str] = None
    # Decoded upstream JSON as received; backs the raw data view.
    raw_payload: Optional[Mapping[str, Any]] = field(default=None, compare=False, repr=False)
