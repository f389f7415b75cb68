"""Shared fixtures for sonicscribe tests."""

from __future__ import annotations

import copy
import json
from pathlib import Path
from typing import Any

import pytest

from sonicscribe.classification import ReportClassification, classify_report
from sonicscribe.loader import from_payload
from sonicscribe.models import AnalysisReport

SAMPLE_TRANSCRIPT = (
    "Doctor: What brings you in today?\r\n"
    "Patient: My chest hurts when I climb stairs.\n"
    "\n"
    "  Doctor: Since when?  \n"
    "Patient: About two weeks. ünïcödé ok"
)

_SAMPLE_PAYLOAD: dict[str, Any] = {
    "analysis": {
        "structured": {
            "name": "Jane Q Doe",
            "age_gender": "54 / Female",
            "medical_history": ["Type 2 diabetes", "Hypertension"],
            "symptoms": ["Chest pain", "Shortness of breath", "Dizziness"],
            "possible_disease": ["Unstable angina", "Myocardial infarction"],
            "risk_prediction": "High risk of cardiac event within 30 days",
            "recommendation": {
                "next_steps": "Immediate ECG and troponin panel",
                "should_be_admitted": True,
            },
            "notes": "Patient anxious; family history of CAD",
        },
        "transcript": SAMPLE_TRANSCRIPT,
        "triage": {
            "triage_level": "URGENT - see specialist within 24h",
            "advice": "Avoid exertion until evaluated.",
            "probable_conditions": ["Angina"],
            "specialist_to_consult": "Cardiologist",
        },
    },
    "file": {
        "originalName": "consult-2024-05-01.mp3",
        "uploadedAt": "2024-05-01T14:30:00Z",
        "url": "https://files.example.com/consult.mp3",
    },
    "success": True,
}


@pytest.fixture
def sample_payload() -> dict[str, Any]:
    """Fully populated upstream payload: urgent triage, high risk, admission required."""
    return copy.deepcopy(_SAMPLE_PAYLOAD)


@pytest.fixture
def minimal_payload() -> dict[str, Any]:
    """Payload with every optional field and list left out."""
    return {
        "analysis": {
            "structured": {
                "name": "John Smith",
                "age_gender": "30 / Male",
                "risk_prediction": "Low",
                "recommendation": {"next_steps": "Rest and fluids", "should_be_admitted": False},
            },
            "transcript": "Patient reports a mild cold.",
            "triage": {
                "triage_level": "Routine",
                "advice": "Return if fever persists.",
                "specialist_to_consult": "General practitioner",
            },
        },
        "file": {"originalName": "cold.wav", "uploadedAt": "2024-06-10T09:05:00Z"},
    }


@pytest.fixture
def sample_raw(sample_payload: dict[str, Any]) -> str:
    return json.dumps(sample_payload)


@pytest.fixture
def sample_report(sample_payload: dict[str, Any]) -> AnalysisReport:
    return from_payload(sample_payload)


@pytest.fixture
def minimal_report(minimal_payload: dict[str, Any]) -> AnalysisReport:
    return from_payload(minimal_payload)


@pytest.fixture
def sample_tiers(sample_report: AnalysisReport) -> ReportClassification:
    return classify_report(sample_report)


@pytest.fixture
def report_file(tmp_path: Path, sample_raw: str) -> Path:
    path = tmp_path / "report.json"
    path.write_text(sample_raw, encoding="utf-8")
    return path
