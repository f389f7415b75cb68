"""Report model loader: raw upstream JSON to a canonical ``AnalysisReport``.

The upstream analysis service emits the layout below; pydantic models mirror
it so that validation, list defaulting and timestamp parsing happen in one
place.  Anything that does not validate raises ``MalformedReportError``;
there is no partial result::

    {
      "analysis": {
        "structured": {"name": ..., "age_gender": ..., "symptoms": [...], ...},
        "transcript": "...",
        "triage": {"triage_level": ..., "advice": ..., ...}
      },
      "file": {"originalName": ..., "uploadedAt": ..., "url": null}
    }
"""

from __future__ import annotations

import copy
import json
import logging
from datetime import datetime
from pathlib import Path
from typing import Annotated, Any, Mapping, Optional, Union

from pydantic import AfterValidator, BaseModel, BeforeValidator, ConfigDict, Field, ValidationError

from sonicscribe.exceptions import MalformedReportError, UpstreamError
from sonicscribe.models import AnalysisReport, Patient, Recommendation, SourceFile, Triage

log = logging.getLogger(__name__)

_PREVIEW_CHARS = 200


def _none_as_empty(value: Any) -> Any:
    return [] if value is None else value


def _require_text(value: str) -> str:
    if not value.strip():
        raise ValueError("must not be blank")
    return value


_StrList = Annotated[list[str], BeforeValidator(_none_as_empty)]
_NonBlank = Annotated[str, AfterValidator(_require_text)]


# ── Wire models (upstream layout) ────────────────────────────────────


class _WireModel(BaseModel):
    model_config = ConfigDict(extra="ignore", populate_by_name=True)


class _WireRecommendation(_WireModel):
    next_steps: str
    should_be_admitted: bool


class _WireStructured(_WireModel):
    name: _NonBlank
    age_gender: _NonBlank
    medical_history: _StrList = Field(default_factory=list)
    symptoms: _StrList = Field(default_factory=list)
    possible_disease: _StrList = Field(default_factory=list)
    risk_prediction: str
    recommendation: _WireRecommendation
    notes: Optional[str] = None


class _WireTriage(_WireModel):
    triage_level: str
    advice: str
    probable_conditions: _StrList = Field(default_factory=list)
    specialist_to_consult: str


class _WireAnalysis(_WireModel):
    structured: _WireStructured
    transcript: str
    triage: _WireTriage


class _WireFile(_WireModel):
    original_name: str = Field(alias="originalName")
    uploaded_at: datetime = Field(alias="uploadedAt")
    url: Optional[str] = None


class _WirePayload(_WireModel):
    analysis: _WireAnalysis
    file: _WireFile


class UploadResponse(BaseModel):
    """Envelope returned by the upload/analysis collaborator."""

    success: bool
    result: Optional[Union[str, dict[str, Any]]] = None
    error: Optional[str] = None
    transcript: Optional[str] = None


# ── Public API ───────────────────────────────────────────────────────


def parse(raw: Union[str, bytes]) -> AnalysisReport:
    """Deserialize *raw* and validate it into an ``AnalysisReport``.

    Raises:
        MalformedReportError: *raw* is not JSON, not an object, or is missing
            a required field.
    """
    try:
        data = json.loads(raw)
    except (json.JSONDecodeError, UnicodeDecodeError, TypeError) as exc:
        log.warning("Analysis payload is not valid JSON: %s", exc)
        raise MalformedReportError(f"Analysis payload is not valid JSON: {exc}", raw=_preview(raw)) from exc
    return from_payload(data)


def from_payload(data: Any) -> AnalysisReport:
    """Validate an already-decoded payload into an ``AnalysisReport``."""
    if not isinstance(data, Mapping):
        raise MalformedReportError(
            f"Analysis payload must be a JSON object, got {type(data).__name__}"
        )
    try:
        payload = _WirePayload.model_validate(data)
    except ValidationError as exc:
        message = _describe(exc)
        log.warning("Analysis payload failed validation: %s", message)
        raise MalformedReportError(f"Analysis payload is missing or has invalid fields: {message}") from exc

    report = _to_canonical(payload, raw_payload=copy.deepcopy(dict(data)))
    log.debug(
        "Loaded analysis report for %s (%d symptoms, %d history entries)",
        report.source_file.original_name,
        len(report.symptoms),
        len(report.medical_history),
    )
    return report


def load_report(path: Path) -> AnalysisReport:
    """Read a report JSON file and parse it."""
    return parse(path.read_bytes())


def parse_upload_response(envelope: Union[Mapping[str, Any], str, bytes]) -> AnalysisReport:
    """Load the report carried by an upload collaborator response.

    Raises:
        UpstreamError: the envelope is unreadable or reports ``success: false``;
            no report is loaded in that case.
        MalformedReportError: ``result`` itself does not parse.
    """
    if isinstance(envelope, (str, bytes)):
        try:
            envelope = json.loads(envelope)
        except (json.JSONDecodeError, UnicodeDecodeError) as exc:
            raise UpstreamError(f"Upload collaborator returned a non-JSON response: {exc}") from exc

    try:
        response = UploadResponse.model_validate(envelope)
    except ValidationError as exc:
        raise UpstreamError(f"Upload collaborator returned an unexpected envelope: {_describe(exc)}") from exc

    if not response.success:
        log.warning("Upload collaborator reported failure: %s", response.error)
        raise UpstreamError(response.error or "Analysis request failed")
    if response.result is None:
        raise UpstreamError("Upload collaborator returned no result")

    if isinstance(response.result, str):
        return parse(response.result)
    return from_payload(response.result)


def serialize(report: AnalysisReport) -> str:
    """Render *report* as indented JSON for the raw data view.

    A report loaded from upstream JSON renders that payload exactly as it was
    decoded, unknown fields and timestamp strings included.  A report built in
    code is rebuilt in the upstream layout.
    """
    if report.raw_payload is not None:
        return json.dumps(report.raw_payload, indent=2, ensure_ascii=False)

    payload = {
        "analysis": {
            "structured": {
                "name": report.patient.name,
                "age_gender": report.patient.age_gender,
                "medical_history": list(report.medical_history),
                "symptoms": list(report.symptoms),
                "possible_disease": list(report.possible_diseases),
                "risk_prediction": report.risk_prediction,
                "recommendation": {
                    "next_steps": report.recommendation.next_steps,
                    "should_be_admitted": report.recommendation.should_be_admitted,
                },
                "notes": report.notes,
            },
            "transcript": report.transcript,
            "triage": {
                "triage_level": report.triage.level,
                "advice": report.triage.advice,
                "probable_conditions": list(report.triage.probable_conditions),
                "specialist_to_consult": report.triage.specialist_to_consult,
            },
        },
        "file": {
            "originalName": report.source_file.original_name,
            "uploadedAt": report.source_file.uploaded_at.isoformat(),
            "url": report.source_file.url,
        },
    }
    return json.dumps(payload, indent=2, ensure_ascii=False)


# ── Helpers ──────────────────────────────────────────────────────────


def _to_canonical(payload: _WirePayload, raw_payload: Optional[dict[str, Any]] = None) -> AnalysisReport:
    structured = payload.analysis.structured
    triage = payload.analysis.triage
    return AnalysisReport(
        patient=Patient(name=structured.name, age_gender=structured.age_gender),
        medical_history=tuple(structured.medical_history),
        symptoms=tuple(structured.symptoms),
        possible_diseases=tuple(structured.possible_disease),
        risk_prediction=structured.risk_prediction,
        recommendation=Recommendation(
            next_steps=structured.recommendation.next_steps,
            should_be_admitted=structured.recommendation.should_be_admitted,
        ),
        notes=structured.notes,
        triage=Triage(
            level=triage.triage_level,
            advice=triage.advice,
            probable_conditions=tuple(triage.probable_conditions),
            specialist_to_consult=triage.specialist_to_consult,
        ),
        transcript=payload.analysis.transcript,
        source_file=SourceFile(
            original_name=payload.file.original_name,
            uploaded_at=payload.file.uploaded_at,
            url=payload.file.url,
        ),
        raw_payload=raw_payload,
    )


def _describe(exc: ValidationError) -> str:
    parts = []
    for error in exc.errors():
        location = ".".join(str(p) for p in error["loc"]) or "<root>"
        parts.append(f"{location}: {error['msg']}")
    return "; ".join(parts)


def _preview(raw: Union[str, bytes, Any]) -> str:
    if isinstance(raw, bytes):
        raw = raw.decode("utf-8", errors="replace")
    text = str(raw)
    return text[:_PREVIEW_CHARS]
