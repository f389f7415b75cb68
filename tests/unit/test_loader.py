"""Tests for the report model loader."""

from __future__ import annotations

import dataclasses
import json
from datetime import datetime, timezone
from pathlib import Path
from typing import Any

import pytest

from sonicscribe.exceptions import MalformedReportError, UpstreamError
from sonicscribe.loader import from_payload, load_report, parse, parse_upload_response, serialize


class TestParse:
    def test_full_payload(self, sample_raw: str) -> None:
        report = parse(sample_raw)

        assert report.patient.name == "Jane Q Doe"
        assert report.patient.age_gender == "54 / Female"
        assert report.risk_prediction == "High risk of cardiac event within 30 days"
        assert report.recommendation.should_be_admitted is True
        assert report.triage.level == "URGENT - see specialist within 24h"
        assert report.triage.specialist_to_consult == "Cardiologist"
        assert report.notes == "Patient anxious; family history of CAD"
        assert report.source_file.original_name == "consult-2024-05-01.mp3"
        assert report.source_file.uploaded_at == datetime(2024, 5, 1, 14, 30, tzinfo=timezone.utc)
        assert report.source_file.url == "https://files.example.com/consult.mp3"

    def test_list_order_preserved(self, sample_raw: str) -> None:
        report = parse(sample_raw)
        assert report.symptoms == ("Chest pain", "Shortness of breath", "Dizziness")
        assert report.medical_history == ("Type 2 diabetes", "Hypertension")
        assert report.possible_diseases == ("Unstable angina", "Myocardial infarction")
        assert report.triage.probable_conditions == ("Angina",)

    def test_transcript_preserved_exactly(self, sample_raw: str, sample_payload: dict[str, Any]) -> None:
        assert parse(sample_raw).transcript == sample_payload["analysis"]["transcript"]

    def test_accepts_bytes(self, sample_raw: str) -> None:
        assert parse(sample_raw.encode("utf-8")).patient.name == "Jane Q Doe"

    def test_invalid_json(self) -> None:
        with pytest.raises(MalformedReportError) as exc_info:
            parse("{not json}")
        assert exc_info.value.raw == "{not json}"

    def test_empty_object(self) -> None:
        with pytest.raises(MalformedReportError):
            parse("{}")

    def test_non_object_payload(self) -> None:
        with pytest.raises(MalformedReportError, match="JSON object"):
            parse("[1, 2, 3]")

    def test_extra_fields_ignored(self, sample_payload: dict[str, Any]) -> None:
        sample_payload["analysis"]["structured"]["confidence"] = 0.93
        sample_payload["debug"] = {"model": "x"}
        assert from_payload(sample_payload).patient.name == "Jane Q Doe"


class TestRequiredFields:
    @pytest.mark.parametrize(
        "path",
        [
            ("analysis", "structured", "name"),
            ("analysis", "structured", "risk_prediction"),
            ("analysis", "structured", "recommendation", "should_be_admitted"),
            ("analysis", "transcript"),
            ("analysis", "triage", "triage_level"),
            ("analysis", "triage", "advice"),
            ("file", "originalName"),
            ("file", "uploadedAt"),
        ],
    )
    def test_missing_required_field(self, sample_payload: dict[str, Any], path: tuple[str, ...]) -> None:
        node = sample_payload
        for key in path[:-1]:
            node = node[key]
        del node[path[-1]]

        with pytest.raises(MalformedReportError):
            from_payload(sample_payload)

    def test_blank_name_rejected(self, sample_payload: dict[str, Any]) -> None:
        sample_payload["analysis"]["structured"]["name"] = "   "
        with pytest.raises(MalformedReportError, match="name"):
            from_payload(sample_payload)

    def test_unparseable_upload_time(self, sample_payload: dict[str, Any]) -> None:
        sample_payload["file"]["uploadedAt"] = "yesterday-ish"
        with pytest.raises(MalformedReportError, match="uploadedAt"):
            from_payload(sample_payload)


class TestOptionalFields:
    def test_omitted_lists_become_empty(self, minimal_payload: dict[str, Any]) -> None:
        report = from_payload(minimal_payload)
        assert report.symptoms == ()
        assert report.medical_history == ()
        assert report.possible_diseases == ()
        assert report.triage.probable_conditions == ()

    def test_null_lists_become_empty(self, sample_payload: dict[str, Any]) -> None:
        sample_payload["analysis"]["structured"]["symptoms"] = None
        sample_payload["analysis"]["triage"]["probable_conditions"] = None
        report = from_payload(sample_payload)
        assert report.symptoms == ()
        assert report.triage.probable_conditions == ()

    def test_notes_and_url_optional(self, minimal_payload: dict[str, Any]) -> None:
        report = from_payload(minimal_payload)
        assert report.notes is None
        assert report.source_file.url is None


class TestLoadReport:
    def test_reads_file(self, report_file: Path) -> None:
        assert load_report(report_file).patient.name == "Jane Q Doe"


class TestUploadResponse:
    def test_string_result(self, sample_raw: str) -> None:
        report = parse_upload_response({"success": True, "result": sample_raw})
        assert report.patient.name == "Jane Q Doe"

    def test_object_result(self, sample_payload: dict[str, Any]) -> None:
        report = parse_upload_response({"success": True, "result": sample_payload})
        assert report.triage.specialist_to_consult == "Cardiologist"

    def test_json_envelope(self, sample_raw: str) -> None:
        envelope = json.dumps({"success": True, "result": sample_raw})
        assert parse_upload_response(envelope).patient.name == "Jane Q Doe"

    def test_failure_envelope(self) -> None:
        with pytest.raises(UpstreamError, match="quota exceeded"):
            parse_upload_response({"success": False, "error": "quota exceeded"})

    def test_failure_without_message(self) -> None:
        with pytest.raises(UpstreamError, match="Analysis request failed"):
            parse_upload_response({"success": False})

    def test_missing_result(self) -> None:
        with pytest.raises(UpstreamError, match="no result"):
            parse_upload_response({"success": True})

    def test_non_json_envelope(self) -> None:
        with pytest.raises(UpstreamError):
            parse_upload_response("<html>Bad Gateway</html>")

    def test_malformed_result(self) -> None:
        with pytest.raises(MalformedReportError):
            parse_upload_response({"success": True, "result": "{not json}"})


class TestSerialize:
    def test_uses_upstream_layout(self, sample_report) -> None:
        data = json.loads(serialize(sample_report))
        assert data["analysis"]["structured"]["possible_disease"] == ["Unstable angina", "Myocardial infarction"]
        assert data["analysis"]["triage"]["triage_level"] == "URGENT - see specialist within 24h"
        assert data["file"]["originalName"] == "consult-2024-05-01.mp3"
        assert data["success"] is True

    def test_reparses_to_same_report(self, sample_report) -> None:
        assert parse(serialize(sample_report)) == sample_report

    def test_keeps_non_ascii(self, sample_report) -> None:
        assert "ünïcödé" in serialize(sample_report)

    def test_keeps_payload_as_received(self, sample_payload) -> None:
        sample_payload["file"]["uploadedAt"] = "2024-05-01T14:30:00.000Z"
        sample_payload["analysis"]["structured"]["extra_field"] = {"model": "v2"}
        data = json.loads(serialize(from_payload(sample_payload)))
        assert data["file"]["uploadedAt"] == "2024-05-01T14:30:00.000Z"
        assert data["analysis"]["structured"]["extra_field"] == {"model": "v2"}

    def test_payload_without_success_flag(self, minimal_payload) -> None:
        assert "success" not in json.loads(serialize(from_payload(minimal_payload)))

    def test_later_payload_edits_do_not_leak(self, sample_payload) -> None:
        report = from_payload(sample_payload)
        sample_payload["analysis"]["structured"]["name"] = "Someone Else"
        assert json.loads(serialize(report))["analysis"]["structured"]["name"] == "Jane Q Doe"

    def test_report_built_in_code_uses_upstream_layout(self, sample_report) -> None:
        data = json.loads(serialize(dataclasses.replace(sample_report, raw_payload=None)))
        assert data["file"]["uploadedAt"] == "2024-05-01T14:30:00+00:00"
        assert data["analysis"]["structured"]["notes"] == sample_report.notes
        assert "success" not in data
