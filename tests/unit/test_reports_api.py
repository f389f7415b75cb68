"""Tests for the report and risk-prediction API endpoints."""

from __future__ import annotations

import json
from contextlib import asynccontextmanager
from typing import Any, AsyncGenerator
from urllib.parse import quote

import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient

from sonicscribe.api.middleware.error_handler import register_error_handlers
from sonicscribe.api.routes import health, prediction, reports
from sonicscribe.core.config import AppSettings


def _build_app() -> FastAPI:
    """Build the API with default settings and no logging reconfiguration."""
    settings = AppSettings()

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
        app.state.settings = settings
        yield

    app = FastAPI(lifespan=lifespan)
    register_error_handlers(app)
    app.include_router(health.router)
    app.include_router(reports.router, prefix="/api")
    app.include_router(prediction.router, prefix="/api")
    return app


@pytest.fixture
def client():
    with TestClient(_build_app()) as test_client:
        yield test_client


class TestHealth:
    def test_health(self, client: TestClient) -> None:
        assert client.get("/health").json() == {"status": "ok"}

    def test_ready(self, client: TestClient) -> None:
        assert client.get("/ready").json() == {"status": "ready"}


class TestViewEndpoint:
    def test_returns_dashboard_view(self, client: TestClient, sample_raw: str) -> None:
        resp = client.post("/api/reports/view", json={"raw": sample_raw})
        assert resp.status_code == 200
        body = resp.json()
        assert body["patient_name"] == "Jane Q Doe"
        assert body["triage"] == "urgent"
        assert body["risk"] == {"tier": "high", "percent": 85}
        assert [s["key"] for s in body["sections"]][0] == "patient_info"
        assert body["default_tab"] == "overview"

    def test_malformed_json(self, client: TestClient) -> None:
        resp = client.post("/api/reports/view", json={"raw": "{not json}"})
        assert resp.status_code == 422
        body = resp.json()
        assert body["error"] == "Failed to parse analysis data"
        assert body["type"] == "malformed_report"

    def test_missing_required_field(self, client: TestClient, sample_payload: dict[str, Any]) -> None:
        del sample_payload["analysis"]["triage"]
        resp = client.post("/api/reports/view", json={"raw": json.dumps(sample_payload)})
        assert resp.status_code == 422
        assert resp.json()["type"] == "malformed_report"


class TestUploadEndpoint:
    def test_success_envelope(self, client: TestClient, sample_raw: str) -> None:
        resp = client.post("/api/reports/upload", json={"success": True, "result": sample_raw})
        assert resp.status_code == 200
        assert resp.json()["patient_name"] == "Jane Q Doe"

    def test_failure_envelope(self, client: TestClient) -> None:
        resp = client.post("/api/reports/upload", json={"success": False, "error": "Transcription failed"})
        assert resp.status_code == 502
        assert resp.json() == {"error": "Transcription failed", "type": "upstream_error"}


class TestExportEndpoints:
    def test_transcript_download(self, client: TestClient, sample_raw: str, sample_payload: dict[str, Any]) -> None:
        resp = client.post("/api/reports/transcript", json={"raw": sample_raw})
        assert resp.status_code == 200
        assert resp.headers["content-type"].startswith("text/plain")
        assert 'filename="transcript-Jane-Q-Doe.txt"' in resp.headers["content-disposition"]
        assert resp.content == sample_payload["analysis"]["transcript"].encode("utf-8")

    def test_transcript_download_non_latin_name(
        self, client: TestClient, sample_payload: dict[str, Any]
    ) -> None:
        sample_payload["analysis"]["structured"]["name"] = "Ravi Kumar रवि"
        resp = client.post("/api/reports/transcript", json={"raw": json.dumps(sample_payload)})
        assert resp.status_code == 200
        disposition = resp.headers["content-disposition"]
        assert 'filename="transcript-Ravi-Kumar-.txt"' in disposition
        expected = quote("transcript-Ravi-Kumar-रवि.txt")
        assert f"filename*=UTF-8''{expected}" in disposition

    def test_transcript_download_quoted_name(
        self, client: TestClient, sample_payload: dict[str, Any]
    ) -> None:
        sample_payload["analysis"]["structured"]["name"] = 'Jane "JJ" Doe'
        resp = client.post("/api/reports/transcript", json={"raw": json.dumps(sample_payload)})
        assert resp.status_code == 200
        disposition = resp.headers["content-disposition"]
        assert disposition.count('"') == 2
        assert 'filename="transcript-Jane-JJ-Doe.txt"' in disposition
        assert "filename*=UTF-8''transcript-Jane-%22JJ%22-Doe.txt" in disposition

    def test_pdf_download_non_latin_name(self, client: TestClient, sample_payload: dict[str, Any]) -> None:
        pytest.importorskip("reportlab")
        sample_payload["analysis"]["structured"]["name"] = "Ravi Kumar रवि"
        resp = client.post("/api/reports/pdf", json={"raw": json.dumps(sample_payload)})
        assert resp.status_code == 200
        assert "filename*=UTF-8''SonicScribe-AI-Medical-Report-Ravi-Kumar-" in resp.headers["content-disposition"]

    def test_document_html(self, client: TestClient, sample_raw: str) -> None:
        resp = client.post("/api/reports/document", json={"raw": sample_raw})
        assert resp.status_code == 200
        assert resp.headers["content-type"].startswith("text/html")
        assert "Medical Analysis Report - Jane Q Doe" in resp.text

    def test_pdf_download(self, client: TestClient, sample_raw: str) -> None:
        pytest.importorskip("reportlab")
        resp = client.post("/api/reports/pdf", json={"raw": sample_raw})
        assert resp.status_code == 200
        assert resp.headers["content-type"] == "application/pdf"
        assert "SonicScribe-AI-Medical-Report-Jane-Q-Doe.pdf" in resp.headers["content-disposition"]
        assert resp.content[:5] == b"%PDF-"

    def test_raw_json(self, client: TestClient, sample_raw: str) -> None:
        resp = client.post("/api/reports/raw", json={"raw": sample_raw})
        assert resp.status_code == 200
        assert resp.json()["file"]["originalName"] == "consult-2024-05-01.mp3"

    def test_malformed_export(self, client: TestClient) -> None:
        resp = client.post("/api/reports/transcript", json={"raw": "{}"})
        assert resp.status_code == 422


class TestPredictionEndpoint:
    @pytest.mark.parametrize(
        "risk, band",
        [(12, "low"), (30, "medium"), (69.5, "medium"), (70, "high")],
    )
    def test_bands(self, client: TestClient, risk: float, band: str) -> None:
        resp = client.post("/api/risk-prediction/result", json={"risk": risk, "decision": "Admit"})
        assert resp.status_code == 200
        assert resp.json()["band"] == band

    def test_negative_decision(self, client: TestClient) -> None:
        resp = client.post("/api/risk-prediction/result", json={"risk": 10, "decision": "No admission needed"})
        assert resp.json()["negative"] is True

    def test_out_of_range(self, client: TestClient) -> None:
        resp = client.post("/api/risk-prediction/result", json={"risk": 140, "decision": "Admit"})
        assert resp.status_code == 422


class TestAppWiring:
    def test_routes_registered(self) -> None:
        from sonicscribe.api.app import app

        paths = {route.path for route in app.routes}
        assert {"/health", "/api/reports/view", "/api/reports/pdf", "/api/risk-prediction/result"} <= paths
