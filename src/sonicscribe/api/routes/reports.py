"""Report endpoints: dashboard view, transcript, print document, PDF and raw JSON.

Every request carries the raw analysis JSON; nothing is stored between calls.
"""

from __future__ import annotations

import dataclasses
from datetime import datetime
from io import BytesIO
from typing import Any
from urllib.parse import quote

from fastapi import APIRouter, Body, HTTPException, Request
from fastapi.responses import HTMLResponse, Response, StreamingResponse
from pydantic import BaseModel

from sonicscribe.classification import classify_report
from sonicscribe.core.config import AppSettings
from sonicscribe.formatters.html_formatter import HTMLFormatter
from sonicscribe.formatters.json_formatter import JSONFormatter
from sonicscribe.formatters.text_formatter import TextFormatter
from sonicscribe.loader import parse, parse_upload_response
from sonicscribe.models import AnalysisReport
from sonicscribe.projectors.dashboard import project_dashboard
from sonicscribe.projectors.document import PrintDocument, project_document
from sonicscribe.projectors.transcript import project_transcript

router = APIRouter(prefix="/reports", tags=["reports"])


class ReportRequest(BaseModel):
    """A raw analysis payload exactly as the upstream service produced it."""

    raw: str


def _dashboard_payload(report: AnalysisReport, settings: AppSettings) -> dict[str, Any]:
    tiers = classify_report(report)
    view = project_dashboard(report, tiers.triage, tiers.risk, date_format=settings.report.date_format)
    return dataclasses.asdict(view)


def _document(report: AnalysisReport, settings: AppSettings) -> PrintDocument:
    tiers = classify_report(report)
    return project_document(
        report,
        tiers.triage,
        tiers.risk,
        generated_at=datetime.now(),
        app_name=settings.report.app_name,
        date_format=settings.report.date_format,
    )


def _attachment(filename: str) -> dict[str, str]:
    """Content-Disposition with an ASCII ``filename`` and an RFC 5987 ``filename*``.

    Header values must encode as latin-1, so patient names outside ASCII only
    travel in the percent-encoded ``filename*`` parameter.
    """
    fallback = filename.encode("ascii", "ignore").decode("ascii")
    fallback = fallback.replace('"', "").replace("\\", "")
    return {
        "Content-Disposition": f"attachment; filename=\"{fallback}\"; filename*=UTF-8''{quote(filename)}"
    }


@router.post("/view")
async def view_report(request: ReportRequest, req: Request) -> dict[str, Any]:
    """Parse, classify and project a report into the dashboard view-model."""
    report = parse(request.raw)
    return _dashboard_payload(report, req.app.state.settings)


@router.post("/upload")
async def view_upload(req: Request, envelope: dict[str, Any] = Body(...)) -> dict[str, Any]:
    """Load the report carried by an upload collaborator envelope.

    A ``success: false`` envelope maps to 502 and nothing is classified.
    """
    report = parse_upload_response(envelope)
    return _dashboard_payload(report, req.app.state.settings)


@router.post("/transcript")
async def download_transcript(request: ReportRequest) -> Response:
    report = parse(request.raw)
    tiers = classify_report(report)
    export = project_transcript(report, tiers.triage, tiers.risk)
    formatter = TextFormatter()
    return Response(
        content=formatter.format(export),
        media_type=formatter.content_type,
        headers=_attachment(export.filename),
    )


@router.post("/document", response_class=HTMLResponse)
async def print_document(request: ReportRequest, req: Request) -> HTMLResponse:
    """Self-contained print markup for the report."""
    report = parse(request.raw)
    document = _document(report, req.app.state.settings)
    return HTMLResponse(HTMLFormatter().render(document))


@router.post("/pdf")
async def export_pdf(request: ReportRequest, req: Request) -> StreamingResponse:
    settings = req.app.state.settings
    report = parse(request.raw)
    document = _document(report, settings)

    try:
        from sonicscribe.formatters.pdf_formatter import PDFFormatter
    except ImportError as exc:
        raise HTTPException(
            status_code=501,
            detail="PDF export requires the 'pdf' extra: pip install sonicscribe[pdf]",
        ) from exc
    formatter = PDFFormatter(settings.pdf)

    return StreamingResponse(
        BytesIO(formatter.format(document)),
        media_type=formatter.content_type,
        headers=_attachment(document.filename),
    )


@router.post("/raw")
async def raw_report(request: ReportRequest) -> Response:
    """The analysis payload as received, pretty-printed."""
    report = parse(request.raw)
    formatter = JSONFormatter()
    return Response(content=formatter.format(report), media_type=formatter.content_type)
