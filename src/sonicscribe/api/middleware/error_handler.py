"""Global exception handlers mapping domain exceptions to HTTP responses."""

from __future__ import annotations

import logging

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from sonicscribe.exceptions import (
    ExportError,
    MalformedReportError,
    SonicScribeError,
    UpstreamError,
)

log = logging.getLogger(__name__)


def register_error_handlers(app: FastAPI) -> None:
    """Register exception-to-HTTP-status mappings."""

    @app.exception_handler(MalformedReportError)
    async def handle_malformed(request: Request, exc: MalformedReportError) -> JSONResponse:
        log.info("Rejected malformed report on %s: %s", request.url.path, exc)
        return JSONResponse(
            status_code=422,
            content={"error": "Failed to parse analysis data", "type": "malformed_report", "detail": str(exc)},
        )

    @app.exception_handler(UpstreamError)
    async def handle_upstream(request: Request, exc: UpstreamError) -> JSONResponse:
        return JSONResponse(status_code=502, content={"error": str(exc), "type": "upstream_error"})

    @app.exception_handler(ExportError)
    async def handle_export(request: Request, exc: ExportError) -> JSONResponse:
        return JSONResponse(status_code=500, content={"error": str(exc), "type": "export_error"})

    @app.exception_handler(SonicScribeError)
    async def handle_generic_error(request: Request, exc: SonicScribeError) -> JSONResponse:
        return JSONResponse(status_code=500, content={"error": str(exc), "type": "sonicscribe_error"})
