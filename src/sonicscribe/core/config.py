"""Nested pydantic-settings configuration for the application.

Each group reads its own ``SONICSCRIBE_<GROUP>_*`` environment variables::

    export SONICSCRIBE_REPORT_APP_NAME="SonicScribe AI"
    export SONICSCRIBE_PDF_PAGE_SIZE=letter
"""

from __future__ import annotations

from pathlib import Path
from typing import Literal

from pydantic import Field
from pydantic_settings import BaseSettings

DEFAULT_APP_NAME = "SonicScribe AI"


class ReportConfig(BaseSettings):
    """Report presentation settings.

    Env vars use ``SONICSCRIBE_REPORT_`` prefix.
    """

    model_config = {"env_prefix": "SONICSCRIBE_REPORT_"}

    app_name: str = DEFAULT_APP_NAME
    date_format: str = "%d %B %Y, %I:%M %p"


class ExportConfig(BaseSettings):
    """Export coordinator timings and download location.

    Env vars use ``SONICSCRIBE_EXPORT_`` prefix::

        export SONICSCRIBE_EXPORT_DOWNLOAD_DIR=/tmp/exports
    """

    model_config = {"env_prefix": "SONICSCRIBE_EXPORT_"}

    copy_confirmation_ms: int = Field(default=2000, gt=0)
    print_delay_ms: int = Field(default=500, ge=0)
    print_file_retention_s: float = Field(default=30.0, ge=0.0)
    download_dir: Path = Path("./exports")


class PDFFormattingConfig(BaseSettings):
    """PDF output formatting configuration.

    Env vars use ``SONICSCRIBE_PDF_`` prefix::

        export SONICSCRIBE_PDF_PAGE_SIZE=letter
        export SONICSCRIBE_PDF_MARGIN_INCHES=1.0
    """

    model_config = {"env_prefix": "SONICSCRIBE_PDF_"}

    page_size: Literal["letter", "a4"] = "a4"
    margin_inches: float = Field(default=0.75, gt=0.0, le=3.0)
    font_family: str = "Helvetica"
    body_font_size: int = Field(default=10, ge=6, le=72)
    heading_font_size: int = Field(default=14, ge=6, le=72)


class ObservabilityConfig(BaseSettings):
    """Observability configuration.

    Env vars use ``SONICSCRIBE_OBSERVABILITY_`` prefix.
    """

    model_config = {"env_prefix": "SONICSCRIBE_OBSERVABILITY_"}

    service_name: str = "sonicscribe"
    log_level: str = "INFO"


class APIConfig(BaseSettings):
    """HTTP API metadata.

    Env vars use ``SONICSCRIBE_API_`` prefix.
    """

    model_config = {"env_prefix": "SONICSCRIBE_API_"}

    title: str = "SonicScribe Report API"
    description: str = "Normalizes AI medical analyses and renders dashboard, transcript and print exports."
    port: int = 8080


class AppSettings(BaseSettings):
    """Top-level application settings aggregating all sub-configs."""

    report: ReportConfig = ReportConfig()
    export: ExportConfig = ExportConfig()
    pdf: PDFFormattingConfig = PDFFormattingConfig()
    observability: ObservabilityConfig = ObservabilityConfig()
    api: APIConfig = APIConfig()
