"""Core configuration, logging and startup validation."""

from __future__ import annotations

from sonicscribe.core.config import (
    APIConfig,
    AppSettings,
    ExportConfig,
    ObservabilityConfig,
    PDFFormattingConfig,
    ReportConfig,
)
from sonicscribe.core.logging_config import setup_logging
from sonicscribe.core.startup_checks import validate_settings

__all__ = [
    "APIConfig",
    "AppSettings",
    "ExportConfig",
    "ObservabilityConfig",
    "PDFFormattingConfig",
    "ReportConfig",
    "setup_logging",
    "validate_settings",
]
