"""Startup validation: fail-fast on critical misconfigurations."""

from __future__ import annotations

import logging
from datetime import datetime
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from sonicscribe.core.config import AppSettings

log = logging.getLogger(__name__)


def validate_settings(settings: AppSettings) -> None:
    """Validate application settings at startup. Raises ValueError on fatal misconfig."""
    _check_app_name(settings)
    _check_date_format(settings)
    _check_download_dir(settings)


def _check_app_name(settings: AppSettings) -> None:
    """The app name prefixes every PDF filename, so it cannot be blank."""
    if not settings.report.app_name.strip():
        raise ValueError(
            "SONICSCRIBE_REPORT_APP_NAME must not be blank; it is used in export filenames."
        )


def _check_date_format(settings: AppSettings) -> None:
    """Reject a date format that strftime cannot apply."""
    try:
        datetime(2000, 1, 1).strftime(settings.report.date_format)
    except ValueError as exc:
        raise ValueError(
            f"SONICSCRIBE_REPORT_DATE_FORMAT {settings.report.date_format!r} is invalid: {exc}"
        ) from exc


def _check_download_dir(settings: AppSettings) -> None:
    """Warn when the download directory does not exist yet (it is created on first export)."""
    path = settings.export.download_dir
    if path.exists() and not path.is_dir():
        raise ValueError(f"SONICSCRIBE_EXPORT_DOWNLOAD_DIR={path} exists and is not a directory.")
    if not path.exists():
        log.warning("Download directory %s does not exist; it will be created on first export", path)
