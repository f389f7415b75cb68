"""JSON formatter: the analysis payload as received (raw data view)."""

from __future__ import annotations

from pathlib import Path
from typing import Any

from sonicscribe.loader import serialize
from sonicscribe.models import AnalysisReport


class JSONFormatter:
    """Renders an ``AnalysisReport`` as indented JSON bytes."""

    def format(self, subject: AnalysisReport, **kwargs: Any) -> bytes:
        """Serialize *subject* to pretty-printed JSON bytes."""
        return serialize(subject).encode("utf-8")

    def format_to_file(self, subject: AnalysisReport, path: Path, **kwargs: Any) -> Path:
        """Write JSON to *path* and return it."""
        path.write_bytes(self.format(subject, **kwargs))
        return path

    @property
    def content_type(self) -> str:
        return "application/json"
