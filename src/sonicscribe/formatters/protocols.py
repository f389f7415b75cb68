"""Output formatter protocol: the contract every formatter implements.

``subject`` is typed ``Any`` so each implementation can narrow it to the
projection it renders (a ``TranscriptExport``, a ``PrintDocument``, an
``AnalysisReport``).
"""

from __future__ import annotations

from pathlib import Path
from typing import Any, Protocol, runtime_checkable


@runtime_checkable
class IOutputFormatter(Protocol):
    """Protocol for output formatters (text, HTML, PDF, JSON)."""

    def format(self, subject: Any, **kwargs: Any) -> bytes:
        """Render the subject into output bytes."""
        ...

    def format_to_file(self, subject: Any, path: Path, **kwargs: Any) -> Path:
        """Render and write to a file. Returns the output path."""
        ...

    @property
    def content_type(self) -> str:
        """MIME type for the output format (e.g. 'application/pdf')."""
        ...


__all__ = ["IOutputFormatter"]
