"""Plain-text formatter for the transcript export."""

from __future__ import annotations

from pathlib import Path
from typing import Any

from sonicscribe.projectors.transcript import TRANSCRIPT_CONTENT_TYPE, TranscriptExport


class TextFormatter:
    """Encodes a ``TranscriptExport`` as UTF-8 without touching its content."""

    def format(self, subject: TranscriptExport, **kwargs: Any) -> bytes:
        return subject.text.encode("utf-8")

    def format_to_file(self, subject: TranscriptExport, path: Path, **kwargs: Any) -> Path:
        """Write the transcript to *path* byte-for-byte (no newline translation)."""
        path.write_bytes(self.format(subject, **kwargs))
        return path

    @property
    def content_type(self) -> str:
        return TRANSCRIPT_CONTENT_TYPE
