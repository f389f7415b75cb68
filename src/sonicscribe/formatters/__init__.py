"""Output formatters for the projected report.

Usage::

    from sonicscribe.formatters import HTMLFormatter, PDFFormatter, TextFormatter

    html_bytes = HTMLFormatter().format(document)
    pdf_bytes = PDFFormatter().format(document)
    txt_bytes = TextFormatter().format(transcript_export)
"""

from __future__ import annotations

from typing import Any

from sonicscribe.formatters.html_formatter import HTMLFormatter
from sonicscribe.formatters.json_formatter import JSONFormatter
from sonicscribe.formatters.protocols import IOutputFormatter
from sonicscribe.formatters.text_formatter import TextFormatter

__all__ = [
    "HTMLFormatter",
    "IOutputFormatter",
    "JSONFormatter",
    "PDFFormatter",
    "TextFormatter",
]


def __getattr__(name: str) -> Any:
    """Lazy-load PDFFormatter so reportlab is only imported when needed."""
    if name == "PDFFormatter":
        from sonicscribe.formatters.pdf_formatter import PDFFormatter

        return PDFFormatter
    raise AttributeError(f"module {__name__!r} has no attribute {name!r}")
