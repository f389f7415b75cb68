"""Helpers shared by the projectors."""

from __future__ import annotations

import re
from datetime import datetime

_WHITESPACE_RUN = re.compile(r"\s+")

DEFAULT_DATE_FORMAT = "%d %B %Y, %I:%M %p"


def hyphenate(name: str) -> str:
    """Replace each whitespace run in *name* with a single hyphen."""
    return _WHITESPACE_RUN.sub("-", name)


def format_timestamp(value: datetime, date_format: str = DEFAULT_DATE_FORMAT) -> str:
    """Render *value* for display in the report's single locale."""
    return value.strftime(date_format)
