"""Exception hierarchy for sonicscribe."""


class SonicScribeError(Exception):
    """Base exception for all sonicscribe errors."""


class MalformedReportError(SonicScribeError):
    """Raw analysis payload is not valid JSON or lacks a required field.

    Callers render a dedicated "failed to parse analysis" state; a partially
    populated report is never produced.
    """

    def __init__(self, message: str, raw: str = "") -> None:
        super().__init__(message)
        self.raw = raw


class ExportError(SonicScribeError):
    """Raised when a print surface cannot be opened or a download cannot be written."""


class UpstreamError(SonicScribeError):
    """The upload/analysis collaborator returned a non-success response."""

    def __init__(self, message: str, status_code: int | None = None) -> None:
        super().__init__(message)
        self.status_code = status_code
