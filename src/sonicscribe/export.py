"""Export coordinator: turns projector output into user-facing side effects.

The coordinator only sees projector output (``TranscriptExport``,
``PrintDocument``) and plain text; it never classifies anything.  Failures are
reported as ``ExportNotice`` values instead of exceptions so a failed export
leaves the loaded report usable.  Nothing is retried.
"""

from __future__ import annotations

import asyncio
import functools
import logging
import tempfile
import threading
import time
import webbrowser
from dataclasses import dataclass
from pathlib import Path
from typing import Callable, Optional, Protocol

from sonicscribe.core.config import ExportConfig, PDFFormattingConfig
from sonicscribe.exceptions import ExportError
from sonicscribe.formatters.html_formatter import HTMLFormatter
from sonicscribe.formatters.text_formatter import TextFormatter
from sonicscribe.projectors.document import PrintDocument
from sonicscribe.projectors.transcript import TranscriptExport

log = logging.getLogger(__name__)


@dataclass(frozen=True)
class ExportNotice:
    """Transient, non-blocking message shown when an export fails."""

    message: str
    level: str = "warning"


# ── Collaborator protocols ───────────────────────────────────────────


class DownloadTarget(Protocol):
    """Receives a file-style download."""

    def save(self, filename: str, content: bytes, content_type: str) -> str:
        """Store *content* and return where it went. Raises ``ExportError``."""
        ...


class PrintSurface(Protocol):
    """A blank document surface (e.g. a print window) that accepts markup."""

    def write(self, markup: str) -> None: ...

    def print(self) -> None: ...

    def close(self) -> None: ...


class Clipboard(Protocol):
    def write_text(self, text: str) -> None: ...


PrintSurfaceOpener = Callable[[], Optional[PrintSurface]]


# ── Concrete collaborators ───────────────────────────────────────────


class FileDownloadTarget:
    """Writes downloads into a directory, byte-for-byte."""

    def __init__(self, directory: Path) -> None:
        self._directory = directory

    def save(self, filename: str, content: bytes, content_type: str) -> str:
        # Keep only the final path component so a patient name cannot escape the directory.
        path = self._directory / Path(filename).name
        try:
            self._directory.mkdir(parents=True, exist_ok=True)
            path.write_bytes(content)
        except OSError as exc:
            raise ExportError(f"Could not write {path}: {exc}") from exc
        log.info("Saved %s (%s, %d bytes)", path, content_type, len(content))
        return str(path)


class BrowserPrintSurface:
    """Print surface backed by the system web browser.

    Markup is written to a temporary HTML file; ``print`` opens it in a
    browser tab, where the embedded script raises the print dialog.  The file
    holds patient data, so ``close`` deletes it once the browser has had
    *retention_s* seconds to load it.  Files left behind by a process that
    exited before its timer fired are swept on the next ``write``.
    """

    _PREFIX = "sonicscribe-"

    def __init__(self, browser: webbrowser.BaseBrowser, *, retention_s: float = 30.0) -> None:
        self._browser = browser
        self._retention_s = retention_s
        self._path: Optional[Path] = None

    @classmethod
    def open(cls, *, retention_s: float = 30.0) -> Optional[BrowserPrintSurface]:
        try:
            return cls(webbrowser.get(), retention_s=retention_s)
        except webbrowser.Error as exc:
            log.warning("No browser available for printing: %s", exc)
            return None

    def write(self, markup: str) -> None:
        self._sweep_stale()
        try:
            with tempfile.NamedTemporaryFile(
                "w", suffix=".html", prefix=self._PREFIX, delete=False, encoding="utf-8"
            ) as handle:
                handle.write(markup)
        except OSError as exc:
            raise ExportError(f"Could not write the print document: {exc}") from exc
        self._path = Path(handle.name)

    def print(self) -> None:
        if self._path is None:
            raise ExportError("Nothing was written to the print surface")
        try:
            opened = self._browser.open(self._path.as_uri())
        except (webbrowser.Error, OSError) as exc:
            raise ExportError(f"The browser could not open the print document: {exc}") from exc
        if not opened:
            raise ExportError("The browser refused to open the print document")

    def close(self) -> None:
        path, self._path = self._path, None
        if path is None:
            return
        timer = threading.Timer(self._retention_s, _remove_quietly, args=(path,))
        timer.daemon = True
        timer.start()

    def _sweep_stale(self) -> None:
        cutoff = time.time() - self._retention_s
        for path in Path(tempfile.gettempdir()).glob(f"{self._PREFIX}*.html"):
            try:
                if path.stat().st_mtime < cutoff:
                    path.unlink()
            except OSError as exc:
                log.debug("Could not remove stale print document %s: %s", path, exc)


def _remove_quietly(path: Path) -> None:
    try:
        path.unlink(missing_ok=True)
    except OSError as exc:
        log.warning("Could not remove print document %s: %s", path, exc)


# ── Coordinator ──────────────────────────────────────────────────────


class ExportCoordinator:
    """Runs downloads, print capture and clipboard copies for one report view."""

    def __init__(
        self,
        config: ExportConfig | None = None,
        *,
        download_target: DownloadTarget | None = None,
        open_print_surface: PrintSurfaceOpener | None = None,
        clipboard: Clipboard | None = None,
        pdf_config: PDFFormattingConfig | None = None,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        self._config = config or ExportConfig()
        self._download_target = download_target or FileDownloadTarget(self._config.download_dir)
        self._open_print_surface = open_print_surface or functools.partial(
            BrowserPrintSurface.open, retention_s=self._config.print_file_retention_s
        )
        self._clipboard = clipboard
        self._pdf_config = pdf_config
        self._clock = clock
        self._html = HTMLFormatter()
        self._text = TextFormatter()
        self._copied_label: Optional[str] = None
        self._copied_at = 0.0

    # ── Downloads ────────────────────────────────────────────────────

    def download_transcript(self, export: TranscriptExport) -> ExportNotice | None:
        """Save the transcript as ``text/plain`` under its computed filename."""
        try:
            self._download_target.save(export.filename, self._text.format(export), export.content_type)
        except ExportError as exc:
            return self._notice(f"Could not download the transcript: {exc}")
        return None

    def export_pdf(self, document: PrintDocument) -> ExportNotice | None:
        """Render *document* to PDF and save it under the report's PDF filename."""
        try:
            from sonicscribe.formatters.pdf_formatter import PDFFormatter
        except ImportError:
            return self._notice("PDF export requires the 'pdf' extra: pip install sonicscribe[pdf]")

        formatter = PDFFormatter(self._pdf_config)
        try:
            self._download_target.save(document.filename, formatter.format(document), formatter.content_type)
        except ExportError as exc:
            return self._notice(f"Could not save the PDF report: {exc}")
        return None

    # ── Print capture ────────────────────────────────────────────────

    async def print_document(self, document: PrintDocument) -> ExportNotice | None:
        """Hand the print markup to a fresh surface, print it, then close it."""
        surface = self._open_print_surface()
        if surface is None:
            return self._notice("Could not open the print window. Allow pop-ups and try again.")

        markup = self._html.render(document, auto_print=True)
        try:
            surface.write(markup)
            await asyncio.sleep(self._config.print_delay_ms / 1000)
            surface.print()
        except ExportError as exc:
            return self._notice(f"Printing failed: {exc}")
        finally:
            surface.close()
        log.info("Sent %s to the print surface", document.filename)
        return None

    # ── Clipboard ────────────────────────────────────────────────────

    def copy_to_clipboard(self, text: str, label: str) -> ExportNotice | None:
        """Copy *text* and show a confirmation for *label* until the delay elapses."""
        if self._clipboard is None:
            return self._notice("Clipboard is not available")
        try:
            self._clipboard.write_text(text)
        except ExportError as exc:
            return self._notice(f"Could not copy {label}: {exc}")
        self._copied_label = label
        self._copied_at = self._clock()
        return None

    @property
    def copied_label(self) -> Optional[str]:
        """Label of the most recent copy, or ``None`` once the confirmation has expired."""
        if self._copied_label is None:
            return None
        elapsed_ms = (self._clock() - self._copied_at) * 1000
        if elapsed_ms >= self._config.copy_confirmation_ms:
            self._copied_label = None
        return self._copied_label

    def _notice(self, message: str) -> ExportNotice:
        log.warning(message)
        return ExportNotice(message)
