"""CLI for sonicscribe: show / transcript / document / pdf / print commands."""

from __future__ import annotations

import asyncio
import logging
from datetime import datetime
from pathlib import Path
from typing import Optional

import typer
from rich.console import Console
from rich.markup import escape
from rich.panel import Panel
from rich.table import Table

from sonicscribe.classification import ReportClassification, classify_report
from sonicscribe.core.config import AppSettings
from sonicscribe.exceptions import MalformedReportError
from sonicscribe.export import ExportCoordinator, ExportNotice, FileDownloadTarget
from sonicscribe.formatters.html_formatter import HTMLFormatter
from sonicscribe.loader import load_report
from sonicscribe.models import AnalysisReport
from sonicscribe.projectors.dashboard import DASHBOARD_TABS, DashboardView, project_dashboard
from sonicscribe.projectors.document import PrintDocument, project_document
from sonicscribe.projectors.transcript import project_transcript

app = typer.Typer(name="sonicscribe", help="Review and export AI medical analysis reports")
console = Console()

# rich colour names for each style token key
_TOKEN_COLOURS = {
    "triage-emergency": "bold red",
    "triage-urgent": "bold yellow",
    "triage-normal": "bold green",
    "risk-high": "bold red",
    "risk-moderate": "bold yellow",
    "risk-low": "bold green",
    "admission-required": "bold red",
}


def _configure(verbose: bool) -> None:
    if verbose:
        logging.basicConfig(level=logging.DEBUG)


def _load(report_file: Path) -> tuple[AnalysisReport, ReportClassification]:
    """Load and classify *report_file*, exiting with status 1 if it does not parse."""
    try:
        report = load_report(report_file)
    except MalformedReportError as exc:
        console.print(f"[red]Failed to parse analysis data:[/red] {escape(str(exc))}")
        raise typer.Exit(code=1) from exc
    return report, classify_report(report)


def _document(report: AnalysisReport, tiers: ReportClassification, settings: AppSettings) -> PrintDocument:
    return project_document(
        report,
        tiers.triage,
        tiers.risk,
        generated_at=datetime.now(),
        app_name=settings.report.app_name,
        date_format=settings.report.date_format,
    )


def _report_notice(notice: Optional[ExportNotice]) -> None:
    if notice is not None:
        console.print(f"[yellow]{notice.message}[/yellow]")
        raise typer.Exit(code=1)


def _styled(text: str, key: Optional[str]) -> str:
    text = escape(text)
    colour = _TOKEN_COLOURS.get(key or "")
    return f"[{colour}]{text}[/{colour}]" if colour else text


def _render_overview(view: DashboardView) -> None:
    header = f"[bold]{escape(view.patient_name)}[/bold]\n{escape(view.file.original_name)} - uploaded {view.file.uploaded_on}"
    if view.file.url:
        header += f"\n{escape(view.file.url)}"
    console.print(Panel(header, title="Medical Analysis Report"))

    for section in view.sections:
        title = escape(section.title)
        if section.badge:
            badge_key = section.badge_style.key if section.badge_style else None
            title = f"{title}  {_styled(section.badge.upper(), badge_key)}"

        table = Table(title=title, show_header=False, title_justify="left", expand=True)
        table.add_column("Label", style="cyan", no_wrap=True)
        table.add_column("Value")
        for entry in section.fields:
            table.add_row(entry.label, _styled(entry.value, entry.style.key if entry.style else None))
        for item in section.items:
            table.add_row("", f"- {escape(item)}")
        if section.meter is not None:
            table.add_row("Meter", f"{section.meter}%")
        console.print(table)


@app.command()
def show(
    report_file: Path = typer.Argument(..., exists=True, dir_okay=False, help="Analysis report JSON file"),
    tab: str = typer.Option("overview", help=f"Tab to display: {', '.join(DASHBOARD_TABS)}"),
    verbose: bool = typer.Option(False, "--verbose", "-v"),
) -> None:
    """Display a report the way the dashboard does."""
    _configure(verbose)
    if tab not in DASHBOARD_TABS:
        raise typer.BadParameter(f"Expected one of {', '.join(DASHBOARD_TABS)}", param_hint="--tab")

    settings = AppSettings()
    report, tiers = _load(report_file)
    view = project_dashboard(report, tiers.triage, tiers.risk, date_format=settings.report.date_format)

    if tab == "transcript":
        console.print(view.transcript, markup=False, highlight=False)
    elif tab == "raw":
        console.print_json(view.raw_json)
    else:
        _render_overview(view)


@app.command()
def transcript(
    report_file: Path = typer.Argument(..., exists=True, dir_okay=False, help="Analysis report JSON file"),
    output_dir: Optional[Path] = typer.Option(None, "--output-dir", "-o", help="Directory for the .txt file"),
    verbose: bool = typer.Option(False, "--verbose", "-v"),
) -> None:
    """Save the verbatim transcript as transcript-<name>.txt."""
    _configure(verbose)
    settings = AppSettings()
    report, tiers = _load(report_file)
    export = project_transcript(report, tiers.triage, tiers.risk)

    directory = output_dir or settings.export.download_dir
    coordinator = ExportCoordinator(settings.export, download_target=FileDownloadTarget(directory))
    _report_notice(coordinator.download_transcript(export))
    console.print(f"[green]Transcript saved to {directory / export.filename}[/green]")


@app.command()
def document(
    report_file: Path = typer.Argument(..., exists=True, dir_okay=False, help="Analysis report JSON file"),
    output: Optional[Path] = typer.Option(None, help="Write the HTML here instead of stdout"),
    verbose: bool = typer.Option(False, "--verbose", "-v"),
) -> None:
    """Render the print-ready HTML document."""
    _configure(verbose)
    settings = AppSettings()
    report, tiers = _load(report_file)
    doc = _document(report, tiers, settings)

    formatter = HTMLFormatter()
    if output:
        formatter.format_to_file(doc, output)
        console.print(f"[green]Document saved to {output}[/green]")
    else:
        typer.echo(formatter.render(doc))


@app.command()
def pdf(
    report_file: Path = typer.Argument(..., exists=True, dir_okay=False, help="Analysis report JSON file"),
    output_dir: Optional[Path] = typer.Option(None, "--output-dir", "-o", help="Directory for the PDF"),
    verbose: bool = typer.Option(False, "--verbose", "-v"),
) -> None:
    """Export the report as <AppName>-Medical-Report-<name>.pdf."""
    _configure(verbose)
    settings = AppSettings()
    report, tiers = _load(report_file)
    doc = _document(report, tiers, settings)

    directory = output_dir or settings.export.download_dir
    coordinator = ExportCoordinator(
        settings.export,
        download_target=FileDownloadTarget(directory),
        pdf_config=settings.pdf,
    )
    _report_notice(coordinator.export_pdf(doc))
    console.print(f"[green]PDF saved to {directory / doc.filename}[/green]")


@app.command("print")
def print_report(
    report_file: Path = typer.Argument(..., exists=True, dir_okay=False, help="Analysis report JSON file"),
    verbose: bool = typer.Option(False, "--verbose", "-v"),
) -> None:
    """Open the print document in the browser and raise the print dialog."""
    _configure(verbose)
    settings = AppSettings()
    report, tiers = _load(report_file)
    doc = _document(report, tiers, settings)

    coordinator = ExportCoordinator(settings.export)
    _report_notice(asyncio.run(coordinator.print_document(doc)))
    console.print(f"[green]Sent {doc.title} to the printer[/green]")


if __name__ == "__main__":
    app()
