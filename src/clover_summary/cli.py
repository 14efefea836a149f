"""clover-summary CLI."""

from __future__ import annotations

import logging
import sys

import click
from rich.console import Console
from rich.logging import RichHandler
from rich.table import Table

from clover_summary import __version__
from clover_summary.config import load_config, validate_config
from clover_summary.errors import ConfigError
from clover_summary.runner import RunResult, run
from clover_summary.utils.actions import report_failure

logger = logging.getLogger(__name__)
console = Console(stderr=True)


def _configure_logging(*, verbose: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(message)s",
        handlers=[RichHandler(console=console, show_path=False)],
        force=True,
    )


def _display_result(result: RunResult, summary_path: str, details_path: str) -> None:
    table = Table(title="Coverage summary", show_header=True, header_style="bold")
    table.add_column("Report")
    table.add_column("Status")
    for report in result.reports:
        table.add_row(str(report), "[green]processed[/green]")
    if not result.reports:
        table.add_row("[dim]none[/dim]", "[yellow]no reports matched[/yellow]")
    console.print(table)
    console.print(f"Summary written to [cyan]{summary_path}[/cyan]")
    console.print(f"Details written to [cyan]{details_path}[/cyan]")


@click.command()
@click.option(
    "--filename",
    "-f",
    default=None,
    help="Glob pattern of the Clover XML reports (default: coverage.xml).",
)
@click.option("--summary-path", default=None, help="Where to write the summary document.")
@click.option("--details-path", default=None, help="Where to write the details document.")
@click.option(
    "--root",
    default=".",
    type=click.Path(file_okay=False),
    help="Project root for report discovery and package resolution.",
)
@click.option("--verbose", "-v", is_flag=True, help="Enable debug logging.")
@click.version_option(version=__version__, prog_name="clover-summary")
def cli(
    filename: str | None,
    summary_path: str | None,
    details_path: str | None,
    root: str,
    *,
    verbose: bool,
) -> None:
    """Render Clover coverage reports as Markdown tables for pull requests."""
    _configure_logging(verbose=verbose)

    try:
        config = load_config(
            root,
            {
                "filename": filename,
                "summary_path": summary_path,
                "details_path": details_path,
            },
        )
    except ConfigError as e:
        report_failure(str(e))
        sys.exit(1)

    problems = validate_config(config)
    if problems:
        report_failure("Invalid configuration: " + "; ".join(problems))
        sys.exit(1)

    try:
        result = run(config)
    except OSError as e:
        report_failure(f"Cannot write coverage documents: {e}")
        sys.exit(1)
    _display_result(
        result,
        str(config.output_path(config.summary_path)),
        str(config.output_path(config.details_path)),
    )

    if not result.ok:
        report_failure(result.error or "Coverage summary failed")
        sys.exit(1)

