"""Report runner: discover Clover reports, aggregate them and write Markdown."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import TYPE_CHECKING

from clover_summary.adapters.clover import load_clover_file
from clover_summary.analyzers.metrics import MetricsAggregator
from clover_summary.detectors.package import PackageResolver
from clover_summary.errors import CloverSummaryError
from clover_summary.reporters.markdown import ReportAssembler
from clover_summary.utils.discovery import discover_reports

if TYPE_CHECKING:
    from clover_summary.config import SummaryConfig

logger = logging.getLogger(__name__)


@dataclass
class RunResult:
    """Outcome of one run."""

    summary: str
    """The summary Markdown document."""

    details: str
    """The details Markdown document."""

    reports: list[Path] = field(default_factory=list)
    """Reports that were fully processed, in processing order."""

    error: str | None = None
    """Failure message when the run stopped early."""

    @property
    def ok(self) -> bool:
        return self.error is None


def generate_reports(
    config: SummaryConfig,
    *,
    resolver: PackageResolver | None = None,
) -> RunResult:
    """Process every report matched by ``config.filename``, in discovery order.

    The first failing report stops the run. Fragments of reports completed
    before the failure are kept in the result.
    """
    if resolver is None:
        resolver = PackageResolver(config.root_path, manifests=config.manifests)
    aggregator = MetricsAggregator(resolver)
    assembler = ReportAssembler()
    processed: list[Path] = []
    error: str | None = None

    try:
        for report_path in discover_reports(
            config.filename, root=config.root_path, ignore=config.ignore
        ):
            logger.info("Processing %s", report_path)
            result = aggregator.aggregate(load_clover_file(report_path))
            assembler.add(result)
            processed.append(report_path)
    except (CloverSummaryError, OSError, ValueError) as e:
        logger.error("Coverage summary failed: %s", e)
        error = str(e)

    return RunResult(
        summary=assembler.summary,
        details=assembler.details,
        reports=processed,
        error=error,
    )


def write_outputs(result: RunResult, config: SummaryConfig) -> tuple[Path, Path]:
    """Write both documents, returning their paths."""
    summary_path = config.output_path(config.summary_path)
    details_path = config.output_path(config.details_path)
    for path, text in ((summary_path, result.summary), (details_path, result.details)):
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(text, encoding="utf-8")
        logger.debug("Wrote %s", path)
    return summary_path, details_path


def run(config: SummaryConfig, *, resolver: PackageResolver | None = None) -> RunResult:
    """Generate both documents and write them, even when the run failed."""
    result = generate_reports(config, resolver=resolver)
    write_outputs(result, config)
    return result
