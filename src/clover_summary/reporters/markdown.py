"""Markdown reporter for Clover coverage rollups.

Produces the two pull-request documents:

- a summary document with one ``<table>`` per report (one row per package),
- a details document with one collapsible ``<details>`` block per report
  (one row per class, grouped by package).

Both end every table with a bold project total row.
"""

from __future__ import annotations

import logging
import math
from decimal import ROUND_HALF_UP, Decimal
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from clover_summary.analyzers.metrics import AggregationResult
    from clover_summary.models.metrics import Metric

logger = logging.getLogger(__name__)

FULLY_COVERED = "🚀"
HEALTHY = "✅"
MARGINAL = "➖"
FAILING = "❌"

_FULL_RATE = 100
_HEALTHY_RATE = 80
_MARGINAL_RATE = 50

_CENTS = Decimal("0.01")

SUMMARY_LABEL = "Summary"


def _percentage(covered: int, total: int, *, guarded: bool = True) -> float:
    """Return ``covered / total * 100``.

    A zero *total* gives ``0.0`` when *guarded*; otherwise the IEEE result of
    the division (``nan`` for 0/0, ``inf`` for n/0).
    """
    if total == 0:
        if guarded:
            return 0.0
        return math.nan if covered == 0 else math.inf
    return covered / total * 100


def format_percentage(value: float) -> str:
    """Format a percentage with two decimals, rounding halves up."""
    if math.isnan(value):
        return "NaN%"
    if math.isinf(value):
        return "Infinity%"
    return f"{Decimal(value).quantize(_CENTS, rounding=ROUND_HALF_UP)}%"


def health_indicator(metric: Metric) -> str:
    """Return the health glyph for the method coverage of *metric*.

    The method percentage is truncated toward zero, not rounded, so 99.99%
    is not fully covered.
    """
    rate = int(_percentage(metric.coveredmethods, metric.methods))
    if rate == _FULL_RATE:
        return FULLY_COVERED
    if rate > _HEALTHY_RATE:
        return HEALTHY
    if rate > _MARGINAL_RATE:
        return MARGINAL
    return FAILING


def format_metric_row(label: str, metric: Metric, *, bold: bool = False) -> str:
    """Render *metric* as an HTML table row labelled *label*."""
    strong = "<strong>" if bold else ""
    statements = _percentage(metric.coveredstatements, metric.statements)
    methods = _percentage(metric.coveredmethods, metric.methods)
    # Unguarded: a zero class count renders as NaN%/Infinity%.
    classes = _percentage(metric.coveredclasses, metric.classes, guarded=False)
    return f"""<tr>
  <td>{strong}{label}
  <td align="center">{strong}{format_percentage(statements)}
  <td align="right">{strong}{metric.coveredstatements}/{metric.statements}
  <td align="center">{strong}{format_percentage(methods)}
  <td align="right">{strong}{metric.coveredmethods}/{metric.methods}
  <td align="center">{strong}{format_percentage(classes)}
  <td align="right">{strong}{metric.coveredclasses}/{metric.classes}
  <td align="center">{strong}{health_indicator(metric)}"""


def render_summary_table(result: AggregationResult) -> str:
    """Render the per-package summary table of one report."""
    package_rows = "\n".join(
        format_metric_row(package.name, package.metrics) for package in result.packages.values()
    )
    total_row = format_metric_row(SUMMARY_LABEL, result.summary, bold=True)
    return f"""<table>
      <tr>
        <th colspan="8">Code Coverage
      <tr>
        <th colspan="1">Package
        <th colspan="2">Lines
        <th colspan="2">Functions
        <th colspan="2">Classes
        <th colspan="1">Health
      {package_rows}
      {total_row}
      </table>"""


def render_details_block(result: AggregationResult) -> str:
    """Render the collapsible per-class table of one report."""
    package_sections = []
    for package in result.packages.values():
        class_rows = "\n".join(
            format_metric_row(class_metric.name, class_metric)
            for class_metric in package.classes.values()
        )
        package_sections.append(
            f"""<tr>
              <td colspan="8"><strong>{package.name}
              {class_rows}"""
        )
    packages = "\n".join(package_sections)
    total_row = format_metric_row(SUMMARY_LABEL, result.summary, bold=True)
    return f"""<details>
          <summary>Code Coverage details</summary>
          <table>
            <tr>
              <th colspan="8">Code Coverage
            <tr>
              <th colspan="1">Class
              <th colspan="2">Lines
              <th colspan="2">Functions
              <th colspan="2">Classes
              <th colspan="1">Health
            {packages}
            {total_row}
          </table>
        </details>"""


class ReportAssembler:
    """Accumulate summary and details fragments across reports.

    Fragments are kept in the order reports are added. Each document opens
    with a blank line and consecutive fragments are separated by blank lines.
    """

    def __init__(self) -> None:
        self._summary: list[str] = [""]
        self._details: list[str] = [""]
        self._reports = 0

    def add(self, result: AggregationResult) -> None:
        """Append the fragments for one aggregated report."""
        self._summary.extend((render_summary_table(result), "", ""))
        self._details.extend((render_details_block(result), "", ""))
        self._reports += 1
        logger.debug("Assembled report %d (%d package(s))", self._reports, len(result.packages))

    @property
    def report_count(self) -> int:
        """Number of reports added so far."""
        return self._reports

    @property
    def summary(self) -> str:
        """The summary Markdown document."""
        return "\n".join(self._summary)

    @property
    def details(self) -> str:
        """The details Markdown document."""
        return "\n".join(self._details)
