"""Reporters for rendering coverage rollups."""

from __future__ import annotations

from clover_summary.reporters.markdown import (
    ReportAssembler,
    format_metric_row,
    health_indicator,
)

__all__ = ["ReportAssembler", "format_metric_row", "health_indicator"]
