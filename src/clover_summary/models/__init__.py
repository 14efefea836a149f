"""Data models for coverage rollups."""

from clover_summary.models.metrics import (
    COUNTER_NAMES,
    ClassMetric,
    Metric,
    Package,
    PackageMetric,
    SummaryMetric,
)

__all__ = [
    "COUNTER_NAMES",
    "ClassMetric",
    "Metric",
    "Package",
    "PackageMetric",
    "SummaryMetric",
]
