"""Analyzers that turn parsed coverage documents into rollups."""

from clover_summary.analyzers.metrics import (
    AggregationResult,
    DocumentShape,
    MetricsAggregator,
    detect_shape,
    normalize_files,
)

__all__ = [
    "AggregationResult",
    "DocumentShape",
    "MetricsAggregator",
    "detect_shape",
    "normalize_files",
]
