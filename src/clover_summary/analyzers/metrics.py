"""Metrics aggregator: roll Clover counters up into packages and a project summary.

Clover documents list files in one of three shapes. Each shape has its own
normalization function producing the same flat, document-ordered list of
``<file>`` elements. The document's own ``<package>`` grouping is discarded:
packages are always taken from the :class:`PackageResolver`.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from enum import Enum
from typing import TYPE_CHECKING

from clover_summary.adapters.clover import int_attr, metrics_of, project_of
from clover_summary.errors import CloverFormatError
from clover_summary.models.metrics import (
    ClassMetric,
    Metric,
    Package,
    SummaryMetric,
)

if TYPE_CHECKING:
    from collections.abc import Callable
    from xml.etree.ElementTree import Element as XmlElement

    from clover_summary.detectors.package import PackageResolver

logger = logging.getLogger(__name__)

# Counters read from <file> and <class> metrics. ``coveredclasses`` is derived.
_FILE_COUNTERS: tuple[str, ...] = (
    "classes",
    "loc",
    "ncloc",
    "methods",
    "coveredmethods",
    "conditionals",
    "coveredconditionals",
    "statements",
    "coveredstatements",
    "elements",
    "coveredelements",
)
_CLASS_COUNTERS = tuple(name for name in _FILE_COUNTERS if name != "classes")
_PROJECT_COUNTERS = ("files", *_FILE_COUNTERS)


class DocumentShape(Enum):
    """How a Clover project lays out its ``<file>`` elements."""

    PROJECT_FILES = "project_files"
    """``<file>`` elements directly under ``<project>``."""

    SINGLE_PACKAGE = "single_package"
    """All files under one ``<package>``."""

    MULTI_PACKAGE = "multi_package"
    """Files spread over several ``<package>`` elements."""

    EMPTY = "empty"
    """Neither files nor packages."""


def detect_shape(project: XmlElement) -> DocumentShape:
    """Classify how *project* lists its files."""
    if project.find("file") is not None:
        return DocumentShape.PROJECT_FILES
    packages = project.findall("package")
    if len(packages) == 1:
        return DocumentShape.SINGLE_PACKAGE
    if packages:
        return DocumentShape.MULTI_PACKAGE
    return DocumentShape.EMPTY


def _project_files(project: XmlElement) -> list[XmlElement]:
    return project.findall("file")


def _single_package_files(project: XmlElement) -> list[XmlElement]:
    package = project.find("package")
    if package is None:
        return []
    return package.findall("file")


def _multi_package_files(project: XmlElement) -> list[XmlElement]:
    files: list[XmlElement] = []
    for package in project.findall("package"):
        files.extend(package.findall("file"))
    return files


def _no_files(project: XmlElement) -> list[XmlElement]:
    return []


_NORMALIZERS: dict[DocumentShape, Callable[[XmlElement], list[XmlElement]]] = {
    DocumentShape.PROJECT_FILES: _project_files,
    DocumentShape.SINGLE_PACKAGE: _single_package_files,
    DocumentShape.MULTI_PACKAGE: _multi_package_files,
    DocumentShape.EMPTY: _no_files,
}


def normalize_files(project: XmlElement) -> list[XmlElement]:
    """Return every ``<file>`` of *project* in document order."""
    shape = detect_shape(project)
    files = _NORMALIZERS[shape](project)
    logger.debug("Clover project shape %s with %d file(s)", shape.value, len(files))
    return files


def _read_counters(metrics: XmlElement, names: tuple[str, ...]) -> dict[str, int]:
    return {name: int_attr(metrics, name) for name in names}


def _file_metric(file_elem: XmlElement) -> Metric:
    return Metric(**_read_counters(metrics_of(file_elem), _FILE_COUNTERS))


def _class_metric(class_elem: XmlElement) -> ClassMetric:
    metrics = metrics_of(class_elem)
    name = class_elem.get("name")
    if name is None:
        raise CloverFormatError("<class> is missing the 'name' attribute")
    class_metric = ClassMetric(
        name=name,
        complexity=int_attr(metrics, "complexity"),
        classes=1,
        **_read_counters(metrics, _CLASS_COUNTERS),
    )
    class_metric.coveredclasses = 1 if class_metric.is_fully_covered else 0
    return class_metric


@dataclass
class AggregationResult:
    """Rollups for one Clover document."""

    packages: dict[str, Package] = field(default_factory=dict)
    """Packages in first-seen order."""

    summary: SummaryMetric = field(default_factory=SummaryMetric)
    """Project totals."""


class MetricsAggregator:
    """Aggregate a parsed Clover document into package and project rollups.

    The aggregator keeps no state between calls; only the resolver's cache is
    shared across documents.
    """

    def __init__(self, resolver: PackageResolver) -> None:
        self._resolver = resolver

    def aggregate(self, root: XmlElement) -> AggregationResult:
        """Aggregate the ``<coverage>`` document rooted at *root*.

        Raises:
            CloverFormatError: If the document has no project or lacks metrics.
            ValueError: If a counter is not a decimal integer.
        """
        project = project_of(root)
        packages: dict[str, Package] = {}

        for file_elem in normalize_files(project):
            file_name = file_elem.get("name")
            if file_name is None:
                raise CloverFormatError("<file> is missing the 'name' attribute")
            package_name = self._resolver.resolve(file_name)

            package = packages.get(package_name)
            if package is None:
                package = Package.empty(package_name)
                packages[package_name] = package

            file_metric = _file_metric(file_elem)
            package.metrics.add(file_metric)

            for class_elem in file_elem.findall("class"):
                class_metric = _class_metric(class_elem)
                package.classes[class_metric.name] = class_metric
                package.metrics.coveredclasses += class_metric.coveredclasses

        summary = SummaryMetric(**_read_counters(metrics_of(project), _PROJECT_COUNTERS))
        summary.coveredclasses = sum(p.metrics.coveredclasses for p in packages.values())

        logger.info(
            "Aggregated %d package(s), %d of %d class(es) fully covered",
            len(packages),
            summary.coveredclasses,
            summary.classes,
        )
        return AggregationResult(packages=packages, summary=summary)
