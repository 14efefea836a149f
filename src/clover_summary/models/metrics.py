"""Coverage metric models.

Every rollup level (class, package, project) carries the same set of Clover
counters. The level-specific models add only identifying fields.
"""

from __future__ import annotations

from dataclasses import dataclass, field

COUNTER_NAMES: tuple[str, ...] = (
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
    "classes",
    "coveredclasses",
)
"""All counter fields of :class:`Metric`, in declaration order."""


@dataclass
class Metric:
    """Raw Clover counters for one rollup."""

    loc: int = 0
    """Total lines of code."""

    ncloc: int = 0
    """Non-comment lines of code."""

    methods: int = 0
    coveredmethods: int = 0
    conditionals: int = 0
    coveredconditionals: int = 0
    statements: int = 0
    coveredstatements: int = 0
    elements: int = 0
    coveredelements: int = 0
    classes: int = 0

    coveredclasses: int = 0
    """Derived: never read from the document, counted from fully covered classes."""

    def add(self, other: Metric) -> None:
        """Accumulate every counter of *other* into this metric."""
        for name in COUNTER_NAMES:
            setattr(self, name, getattr(self, name) + getattr(other, name))

    def counters(self) -> dict[str, int]:
        """Return the counters as a plain ``{name: value}`` mapping."""
        return {name: getattr(self, name) for name in COUNTER_NAMES}


@dataclass
class ClassMetric(Metric):
    """Counters for a single source class."""

    name: str = ""
    complexity: int = 0

    @property
    def is_fully_covered(self) -> bool:
        """Return True if every statement of the class was executed.

        A class without statements is never considered covered.
        """
        if self.statements <= 0:
            return False
        return int(self.coveredstatements / self.statements * 100) == 100


@dataclass
class PackageMetric(Metric):
    """Counters accumulated over every file attributed to a package."""

    name: str = ""


@dataclass
class SummaryMetric(Metric):
    """Project-wide totals."""

    files: int = 0


@dataclass
class Package:
    """A package and the classes attributed to it.

    ``classes`` keeps first-seen order; a repeated class name replaces the
    stored metric in place.
    """

    name: str
    metrics: PackageMetric
    classes: dict[str, ClassMetric] = field(default_factory=dict)

    @classmethod
    def empty(cls, name: str) -> Package:
        """Create a package with zeroed counters."""
        return cls(name=name, metrics=PackageMetric(name=name))

