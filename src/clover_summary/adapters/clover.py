"""Clover XML reader.

Clover reports are produced by PHPUnit, Jest/Istanbul (``clover`` reporter),
OpenClover and similar tools. Only the structure is checked here; counters are
read by the aggregator.

Expected layout::

    <coverage>
      <project>
        <metrics files=".." loc=".." .../>
        <file name="..."> | <package name="..."><file name="...">...
      </project>
    </coverage>
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from defusedxml import ElementTree
from defusedxml.ElementTree import ParseError as DefusedParseError

from clover_summary.errors import CloverFormatError

if TYPE_CHECKING:
    from pathlib import Path
    from xml.etree.ElementTree import Element as XmlElement

logger = logging.getLogger(__name__)


def int_attr(element: XmlElement, key: str) -> int:
    """Read a decimal integer attribute.

    Raises:
        CloverFormatError: If the attribute is missing.
        ValueError: If the attribute is not a plain run of ASCII digits.
    """
    value = element.get(key)
    if value is None:
        raise CloverFormatError(f"<{element.tag}> is missing the {key!r} attribute")
    if not (value.isascii() and value.isdigit()):
        raise ValueError(f"<{element.tag}> attribute {key!r} is not a decimal integer: {value!r}")
    return int(value)


def metrics_of(element: XmlElement) -> XmlElement:
    """Return the ``<metrics>`` child of a project, file or class element."""
    metrics = element.find("metrics")
    if metrics is None:
        name = element.get("name", "")
        raise CloverFormatError(f"<{element.tag} name={name!r}> has no <metrics> element")
    return metrics


def project_of(root: XmlElement) -> XmlElement:
    """Return the ``<project>`` element of a parsed ``<coverage>`` document."""
    if root.tag != "coverage":
        raise CloverFormatError(f"Clover XML root is not <coverage>: <{root.tag}>")
    project = root.find("project")
    if project is None:
        raise CloverFormatError("Clover XML has no <project> element")
    return project


def parse_clover_xml(text: str) -> XmlElement:
    """Parse Clover XML text and return the ``<coverage>`` root element.

    Raises:
        CloverFormatError: If the text is not well-formed XML or lacks a project.
    """
    try:
        root = ElementTree.fromstring(text)
    except DefusedParseError as e:
        raise CloverFormatError(f"Invalid Clover XML: {e}") from e
    project_of(root)
    return root


def load_clover_file(coverage_file: Path) -> XmlElement:
    """Read and parse a Clover report from disk.

    Raises:
        OSError: If the file cannot be read.
        CloverFormatError: If the content is not a Clover document.
    """
    logger.debug("Reading Clover report %s", coverage_file)
    text = coverage_file.read_text(encoding="utf-8")
    try:
        return parse_clover_xml(text)
    except CloverFormatError as e:
        raise CloverFormatError(f"{coverage_file}: {e}") from e
