"""Tests for the Clover XML reader (adapters/clover.py)."""

from __future__ import annotations

from typing import TYPE_CHECKING

import pytest
from defusedxml import ElementTree

from clover_summary.adapters.clover import (
    int_attr,
    load_clover_file,
    metrics_of,
    parse_clover_xml,
    project_of,
)
from clover_summary.errors import CloverFormatError

if TYPE_CHECKING:
    from pathlib import Path

    from tests.conftest import CloverBuilder


class TestParseCloverXml:
    def test_returns_coverage_root(self, two_package_xml: str) -> None:
        root = parse_clover_xml(two_package_xml)
        assert root.tag == "coverage"
        assert project_of(root).tag == "project"

    def test_rejects_malformed_xml(self) -> None:
        with pytest.raises(CloverFormatError, match="Invalid Clover XML"):
            parse_clover_xml("<coverage><project>")

    def test_rejects_other_root(self) -> None:
        with pytest.raises(CloverFormatError, match="not <coverage>"):
            parse_clover_xml('<report name="jacoco"/>')

    def test_rejects_missing_project(self) -> None:
        with pytest.raises(CloverFormatError, match="no <project>"):
            parse_clover_xml("<coverage/>")


class TestLoadCloverFile:
    def test_reads_file(self, tmp_path: Path, clover: type[CloverBuilder]) -> None:
        path = tmp_path / "clover.xml"
        path.write_text(clover.document("", files=0), encoding="utf-8")
        assert load_clover_file(path).tag == "coverage"

    def test_error_names_the_file(self, tmp_path: Path) -> None:
        path = tmp_path / "clover.xml"
        path.write_text("<coverage/>", encoding="utf-8")
        with pytest.raises(CloverFormatError, match="clover.xml"):
            load_clover_file(path)

    def test_missing_file_raises_os_error(self, tmp_path: Path) -> None:
        with pytest.raises(OSError):
            load_clover_file(tmp_path / "missing.xml")


class TestAttributes:
    def test_int_attr(self) -> None:
        elem = ElementTree.fromstring('<metrics statements="42"/>')
        assert int_attr(elem, "statements") == 42

    def test_int_attr_missing(self) -> None:
        elem = ElementTree.fromstring("<metrics/>")
        with pytest.raises(CloverFormatError, match="statements"):
            int_attr(elem, "statements")

    def test_int_attr_not_a_number(self) -> None:
        elem = ElementTree.fromstring('<metrics statements="4x"/>')
        with pytest.raises(ValueError, match="4x"):
            int_attr(elem, "statements")

    @pytest.mark.parametrize("value", ["1_000", " 12 ", "+3", "-1", "\u0663"])
    def test_int_attr_rejects_non_digit_forms(self, value: str) -> None:
        elem = ElementTree.fromstring(f'<metrics statements="{value}"/>')
        with pytest.raises(ValueError, match="not a decimal integer"):
            int_attr(elem, "statements")

    def test_metrics_of_missing(self) -> None:
        elem = ElementTree.fromstring('<file name="a.php"/>')
        with pytest.raises(CloverFormatError, match="a.php"):
            metrics_of(elem)
