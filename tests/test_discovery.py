"""Tests for coverage report discovery (utils/discovery.py)."""

from __future__ import annotations

from typing import TYPE_CHECKING

from clover_summary.utils.discovery import discover_reports

if TYPE_CHECKING:
    from pathlib import Path

    from tests.conftest import FileHelpers


class TestDiscoverReports:
    def test_literal_filename(self, tmp_path: Path, files: type[FileHelpers]) -> None:
        files.write_file(tmp_path, "coverage.xml", "<coverage/>")
        assert discover_reports("coverage.xml", root=tmp_path) == [tmp_path / "coverage.xml"]

    def test_no_match(self, tmp_path: Path) -> None:
        assert discover_reports("coverage.xml", root=tmp_path) == []

    def test_recursive_pattern_sorted(self, tmp_path: Path, files: type[FileHelpers]) -> None:
        files.write_file(tmp_path, "b/clover.xml", "")
        files.write_file(tmp_path, "a/deep/clover.xml", "")
        files.write_file(tmp_path, "clover.xml", "")
        found = discover_reports("**/clover.xml", root=tmp_path)
        assert found == [
            tmp_path / "a/deep/clover.xml",
            tmp_path / "b/clover.xml",
            tmp_path / "clover.xml",
        ]

    def test_node_modules_ignored(self, tmp_path: Path, files: type[FileHelpers]) -> None:
        files.write_file(tmp_path, "node_modules/pkg/clover.xml", "")
        files.write_file(tmp_path, "packages/web/node_modules/x/clover.xml", "")
        files.write_file(tmp_path, "packages/web/clover.xml", "")
        found = discover_reports("**/clover.xml", root=tmp_path)
        assert found == [tmp_path / "packages/web/clover.xml"]

    def test_custom_ignore(self, tmp_path: Path, files: type[FileHelpers]) -> None:
        files.write_file(tmp_path, "build/clover.xml", "")
        files.write_file(tmp_path, "src/clover.xml", "")
        found = discover_reports("**/clover.xml", root=tmp_path, ignore=["build/**"])
        assert found == [tmp_path / "src/clover.xml"]

    def test_directories_skipped(self, tmp_path: Path) -> None:
        (tmp_path / "coverage.xml").mkdir()
        assert discover_reports("coverage.xml", root=tmp_path) == []

    def test_absolute_pattern(self, tmp_path: Path, files: type[FileHelpers]) -> None:
        report = files.write_file(tmp_path, "reports/clover.xml", "")
        assert discover_reports(str(tmp_path / "reports" / "*.xml"), root=tmp_path) == [report]
