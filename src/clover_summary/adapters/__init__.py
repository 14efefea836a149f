"""Readers for coverage report formats."""

from clover_summary.adapters.clover import load_clover_file, parse_clover_xml

__all__ = ["load_clover_file", "parse_clover_xml"]
