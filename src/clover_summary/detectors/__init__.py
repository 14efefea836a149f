"""Detectors that infer project structure from the filesystem."""

from clover_summary.detectors.package import (
    DEFAULT_MANIFESTS,
    UNKNOWN_PACKAGE,
    PackageResolver,
    read_json_manifest,
)

__all__ = ["DEFAULT_MANIFESTS", "UNKNOWN_PACKAGE", "PackageResolver", "read_json_manifest"]
