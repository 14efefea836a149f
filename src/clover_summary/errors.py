"""Exception types raised by clover-summary."""

from __future__ import annotations


class CloverSummaryError(Exception):
    """Base class for all clover-summary errors."""


class CloverFormatError(CloverSummaryError):
    """Raised when a coverage document does not have the expected structure."""


class ManifestError(CloverSummaryError):
    """Raised when a package manifest exists but cannot be read or parsed."""


class ConfigError(CloverSummaryError):
    """Raised when the configuration is invalid."""
