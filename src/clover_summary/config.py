"""Configuration parsing from ``.clover-summary.yml`` and action inputs."""

from __future__ import annotations

import logging
import os
import re
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

import yaml

from clover_summary.detectors.package import DEFAULT_MANIFESTS
from clover_summary.errors import ConfigError
from clover_summary.utils.actions import get_input
from clover_summary.utils.discovery import DEFAULT_IGNORE

logger = logging.getLogger(__name__)

CONFIG_FILE_NAME = ".clover-summary.yml"

_ENV_VAR_RE = re.compile(r"\$\{(\w+)\}")

# Action inputs that map onto config fields.
_ACTION_INPUTS = ("filename", "summary_path", "details_path")


def _resolve_env_vars(value: str) -> str:
    """Replace ``${VAR_NAME}`` placeholders with environment variable values."""

    def _replace(match: re.Match[str]) -> str:
        var = match.group(1)
        resolved = os.environ.get(var)
        if resolved is None:
            logger.warning("Environment variable %s is not set (referenced in config)", var)
            return ""
        return resolved

    return _ENV_VAR_RE.sub(_replace, value)


def _resolve_value(value: Any) -> Any:
    if isinstance(value, str):
        return _resolve_env_vars(value)
    if isinstance(value, list):
        return [_resolve_env_vars(item) if isinstance(item, str) else item for item in value]
    return value


def _str_list(raw: dict[str, Any], key: str, default: tuple[str, ...]) -> list[str]:
    value = raw.get(key)
    if value is None:
        return list(default)
    if isinstance(value, str):
        return [value]
    if not isinstance(value, list):
        raise ConfigError(f"{key!r} must be a list of strings, got {type(value).__name__}")
    return [str(item) for item in value]


@dataclass
class SummaryConfig:
    """Settings for one clover-summary run."""

    root: str
    """Directory that report patterns and relative source paths are resolved against."""

    filename: str = "coverage.xml"
    """Glob pattern of the Clover reports to read."""

    summary_path: str = "code-coverage-summary.md"
    """Output path of the per-package summary document."""

    details_path: str = "code-coverage-details.md"
    """Output path of the per-class details document."""

    ignore: list[str] = field(default_factory=lambda: list(DEFAULT_IGNORE))
    """Glob patterns excluded from report discovery."""

    manifests: list[str] = field(default_factory=lambda: list(DEFAULT_MANIFESTS))
    """Package manifest file names, in lookup order."""

    @property
    def root_path(self) -> Path:
        return Path(self.root)

    def output_path(self, value: str) -> Path:
        """Resolve an output path against the project root."""
        path = Path(value)
        return path if path.is_absolute() else self.root_path / path


def _read_config_file(path: Path) -> dict[str, Any]:
    if not path.is_file():
        return {}
    try:
        parsed = yaml.safe_load(path.read_text(encoding="utf-8"))
    except yaml.YAMLError as e:
        raise ConfigError(f"Invalid YAML in {path}: {e}") from e
    if parsed is None:
        return {}
    if not isinstance(parsed, dict):
        raise ConfigError(f"{path} must contain a mapping at the top level")
    return {key: _resolve_value(value) for key, value in parsed.items()}


def load_config(root: str | Path, overrides: dict[str, Any] | None = None) -> SummaryConfig:
    """Load the configuration for a run rooted at *root*.

    Values are layered, later sources winning: defaults, ``.clover-summary.yml``,
    GitHub Actions inputs (``INPUT_FILENAME``, ``INPUT_SUMMARY_PATH``,
    ``INPUT_DETAILS_PATH``), then *overrides* (``None`` values are skipped).

    Raises:
        ConfigError: If the config file is malformed.
    """
    root_path = Path(root).resolve()
    raw = _read_config_file(root_path / CONFIG_FILE_NAME)

    for name in _ACTION_INPUTS:
        value = get_input(name)
        if value is not None:
            raw[name] = value

    for key, value in (overrides or {}).items():
        if value is not None:
            raw[key] = value

    config = SummaryConfig(
        root=str(raw.get("root", root_path)),
        filename=str(raw.get("filename", "coverage.xml")),
        summary_path=str(raw.get("summary_path", "code-coverage-summary.md")),
        details_path=str(raw.get("details_path", "code-coverage-details.md")),
        ignore=_str_list(raw, "ignore", DEFAULT_IGNORE),
        manifests=_str_list(raw, "manifests", DEFAULT_MANIFESTS),
    )
    logger.debug("Loaded configuration: %s", config)
    return config


def validate_config(config: SummaryConfig) -> list[str]:
    """Return a list of configuration problems (empty when valid)."""
    errors: list[str] = []
    if not config.filename.strip():
        errors.append("filename must not be empty")
    if not config.root_path.is_dir():
        errors.append(f"root {config.root!r} is not a directory")
    if not config.manifests:
        errors.append("manifests must name at least one manifest file")
    if config.summary_path == config.details_path:
        errors.append("summary_path and details_path must differ")
    return errors
