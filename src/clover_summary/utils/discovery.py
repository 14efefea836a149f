"""Coverage report discovery."""

from __future__ import annotations

import fnmatch
import glob
import logging
from pathlib import Path
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from collections.abc import Sequence

logger = logging.getLogger(__name__)

DEFAULT_IGNORE: tuple[str, ...] = ("node_modules/**", "**/node_modules/**")
"""Dependency-cache directories never searched for reports."""


def _is_ignored(relative: str, ignore: Sequence[str]) -> bool:
    return any(fnmatch.fnmatch(relative, pattern) for pattern in ignore)


def discover_reports(
    pattern: str,
    *,
    root: Path,
    ignore: Sequence[str] = DEFAULT_IGNORE,
) -> list[Path]:
    """Expand *pattern* into the coverage report files it matches.

    Relative patterns are expanded under *root*; ``**`` matches any number of
    directories. Matches are returned sorted, directories and ignored paths
    are dropped.
    """
    result: list[Path] = []
    for match in sorted(glob.glob(pattern, root_dir=root, recursive=True)):
        path = Path(match) if Path(match).is_absolute() else root / match
        if not path.is_file():
            continue
        try:
            relative = path.relative_to(root).as_posix()
        except ValueError:
            relative = path.as_posix()
        if _is_ignored(relative, ignore):
            logger.debug("Ignoring %s", relative)
            continue
        result.append(path)
    logger.info("Pattern %r matched %d report(s)", pattern, len(result))
    return result
