"""Package resolver: attribute source files to the package that owns them.

The owning package of a file is the ``name`` of the nearest ancestor
``composer.json`` or ``package.json``. Resolved directories are cached so
every further file below them resolves without touching the filesystem.
"""

from __future__ import annotations

import json
import logging
import threading
from collections.abc import Callable, Sequence
from pathlib import Path
from typing import Any

from clover_summary.errors import ManifestError
from clover_summary.utils.cache import PrefixCache

logger = logging.getLogger(__name__)

UNKNOWN_PACKAGE = "unknown"
"""Package name used when no ancestor manifest names the file's package."""

DEFAULT_MANIFESTS: tuple[str, ...] = ("composer.json", "package.json")
"""Manifest file names, in lookup order."""

ManifestReader = Callable[[Path], "dict[str, Any] | None"]
"""Reads a manifest: ``None`` when absent, raises :class:`ManifestError` when unusable."""


def read_json_manifest(path: Path) -> dict[str, Any] | None:
    """Read a JSON manifest.

    Returns:
        The parsed object, or ``None`` if *path* is not a file.

    Raises:
        ManifestError: If the file cannot be read or is not a JSON object.
    """
    if not path.is_file():
        return None
    try:
        data = json.loads(path.read_text(encoding="utf-8"))
    except (OSError, UnicodeDecodeError, json.JSONDecodeError) as e:
        raise ManifestError(f"Cannot parse manifest {path}: {e}") from e
    if not isinstance(data, dict):
        raise ManifestError(f"Manifest {path} is not a JSON object")
    return data


def _ancestor_prefixes(parts: list[str]) -> list[str]:
    """Return the proper ancestor prefixes of a split path, root-most first."""
    prefixes: list[str] = []
    for end in range(len(parts)):
        prefix = "/".join(parts[:end])
        if not prefixes or prefixes[-1] != prefix:
            prefixes.append(prefix)
    return prefixes


def _is_absolute(parts: list[str]) -> bool:
    return len(parts) > 1 and parts[0] == ""


class PackageResolver:
    """Resolve file paths to package names.

    Args:
        root: Directory that relative file paths are resolved against.
            Defaults to the current working directory.
        cache: Prefix cache to use. Pass one to pre-seed or inspect it.
        manifests: Manifest file names, checked in order in each directory.
        reader: Manifest reader, :func:`read_json_manifest` by default.
    """

    def __init__(
        self,
        root: Path | None = None,
        *,
        cache: PrefixCache[str] | None = None,
        manifests: Sequence[str] = DEFAULT_MANIFESTS,
        reader: ManifestReader = read_json_manifest,
    ) -> None:
        self._root = root if root is not None else Path.cwd()
        self._cache: PrefixCache[str] = cache if cache is not None else PrefixCache()
        self._manifests = tuple(manifests)
        self._reader = reader
        self._lock = threading.Lock()

    @property
    def cache(self) -> PrefixCache[str]:
        """The prefix cache backing this resolver."""
        return self._cache

    def resolve(self, file_path: str) -> str:
        """Return the name of the package owning *file_path*.

        Never raises: unreadable manifests are skipped. A file whose nearest
        manifest has no ``name``, or that has no ancestor manifest at all,
        belongs to ``"unknown"``.
        """
        parts = file_path.split("/")
        with self._lock:
            cached = self._cache.longest_match(_ancestor_prefixes(parts))
            if cached is not None and cached != UNKNOWN_PACKAGE:
                return cached
            return self._search(parts)

    def _search(self, parts: list[str]) -> str:
        absolute = _is_absolute(parts)
        remaining = parts[:-1]
        package_name = UNKNOWN_PACKAGE
        while True:
            prefix = "/".join(remaining)
            found = self._name_in_directory(self._directory(prefix, absolute=absolute))
            if found is not None:
                package_name = found
                break
            if not prefix:
                break
            remaining.pop()

        prefix = "/".join(remaining)
        logger.debug("Caching package %r for prefix %r", package_name, prefix)
        self._cache.put(prefix, package_name)
        return package_name

    def _directory(self, prefix: str, *, absolute: bool) -> Path:
        if absolute:
            return Path(prefix or "/")
        return self._root / prefix if prefix else self._root

    def _name_in_directory(self, directory: Path) -> str | None:
        for manifest in self._manifests:
            path = directory / manifest
            try:
                data = self._reader(path)
            except ManifestError as e:
                logger.error("%s", e)
                continue
            if data is None:
                continue
            name = data.get("name")
            if isinstance(name, str) and name:
                return name
            logger.warning("Manifest %s has no package name, using %r", path, UNKNOWN_PACKAGE)
            return UNKNOWN_PACKAGE
        return None