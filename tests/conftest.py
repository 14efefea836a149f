"""Shared fixtures: Clover XML builders and resolver helpers."""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any
from unittest import mock

import pytest

from clover_summary.detectors.package import PackageResolver
from clover_summary.utils.cache import PrefixCache


class CloverBuilder:
    """Build small Clover XML documents for tests."""

    @staticmethod
    def metrics(**counters: int) -> str:
        attrs = " ".join(f'{key}="{value}"' for key, value in counters.items())
        return f"<metrics {attrs}/>"

    @classmethod
    def klass(
        cls,
        name: str,
        *,
        statements: int = 10,
        coveredstatements: int = 10,
        methods: int = 1,
        coveredmethods: int = 1,
        complexity: int = 1,
    ) -> str:
        metrics = cls.metrics(
            complexity=complexity,
            loc=statements * 2,
            ncloc=statements,
            methods=methods,
            coveredmethods=coveredmethods,
            conditionals=0,
            coveredconditionals=0,
            statements=statements,
            coveredstatements=coveredstatements,
            elements=statements + methods,
            coveredelements=coveredstatements + coveredmethods,
        )
        return f'<class name="{name}" namespace="global">{metrics}</class>'

    @classmethod
    def file(
        cls,
        name: str,
        *,
        statements: int = 10,
        coveredstatements: int = 10,
        methods: int = 1,
        coveredmethods: int = 1,
        classes: tuple[str, ...] = (),
    ) -> str:
        metrics = cls.metrics(
            loc=statements * 2,
            ncloc=statements,
            classes=len(classes),
            methods=methods,
            coveredmethods=coveredmethods,
            conditionals=0,
            coveredconditionals=0,
            statements=statements,
            coveredstatements=coveredstatements,
            elements=statements + methods,
            coveredelements=coveredstatements + coveredmethods,
        )
        return f'<file name="{name}">{"".join(classes)}{metrics}</file>'

    @classmethod
    def document(
        cls,
        body: str,
        *,
        files: int = 0,
        classes: int = 0,
        statements: int = 0,
        coveredstatements: int = 0,
        methods: int = 0,
        coveredmethods: int = 0,
    ) -> str:
        metrics = cls.metrics(
            files=files,
            loc=statements * 2,
            ncloc=statements,
            classes=classes,
            methods=methods,
            coveredmethods=coveredmethods,
            conditionals=0,
            coveredconditionals=0,
            statements=statements,
            coveredstatements=coveredstatements,
            elements=statements + methods,
            coveredelements=coveredstatements + coveredmethods,
        )
        return (
            '<?xml version="1.0" encoding="UTF-8"?>\n'
            '<coverage generated="1700000000">'
            f'<project timestamp="1700000000">{body}{metrics}</project>'
            "</coverage>"
        )


@pytest.fixture
def clover() -> type[CloverBuilder]:
    """Clover XML builder."""
    return CloverBuilder


@pytest.fixture
def two_package_xml(clover: type[CloverBuilder]) -> str:
    """Files under /app/a (fully covered) and /app/b (half covered), one class each."""
    body = clover.file(
        "/app/a/src/Foo.php",
        statements=10,
        coveredstatements=10,
        classes=(clover.klass("App\\A\\Foo", statements=10, coveredstatements=10),),
    ) + clover.file(
        "/app/b/src/Bar.php",
        statements=10,
        coveredstatements=5,
        methods=2,
        coveredmethods=1,
        classes=(clover.klass("App\\B\\Bar", statements=10, coveredstatements=5),),
    )
    return clover.document(
        body,
        files=2,
        classes=2,
        statements=20,
        coveredstatements=15,
        methods=3,
        coveredmethods=2,
    )


@pytest.fixture
def seeded_resolver() -> PackageResolver:
    """Resolver whose cache already knows /app/a and /app/b; the filesystem is never read."""
    cache = PrefixCache({"/app/a": "vendor/a", "/app/b": "vendor/b"})
    reader = mock.Mock(return_value=None)
    return PackageResolver(Path("/"), cache=cache, reader=reader)


def write_file(root: Path, rel: str, content: str) -> Path:
    """Write *content* to a file under *root*."""
    f = root / rel
    f.parent.mkdir(parents=True, exist_ok=True)
    f.write_text(content, encoding="utf-8")
    return f


def write_json(root: Path, rel: str, data: dict[str, Any]) -> Path:
    """Write a JSON file under *root*."""
    return write_file(root, rel, json.dumps(data, indent=2))


class FileHelpers:
    """File creation helpers exposed through the ``files`` fixture."""

    write_file = staticmethod(write_file)
    write_json = staticmethod(write_json)


@pytest.fixture
def files() -> type[FileHelpers]:
    return FileHelpers
