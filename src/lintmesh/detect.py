# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Detect which linters a JavaScript or TypeScript project can use."""

from __future__ import annotations

import json
import logging
from collections.abc import Mapping
from concurrent.futures import ThreadPoolExecutor
from pathlib import Path
from typing import Final

from pydantic import BaseModel, ConfigDict

from .models import LINTER_NAMES, LinterName
from .runtime.process import ProcessRunner, run_process
from .tools.base import BinarySource, LinterAdapter
from .tools.registry import DEFAULT_REGISTRY, LinterRegistry

LOGGER = logging.getLogger(__name__)

PACKAGE_MANIFEST: Final[str] = "package.json"
_DEPENDENCY_SECTIONS: Final[tuple[str, ...]] = ("dependencies", "devDependencies")


class DetectionResult(BaseModel):
    """What is known about one linter in a project."""

    model_config = ConfigDict(frozen=True)

    name: LinterName
    available: bool
    bin_path: str | None = None
    bin_source: BinarySource | None = None
    version: str | None = None
    config_path: Path | None = None
    declared: bool = False

    @property
    def has_config(self) -> bool:
        """Return ``True`` when a configuration file for the linter exists."""
        return self.config_path is not None

    @property
    def recommended(self) -> bool:
        """Return ``True`` when the linter is runnable and the project opted into it."""
        return self.available and (self.has_config or self.declared)


def declared_packages(cwd: Path) -> frozenset[str]:
    """Return the package names listed in ``package.json`` dependencies.

    A missing or unreadable manifest yields an empty set.
    """

    manifest = cwd / PACKAGE_MANIFEST
    if not manifest.is_file():
        return frozenset()
    try:
        document = json.loads(manifest.read_text(encoding="utf-8"))
    except (OSError, UnicodeDecodeError, json.JSONDecodeError) as exc:
        LOGGER.debug("ignoring unreadable %s: %s", manifest, exc)
        return frozenset()
    if not isinstance(document, Mapping):
        return frozenset()
    names: set[str] = set()
    for section in _DEPENDENCY_SECTIONS:
        entries = document.get(section)
        if isinstance(entries, Mapping):
            names.update(str(name) for name in entries)
    return frozenset(names)


def detect_linter(
    name: str,
    cwd: Path,
    *,
    registry: LinterRegistry | None = None,
    runner: ProcessRunner | None = None,
    packages: frozenset[str] | None = None,
) -> DetectionResult:
    """Detect a single linter under ``cwd``.

    Args:
        name: Linter identifier.
        cwd: Project root.
        registry: Registry providing the linter definition.
        runner: Process runner used for the version probe.
        packages: Pre-read dependency names; read from ``package.json`` when omitted.

    Returns:
        DetectionResult: Binary, version, configuration and dependency findings.
    """

    tool = (registry or DEFAULT_REGISTRY)[name]
    adapter = LinterAdapter(tool, runner=runner or run_process)
    located = adapter.resolve_binary(cwd)
    config_path = next((cwd / item for item in tool.config_files if (cwd / item).is_file()), None)
    declared_names = declared_packages(cwd) if packages is None else packages
    return DetectionResult(
        name=tool.name,
        available=located is not None,
        bin_path=located.path if located else None,
        bin_source=located.source if located else None,
        version=adapter.version_of(located, cwd=cwd) if located else None,
        config_path=config_path,
        declared=any(package in declared_names for package in tool.packages),
    )


def detect_all_linters(
    cwd: Path,
    *,
    registry: LinterRegistry | None = None,
    runner: ProcessRunner | None = None,
) -> list[DetectionResult]:
    """Detect every known linter concurrently, in canonical order."""

    packages = declared_packages(cwd)
    with ThreadPoolExecutor(max_workers=len(LINTER_NAMES)) as executor:
        futures = [
            executor.submit(detect_linter, name, cwd, registry=registry, runner=runner, packages=packages)
            for name in LINTER_NAMES
        ]
        return [future.result() for future in futures]


__all__ = ["DetectionResult", "declared_packages", "detect_all_linters", "detect_linter"]
