# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Tests for linter detection in JavaScript projects."""

from __future__ import annotations

import json
from pathlib import Path

from helpers.runner import StubRunner, install_bins
from lintmesh.detect import declared_packages, detect_all_linters, detect_linter


def _write_manifest(root: Path, **sections: dict[str, str]) -> None:
    (root / "package.json").write_text(json.dumps({"name": "demo", **sections}), encoding="utf-8")


def test_declared_packages_reads_both_dependency_sections(project: Path) -> None:
    _write_manifest(project, dependencies={"react": "^18"}, devDependencies={"eslint": "^9", "typescript": "^5"})

    assert declared_packages(project) == frozenset({"react", "eslint", "typescript"})


def test_declared_packages_tolerates_broken_manifests(project: Path) -> None:
    assert declared_packages(project) == frozenset()

    (project / "package.json").write_text("{not json", encoding="utf-8")

    assert declared_packages(project) == frozenset()


def test_installed_and_configured_linter_is_recommended(project: Path, stub_runner: StubRunner) -> None:
    install_bins(project, "eslint")
    (project / "eslint.config.js").write_text("export default [];\n", encoding="utf-8")
    stub_runner.versions["eslint"] = "v9.1.0"

    result = detect_linter("eslint", project, runner=stub_runner)

    assert result.available
    assert result.bin_source == "local"
    assert result.version == "9.1.0"
    assert result.config_path == project / "eslint.config.js"
    assert result.recommended


def test_declared_dependency_is_enough_for_a_recommendation(project: Path, stub_runner: StubRunner) -> None:
    install_bins(project, "biome")
    _write_manifest(project, devDependencies={"@biomejs/biome": "1.8.3"})

    result = detect_linter("biome", project, runner=stub_runner)

    assert result.declared
    assert not result.has_config
    assert result.recommended


def test_installed_but_unconfigured_linter_is_not_recommended(project: Path, stub_runner: StubRunner) -> None:
    install_bins(project, "oxlint")

    result = detect_linter("oxlint", project, runner=stub_runner)

    assert result.available
    assert not result.recommended


def test_missing_linter(project: Path, stub_runner: StubRunner) -> None:
    (project / "tsconfig.json").write_text("{}", encoding="utf-8")

    result = detect_linter("tsc", project, runner=stub_runner)

    assert not result.available
    assert result.bin_path is None
    assert result.version is None
    assert result.has_config
    assert not result.recommended


def test_detect_all_linters_keeps_canonical_order(project: Path, stub_runner: StubRunner) -> None:
    install_bins(project, "tsgo")

    results = detect_all_linters(project, runner=stub_runner)

    assert [result.name for result in results] == ["eslint", "oxlint", "biome", "tsc"]
    assert [result.available for result in results] == [False, False, False, True]
    assert results[3].version == "tsgo 1.0.0"
