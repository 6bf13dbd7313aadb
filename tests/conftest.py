# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.

"""Shared pytest fixtures."""

from __future__ import annotations

from pathlib import Path

import pytest

from helpers.runner import StubRunner


@pytest.fixture(autouse=True)
def isolated_path(tmp_path_factory: pytest.TempPathFactory, monkeypatch: pytest.MonkeyPatch) -> Path:
    """Hide globally installed linters so binary lookup only sees test fixtures."""

    empty = tmp_path_factory.mktemp("empty-path")
    monkeypatch.setenv("PATH", str(empty))
    return empty


@pytest.fixture
def stub_runner() -> StubRunner:
    """Return a fresh process runner double."""
    return StubRunner()


@pytest.fixture
def project(tmp_path: Path) -> Path:
    """Return a small TypeScript project root with two source files."""

    root = tmp_path / "project"
    (root / "src").mkdir(parents=True)
    (root / "src" / "a.ts").write_text("export const a = 1;\n", encoding="utf-8")
    (root / "src" / "b.ts").write_text("export const b = 2;\n", encoding="utf-8")
    return root
