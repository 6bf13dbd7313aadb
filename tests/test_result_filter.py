# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Tests for narrowing project-wide results to the requested paths."""

from __future__ import annotations

from pathlib import Path

import pytest

from lintmesh.filtering import filter_by_patterns, has_glob
from lintmesh.models import Issue
from lintmesh.severity import Severity

ROOT = Path("/work/project")


def _issue(path: str) -> Issue:
    return Issue(
        path=path,
        line=1,
        column=1,
        end_line=1,
        end_column=1,
        severity=Severity.ERROR,
        rule_id="tsc/TS2322",
        message="Type mismatch.",
        source="tsc",
    )


ISSUES = [_issue("src/a.ts"), _issue("src/nested/b.ts"), _issue("srcx/c.ts"), _issue("lib/d.ts")]


def _paths(issues: list[Issue]) -> list[str]:
    return [issue.path for issue in issues]


@pytest.mark.parametrize("patterns", [(), (".",), ("./",), ("src/**/*.ts",), ("src", "lib/*.ts")])
def test_keeps_everything(patterns: tuple[str, ...]) -> None:
    assert _paths(filter_by_patterns(ISSUES, patterns, root=ROOT)) == _paths(ISSUES)


def test_directory_prefix_matches_whole_segments() -> None:
    kept = filter_by_patterns(ISSUES, ["src"], root=ROOT)

    assert _paths(kept) == ["src/a.ts", "src/nested/b.ts"]


def test_exact_file_and_trailing_slash() -> None:
    assert _paths(filter_by_patterns(ISSUES, ["./lib/d.ts"], root=ROOT)) == ["lib/d.ts"]
    assert _paths(filter_by_patterns(ISSUES, ["src/nested/"], root=ROOT)) == ["src/nested/b.ts"]


def test_absolute_patterns_are_relativised() -> None:
    assert _paths(filter_by_patterns(ISSUES, ["/work/project/lib"], root=ROOT)) == ["lib/d.ts"]


def test_no_match_drops_everything() -> None:
    assert filter_by_patterns(ISSUES, ["docs"], root=ROOT) == []


def test_has_glob() -> None:
    assert has_glob("src/**/*.ts")
    assert has_glob("src/{a,b}.ts")
    assert not has_glob("src/a.ts")
