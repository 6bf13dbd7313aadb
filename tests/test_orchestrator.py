# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Tests for concurrent linter execution and report assembly."""

from __future__ import annotations

import json
from pathlib import Path

import pytest

from helpers.runner import StubRunner, install_bins
from lintmesh.execution import Orchestrator, RunHooks, RunOptions, sort_issues
from lintmesh.exit_codes import ExitStatus, compute_exit_code
from lintmesh.models import Issue, LinterRun
from lintmesh.reporting import render_compact
from lintmesh.runtime import ExecResult
from lintmesh.severity import Severity


def _eslint_payload(*messages: tuple[str, int, int, str]) -> str:
    return json.dumps(
        [
            {
                "filePath": path,
                "messages": [{"ruleId": rule, "severity": 2, "message": "problem", "line": line, "column": column}],
            }
            for path, line, column, rule in messages
        ],
    )


def _options(root: Path, *linters: str, **overrides: object) -> RunOptions:
    values: dict[str, object] = {
        "cwd": root,
        "linters": linters,
        "files": (root / "src" / "a.ts", root / "src" / "b.ts"),
        "timeout_ms": 1_000,
    }
    values.update(overrides)
    return RunOptions(**values)


def _issue(path: str, line: int, column: int, source: str = "eslint") -> Issue:
    return Issue(
        path=path,
        line=line,
        column=column,
        end_line=line,
        end_column=column,
        severity=Severity.WARNING,
        rule_id=f"{source}/rule",
        message="m",
        source=source,
    )


def test_sort_orders_by_path_line_column_and_is_stable() -> None:
    first = _issue("src/b.ts", 1, 1, "eslint")
    second = _issue("src/b.ts", 1, 1, "oxlint")
    issues = [_issue("src/b.ts", 10, 2), first, _issue("src/a.ts", 3, 9), second, _issue("src/b.ts", 2, 1)]

    ordered = sort_issues(issues)

    assert [(issue.path, issue.line, issue.column) for issue in ordered] == [
        ("src/a.ts", 3, 9),
        ("src/b.ts", 1, 1),
        ("src/b.ts", 1, 1),
        ("src/b.ts", 2, 1),
        ("src/b.ts", 10, 2),
    ]
    assert ordered[1] is first
    assert ordered[2] is second


def test_sort_ignores_case_and_is_idempotent() -> None:
    issues = [_issue("src/B.ts", 1, 1), _issue("src/a.ts", 4, 2), _issue("src/c.ts", 1, 1), _issue("src/a.ts", 1, 1)]

    ordered = sort_issues(issues)

    assert [(issue.path, issue.line) for issue in ordered] == [
        ("src/a.ts", 1),
        ("src/a.ts", 4),
        ("src/B.ts", 1),
        ("src/c.ts", 1),
    ]
    assert sort_issues(ordered) == ordered


def test_partial_timeout_keeps_other_results(project: Path, stub_runner: StubRunner) -> None:
    install_bins(project, "eslint", "oxlint")
    stub_runner.results["eslint"] = ExecResult(
        stdout=_eslint_payload(("src/a.ts", 10, 5, "no-undef")),
        stderr="",
        exit_code=1,
    )
    stub_runner.results["oxlint"] = ExecResult(stdout="", stderr="", exit_code=124, timed_out=True)

    report = Orchestrator(runner=stub_runner).run(_options(project, "eslint", "oxlint"))

    assert [run.name for run in report.linters] == ["eslint", "oxlint"]
    eslint_run, oxlint_run = report.linters
    assert eslint_run.success
    assert not oxlint_run.success
    assert oxlint_run.error == "Oxlint timed out after 1000ms"
    assert report.summary.total == 1
    (issue,) = report.issues
    assert (issue.path, issue.line, issue.column, issue.rule_id) == ("src/a.ts", 10, 5, "eslint/no-undef")
    assert compute_exit_code(report, Severity.ERROR) is ExitStatus.ISSUES_FOUND


def test_clean_run(project: Path, stub_runner: StubRunner) -> None:
    install_bins(project, "eslint", "oxlint", "tsc")
    stub_runner.results["eslint"] = ExecResult(stdout="[]", stderr="", exit_code=0)
    stub_runner.results["oxlint"] = ExecResult(stdout='{"diagnostics": []}', stderr="", exit_code=0)

    report = Orchestrator(runner=stub_runner).run(_options(project, "eslint", "oxlint", "tsc"))

    assert report.issues == ()
    assert all(run.success for run in report.linters)
    assert compute_exit_code(report, Severity.ERROR) is ExitStatus.CLEAN
    assert render_compact(report).plain == "No issues found"


def test_issues_from_all_linters_are_merged_and_sorted(project: Path, stub_runner: StubRunner) -> None:
    install_bins(project, "eslint", "tsc")
    stub_runner.results["eslint"] = ExecResult(
        stdout=_eslint_payload(("src/b.ts", 4, 1, "eqeqeq"), ("src/a.ts", 9, 1, "no-var")),
        stderr="",
        exit_code=1,
    )
    stub_runner.results["tsc"] = ExecResult(
        stdout="src/a.ts(2,3): error TS2322: Type mismatch.\n",
        stderr="",
        exit_code=2,
    )

    report = Orchestrator(runner=stub_runner).run(_options(project, "eslint", "tsc"))

    assert [(issue.path, issue.line, issue.source) for issue in report.issues] == [
        ("src/a.ts", 2, "tsc"),
        ("src/a.ts", 9, "eslint"),
        ("src/b.ts", 4, "eslint"),
    ]
    assert report.summary.errors == 3


def test_unavailable_linters_are_skipped(project: Path, stub_runner: StubRunner) -> None:
    install_bins(project, "eslint")
    skipped: list[str] = []
    orchestrator = Orchestrator(runner=stub_runner, hooks=RunHooks(on_skipped=skipped.append))

    report = orchestrator.run(_options(project, "eslint", "oxlint", "tsc"))

    assert skipped == ["oxlint", "tsc"]
    assert [run.name for run in report.linters] == ["eslint"]


def test_every_linter_failing_is_a_tool_error(project: Path, stub_runner: StubRunner) -> None:
    install_bins(project, "eslint")
    stub_runner.results["eslint"] = ExecResult(stdout="", stderr="config broken", exit_code=2)

    report = Orchestrator(runner=stub_runner).run(_options(project, "eslint"))

    assert report.all_linters_failed
    assert compute_exit_code(report, Severity.ERROR) is ExitStatus.TOOL_ERROR


def test_adapter_exceptions_become_failed_runs(project: Path, stub_runner: StubRunner) -> None:
    install_bins(project, "eslint", "oxlint")
    stub_runner.errors["eslint"] = PermissionError("permission denied")
    stub_runner.results["oxlint"] = ExecResult(stdout='{"diagnostics": []}', stderr="", exit_code=0)

    report = Orchestrator(runner=stub_runner).run(_options(project, "eslint", "oxlint"))

    eslint_run, oxlint_run = report.linters
    assert not eslint_run.success
    assert eslint_run.error == "permission denied"
    assert eslint_run.version == "unknown"
    assert oxlint_run.success


def test_no_files_returns_empty_report_without_running(project: Path, stub_runner: StubRunner) -> None:
    install_bins(project, "eslint")

    report = Orchestrator(runner=stub_runner).run(_options(project, "eslint", files=()))

    assert report.linters == ()
    assert report.issues == ()
    assert stub_runner.calls == []
    assert compute_exit_code(report, Severity.ERROR) is ExitStatus.CLEAN


def test_hooks_see_each_linter(project: Path, stub_runner: StubRunner) -> None:
    install_bins(project, "eslint", "oxlint")
    started: list[str] = []
    finished: list[LinterRun] = []
    hooks = RunHooks(before_tool=started.append, after_tool=finished.append)

    Orchestrator(runner=stub_runner, hooks=hooks).run(_options(project, "eslint", "oxlint"))

    assert sorted(started) == ["eslint", "oxlint"]
    assert sorted(run.name for run in finished) == ["eslint", "oxlint"]


def test_duplicate_linters_run_once(project: Path, stub_runner: StubRunner) -> None:
    install_bins(project, "eslint")
    stub_runner.results["eslint"] = ExecResult(stdout="[]", stderr="", exit_code=0)

    report = Orchestrator(runner=stub_runner).run(_options(project, "eslint", "eslint"))

    assert len(report.linters) == 1
    assert len(stub_runner.lint_calls("eslint")) == 1


def test_per_linter_overrides_reach_the_command(project: Path, stub_runner: StubRunner) -> None:
    install_bins(project, "eslint")
    stub_runner.results["eslint"] = ExecResult(stdout="[]", stderr="", exit_code=0)
    options = _options(project, "eslint", extra_args={"eslint": ("--max-warnings", "0")})

    Orchestrator(runner=stub_runner).run(options)

    (call,) = stub_runner.lint_calls("eslint")
    assert "--max-warnings" in call.args


def test_unknown_linter_names_are_rejected(stub_runner: StubRunner) -> None:
    with pytest.raises(KeyError):
        Orchestrator(runner=stub_runner).adapters_for(["prettier"])
