# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Tests for the lintmesh command line interface."""

from __future__ import annotations

import json
import locale
import tomllib
from pathlib import Path

import pytest
from typer.testing import CliRunner

from helpers.runner import StubRunner, install_bins
from lintmesh.cli import app
from lintmesh.runtime import ExecResult

ESLINT_ERROR = json.dumps(
    [
        {
            "filePath": "src/a.ts",
            "messages": [{"ruleId": "no-undef", "severity": 2, "message": "'x' is not defined.", "line": 10, "column": 5}],
        },
    ],
)
ESLINT_WARNING = json.dumps(
    [
        {
            "filePath": "src/b.ts",
            "messages": [{"ruleId": "no-console", "severity": 1, "message": "Unexpected console.", "line": 2, "column": 1}],
        },
    ],
)


@pytest.fixture
def runner() -> CliRunner:
    return CliRunner()


@pytest.fixture
def patched_runner(stub_runner: StubRunner, monkeypatch: pytest.MonkeyPatch) -> StubRunner:
    monkeypatch.setattr("lintmesh.execution.orchestrator.run_process", stub_runner)
    monkeypatch.setattr("lintmesh.detect.run_process", stub_runner)
    return stub_runner


def test_json_report_with_partial_failure(runner: CliRunner, project: Path, patched_runner: StubRunner) -> None:
    install_bins(project, "eslint", "oxlint")
    patched_runner.results["eslint"] = ExecResult(stdout=ESLINT_ERROR, stderr="", exit_code=1)
    patched_runner.results["oxlint"] = ExecResult(stdout="", stderr="", exit_code=124, timed_out=True)

    result = runner.invoke(app, ["lint", "--cwd", str(project), "--linters", "eslint,oxlint", "--json", "--quiet"])

    assert result.exit_code == 1
    document = json.loads(result.stdout)
    assert document["summary"]["total"] == 1
    assert document["issues"][0]["path"] == "src/a.ts"
    assert [linter["success"] for linter in document["linters"]] == [True, False]
    assert document["linters"][1]["error"] == "Oxlint timed out after 30000ms"


def test_compact_output(runner: CliRunner, project: Path, patched_runner: StubRunner) -> None:
    install_bins(project, "eslint")
    patched_runner.results["eslint"] = ExecResult(stdout=ESLINT_ERROR, stderr="", exit_code=1)

    result = runner.invoke(app, ["lint", "--cwd", str(project), "--linters", "eslint", "--quiet"])

    assert result.exit_code == 1
    assert "src/a.ts:10:5 error eslint/no-undef: 'x' is not defined." in result.output
    assert "1 issues (1 errors, 0 warnings)" in result.output


def test_clean_run_exits_zero(runner: CliRunner, project: Path, patched_runner: StubRunner) -> None:
    install_bins(project, "eslint")
    patched_runner.results["eslint"] = ExecResult(stdout="[]", stderr="", exit_code=0)

    result = runner.invoke(app, ["lint", "--cwd", str(project), "--linters", "eslint"])

    assert result.exit_code == 0
    assert "No issues found" in result.output
    assert "lintmesh: running eslint..." in result.output


def test_fail_on_threshold(runner: CliRunner, project: Path, patched_runner: StubRunner) -> None:
    install_bins(project, "eslint")
    patched_runner.results["eslint"] = ExecResult(stdout=ESLINT_WARNING, stderr="", exit_code=1)
    base_args = ["lint", "--cwd", str(project), "--linters", "eslint", "--quiet"]

    assert runner.invoke(app, base_args).exit_code == 0
    assert runner.invoke(app, [*base_args, "--fail-on", "warning"]).exit_code == 1


def test_files_are_passed_to_linters(runner: CliRunner, project: Path, patched_runner: StubRunner) -> None:
    install_bins(project, "eslint")
    patched_runner.results["eslint"] = ExecResult(stdout="[]", stderr="", exit_code=0)

    runner.invoke(app, ["lint", "src/a.ts", "--cwd", str(project), "--linters", "eslint", "--fix", "--quiet"])

    (call,) = patched_runner.lint_calls("eslint")
    assert "--fix" in call.args
    assert call.args[-1] == str(project / "src" / "a.ts")
    assert str(project / "src" / "b.ts") not in call.args


def test_every_linter_failing_exits_two(runner: CliRunner, project: Path, patched_runner: StubRunner) -> None:
    install_bins(project, "eslint")
    patched_runner.results["eslint"] = ExecResult(stdout="", stderr="Invalid config", exit_code=2)

    result = runner.invoke(app, ["lint", "--cwd", str(project), "--linters", "eslint"])

    assert result.exit_code == 2
    assert "eslint failed: Invalid config" in result.output


def test_unavailable_linters_are_reported(runner: CliRunner, project: Path, patched_runner: StubRunner) -> None:
    result = runner.invoke(app, ["lint", "--cwd", str(project), "--linters", "biome"])

    assert result.exit_code == 0
    assert "biome not available, skipping" in result.output
    assert patched_runner.lint_calls("biome") == []


def test_no_matching_files(runner: CliRunner, project: Path, patched_runner: StubRunner) -> None:
    install_bins(project, "eslint")

    result = runner.invoke(app, ["lint", "docs/**/*.ts", "--cwd", str(project), "--json", "--quiet"])

    assert result.exit_code == 0
    assert json.loads(result.stdout)["linters"] == []
    assert patched_runner.calls == []


def test_config_file_drives_the_run(runner: CliRunner, project: Path, patched_runner: StubRunner) -> None:
    install_bins(project, "eslint", "oxlint")
    (project / "lintmesh.toml").write_text(
        '[linters.eslint]\nargs = ["--max-warnings", "0"]\n\n[linters.oxlint]\nenabled = false\n',
        encoding="utf-8",
    )
    patched_runner.results["eslint"] = ExecResult(stdout="[]", stderr="", exit_code=0)

    result = runner.invoke(app, ["lint", "--cwd", str(project), "--quiet"])

    assert result.exit_code == 0
    (call,) = patched_runner.lint_calls("eslint")
    assert "--max-warnings" in call.args
    assert patched_runner.lint_calls("oxlint") == []


@pytest.mark.parametrize(
    ("args", "message"),
    [
        (["--linters", "eslint,prettier"], "Unknown linter 'prettier'"),
        (["--fail-on", "fatal"], "Invalid severity 'fatal'"),
    ],
)
def test_invalid_options_exit_two(
    runner: CliRunner,
    project: Path,
    patched_runner: StubRunner,
    args: list[str],
    message: str,
) -> None:
    result = runner.invoke(app, ["lint", "--cwd", str(project), *args])

    assert result.exit_code == 2
    assert f"lintmesh: {message}" in result.output
    assert patched_runner.calls == []


def test_non_positive_timeout_is_rejected(runner: CliRunner, project: Path, patched_runner: StubRunner) -> None:
    result = runner.invoke(app, ["lint", "--cwd", str(project), "--timeout", "0"])

    assert result.exit_code == 2
    assert patched_runner.calls == []


def test_invalid_config_exits_two(runner: CliRunner, project: Path, patched_runner: StubRunner) -> None:
    (project / "lintmesh.toml").write_text("timeout = -1\n", encoding="utf-8")

    result = runner.invoke(app, ["lint", "--cwd", str(project)])

    assert result.exit_code == 2
    assert "Invalid config in" in result.output


def test_missing_working_directory(runner: CliRunner, tmp_path: Path) -> None:
    result = runner.invoke(app, ["lint", "--cwd", str(tmp_path / "missing")])

    assert result.exit_code == 2


def test_commands_use_the_user_collation_locale(
    runner: CliRunner,
    project: Path,
    patched_runner: StubRunner,
    monkeypatch: pytest.MonkeyPatch,
) -> None:
    requested: list[tuple[int, str]] = []

    def fake_setlocale(category: int, value: str) -> str:
        requested.append((category, value))
        raise locale.Error("unsupported locale setting")

    monkeypatch.setattr(locale, "setlocale", fake_setlocale)

    result = runner.invoke(app, ["detect", "--cwd", str(project)])

    assert result.exit_code == 0
    assert requested == [(locale.LC_COLLATE, "")]


def test_version_flag(runner: CliRunner) -> None:
    result = runner.invoke(app, ["--version"])

    assert result.exit_code == 0
    assert result.output.startswith("lintmesh ")


def test_init_writes_recommended_linters(runner: CliRunner, project: Path, patched_runner: StubRunner) -> None:
    install_bins(project, "eslint", "oxlint")
    (project / "eslint.config.js").write_text("export default [];\n", encoding="utf-8")

    result = runner.invoke(app, ["init", "--cwd", str(project)])

    assert result.exit_code == 0
    document = tomllib.loads((project / "lintmesh.toml").read_text(encoding="utf-8"))
    assert {name: table["enabled"] for name, table in document["linters"].items()} == {
        "eslint": True,
        "oxlint": False,
        "biome": False,
        "tsc": False,
    }


def test_init_refuses_to_overwrite(runner: CliRunner, project: Path, patched_runner: StubRunner) -> None:
    config_file = project / "lintmesh.toml"
    config_file.write_text("timeout = 5\n", encoding="utf-8")

    refused = runner.invoke(app, ["init", "--cwd", str(project)])

    assert refused.exit_code == 2
    assert config_file.read_text(encoding="utf-8") == "timeout = 5\n"

    forced = runner.invoke(app, ["init", "--cwd", str(project), "--force"])

    assert forced.exit_code == 0
    assert "[linters.eslint]" in config_file.read_text(encoding="utf-8")


def test_detect_prints_table(runner: CliRunner, project: Path, patched_runner: StubRunner) -> None:
    install_bins(project, "tsc")

    result = runner.invoke(app, ["detect", "--cwd", str(project)])

    assert result.exit_code == 0
    for name in ("eslint", "oxlint", "biome", "tsc"):
        assert name in result.output
