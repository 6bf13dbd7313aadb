# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Console formatters for aggregation reports."""

from __future__ import annotations

from collections.abc import Sequence
from typing import Final

from rich import box
from rich.table import Table
from rich.text import Text

from ..detect import DetectionResult
from ..models import Issue, Report, Summary
from ..severity import Severity

NO_ISSUES: Final[str] = "No issues found"
_SEVERITY_STYLES: Final[dict[Severity, str]] = {
    Severity.ERROR: "red",
    Severity.WARNING: "yellow",
    Severity.INFO: "blue",
}


def render_json(report: Report, *, pretty: bool = False) -> str:
    """Return the wire JSON for ``report``."""

    return report.to_json(pretty=pretty)


def issue_line(issue: Issue) -> Text:
    """Return ``path:line:col severity ruleId: message`` for one issue."""

    line = Text()
    line.append(f"{issue.path}:{issue.line}:{issue.column}", style="cyan")
    line.append(" ")
    line.append(issue.severity.value, style=_SEVERITY_STYLES[issue.severity])
    line.append(" ")
    line.append(issue.rule_id, style="dim")
    line.append(f": {issue.message}")
    return line


def summary_line(summary: Summary) -> Text:
    """Return the closing summary line of the compact output."""

    if summary.total == 0:
        return Text(NO_ISSUES, style="cyan")
    line = Text(f"{summary.total} issues (")
    line.append(f"{summary.errors} errors", style="red" if summary.errors else "")
    line.append(", ")
    line.append(f"{summary.warnings} warnings", style="yellow" if summary.warnings else "")
    line.append(")")
    return line


def render_compact(report: Report) -> Text:
    """Render ``report`` in the compact, one-issue-per-line text form.

    Args:
        report: Completed aggregation report.

    Returns:
        Text: Styled text; ``Text.plain`` gives the uncoloured form.
    """

    lines: list[Text] = [issue_line(issue) for issue in report.issues]
    if report.issues:
        lines.append(Text())
    lines.append(summary_line(report.summary))
    return Text("\n").join(lines)


def failure_lines(report: Report) -> list[str]:
    """Return one line per failed linter, for display on stderr."""

    return [f"{run.name} failed: {run.error or 'unknown error'}" for run in report.linters if not run.success]


def detection_table(results: Sequence[DetectionResult]) -> Table:
    """Build the table printed by ``lintmesh detect``.

    Args:
        results: Detection results in display order.

    Returns:
        Table: Rich table with one row per linter.
    """

    table = Table(box=box.SIMPLE_HEAD, show_edge=False)
    table.add_column("Linter", style="bold")
    table.add_column("Binary")
    table.add_column("Source")
    table.add_column("Version")
    table.add_column("Config")
    table.add_column("package.json")
    table.add_column("Recommended")
    for result in results:
        table.add_row(
            result.name,
            result.bin_path or "-",
            result.bin_source or "-",
            result.version or "-",
            result.config_path.name if result.config_path else "-",
            "yes" if result.declared else "no",
            Text("yes", style="green") if result.recommended else Text("no", style="dim"),
        )
    return table


__all__ = [
    "NO_ISSUES",
    "detection_table",
    "failure_lines",
    "issue_line",
    "render_compact",
    "render_json",
    "summary_line",
]
