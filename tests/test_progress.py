# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Tests for the lint progress reporter."""

from __future__ import annotations

import io

from rich.console import Console

from lintmesh.cli._progress import LintProgress
from lintmesh.models import LinterRun


def test_quiet_reporter_renders_nothing() -> None:
    progress = LintProgress(interactive=True, quiet=True)

    assert not progress.enabled
    hooks = progress.hooks()
    assert hooks.before_tool is not None and hooks.after_tool is not None
    with progress:
        hooks.before_tool("eslint")
        hooks.after_tool(LinterRun(name="eslint", success=True))


def test_interactive_reporter_tracks_each_linter() -> None:
    console = Console(file=io.StringIO(), force_terminal=True, width=100)
    progress = LintProgress(interactive=True, console=console)

    with progress:
        progress.started("eslint")
        progress.started("tsc")
        progress.finished(LinterRun(name="eslint", success=True))
        progress.finished(LinterRun(name="tsc", success=False, error="Neither tsgo nor tsc found"))
        assert progress.enabled
        assert progress._progress is not None
        tasks = {task.description: task for task in progress._progress.tasks}

    assert set(tasks) == {"eslint", "tsc"}
    assert all(task.finished for task in tasks.values())
    assert tasks["tsc"].fields["status"] == "[red]failed[/]"
