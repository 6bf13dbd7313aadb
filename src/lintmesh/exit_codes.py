# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Mapping from a finished report to the process exit status."""

from __future__ import annotations

from enum import IntEnum

from .models import Report
from .severity import Severity


class ExitStatus(IntEnum):
    """Process exit statuses returned by ``lintmesh lint``."""

    CLEAN = 0
    ISSUES_FOUND = 1
    TOOL_ERROR = 2


def compute_exit_code(report: Report, fail_on: Severity, *, all_failed: bool | None = None) -> ExitStatus:
    """Return the exit status for ``report``.

    A run in which every attempted linter failed is a tool error regardless of
    the issues it holds. Otherwise any issue ranking at or above ``fail_on``
    yields :attr:`ExitStatus.ISSUES_FOUND`.

    Args:
        report: Completed aggregation report.
        fail_on: Minimum severity that makes the run fail.
        all_failed: Override for the "every linter failed" flag; derived from
            ``report`` when omitted.

    Returns:
        ExitStatus: Status to exit the process with.
    """

    failed = report.all_linters_failed if all_failed is None else all_failed
    if failed:
        return ExitStatus.TOOL_ERROR
    if any(issue.severity.at_least(fail_on) for issue in report.issues):
        return ExitStatus.ISSUES_FOUND
    return ExitStatus.CLEAN


__all__ = ["ExitStatus", "compute_exit_code"]
