# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Report rendering helpers."""

from __future__ import annotations

from .formatters import (
    NO_ISSUES,
    detection_table,
    failure_lines,
    issue_line,
    render_compact,
    render_json,
    summary_line,
)

__all__ = [
    "NO_ISSUES",
    "detection_table",
    "failure_lines",
    "issue_line",
    "render_compact",
    "render_json",
    "summary_line",
]
