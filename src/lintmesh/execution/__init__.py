# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Aggregation engine running linters concurrently."""

from __future__ import annotations

from .orchestrator import Orchestrator, RunHooks, RunOptions, run_linters, sort_issues

__all__ = ["Orchestrator", "RunHooks", "RunOptions", "run_linters", "sort_issues"]
