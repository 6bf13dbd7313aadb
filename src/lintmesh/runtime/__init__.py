# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Runtime helpers for launching external tools."""

from __future__ import annotations

from .process import TIMEOUT_EXIT_CODE, ExecResult, ProcessRunner, run_process

__all__ = ["TIMEOUT_EXIT_CODE", "ExecResult", "ProcessRunner", "run_process"]
