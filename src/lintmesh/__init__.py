# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Aggregate eslint, oxlint, biome and tsc findings into one report."""

from __future__ import annotations

from importlib import metadata

from .errors import ConfigError, LintmeshError, MalformedOutputError
from .models import Fix, Issue, LinterRun, Replacement, Report, RuleMeta, Summary
from .severity import Severity

__all__ = [
    "ConfigError",
    "Fix",
    "Issue",
    "LinterRun",
    "LintmeshError",
    "MalformedOutputError",
    "Replacement",
    "Report",
    "RuleMeta",
    "Severity",
    "Summary",
    "__version__",
]

try:
    __version__ = metadata.version("lintmesh")
except metadata.PackageNotFoundError:  # pragma: no cover - local development fallback
    __version__ = "0.0.0"
