# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Linter definitions, adapters and the default registry."""

from __future__ import annotations

from .base import (
    NOT_FOUND_VERSION,
    LinterAdapter,
    LinterInvocation,
    LinterResult,
    LinterTool,
    ResolvedBinary,
    extract_version,
)
from .builtins import BIOME, BUILTIN_TOOLS, ESLINT, OXLINT, TSC
from .registry import DEFAULT_REGISTRY, LinterRegistry

__all__ = [
    "BIOME",
    "BUILTIN_TOOLS",
    "DEFAULT_REGISTRY",
    "ESLINT",
    "NOT_FOUND_VERSION",
    "OXLINT",
    "TSC",
    "LinterAdapter",
    "LinterInvocation",
    "LinterRegistry",
    "LinterResult",
    "LinterTool",
    "ResolvedBinary",
    "extract_version",
]
