# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Configuration loading for lintmesh."""

from __future__ import annotations

from .loader import (
    CONFIG_FILES,
    LoadedConfig,
    find_config_file,
    load_config,
    parse_config,
    parse_linter_list,
    resolve_settings,
)
from .models import (
    DEFAULT_EXCLUDE,
    DEFAULT_FAIL_ON,
    DEFAULT_INCLUDE,
    DEFAULT_TIMEOUT_MS,
    SOURCE_EXTENSIONS,
    LinterConfig,
    LintmeshConfig,
    ResolvedSettings,
)
from .template import render_config

__all__ = [
    "CONFIG_FILES",
    "DEFAULT_EXCLUDE",
    "DEFAULT_FAIL_ON",
    "DEFAULT_INCLUDE",
    "DEFAULT_TIMEOUT_MS",
    "SOURCE_EXTENSIONS",
    "LinterConfig",
    "LintmeshConfig",
    "LoadedConfig",
    "ResolvedSettings",
    "find_config_file",
    "load_config",
    "parse_config",
    "parse_linter_list",
    "render_config",
    "resolve_settings",
]
