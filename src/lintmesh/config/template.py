# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Render starter configuration files."""

from __future__ import annotations

import json
from collections.abc import Mapping, Sequence

from ..errors import ConfigError
from ..models import LINTER_NAMES
from .models import DEFAULT_FAIL_ON, DEFAULT_INCLUDE, DEFAULT_TIMEOUT_MS


def _toml_string(value: str) -> str:
    # JSON string escapes are a subset of TOML basic strings.
    return json.dumps(value, ensure_ascii=False)


def _toml_array(values: Sequence[str]) -> str:
    return "[" + ", ".join(_toml_string(item) for item in values) + "]"


def render_config(enabled: Mapping[str, bool]) -> str:
    """Return the text of a ``lintmesh.toml`` enabling the selected linters.

    This is not a general TOML writer. Values come from the built-in defaults
    and table names must be known linter identifiers, which are bare keys.

    Args:
        enabled: Linter names mapped to whether they should run, in file order.

    Returns:
        str: TOML document accepted by :func:`lintmesh.config.parse_config`.

    Raises:
        ConfigError: If ``enabled`` names an unknown linter.
    """

    unknown = [name for name in enabled if name not in LINTER_NAMES]
    if unknown:
        raise ConfigError(f"Unknown linter '{unknown[0]}'")
    lines = [
        "# lintmesh configuration",
        f"include = {_toml_array(DEFAULT_INCLUDE)}",
        "exclude = []",
        f"timeout = {DEFAULT_TIMEOUT_MS}",
        f"fail_on = {_toml_string(DEFAULT_FAIL_ON.value)}",
    ]
    for name, flag in enabled.items():
        lines.extend(["", f"[linters.{name}]", f"enabled = {'true' if flag else 'false'}"])
    return "\n".join(lines) + "\n"


__all__ = ["render_config"]
