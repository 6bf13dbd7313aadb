# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Shared parser infrastructure and helper utilities."""

from __future__ import annotations

import json
from collections.abc import Callable, Iterator, Mapping, Sequence
from pathlib import Path
from typing import Any, TypeAlias

from ..errors import MalformedOutputError
from ..filesystem.paths import normalize_path_key
from ..models import Issue

JsonValue: TypeAlias = Any
OutputParser = Callable[[str, Path], list[Issue]]


def load_json_document(stdout: str, *, tool: str) -> JsonValue | None:
    """Decode ``stdout`` as a single JSON document.

    Args:
        stdout: Raw text captured from the tool.
        tool: Tool identifier used in error messages.

    Returns:
        JsonValue | None: Decoded payload, or ``None`` for blank input.

    Raises:
        MalformedOutputError: If non-blank input is not valid JSON.
    """

    text = stdout.strip()
    if not text:
        return None
    try:
        return json.loads(text)
    except json.JSONDecodeError as exc:
        raise MalformedOutputError(tool, f"invalid JSON at line {exc.lineno} column {exc.colno}: {exc.msg}") from exc


def expect_mapping(value: JsonValue, *, tool: str, what: str) -> Mapping[str, JsonValue]:
    """Return ``value`` when it is a JSON object, otherwise raise."""

    if not isinstance(value, Mapping):
        raise MalformedOutputError(tool, f"expected {what} to be an object, got {type(value).__name__}")
    return value


def expect_list(value: JsonValue, *, tool: str, what: str) -> Sequence[JsonValue]:
    """Return ``value`` when it is a JSON array, otherwise raise."""

    if not isinstance(value, list):
        raise MalformedOutputError(tool, f"expected {what} to be an array, got {type(value).__name__}")
    return value


def iter_dicts(value: JsonValue) -> Iterator[Mapping[str, JsonValue]]:
    """Yield mapping items from ``value`` when it is a sequence of dict-like objects."""

    if isinstance(value, Sequence) and not isinstance(value, (str, bytes, bytearray)):
        for item in value:
            if isinstance(item, Mapping):
                yield item


def coerce_optional_int(value: JsonValue) -> int | None:
    """Return ``value`` as an ``int`` when it holds an integral number."""

    if isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value
    if isinstance(value, float) and value.is_integer():
        return int(value)
    if isinstance(value, str):
        try:
            return int(value.strip())
        except ValueError:
            return None
    return None


def coerce_optional_str(value: JsonValue) -> str | None:
    """Return ``value`` as a string, or ``None`` when missing."""

    if value is None:
        return None
    if isinstance(value, str):
        return value
    return str(value)


def relative_issue_path(reported: str, root: Path) -> str:
    """Express a tool-reported path relative to the working ``root``.

    Args:
        reported: Absolute or root-relative path emitted by the tool.
        root: Declared working root.

    Returns:
        str: POSIX path relative to ``root``.
    """

    return normalize_path_key(reported, base_dir=root)


def namespaced_rule(tool: str, rule: str) -> str:
    """Return the canonical ``"<tool>/<rule>"`` identifier."""

    return f"{tool}/{rule}"


__all__ = [
    "JsonValue",
    "OutputParser",
    "coerce_optional_int",
    "coerce_optional_str",
    "expect_list",
    "expect_mapping",
    "iter_dicts",
    "load_json_document",
    "namespaced_rule",
    "relative_issue_path",
]
