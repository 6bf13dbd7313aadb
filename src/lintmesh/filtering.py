# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Post-run filtering for linters that always analyse a whole project."""

from __future__ import annotations

import os
from collections.abc import Iterable, Sequence
from pathlib import Path, PurePath
from typing import Final

from .filesystem.paths import is_absolute_key, normalize_path_key
from .models import Issue

GLOB_CHARACTERS: Final[frozenset[str]] = frozenset("*?[]{}")
_CURRENT_DIRECTORY: Final[str] = "."


def has_glob(pattern: str) -> bool:
    """Return ``True`` when ``pattern`` contains glob metacharacters."""

    return any(char in GLOB_CHARACTERS for char in pattern)


def _normalize_pattern(pattern: str, root: Path | None) -> str:
    candidate = pattern.replace(os.sep, "/") if os.sep != "/" else pattern
    if root is not None and is_absolute_key(candidate):
        candidate = normalize_path_key(candidate, base_dir=root)
    while candidate.startswith("./"):
        candidate = candidate[2:]
    candidate = candidate.rstrip("/")
    if not candidate:
        return _CURRENT_DIRECTORY
    return PurePath(candidate).as_posix()


def filter_by_patterns(
    issues: Iterable[Issue],
    patterns: Sequence[str],
    *,
    root: Path | None = None,
) -> list[Issue]:
    """Keep the issues whose path falls under one of the requested ``patterns``.

    Everything is kept when no pattern was requested, when any pattern names
    the current directory, or when any pattern is a glob (file resolution has
    already narrowed globbed requests). Otherwise an issue survives when its
    path equals a pattern or lives beneath it as a directory.

    Args:
        issues: Issues whose paths are relative to the working root.
        patterns: Patterns the caller originally requested.
        root: Working root used to relativise absolute patterns.

    Returns:
        list[Issue]: Surviving issues in their original order.
    """

    kept = list(issues)
    if not patterns or any(has_glob(pattern) for pattern in patterns):
        return kept
    normalized = {_normalize_pattern(pattern, root) for pattern in patterns}
    if _CURRENT_DIRECTORY in normalized:
        return kept
    prefixes = tuple(f"{pattern}/" for pattern in normalized)
    return [issue for issue in kept if issue.path in normalized or issue.path.startswith(prefixes)]


__all__ = ["GLOB_CHARACTERS", "filter_by_patterns", "has_glob"]
