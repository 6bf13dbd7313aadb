# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Resolve user supplied paths and glob patterns into concrete files."""

from __future__ import annotations

import logging
import os
import re
from collections.abc import Iterable, Iterator, Sequence
from dataclasses import dataclass
from pathlib import Path, PurePath

import pathspec

from .config.models import DEFAULT_EXCLUDE, DEFAULT_INCLUDE, SOURCE_EXTENSIONS
from .filesystem.paths import absolutize, is_absolute_key, normalize_path_key
from .filtering import has_glob

LOGGER = logging.getLogger(__name__)

_BRACE_GROUP = re.compile(r"\{([^{}]*)\}")
_DIRECTORY_SUFFIX = "**/*.{" + ",".join(SOURCE_EXTENSIONS) + "}"


def expand_braces(pattern: str) -> list[str]:
    """Expand ``{a,b}`` alternatives, innermost group first.

    Args:
        pattern: Glob pattern possibly containing brace groups.

    Returns:
        list[str]: Patterns without brace groups, in expansion order.
    """

    pending = [pattern]
    expanded: list[str] = []
    while pending:
        current = pending.pop(0)
        match = _BRACE_GROUP.search(current)
        if match is None:
            expanded.append(current)
            continue
        head, tail = current[: match.start()], current[match.end() :]
        pending[0:0] = [f"{head}{option}{tail}" for option in match.group(1).split(",")]
    return list(dict.fromkeys(expanded))


def _anchor(pattern: str) -> str:
    if pattern.startswith(("/", "!")):
        return pattern
    return f"/{pattern}"


def build_spec(patterns: Iterable[str]) -> pathspec.GitIgnoreSpec:
    """Compile glob ``patterns`` relative to the project root.

    Patterns are anchored at the root so that ``*.ts`` only matches top-level
    files, as shell globbing would.
    """

    lines = [_anchor(expanded) for pattern in patterns for expanded in expand_braces(pattern.replace(os.sep, "/"))]
    return pathspec.GitIgnoreSpec.from_lines(lines)


@dataclass(frozen=True, slots=True)
class _PatternPlan:
    globs: tuple[str, ...]
    explicit: tuple[Path, ...]


def _plan(patterns: Sequence[str], root: Path) -> _PatternPlan:
    globs: list[str] = []
    explicit: list[Path] = []
    for pattern in patterns:
        candidate = pattern
        if is_absolute_key(candidate):
            candidate = normalize_path_key(candidate, base_dir=root)
        if has_glob(candidate):
            globs.append(candidate)
            continue
        target = absolutize(candidate, base_dir=root)
        if target.is_dir():
            prefix = PurePath(candidate).as_posix().rstrip("/")
            globs.append(_DIRECTORY_SUFFIX if prefix in ("", ".") else f"{prefix}/{_DIRECTORY_SUFFIX}")
        elif target.is_file():
            explicit.append(target)
        else:
            LOGGER.debug("pattern %s matches no file or directory", pattern)
            globs.append(candidate)
    return _PatternPlan(globs=tuple(globs), explicit=tuple(explicit))


class ExcludeMatcher:
    """Match root-relative paths against exclusion patterns."""

    def __init__(self, spec: pathspec.GitIgnoreSpec) -> None:
        self._spec = spec

    def matches(self, relative_path: str, *, is_dir: bool = False) -> bool:
        """Return ``True`` when ``relative_path`` is excluded.

        Args:
            relative_path: Root-relative POSIX path.
            is_dir: Whether the path names a directory.

        Returns:
            bool: ``True`` when the path or, for directories, its contents are excluded.
        """

        normalized = relative_path.strip("/")
        if not normalized:
            return False
        if self._spec.match_file(normalized):
            return True
        return is_dir and (
            self._spec.match_file(f"{normalized}/") or self._spec.match_file(f"{normalized}/__lintmesh_probe__")
        )


def _walk(root: Path, excluder: ExcludeMatcher) -> Iterator[str]:
    for current, dirnames, filenames in os.walk(root):
        base = PurePath(os.path.relpath(current, root)).as_posix()
        prefix = "" if base == "." else f"{base}/"
        dirnames[:] = sorted(name for name in dirnames if not excluder.matches(f"{prefix}{name}", is_dir=True))
        for name in sorted(filenames):
            yield f"{prefix}{name}"


def resolve_files(
    patterns: Sequence[str],
    root: Path,
    exclude: Sequence[str] = DEFAULT_EXCLUDE,
    *,
    include: Sequence[str] = DEFAULT_INCLUDE,
) -> list[Path]:
    """Return the sorted absolute files selected by ``patterns``.

    Args:
        patterns: Paths or glob patterns from the caller; ``include`` is used
            when empty.
        root: Project root that relative patterns are anchored at.
        exclude: Glob patterns whose matches are dropped.
        include: Fallback patterns for an empty ``patterns`` list.

    Returns:
        list[Path]: Unique absolute file paths in lexical order.
    """

    root = absolutize(root, base_dir=Path.cwd())
    plan = _plan(list(patterns) or list(include), root)
    excluder = ExcludeMatcher(build_spec(exclude))
    selected: set[Path] = set(plan.explicit)
    if plan.globs:
        include_spec = build_spec(plan.globs)
        for relative in _walk(root, excluder):
            if include_spec.match_file(relative) and not excluder.matches(relative):
                selected.add(root / relative)
    return sorted(selected)


__all__ = ["ExcludeMatcher", "build_spec", "expand_braces", "resolve_files"]
