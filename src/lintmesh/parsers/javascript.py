# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Parsers for the JSON reporters of JavaScript and TypeScript linters.

Each parser is a pure ``(stdout, root) -> list[Issue]`` transform. Blank input
yields no issues; anything else that is not the JSON shape the tool always
emits raises :class:`~lintmesh.errors.MalformedOutputError`.
"""

from __future__ import annotations

import re
from collections.abc import Mapping, Sequence
from pathlib import Path
from typing import Final

from ..errors import MalformedOutputError
from ..models import Fix, Issue, Replacement, RuleMeta
from ..severity import Severity, map_severity
from .base import (
    JsonValue,
    coerce_optional_int,
    coerce_optional_str,
    expect_list,
    expect_mapping,
    iter_dicts,
    load_json_document,
    namespaced_rule,
    relative_issue_path,
)

PARSE_ERROR_RULE: Final[str] = "parse-error"

_ESLINT_ERROR_LEVEL: Final[int] = 2
_OXLINT_SEVERITIES: Final[dict[str, Severity]] = {"error": Severity.ERROR}
_BIOME_SEVERITIES: Final[dict[str, Severity]] = {
    "error": Severity.ERROR,
    "warning": Severity.WARNING,
    "info": Severity.INFO,
}
BIOME_DOCS_BASE: Final[str] = "https://biomejs.dev/linter/rules/"
_BIOME_FIXABLE_TAG: Final[str] = "fixable"
_CAMEL_BOUNDARY = re.compile(r"([a-z])([A-Z])")


def parse_eslint(stdout: str, root: Path) -> list[Issue]:
    """Parse ESLint ``--format json`` output.

    Args:
        stdout: JSON array of per-file results.
        root: Working root the issue paths are expressed against.

    Returns:
        list[Issue]: One issue per ESLint message, in report order.

    Raises:
        MalformedOutputError: If the payload is not a JSON array of file results.
    """

    payload = load_json_document(stdout, tool="eslint")
    if payload is None:
        return []
    results: list[Issue] = []
    for entry in expect_list(payload, tool="eslint", what="report"):
        file_result = expect_mapping(entry, tool="eslint", what="file result")
        file_path = coerce_optional_str(file_result.get("filePath"))
        if not file_path:
            raise MalformedOutputError("eslint", "file result is missing 'filePath'")
        path = relative_issue_path(file_path, root)
        for message in iter_dicts(file_result.get("messages")):
            results.append(_eslint_issue(path, message))
    return results


def _eslint_issue(path: str, message: Mapping[str, JsonValue]) -> Issue:
    line = coerce_optional_int(message.get("line")) or 1
    column = coerce_optional_int(message.get("column")) or 1
    end_line = coerce_optional_int(message.get("endLine")) or line
    end_column = coerce_optional_int(message.get("endColumn")) or column
    level = coerce_optional_int(message.get("severity"))
    rule = coerce_optional_str(message.get("ruleId")) or PARSE_ERROR_RULE
    return Issue(
        path=path,
        line=line,
        column=column,
        end_line=end_line,
        end_column=end_column,
        severity=Severity.ERROR if level == _ESLINT_ERROR_LEVEL else Severity.WARNING,
        rule_id=namespaced_rule("eslint", rule),
        message=coerce_optional_str(message.get("message")) or "",
        source="eslint",
        fix=_eslint_fix(message),
    )


def _eslint_fix(message: Mapping[str, JsonValue]) -> Fix | None:
    """Return the primary fix, falling back to the first suggestion."""

    candidate = message.get("fix")
    if not isinstance(candidate, Mapping):
        first_suggestion = next(iter_dicts(message.get("suggestions")), None)
        candidate = first_suggestion.get("fix") if first_suggestion is not None else None
    if not isinstance(candidate, Mapping):
        return None
    span = candidate.get("range")
    if not isinstance(span, Sequence) or isinstance(span, str) or len(span) != 2:
        return None
    start, end = coerce_optional_int(span[0]), coerce_optional_int(span[1])
    if start is None or end is None:
        return None
    text = coerce_optional_str(candidate.get("text")) or ""
    return Fix(replacements=(Replacement(start_offset=start, end_offset=end, text=text),))


def parse_oxlint(stdout: str, root: Path) -> list[Issue]:
    """Parse oxlint ``--format json`` output.

    Only the first label of each diagnostic is used; diagnostics without a
    label cannot be located and are skipped. The end column is the start
    column plus the label length on the same line.

    Args:
        stdout: JSON object carrying a ``diagnostics`` array.
        root: Working root the issue paths are expressed against.

    Returns:
        list[Issue]: Located diagnostics in report order.

    Raises:
        MalformedOutputError: If the payload is not a JSON object.
    """

    payload = load_json_document(stdout, tool="oxlint")
    if payload is None:
        return []
    document = expect_mapping(payload, tool="oxlint", what="report")
    diagnostics = expect_list(document.get("diagnostics", []), tool="oxlint", what="'diagnostics'")
    results: list[Issue] = []
    for diagnostic in iter_dicts(diagnostics):
        label = next(iter_dicts(diagnostic.get("labels")), None)
        if label is None:
            continue
        span = label.get("span")
        if not isinstance(span, Mapping):
            continue
        line = coerce_optional_int(span.get("line"))
        column = coerce_optional_int(span.get("column"))
        filename = coerce_optional_str(diagnostic.get("filename"))
        if line is None or column is None or not filename:
            continue
        length = coerce_optional_int(span.get("length")) or 0
        url = coerce_optional_str(diagnostic.get("url"))
        results.append(
            Issue(
                path=relative_issue_path(filename, root),
                line=line,
                column=column,
                end_line=line,
                end_column=column + length,
                severity=map_severity(diagnostic.get("severity"), _OXLINT_SEVERITIES, Severity.WARNING),
                rule_id=namespaced_rule("oxlint", coerce_optional_str(diagnostic.get("code")) or PARSE_ERROR_RULE),
                message=coerce_optional_str(diagnostic.get("message")) or "",
                source="oxlint",
                meta=RuleMeta(docs_url=url) if url else None,
            ),
        )
    return results


def parse_biome(stdout: str, root: Path) -> list[Issue]:
    """Parse biome ``--reporter=json`` output.

    Biome reports byte spans together with a copy of the file's source, so
    line and column are recovered by walking that source.

    Args:
        stdout: JSON object carrying ``summary`` and ``diagnostics``.
        root: Working root the issue paths are expressed against.

    Returns:
        list[Issue]: Located diagnostics in report order.

    Raises:
        MalformedOutputError: If the payload is not a JSON object.
    """

    payload = load_json_document(stdout, tool="biome")
    if payload is None:
        return []
    document = expect_mapping(payload, tool="biome", what="report")
    diagnostics = expect_list(document.get("diagnostics", []), tool="biome", what="'diagnostics'")
    results: list[Issue] = []
    for diagnostic in iter_dicts(diagnostics):
        issue = _biome_issue(diagnostic, root)
        if issue is not None:
            results.append(issue)
    return results


def _biome_issue(diagnostic: Mapping[str, JsonValue], root: Path) -> Issue | None:
    location = diagnostic.get("location")
    if not isinstance(location, Mapping):
        return None
    source_code = location.get("sourceCode")
    span = location.get("span")
    file_path = _biome_file(location.get("path"))
    if not isinstance(source_code, str) or not file_path:
        return None
    if not isinstance(span, Sequence) or isinstance(span, str) or len(span) != 2:
        return None
    start_offset, end_offset = coerce_optional_int(span[0]), coerce_optional_int(span[1])
    if start_offset is None or end_offset is None:
        return None
    (line, column), (end_line, end_column) = offsets_to_positions(source_code, (start_offset, end_offset))

    category = coerce_optional_str(diagnostic.get("category")) or ""
    segments = [segment for segment in category.split("/") if segment]
    rule = segments[-1] if segments else PARSE_ERROR_RULE
    group = segments[-2] if len(segments) >= 3 else None
    tags = diagnostic.get("tags")
    fixable = isinstance(tags, Sequence) and not isinstance(tags, str) and _BIOME_FIXABLE_TAG in tags
    return Issue(
        path=relative_issue_path(file_path, root),
        line=line,
        column=column,
        end_line=end_line,
        end_column=end_column,
        severity=map_severity(diagnostic.get("severity"), _BIOME_SEVERITIES, Severity.WARNING),
        rule_id=namespaced_rule("biome", rule),
        message=_biome_message(diagnostic),
        source="biome",
        meta=RuleMeta(docs_url=biome_docs_url(rule) if segments else None, category=group, fixable=fixable),
    )


def _biome_file(value: JsonValue) -> str | None:
    if isinstance(value, Mapping):
        return coerce_optional_str(value.get("file"))
    return coerce_optional_str(value)


def _biome_message(diagnostic: Mapping[str, JsonValue]) -> str:
    description = coerce_optional_str(diagnostic.get("description"))
    if description:
        return description
    parts = [coerce_optional_str(part.get("content")) or "" for part in iter_dicts(diagnostic.get("message"))]
    return "".join(parts)


def biome_docs_url(rule: str) -> str:
    """Return the documentation URL for a biome rule such as ``noExplicitAny``."""

    return BIOME_DOCS_BASE + _CAMEL_BOUNDARY.sub(r"\1-\2", rule).lower()


def offsets_to_positions(source: str, offsets: Sequence[int]) -> list[tuple[int, int]]:
    """Convert character offsets into 1-indexed ``(line, column)`` pairs.

    All offsets are resolved during a single walk of ``source``. Offsets past
    the end of the text resolve to the position just after the last character.

    Args:
        source: Text the offsets point into.
        offsets: Zero-based offsets, in any order.

    Returns:
        list[tuple[int, int]]: Positions aligned with ``offsets``.
    """

    targets = sorted({max(offset, 0) for offset in offsets})
    resolved: dict[int, tuple[int, int]] = {}
    line, column = 1, 1
    cursor = 0
    pending = iter(targets)
    target = next(pending, None)
    for char in source:
        while target is not None and cursor >= target:
            resolved[target] = (line, column)
            target = next(pending, None)
        if target is None:
            break
        if char == "\n":
            line += 1
            column = 1
        else:
            column += 1
        cursor += 1
    while target is not None:
        resolved[target] = (line, column)
        target = next(pending, None)
    return [resolved[max(offset, 0)] for offset in offsets]


__all__ = [
    "BIOME_DOCS_BASE",
    "PARSE_ERROR_RULE",
    "biome_docs_url",
    "offsets_to_positions",
    "parse_biome",
    "parse_eslint",
    "parse_oxlint",
]
