# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Parser for the free-text diagnostics printed by ``tsc``/``tsgo``.

Unlike the JSON reporters, this format offers no way to tell "no problems"
from "output we do not understand". Input in which no diagnostic record is
recognised therefore yields zero issues instead of raising. The adapter flags
a failing exit status with no recognised records as a low-confidence run.
"""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from pathlib import Path
from typing import Final

from ..models import Issue
from ..severity import Severity
from .base import namespaced_rule, relative_issue_path

_HEADER: Final = re.compile(
    r"^(?P<path>\S.*?)\((?P<line>\d+),(?P<column>\d+)\): "
    r"(?P<category>error|warning|message) (?P<code>TS\d+): ?(?P<message>.*)$",
)
_CONTINUATION_PREFIXES: Final[tuple[str, ...]] = (" ", "\t")


@dataclass(slots=True)
class _Record:
    path: str
    line: int
    column: int
    category: str
    code: str
    lines: list[str] = field(default_factory=list)

    def to_issue(self, root: Path) -> Issue:
        line = max(self.line, 1)
        column = max(self.column, 1)
        return Issue(
            path=relative_issue_path(self.path, root),
            line=line,
            column=column,
            end_line=line,
            end_column=column,
            severity=Severity.ERROR if self.category == "error" else Severity.WARNING,
            rule_id=namespaced_rule("tsc", self.code),
            message="\n".join(self.lines).strip(),
            source="tsc",
        )


def parse_tsc(output: str, root: Path) -> list[Issue]:
    """Return the issues recognised in compiler ``output``; never raises on unknown text.

    A record starts at a header line ``path(line,col): error TS1234: text``.
    Indented lines that follow extend the record's message. A blank line or
    any other non-indented line closes the record. Diagnostics without a
    location, such as ``error TS5083: ...``, are skipped.

    Args:
        output: Concatenated stdout and stderr of the compiler.
        root: Working root the issue paths are expressed against.

    Returns:
        list[Issue]: Located diagnostics in output order.
    """

    issues: list[Issue] = []
    current: _Record | None = None
    for raw_line in output.splitlines():
        header = _HEADER.match(raw_line)
        if header is not None:
            if current is not None:
                issues.append(current.to_issue(root))
            current = _Record(
                path=header.group("path"),
                line=int(header.group("line")),
                column=int(header.group("column")),
                category=header.group("category"),
                code=header.group("code"),
                lines=[header.group("message")],
            )
            continue
        if current is not None and raw_line.strip() and raw_line.startswith(_CONTINUATION_PREFIXES):
            current.lines.append(raw_line.rstrip())
            continue
        if current is not None:
            issues.append(current.to_issue(root))
            current = None
    if current is not None:
        issues.append(current.to_issue(root))
    return issues


__all__ = ["parse_tsc"]
