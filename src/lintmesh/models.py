# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Core data models shared across the lintmesh package.

These models define the Report JSON wire contract. Field names are serialised
in camelCase, line and column numbers are 1-indexed, and byte offsets in
autofix replacements are 0-indexed.
"""

from __future__ import annotations

from collections.abc import Iterable
from datetime import datetime, timezone
from typing import Final, Literal

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator
from pydantic.alias_generators import to_camel

from .filesystem.paths import is_absolute_key
from .severity import Severity

LinterName = Literal["eslint", "oxlint", "biome", "tsc"]
LINTER_NAMES: Final[tuple[LinterName, ...]] = ("eslint", "oxlint", "biome", "tsc")
DEFAULT_LINTERS: Final[tuple[LinterName, ...]] = ("eslint", "oxlint", "tsc")
UNKNOWN_VERSION: Final[str] = "unknown"


class _WireModel(BaseModel):
    """Immutable model serialised with camelCase keys."""

    model_config = ConfigDict(frozen=True, alias_generator=to_camel, populate_by_name=True)


class Replacement(_WireModel):
    """Single byte-range replacement belonging to an autofix."""

    start_offset: int = Field(ge=0)
    end_offset: int = Field(ge=0)
    text: str = ""

    @model_validator(mode="after")
    def _check_range(self) -> Replacement:
        if self.end_offset < self.start_offset:
            raise ValueError(f"replacement end offset {self.end_offset} precedes start offset {self.start_offset}")
        return self

    @property
    def is_deletion(self) -> bool:
        """Return ``True`` when the replacement removes text without inserting any."""
        return not self.text


class Fix(_WireModel):
    """Autofix payload made of byte-offset replacements.

    Consumers must apply replacements in reverse offset order so that earlier
    edits do not shift the offsets of later ones; :meth:`in_application_order`
    returns them that way. The model itself does not reorder anything.
    """

    replacements: tuple[Replacement, ...] = Field(default_factory=tuple)

    def in_application_order(self) -> tuple[Replacement, ...]:
        """Return replacements sorted for safe application (highest offset first)."""
        return tuple(sorted(self.replacements, key=lambda item: (item.start_offset, item.end_offset), reverse=True))


class RuleMeta(_WireModel):
    """Optional metadata describing the rule behind an issue."""

    docs_url: str | None = None
    category: str | None = None
    fixable: bool | None = None


class Issue(_WireModel):
    """Normalised finding reported by one linter."""

    path: str
    line: int = Field(ge=1)
    column: int = Field(ge=1)
    end_line: int = Field(ge=1)
    end_column: int = Field(ge=1)
    severity: Severity
    rule_id: str = Field(min_length=1)
    message: str
    source: LinterName
    fix: Fix | None = None
    meta: RuleMeta | None = None

    @field_validator("path")
    @classmethod
    def _require_relative_path(cls, value: str) -> str:
        if not value:
            raise ValueError("issue path must not be empty")
        if is_absolute_key(value):
            raise ValueError(f"issue path must be relative to the working root, got {value!r}")
        return value

    @model_validator(mode="after")
    def _check_span(self) -> Issue:
        if self.end_line < self.line:
            raise ValueError(f"end line {self.end_line} precedes start line {self.line} in {self.path}")
        if self.end_line == self.line and self.end_column < self.column:
            raise ValueError(
                f"end column {self.end_column} precedes start column {self.column} on line {self.line} of {self.path}",
            )
        return self

    @property
    def fixable(self) -> bool:
        """Return ``True`` when the issue carries at least one replacement."""
        return self.fix is not None and bool(self.fix.replacements)


class LinterRun(_WireModel):
    """Execution record for one attempted linter."""

    name: LinterName
    version: str = UNKNOWN_VERSION
    success: bool
    error: str | None = None
    warning: str | None = None
    duration_ms: int = Field(default=0, ge=0)
    files_processed: int = Field(default=0, ge=0)


class Summary(_WireModel):
    """Aggregate counts derived from a list of issues."""

    total: int = Field(default=0, ge=0)
    errors: int = Field(default=0, ge=0)
    warnings: int = Field(default=0, ge=0)
    info: int = Field(default=0, ge=0)
    fixable: int = Field(default=0, ge=0)

    @classmethod
    def from_issues(cls, issues: Iterable[Issue]) -> Summary:
        """Count ``issues`` by severity and fixability.

        Args:
            issues: Issues to summarise.

        Returns:
            Summary: Counts over ``issues``.
        """

        counts = {Severity.ERROR: 0, Severity.WARNING: 0, Severity.INFO: 0}
        total = 0
        fixable = 0
        for issue in issues:
            total += 1
            counts[issue.severity] += 1
            if issue.fixable:
                fixable += 1
        return cls(
            total=total,
            errors=counts[Severity.ERROR],
            warnings=counts[Severity.WARNING],
            info=counts[Severity.INFO],
            fixable=fixable,
        )


class Report(_WireModel):
    """Full, immutable output of one aggregation run."""

    timestamp: datetime
    cwd: str
    duration_ms: int = Field(default=0, ge=0)
    linters: tuple[LinterRun, ...] = Field(default_factory=tuple)
    issues: tuple[Issue, ...] = Field(default_factory=tuple)
    summary: Summary = Field(default_factory=Summary)

    @model_validator(mode="after")
    def _check_summary(self) -> Report:
        expected = Summary.from_issues(self.issues)
        if self.summary != expected:
            raise ValueError(f"summary {self.summary.model_dump()} does not match issues {expected.model_dump()}")
        return self

    @classmethod
    def assemble(
        cls,
        *,
        cwd: str,
        duration_ms: int,
        linters: Iterable[LinterRun] = (),
        issues: Iterable[Issue] = (),
        timestamp: datetime | None = None,
    ) -> Report:
        """Build a report whose summary is derived from ``issues``.

        Args:
            cwd: Working root the issue paths are relative to.
            duration_ms: Total elapsed wall-clock time in milliseconds.
            linters: Execution records for each attempted linter.
            issues: Merged issues, already in canonical order.
            timestamp: Completion time; defaults to now in UTC.

        Returns:
            Report: Fully populated report.
        """

        issue_list = tuple(issues)
        return cls(
            timestamp=timestamp or datetime.now(timezone.utc),
            cwd=cwd,
            duration_ms=duration_ms,
            linters=tuple(linters),
            issues=issue_list,
            summary=Summary.from_issues(issue_list),
        )

    @property
    def all_linters_failed(self) -> bool:
        """Return ``True`` when at least one linter ran and every one of them failed."""
        return bool(self.linters) and all(not run.success for run in self.linters)

    def to_json(self, *, pretty: bool = False) -> str:
        """Serialise the report to its wire JSON form.

        Args:
            pretty: Indent the output for human readers.

        Returns:
            str: JSON document with camelCase keys and absent optionals omitted.
        """

        return self.model_dump_json(by_alias=True, exclude_none=True, indent=2 if pretty else None)

    @classmethod
    def from_json(cls, payload: str | bytes) -> Report:
        """Parse a report previously produced by :meth:`to_json`."""
        return cls.model_validate_json(payload)


__all__ = [
    "DEFAULT_LINTERS",
    "LINTER_NAMES",
    "UNKNOWN_VERSION",
    "Fix",
    "Issue",
    "LinterName",
    "LinterRun",
    "Replacement",
    "Report",
    "RuleMeta",
    "Summary",
]
