# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Configuration models and built-in defaults."""

from __future__ import annotations

from pathlib import Path
from typing import Final

from pydantic import BaseModel, ConfigDict, Field, field_validator

from ..models import DEFAULT_LINTERS, LinterName
from ..severity import Severity, parse_severity

SOURCE_EXTENSIONS: Final[tuple[str, ...]] = ("ts", "tsx", "js", "jsx", "mjs", "cjs")
DEFAULT_INCLUDE: Final[tuple[str, ...]] = ("**/*.{" + ",".join(SOURCE_EXTENSIONS) + "}",)
DEFAULT_EXCLUDE: Final[tuple[str, ...]] = (
    "**/node_modules/**",
    "**/dist/**",
    "**/build/**",
    "**/.git/**",
)
DEFAULT_TIMEOUT_MS: Final[int] = 30_000
DEFAULT_FAIL_ON: Final[Severity] = Severity.ERROR


class LinterConfig(BaseModel):
    """Per-linter settings from the ``[linters.<name>]`` tables."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    enabled: bool = True
    bin: str | None = None
    args: tuple[str, ...] = Field(default_factory=tuple)


class LintmeshConfig(BaseModel):
    """Validated contents of a configuration file.

    Unset fields stay ``None`` so that callers can tell "configured" from
    "defaulted" when layering CLI flags on top.
    """

    model_config = ConfigDict(extra="forbid", frozen=True)

    linters: dict[LinterName, LinterConfig] = Field(default_factory=dict)
    include: tuple[str, ...] | None = None
    exclude: tuple[str, ...] | None = None
    timeout: int | None = Field(default=None, gt=0)
    fail_on: Severity | None = None

    @field_validator("fail_on", mode="before")
    @classmethod
    def _coerce_fail_on(cls, value: object) -> object:
        """Accept severity labels in any letter case."""

        if isinstance(value, str):
            return parse_severity(value)
        return value

    def enabled_linters(self) -> tuple[LinterName, ...]:
        """Return the linters listed in the file and not disabled, in file order."""

        return tuple(name for name, settings in self.linters.items() if settings.enabled)


class ResolvedSettings(BaseModel):
    """Settings after layering CLI flags over configuration over defaults."""

    model_config = ConfigDict(frozen=True)

    cwd: Path
    linters: tuple[LinterName, ...] = DEFAULT_LINTERS
    patterns: tuple[str, ...] = Field(default_factory=tuple)
    include: tuple[str, ...] = DEFAULT_INCLUDE
    exclude: tuple[str, ...] = DEFAULT_EXCLUDE
    timeout_ms: int = Field(default=DEFAULT_TIMEOUT_MS, gt=0)
    fail_on: Severity = DEFAULT_FAIL_ON
    fix: bool = False
    bins: dict[str, str] = Field(default_factory=dict)
    extra_args: dict[str, tuple[str, ...]] = Field(default_factory=dict)
    config_path: Path | None = None


__all__ = [
    "DEFAULT_EXCLUDE",
    "DEFAULT_FAIL_ON",
    "DEFAULT_INCLUDE",
    "DEFAULT_TIMEOUT_MS",
    "SOURCE_EXTENSIONS",
    "LinterConfig",
    "LintmeshConfig",
    "ResolvedSettings",
]
