# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Definitions for linters and the adapter that executes them."""

from __future__ import annotations

import logging
import os
import re
import shutil
import time
from collections.abc import Callable, Sequence
from pathlib import Path
from typing import Final, Literal, NamedTuple

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from ..errors import MalformedOutputError
from ..filtering import filter_by_patterns
from ..models import UNKNOWN_VERSION, Issue, LinterName, LinterRun
from ..parsers.base import OutputParser
from ..runtime.process import ExecResult, ProcessRunner, run_process

LOGGER = logging.getLogger(__name__)

NOT_FOUND_VERSION: Final[str] = "not found"
VERSION_TIMEOUT_MS: Final[int] = 10_000
LOCAL_BIN_DIR: Final[tuple[str, ...]] = ("node_modules", ".bin")
_SEMVER = re.compile(r"v?(\d+\.\d+\.\d+)")

BinarySource = Literal["config", "local", "path"]


class ResolvedBinary(NamedTuple):
    """Executable located for a linter."""

    name: str
    path: str
    source: BinarySource


class LinterInvocation(BaseModel):
    """Everything a linter needs to run once."""

    model_config = ConfigDict(frozen=True)

    cwd: Path
    files: tuple[Path, ...] = Field(default_factory=tuple)
    patterns: tuple[str, ...] = Field(default_factory=tuple)
    timeout_ms: int = Field(default=30_000, gt=0)
    fix: bool = False
    extra_args: tuple[str, ...] = Field(default_factory=tuple)
    bin: str | None = None

    @field_validator("files", mode="before")
    @classmethod
    def _coerce_files(cls, value: Sequence[Path | str] | None) -> tuple[Path, ...]:
        """Normalise file collections into tuples of :class:`Path` instances.

        Args:
            value: Raw value supplied for the ``files`` field.

        Returns:
            tuple[Path, ...]: Files represented as ``Path`` objects.
        """

        if value is None:
            return ()
        return tuple(item if isinstance(item, Path) else Path(item) for item in value)


ArgumentBuilder = Callable[[LinterInvocation], list[str]]
ExitClassifier = Callable[[ExecResult], str | None]
LowConfidenceCheck = Callable[[ExecResult, Sequence[Issue]], str | None]


class LinterTool(BaseModel):
    """Static description of one supported linter.

    ``classify`` returns ``None`` when the captured output should be parsed,
    or the failure message to report otherwise.
    """

    model_config = ConfigDict(arbitrary_types_allowed=True, frozen=True)

    name: LinterName
    display_name: str
    binaries: tuple[str, ...]
    build_args: ArgumentBuilder
    parser: OutputParser
    classify: ExitClassifier
    project_wide: bool = False
    combine_streams: bool = False
    version_args: tuple[str, ...] = ("--version",)
    config_files: tuple[str, ...] = Field(default_factory=tuple)
    packages: tuple[str, ...] = Field(default_factory=tuple)
    low_confidence: LowConfidenceCheck | None = None
    description: str = ""

    def missing_message(self) -> str:
        """Return the failure message used when no binary can be located."""

        if len(self.binaries) == 1:
            return f"{self.binaries[0]} not found"
        *head, last = self.binaries
        return f"Neither {', '.join(head)} nor {last} found"


class LinterResult(BaseModel):
    """Execution record plus the issues a linter contributed."""

    model_config = ConfigDict(frozen=True)

    run: LinterRun
    issues: tuple[Issue, ...] = Field(default_factory=tuple)


def extract_version(output: str) -> str:
    """Return the semantic version found in ``output`` or the trimmed raw text."""

    match = _SEMVER.search(output)
    if match is not None:
        return match.group(1)
    return output.strip()


def _elapsed_ms(start: float) -> int:
    return max(int((time.perf_counter() - start) * 1000), 0)


def _first_error(exc: ValidationError) -> str:
    errors = exc.errors()
    return str(errors[0]["msg"]) if errors else str(exc)


class LinterAdapter:
    """Run a :class:`LinterTool` through an injectable process runner."""

    def __init__(self, tool: LinterTool, *, runner: ProcessRunner = run_process) -> None:
        """Bind ``tool`` to ``runner``.

        Args:
            tool: Static linter description.
            runner: Callable used to execute the linter and its version probe.
        """

        self.tool = tool
        self._runner = runner

    @property
    def name(self) -> LinterName:
        """Return the identifier of the wrapped linter."""

        return self.tool.name

    def resolve_binary(self, cwd: Path, override: str | None = None) -> ResolvedBinary | None:
        """Locate the executable for the linter.

        An explicit ``override`` wins. Otherwise every candidate binary is
        looked up in the project's ``node_modules/.bin`` before any is looked
        up on ``PATH``.

        Args:
            cwd: Working root of the project.
            override: Optional binary configured by the user.

        Returns:
            ResolvedBinary | None: Located executable, or ``None``.
        """

        if override:
            override_path = Path(override)
            if not override_path.is_absolute() and os.sep not in override and "/" not in override:
                found = shutil.which(override)
                return ResolvedBinary(override, found, "config") if found else None
            resolved = override_path if override_path.is_absolute() else cwd / override_path
            return ResolvedBinary(override_path.name, str(resolved), "config") if resolved.is_file() else None
        for candidate in self.tool.binaries:
            local = cwd.joinpath(*LOCAL_BIN_DIR, candidate)
            if local.is_file():
                return ResolvedBinary(candidate, str(local), "local")
        for candidate in self.tool.binaries:
            found = shutil.which(candidate)
            if found:
                return ResolvedBinary(candidate, found, "path")
        return None

    def _probe(self, executable: str, cwd: Path) -> ExecResult | None:
        try:
            result = self._runner(executable, list(self.tool.version_args), timeout_ms=VERSION_TIMEOUT_MS, cwd=cwd)
        except OSError as exc:
            LOGGER.debug("version probe for %s failed: %s", self.tool.name, exc)
            return None
        if result.timed_out or result.exit_code != 0:
            return None
        return result

    def is_available(self, cwd: Path, override: str | None = None) -> bool:
        """Return ``True`` when the linter can be located and answers a version probe."""

        located = self.resolve_binary(cwd, override)
        if located is None:
            return False
        return self._probe(located.path, cwd) is not None

    def get_version(self, cwd: Path, override: str | None = None) -> str:
        """Return the linter version, ``"not found"`` when it cannot be located.

        Args:
            cwd: Working root of the project.
            override: Optional binary configured by the user.

        Returns:
            str: Semantic version, raw version output or a sentinel.
        """

        located = self.resolve_binary(cwd, override)
        if located is None:
            return NOT_FOUND_VERSION
        return self.version_of(located, cwd=cwd)

    def version_of(self, located: ResolvedBinary, *, cwd: Path) -> str:
        """Return the version label for an already located binary.

        When a linter has fallback binaries, a version reported by a preferred
        one is prefixed with its name (``"tsgo 7.0.0"``).
        """

        result = self._probe(located.path, cwd)
        if result is None:
            return UNKNOWN_VERSION
        version = extract_version(result.stdout or result.stderr) or UNKNOWN_VERSION
        if len(self.tool.binaries) > 1 and located.name != self.tool.binaries[-1]:
            return f"{located.name} {version}"
        return version

    def build_command_args(self, invocation: LinterInvocation) -> list[str]:
        """Return the argument list passed to the linter for ``invocation``."""

        args = list(self.tool.build_args(invocation))
        args.extend(invocation.extra_args)
        if not self.tool.project_wide:
            args.extend(str(path) for path in invocation.files)
        return args

    def run(self, invocation: LinterInvocation) -> LinterResult:
        """Execute the linter and parse its output.

        Structured failures (missing binary, timeout, fatal exit status,
        malformed output) are returned as unsuccessful runs. Only unexpected
        errors such as an unlaunchable executable propagate.

        Args:
            invocation: Files and options for this run.

        Returns:
            LinterResult: Execution record and parsed issues.
        """

        start = time.perf_counter()
        located = self.resolve_binary(invocation.cwd, invocation.bin)
        if located is None:
            return self._failure(self.tool.missing_message(), start=start, version=NOT_FOUND_VERSION)
        version = self.version_of(located, cwd=invocation.cwd)
        args = self.build_command_args(invocation)
        LOGGER.debug("running %s %s", located.path, " ".join(args))
        result = self._runner(located.path, args, timeout_ms=invocation.timeout_ms, cwd=invocation.cwd)

        if result.timed_out:
            message = f"{self.tool.display_name} timed out after {invocation.timeout_ms}ms"
            return self._failure(message, start=start, version=version)
        failure = self.tool.classify(result)
        if failure is not None:
            return self._failure(failure, start=start, version=version)

        output = f"{result.stdout}\n{result.stderr}" if self.tool.combine_streams else result.stdout
        try:
            issues = self.tool.parser(output, invocation.cwd)
        except MalformedOutputError as exc:
            return self._failure(str(exc), start=start, version=version)
        except ValidationError as exc:
            malformed = MalformedOutputError(self.tool.name, _first_error(exc))
            return self._failure(str(malformed), start=start, version=version)

        warning = self.tool.low_confidence(result, issues) if self.tool.low_confidence else None
        if warning:
            LOGGER.warning("%s: %s", self.tool.name, warning)
        if self.tool.project_wide:
            issues = filter_by_patterns(issues, invocation.patterns, root=invocation.cwd)
        run = LinterRun(
            name=self.tool.name,
            version=version,
            success=True,
            warning=warning,
            duration_ms=_elapsed_ms(start),
            files_processed=len(invocation.files),
        )
        return LinterResult(run=run, issues=tuple(issues))

    def _failure(self, message: str, *, start: float, version: str) -> LinterResult:
        LOGGER.debug("%s failed: %s", self.tool.name, message)
        run = LinterRun(
            name=self.tool.name,
            version=version,
            success=False,
            error=message,
            duration_ms=_elapsed_ms(start),
        )
        return LinterResult(run=run)


__all__ = [
    "NOT_FOUND_VERSION",
    "VERSION_TIMEOUT_MS",
    "ArgumentBuilder",
    "BinarySource",
    "ExitClassifier",
    "LinterAdapter",
    "LinterInvocation",
    "LinterResult",
    "LinterTool",
    "LowConfidenceCheck",
    "ResolvedBinary",
    "extract_version",
]
