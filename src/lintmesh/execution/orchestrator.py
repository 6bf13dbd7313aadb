# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""High level orchestration for running registered linters."""

from __future__ import annotations

import locale
import logging
import time
from collections.abc import Callable, Iterable, Mapping, Sequence
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass
from pathlib import Path

from pydantic import BaseModel, ConfigDict, Field, field_validator

from ..models import DEFAULT_LINTERS, UNKNOWN_VERSION, Issue, LinterName, LinterRun, Report
from ..runtime.process import ProcessRunner, run_process
from ..tools.base import LinterAdapter, LinterInvocation, LinterResult
from ..tools.registry import DEFAULT_REGISTRY, LinterRegistry

LOGGER = logging.getLogger(__name__)


@dataclass
class RunHooks:
    """Optional callbacks invoked while linters run.

    ``before_tool`` and ``after_tool`` are called from worker threads.
    """

    on_skipped: Callable[[str], None] | None = None
    before_tool: Callable[[str], None] | None = None
    after_tool: Callable[[LinterRun], None] | None = None


class RunOptions(BaseModel):
    """Fully resolved inputs for one aggregation run."""

    model_config = ConfigDict(frozen=True)

    cwd: Path
    linters: tuple[LinterName, ...] = DEFAULT_LINTERS
    files: tuple[Path, ...] = Field(default_factory=tuple)
    patterns: tuple[str, ...] = Field(default_factory=tuple)
    exclude: tuple[str, ...] = Field(default_factory=tuple)
    timeout_ms: int = Field(default=30_000, gt=0)
    fix: bool = False
    bins: Mapping[str, str] = Field(default_factory=dict)
    extra_args: Mapping[str, tuple[str, ...]] = Field(default_factory=dict)

    @field_validator("linters", mode="after")
    @classmethod
    def _dedupe_linters(cls, value: tuple[LinterName, ...]) -> tuple[LinterName, ...]:
        """Drop repeated linter names while preserving request order."""

        return tuple(dict.fromkeys(value))

    def invocation_for(self, name: str) -> LinterInvocation:
        """Return the per-linter invocation derived from these options.

        Args:
            name: Linter identifier.

        Returns:
            LinterInvocation: Invocation carrying shared options and linter overrides.
        """

        return LinterInvocation(
            cwd=self.cwd,
            files=self.files,
            patterns=self.patterns,
            timeout_ms=self.timeout_ms,
            fix=self.fix,
            extra_args=tuple(self.extra_args.get(name, ())),
            bin=self.bins.get(name),
        )


def sort_issues(issues: Iterable[Issue]) -> list[Issue]:
    """Return ``issues`` in canonical ``(path, line, column)`` order.

    Paths compare case-insensitively through the active collation locale, with
    the exact spelling as a tie-break. The sort is stable, so issues sharing a
    location keep their merge order.
    """

    return sorted(issues, key=_sort_key)


def _sort_key(issue: Issue) -> tuple[str, str, int, int]:
    return (locale.strxfrm(issue.path.casefold()), locale.strxfrm(issue.path), issue.line, issue.column)


def _failed_result(name: LinterName, exc: Exception) -> LinterResult:
    message = str(exc) or type(exc).__name__
    return LinterResult(run=LinterRun(name=name, version=UNKNOWN_VERSION, success=False, error=message))


def _run_isolated(adapter: LinterAdapter, invocation: LinterInvocation, hooks: RunHooks) -> LinterResult:
    if hooks.before_tool:
        hooks.before_tool(adapter.name)
    try:
        result = adapter.run(invocation)
    except Exception as exc:  # noqa: BLE001 - one linter's fault must not abort the others
        LOGGER.debug("%s raised while running", adapter.name, exc_info=True)
        result = _failed_result(adapter.name, exc)
    if hooks.after_tool:
        hooks.after_tool(result.run)
    return result


def run_linters(
    adapters: Sequence[LinterAdapter],
    options: RunOptions,
    *,
    hooks: RunHooks | None = None,
) -> list[LinterResult]:
    """Run ``adapters`` concurrently and return their results in adapter order.

    Every adapter fault is converted into a failed :class:`LinterRun`; this
    function never raises on behalf of a linter.

    Args:
        adapters: Adapters to execute.
        options: Shared run options.
        hooks: Optional progress callbacks.

    Returns:
        list[LinterResult]: One result per adapter.
    """

    if not adapters:
        return []
    active_hooks = hooks or RunHooks()
    with ThreadPoolExecutor(max_workers=len(adapters)) as executor:
        futures = [
            executor.submit(_run_isolated, adapter, options.invocation_for(adapter.name), active_hooks)
            for adapter in adapters
        ]
        return [future.result() for future in futures]


def _probe_availability(adapter: LinterAdapter, options: RunOptions) -> bool:
    try:
        return adapter.is_available(options.cwd, options.bins.get(adapter.name))
    except Exception:  # noqa: BLE001 - a broken probe means the linter is unusable
        LOGGER.debug("availability probe for %s raised", adapter.name, exc_info=True)
        return False


class Orchestrator:
    """Coordinates availability checks, concurrent execution and merging."""

    def __init__(
        self,
        *,
        registry: LinterRegistry | None = None,
        runner: ProcessRunner | None = None,
        hooks: RunHooks | None = None,
    ) -> None:
        """Create an orchestrator with the supplied collaborators.

        Args:
            registry: Registry that resolves linter definitions.
            runner: Callable used to spawn external processes.
            hooks: Optional callbacks invoked throughout execution.
        """

        self._registry = registry or DEFAULT_REGISTRY
        self._runner = runner or run_process
        self._hooks = hooks or RunHooks()

    def adapters_for(self, names: Iterable[str]) -> list[LinterAdapter]:
        """Return adapters for ``names``.

        Raises:
            KeyError: If a name is not registered.
        """

        adapters: list[LinterAdapter] = []
        for name in names:
            tool = self._registry.try_get(name)
            if tool is None:
                raise KeyError(f"Unknown linter '{name}'")
            adapters.append(LinterAdapter(tool, runner=self._runner))
        return adapters

    def select_available(self, adapters: Sequence[LinterAdapter], options: RunOptions) -> list[LinterAdapter]:
        """Probe ``adapters`` concurrently and keep the runnable ones.

        Unavailable linters are reported through ``on_skipped`` and produce no
        execution record.
        """

        if not adapters:
            return []
        with ThreadPoolExecutor(max_workers=len(adapters)) as executor:
            flags = list(executor.map(lambda adapter: _probe_availability(adapter, options), adapters))
        available: list[LinterAdapter] = []
        for adapter, flag in zip(adapters, flags, strict=True):
            if flag:
                available.append(adapter)
                continue
            LOGGER.debug("%s is not available; skipping", adapter.name)
            if self._hooks.on_skipped:
                self._hooks.on_skipped(adapter.name)
        return available

    def run(self, options: RunOptions) -> Report:
        """Execute the requested linters and return the merged report.

        A run without files returns an empty report without probing any
        linter.

        Args:
            options: Fully resolved run options.

        Returns:
            Report: Sorted issues, per-linter records and summary.
        """

        start = time.perf_counter()
        cwd = str(options.cwd)
        if not options.files:
            LOGGER.debug("no files to lint under %s", cwd)
            return Report.assemble(cwd=cwd, duration_ms=_elapsed_ms(start))

        adapters = self.select_available(self.adapters_for(options.linters), options)
        results = run_linters(adapters, options, hooks=self._hooks)
        merged = [issue for result in results for issue in result.issues]
        return Report.assemble(
            cwd=cwd,
            duration_ms=_elapsed_ms(start),
            linters=[result.run for result in results],
            issues=sort_issues(merged),
        )


def _elapsed_ms(start: float) -> int:
    return max(int((time.perf_counter() - start) * 1000), 0)


__all__ = ["Orchestrator", "RunHooks", "RunOptions", "run_linters", "sort_issues"]
