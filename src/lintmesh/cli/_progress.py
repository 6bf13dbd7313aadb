# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Progress rendering helpers for lint execution."""

from __future__ import annotations

from dataclasses import dataclass, field
from threading import Lock
from types import TracebackType
from typing import Final

from rich.console import Console
from rich.progress import Progress, SpinnerColumn, TaskID, TextColumn, TimeElapsedColumn

from ..execution import RunHooks
from ..logging import get_console, info, warn
from ..models import LinterRun

STATUS_RUNNING: Final[str] = "running"
STATUS_DONE: Final[str] = "[green]done[/]"
STATUS_FAILED: Final[str] = "[red]failed[/]"
MESSAGE_PREFIX: Final[str] = "lintmesh: "


@dataclass(slots=True)
class LintProgress:
    """Report linter start and completion on stderr.

    Interactive terminals get one transient spinner row per linter. Other
    streams get a plain line when each linter starts. ``quiet`` silences
    both, along with skip warnings.
    """

    interactive: bool = False
    quiet: bool = False
    console: Console | None = None
    _progress: Progress | None = field(init=False, default=None)
    _tasks: dict[str, TaskID] = field(init=False, default_factory=dict)
    _lock: Lock = field(init=False, default_factory=Lock)

    def __post_init__(self) -> None:
        if self.quiet or not self.interactive:
            return
        console = self.console or get_console(color=True, emoji=False, tty=True)
        self._progress = Progress(
            SpinnerColumn(),
            TextColumn("[progress.description]{task.description}"),
            TimeElapsedColumn(),
            TextColumn("{task.fields[status]}", justify="right"),
            console=console,
            transient=True,
        )

    @property
    def enabled(self) -> bool:
        """Return ``True`` when spinner rows are rendered."""

        return self._progress is not None

    def __enter__(self) -> LintProgress:
        if self._progress is not None:
            self._progress.start()
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        traceback: TracebackType | None,
    ) -> None:
        if self._progress is not None:
            self._progress.stop()

    def hooks(self) -> RunHooks:
        """Return orchestrator hooks bound to this reporter."""

        return RunHooks(on_skipped=self.skipped, before_tool=self.started, after_tool=self.finished)

    def skipped(self, name: str) -> None:
        """Note a linter that could not be located."""

        if not self.quiet:
            warn(f"{MESSAGE_PREFIX}{name} not available, skipping")

    def started(self, name: str) -> None:
        """Record that ``name`` began running."""

        if self.quiet:
            return
        if self._progress is None:
            info(f"{MESSAGE_PREFIX}running {name}...")
            return
        with self._lock:
            self._tasks[name] = self._progress.add_task(name, total=1, status=STATUS_RUNNING)

    def finished(self, run: LinterRun) -> None:
        """Record the outcome of a finished linter."""

        if self._progress is None:
            return
        with self._lock:
            task_id = self._tasks.get(run.name)
            if task_id is None:
                return
            status = STATUS_DONE if run.success else STATUS_FAILED
            self._progress.update(task_id, completed=1, status=status)


__all__ = ["LintProgress"]
