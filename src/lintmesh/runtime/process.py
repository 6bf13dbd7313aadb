# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Safe wrappers around ``subprocess`` execution."""

from __future__ import annotations

# Bandit: subprocess usage is intentional; linters are launched from argument
# lists with ``shell=True`` disabled.
import subprocess  # nosec B404 suppression_valid: Shell-free subprocess wrapper enforces safe execution.
from collections.abc import Mapping, Sequence
from dataclasses import dataclass
from pathlib import Path
from typing import Final, Protocol

TIMEOUT_EXIT_CODE: Final[int] = 124


@dataclass(frozen=True, slots=True)
class ExecResult:
    """Captured outcome of one external process."""

    stdout: str
    stderr: str
    exit_code: int
    timed_out: bool = False


class ProcessRunner(Protocol):
    """Callable signature shared by :func:`run_process` and test doubles."""

    def __call__(
        self,
        command: str,
        args: Sequence[str],
        *,
        timeout_ms: int,
        cwd: Path,
    ) -> ExecResult:
        """Run ``command`` with ``args`` and return the captured result."""
        ...


def _ensure_text(value: str | bytes | None) -> str:
    """Return ``value`` decoded to text, or an empty string when nothing was captured.

    Args:
        value: Stream output captured from subprocess execution.

    Returns:
        str: Text output.
    """

    if value is None:
        return ""
    if isinstance(value, str):
        return value
    return value.decode(errors="replace")


def run_process(
    command: str,
    args: Sequence[str],
    *,
    timeout_ms: int,
    cwd: Path,
    env: Mapping[str, str] | None = None,
) -> ExecResult:
    """Execute ``command`` and capture its streams without raising on exit status.

    Args:
        command: Executable path or name.
        args: Arguments passed after ``command``.
        timeout_ms: Wall-clock budget in milliseconds; the child is killed on expiry.
        cwd: Working directory for the child process.
        env: Optional environment replacing the inherited one.

    Returns:
        ExecResult: Captured streams, exit code and timeout flag. A timed out
        run reports exit code ``124``.

    Raises:
        OSError: If the executable cannot be launched at all.
        ValueError: If ``timeout_ms`` is not positive.
    """

    if timeout_ms <= 0:
        raise ValueError("timeout_ms must be positive")
    try:
        # Bandit: arguments come from adapter definitions and resolved file
        # lists, never from a shell string.
        completed = subprocess.run(  # nosec B603 - controlled arguments, not user supplied
            [command, *args],
            cwd=str(cwd),
            env=dict(env) if env is not None else None,
            check=False,
            capture_output=True,
            text=True,
            errors="replace",
            timeout=timeout_ms / 1000,
            stdin=subprocess.DEVNULL,
        )
    except subprocess.TimeoutExpired as exc:
        return ExecResult(
            stdout=_ensure_text(exc.stdout),
            stderr=_ensure_text(exc.stderr),
            exit_code=TIMEOUT_EXIT_CODE,
            timed_out=True,
        )
    return ExecResult(
        stdout=_ensure_text(completed.stdout),
        stderr=_ensure_text(completed.stderr),
        exit_code=completed.returncode,
    )


__all__ = ["TIMEOUT_EXIT_CODE", "ExecResult", "ProcessRunner", "run_process"]
