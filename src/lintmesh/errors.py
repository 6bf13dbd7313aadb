# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Exception hierarchy shared across lintmesh."""

from __future__ import annotations


class LintmeshError(Exception):
    """Base class for errors raised by lintmesh itself."""


class ConfigError(LintmeshError):
    """Raised when configuration input is invalid."""


class MalformedOutputError(LintmeshError):
    """Raised when a tool that guarantees structured output emits something unparseable."""

    def __init__(self, tool: str, detail: str) -> None:
        """Initialise the error with the offending tool and a short description.

        Args:
            tool: Identifier of the tool whose output could not be parsed.
            detail: Human-readable explanation of the parse failure.
        """

        super().__init__(f"{tool} produced malformed output: {detail}")
        self.tool = tool
        self.detail = detail


__all__ = ["ConfigError", "LintmeshError", "MalformedOutputError"]
