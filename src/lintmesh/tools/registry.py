# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Linter registry providing lookup by name."""

from __future__ import annotations

from collections.abc import Iterable, Iterator, Mapping

from .base import LinterTool
from .builtins import BUILTIN_TOOLS


class LinterRegistry(Mapping[str, LinterTool]):
    """Read-only mapping of linter names to :class:`LinterTool` definitions.

    Iteration follows registration order.
    """

    def __init__(self, tools: Iterable[LinterTool] = ()) -> None:
        """Initialise the registry with ``tools``.

        Args:
            tools: Definitions to register immediately.
        """

        self._tools: dict[str, LinterTool] = {}
        for tool in tools:
            self.register(tool)

    def register(self, tool: LinterTool) -> None:
        """Register ``tool`` enforcing uniqueness by name.

        Args:
            tool: Linter definition to insert into the registry.

        Raises:
            ValueError: If a linter with the same name is already registered.
        """

        if tool.name in self._tools:
            raise ValueError(f"Linter '{tool.name}' already registered")
        self._tools[tool.name] = tool

    def try_get(self, name: str) -> LinterTool | None:
        """Return the linter named ``name`` when registered, otherwise ``None``."""

        return self._tools.get(name)

    def __len__(self) -> int:
        return len(self._tools)

    def __iter__(self) -> Iterator[str]:
        return iter(self._tools)

    def __getitem__(self, name: str) -> LinterTool:
        return self._tools[name]


DEFAULT_REGISTRY = LinterRegistry(BUILTIN_TOOLS)

__all__ = ["DEFAULT_REGISTRY", "LinterRegistry"]
