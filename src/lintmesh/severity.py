# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Severity related types and helpers."""

from __future__ import annotations

from collections.abc import Mapping
from enum import Enum
from typing import Final


class Severity(str, Enum):
    """Severity levels normalising different tool vocabularies."""

    ERROR = "error"
    WARNING = "warning"
    INFO = "info"

    @property
    def rank(self) -> int:
        """Return the ordinal rank of the severity (``info < warning < error``).

        Returns:
            int: Position of the severity within :data:`SEVERITY_ORDER`.
        """

        return SEVERITY_ORDER.index(self)

    def at_least(self, threshold: Severity) -> bool:
        """Return ``True`` when this severity is at or above ``threshold``.

        Args:
            threshold: Minimum severity considered significant.

        Returns:
            bool: ``True`` when ``self`` ranks at or above ``threshold``.
        """

        return self.rank >= threshold.rank


SEVERITY_ORDER: Final[tuple[Severity, ...]] = (Severity.INFO, Severity.WARNING, Severity.ERROR)


def parse_severity(value: str) -> Severity:
    """Return the :class:`Severity` named by ``value``.

    Args:
        value: Case-insensitive severity label such as ``"warning"``.

    Returns:
        Severity: Matching severity member.

    Raises:
        ValueError: If ``value`` does not name a known severity.
    """

    label = value.strip().lower()
    try:
        return Severity(label)
    except ValueError as exc:
        valid = ", ".join(level.value for level in SEVERITY_ORDER[::-1])
        raise ValueError(f"Invalid severity '{value}'. Valid: {valid}") from exc


def map_severity(label: object, mapping: Mapping[str, Severity], default: Severity) -> Severity:
    """Return a :class:`Severity` derived from a tool-native ``label``.

    Args:
        label: Raw severity value taken from tool output.
        mapping: Lower-case tool vocabulary mapped to severities.
        default: Severity used for missing or unrecognised labels.

    Returns:
        Severity: Mapped severity, or ``default`` when unmatched.
    """

    if isinstance(label, str):
        return mapping.get(label.lower(), default)
    return default


__all__ = ["SEVERITY_ORDER", "Severity", "map_severity", "parse_severity"]
