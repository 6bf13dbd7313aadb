# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Output parsers converting native linter output into :class:`~lintmesh.models.Issue` objects."""

from __future__ import annotations

from .base import OutputParser, load_json_document
from .javascript import (
    BIOME_DOCS_BASE,
    PARSE_ERROR_RULE,
    biome_docs_url,
    offsets_to_positions,
    parse_biome,
    parse_eslint,
    parse_oxlint,
)
from .typescript import parse_tsc

__all__ = [
    "BIOME_DOCS_BASE",
    "PARSE_ERROR_RULE",
    "OutputParser",
    "biome_docs_url",
    "load_json_document",
    "offsets_to_positions",
    "parse_biome",
    "parse_eslint",
    "parse_oxlint",
    "parse_tsc",
]
