# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Built-in linter definitions."""

from __future__ import annotations

from collections.abc import Sequence
from typing import Final

from ..models import Issue
from ..parsers import parse_biome, parse_eslint, parse_oxlint, parse_tsc
from ..runtime.process import ExecResult
from .base import ExitClassifier, LinterInvocation, LinterTool

_PARSEABLE_EXIT_CODES: Final[frozenset[int]] = frozenset({0, 1})
_TSC_PARSEABLE_EXIT_CODES: Final[frozenset[int]] = frozenset({0, 1, 2})
ESLINT_CONFIG_ERROR: Final[str] = "ESLint configuration error"


def _exit_failure(display_name: str, result: ExecResult) -> str:
    detail = result.stderr.strip()
    return detail or f"{display_name} exited with status {result.exit_code}"


def _classify_eslint(result: ExecResult) -> str | None:
    # Exit 2 with a JSON array on stdout still carries lint results.
    if result.exit_code in _PARSEABLE_EXIT_CODES or result.stdout.lstrip().startswith("["):
        return None
    return result.stderr.strip() or ESLINT_CONFIG_ERROR


def _json_object_classifier(display_name: str) -> ExitClassifier:
    def classify(result: ExecResult) -> str | None:
        if result.exit_code in _PARSEABLE_EXIT_CODES or result.stdout.lstrip().startswith("{"):
            return None
        return _exit_failure(display_name, result)

    return classify


def _classify_tsc(result: ExecResult) -> str | None:
    if result.exit_code in _TSC_PARSEABLE_EXIT_CODES:
        return None
    return result.stderr.strip() or result.stdout.strip() or f"TypeScript exited with status {result.exit_code}"


def _tsc_low_confidence(result: ExecResult, issues: Sequence[Issue]) -> str | None:
    if result.exit_code == 0 or issues:
        return None
    return f"exited with status {result.exit_code} but no diagnostics were recognised in its output"


def _eslint_args(invocation: LinterInvocation) -> list[str]:
    args = ["--format", "json", "--no-error-on-unmatched-pattern"]
    if invocation.fix:
        args.append("--fix")
    return args


def _oxlint_args(invocation: LinterInvocation) -> list[str]:
    args = ["--format", "json"]
    if invocation.fix:
        args.append("--fix")
    return args


def _biome_args(invocation: LinterInvocation) -> list[str]:
    args = ["lint", "--reporter=json"]
    if invocation.fix:
        args.append("--write")
    return args


def _tsc_args(invocation: LinterInvocation) -> list[str]:
    del invocation
    return ["--noEmit", "--pretty", "false"]


ESLINT: Final[LinterTool] = LinterTool(
    name="eslint",
    display_name="ESLint",
    binaries=("eslint",),
    build_args=_eslint_args,
    parser=parse_eslint,
    classify=_classify_eslint,
    config_files=(
        "eslint.config.js",
        "eslint.config.mjs",
        "eslint.config.cjs",
        "eslint.config.ts",
        ".eslintrc.js",
        ".eslintrc.cjs",
        ".eslintrc.json",
        ".eslintrc.yml",
        ".eslintrc.yaml",
        ".eslintrc",
    ),
    packages=("eslint", "@eslint/js", "typescript-eslint", "@typescript-eslint/eslint-plugin"),
    description="Pluggable JavaScript and TypeScript linter.",
)

OXLINT: Final[LinterTool] = LinterTool(
    name="oxlint",
    display_name="Oxlint",
    binaries=("oxlint",),
    build_args=_oxlint_args,
    parser=parse_oxlint,
    classify=_json_object_classifier("Oxlint"),
    config_files=("oxlint.json", ".oxlintrc.json"),
    packages=("oxlint",),
    description="Rust-based linter from the oxc project.",
)

BIOME: Final[LinterTool] = LinterTool(
    name="biome",
    display_name="Biome",
    binaries=("biome",),
    build_args=_biome_args,
    parser=parse_biome,
    classify=_json_object_classifier("Biome"),
    config_files=("biome.json", "biome.jsonc"),
    packages=("@biomejs/biome",),
    description="Formatter and linter for web projects.",
)

TSC: Final[LinterTool] = LinterTool(
    name="tsc",
    display_name="TypeScript",
    binaries=("tsgo", "tsc"),
    build_args=_tsc_args,
    parser=parse_tsc,
    classify=_classify_tsc,
    project_wide=True,
    combine_streams=True,
    config_files=("tsconfig.json",),
    packages=("typescript", "@typescript/native-preview"),
    low_confidence=_tsc_low_confidence,
    description="TypeScript type checker (tsgo preferred over tsc).",
)

BUILTIN_TOOLS: Final[tuple[LinterTool, ...]] = (ESLINT, OXLINT, BIOME, TSC)

__all__ = ["BIOME", "BUILTIN_TOOLS", "ESLINT", "ESLINT_CONFIG_ERROR", "OXLINT", "TSC"]
