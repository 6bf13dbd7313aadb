# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Configuration discovery, loading and precedence resolution."""

from __future__ import annotations

import tomllib
from collections.abc import Mapping, Sequence
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Final

from pydantic import ValidationError

from ..errors import ConfigError
from ..models import DEFAULT_LINTERS, LINTER_NAMES, LinterName
from ..severity import Severity
from .models import (
    DEFAULT_EXCLUDE,
    DEFAULT_FAIL_ON,
    DEFAULT_INCLUDE,
    DEFAULT_TIMEOUT_MS,
    LintmeshConfig,
    ResolvedSettings,
)

CONFIG_FILES: Final[tuple[str, ...]] = ("lintmesh.toml", ".config/lintmesh.toml")
PYPROJECT_FILE: Final[str] = "pyproject.toml"
PYPROJECT_TOOL_KEY: Final[str] = "tool"
PYPROJECT_SECTION_KEY: Final[str] = "lintmesh"


@dataclass(frozen=True, slots=True)
class LoadedConfig:
    """Configuration read from disk together with its origin."""

    path: Path | None = None
    config: LintmeshConfig = field(default_factory=LintmeshConfig)


def _read_toml(path: Path) -> dict[str, Any]:
    try:
        with path.open("rb") as handle:
            return tomllib.load(handle)
    except tomllib.TOMLDecodeError as exc:
        raise ConfigError(f"Invalid TOML in {path}: {exc}") from exc
    except OSError as exc:
        raise ConfigError(f"Unable to read {path}: {exc}") from exc


def _pyproject_section(path: Path) -> Mapping[str, Any] | None:
    document = _read_toml(path)
    tool_section = document.get(PYPROJECT_TOOL_KEY)
    if not isinstance(tool_section, Mapping):
        return None
    section = tool_section.get(PYPROJECT_SECTION_KEY)
    if section is None:
        return None
    if not isinstance(section, Mapping):
        raise ConfigError(f"[tool.{PYPROJECT_SECTION_KEY}] in {path} must be a table")
    return section


def _normalise_keys(data: Mapping[str, Any]) -> dict[str, Any]:
    """Accept ``fail-on`` style keys alongside ``fail_on``."""

    return {key.replace("-", "_") if isinstance(key, str) else key: value for key, value in data.items()}


def parse_config(data: Mapping[str, Any], *, source: str) -> LintmeshConfig:
    """Validate a raw configuration mapping.

    Args:
        data: Parsed TOML table.
        source: Description of where ``data`` came from, used in errors.

    Returns:
        LintmeshConfig: Validated configuration.

    Raises:
        ConfigError: If the mapping contains unknown keys or invalid values.
    """

    try:
        return LintmeshConfig.model_validate(_normalise_keys(data))
    except ValidationError as exc:
        problems = "; ".join(
            f"{'.'.join(str(part) for part in error['loc']) or '<root>'}: {error['msg']}" for error in exc.errors()
        )
        raise ConfigError(f"Invalid config in {source}: {problems}") from exc


def find_config_file(cwd: Path) -> Path | None:
    """Return the first configuration file found under ``cwd``.

    ``lintmesh.toml`` and ``.config/lintmesh.toml`` are checked first, then a
    ``pyproject.toml`` that declares a ``[tool.lintmesh]`` table.
    """

    for name in CONFIG_FILES:
        candidate = cwd / name
        if candidate.is_file():
            return candidate
    pyproject = cwd / PYPROJECT_FILE
    if pyproject.is_file() and _pyproject_section(pyproject) is not None:
        return pyproject
    return None


def load_config(cwd: Path) -> LoadedConfig:
    """Load the configuration for the project rooted at ``cwd``.

    Args:
        cwd: Project root to search.

    Returns:
        LoadedConfig: Loaded configuration, or an empty one when no file exists.

    Raises:
        ConfigError: If the discovered file is not valid.
    """

    path = find_config_file(cwd)
    if path is None:
        return LoadedConfig()
    if path.name == PYPROJECT_FILE:
        data = _pyproject_section(path) or {}
    else:
        data = _read_toml(path)
    return LoadedConfig(path=path, config=parse_config(data, source=str(path)))


def parse_linter_list(value: str) -> tuple[LinterName, ...]:
    """Parse a comma separated linter list such as ``"eslint,tsc"``.

    Raises:
        ConfigError: If the list is empty or names an unknown linter.
    """

    names: list[LinterName] = []
    for raw in value.split(","):
        name = raw.strip().lower()
        if not name:
            continue
        if name not in LINTER_NAMES:
            raise ConfigError(f"Unknown linter '{name}'. Valid: {', '.join(LINTER_NAMES)}")
        names.append(name)  # type: ignore[arg-type]
    if not names:
        raise ConfigError("No linters specified")
    return tuple(dict.fromkeys(names))


def _merge_unique(*groups: Sequence[str]) -> tuple[str, ...]:
    return tuple(dict.fromkeys(item for group in groups for item in group))


def resolve_settings(
    cwd: Path,
    loaded: LoadedConfig,
    *,
    files: Sequence[str] = (),
    linters: Sequence[LinterName] | None = None,
    timeout_ms: int | None = None,
    fail_on: Severity | None = None,
    exclude: Sequence[str] = (),
    fix: bool = False,
) -> ResolvedSettings:
    """Layer CLI values over configuration over built-in defaults.

    A CLI value counts as supplied when it is not ``None``.

    Args:
        cwd: Working root.
        loaded: Configuration loaded from disk.
        files: Positional file patterns from the command line.
        linters: Linters requested with ``--linters``.
        timeout_ms: Per-linter timeout from ``--timeout``.
        fail_on: Threshold from ``--fail-on``.
        exclude: Extra exclusion patterns from ``--exclude``.
        fix: Whether linters should apply fixes.

    Returns:
        ResolvedSettings: Settings ready to drive file discovery and the run.
    """

    config = loaded.config
    if linters is not None:
        selected = tuple(dict.fromkeys(linters))
    else:
        selected = config.enabled_linters() or DEFAULT_LINTERS
    return ResolvedSettings(
        cwd=cwd,
        linters=selected,
        patterns=tuple(files),
        include=config.include if config.include else DEFAULT_INCLUDE,
        exclude=_merge_unique(DEFAULT_EXCLUDE, config.exclude or (), exclude),
        timeout_ms=timeout_ms if timeout_ms is not None else (config.timeout or DEFAULT_TIMEOUT_MS),
        fail_on=fail_on if fail_on is not None else (config.fail_on or DEFAULT_FAIL_ON),
        fix=fix,
        bins={name: settings.bin for name, settings in config.linters.items() if settings.bin},
        extra_args={name: settings.args for name, settings in config.linters.items() if settings.args},
        config_path=loaded.path,
    )


__all__ = [
    "CONFIG_FILES",
    "LoadedConfig",
    "find_config_file",
    "load_config",
    "parse_config",
    "parse_linter_list",
    "resolve_settings",
]
