# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""CLI application entry point wiring commands and shared services."""

from __future__ import annotations

import locale
import logging
from pathlib import Path
from typing import Annotated, Final

import typer
from rich.console import Console

from .. import __version__
from ..config import CONFIG_FILES, load_config, parse_linter_list, render_config, resolve_settings
from ..detect import detect_all_linters
from ..discovery import resolve_files
from ..errors import LintmeshError
from ..execution import Orchestrator, RunOptions
from ..exit_codes import ExitStatus, compute_exit_code
from ..logging import configure_logging, detect_tty, fail, ok, warn
from ..models import DEFAULT_LINTERS, LinterName
from ..reporting import detection_table, failure_lines, render_compact, render_json
from ..severity import parse_severity
from ._progress import MESSAGE_PREFIX, LintProgress

LOGGER = logging.getLogger(__name__)
CONFIG_TEMPLATE_NAME: Final[str] = CONFIG_FILES[0]

app = typer.Typer(
    name="lintmesh",
    help="Run JavaScript and TypeScript linters together and merge their findings.",
    add_completion=False,
    no_args_is_help=False,
)


def _version_callback(value: bool) -> None:
    if value:
        typer.echo(f"lintmesh {__version__}")
        raise typer.Exit()


def _use_user_collation() -> None:
    try:
        locale.setlocale(locale.LC_COLLATE, "")
    except locale.Error as exc:
        LOGGER.debug("keeping the default collation locale: %s", exc)


def _abort(message: str) -> typer.Exit:
    fail(f"{MESSAGE_PREFIX}{message}")
    return typer.Exit(code=int(ExitStatus.TOOL_ERROR))


def _resolve_root(cwd: Path | None) -> Path:
    root = (cwd or Path.cwd()).resolve()
    if not root.is_dir():
        raise _abort(f"Working directory not found: {root}")
    return root


def _stdout_console() -> Console:
    return Console(highlight=False, soft_wrap=True, emoji=False)


@app.callback()
def main_callback(
    version: Annotated[
        bool,
        typer.Option(
            "--version",
            callback=_version_callback,
            is_eager=True,
            help="Show the lintmesh version and exit.",
        ),
    ] = False,
) -> None:
    """Lint aggregator for eslint, oxlint, biome and tsc."""

    _use_user_collation()


@app.command("lint")
def lint_command(
    files: Annotated[
        list[str] | None,
        typer.Argument(help="Files, directories or globs to lint.", show_default=False),
    ] = None,
    json_output: Annotated[bool, typer.Option("--json", help="Print the full JSON report.")] = False,
    pretty: Annotated[bool, typer.Option("--pretty", help="Indent JSON output.")] = False,
    fix: Annotated[bool, typer.Option("--fix", help="Let linters apply fixes where possible.")] = False,
    linters: Annotated[
        str | None,
        typer.Option("--linters", help="Comma separated linters: eslint,oxlint,biome,tsc."),
    ] = None,
    fail_on: Annotated[
        str | None,
        typer.Option("--fail-on", help="Lowest severity that fails the run: error, warning or info."),
    ] = None,
    timeout: Annotated[
        int | None,
        typer.Option("--timeout", min=1, help="Per-linter timeout in milliseconds."),
    ] = None,
    cwd: Annotated[
        Path | None,
        typer.Option("--cwd", help="Project root.", file_okay=False),
    ] = None,
    exclude: Annotated[
        list[str] | None,
        typer.Option("--exclude", help="Exclude paths matching a glob (repeatable)."),
    ] = None,
    quiet: Annotated[bool, typer.Option("--quiet", help="Suppress progress messages on stderr.")] = False,
    verbose: Annotated[bool, typer.Option("--verbose", help="Log command lines and debug details.")] = False,
) -> None:
    """Run the selected linters and print their merged findings."""

    configure_logging(verbose=verbose)
    root = _resolve_root(cwd)
    try:
        loaded = load_config(root)
        settings = resolve_settings(
            root,
            loaded,
            files=files or (),
            linters=parse_linter_list(linters) if linters is not None else None,
            timeout_ms=timeout,
            fail_on=parse_severity(fail_on) if fail_on is not None else None,
            exclude=exclude or (),
            fix=fix,
        )
    except (LintmeshError, ValueError) as exc:
        raise _abort(str(exc)) from exc
    if verbose and settings.config_path is not None:
        warn(f"{MESSAGE_PREFIX}using config from {settings.config_path}")

    try:
        targets = resolve_files(settings.patterns, root, settings.exclude, include=settings.include)
    except OSError as exc:
        raise _abort(str(exc)) from exc

    options = RunOptions(
        cwd=root,
        linters=settings.linters,
        files=tuple(targets),
        patterns=settings.patterns,
        exclude=settings.exclude,
        timeout_ms=settings.timeout_ms,
        fix=settings.fix,
        bins=settings.bins,
        extra_args=settings.extra_args,
    )
    progress = LintProgress(interactive=detect_tty() and not json_output, quiet=quiet)
    orchestrator = Orchestrator(hooks=progress.hooks())
    with progress:
        report = orchestrator.run(options)

    if not quiet:
        for line in failure_lines(report):
            warn(f"{MESSAGE_PREFIX}{line}")
    if json_output:
        typer.echo(render_json(report, pretty=pretty))
    else:
        _stdout_console().print(render_compact(report))
    raise typer.Exit(code=int(compute_exit_code(report, settings.fail_on)))


@app.command("init")
def init_command(
    force: Annotated[bool, typer.Option("--force", help="Overwrite an existing configuration file.")] = False,
    cwd: Annotated[
        Path | None,
        typer.Option("--cwd", help="Project root.", file_okay=False),
    ] = None,
) -> None:
    """Detect installed linters and write a starter lintmesh.toml."""

    configure_logging()
    root = _resolve_root(cwd)
    target = root / CONFIG_TEMPLATE_NAME
    if target.exists() and not force:
        raise _abort(f"{CONFIG_TEMPLATE_NAME} already exists (use --force to overwrite)")

    results = detect_all_linters(root)
    recommended: set[LinterName] = {result.name for result in results if result.recommended}
    if not recommended:
        recommended = {result.name for result in results if result.available and result.name in DEFAULT_LINTERS}
    enabled = {result.name: result.name in recommended for result in results}
    try:
        target.write_text(render_config(enabled), encoding="utf-8")
    except OSError as exc:
        raise _abort(f"Unable to write {target}: {exc}") from exc

    ok(f"{MESSAGE_PREFIX}wrote {target}")
    names = ", ".join(name for name, flag in enabled.items() if flag)
    if names:
        ok(f"{MESSAGE_PREFIX}enabled {names}")
    else:
        warn(f"{MESSAGE_PREFIX}no linters detected; the default set will be used")


@app.command("detect")
def detect_command(
    cwd: Annotated[
        Path | None,
        typer.Option("--cwd", help="Project root.", file_okay=False),
    ] = None,
) -> None:
    """Show which linters are installed and configured."""

    configure_logging()
    root = _resolve_root(cwd)
    _stdout_console().print(detection_table(detect_all_linters(root)))


def main() -> None:
    """Console script entry point."""

    app(prog_name="lintmesh")


if __name__ == "__main__":  # pragma: no cover
    main()
