# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""User-facing logging helpers with optional colour and emoji support.

Progress and warnings go to stderr so that stdout carries only the report.
"""

from __future__ import annotations

import logging
import sys
from functools import lru_cache
from typing import Final, Literal

from rich.console import Console
from rich.logging import RichHandler
from rich.text import Text

LOGGER_NAME: Final[str] = "lintmesh"


def detect_tty() -> bool:
    """Return ``True`` when stderr appears to be backed by a terminal.

    Returns:
        bool: ``True`` when ``sys.stderr`` reports TTY support, ``False`` otherwise.
    """

    try:
        return sys.stderr.isatty()
    except (AttributeError, ValueError):
        return False


@lru_cache(maxsize=8)
def get_console(*, color: bool, emoji: bool, tty: bool) -> Console:
    """Return a cached stderr console configured for the presentation flags.

    Args:
        color: ``True`` when ANSI colour output should be enabled.
        emoji: ``True`` when Rich should render emoji glyphs.
        tty: Whether stderr is an interactive terminal.

    Returns:
        Console: Console writing to stderr.
    """

    color_system: Literal["auto", "standard", "256", "truecolor", "windows"] | None = "auto" if color and tty else None
    return Console(
        stderr=True,
        color_system=color_system,
        force_terminal=tty,
        no_color=not (color and tty),
        emoji=emoji,
        soft_wrap=True,
    )


def emoji(symbol: str, enable: bool) -> str:
    """Return ``symbol`` when emoji output is enabled, otherwise blank."""

    return symbol if enable else ""


def _print_line(msg: str, *, style: str, use_emoji: bool, use_color: bool | None) -> None:
    tty = detect_tty()
    color_enabled = tty if use_color is None else use_color
    console = get_console(color=color_enabled, emoji=use_emoji, tty=tty)
    text = Text(msg)
    if color_enabled:
        text.stylize(style)
    console.print(text)


def info(msg: str, *, use_emoji: bool = False, use_color: bool | None = None) -> None:
    """Emit an informational message.

    Args:
        msg: Message text to display.
        use_emoji: Flag indicating whether emoji output is desired.
        use_color: Optional explicit colour flag overriding TTY detection.
    """

    _print_line(f"{emoji('ℹ️ ', use_emoji)}{msg}", style="cyan", use_emoji=use_emoji, use_color=use_color)


def ok(msg: str, *, use_emoji: bool = False, use_color: bool | None = None) -> None:
    """Emit a success message."""

    _print_line(f"{emoji('✅ ', use_emoji)}{msg}", style="green", use_emoji=use_emoji, use_color=use_color)


def warn(msg: str, *, use_emoji: bool = False, use_color: bool | None = None) -> None:
    """Emit a warning message."""

    _print_line(f"{emoji('⚠️ ', use_emoji)}{msg}", style="yellow", use_emoji=use_emoji, use_color=use_color)


def fail(msg: str, *, use_emoji: bool = False, use_color: bool | None = None) -> None:
    """Emit an error message."""

    _print_line(f"{emoji('❌ ', use_emoji)}{msg}", style="red", use_emoji=use_emoji, use_color=use_color)


def configure_logging(*, verbose: bool = False) -> logging.Logger:
    """Attach a Rich handler to the package logger.

    Calling this more than once replaces the previously installed handler.

    Args:
        verbose: Emit debug records when ``True``; warnings and above otherwise.

    Returns:
        logging.Logger: The configured ``lintmesh`` logger.
    """

    logger = logging.getLogger(LOGGER_NAME)
    for handler in list(logger.handlers):
        if isinstance(handler, RichHandler):
            logger.removeHandler(handler)
    tty = detect_tty()
    handler = RichHandler(
        console=get_console(color=tty, emoji=False, tty=tty),
        rich_tracebacks=True,
        show_path=False,
        show_time=False,
    )
    logger.addHandler(handler)
    logger.setLevel(logging.DEBUG if verbose else logging.WARNING)
    logger.propagate = False
    return logger


__all__ = ["LOGGER_NAME", "configure_logging", "detect_tty", "emoji", "fail", "get_console", "info", "ok", "warn"]
