# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.

"""Helpers for reasoning about filesystem paths."""

from __future__ import annotations

import os
from os import PathLike
from pathlib import Path, PurePath

_Pathish = str | PathLike[str] | Path


def absolutize(path: _Pathish, *, base_dir: _Pathish) -> Path:
    """Return ``path`` as an absolute, lexically normalised path.

    Relative paths are anchored at ``base_dir``. No filesystem access is
    performed, so symlinks are left untouched.

    Args:
        path: Path reported by a tool or supplied by the caller.
        base_dir: Directory that relative paths are resolved against.

    Returns:
        Path: Absolute path with ``.`` and ``..`` segments collapsed.

    Raises:
        ValueError: If ``path`` is ``None``.
    """

    if path is None:
        raise ValueError("path must not be None")
    raw = Path(path)
    candidate = raw if raw.is_absolute() else Path(base_dir) / raw
    return Path(os.path.normpath(os.path.abspath(candidate)))


def normalize_path_key(path: _Pathish, *, base_dir: _Pathish) -> str:
    """Return ``path`` relative to ``base_dir`` as a POSIX string.

    Accepts both absolute and already-relative inputs; the result never starts
    with a drive or root.

    Args:
        path: Path for which to build the key.
        base_dir: Working root the result is expressed against.

    Returns:
        str: POSIX-style relative path.
    """

    base = absolutize(base_dir, base_dir=os.getcwd())
    target = absolutize(path, base_dir=base)
    relative = os.path.relpath(target, base)
    return PurePath(relative).as_posix()


def is_absolute_key(key: str) -> bool:
    """Return ``True`` when ``key`` looks like an absolute path on any platform."""

    return key.startswith("/") or Path(key).is_absolute() or PurePath(key).drive != ""


__all__ = ["absolutize", "is_absolute_key", "normalize_path_key"]
