# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.

"""Filesystem helpers for lintmesh."""

from __future__ import annotations

from .paths import absolutize, is_absolute_key, normalize_path_key

__all__ = ["absolutize", "is_absolute_key", "normalize_path_key"]
