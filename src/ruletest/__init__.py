# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Core package metadata and the public batch-test entry points."""

from __future__ import annotations

from importlib import metadata

try:
    __version__ = metadata.version("ruletest")
except metadata.PackageNotFoundError:  # pragma: no cover - local development fallback
    __version__ = "0.0.0"

from .models import BatchResult, ComparisonResult, Diagnostic, FixtureResult  # noqa: E402
from .reporting import render_batch  # noqa: E402
from .runner import run_test, run_tests  # noqa: E402

__all__ = [
    "BatchResult",
    "ComparisonResult",
    "Diagnostic",
    "FixtureResult",
    "__version__",
    "render_batch",
    "run_test",
    "run_tests",
]
