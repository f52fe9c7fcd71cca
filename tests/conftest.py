# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.

"""Shared pytest fixtures."""

from __future__ import annotations

from collections.abc import Callable
from pathlib import Path
from textwrap import dedent

import pytest

FixtureWriter = Callable[..., Path]


@pytest.fixture
def write_fixture(tmp_path: Path) -> FixtureWriter:
    """Return a helper writing dedented fixture text below ``tmp_path``."""

    def _write(name: str, text: str, *, directory: Path | None = None) -> Path:
        target = (directory or tmp_path) / name
        target.parent.mkdir(parents=True, exist_ok=True)
        target.write_text(dedent(text), encoding="utf-8")
        return target

    return _write

