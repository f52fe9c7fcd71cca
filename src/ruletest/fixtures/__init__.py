# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Fixture markup parsing: line classification, legends and cleaned source."""

from __future__ import annotations

from .grammar import AnnotationMark, ClassifiedLine, LegendEntry, LineKind, classify_line
from .legend import Legend
from .parser import LINE_SEPARATOR, FixtureFile, FixtureParser, ParsedFixture, parse_fixture

__all__ = [
    "LINE_SEPARATOR",
    "AnnotationMark",
    "ClassifiedLine",
    "FixtureFile",
    "FixtureParser",
    "Legend",
    "LegendEntry",
    "LineKind",
    "ParsedFixture",
    "classify_line",
    "parse_fixture",
]
