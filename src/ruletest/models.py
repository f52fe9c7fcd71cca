# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Core data models shared across the ruletest package.

Coordinates are 0-based for both lines and columns. Lines always index the
cleaned fixture source, never the raw fixture file.
"""

from __future__ import annotations

from collections.abc import Iterable
from pathlib import Path

from pydantic import BaseModel, ConfigDict, Field

Position = tuple[int, int]


class Diagnostic(BaseModel):
    """Fixed-shape diagnostic shared by expected and actual sides."""

    model_config = ConfigDict(frozen=True)

    line: int = Field(ge=0)
    column: int = Field(ge=0)
    width: int | None = Field(default=None, ge=0)
    message: str
    rule: str | None = None

    @property
    def position(self) -> Position:
        """Return the ``(line, column)`` key used for matching."""
        return (self.line, self.column)


class Mismatch(BaseModel):
    """Expected and actual diagnostics that share a position but disagree."""

    model_config = ConfigDict(frozen=True)

    expected: Diagnostic
    actual: Diagnostic

    @property
    def position(self) -> Position:
        """Return the shared position of both diagnostics."""
        return self.expected.position


class ComparisonResult(BaseModel):
    """Outcome of comparing one fixture's expected and actual diagnostics."""

    model_config = ConfigDict(frozen=True)

    missing: tuple[Diagnostic, ...] = ()
    unexpected: tuple[Diagnostic, ...] = ()
    mismatched: tuple[Mismatch, ...] = ()

    @property
    def passed(self) -> bool:
        """Return ``True`` when nothing is missing, unexpected or mismatched."""
        return not (self.missing or self.unexpected or self.mismatched)


class FixtureFailure(BaseModel):
    """Error that prevented a fixture from being compared."""

    model_config = ConfigDict(frozen=True)

    kind: str
    message: str


class FixtureResult(BaseModel):
    """Verification result for a single fixture file."""

    model_config = ConfigDict(frozen=True)

    path: Path
    comparison: ComparisonResult | None = None
    error: FixtureFailure | None = None

    @property
    def passed(self) -> bool:
        """Return ``True`` when the fixture compared cleanly without errors."""
        if self.error is not None or self.comparison is None:
            return False
        return self.comparison.passed


class BatchResult(BaseModel):
    """Ordered collection of fixture results with an aggregate outcome."""

    model_config = ConfigDict(frozen=True)

    results: tuple[FixtureResult, ...] = ()

    @property
    def passed(self) -> bool:
        """Return the logical AND of every fixture outcome."""
        return all(result.passed for result in self.results)

    @property
    def failures(self) -> tuple[FixtureResult, ...]:
        """Return the fixtures that did not pass."""
        return tuple(result for result in self.results if not result.passed)

    @classmethod
    def merge(cls, batches: Iterable[BatchResult]) -> BatchResult:
        """Reduce ``batches`` into a single batch preserving their order."""
        return cls(results=tuple(result for batch in batches for result in batch.results))


__all__ = [
    "BatchResult",
    "ComparisonResult",
    "Diagnostic",
    "FixtureFailure",
    "FixtureResult",
    "Mismatch",
    "Position",
]
