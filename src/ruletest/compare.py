# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Match expected fixture diagnostics against the linter's actual output."""

from __future__ import annotations

from collections import defaultdict
from collections.abc import Iterable, Sequence

from .errors import DuplicatePositionError
from .models import ComparisonResult, Diagnostic, Mismatch, Position


def diagnostics_agree(expected: Diagnostic, actual: Diagnostic) -> bool:
    """Return ``True`` when ``actual`` satisfies ``expected`` at the same position.

    Width only participates when the linter reports one.

    Args:
        expected: Diagnostic resolved from a fixture annotation.
        actual: Diagnostic reported by the linter at the same position.

    Returns:
        bool: ``True`` when message and (reported) width are equal.
    """

    if expected.message != actual.message:
        return False
    if actual.width is None or expected.width is None:
        return True
    return expected.width == actual.width


def _index_expected(expected: Iterable[Diagnostic]) -> dict[Position, Diagnostic]:
    indexed: dict[Position, Diagnostic] = {}
    for diagnostic in expected:
        if diagnostic.position in indexed:
            raise DuplicatePositionError(diagnostic.line, diagnostic.column)
        indexed[diagnostic.position] = diagnostic
    return indexed


def _claim(expected: Diagnostic, candidates: list[Diagnostic]) -> Diagnostic:
    """Remove and return the best candidate for ``expected``, preferring exact matches."""

    for index, candidate in enumerate(candidates):
        if diagnostics_agree(expected, candidate):
            return candidates.pop(index)
    return candidates.pop(0)


def compare_diagnostics(
    expected: Sequence[Diagnostic],
    actual: Sequence[Diagnostic],
) -> ComparisonResult:
    """Compare ``expected`` and ``actual`` diagnostics keyed by position.

    Matching is by exact ``(line, column)``. Two diagnostics at the same spot
    with different wording form a mismatch, never a missing/unexpected pair.

    Args:
        expected: Diagnostics resolved from the fixture annotations.
        actual: Diagnostics reported by the linter on the cleaned source.

    Returns:
        ComparisonResult: Missing, unexpected and mismatched entries sorted by position.

    Raises:
        DuplicatePositionError: If two expected diagnostics share a position.
    """

    expected_by_position = _index_expected(expected)
    actual_by_position: defaultdict[Position, list[Diagnostic]] = defaultdict(list)
    for diagnostic in actual:
        actual_by_position[diagnostic.position].append(diagnostic)

    missing: list[Diagnostic] = []
    mismatched: list[Mismatch] = []
    for position, wanted in expected_by_position.items():
        candidates = actual_by_position.get(position)
        if not candidates:
            missing.append(wanted)
            continue
        claimed = _claim(wanted, candidates)
        if not diagnostics_agree(wanted, claimed):
            mismatched.append(Mismatch(expected=wanted, actual=claimed))

    unexpected = [diagnostic for remaining in actual_by_position.values() for diagnostic in remaining]
    return ComparisonResult(
        missing=tuple(sorted(missing, key=lambda item: item.position)),
        unexpected=tuple(sorted(unexpected, key=lambda item: item.position)),
        mismatched=tuple(sorted(mismatched, key=lambda item: item.position)),
    )


__all__ = ["compare_diagnostics", "diagnostics_agree"]
