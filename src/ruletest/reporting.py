# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Console reporting for fixture verification results.

Positions are rendered 1-based (``line:column``) the way editors display
them, even though the models store 0-based coordinates.
"""

from __future__ import annotations

from pathlib import Path

from rich.console import Console

from .logging import ReportOutput
from .models import BatchResult, Diagnostic, FixtureResult


def format_position(diagnostic: Diagnostic) -> str:
    """Return the 1-based ``line:column`` pointer for ``diagnostic``."""
    return f"{diagnostic.line + 1}:{diagnostic.column + 1}"


def _describe(diagnostic: Diagnostic) -> str:
    text = repr(diagnostic.message)
    if diagnostic.width is not None:
        text = f"{text} (width {diagnostic.width})"
    if diagnostic.rule:
        text = f"{text} [{diagnostic.rule}]"
    return text


def _display_path(path: Path, root: Path | None) -> str:
    if root is None:
        return str(path)
    try:
        return path.relative_to(root).as_posix()
    except ValueError:
        return str(path)


def format_fixture_report(result: FixtureResult, *, root: Path | None = None) -> list[str]:
    """Return the plain-text report lines for one fixture.

    Args:
        result: Verification result for the fixture.
        root: Optional directory used to shorten the fixture path.

    Returns:
        list[str]: Fixture identity followed by one line per discrepancy.
    """

    lines = [_display_path(result.path, root)]
    if result.error is not None:
        lines.append(f"  error [{result.error.kind}]: {result.error.message}")
        return lines
    comparison = result.comparison
    if comparison is None:
        return lines
    for diagnostic in comparison.missing:
        lines.append(f"  {format_position(diagnostic)} missing: expected {_describe(diagnostic)}")
    for diagnostic in comparison.unexpected:
        lines.append(f"  {format_position(diagnostic)} unexpected: got {_describe(diagnostic)}")
    for mismatch in comparison.mismatched:
        lines.append(
            f"  {format_position(mismatch.expected)} mismatched: "
            f"expected {_describe(mismatch.expected)}, got {_describe(mismatch.actual)}",
        )
    return lines


def summarize(batch: BatchResult) -> str:
    """Return a one-line count of passing and failing fixtures."""
    total = len(batch.results)
    failed = len(batch.failures)
    return f"{total} fixture{'s' if total != 1 else ''}: {total - failed} passed, {failed} failed"


def render_batch(
    batch: BatchResult,
    *,
    use_color: bool = True,
    use_emoji: bool = True,
    root: Path | None = None,
    console: Console | None = None,
) -> bool:
    """Print ``batch`` to the console and return its overall outcome.

    Args:
        batch: Batch result to render.
        use_color: Flag indicating whether colour output is desired.
        use_emoji: Flag indicating whether emoji output is desired.
        root: Optional directory used to shorten fixture paths.
        console: Optional console used instead of the shared stdout console.

    Returns:
        bool: ``True`` when every fixture passed.
    """

    out = ReportOutput(color=use_color, emoji=use_emoji, console=console)
    out.heading("Rule tests")
    if not batch.results:
        out.status("warn", "No fixtures found")
        return batch.passed

    for result in batch.results:
        report = format_fixture_report(result, root=root)
        if result.passed:
            out.status("ok", f"{report[0]}: passed")
            continue
        out.status("fail", f"{report[0]}: failed")
        for line in report[1:]:
            out.detail(line)

    out.status("ok" if batch.passed else "fail", summarize(batch))
    return batch.passed


__all__ = ["format_fixture_report", "format_position", "render_batch", "summarize"]
