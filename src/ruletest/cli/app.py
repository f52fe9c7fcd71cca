# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""CLI application entry point."""

from __future__ import annotations

from pathlib import Path
from typing import Final

import typer

from .. import __version__
from ..config import ConfigError
from ..logging import ReportOutput, configure_verbose_logging
from ..reporting import render_batch
from ..runner import run_tests

EXIT_FAILED: Final[int] = 1
EXIT_CONFIG_ERROR: Final[int] = 2

app = typer.Typer(
    name="ruletest",
    help="Verify lint rules against annotated fixture files.",
    no_args_is_help=True,
    add_completion=False,
)


def _print_version(value: bool) -> None:
    if value:
        typer.echo(__version__)
        raise typer.Exit(code=0)


@app.callback()
def main(
    version: bool = typer.Option(
        False,
        "--version",
        "-v",
        callback=_print_version,
        is_eager=True,
        help="Show the ruletest version and exit.",
    ),
) -> None:
    """Verify lint rules against annotated fixture files."""


@app.command("test")
def test_command(
    directories: list[Path] = typer.Argument(
        ...,
        exists=True,
        file_okay=False,
        dir_okay=True,
        resolve_path=True,
        help="Test directories containing fixtures and an optional ruletest.toml.",
    ),
    rules_dir: Path | None = typer.Option(
        None,
        "--rules-dir",
        "-r",
        file_okay=False,
        dir_okay=True,
        resolve_path=True,
        help="Additional rules directory overriding the configured one.",
    ),
    jobs: int = typer.Option(1, "--jobs", "-j", min=1, help="Number of fixtures verified in parallel."),
    color: bool = typer.Option(True, "--color/--no-color", help="Colourise console output."),
    use_emoji: bool = typer.Option(True, "--emoji/--no-emoji", help="Prefix console output with emoji."),
    verbose: bool = typer.Option(False, "--verbose", help="Stream debug logging to stderr."),
) -> None:
    """Check that the linter reports exactly the diagnostics annotated in each fixture."""

    configure_verbose_logging(verbose)
    try:
        batch = run_tests(directories, rules_dir, jobs=jobs)
    except ConfigError as exc:
        ReportOutput(color=color, emoji=use_emoji).status("fail", str(exc))
        raise typer.Exit(code=EXIT_CONFIG_ERROR) from exc

    root = directories[0] if len(directories) == 1 else None
    passed = render_batch(batch, use_color=color, use_emoji=use_emoji, root=root)
    raise typer.Exit(code=0 if passed else EXIT_FAILED)


__all__ = ["app", "main"]
