# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Console output for test reports and opt-in debug logging."""

from __future__ import annotations

import logging
import sys
from dataclasses import dataclass
from functools import lru_cache
from typing import Final, Literal

from rich.console import Console
from rich.rule import Rule
from rich.text import Text

PACKAGE_LOGGER_NAME: Final[str] = "ruletest"

Status = Literal["ok", "warn", "fail"]

_STATUS_MARKS: Final[dict[str, tuple[str, str]]] = {
    "ok": ("✅ ", "green"),
    "warn": ("⚠️ ", "yellow"),
    "fail": ("❌ ", "red"),
}


@lru_cache(maxsize=4)
def report_console(color: bool, emoji: bool) -> Console:
    """Return the stdout console shared by reports with these settings.

    Rich still drops colour when stdout is not a terminal, so ``color`` only
    ever turns colour off.
    """

    return Console(
        color_system="auto" if color else None,
        no_color=not color,
        emoji=emoji,
        highlight=False,
        soft_wrap=True,
    )


@dataclass(frozen=True, slots=True)
class ReportOutput:
    """Writes headings, status lines and detail lines for one report.

    Attributes:
        color: ``False`` when ``--no-color`` was requested.
        emoji: ``False`` when ``--no-emoji`` was requested.
        console: Console to write to instead of the shared stdout console.
    """

    color: bool = True
    emoji: bool = True
    console: Console | None = None

    @property
    def target(self) -> Console:
        if self.console is not None:
            return self.console
        return report_console(self.color, self.emoji)

    def heading(self, title: str) -> None:
        """Open a block of output under ``title``."""
        if self.color:
            self.target.print()
            self.target.print(Rule(title))
        else:
            self.target.print(f"\n--- {title} ---")

    def status(self, kind: Status, msg: str) -> None:
        """Print ``msg`` marked as a success, warning or failure."""
        mark, style = _STATUS_MARKS[kind]
        text = Text(f"{mark if self.emoji else ''}{msg}")
        if self.color:
            text.stylize(style)
        self.target.print(text)

    def detail(self, msg: str) -> None:
        """Print an unstyled line belonging to the preceding status line."""
        self.target.print(Text(msg))


def configure_verbose_logging(verbose: bool) -> None:
    """Stream ruletest debug records to stderr when ``verbose`` is set."""

    logger = logging.getLogger(PACKAGE_LOGGER_NAME)
    if not verbose or getattr(logger, "_ruletest_verbose_configured", False):
        return
    handler = logging.StreamHandler(stream=sys.stderr)
    handler.setFormatter(logging.Formatter("%(name)s: %(message)s"))
    logger.addHandler(handler)
    logger.setLevel(logging.DEBUG)
    logger.propagate = False
    setattr(logger, "_ruletest_verbose_configured", True)


__all__ = ["ReportOutput", "Status", "configure_verbose_logging", "report_console"]
