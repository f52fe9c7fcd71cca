# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Base class shared by built-in and user supplied lint rules."""

from __future__ import annotations

from abc import ABC, abstractmethod
from collections.abc import Iterable, Iterator, Sequence
from typing import Any, ClassVar

from ..fixtures.parser import LINE_SEPARATOR
from ..models import Diagnostic


class Rule(ABC):
    """Check source text and report diagnostics.

    Subclasses implement :meth:`apply`. Options come from the rule's entry in
    the test configuration, minus the leading enablement flag.
    """

    name: ClassVar[str] = ""
    description: ClassVar[str] = ""

    def __init__(self, options: Sequence[Any] = (), *, name: str | None = None) -> None:
        self.options: tuple[Any, ...] = tuple(options)
        self.rule_name = name or self.name

    @abstractmethod
    def apply(self, source: str) -> Iterable[Diagnostic]:
        """Yield diagnostics for ``source``."""

    def failure(self, line: int, column: int, message: str, *, width: int | None = None) -> Diagnostic:
        """Build a diagnostic attributed to this rule.

        Args:
            line: 0-based line of the offending text.
            column: 0-based column of the offending text.
            message: Human readable failure message.
            width: Optional length of the offending span.

        Returns:
            Diagnostic: Diagnostic carrying this rule's name.
        """

        return Diagnostic(line=line, column=column, width=width, message=message, rule=self.rule_name)


def iter_lines(source: str) -> Iterator[tuple[int, str]]:
    """Yield ``(line_index, text)`` pairs for ``source``."""
    yield from enumerate(source.split(LINE_SEPARATOR))


__all__ = ["Rule", "iter_lines"]
