# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Parse fixture files into cleaned source text and expected diagnostics.

The parser only ever hands out coordinates in the cleaned source's own line
numbering. Annotation and legend lines do not advance the line counter, so
the linter and the expected diagnostics always agree on positions without
any translation step.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable, Mapping
from dataclasses import dataclass, field
from pathlib import Path
from typing import Final

from pydantic import BaseModel, ConfigDict

from ..errors import DanglingAnnotationError
from ..models import Diagnostic
from .grammar import AnnotationMark, LineKind, classify_line
from .legend import Legend

LOGGER = logging.getLogger(__name__)

LINE_SEPARATOR: Final[str] = "\n"


@dataclass(frozen=True, slots=True)
class FixtureFile:
    """Raw fixture text and the path it was read from."""

    path: Path | None
    text: str

    @classmethod
    def read(cls, path: Path) -> FixtureFile:
        """Read the fixture at ``path`` as UTF-8 text.

        Raises:
            OSError: If the file cannot be read.
        """
        return cls(path=path, text=path.read_text(encoding="utf-8"))

    @property
    def lines(self) -> tuple[str, ...]:
        """Return the raw lines of the fixture in order."""
        return tuple(self.text.split(LINE_SEPARATOR))


class ParsedFixture(BaseModel):
    """Cleaned source plus the diagnostics its annotations expect."""

    model_config = ConfigDict(frozen=True)

    source: str
    expected: tuple[Diagnostic, ...]
    legend: dict[str, str]


@dataclass(slots=True)
class _AnchoredMark:
    mark: AnnotationMark
    line: int


@dataclass(slots=True)
class FixtureParser:
    """Single-pass fixture parser.

    Feed raw lines in order with :meth:`feed`, then call :meth:`finish` to
    resolve annotation tags against the legend.
    """

    _source_lines: list[str] = field(default_factory=list, init=False)
    _marks: list[_AnchoredMark] = field(default_factory=list, init=False)
    _legend: Legend = field(default_factory=Legend, init=False)
    _line_number: int = field(default=0, init=False)

    def feed(self, text: str) -> None:
        """Classify and consume the next raw fixture line.

        Args:
            text: Raw line without its trailing newline.

        Raises:
            FixtureFormatError: If the line is malformed markup.
            DuplicateTagError: If a legend line redefines a tag.
            DanglingAnnotationError: If an annotation precedes all source lines.
        """

        self._line_number += 1
        classified = classify_line(text, self._line_number)
        if classified.kind is LineKind.ANNOTATION:
            if not self._source_lines:
                raise DanglingAnnotationError(self._line_number)
            anchor = len(self._source_lines) - 1
            self._marks.extend(_AnchoredMark(mark=mark, line=anchor) for mark in classified.marks)
        elif classified.legend is not None:
            self._legend.add(classified.legend)
        else:
            self._source_lines.append(text)

    def feed_all(self, lines: Iterable[str]) -> None:
        """Feed every line from ``lines`` in order."""
        for text in lines:
            self.feed(text)

    def finish(self) -> ParsedFixture:
        """Resolve annotation tags and return the parsed fixture.

        Returns:
            ParsedFixture: Cleaned source and resolved expected diagnostics.

        Raises:
            UnresolvedTagError: If an annotation tag has no legend entry.
        """

        expected = tuple(
            Diagnostic(
                line=anchored.line,
                column=anchored.mark.column,
                width=anchored.mark.width,
                message=self._legend.resolve(anchored.mark),
            )
            for anchored in self._marks
        )
        legend: Mapping[str, str] = self._legend.as_mapping()
        LOGGER.debug(
            "parsed %d source lines, %d annotations, %d legend entries",
            len(self._source_lines),
            len(expected),
            len(legend),
        )
        return ParsedFixture(
            source=LINE_SEPARATOR.join(self._source_lines),
            expected=expected,
            legend=dict(legend),
        )


def parse_fixture(text: str) -> ParsedFixture:
    """Parse fixture ``text`` into cleaned source and expected diagnostics.

    Args:
        text: Complete fixture contents.

    Returns:
        ParsedFixture: Parsed representation of the fixture.
    """

    parser = FixtureParser()
    parser.feed_all(FixtureFile(path=None, text=text).lines)
    return parser.finish()


__all__ = [
    "LINE_SEPARATOR",
    "FixtureFile",
    "FixtureParser",
    "ParsedFixture",
    "parse_fixture",
]
