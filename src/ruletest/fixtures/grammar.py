# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Line classifier for the fixture markup grammar.

Every fixture line is classified independently, without backtracking, into
one of three kinds:

* ``ANNOTATION`` – one or more ``~~~ [TAG]`` groups and nothing else;
* ``LEGEND`` – ``[TAG]: message`` starting at column 0;
* ``SOURCE`` – anything else, kept verbatim.

Annotation lines take priority over legend lines, which take priority over
source lines.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from enum import Enum
from typing import Final

from ..errors import FixtureFormatError

TAG_PATTERN: Final[str] = r"[A-Za-z0-9_-]+"

_ANNOTATION_GROUP: Final[re.Pattern[str]] = re.compile(rf"(~+)[ \t]+\[({TAG_PATTERN})\]")
_ANNOTATION_LINE: Final[re.Pattern[str]] = re.compile(
    rf"[ \t]*~+[ \t]+\[{TAG_PATTERN}\](?:[ \t]+~+[ \t]+\[{TAG_PATTERN}\])*[ \t]*"
)
_LEGEND_LINE: Final[re.Pattern[str]] = re.compile(rf"\[({TAG_PATTERN})\]: (.*)")

# Lines made only of tildes, brackets, whitespace and tag characters that
# still fail the full grammar are reported rather than linted as source.
_ANNOTATION_NEAR_MISS: Final[re.Pattern[str]] = re.compile(r"[ \t]*~+[ \t]+\[[A-Za-z0-9_ \t~\[\]-]*")
_LEGEND_PREFIX: Final[re.Pattern[str]] = re.compile(rf"\[{TAG_PATTERN}\]:")


class LineKind(str, Enum):
    """Enumerate the three fixture line kinds."""

    SOURCE = "source"
    ANNOTATION = "annotation"
    LEGEND = "legend"


@dataclass(frozen=True, slots=True)
class AnnotationMark:
    """A single ``~~~ [TAG]`` group found on an annotation line.

    Attributes:
        column: Offset of the group's first tilde within its own line.
        width: Length of the tilde run.
        tag: Legend tag referenced by the group.
        line_number: 1-based raw fixture line, used only in error messages.
    """

    column: int
    width: int
    tag: str
    line_number: int


@dataclass(frozen=True, slots=True)
class LegendEntry:
    """A ``[TAG]: message`` legend definition."""

    tag: str
    message: str
    line_number: int


@dataclass(frozen=True, slots=True)
class ClassifiedLine:
    """Classification of one raw fixture line."""

    kind: LineKind
    text: str
    marks: tuple[AnnotationMark, ...] = ()
    legend: LegendEntry | None = None


def classify_line(text: str, line_number: int) -> ClassifiedLine:
    """Classify ``text`` as a source, annotation or legend line.

    Args:
        text: Raw fixture line without its trailing newline.
        line_number: 1-based position of the line in the raw fixture.

    Returns:
        ClassifiedLine: Classification carrying any parsed marks or legend entry.

    Raises:
        FixtureFormatError: If the line starts like markup but is malformed.
    """

    if _ANNOTATION_LINE.fullmatch(text):
        marks = tuple(
            AnnotationMark(
                column=match.start(1),
                width=len(match.group(1)),
                tag=match.group(2),
                line_number=line_number,
            )
            for match in _ANNOTATION_GROUP.finditer(text)
        )
        return ClassifiedLine(kind=LineKind.ANNOTATION, text=text, marks=marks)

    legend_match = _LEGEND_LINE.fullmatch(text)
    if legend_match:
        entry = LegendEntry(tag=legend_match.group(1), message=legend_match.group(2), line_number=line_number)
        return ClassifiedLine(kind=LineKind.LEGEND, text=text, legend=entry)

    if _ANNOTATION_NEAR_MISS.fullmatch(text):
        raise FixtureFormatError(line_number, text, "malformed annotation line")
    if _LEGEND_PREFIX.match(text):
        raise FixtureFormatError(line_number, text, "legend tag must be followed by ': '")
    return ClassifiedLine(kind=LineKind.SOURCE, text=text)


__all__ = [
    "TAG_PATTERN",
    "AnnotationMark",
    "ClassifiedLine",
    "LegendEntry",
    "LineKind",
    "classify_line",
]
