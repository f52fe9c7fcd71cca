# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Exception hierarchy raised while verifying lint fixtures."""

from __future__ import annotations


class RuletestError(Exception):
    """Base class for all errors raised by ruletest."""


class FixtureError(RuletestError):
    """Raised when a single fixture cannot be verified.

    Fixture errors are fatal to the fixture in which they occur and are
    recorded on its result instead of aborting the batch.
    """

    kind = "fixture-error"


class FixtureFormatError(FixtureError):
    """Raised when an annotation or legend line is malformed."""

    kind = "format-error"

    def __init__(self, line_number: int, text: str, reason: str) -> None:
        self.line_number = line_number
        self.text = text
        super().__init__(f"line {line_number}: {reason}: {text!r}")


class UnresolvedTagError(FixtureError):
    """Raised when an annotation references a tag missing from the legend."""

    kind = "unresolved-tag"

    def __init__(self, tag: str, line_number: int) -> None:
        self.tag = tag
        self.line_number = line_number
        super().__init__(f"line {line_number}: tag [{tag}] has no legend entry")


class DuplicateTagError(FixtureError):
    """Raised when the legend defines the same tag twice."""

    kind = "duplicate-tag"

    def __init__(self, tag: str, line_number: int, first_line_number: int) -> None:
        self.tag = tag
        self.line_number = line_number
        self.first_line_number = first_line_number
        super().__init__(
            f"line {line_number}: tag [{tag}] is already defined on line {first_line_number}",
        )


class DanglingAnnotationError(FixtureError):
    """Raised when an annotation appears before any source line."""

    kind = "dangling-annotation"

    def __init__(self, line_number: int) -> None:
        self.line_number = line_number
        super().__init__(f"line {line_number}: annotation has no preceding source line")


class DuplicatePositionError(FixtureError):
    """Raised when two expected diagnostics share one position."""

    kind = "duplicate-position"

    def __init__(self, line: int, column: int) -> None:
        self.line = line
        self.column = column
        super().__init__(f"two expected diagnostics at line {line + 1}, column {column + 1}")


class CollaboratorError(RuletestError):
    """Raised when the linter under test fails on a cleaned fixture source."""

    kind = "linter-error"

    def __init__(self, original: BaseException) -> None:
        self.original = original
        super().__init__(f"{type(original).__name__}: {original}")


class ConfigError(RuletestError):
    """Raised when configuration input is invalid."""


class UnknownRuleError(ConfigError):
    """Raised when the configuration enables rules that cannot be found."""

    def __init__(self, names: tuple[str, ...]) -> None:
        self.names = names
        super().__init__(f"could not find implementations for the following rules: {', '.join(names)}")


__all__ = [
    "CollaboratorError",
    "ConfigError",
    "DanglingAnnotationError",
    "DuplicatePositionError",
    "DuplicateTagError",
    "FixtureError",
    "FixtureFormatError",
    "RuletestError",
    "UnknownRuleError",
    "UnresolvedTagError",
]
