# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Small line-oriented rules shipped with ruletest."""

from __future__ import annotations

import re
from collections.abc import Iterable
from typing import Final

from ..models import Diagnostic
from .base import Rule, iter_lines

DEFAULT_MAX_LINE_LENGTH: Final[int] = 100
_TRAILING_WHITESPACE: Final[re.Pattern[str]] = re.compile(r"[ \t]+$")


class NoTrailingWhitespaceRule(Rule):
    """Report whitespace at the end of a line."""

    name = "no-trailing-whitespace"
    description = "Disallows trailing whitespace at the end of a line."

    def apply(self, source: str) -> Iterable[Diagnostic]:
        for index, text in iter_lines(source):
            match = _TRAILING_WHITESPACE.search(text)
            if match:
                yield self.failure(index, match.start(), "trailing whitespace", width=len(match.group(0)))


class MaxLineLengthRule(Rule):
    """Report lines longer than the configured limit."""

    name = "max-line-length"
    description = "Requires lines to be under a certain max length."

    @property
    def limit(self) -> int:
        """Return the configured limit, defaulting to :data:`DEFAULT_MAX_LINE_LENGTH`."""
        if self.options and isinstance(self.options[0], int):
            return self.options[0]
        return DEFAULT_MAX_LINE_LENGTH

    def apply(self, source: str) -> Iterable[Diagnostic]:
        limit = self.limit
        for index, text in iter_lines(source):
            if len(text) > limit:
                yield self.failure(index, 0, f"Exceeds maximum line length of {limit}", width=len(text))


class BannedWordsRule(Rule):
    """Report occurrences of configured words, matched case-insensitively."""

    name = "banned-words"
    description = "Bans the words listed in the rule options."

    def _pattern(self) -> re.Pattern[str] | None:
        words = sorted({str(word) for word in self.options if str(word).strip()}, key=str.lower)
        if not words:
            return None
        alternatives = "|".join(re.escape(word) for word in words)
        return re.compile(rf"\b(?:{alternatives})\b", re.IGNORECASE)

    def apply(self, source: str) -> Iterable[Diagnostic]:
        pattern = self._pattern()
        if pattern is None:
            return
        for index, text in iter_lines(source):
            for match in pattern.finditer(text):
                word = match.group(0)
                yield self.failure(index, match.start(), f"'{word}' is banned", width=len(word))


BUILTIN_RULES: Final[tuple[type[Rule], ...]] = (
    NoTrailingWhitespaceRule,
    MaxLineLengthRule,
    BannedWordsRule,
)

__all__ = [
    "BUILTIN_RULES",
    "DEFAULT_MAX_LINE_LENGTH",
    "BannedWordsRule",
    "MaxLineLengthRule",
    "NoTrailingWhitespaceRule",
]
