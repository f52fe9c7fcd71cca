# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Lint rules exercised by fixture tests."""

from __future__ import annotations

from .base import Rule, iter_lines
from .builtin import BUILTIN_RULES, BannedWordsRule, MaxLineLengthRule, NoTrailingWhitespaceRule
from .registry import RuleRegistry, load_rules_directory, rule_name_for

__all__ = [
    "BUILTIN_RULES",
    "BannedWordsRule",
    "MaxLineLengthRule",
    "NoTrailingWhitespaceRule",
    "Rule",
    "RuleRegistry",
    "iter_lines",
    "load_rules_directory",
    "rule_name_for",
]
