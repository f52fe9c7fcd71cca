# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Linting collaborator interface and the default rule-based implementation."""

from __future__ import annotations

import logging
from collections.abc import Sequence
from typing import Protocol, runtime_checkable

from .config import TestConfig
from .errors import UnknownRuleError
from .models import Diagnostic
from .rules.registry import RuleRegistry

LOGGER = logging.getLogger(__name__)


@runtime_checkable
class Linter(Protocol):
    """Lint cleaned fixture source and report diagnostics.

    Positions in the returned diagnostics are 0-based and refer to ``source``.
    """

    def lint(self, source: str, config: TestConfig) -> Sequence[Diagnostic]:
        """Return the diagnostics produced for ``source`` under ``config``."""
        ...


class RuleLinter:
    """Run the rules enabled in a :class:`TestConfig` over source text."""

    def __init__(self, registry: RuleRegistry) -> None:
        self._registry = registry

    @classmethod
    def from_config(cls, config: TestConfig) -> RuleLinter:
        """Build a linter whose registry covers every rule ``config`` enables.

        Args:
            config: Test configuration, including any rules directory.

        Returns:
            RuleLinter: Linter ready to run over fixture sources.

        Raises:
            ConfigError: If the rules directory cannot be loaded.
            UnknownRuleError: If an enabled rule has no implementation.
        """

        registry = RuleRegistry.with_directory(config.rules_directory)
        linter = cls(registry)
        linter.check_config(config)
        return linter

    def check_config(self, config: TestConfig) -> None:
        """Raise :class:`UnknownRuleError` for enabled rules missing from the registry."""
        unknown = tuple(sorted(name for name in config.enabled_rules() if name not in self._registry))
        if unknown:
            raise UnknownRuleError(unknown)

    def lint(self, source: str, config: TestConfig) -> list[Diagnostic]:
        """Run every enabled rule over ``source``.

        Args:
            source: Cleaned fixture source.
            config: Configuration selecting rules and their options.

        Returns:
            list[Diagnostic]: Diagnostics sorted by position.

        Raises:
            UnknownRuleError: If an enabled rule has no implementation.
        """

        self.check_config(config)
        diagnostics: list[Diagnostic] = []
        for name, setting in config.enabled_rules().items():
            rule_cls = self._registry.get(name)
            if rule_cls is None:
                continue
            rule = rule_cls(setting.options, name=name)
            found = list(rule.apply(source))
            LOGGER.debug("rule %s reported %d diagnostics", name, len(found))
            diagnostics.extend(found)
        return sorted(diagnostics, key=lambda item: item.position)


__all__ = ["Linter", "RuleLinter"]
