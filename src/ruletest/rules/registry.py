# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Rule discovery from the built-in set and an optional rules directory."""

from __future__ import annotations

import importlib.util
import inspect
import logging
import sys
from collections.abc import Iterable
from pathlib import Path
from types import ModuleType
from typing import Final

from ..errors import ConfigError
from .base import Rule
from .builtin import BUILTIN_RULES

LOGGER = logging.getLogger(__name__)

RULE_ATTRIBUTE: Final[str] = "Rule"
_MODULE_PREFIX: Final[str] = "ruletest_user_rules"


def rule_name_for(path: Path) -> str:
    """Return the default rule name for the module at ``path``.

    ``no_console_log.py`` becomes ``no-console-log``.
    """
    return path.stem.replace("_", "-")


def _import_module(path: Path) -> ModuleType:
    module_name = f"{_MODULE_PREFIX}_{path.stem}"
    spec = importlib.util.spec_from_file_location(module_name, path)
    if spec is None or spec.loader is None:
        raise ConfigError(f"unable to load rule module {path}")
    module = importlib.util.module_from_spec(spec)
    sys.modules[module_name] = module
    try:
        spec.loader.exec_module(module)
    except Exception as exc:  # user rule modules may raise anything on import
        sys.modules.pop(module_name, None)
        raise ConfigError(f"failed to import rule module {path}: {type(exc).__name__}: {exc}") from exc
    return module


def load_rules_directory(directory: Path) -> dict[str, type[Rule]]:
    """Load rule classes from every ``*.py`` module in ``directory``.

    Each module must expose a module-level ``Rule`` attribute that subclasses
    :class:`ruletest.rules.base.Rule`. Modules without one are skipped.

    Args:
        directory: Directory containing user rule modules.

    Returns:
        dict[str, type[Rule]]: Rule classes keyed by rule name.

    Raises:
        ConfigError: If the directory is missing or a module fails to import.
    """

    if not directory.is_dir():
        raise ConfigError(f"rules directory not found: {directory}")
    loaded: dict[str, type[Rule]] = {}
    for path in sorted(directory.glob("*.py")):
        if path.name.startswith("_"):
            continue
        module = _import_module(path)
        candidate = getattr(module, RULE_ATTRIBUTE, None)
        if not (inspect.isclass(candidate) and issubclass(candidate, Rule)) or inspect.isabstract(candidate):
            LOGGER.debug("skipping %s: no concrete %s class", path, RULE_ATTRIBUTE)
            continue
        name = candidate.name or rule_name_for(path)
        loaded[name] = candidate
        LOGGER.debug("loaded rule %s from %s", name, path)
    return loaded


class RuleRegistry:
    """Resolve rule names to rule classes.

    Built-in rules take precedence over rules-directory rules sharing a name.
    """

    def __init__(self, rules: Iterable[type[Rule]] = BUILTIN_RULES) -> None:
        self._rules: dict[str, type[Rule]] = {}
        for rule_cls in rules:
            self.register(rule_cls)

    @classmethod
    def with_directory(cls, rules_directory: Path | None) -> RuleRegistry:
        """Return a registry of built-in rules extended by ``rules_directory``."""
        registry = cls()
        if rules_directory is not None:
            for name, rule_cls in load_rules_directory(rules_directory).items():
                registry.register(rule_cls, name=name)
        return registry

    def register(self, rule_cls: type[Rule], *, name: str | None = None) -> bool:
        """Register ``rule_cls`` unless its name is already taken.

        Returns:
            bool: ``True`` when the rule was added.
        """

        key = name or rule_cls.name
        if not key:
            raise ValueError(f"{rule_cls.__name__} does not declare a rule name")
        if key in self._rules:
            LOGGER.debug("rule %s already registered, ignoring %s", key, rule_cls.__name__)
            return False
        self._rules[key] = rule_cls
        return True

    def get(self, name: str) -> type[Rule] | None:
        """Return the rule class registered under ``name``."""
        return self._rules.get(name)

    def __contains__(self, name: object) -> bool:
        return name in self._rules


__all__ = ["RULE_ATTRIBUTE", "RuleRegistry", "load_rules_directory", "rule_name_for"]
