# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Configuration models and loading for rule test directories."""

from __future__ import annotations

import logging
import tomllib
from collections.abc import Mapping
from pathlib import Path
from typing import Any, Final

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from .errors import ConfigError

LOGGER = logging.getLogger(__name__)

CONFIG_FILENAME: Final[str] = "ruletest.toml"
DEFAULT_FIXTURE_SUFFIX: Final[str] = ".lint"


class RuleSetting(BaseModel):
    """Enablement flag and options for a single rule."""

    model_config = ConfigDict(frozen=True)

    enabled: bool = True
    options: tuple[Any, ...] = Field(default_factory=tuple)


def _coerce_rule_setting(name: str, raw: object) -> RuleSetting:
    """Normalise the accepted rule setting spellings.

    Accepted forms are ``true``/``false``, ``[true, option, ...]`` and a
    table with ``enabled`` and ``options`` keys.
    """

    if isinstance(raw, RuleSetting):
        return raw
    if isinstance(raw, bool):
        return RuleSetting(enabled=raw)
    if isinstance(raw, (list, tuple)):
        if not raw or not isinstance(raw[0], bool):
            raise ValueError(f"rule '{name}' list form must start with a boolean")
        return RuleSetting(enabled=raw[0], options=tuple(raw[1:]))
    if isinstance(raw, Mapping):
        return RuleSetting.model_validate(dict(raw))
    raise ValueError(f"rule '{name}' has unsupported setting {raw!r}")


class TestConfig(BaseModel):
    """Configuration applied to every fixture in a test directory."""

    __test__ = False

    model_config = ConfigDict(frozen=True, extra="forbid")

    rules: dict[str, RuleSetting] = Field(default_factory=dict)
    rules_directory: Path | None = None
    fixture_suffix: str = DEFAULT_FIXTURE_SUFFIX

    @field_validator("rules", mode="before")
    @classmethod
    def _normalise_rules(cls, value: object) -> object:
        if not isinstance(value, Mapping):
            return value
        return {str(name): _coerce_rule_setting(str(name), raw) for name, raw in value.items()}

    @field_validator("fixture_suffix")
    @classmethod
    def _validate_suffix(cls, value: str) -> str:
        if not value.startswith("."):
            raise ValueError("fixture_suffix must start with '.'")
        return value

    def enabled_rules(self) -> dict[str, RuleSetting]:
        """Return only the rules whose setting is enabled."""
        return {name: setting for name, setting in self.rules.items() if setting.enabled}

    def with_rules_directory(self, rules_directory: Path | None) -> TestConfig:
        """Return a copy whose rules directory is overridden when one is given."""
        if rules_directory is None:
            return self
        return self.model_copy(update={"rules_directory": rules_directory.resolve()})


def load_config(directory: Path) -> TestConfig:
    """Load the test configuration stored in ``directory``.

    Relative ``rules_directory`` entries resolve against ``directory``. A
    missing configuration file yields the defaults.

    Args:
        directory: Test directory that may contain :data:`CONFIG_FILENAME`.

    Returns:
        TestConfig: Validated configuration.

    Raises:
        ConfigError: If the file is not valid TOML or fails validation.
    """

    path = directory / CONFIG_FILENAME
    if not path.is_file():
        LOGGER.debug("no %s in %s, using defaults", CONFIG_FILENAME, directory)
        return TestConfig()
    try:
        with path.open("rb") as handle:
            data = tomllib.load(handle)
    except tomllib.TOMLDecodeError as exc:
        raise ConfigError(f"{path}: {exc}") from exc
    except OSError as exc:
        raise ConfigError(f"unable to read {path}: {exc}") from exc

    raw_rules_dir = data.get("rules_directory")
    if isinstance(raw_rules_dir, str):
        candidate = Path(raw_rules_dir).expanduser()
        data["rules_directory"] = candidate if candidate.is_absolute() else (directory / candidate).resolve()
    try:
        config = TestConfig.model_validate(data)
    except ValidationError as exc:
        raise ConfigError(f"{path}: {exc}") from exc
    LOGGER.debug("loaded %s with %d rule settings", path, len(config.rules))
    return config


__all__ = [
    "CONFIG_FILENAME",
    "DEFAULT_FIXTURE_SUFFIX",
    "ConfigError",
    "RuleSetting",
    "TestConfig",
    "load_config",
]
