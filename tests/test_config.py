# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Tests for test-directory configuration loading."""

from __future__ import annotations

from pathlib import Path
from textwrap import dedent

import pytest

from ruletest.config import CONFIG_FILENAME, DEFAULT_FIXTURE_SUFFIX, RuleSetting, TestConfig, load_config
from ruletest.errors import ConfigError


def _write_config(directory: Path, body: str) -> Path:
    path = directory / CONFIG_FILENAME
    path.write_text(dedent(body), encoding="utf-8")
    return path


def test_missing_config_uses_defaults(tmp_path: Path) -> None:
    config = load_config(tmp_path)

    assert config.rules == {}
    assert config.rules_directory is None
    assert config.fixture_suffix == DEFAULT_FIXTURE_SUFFIX


def test_rule_setting_spellings(tmp_path: Path) -> None:
    _write_config(
        tmp_path,
        """
        [rules]
        no-trailing-whitespace = true
        max-line-length = [true, 80]
        banned-words = { enabled = false, options = ["foo"] }
        """,
    )

    config = load_config(tmp_path)

    assert config.rules["no-trailing-whitespace"] == RuleSetting(enabled=True)
    assert config.rules["max-line-length"] == RuleSetting(enabled=True, options=(80,))
    assert config.rules["banned-words"] == RuleSetting(enabled=False, options=("foo",))
    assert set(config.enabled_rules()) == {"no-trailing-whitespace", "max-line-length"}


def test_relative_rules_directory_resolves_against_test_directory(tmp_path: Path) -> None:
    _write_config(tmp_path, 'rules_directory = "../rules"\nfixture_suffix = ".fixture"\n')

    config = load_config(tmp_path)

    assert config.rules_directory == (tmp_path.parent / "rules").resolve()
    assert config.fixture_suffix == ".fixture"


def test_rules_directory_override(tmp_path: Path) -> None:
    override = tmp_path / "custom"

    config = TestConfig().with_rules_directory(override)

    assert config.rules_directory == override.resolve()
    assert TestConfig().with_rules_directory(None).rules_directory is None


@pytest.mark.parametrize(
    "body",
    [
        "[rules\n",
        "[rules]\nmax-line-length = [80]\n",
        "[rules]\nmax-line-length = 'yes'\n",
        "unknown_key = 1\n",
        "fixture_suffix = 'lint'\n",
    ],
)
def test_invalid_config_raises(tmp_path: Path, body: str) -> None:
    _write_config(tmp_path, body)

    with pytest.raises(ConfigError):
        load_config(tmp_path)
