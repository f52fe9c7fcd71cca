# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Batch entry point: discover fixtures, lint them and compare the results."""

from __future__ import annotations

import logging
import time
from collections.abc import Iterable, Sequence
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass
from pathlib import Path

from .compare import compare_diagnostics
from .config import TestConfig, load_config
from .errors import CollaboratorError, ConfigError, FixtureError
from .fixtures.parser import FixtureFile, FixtureParser
from .linter import Linter, RuleLinter
from .models import BatchResult, Diagnostic, FixtureFailure, FixtureResult

LOGGER = logging.getLogger(__name__)

IO_ERROR_KIND = "io-error"


@dataclass(frozen=True, slots=True)
class TestSetup:
    """Fixtures to verify and the configuration applied to each of them."""

    __test__ = False

    directory: Path
    fixture_paths: tuple[Path, ...]
    configuration: TestConfig


def discover_fixtures(directory: Path, suffix: str) -> tuple[Path, ...]:
    """Return every fixture below ``directory`` ending with ``suffix``, sorted."""
    return tuple(sorted(path for path in directory.rglob(f"*{suffix}") if path.is_file()))


def load_test_setup(directory: Path, rules_directory: Path | None = None) -> TestSetup:
    """Resolve the fixtures and configuration for a test directory.

    Args:
        directory: Test directory containing fixtures and an optional config file.
        rules_directory: Optional override for the configured rules directory.

    Returns:
        TestSetup: Fixture paths and the configuration to apply.

    Raises:
        ConfigError: If the directory does not exist or its config is invalid.
    """

    if not directory.is_dir():
        raise ConfigError(f"test directory not found: {directory}")
    configuration = load_config(directory).with_rules_directory(rules_directory)
    fixture_paths = discover_fixtures(directory, configuration.fixture_suffix)
    LOGGER.debug("found %d fixtures in %s", len(fixture_paths), directory)
    return TestSetup(directory=directory, fixture_paths=fixture_paths, configuration=configuration)


def _failure(path: Path, kind: str, message: str) -> FixtureResult:
    return FixtureResult(path=path, error=FixtureFailure(kind=kind, message=message))


def _as_diagnostic(item: object) -> Diagnostic:
    if isinstance(item, Diagnostic):
        return item
    return Diagnostic.model_validate(item, from_attributes=True)


def verify_fixture(path: Path, linter: Linter, config: TestConfig) -> FixtureResult:
    """Parse, lint and compare a single fixture.

    Every per-fixture failure is captured on the returned result so that the
    remaining fixtures in a batch still run.

    Args:
        path: Fixture file to verify.
        linter: Linting collaborator run over the cleaned source.
        config: Configuration handed to the linter.

    Returns:
        FixtureResult: Comparison outcome or the error that prevented it.
    """

    started = time.perf_counter()
    try:
        fixture = FixtureFile.read(path)
    except (OSError, UnicodeDecodeError) as exc:
        return _failure(path, IO_ERROR_KIND, f"{type(exc).__name__}: {exc}")

    try:
        parser = FixtureParser()
        parser.feed_all(fixture.lines)
        parsed = parser.finish()
        try:
            actual = [_as_diagnostic(item) for item in linter.lint(parsed.source, config)]
        except Exception as exc:  # the linter under test may raise or return anything
            raise CollaboratorError(exc) from exc
        comparison = compare_diagnostics(parsed.expected, actual)
    except FixtureError as exc:
        return _failure(path, exc.kind, str(exc))
    except CollaboratorError as exc:
        LOGGER.debug("linter failed on %s", path, exc_info=exc.original)
        return _failure(path, exc.kind, str(exc))

    LOGGER.debug("verified %s in %.3fs", path, time.perf_counter() - started)
    return FixtureResult(path=path, comparison=comparison)


def run_setup(setup: TestSetup, linter: Linter, *, jobs: int = 1) -> BatchResult:
    """Verify every fixture in ``setup`` and reduce the results into a batch.

    Args:
        setup: Fixtures and configuration to verify.
        linter: Linting collaborator.
        jobs: Number of fixtures verified concurrently.

    Returns:
        BatchResult: Results in fixture order.
    """

    paths = setup.fixture_paths
    config = setup.configuration
    if jobs <= 1 or len(paths) <= 1:
        results = [verify_fixture(path, linter, config) for path in paths]
    else:
        with ThreadPoolExecutor(max_workers=jobs) as executor:
            results = list(executor.map(lambda path: verify_fixture(path, linter, config), paths))
    return BatchResult(results=tuple(results))


def run_test(
    directory: Path,
    rules_directory: Path | None = None,
    *,
    jobs: int = 1,
    linter: Linter | None = None,
) -> BatchResult:
    """Run every fixture in ``directory`` against the configured rules.

    Args:
        directory: Test directory holding fixtures and ``ruletest.toml``.
        rules_directory: Optional override for the configured rules directory.
        jobs: Number of fixtures verified concurrently.
        linter: Optional collaborator replacing the default rule linter.

    Returns:
        BatchResult: Aggregated fixture results.

    Raises:
        ConfigError: If the directory, configuration or rules cannot be loaded.
    """

    setup = load_test_setup(directory, rules_directory)
    active = linter if linter is not None else RuleLinter.from_config(setup.configuration)
    return run_setup(setup, active, jobs=jobs)


def run_tests(
    directories: Iterable[Path],
    rules_directory: Path | None = None,
    *,
    jobs: int = 1,
    linter: Linter | None = None,
) -> BatchResult:
    """Run :func:`run_test` for each directory and merge the batches."""

    batches: Sequence[BatchResult] = [
        run_test(directory, rules_directory, jobs=jobs, linter=linter) for directory in directories
    ]
    return BatchResult.merge(batches)


__all__ = [
    "TestSetup",
    "discover_fixtures",
    "load_test_setup",
    "run_setup",
    "run_test",
    "run_tests",
    "verify_fixture",
]
