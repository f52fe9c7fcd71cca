# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Tests for batch fixture verification."""

from __future__ import annotations

from collections.abc import Callable, Sequence
from pathlib import Path

import pytest

from ruletest.config import CONFIG_FILENAME, TestConfig
from ruletest.errors import ConfigError, UnknownRuleError
from ruletest.models import BatchResult, Diagnostic
from ruletest.runner import discover_fixtures, load_test_setup, run_test, run_tests, verify_fixture

FixtureWriter = Callable[..., Path]

SEMI_FIXTURE = "let x = 1\n         ~ [SEMI]\n[SEMI]: Missing semicolon.\n"


class StaticLinter:
    """Linter stand-in returning the same diagnostics for every source."""

    def __init__(self, diagnostics: Sequence[Diagnostic] = ()) -> None:
        self.diagnostics = list(diagnostics)
        self.sources: list[str] = []

    def lint(self, source: str, config: TestConfig) -> list[Diagnostic]:
        self.sources.append(source)
        return list(self.diagnostics)


class ExplodingLinter:
    """Linter stand-in that fails on every source."""

    def lint(self, source: str, config: TestConfig) -> list[Diagnostic]:
        raise RuntimeError("rule walker exploded")


class RecordLinter:
    """Linter stand-in returning raw records instead of diagnostics."""

    def __init__(self, records: Sequence[object]) -> None:
        self.records = list(records)

    def lint(self, source: str, config: TestConfig) -> list[object]:
        return list(self.records)


def test_scenario_reported_diagnostic_passes(write_fixture: FixtureWriter, tmp_path: Path) -> None:
    write_fixture("semi.lint", SEMI_FIXTURE)
    linter = StaticLinter([Diagnostic(line=0, column=9, message="Missing semicolon.", rule="semicolon")])

    batch = run_test(tmp_path, linter=linter)

    assert batch.passed
    assert linter.sources == ["let x = 1\n"]
    assert batch.results[0].comparison is not None
    assert batch.results[0].comparison.passed


def test_scenario_silent_linter_fails(write_fixture: FixtureWriter, tmp_path: Path) -> None:
    write_fixture("semi.lint", SEMI_FIXTURE)

    batch = run_test(tmp_path, linter=StaticLinter())

    assert not batch.passed
    comparison = batch.results[0].comparison
    assert comparison is not None
    assert len(comparison.missing) == 1
    assert comparison.missing[0].position == (0, 9)


def test_fixture_errors_do_not_stop_the_batch(write_fixture: FixtureWriter, tmp_path: Path) -> None:
    write_fixture("a_broken.lint", "foo\n~~~ [NOPE]\n")
    write_fixture("b_clean.lint", "foo\n")

    batch = run_test(tmp_path, linter=StaticLinter())

    assert [result.path.name for result in batch.results] == ["a_broken.lint", "b_clean.lint"]
    broken, clean = batch.results
    assert broken.error is not None
    assert broken.error.kind == "unresolved-tag"
    assert "NOPE" in broken.error.message
    assert clean.passed
    assert not batch.passed
    assert batch.failures == (broken,)


def test_linter_errors_are_surfaced_verbatim(write_fixture: FixtureWriter, tmp_path: Path) -> None:
    path = write_fixture("semi.lint", SEMI_FIXTURE)

    result = verify_fixture(path, ExplodingLinter(), TestConfig())

    assert not result.passed
    assert result.error is not None
    assert result.error.kind == "linter-error"
    assert result.error.message == "RuntimeError: rule walker exploded"


def test_unreadable_fixture_is_an_io_failure(tmp_path: Path) -> None:
    result = verify_fixture(tmp_path / "missing.lint", StaticLinter(), TestConfig())

    assert result.error is not None
    assert result.error.kind == "io-error"


def test_discovery_is_recursive_sorted_and_suffix_bound(write_fixture: FixtureWriter, tmp_path: Path) -> None:
    write_fixture("nested/z.lint", "z\n")
    write_fixture("a.lint", "a\n")
    write_fixture("notes.txt", "ignored\n")

    assert discover_fixtures(tmp_path, ".lint") == (tmp_path / "a.lint", tmp_path / "nested" / "z.lint")


def test_load_test_setup_applies_config_and_override(write_fixture: FixtureWriter, tmp_path: Path) -> None:
    write_fixture(CONFIG_FILENAME, 'fixture_suffix = ".case"\n[rules]\nno-trailing-whitespace = true\n')
    write_fixture("one.case", "x\n")
    override = tmp_path / "rules"

    setup = load_test_setup(tmp_path, override)

    assert setup.fixture_paths == (tmp_path / "one.case",)
    assert setup.configuration.rules_directory == override.resolve()
    assert "no-trailing-whitespace" in setup.configuration.enabled_rules()


def test_missing_directory_is_a_config_error(tmp_path: Path) -> None:
    with pytest.raises(ConfigError):
        run_test(tmp_path / "absent")


def test_parallel_run_preserves_fixture_order(write_fixture: FixtureWriter, tmp_path: Path) -> None:
    for index in range(8):
        write_fixture(f"case_{index}.lint", f"line {index}\n")

    sequential = run_test(tmp_path, linter=StaticLinter())
    parallel = run_test(tmp_path, jobs=4, linter=StaticLinter())

    assert [result.path for result in parallel.results] == [result.path for result in sequential.results]
    assert parallel.passed


def test_builtin_rules_end_to_end(write_fixture: FixtureWriter, tmp_path: Path) -> None:
    write_fixture(
        CONFIG_FILENAME,
        "[rules]\nno-trailing-whitespace = true\nmax-line-length = [true, 20]\n",
    )
    write_fixture(
        "whitespace.lint",
        "let x = 1;   \n"
        "          ~~~ [WS]\n"
        "this line is far too long\n"
        "~~~~~~~~~~~~~~~~~~~~~~~~~ [LEN]\n"
        "[WS]: trailing whitespace\n"
        "[LEN]: Exceeds maximum line length of 20\n",
    )

    batch = run_test(tmp_path)

    assert batch.passed, batch.results


def test_rules_directory_override_end_to_end(write_fixture: FixtureWriter, tmp_path: Path) -> None:
    tests_dir = tmp_path / "tests"
    rules_dir = tmp_path / "rules"
    write_fixture(
        "no_debugger.py",
        """
        from ruletest.rules import Rule as BaseRule, iter_lines


        class Rule(BaseRule):
            def apply(self, source):
                for index, text in iter_lines(source):
                    column = text.find("debugger")
                    if column >= 0:
                        yield self.failure(index, column, "Use of debugger statements is forbidden")
        """,
        directory=rules_dir,
    )
    write_fixture(CONFIG_FILENAME, "[rules]\nno-debugger = true\n", directory=tests_dir)
    write_fixture(
        "debugger.lint",
        "if (x) {\n    debugger;\n    ~~~~~~~~ [DBG]\n}\n[DBG]: Use of debugger statements is forbidden\n",
        directory=tests_dir,
    )

    with pytest.raises(UnknownRuleError):
        run_test(tests_dir)
    batch = run_test(tests_dir, rules_dir)

    assert batch.passed, batch.results


def test_run_tests_merges_batches(write_fixture: FixtureWriter, tmp_path: Path) -> None:
    first = tmp_path / "first"
    second = tmp_path / "second"
    write_fixture("ok.lint", "fine\n", directory=first)
    write_fixture("bad.lint", SEMI_FIXTURE, directory=second)

    batch = run_tests([first, second], linter=StaticLinter())

    assert len(batch.results) == 2
    assert not batch.passed
    assert batch == BatchResult.merge([run_test(first, linter=StaticLinter()), run_test(second, linter=StaticLinter())])


def test_badly_shaped_linter_output_fails_only_that_fixture(write_fixture: FixtureWriter, tmp_path: Path) -> None:
    write_fixture("a_semi.lint", SEMI_FIXTURE)
    write_fixture("b_semi.lint", SEMI_FIXTURE)
    tuple_linter = RecordLinter([(0, 9, "Missing semicolon.")])

    batch = run_test(tmp_path, linter=tuple_linter)

    assert [result.path.name for result in batch.results] == ["a_semi.lint", "b_semi.lint"]
    assert all(result.error is not None and result.error.kind == "linter-error" for result in batch.results)
    assert "ValidationError" in batch.results[0].error.message


def test_mapping_records_are_accepted_as_diagnostics(write_fixture: FixtureWriter, tmp_path: Path) -> None:
    write_fixture("semi.lint", SEMI_FIXTURE)

    batch = run_test(tmp_path, linter=RecordLinter([{"line": 0, "column": 9, "message": "Missing semicolon."}]))

    assert batch.passed


def test_zero_width_actual_is_a_mismatch_not_an_error(write_fixture: FixtureWriter, tmp_path: Path) -> None:
    write_fixture("semi.lint", SEMI_FIXTURE)
    linter = StaticLinter([Diagnostic(line=0, column=9, width=0, message="Missing semicolon.")])

    result = run_test(tmp_path, linter=linter).results[0]

    assert result.error is None
    assert result.comparison is not None
    assert len(result.comparison.mismatched) == 1
    assert result.comparison.mismatched[0].actual.width == 0


def test_stacked_annotations_at_one_column_fail_the_fixture(write_fixture: FixtureWriter, tmp_path: Path) -> None:
    write_fixture("dup.lint", "let x = 1\n    ~ [A]\n    ~~ [B]\n[A]: first\n[B]: second\n")
    write_fixture("next.lint", "let y = 2\n")

    batch = run_test(tmp_path, linter=StaticLinter())

    duplicate, following = batch.results
    assert duplicate.error is not None
    assert duplicate.error.kind == "duplicate-position"
    assert following.passed
