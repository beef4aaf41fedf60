"""Tests for the rangealgebra command line."""

from __future__ import annotations

import pytest
from click.testing import CliRunner

from rangealgebra.cli import cli


def test_help(cli_runner: CliRunner) -> None:
    """Test the group help text."""
    result = cli_runner.invoke(cli, ["--help"])

    assert result.exit_code == 0
    assert "eval" in result.output
    assert "contains" in result.output
    assert "compare" in result.output


def test_version(cli_runner: CliRunner) -> None:
    """Test the version option."""
    result = cli_runner.invoke(cli, ["--version"])

    assert result.exit_code == 0
    assert "0.1.0" in result.output


def test_eval(cli_runner: CliRunner) -> None:
    """Test evaluating an expression with the default float type."""
    result = cli_runner.invoke(cli, ["eval", "(1, 2)+[2, 3)"])

    assert result.exit_code == 0, f"Command failed: {result.output}"
    assert result.output.strip() == "(1.0, 3.0)"


def test_eval_int(cli_runner: CliRunner) -> None:
    """Test evaluating with integer values."""
    result = cli_runner.invoke(cli, ["--type", "int", "eval", "[1, 5) - [2, 3]"])

    assert result.exit_code == 0, f"Command failed: {result.output}"
    assert result.output.strip() == "[1, 2) ∪ (3, 5)"


def test_eval_null(cli_runner: CliRunner) -> None:
    """Test that bracketed output is printed literally."""
    result = cli_runner.invoke(cli, ["eval", "(null)"])

    assert result.exit_code == 0, f"Command failed: {result.output}"
    assert result.output.strip() == "[null]"


def test_eval_custom_markers(cli_runner: CliRunner) -> None:
    """Test overriding the infinity markers."""
    result = cli_runner.invoke(
        cli, ["--type", "int", "--infinity-markers", "forever", "eval", "[3, forever)"]
    )

    assert result.exit_code == 0, f"Command failed: {result.output}"
    assert result.output.strip() == "[3, ∞)"


def test_group_context() -> None:
    """Test that the group passes the converter and parser settings to commands."""
    ctx = cli.make_context("rangealgebra", ["--verbose", "--type", "int", "eval", "[1]"])
    with ctx:
        ctx.invoke(cli.callback, **ctx.params)

    assert set(ctx.obj) == {"converter", "config"}
    assert ctx.obj["converter"] is int


def test_eval_verbose(cli_runner: CliRunner) -> None:
    """Test that verbose logging leaves the printed result unchanged."""
    result = cli_runner.invoke(cli, ["-v", "--type", "int", "eval", "(3, 3) + [3]"])

    assert result.exit_code == 0, f"Command failed: {result.output}"
    assert result.output.strip().splitlines()[-1] == "[3]"

def test_eval_markers_from_environment(
    cli_runner: CliRunner, monkeypatch: pytest.MonkeyPatch
) -> None:
    """Test infinity markers taken from the environment."""
    monkeypatch.setenv("RANGEALGEBRA_INFINITY_MARKERS", "open")
    result = cli_runner.invoke(cli, ["--type", "int", "eval", "(open, 3]"])

    assert result.exit_code == 0, f"Command failed: {result.output}"
    assert result.output.strip() == "(-∞, 3]"


def test_eval_invalid_markers(cli_runner: CliRunner) -> None:
    """Test that an invalid marker pattern is reported."""
    result = cli_runner.invoke(cli, ["--infinity-markers", "(", "eval", "[1, 2)"])

    assert result.exit_code == 1
    assert "Invalid parser configuration" in result.output


def test_eval_parse_error(cli_runner: CliRunner) -> None:
    """Test that a malformed expression fails."""
    result = cli_runner.invoke(cli, ["eval", "[1, 2"])

    assert result.exit_code == 1
    assert "Unexpected" in result.output


def test_eval_conversion_error(cli_runner: CliRunner) -> None:
    """Test that an unconvertible value fails."""
    result = cli_runner.invoke(cli, ["--type", "int", "eval", "[1, abc)"])

    assert result.exit_code == 1
    assert "abc" in result.output


def test_eval_dates(cli_runner: CliRunner) -> None:
    """Test evaluating with date values."""
    result = cli_runner.invoke(
        cli,
        ["--type", "date", "eval", "[2024-01-01, 2024-03-01) ∩ [2024-02-01, ∞)"],
    )

    assert result.exit_code == 0, f"Command failed: {result.output}"
    assert result.output.strip() == "[2024-02-01, 2024-03-01)"


@pytest.mark.parametrize(
    ("value", "expected"),
    [("4", "true"), ("2", "false"), ("3", "false"), ("1", "true")],
)
def test_contains(cli_runner: CliRunner, value: str, expected: str) -> None:
    """Test membership of values around a hole."""
    result = cli_runner.invoke(
        cli, ["--type", "int", "contains", "[1, 5) - [2, 3]", value]
    )

    assert result.exit_code == 0, f"Command failed: {result.output}"
    assert result.output.strip() == expected


def test_contains_null(cli_runner: CliRunner) -> None:
    """Test membership of the null element."""
    result = cli_runner.invoke(cli, ["contains", "(-∞, 0) ∪ [null]", "null"])

    assert result.exit_code == 0, f"Command failed: {result.output}"
    assert result.output.strip() == "true"


def test_contains_bad_value(cli_runner: CliRunner) -> None:
    """Test that an unconvertible value is a usage error."""
    result = cli_runner.invoke(cli, ["--type", "int", "contains", "[1, 5)", "x"])

    assert result.exit_code == 2
    assert "cannot convert" in result.output


def test_compare(cli_runner: CliRunner) -> None:
    """Test comparing two ranges."""
    result = cli_runner.invoke(cli, ["--type", "int", "compare", "[1, 5)", "[3, 7)"])

    assert result.exit_code == 0, f"Command failed: {result.output}"
    assert "UPPER_OVERLAP" in result.output
    assert "[1, 7)" in result.output
    assert "[3, 5)" in result.output
    assert "[1, 3)" in result.output
    assert "[5, 7)" in result.output


def test_compare_parse_error(cli_runner: CliRunner) -> None:
    """Test that a malformed operand fails."""
    result = cli_runner.invoke(cli, ["compare", "[1, 5)", "[3, 7"])

    assert result.exit_code == 1
