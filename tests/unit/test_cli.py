"""Tests for the command-line interface."""

import json
import logging
from pathlib import Path

import pytest
from click.testing import CliRunner

from pocket_calculator import __version__
from pocket_calculator.cli import main
from pocket_calculator.logging_config import PACKAGE_LOGGER


@pytest.fixture(autouse=True)
def reset_package_logger():
    """Drop handlers bound to CliRunner streams after each test."""
    yield
    logger = logging.getLogger(PACKAGE_LOGGER)
    logger.handlers = []
    logger.setLevel(logging.NOTSET)


@pytest.fixture
def runner() -> CliRunner:
    return CliRunner()


class TestPress:
    """Tests for the press command."""

    def test_shows_result(self, runner: CliRunner) -> None:
        """Test a calculation prints its display."""
        result = runner.invoke(main, ["press", "12345678901234"])

        assert result.exit_code == 0
        assert "12,345,678,901,234" in result.output

    def test_error_exits_non_zero(self, runner: CliRunner) -> None:
        """Test an error code is reported with exit status 1."""
        result = runner.invoke(main, ["press", "--", "-2="])

        assert result.exit_code == 1
        assert "negative_value" in result.output

    def test_json_output(self, runner: CliRunner) -> None:
        """Test JSON output carries the snapshot."""
        result = runner.invoke(main, ["press", "--json", "--seed", "4", "12345"])

        assert result.exit_code == 0
        data = json.loads(result.output)
        assert data["error"] == "no_error"
        assert data["state"]["display"] == "12,345"
        assert data["state"]["entering"] is True
        assert "keys" not in data

    def test_json_trace(self, runner: CliRunner) -> None:
        """Test JSON trace lists every key."""
        result = runner.invoke(main, ["press", "--json", "--trace", "4+6="])

        data = json.loads(result.output)
        assert [k["display"] for k in data["keys"]] == ["4", "4", "6", "10"]

    def test_trace_table(self, runner: CliRunner) -> None:
        """Test trace prints a per-key table."""
        result = runner.invoke(main, ["press", "--trace", "4+6=+2="])

        assert result.exit_code == 0
        assert "Keys" in result.output
        assert "12" in result.output

    def test_oversized_seed(self, runner: CliRunner) -> None:
        """Test a seed wider than the integer limit is a usage error."""
        result = runner.invoke(main, ["press", "--seed", "1" + "0" * 20, "+1="])

        assert result.exit_code == 2
        assert "--seed" in result.output

    def test_double_zero_with_spaces(self, runner: CliRunner) -> None:
        """Test spaced keys send the double-zero key."""
        result = runner.invoke(main, ["press", "--json", "1 00 + 5 ="])

        data = json.loads(result.output)
        assert data["state"]["display"] == "105"

    def test_config_file(self, runner: CliRunner, tmp_path: Path) -> None:
        """Test engine policy comes from the config file."""
        path = tmp_path / "pocket-calc.yaml"
        path.write_text("engine:\n  allow_negative: true\n")

        result = runner.invoke(main, ["press", "--json", "--config", str(path), "3-5="])

        assert result.exit_code == 0
        assert json.loads(result.output)["state"]["display"] == "-2"

    def test_invalid_config_file(self, runner: CliRunner, tmp_path: Path) -> None:
        """Test an invalid config is reported."""
        path = tmp_path / "pocket-calc.yaml"
        path.write_text("engine:\n  integer_digit_limit: 0\n")

        result = runner.invoke(main, ["press", "--config", str(path), "1"])

        assert result.exit_code == 2
        assert "Invalid config" in result.output


class TestRepl:
    """Tests for the repl command."""

    def test_session(self, runner: CliRunner) -> None:
        """Test lines are pressed until quit."""
        result = runner.invoke(main, ["repl"], input="10+5\n-\n3=\nq\n")

        assert result.exit_code == 0
        assert "15" in result.output
        assert "12" in result.output

    def test_reports_errors(self, runner: CliRunner) -> None:
        """Test key errors are printed."""
        result = runner.invoke(main, ["repl"], input="99999999*99999999=\nquit\n")

        assert result.exit_code == 0
        assert "calculate_overflow" in result.output


class TestInit:
    """Tests for the init command."""

    def test_writes_default_config(self, runner: CliRunner, tmp_path: Path) -> None:
        """Test init writes a loadable config."""
        path = tmp_path / "pocket-calc.yaml"

        result = runner.invoke(main, ["init", str(path)])

        assert result.exit_code == 0
        assert "integer_digit_limit: 14" in path.read_text()

    def test_keeps_existing_file(self, runner: CliRunner, tmp_path: Path) -> None:
        """Test declining the prompt leaves the file alone."""
        path = tmp_path / "pocket-calc.yaml"
        path.write_text("engine: {}\n")

        result = runner.invoke(main, ["init", str(path)], input="n\n")

        assert result.exit_code == 0
        assert path.read_text() == "engine: {}\n"


class TestVersion:
    """Tests for version output."""

    def test_version_command(self, runner: CliRunner) -> None:
        """Test version command prints the version."""
        result = runner.invoke(main, ["version"])

        assert __version__ in result.output

    def test_verbose_flag(self, runner: CliRunner) -> None:
        """Test -v enables debug logging."""
        result = runner.invoke(main, ["-v", "press", "1+2="])

        assert result.exit_code == 0
        assert logging.getLogger(PACKAGE_LOGGER).level == logging.DEBUG
