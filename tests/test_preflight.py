"""Tests for preflight checks."""

from unittest.mock import patch

from click.testing import CliRunner

from platform_scaffold.cli import main
from platform_scaffold.config.preflight import check_tool
from platform_scaffold.executors import CommandResult


def test_preflight_help() -> None:
    """Test that the preflight command exists and has help."""
    runner = CliRunner()
    result = runner.invoke(main, ["preflight", "--help"])
    assert result.exit_code == 0
    assert "Validate environment" in result.output


def test_check_tool_missing() -> None:
    with patch("platform_scaffold.config.preflight.shutil.which", return_value=None):
        assert check_tool("git", "applies patches") is False


def test_check_tool_present() -> None:
    with (
        patch(
            "platform_scaffold.config.preflight.shutil.which",
            return_value="/usr/bin/git",
        ),
        patch(
            "platform_scaffold.config.preflight.CommandExecutor.execute",
            return_value=CommandResult(("git", "--version"), 0, "git version 2.43.0\n"),
        ),
    ):
        assert check_tool("git", "applies patches") is True


def test_preflight_fails_when_tool_missing() -> None:
    with patch("platform_scaffold.config.preflight.shutil.which", return_value=None):
        runner = CliRunner()
        result = runner.invoke(main, ["preflight"])
    assert result.exit_code == 1
    assert "Some preflight checks failed" in result.output
