"""Tests for the CLI."""

import json
from pathlib import Path
from unittest.mock import patch

from click.testing import CliRunner

from platform_scaffold import __version__
from platform_scaffold.cli import main
from platform_scaffold.errors import DownloadError
from platform_scaffold.patches import PatchResult, PatchSpec, PatchStatus, ScaffoldReport

SECTION = {
    "artifact": {"url": "https://example.org/platform-{version}.tar.gz"},
    "version": "2.5.1",
    "directories": {"build": "build"},
}


def write_manifest(root: Path, section: dict = SECTION) -> None:
    (root / "composer.json").write_text(
        json.dumps({"extra": {"ne-platform-scaffold": section}})
    )


def failing_report() -> ScaffoldReport:
    report = ScaffoldReport()
    spec = PatchSpec.remote("Broken", "https://example.org/broken.patch")
    report.add(PatchResult(spec, PatchStatus.CHECK_FAILED, "error"))
    return report


def test_cli_help() -> None:
    """Test that --help exits cleanly."""
    runner = CliRunner()
    result = runner.invoke(main, ["--help"])
    assert result.exit_code == 0
    assert "platform" in result.output.lower()


def test_cli_version() -> None:
    """Test that --version shows the version."""
    runner = CliRunner()
    result = runner.invoke(main, ["--version"])
    assert result.exit_code == 0
    assert __version__ in result.output


def test_scaffold_passes_overrides(tmp_path: Path) -> None:
    """Test that scaffold loads the manifest and applies CLI overrides."""
    write_manifest(tmp_path)

    with patch("platform_scaffold.cli.run_scaffold") as mock_run:
        mock_run.return_value = ScaffoldReport()
        runner = CliRunner()
        result = runner.invoke(
            main,
            ["scaffold", "-r", str(tmp_path), "--platform-version", "2.6.0"],
            env={"PLATFORM_SCAFFOLD_VERSION": None, "PLATFORM_SCAFFOLD_BUILD_DIR": None},
        )

    assert result.exit_code == 0, result.output
    context = mock_run.call_args[0][0]
    assert context.options.version == "2.6.0"
    assert context.project_root == tmp_path.resolve()
    assert context.executor.verbose is False


def test_scaffold_fatal_error_exits_1(tmp_path: Path) -> None:
    """Test that a fatal scaffold error is reported with exit code 1."""
    write_manifest(tmp_path)

    with patch(
        "platform_scaffold.cli.run_scaffold",
        side_effect=DownloadError("Failed to download artifact"),
    ):
        runner = CliRunner()
        result = runner.invoke(main, ["scaffold", "-r", str(tmp_path)])

    assert result.exit_code == 1
    assert "Scaffolding failed" in result.output


def test_scaffold_missing_manifest_exits_1(tmp_path: Path) -> None:
    runner = CliRunner()
    result = runner.invoke(main, ["scaffold", "-r", str(tmp_path)])
    assert result.exit_code == 1
    assert "Manifest not found" in result.output


def test_patch_failures_only_fatal_when_strict(tmp_path: Path) -> None:
    """Test that patch failures change the exit code only with --strict."""
    write_manifest(tmp_path)
    runner = CliRunner()

    with patch("platform_scaffold.cli.run_scaffold", return_value=failing_report()):
        relaxed = runner.invoke(main, ["scaffold", "-r", str(tmp_path)])
        strict = runner.invoke(main, ["scaffold", "-r", str(tmp_path), "--strict"])

    assert relaxed.exit_code == 0
    assert "broken.patch" in relaxed.output
    assert strict.exit_code == 1


def test_show_config(tmp_path: Path) -> None:
    """Test that show-config prints the effective options."""
    write_manifest(
        tmp_path,
        {**SECTION, "patches": {"Fix views": "https://example.org/fix-1.patch"}},
    )
    runner = CliRunner()
    result = runner.invoke(main, ["show-config", "-r", str(tmp_path)])

    assert result.exit_code == 0, result.output
    assert "version: 2.5.1" in result.output
    assert "Fix views" in result.output


def test_scaffold_non_utf8_manifest_exits_1(tmp_path: Path) -> None:
    """Test that an undecodable manifest is reported instead of crashing."""
    (tmp_path / "composer.json").write_bytes(b'{"extra": {"\xff": 1}}')

    runner = CliRunner()
    result = runner.invoke(main, ["scaffold", "-r", str(tmp_path)])

    assert result.exit_code == 1
    assert isinstance(result.exception, SystemExit)
    assert "Invalid JSON manifest" in result.output


def test_scaffold_patch_url_without_filename_exits_1(tmp_path: Path) -> None:
    """Test that a patch URL naming no file is rejected before any download."""
    write_manifest(tmp_path, {**SECTION, "patches": {"Dir": "https://example.org"}})

    with patch("platform_scaffold.cli.run_scaffold") as mock_run:
        runner = CliRunner()
        result = runner.invoke(main, ["scaffold", "-r", str(tmp_path)])

    assert result.exit_code == 1
    assert isinstance(result.exception, SystemExit)
    mock_run.assert_not_called()


def test_show_config_empty_local_override(tmp_path: Path) -> None:
    """Test that show-config notices an empty local override file."""
    write_manifest(tmp_path)
    local = tmp_path / ".platform-scaffold" / "config.yaml"
    local.parent.mkdir()
    local.write_text("")

    runner = CliRunner()
    result = runner.invoke(main, ["show-config", "-r", str(tmp_path)])

    assert result.exit_code == 0, result.output
    assert "file exists but is empty" in result.output
    assert "patches: {}" in result.output
