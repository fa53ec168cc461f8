"""Command-line interface for platform-scaffold."""

import logging
from pathlib import Path

import click
import yaml
from rich.logging import RichHandler
from rich.markup import escape

from platform_scaffold import __version__
from platform_scaffold.config import (
    ScaffoldOptions,
    get_local_config_path,
    load_options,
    local_config_exists,
)
from platform_scaffold.config.preflight import run_all_checks
from platform_scaffold.console import console
from platform_scaffold.errors import ScaffoldError
from platform_scaffold.patches import ScaffoldReport
from platform_scaffold.scaffolder import ScaffoldContext, run_scaffold

logger = logging.getLogger(__name__)

project_root_option = click.option(
    "--project-root",
    "-r",
    type=click.Path(exists=True, file_okay=False, path_type=Path),
    default=Path("."),
    show_default=True,
    help="Project root holding the manifest, artifact and build directory.",
)
manifest_option = click.option(
    "--manifest",
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
    help="Manifest to read options from (default: <project-root>/composer.json).",
)


def configure_logging(verbose: bool) -> None:
    """Route log records through rich; DEBUG when verbose, else WARNING."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(message)s",
        handlers=[RichHandler(console=console, show_path=False)],
        force=True,
    )


def version_callback(ctx: click.Context, _param: click.Parameter, value: bool) -> None:
    """Print version and exit."""
    if not value or ctx.resilient_parsing:
        return
    console.print(f"platform-scaffold [bold cyan]{__version__}[/bold cyan]")
    ctx.exit()


def _print_report(report: ScaffoldReport) -> None:
    """Summarize patch outcomes after a run."""
    if not report.results:
        return
    console.print(
        f"[dim]{len(report.applied)} patch(es) applied, "
        f"{len(report.failed)} failed[/dim]"
    )
    for result in report.failed:
        console.print(
            f"  [red]✗[/red] {escape(result.patch.filename)} "
            f"[dim]({result.patch.source}, {result.status.value})[/dim]"
        )


@click.group(invoke_without_command=True)
@click.option(
    "--version",
    is_flag=True,
    callback=version_callback,
    expose_value=False,
    is_eager=True,
    help="Show version and exit.",
)
@click.pass_context
def main(ctx: click.Context) -> None:
    """platform-scaffold - download, extract and patch the NextEuropa platform."""
    if ctx.invoked_subcommand is None:
        console.print("[bold]platform-scaffold[/bold] - NextEuropa platform builder")
        console.print("\nRun [cyan]platform-scaffold --help[/cyan] for commands.")


@main.command()
@project_root_option
@manifest_option
@click.option(
    "--build-dir",
    "-b",
    envvar="PLATFORM_SCAFFOLD_BUILD_DIR",
    help="Build directory (overrides directories.build).",
)
@click.option(
    "--platform-version",
    "-V",
    envvar="PLATFORM_SCAFFOLD_VERSION",
    help="Platform version to download (overrides version).",
)
@click.option(
    "--verbose",
    "-v",
    is_flag=True,
    default=False,
    help="Echo external commands and their output.",
)
@click.option(
    "--strict",
    is_flag=True,
    default=False,
    help="Exit with status 1 when any patch failed to apply.",
)
def scaffold(
    project_root: Path,
    manifest: Path | None,
    build_dir: str | None,
    platform_version: str | None,
    verbose: bool,
    strict: bool,
) -> None:
    """Download the platform artifact, extract it and apply patches."""
    configure_logging(verbose)
    root = project_root.resolve()
    overrides = ScaffoldOptions(version=platform_version, build_dir=build_dir)

    try:
        options, _sources = load_options(root, manifest=manifest, overrides=overrides)
        context = ScaffoldContext.create(options, root, verbose=verbose)
        report = run_scaffold(context)
    except ScaffoldError as e:
        logger.debug("Scaffolding aborted", exc_info=True)
        console.print(f"[red]Scaffolding failed: {escape(str(e))}[/red]")
        raise SystemExit(1) from None

    _print_report(report)
    if strict and report.has_failures:
        raise SystemExit(1)


@main.command()
def preflight() -> None:
    """Validate environment (tar and git available)."""
    if not run_all_checks():
        raise SystemExit(1)


@main.command("show-config")
@project_root_option
@manifest_option
def show_config(project_root: Path, manifest: Path | None) -> None:
    """Display the effective scaffold options."""
    root = project_root.resolve()
    try:
        options, sources = load_options(root, manifest=manifest)
    except ScaffoldError as e:
        console.print(f"[red]{escape(str(e))}[/red]")
        raise SystemExit(1) from None

    console.print("\n[bold]Effective Scaffold Options:[/bold]")
    console.print(f"  [dim]Manifest: {sources.manifest}[/dim]")
    console.print(f"  [dim]Local: {get_local_config_path(root)}[/dim]")
    if sources.environment:
        console.print(f"  [dim]Environment: {', '.join(sources.environment)}[/dim]")
    console.print()

    data = options.to_dict()
    data.setdefault("patches", {})
    rendered = yaml.safe_dump(data, default_flow_style=False, sort_keys=False)
    for line in rendered.splitlines():
        console.print(f"  {escape(line)}")

    console.print()
    if sources.local_override:
        console.print("  [green]Local overrides: applied[/green]")
    elif local_config_exists(root):
        console.print("  [yellow]Local overrides: file exists but is empty[/yellow]")
    else:
        console.print("  [dim]Local overrides: not found[/dim]")
