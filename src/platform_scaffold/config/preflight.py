"""Preflight checks to validate environment."""

import shutil

from rich.markup import escape

from platform_scaffold.console import console
from platform_scaffold.executors import CommandExecutor

REQUIRED_TOOLS: tuple[tuple[str, str], ...] = (
    ("tar", "extracts the platform artifact"),
    ("git", "applies patches"),
)


def check_tool(name: str, purpose: str) -> bool:
    """Validate that an external tool is on PATH and runs."""
    if shutil.which(name) is None:
        console.print(f"[red]✗[/red] {name} not found ({purpose})")
        return False

    result = CommandExecutor().execute([name, "--version"])
    if not result.ok:
        console.print(f"[red]✗[/red] {name} is installed but failed to run")
        return False

    version_lines = result.stdout.strip().splitlines()[:1]
    label = escape(version_lines[0]) if version_lines else name
    console.print(f"[green]✓[/green] {label}")
    return True


def run_all_checks() -> bool:
    """Run all preflight checks."""
    console.print("[bold]Running preflight checks...[/bold]\n")

    results = [check_tool(name, purpose) for name, purpose in REQUIRED_TOOLS]
    all_passed = all(results)

    if all_passed:
        console.print("\n[bold green]All preflight checks passed![/bold green]")
    else:
        console.print("\n[bold red]Some preflight checks failed.[/bold red]")

    return all_passed
