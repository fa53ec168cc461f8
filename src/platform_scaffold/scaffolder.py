"""Scaffold the platform: fetch the artifact, extract it, apply patches.

Every step takes an explicit ScaffoldContext. The run is strictly
sequential; a patch that fails is reported and the next one is tried,
while download and extraction failures abort the run.
"""

from __future__ import annotations

import logging
import shutil
from dataclasses import dataclass
from pathlib import Path

from rich.markup import escape

from platform_scaffold.artifact import (
    ARTIFACT_FILENAME,
    download_file,
    extract_tarball,
    recreate_directory,
)
from platform_scaffold.config.schema import ScaffoldOptions, get_uri
from platform_scaffold.console import console
from platform_scaffold.executors import CommandExecutor
from platform_scaffold.git import PatchApplier
from platform_scaffold.patches import (
    PatchResult,
    PatchSpec,
    PatchStatus,
    ScaffoldReport,
    discover_local_patches,
    remote_patches,
    resolve_patches_path,
)

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ScaffoldContext:
    """Everything a scaffolding step needs, passed explicitly."""

    options: ScaffoldOptions
    project_root: Path
    executor: CommandExecutor

    @classmethod
    def create(
        cls,
        options: ScaffoldOptions,
        project_root: Path,
        verbose: bool = False,
    ) -> ScaffoldContext:
        return cls(
            options=options,
            project_root=project_root,
            executor=CommandExecutor(verbose=verbose),
        )

    @property
    def build_path(self) -> Path:
        """Build directory, relative paths taken from the project root."""
        build_dir = Path(self.options.build_dir or "")
        if build_dir.is_absolute():
            return build_dir
        return self.project_root / build_dir

    @property
    def artifact_path(self) -> Path:
        return self.project_root / ARTIFACT_FILENAME

    @property
    def patches_path(self) -> Path:
        return resolve_patches_path(self.options, self.project_root)


def _info(message: str) -> None:
    console.print(f"[green]{escape(message)}[/green]")


def _comment(message: str) -> None:
    console.print(f"[yellow]{escape(message)}[/yellow]")


def _error(message: str) -> None:
    console.print(f"[red]{escape(message)}[/red]")


def download_artifact(context: ScaffoldContext) -> Path:
    """Download the release artifact, replacing any stale copy."""
    artifact = context.artifact_path
    if artifact.exists():
        artifact.unlink()

    url = get_uri(context.options)
    _comment(f"  Downloading platform artifact: {url}")
    download_file(url, artifact)
    return artifact


def extract_artifact(context: ScaffoldContext) -> None:
    """Recreate the build directory and extract the artifact into it."""
    build_path = context.build_path
    recreate_directory(build_path)
    extract_tarball(context.artifact_path, build_path, context.executor)


def remove_artifact_file(context: ScaffoldContext) -> None:
    """Delete the downloaded artifact archive."""
    context.artifact_path.unlink()


def apply_patch(context: ScaffoldContext, patch: PatchSpec) -> PatchResult:
    """Check a staged patch, then apply it if the check passed.

    A failed check skips the real apply. A failed apply is reported the
    same way; neither stops the run.
    """
    applier = PatchApplier(context.build_path, context.executor)

    checked = applier.check(patch.filename)
    if not checked.ok:
        _error(f"Error while applying a patch: {patch.filename}")
        _comment(checked.stderr)
        logger.warning("Patch check failed: %s", patch.filename)
        return PatchResult(patch, PatchStatus.CHECK_FAILED, checked.stderr)

    applied = applier.apply(patch.filename)
    if not applied.ok:
        _error(f"Patch passed its check but failed to apply: {patch.filename}")
        _comment(applied.stderr)
        logger.warning("Patch apply failed after a clean check: %s", patch.filename)
        return PatchResult(patch, PatchStatus.APPLY_FAILED, applied.stderr)

    return PatchResult(patch, PatchStatus.APPLIED, applied.stdout)


def apply_local_patches(context: ScaffoldContext) -> list[PatchResult]:
    """Copy every bundled patch into the build directory and apply it."""
    _comment("  Applying local patches")
    results: list[PatchResult] = []
    for patch in discover_local_patches(context.patches_path):
        if patch.path is None:
            continue
        shutil.copyfile(patch.path, context.build_path / patch.filename)

        _comment(f"    Applying local patch: {patch.filename}")
        results.append(apply_patch(context, patch))
    return results


def download_and_apply_patches(context: ScaffoldContext) -> list[PatchResult]:
    """Download each configured patch into the build directory and apply it."""
    if not context.options.has_remote_patches:
        _info("There are no remote patches to apply.")
        return []

    _comment("  Downloading and applying patches")
    results: list[PatchResult] = []
    for patch in remote_patches(context.options):
        if patch.url is None:
            continue
        _comment(f"    Downloading patch: {patch.description}")
        download_file(patch.url, context.build_path / patch.filename)

        _comment("    Applying...")
        results.append(apply_patch(context, patch))
    return results


def remove_downloaded_patches(context: ScaffoldContext) -> list[Path]:
    """Delete every *.patch file at the top of the build directory."""
    removed = sorted(context.build_path.glob("*.patch"))
    for path in removed:
        path.unlink()
    logger.debug("Removed %d patch file(s) from %s", len(removed), context.build_path)
    return removed


def run_scaffold(context: ScaffoldContext) -> ScaffoldReport:
    """Run the full scaffolding sequence.

    Raises:
        DownloadError: If the artifact or a remote patch cannot be fetched.
        ExtractionError: If the artifact cannot be extracted.
    """
    _info("Scaffolding NextEuropa platform.")
    report = ScaffoldReport()

    download_artifact(context)
    extract_artifact(context)
    remove_artifact_file(context)

    for result in apply_local_patches(context):
        report.add(result)
    for result in download_and_apply_patches(context):
        report.add(result)
    remove_downloaded_patches(context)

    _info("Scaffolding process completed.")
    return report
