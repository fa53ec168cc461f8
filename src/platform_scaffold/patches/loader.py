"""Patch discovery: bundled patch files and configured remote patches."""

from __future__ import annotations

from pathlib import Path

from platform_scaffold.config.schema import ScaffoldOptions
from platform_scaffold.patches.base import PatchSpec

BUNDLED_DIRNAME = "bundled"


def get_package_patches_path() -> Path:
    """Get path to the patches bundled with this package."""
    return Path(__file__).parent / BUNDLED_DIRNAME


def resolve_patches_path(options: ScaffoldOptions, project_root: Path) -> Path:
    """Resolve the local patch directory.

    `directories.patches` in the options replaces the bundled directory;
    relative paths are taken from the project root.
    """
    if options.patches_dir:
        path = Path(options.patches_dir).expanduser()
        return path if path.is_absolute() else project_root / path
    return get_package_patches_path()


def _is_hidden(path: Path, base_path: Path) -> bool:
    """Check if any component below base_path starts with a dot."""
    return any(part.startswith(".") for part in path.relative_to(base_path).parts)


def discover_local_patches(base_path: Path) -> list[PatchSpec]:
    """Discover every patch file below base_path.

    No extension filter is applied: every visible file is a patch.
    Hidden files and directories are skipped. Returns specs in sorted
    path order; an absent directory yields no patches.
    """
    if not base_path.is_dir():
        return []

    return [
        PatchSpec.local(path)
        for path in sorted(base_path.rglob("*"))
        if path.is_file() and not _is_hidden(path, base_path)
    ]


def remote_patches(options: ScaffoldOptions) -> list[PatchSpec]:
    """Return configured remote patches in declaration order."""
    return [
        PatchSpec.remote(description, url)
        for description, url in (options.patches or {}).items()
    ]
