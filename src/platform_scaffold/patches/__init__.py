"""Patch definitions and discovery."""

from platform_scaffold.patches.base import (
    PatchResult,
    PatchSpec,
    PatchStatus,
    ScaffoldReport,
    patch_filename_from_url,
)
from platform_scaffold.patches.loader import (
    discover_local_patches,
    get_package_patches_path,
    remote_patches,
    resolve_patches_path,
)

__all__ = [
    "PatchResult",
    "PatchSpec",
    "PatchStatus",
    "ScaffoldReport",
    "discover_local_patches",
    "get_package_patches_path",
    "patch_filename_from_url",
    "remote_patches",
    "resolve_patches_path",
]
