"""Git operations for platform scaffolding."""

from platform_scaffold.git.operations import PatchApplier

__all__ = [
    "PatchApplier",
]
