"""Patch application with git apply."""

from pathlib import Path

from platform_scaffold.executors import CommandExecutor, CommandResult


class PatchApplier:
    """Applies patch files to a build directory via `git -C <dir> apply`."""

    def __init__(self, build_path: Path, executor: CommandExecutor) -> None:
        """Initialize with the build directory and the executor to run git."""
        self._build_path = build_path
        self._executor = executor

    def check(self, patch_filename: str) -> CommandResult:
        """Dry-run a patch without touching the tree.

        Args:
            patch_filename: Patch file name, relative to the build directory.

        Returns:
            The result of `git apply --check -v`.
        """
        return self._executor.execute(
            [
                "git",
                "-C",
                str(self._build_path),
                "apply",
                "--check",
                "-v",
                patch_filename,
            ]
        )

    def apply(self, patch_filename: str) -> CommandResult:
        """Apply a patch to the build directory.

        Args:
            patch_filename: Patch file name, relative to the build directory.

        Returns:
            The result of `git apply`.
        """
        return self._executor.execute(
            ["git", "-C", str(self._build_path), "apply", patch_filename]
        )
