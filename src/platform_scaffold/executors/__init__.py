"""Process execution for external tools (tar, git)."""

from platform_scaffold.executors.command import (
    COMMAND_NOT_FOUND,
    CommandExecutor,
    CommandResult,
)

__all__ = [
    "COMMAND_NOT_FOUND",
    "CommandExecutor",
    "CommandResult",
]
