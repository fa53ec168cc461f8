"""Subprocess execution with optional verbose echo."""

import logging
import shlex
import subprocess
import threading
from dataclasses import dataclass
from typing import IO

from platform_scaffold.console import console

logger = logging.getLogger(__name__)

# Exit status reported when the executable itself cannot be found.
COMMAND_NOT_FOUND = 127


@dataclass(frozen=True)
class CommandResult:
    """Outcome of a finished command."""

    args: tuple[str, ...]
    returncode: int
    stdout: str = ""
    stderr: str = ""

    @property
    def ok(self) -> bool:
        """True when the command exited with status zero."""
        return self.returncode == 0

    @property
    def display(self) -> str:
        """Shell-quoted rendering of the command, for messages only."""
        return shlex.join(self.args)


class CommandExecutor:
    """Runs external commands from an explicit argument list.

    Arguments are never joined into a shell string; the command is
    rendered with shlex only for display.
    """

    def __init__(self, verbose: bool = False) -> None:
        self.verbose = verbose

    def execute(self, args: list[str]) -> CommandResult:
        """Run a command and capture its output.

        In verbose mode the command is echoed first and its output lines
        are echoed as they arrive: stdout as comments, stderr as errors.

        Args:
            args: Command name followed by its arguments.

        Returns:
            CommandResult with captured stdout/stderr.
        """
        command = tuple(str(arg) for arg in args)
        rendered = shlex.join(command)
        logger.debug("Executing: %s", rendered)
        if self.verbose:
            console.print(rendered, style="yellow", markup=False)

        try:
            if self.verbose:
                return self._stream(command)
            completed = subprocess.run(
                list(command),
                capture_output=True,
                text=True,
            )
        except FileNotFoundError as e:
            logger.debug("Command not found: %s", command[0])
            return CommandResult(
                args=command, returncode=COMMAND_NOT_FOUND, stderr=str(e)
            )

        return CommandResult(
            args=command,
            returncode=completed.returncode,
            stdout=completed.stdout or "",
            stderr=completed.stderr or "",
        )

    def _stream(self, command: tuple[str, ...]) -> CommandResult:
        """Run a command, echoing each output line while it runs."""
        stdout_lines: list[str] = []
        stderr_lines: list[str] = []
        with subprocess.Popen(
            list(command),
            stdout=subprocess.PIPE,
            stderr=subprocess.PIPE,
            text=True,
        ) as proc:
            # stderr is drained on a thread so neither pipe can fill up
            reader = threading.Thread(
                target=_pump,
                args=(proc.stderr, stderr_lines, "red"),
                daemon=True,
            )
            reader.start()
            _pump(proc.stdout, stdout_lines, "yellow")
            reader.join()
            returncode = proc.wait()

        return CommandResult(
            args=command,
            returncode=returncode,
            stdout="".join(stdout_lines),
            stderr="".join(stderr_lines),
        )


def _pump(stream: IO[str] | None, lines: list[str], style: str) -> None:
    """Collect lines from a pipe and echo each one in the given style."""
    if stream is None:
        return
    for line in stream:
        lines.append(line)
        console.print(line.rstrip("\n"), style=style, markup=False)
