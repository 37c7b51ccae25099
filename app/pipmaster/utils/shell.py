"""Subprocess helpers: run a program, find one on PATH, feed the clipboard."""

import logging
import shutil
import subprocess
import sys
from dataclasses import dataclass

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class CommandResult:
    """Captured output and exit status of a finished program."""

    stdout: str
    stderr: str
    returncode: int

    @property
    def success(self) -> bool:
        return self.returncode == 0


def run_command(
    args: list[str],
    *,
    timeout: float | None = 60.0,
    input_text: str | None = None,
) -> CommandResult:
    """Run a program to completion and capture its text output.

    A non-zero exit status is reported through ``returncode``, not raised.

    Args:
        args: Program followed by its arguments.
        timeout: Seconds to wait before giving up.
        input_text: Text written to the program's standard input.

    Raises:
        subprocess.TimeoutExpired: The program outlived ``timeout``.
        FileNotFoundError: The program does not exist.
    """
    completed = subprocess.run(
        args,
        input=input_text,
        capture_output=True,
        text=True,
        timeout=timeout,
        check=False,
    )
    return CommandResult(completed.stdout, completed.stderr, completed.returncode)


def command_exists(name: str) -> bool:
    """True when ``name`` resolves to an executable on PATH."""
    return shutil.which(name) is not None


def _clipboard_commands() -> list[list[str]]:
    """Candidate clipboard writers for the current platform, in preference order."""
    if sys.platform == "darwin":
        return [["pbcopy"]]
    if sys.platform == "win32":
        return [["clip"]]
    return [
        ["wl-copy"],
        ["xclip", "-selection", "clipboard"],
        ["xsel", "--clipboard", "--input"],
    ]


def copy_to_clipboard(text: str) -> bool:
    """Copy text to the system clipboard, best effort.

    Tries the platform's clipboard tools in order and stops at the first
    one that succeeds.

    Args:
        text: Text to copy.

    Returns:
        True if the text was copied, False otherwise.
    """
    for command in _clipboard_commands():
        if not command_exists(command[0]):
            continue
        try:
            result = run_command(command, timeout=5.0, input_text=text)
        except (subprocess.TimeoutExpired, OSError) as e:
            logger.debug("Clipboard command %s failed: %s", command[0], e)
            continue
        if result.success:
            return True
        logger.debug("Clipboard command %s exited with %d", command[0], result.returncode)

    return False
