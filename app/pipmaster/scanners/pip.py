"""pip environment scanner.

Reads the installed distributions of a Python interpreter through
``pip list --format=json``, the same text a user would paste into an
import.
"""

import logging
import subprocess
import sys
from dataclasses import dataclass, field

from pipmaster.utils.shell import command_exists, run_command

logger = logging.getLogger(__name__)


@dataclass
class PipScanner:
    """Scanner for pip-managed packages.

    Attributes:
        python: Interpreter whose environment is scanned. Defaults to
            the interpreter running pipmaster.
    """

    python: str = field(default=sys.executable)

    def is_available(self) -> bool:
        """Check if the interpreter can be found."""
        return bool(self.python) and command_exists(self.python)

    def list_json(self) -> str:
        """Return the raw ``pip list --format=json`` output.

        Raises:
            RuntimeError: If the interpreter is missing or pip fails.
        """
        if not self.is_available():
            msg = f"Python interpreter not found: {self.python or '<none>'}"
            raise RuntimeError(msg)

        command = [self.python, "-m", "pip", "list", "--format=json", "--disable-pip-version-check"]
        try:
            result = run_command(command, timeout=120.0)
        except subprocess.TimeoutExpired as e:
            raise RuntimeError("pip list timed out") from e

        if not result.success:
            msg = f"pip list failed: {result.stderr.strip() or 'unknown error'}"
            raise RuntimeError(msg)

        logger.debug("pip list returned %d bytes", len(result.stdout))
        return result.stdout
