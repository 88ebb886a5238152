"""External version-control command execution for apsrepo."""

import subprocess
from pathlib import Path
from typing import List, Sequence

from .errors import CommandError


def non_empty(*values: str) -> List[str]:
    """Return the values that contain more than whitespace, untrimmed."""
    return [value for value in values if value.strip()]


class SvnRunner:
    """Runs the version-control tool against repository URLs.

    The tool is invoked as ``<executable> <command...> <url> [<out>]`` and
    blocks until it exits. There is no timeout.

    Attributes:
        executable (str): Name or path of the tool, ``svn`` by default.
    """

    def __init__(self, executable: str = "svn"):
        """Initialize runner."""
        self.executable = executable

    def __repr__(self) -> str:
        """Return string representation."""
        return f"SvnRunner({self.executable})"

    def command_line(self, command: Sequence[str], url: str, out: str = "") -> List[str]:
        """Return the argument vector for one invocation."""
        return [self.executable, *command, *non_empty(url, out)]

    def run(self, command: Sequence[str], url: str, out: str = "") -> str:
        """Run the tool and return its standard output.

        If ``out`` is given, the directory is created first.

        Args:
            command: Passthrough command tokens, e.g. ``["co", "-q"]``.
            url: Repository URL.
            out: Output path appended after the URL, may be empty.

        Returns:
            str: Captured standard output.

        Raises:
            CommandError: If the directory cannot be created, the tool is
                        missing, exits with a non-zero status or writes to
                        standard error.
        """
        args = self.command_line(command, url, out)
        display = " ".join(args)

        if out:
            try:
                Path(out).mkdir(mode=0o755, parents=True, exist_ok=True)
            except OSError as e:
                raise CommandError(f"cannot create output directory {out}: {e}", display) from e

        try:
            result = subprocess.run(args, capture_output=True, text=True, check=False)
        except OSError as e:
            raise CommandError(f"cannot run {self.executable}: {e}", display) from e

        stderr = result.stderr.strip()
        if result.returncode != 0:
            raise CommandError(
                f"{self.executable} exited with status {result.returncode}",
                display,
                returncode=result.returncode,
                stderr=stderr,
                stdout=result.stdout,
            )
        if stderr:
            raise CommandError(
                stderr, display, returncode=result.returncode, stdout=result.stdout
            )
        return result.stdout
