"""Error types for apsrepo."""

from __future__ import annotations

from typing import Optional, Sequence


class ApsRepoError(Exception):
    """Base class for all apsrepo errors."""


class ConfigError(ApsRepoError, ValueError):
    """Configuration file contents are invalid."""


class CatalogError(ApsRepoError):
    """Repository file could not be opened or read."""

    def __init__(self, message: str, path: str) -> None:
        """Initialize error."""
        super().__init__(message)
        self.path = path


class ExpressionError(ApsRepoError):
    """One or more filter expressions failed to compile."""

    def __init__(self, expressions: Sequence[str], reason: str = "") -> None:
        """Initialize error."""
        super().__init__(
            f"invalid expression(s): [ {', '.join(expressions)} ]"
            + (f" ({reason})" if reason else "")
        )
        self.expressions = list(expressions)
        self.reason = reason


class NoMatchError(ApsRepoError):
    """No repository matched the filter expressions."""

    def __init__(self, expressions: Sequence[str]) -> None:
        """Initialize error."""
        super().__init__(
            f"no repository found matching expression(s): [ {', '.join(expressions)} ]"
        )
        self.expressions = list(expressions)


class CommandError(ApsRepoError):
    """External version-control command failed.

    Attributes:
        command: The command line that was executed, space separated.
        returncode: Exit status of the process, or None if it never ran.
        stderr: Trimmed standard error output of the process.
        stdout: Standard output captured before the failure.
    """

    def __init__(
        self,
        message: str,
        command: str,
        returncode: Optional[int] = None,
        stderr: str = "",
        stdout: str = "",
    ) -> None:
        """Initialize error."""
        super().__init__(f"{message}\n{stderr}" if stderr else message)
        self.command = command
        self.returncode = returncode
        self.stderr = stderr
        self.stdout = stdout
