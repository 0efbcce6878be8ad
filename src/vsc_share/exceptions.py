"""Custom exceptions for vsc-share."""

from pathlib import Path
from typing import List, Optional, Union


class VscShareError(Exception):
    """Base exception for all vsc-share errors."""


class ConfigError(VscShareError):
    """Raised when there's an issue with configuration."""


class NoEditorsError(VscShareError):
    """Raised when no supported editor could be detected."""


class CliUnavailableError(VscShareError):
    """Raised when an editor's CLI can't be invoked or fails to list extensions."""

    def __init__(self, editor_name: str):
        super().__init__(f"{editor_name} CLI not found or failed.")
        self.editor_name = editor_name


class ProcessFailure(VscShareError):
    """Raised when an editor CLI call exits with a non-zero status."""

    def __init__(self, command: List[str], returncode: Optional[int], stderr: str = ""):
        self.command = command
        self.returncode = returncode
        self.stderr = stderr
        super().__init__(stderr.strip() or f"Exit {returncode}")


class ParseError(VscShareError):
    """Raised when a JSON-with-comments file is malformed."""

    def __init__(
        self,
        path: Union[str, Path],
        line: Optional[int] = None,
        column: Optional[int] = None,
        reason: str = "",
    ):
        self.path = Path(path)
        self.line = line
        self.column = column
        self.reason = reason

        message = f"{self.path} parse error"
        if reason:
            message += f" ({reason})"
        if line is not None and column is not None:
            message += f" at line {line}, column {column}"
        super().__init__(message + ".")


class InvalidShapeError(VscShareError):
    """Raised when parsed JSON content has the wrong shape."""


class SourceNotFoundError(VscShareError):
    """Raised when a required source file or directory doesn't exist."""
