"""File operations utilities for vsc-share."""

import json
import logging
import os
import re
import shutil
import tempfile
from pathlib import Path
from typing import Any, Dict, List, Optional, Tuple

import json5

from ..exceptions import (
    InvalidShapeError,
    ParseError,
    SourceNotFoundError,
    VscShareError,
)

logger = logging.getLogger(__name__)

# json5 reports errors as "<string>:LINE Unexpected ... at column COL"
_ERROR_POSITION = re.compile(r"^<string>:(\d+)\s+(.*?)(?:\s+at column (\d+))?$")


def _error_position(message: str) -> Tuple[Optional[int], Optional[int], str]:
    match = _ERROR_POSITION.match(message.strip())
    if not match:
        return None, None, message
    line, reason, column = match.groups()
    return int(line), int(column) if column else None, reason


class FileOperations:
    """Handles JSON and directory operations on editor configuration files."""

    @staticmethod
    def read_jsonc_file(file_path: Path, fallback: Any = None) -> Any:
        """Read a JSON-with-comments file.

        Comments and trailing commas are accepted. A missing or blank file
        yields ``fallback``; malformed content raises ``ParseError``.
        """
        if not file_path.exists():
            return fallback

        try:
            raw = file_path.read_text(encoding="utf-8-sig")
        except UnicodeDecodeError as e:
            raise ParseError(file_path, reason=f"not valid UTF-8 ({e.reason})") from e
        except OSError as e:
            raise VscShareError(f"Failed to read {file_path}: {e}")

        if not raw.strip():
            return fallback

        try:
            return json5.loads(raw)
        except ValueError as e:
            line, column, reason = _error_position(str(e))
            raise ParseError(file_path, line, column, reason) from e

    @staticmethod
    def read_json_object(
        file_path: Path, fallback: Optional[Dict[str, Any]] = None
    ) -> Dict[str, Any]:
        """Read a JSON-with-comments file that must hold an object."""
        data = FileOperations.read_jsonc_file(
            file_path, {} if fallback is None else dict(fallback)
        )
        if not isinstance(data, dict):
            raise InvalidShapeError(f"{file_path} must be a JSON object.")
        return data

    @staticmethod
    def read_json_array(file_path: Path) -> List[Any]:
        """Read a JSON-with-comments file that must hold an array."""
        data = FileOperations.read_jsonc_file(file_path, [])
        if not isinstance(data, list):
            raise InvalidShapeError(f"{file_path} must be a JSON array.")
        return data

    @staticmethod
    def write_json_file(file_path: Path, data: Any, create_dirs: bool = True) -> None:
        """Write pretty-printed JSON (2-space indent, trailing newline).

        The content goes to a temporary file next to the target which then
        replaces it. A symlinked target is written through to its destination.
        """
        if file_path.is_symlink():
            file_path = file_path.resolve()

        if create_dirs:
            file_path.parent.mkdir(parents=True, exist_ok=True)

        try:
            content = json.dumps(data, indent=2, ensure_ascii=False, allow_nan=False)
        except ValueError as e:
            raise VscShareError(f"Cannot write {file_path} as standard JSON: {e}")
        content += "\n"

        fd, tmp_name = tempfile.mkstemp(
            dir=file_path.parent, prefix=f".{file_path.name}.", suffix=".tmp"
        )
        tmp_path = Path(tmp_name)
        try:
            with os.fdopen(fd, "w", encoding="utf-8", newline="\n") as f:
                f.write(content)
            if file_path.exists():
                shutil.copymode(file_path, tmp_path)
            os.replace(tmp_path, file_path)
            logger.debug(f"Wrote JSON file: {file_path}")

        except OSError as e:
            tmp_path.unlink(missing_ok=True)
            raise VscShareError(f"Failed to write JSON file {file_path}: {e}")

    @staticmethod
    def copy_file(source: Path, destination: Path, create_dirs: bool = True) -> None:
        """Copy a file from source to destination, overwriting it."""
        if not source.exists():
            raise SourceNotFoundError(f"Source file does not exist: {source}")

        if create_dirs:
            destination.parent.mkdir(parents=True, exist_ok=True)

        try:
            shutil.copyfile(source, destination)
            logger.debug(f"Copied file: {source} -> {destination}")

        except OSError as e:
            raise VscShareError(f"Failed to copy file {source} to {destination}: {e}")

    @staticmethod
    def list_files_recursive(dir_path: Path) -> List[Path]:
        """List files under a directory as relative paths, sorted."""
        if not dir_path.exists():
            return []

        return sorted(
            path.relative_to(dir_path) for path in dir_path.rglob("*") if path.is_file()
        )

    @staticmethod
    def replace_directory(source_dir: Path, destination_dir: Path) -> None:
        """Replace destination_dir with a full copy of source_dir."""
        if not source_dir.exists():
            raise SourceNotFoundError(f"Source directory does not exist: {source_dir}")

        try:
            if destination_dir.is_symlink() or destination_dir.is_file():
                destination_dir.unlink()
            elif destination_dir.exists():
                shutil.rmtree(destination_dir)

            destination_dir.parent.mkdir(parents=True, exist_ok=True)
            shutil.copytree(source_dir, destination_dir)
            logger.debug(f"Replaced directory: {source_dir} -> {destination_dir}")

        except OSError as e:
            raise VscShareError(
                f"Failed to replace {destination_dir} with {source_dir}: {e}"
            )

    @staticmethod
    def ensure_directory(dir_path: Path) -> None:
        """Ensure a directory exists, creating it if necessary."""
        try:
            dir_path.mkdir(parents=True, exist_ok=True)

        except OSError as e:
            raise VscShareError(f"Failed to create directory {dir_path}: {e}")
