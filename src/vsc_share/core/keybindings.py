"""Merge of keybindings.json keyed by (key, command)."""

import logging
from pathlib import Path
from typing import Any, List, Tuple

from ..exceptions import InvalidShapeError, SourceNotFoundError, VscShareError
from .file_ops import FileOperations

logger = logging.getLogger(__name__)


def _identity(binding: Any) -> Tuple[Any, Any]:
    if isinstance(binding, dict):
        return binding.get("key"), binding.get("command")
    return None, None


class KeybindingsSync:
    """Copies keybindings from a source editor onto a target keybindings.json."""

    @staticmethod
    def read_source_keybindings(keybindings_path: Path) -> List[Any]:
        """Read the source editor's keybindings.json, which must be a JSON array."""
        if not keybindings_path.exists():
            raise SourceNotFoundError(
                f"Source keybindings.json not found: {keybindings_path}"
            )
        return FileOperations.read_json_array(keybindings_path)

    @staticmethod
    def read_target_keybindings(keybindings_path: Path) -> List[Any]:
        """Read a target keybindings.json, treating anything unusable as empty."""
        try:
            return FileOperations.read_json_array(keybindings_path)
        except VscShareError as e:
            logger.warning(f"Ignoring unreadable keybindings at {keybindings_path}: {e}")
            return []

    @staticmethod
    def merge_keybindings(target: List[Any], source: List[Any]) -> List[Any]:
        """Overlay ``source`` onto ``target``.

        A source binding replaces the first target entry with the same key and
        command, in place; otherwise it is appended.
        """
        merged = list(target)

        for binding in source:
            identity = _identity(binding)
            for index, existing in enumerate(merged):
                if _identity(existing) == identity:
                    merged[index] = binding
                    break
            else:
                merged.append(binding)

        return merged

    @staticmethod
    def sync_keybindings(source_keybindings: List[Any], target_path: Path) -> List[Any]:
        """Merge ``source_keybindings`` into the file at ``target_path`` and write it."""
        if not isinstance(source_keybindings, list):
            raise InvalidShapeError("Source keybindings must be a JSON array.")

        target_keybindings = KeybindingsSync.read_target_keybindings(target_path)
        merged = KeybindingsSync.merge_keybindings(
            target_keybindings, source_keybindings
        )

        FileOperations.write_json_file(target_path, merged)
        logger.debug(f"Wrote {len(merged)} keybindings to {target_path}")
        return merged
