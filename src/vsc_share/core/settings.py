"""Shallow merge of settings.json between editors."""

import logging
from pathlib import Path
from typing import Any, Dict

from ..exceptions import InvalidShapeError, SourceNotFoundError
from .file_ops import FileOperations

logger = logging.getLogger(__name__)


class SettingsSync:
    """Copies settings from a source editor onto a target settings.json."""

    @staticmethod
    def read_source_settings(settings_path: Path) -> Dict[str, Any]:
        """Read the source editor's settings.json, which must exist."""
        if not settings_path.exists():
            raise SourceNotFoundError(f"Source settings not found: {settings_path}")
        return FileOperations.read_json_object(settings_path)

    @staticmethod
    def merge_settings(
        target: Dict[str, Any], source: Dict[str, Any]
    ) -> Dict[str, Any]:
        """Top-level keys of ``source`` replace those of ``target``; no deep merge."""
        return {**target, **source}

    @staticmethod
    def sync_settings(
        source_settings: Dict[str, Any], target_path: Path
    ) -> Dict[str, Any]:
        """Merge ``source_settings`` into the settings file at ``target_path``.

        A missing target counts as ``{}``. The merged object is written back and
        returned.
        """
        if not isinstance(source_settings, dict):
            raise InvalidShapeError("Source settings must be a JSON object.")

        target_settings = FileOperations.read_json_object(target_path)
        merged = SettingsSync.merge_settings(target_settings, source_settings)

        FileOperations.write_json_file(target_path, merged)
        logger.debug(
            f"Merged {len(source_settings)} settings into {target_path} "
            f"({len(merged)} total)"
        )
        return merged
