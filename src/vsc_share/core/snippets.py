"""Sync of the snippets folder, by per-file merge or wholesale replace."""

import logging
from pathlib import Path

from ..exceptions import SourceNotFoundError
from ..models import SnippetMode
from .file_ops import FileOperations
from .settings import SettingsSync

logger = logging.getLogger(__name__)


class SnippetsSync:
    """Copies a source snippets folder onto a target snippets folder."""

    @staticmethod
    def merge_snippet_file(source_path: Path, target_path: Path) -> None:
        """Merge snippet definitions from one JSON file into another, source wins."""
        source = FileOperations.read_json_object(source_path)
        target = FileOperations.read_json_object(target_path)
        FileOperations.write_json_file(
            target_path, SettingsSync.merge_settings(target, source)
        )

    @staticmethod
    def sync_snippets(
        source_dir: Path, target_dir: Path, mode: SnippetMode = SnippetMode.MERGE
    ) -> int:
        """Sync ``source_dir`` into ``target_dir``.

        Replace mode swaps the whole folder and returns the number of files now
        in the target. Merge mode merges ``.json`` files key by key, copies
        every other file, and returns the number of source files processed.
        """
        if not source_dir.exists():
            raise SourceNotFoundError(f"Source snippets folder not found: {source_dir}")

        if SnippetMode(mode) is SnippetMode.REPLACE:
            FileOperations.replace_directory(source_dir, target_dir)
            count = len(FileOperations.list_files_recursive(target_dir))
            logger.debug(f"Replaced {target_dir} with {count} snippet files")
            return count

        source_files = FileOperations.list_files_recursive(source_dir)
        for rel_path in source_files:
            source_path = source_dir / rel_path
            target_path = target_dir / rel_path
            FileOperations.ensure_directory(target_path.parent)

            if source_path.suffix.lower() == ".json":
                SnippetsSync.merge_snippet_file(source_path, target_path)
            else:
                FileOperations.copy_file(source_path, target_path)

        logger.debug(f"Merged {len(source_files)} snippet files into {target_dir}")
        return len(source_files)
