"""Extension listing, export and sync through an editor's CLI."""

import logging
import re
from pathlib import Path
from typing import Callable, List, Optional, Sequence

from ..exceptions import (
    CliUnavailableError,
    ProcessFailure,
    SourceNotFoundError,
    VscShareError,
)
from ..models import Editor, ExtensionMode, SyncResult
from .process import ProcessRunner

logger = logging.getLogger(__name__)

ProgressCallback = Callable[[int, str], None]


def _split_lines(text: str) -> List[str]:
    return [line.strip() for line in re.split(r"\r?\n", text) if line.strip()]


class ExtensionSync:
    """Lists, installs and uninstalls extensions for an editor."""

    def __init__(self, runner: Optional[ProcessRunner] = None):
        self.runner = runner or ProcessRunner()

    def list_installed(self, editor: Editor) -> Optional[List[str]]:
        """List installed extension IDs, or None if the CLI is unavailable."""
        output = self.runner.run(editor, ["--list-extensions"], ignore_error=True)
        if output is None:
            return None

        extensions = _split_lines(output)
        logger.debug(f"Found {len(extensions)} extensions for {editor.display_name}")
        return extensions

    def export_extensions(self, editor: Editor) -> List[str]:
        """Return the editor's installed extensions sorted ascending."""
        extensions = self.list_installed(editor)
        if extensions is None:
            raise CliUnavailableError(editor.display_name)
        return sorted(extensions)

    def install_extension(self, editor: Editor, extension_id: str) -> bool:
        """Install an extension, returning whether the CLI reported success."""
        output = self.runner.run(
            editor, ["--install-extension", extension_id], ignore_error=True
        )
        if output is None:
            logger.debug(f"Failed to install {extension_id} for {editor.display_name}")
            return False

        logger.debug(f"Installed {extension_id} for {editor.display_name}")
        return True

    def uninstall_extension(self, editor: Editor, extension_id: str) -> bool:
        """Uninstall an extension, returning whether the CLI reported success."""
        try:
            self.runner.run(editor, ["--uninstall-extension", extension_id])
        except ProcessFailure as e:
            logger.warning(
                f"Failed to uninstall {extension_id} from {editor.display_name}: {e}"
            )
            return False

        logger.debug(f"Uninstalled {extension_id} from {editor.display_name}")
        return True

    def sync_extensions(
        self,
        editor: Editor,
        desired: Sequence[str],
        mode: ExtensionMode = ExtensionMode.ADDITIVE,
        on_progress: Optional[ProgressCallback] = None,
    ) -> SyncResult:
        """Bring an editor's extensions in line with ``desired``.

        In strict mode, installed extensions missing from ``desired`` are
        removed first. Every desired extension is then installed in order;
        individual failures are collected rather than raised.
        """
        current = self.list_installed(editor)
        if current is None:
            raise CliUnavailableError(editor.display_name)

        result = SyncResult()

        if ExtensionMode(mode) is ExtensionMode.STRICT:
            wanted = set(desired)
            to_remove = [ext for ext in current if ext not in wanted]
            logger.debug(
                f"Removing {len(to_remove)} extensions from {editor.display_name}"
            )
            for extension_id in to_remove:
                if not self.uninstall_extension(editor, extension_id):
                    result.uninstall_failed.append(extension_id)

        for index, extension_id in enumerate(desired):
            if on_progress:
                on_progress(index, extension_id)

            if self.install_extension(editor, extension_id):
                result.synced += 1
            else:
                result.failed.append(extension_id)

        return result

    @staticmethod
    def write_extensions_file(file_path: Path, extensions: Sequence[str]) -> int:
        """Write one extension ID per line, sorted. Returns the number written."""
        ordered = sorted(extensions)
        content = "\n".join(ordered) + ("\n" if ordered else "")

        try:
            file_path.parent.mkdir(parents=True, exist_ok=True)
            file_path.write_text(content, encoding="utf-8")
        except OSError as e:
            raise VscShareError(f"Failed to write {file_path}: {e}")

        logger.debug(f"Wrote {len(ordered)} extensions to {file_path}")
        return len(ordered)

    @staticmethod
    def read_extensions_file(file_path: Path) -> List[str]:
        """Read an extensions file written by ``write_extensions_file``."""
        if not file_path.exists():
            raise SourceNotFoundError(f"Extensions file not found: {file_path}")

        try:
            return _split_lines(file_path.read_text(encoding="utf-8-sig"))
        except (OSError, UnicodeDecodeError) as e:
            raise VscShareError(f"Failed to read {file_path}: {e}")
