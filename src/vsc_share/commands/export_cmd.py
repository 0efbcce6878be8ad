"""Implementation of the export command."""

import logging
from pathlib import Path
from typing import Optional

from rich.console import Console
from rich.prompt import Prompt

from ..config import ConfigManager
from ..core.editors import EditorLocator
from ..core.extensions import ExtensionSync
from ..core.process import ProcessRunner
from ..exceptions import NoEditorsError, VscShareError
from ..models import Editor
from ..utils import install_hint, resolve_path, spinner

logger = logging.getLogger(__name__)
console = Console()


class ExportCommand:
    """Writes an editor's installed extensions to a text file."""

    def __init__(
        self,
        config_manager: ConfigManager,
        locator: Optional[EditorLocator] = None,
        runner: Optional[ProcessRunner] = None,
    ):
        self.config_manager = config_manager
        self.config = config_manager.load_config()
        self.locator = locator or EditorLocator.from_config(self.config)
        self.extension_sync = ExtensionSync(
            runner
            or ProcessRunner(self.locator.resolve_command, self.config.command_timeout)
        )

    def run(self, editor_id: Optional[str] = None, output: Optional[Path] = None) -> int:
        """Execute the export command and return the number of extensions written."""
        editor = self._select_editor(editor_id)
        output_path = output or resolve_path(self.config.extensions_file)

        with spinner(console) as progress:
            progress.add_task(
                f"Exporting extensions from {editor.display_name}...", total=None
            )
            extensions = self.extension_sync.export_extensions(editor)

        count = ExtensionSync.write_extensions_file(output_path, extensions)
        console.print(f"[green]✓[/green] Exported {count} extensions to {output_path}")
        return count

    def _select_editor(self, editor_id: Optional[str]) -> Editor:
        if editor_id is not None:
            editor = self.locator.find(editor_id)
            if editor is None:
                known = ", ".join(e.id for e in self.locator.editors)
                raise VscShareError(
                    f"Unknown editor '{editor_id}'. Known editors: {known}"
                )
            return editor

        available = self.locator.detect_installed()
        if not available:
            raise NoEditorsError(f"No supported editors found. {install_hint()}")
        if len(available) == 1:
            return available[0]

        for editor in available:
            console.print(f"  [cyan]{editor.id:<12}[/cyan] {editor.display_name}")
        chosen = Prompt.ask(
            "Export extensions from",
            choices=[e.id for e in available],
            default=available[0].id,
            console=console,
        )
        return next(e for e in available if e.id == chosen)
