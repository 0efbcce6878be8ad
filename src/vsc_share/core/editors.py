"""Registry of supported editors and resolution of their CLIs and user directories."""

import logging
import os
import platform
import shutil
from pathlib import Path
from typing import Dict, List, Optional, Sequence

from ..models import Editor, VscShareConfig
from ..utils import get_platform_config_dir

logger = logging.getLogger(__name__)

SETTINGS_FILE = "settings.json"
KEYBINDINGS_FILE = "keybindings.json"
SNIPPETS_DIR = "snippets"

# Sorted alphabetically by display name.
EDITORS: List[Editor] = [
    Editor(id="antigravity", display_name="Antigravity", command="antigravity"),
    Editor(id="cursor", display_name="Cursor", command="cursor"),
    Editor(id="kiro", display_name="Kiro", command="kiro"),
    Editor(id="trae", display_name="Trae", command="trae"),
    Editor(id="code", display_name="VS Code", command="code"),
    Editor(id="windsurf", display_name="Windsurf", command="windsurf"),
]

# Folder names under the platform config dir, most common first.
EDITOR_DATA_DIRS: Dict[str, List[str]] = {
    "antigravity": ["Antigravity"],
    "code": ["Code", "Code - OSS"],
    "cursor": ["Cursor"],
    "kiro": ["Kiro"],
    "trae": ["Trae"],
    "windsurf": ["Windsurf"],
}

# macOS app bundle names, used when the CLI isn't on PATH.
_MACOS_BUNDLES: Dict[str, str] = {
    "antigravity": "Antigravity.app",
    "code": "Visual Studio Code.app",
    "cursor": "Cursor.app",
    "kiro": "Kiro.app",
    "trae": "Trae.app",
    "windsurf": "Windsurf.app",
}

# Windows install folder names under Program Files / LocalAppData\Programs.
_WINDOWS_FOLDERS: Dict[str, str] = {
    "antigravity": "Antigravity",
    "code": "Microsoft VS Code",
    "cursor": "cursor",
    "kiro": "Kiro",
    "trae": "Trae",
    "windsurf": "Windsurf",
}


class EditorLocator:
    """Finds editor CLIs and per-user configuration paths."""

    def __init__(
        self,
        editors: Optional[Sequence[Editor]] = None,
        user_dirs: Optional[Dict[str, Path]] = None,
        executables: Optional[Dict[str, Path]] = None,
    ):
        self.editors = list(editors) if editors is not None else list(EDITORS)
        self.user_dirs = dict(user_dirs or {})
        self.executables = dict(executables or {})

    @classmethod
    def from_config(cls, config: VscShareConfig) -> "EditorLocator":
        """Build a locator from the built-in registry plus configured overrides."""
        known = {editor.id for editor in EDITORS}
        extras = [e for e in config.extra_editors if e.id not in known]
        return cls(
            editors=[*EDITORS, *extras],
            user_dirs=config.user_dirs,
            executables=config.executables,
        )

    def find(self, editor_id: str) -> Optional[Editor]:
        """Look up a registered editor by id."""
        for editor in self.editors:
            if editor.id == editor_id:
                return editor
        return None

    @staticmethod
    def get_fallback_executables(editor: Editor) -> List[Path]:
        """Well-known install locations of an editor's CLI for this platform."""
        system = platform.system()
        home = Path.home()

        if system == "Darwin":
            bundle = _MACOS_BUNDLES.get(editor.id, f"{editor.display_name}.app")
            bin_dir = Path("Contents") / "Resources" / "app" / "bin" / editor.command
            return [
                Path("/Applications") / bundle / bin_dir,
                home / "Applications" / bundle / bin_dir,
            ]

        elif system == "Windows":
            folder = _WINDOWS_FOLDERS.get(editor.id, editor.display_name)
            roots = [
                Path(os.environ.get("LOCALAPPDATA", home / "AppData" / "Local"))
                / "Programs",
                Path(os.environ.get("ProgramFiles", "C:/Program Files")),
            ]
            return [root / folder / "bin" / f"{editor.command}.cmd" for root in roots]

        return [
            Path("/usr/bin") / editor.command,
            Path("/usr/local/bin") / editor.command,
            Path("/snap/bin") / editor.command,
            home / ".local" / "bin" / editor.command,
        ]

    def find_executable(self, editor: Editor) -> Optional[Path]:
        """Locate the editor CLI, or None if it can't be found."""
        override = self.executables.get(editor.id)
        if override is not None:
            return override if override.exists() else None

        on_path = shutil.which(editor.command)
        if on_path:
            return Path(on_path)

        for candidate in self.get_fallback_executables(editor):
            if candidate.exists():
                logger.debug(f"Found {editor.command} outside PATH at {candidate}")
                return candidate

        return None

    def resolve_command(self, editor: Editor) -> str:
        """Return an invocable path for the editor CLI, or its bare command name."""
        executable = self.find_executable(editor)
        return str(executable) if executable else editor.command

    def is_installed(self, editor: Editor) -> bool:
        return self.find_executable(editor) is not None

    def detect_installed(self) -> List[Editor]:
        """Return the registered editors whose CLI can be found, in registry order."""
        found = [editor for editor in self.editors if self.is_installed(editor)]
        logger.debug(f"Detected editors: {', '.join(e.id for e in found) or 'none'}")
        return found

    def get_user_dir(self, editor: Editor, create_if_missing: bool = False) -> Path:
        """Get the editor's per-user configuration directory."""
        override = self.user_dirs.get(editor.id)
        if override is not None:
            selected = override
        else:
            base = get_platform_config_dir()
            names = EDITOR_DATA_DIRS.get(editor.id, [editor.display_name])
            candidates = [base / name / "User" for name in names]
            selected = next((p for p in candidates if p.exists()), candidates[0])

        if create_if_missing:
            selected.mkdir(parents=True, exist_ok=True)

        return selected

    def get_settings_path(self, editor: Editor, create_if_missing: bool = False) -> Path:
        return self.get_user_dir(editor, create_if_missing) / SETTINGS_FILE

    def get_keybindings_path(
        self, editor: Editor, create_if_missing: bool = False
    ) -> Path:
        return self.get_user_dir(editor, create_if_missing) / KEYBINDINGS_FILE

    def get_snippets_path(self, editor: Editor, create_if_missing: bool = False) -> Path:
        return self.get_user_dir(editor, create_if_missing) / SNIPPETS_DIR
