"""Pydantic models for vsc-share configuration and data structures."""

from enum import Enum
from pathlib import Path
from typing import Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field


class ExtensionMode(str, Enum):
    """How extensions are applied to a target editor."""

    ADDITIVE = "additive"
    STRICT = "strict"


class SnippetMode(str, Enum):
    """How the snippets folder is applied to a target editor."""

    MERGE = "merge"
    REPLACE = "replace"


class SyncCategory(str, Enum):
    """A piece of editor state that can be shared. Declaration order is run order."""

    EXTENSIONS = "extensions"
    SETTINGS = "settings"
    SNIPPETS = "snippets"
    KEYBINDINGS = "keybindings"


class Editor(BaseModel):
    """A VSCode-like editor with an extension-management CLI."""

    model_config = ConfigDict(frozen=True)

    id: str = Field(..., description="Stable identifier, e.g. 'code'")
    display_name: str = Field(..., description="Human readable name")
    command: str = Field(..., description="CLI command name looked up on PATH")


class SyncResult(BaseModel):
    """Outcome of syncing extensions into one target editor."""

    synced: int = Field(0, description="Number of extensions installed successfully")
    failed: List[str] = Field(
        default_factory=list, description="Extension IDs that failed to install"
    )
    uninstall_failed: List[str] = Field(
        default_factory=list,
        description="Extension IDs that could not be removed in strict mode",
    )


class CategoryOutcome(BaseModel):
    """Result of one sync category for one target editor."""

    category: SyncCategory
    success: bool
    message: str = ""
    result: Optional[SyncResult] = None


class EditorReport(BaseModel):
    """All category outcomes for one target editor."""

    editor: Editor
    outcomes: List[CategoryOutcome] = Field(default_factory=list)

    @property
    def failed_categories(self) -> List[SyncCategory]:
        return [o.category for o in self.outcomes if not o.success]


class VscShareConfig(BaseModel):
    """Configuration for the vsc-share CLI tool itself."""

    default_extension_mode: ExtensionMode = Field(
        ExtensionMode.ADDITIVE, description="Extension mode used when not prompted"
    )
    default_snippet_mode: SnippetMode = Field(
        SnippetMode.MERGE, description="Snippet mode used when not prompted"
    )
    default_categories: List[SyncCategory] = Field(
        default_factory=lambda: [SyncCategory.EXTENSIONS],
        description="Categories shared when running non-interactively",
    )
    extensions_file: str = Field(
        "extensions.txt", description="File the exported extension list is written to"
    )
    command_timeout: Optional[float] = Field(
        None, description="Seconds before an editor CLI call is abandoned"
    )
    user_dirs: Dict[str, Path] = Field(
        default_factory=dict, description="Editor id -> user configuration directory"
    )
    executables: Dict[str, Path] = Field(
        default_factory=dict, description="Editor id -> CLI executable path"
    )
    extra_editors: List[Editor] = Field(
        default_factory=list, description="Editors added on top of the built-in list"
    )
