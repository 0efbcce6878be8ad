"""Implementation of the share command."""

import logging
from pathlib import Path
from typing import Any, Dict, List, Optional, Sequence

from rich.console import Console
from rich.prompt import Confirm, Prompt

from ..config import ConfigManager
from ..core.editors import EditorLocator
from ..core.extensions import ExtensionSync
from ..core.keybindings import KeybindingsSync
from ..core.process import ProcessRunner
from ..core.settings import SettingsSync
from ..core.snippets import SnippetsSync
from ..exceptions import NoEditorsError, SourceNotFoundError, VscShareError
from ..models import (
    CategoryOutcome,
    Editor,
    EditorReport,
    ExtensionMode,
    SnippetMode,
    SyncCategory,
)
from ..utils import install_hint, resolve_path, spinner

logger = logging.getLogger(__name__)
console = Console()

CATEGORY_LABELS = {
    SyncCategory.EXTENSIONS: "Extensions",
    SyncCategory.SETTINGS: "settings.json",
    SyncCategory.SNIPPETS: "Snippets",
    SyncCategory.KEYBINDINGS: "keybindings.json",
}


class ShareCommand:
    """Shares editor configuration from one source editor to several targets."""

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

    def run(
        self,
        source_id: Optional[str] = None,
        target_ids: Optional[Sequence[str]] = None,
        categories: Optional[Sequence[SyncCategory]] = None,
        extension_mode: Optional[ExtensionMode] = None,
        snippet_mode: Optional[SnippetMode] = None,
        extensions_file: Optional[Path] = None,
        from_file: Optional[Path] = None,
        assume_yes: bool = False,
    ) -> List[EditorReport]:
        """Execute the share command and return one report per target editor."""
        console.print("\n[bold]Share editor profile[/bold]\n")

        available = self._detect_editors()
        source = self._select_source(available, source_id, assume_yes)
        extensions_path = extensions_file or resolve_path(self.config.extensions_file)

        candidates = [e for e in available if e.id != source.id]
        if not candidates:
            console.print("No other editors to sync to. Export only.\n")
            self._export_only(source, extensions_path)
            return []

        selected = self._select_categories(categories, assume_yes)
        targets = self._select_targets(candidates, target_ids, assume_yes)

        if SyncCategory.EXTENSIONS in selected:
            extension_mode = self._select_mode(
                "Extension mode",
                ExtensionMode,
                extension_mode,
                self.config.default_extension_mode,
                assume_yes,
            )
        if SyncCategory.SNIPPETS in selected:
            snippet_mode = self._select_mode(
                "Snippet mode",
                SnippetMode,
                snippet_mode,
                self.config.default_snippet_mode,
                assume_yes,
            )

        source_data = self._load_source_data(
            source, selected, extensions_path, from_file
        )
        usable = [c for c in selected if c in source_data]
        if not usable:
            raise VscShareError(
                f"Nothing could be read from {source.display_name}; aborting."
            )

        reports = []
        for editor in targets:
            reports.append(
                self._sync_editor(
                    editor, usable, source_data, extension_mode, snippet_mode
                )
            )

        for report in reports:
            if report.failed_categories:
                failed = ", ".join(c.value for c in report.failed_categories)
                console.print(
                    f"[yellow]{report.editor.display_name}: {failed} failed.[/yellow]"
                )

        console.print("[bold green]✔ Sync complete.[/bold green]\n")
        return reports

    def _detect_editors(self) -> List[Editor]:
        """Find supported editors whose CLI is available."""
        with spinner(console) as progress:
            progress.add_task("Detecting installed editors...", total=None)
            available = self.locator.detect_installed()

        if not available:
            raise NoEditorsError(f"No supported editors found. {install_hint()}")

        names = ", ".join(e.display_name for e in available)
        console.print(f"[green]✓[/green] Found {len(available)} editor(s): {names}\n")
        return available

    def _select_source(
        self, available: List[Editor], source_id: Optional[str], assume_yes: bool
    ) -> Editor:
        """Resolve or prompt for the editor to share from."""
        if source_id is None:
            if assume_yes:
                raise VscShareError("A source editor (--from) is required with --yes")
            source_id = self._prompt_editor("Share from", available)

        for editor in available:
            if editor.id == source_id:
                return editor

        raise VscShareError(
            f"Editor '{source_id}' is not installed. "
            f"Available editors: {', '.join(e.id for e in available)}"
        )

    def _select_categories(
        self, categories: Optional[Sequence[SyncCategory]], assume_yes: bool
    ) -> List[SyncCategory]:
        """Resolve or prompt for what to share, in run order."""
        if categories:
            chosen = {SyncCategory(c) for c in categories}
        elif assume_yes:
            chosen = set(self.config.default_categories)
        else:
            defaults = set(self.config.default_categories)
            chosen = {
                category
                for category in SyncCategory
                if Confirm.ask(
                    f"Share {CATEGORY_LABELS[category]}?",
                    default=category in defaults,
                    console=console,
                )
            }

        if not chosen:
            raise VscShareError("Select at least one item to share.")

        return [category for category in SyncCategory if category in chosen]

    def _select_targets(
        self,
        candidates: List[Editor],
        target_ids: Optional[Sequence[str]],
        assume_yes: bool,
    ) -> List[Editor]:
        """Resolve or prompt for the editors to sync to."""
        if target_ids:
            by_id = {e.id: e for e in candidates}
            unknown = [t for t in target_ids if t not in by_id]
            if unknown:
                raise VscShareError(
                    f"Cannot sync to: {', '.join(unknown)}. "
                    f"Available targets: {', '.join(by_id)}"
                )
            wanted = set(target_ids)
            return [e for e in candidates if e.id in wanted]

        if assume_yes:
            return list(candidates)

        targets = [
            editor
            for editor in candidates
            if Confirm.ask(
                f"Sync to {editor.display_name}?", default=False, console=console
            )
        ]
        if not targets:
            raise VscShareError("Select at least one editor to sync to.")
        return targets

    def _select_mode(self, label, mode_type, value, default, assume_yes):
        """Resolve or prompt for a mode enum value."""
        if value is not None:
            return mode_type(value)
        if assume_yes:
            return mode_type(default)

        answer = Prompt.ask(
            label,
            choices=[m.value for m in mode_type],
            default=mode_type(default).value,
            console=console,
        )
        return mode_type(answer)

    def _prompt_editor(self, label: str, editors: List[Editor]) -> str:
        for editor in editors:
            console.print(f"  [cyan]{editor.id:<12}[/cyan] {editor.display_name}")
        return Prompt.ask(
            label,
            choices=[e.id for e in editors],
            default=editors[0].id,
            console=console,
        )

    def _export_only(self, source: Editor, extensions_path: Path) -> None:
        extensions = self.extension_sync.export_extensions(source)
        count = ExtensionSync.write_extensions_file(extensions_path, extensions)
        console.print(
            f"[green]✓[/green] Exported {count} extensions to {extensions_path}\n"
        )

    def _load_source_data(
        self,
        source: Editor,
        categories: List[SyncCategory],
        extensions_path: Path,
        from_file: Optional[Path],
    ) -> Dict[SyncCategory, Any]:
        """Read everything to share from the source editor once, up front.

        A category whose source can't be read is reported and left out.
        """
        data: Dict[SyncCategory, Any] = {}

        for category in categories:
            try:
                if category is SyncCategory.EXTENSIONS:
                    data[category] = self._load_desired_extensions(
                        source, extensions_path, from_file
                    )
                elif category is SyncCategory.SETTINGS:
                    data[category] = SettingsSync.read_source_settings(
                        self.locator.get_settings_path(source)
                    )
                elif category is SyncCategory.KEYBINDINGS:
                    data[category] = KeybindingsSync.read_source_keybindings(
                        self.locator.get_keybindings_path(source)
                    )
                elif category is SyncCategory.SNIPPETS:
                    snippets_dir = self.locator.get_snippets_path(source)
                    if not snippets_dir.is_dir():
                        raise SourceNotFoundError(
                            f"Source snippets folder not found: {snippets_dir}"
                        )
                    data[category] = snippets_dir

            except VscShareError as e:
                console.print(
                    f"[red]✗ {source.display_name} {category.value}:[/red] {e}"
                )
                logger.debug(f"Could not read source {category.value}", exc_info=True)

        return data

    def _load_desired_extensions(
        self, source: Editor, extensions_path: Path, from_file: Optional[Path]
    ) -> List[str]:
        if from_file is not None:
            desired = ExtensionSync.read_extensions_file(from_file)
            console.print(
                f"[green]✓[/green] Read {len(desired)} extensions from {from_file}"
            )
            return desired

        with spinner(console) as progress:
            progress.add_task(
                f"Exporting extensions from {source.display_name}...", total=None
            )
            exported = self.extension_sync.export_extensions(source)

        count = ExtensionSync.write_extensions_file(extensions_path, exported)
        console.print(f"[green]✓[/green] Exported {count} extensions to {extensions_path}")
        return ExtensionSync.read_extensions_file(extensions_path)

    def _sync_editor(
        self,
        editor: Editor,
        categories: List[SyncCategory],
        source_data: Dict[SyncCategory, Any],
        extension_mode: Optional[ExtensionMode],
        snippet_mode: Optional[SnippetMode],
    ) -> EditorReport:
        """Apply every category to one target, isolating failures per category."""
        console.print(f"\n[bold]{editor.display_name}[/bold]")
        report = EditorReport(editor=editor)

        for category in categories:
            try:
                if category is SyncCategory.EXTENSIONS:
                    outcome = self._sync_extensions(
                        editor,
                        source_data[category],
                        extension_mode or self.config.default_extension_mode,
                    )
                elif category is SyncCategory.SETTINGS:
                    outcome = self._sync_settings(editor, source_data[category])
                elif category is SyncCategory.SNIPPETS:
                    outcome = self._sync_snippets(
                        editor,
                        source_data[category],
                        snippet_mode or self.config.default_snippet_mode,
                    )
                else:
                    outcome = self._sync_keybindings(editor, source_data[category])

            except (VscShareError, OSError) as e:
                console.print(
                    f"  [red]✗ {editor.display_name} {category.value}:[/red] {e}"
                )
                logger.debug(f"{category.value} failed for {editor.id}", exc_info=True)
                outcome = CategoryOutcome(
                    category=category, success=False, message=str(e)
                )

            report.outcomes.append(outcome)

        return report

    def _sync_extensions(
        self, editor: Editor, desired: List[str], mode: ExtensionMode
    ) -> CategoryOutcome:
        total = len(desired)
        name = editor.display_name

        with spinner(console) as progress:
            task = progress.add_task(f"{name}: Installing extensions...", total=None)

            def on_progress(index: int, extension_id: str) -> None:
                progress.update(
                    task,
                    description=f"{name}: [{index + 1}/{total}] Installing {extension_id}",
                )

            result = self.extension_sync.sync_extensions(
                editor, desired, mode, on_progress
            )

        parts = [f"[green]{result.synced} synced[/green]"]
        if result.failed:
            parts.append(f"[red]{len(result.failed)} failed[/red]")
        console.print(f"  [green]✓[/green] Extensions: {', '.join(parts)}")
        if result.failed:
            console.print(f"      [red]Failed:[/red] {', '.join(result.failed)}")
        if result.uninstall_failed:
            console.print(
                f"      [yellow]Could not remove:[/yellow] "
                f"{', '.join(result.uninstall_failed)}"
            )

        return CategoryOutcome(
            category=SyncCategory.EXTENSIONS,
            success=True,
            message=f"{result.synced} synced, {len(result.failed)} failed",
            result=result,
        )

    def _sync_settings(self, editor: Editor, source_settings: Dict) -> CategoryOutcome:
        target_path = self.locator.get_settings_path(editor, create_if_missing=True)
        SettingsSync.sync_settings(source_settings, target_path)
        console.print(f"  [green]✓[/green] settings.json merged ({target_path})")
        return CategoryOutcome(
            category=SyncCategory.SETTINGS,
            success=True,
            message=f"{len(source_settings)} settings merged",
        )

    def _sync_snippets(
        self, editor: Editor, source_dir: Path, mode: SnippetMode
    ) -> CategoryOutcome:
        target_dir = self.locator.get_snippets_path(editor, create_if_missing=True)
        count = SnippetsSync.sync_snippets(source_dir, target_dir, mode)
        verb = "replaced" if SnippetMode(mode) is SnippetMode.REPLACE else "merged"
        console.print(f"  [green]✓[/green] Snippets {verb}: {count} file(s)")
        return CategoryOutcome(
            category=SyncCategory.SNIPPETS,
            success=True,
            message=f"{count} snippet file(s) {verb}",
        )

    def _sync_keybindings(
        self, editor: Editor, source_keybindings: List
    ) -> CategoryOutcome:
        target_path = self.locator.get_keybindings_path(editor, create_if_missing=True)
        merged = KeybindingsSync.sync_keybindings(source_keybindings, target_path)
        console.print(
            f"  [green]✓[/green] keybindings.json merged ({len(merged)} bindings)"
        )
        return CategoryOutcome(
            category=SyncCategory.KEYBINDINGS,
            success=True,
            message=f"{len(merged)} keybindings",
        )
