"""Main CLI application for vsc-share."""

import json
from pathlib import Path
from typing import List, Optional

import typer
from rich.console import Console
from rich.syntax import Syntax
from rich.table import Table

from . import __version__
from .config import ConfigManager
from .core.editors import EditorLocator
from .exceptions import ConfigError, VscShareError
from .models import ExtensionMode, SnippetMode, SyncCategory, VscShareConfig
from .utils import install_hint, setup_logging

app = typer.Typer(
    name="vsc-share",
    help="Share extensions, settings, snippets and keybindings between VSCode-like editors",
    rich_markup_mode="rich",
    no_args_is_help=True,
)

console = Console()

# Set by the main callback, read by the commands.
state = {"config_path": None}


def version_callback(value: bool) -> None:
    """Show version information."""
    if value:
        console.print(f"vsc-share version {__version__}")
        raise typer.Exit()


def _config_manager() -> ConfigManager:
    return ConfigManager(state["config_path"])


@app.callback()
def main(
    verbose: bool = typer.Option(
        False, "--verbose", "-v", help="Enable verbose output"
    ),
    config: Optional[Path] = typer.Option(
        None, "--config", help="Path to the vsc-share configuration file"
    ),
    version: Optional[bool] = typer.Option(
        None, "--version", callback=version_callback, help="Show version"
    ),
) -> None:
    """vsc-share: Share extensions, settings, snippets and keybindings between editors."""
    setup_logging(verbose)
    state["config_path"] = config


@app.command()
def share(
    source: Optional[str] = typer.Option(
        None, "--from", help="Id of the editor to share from (e.g. code)"
    ),
    targets: Optional[List[str]] = typer.Option(
        None, "--to", help="Id of an editor to sync to (can be used multiple times)"
    ),
    only: Optional[List[SyncCategory]] = typer.Option(
        None, "--only", help="What to share (can be used multiple times)"
    ),
    extension_mode: Optional[ExtensionMode] = typer.Option(
        None, "--extension-mode", help="additive keeps extras, strict removes them"
    ),
    snippet_mode: Optional[SnippetMode] = typer.Option(
        None, "--snippet-mode", help="merge snippet files or replace the folder"
    ),
    extensions_file: Optional[Path] = typer.Option(
        None, "--extensions-file", help="Where to write the exported extension list"
    ),
    from_file: Optional[Path] = typer.Option(
        None,
        "--from-file",
        help="Install extensions listed in this file instead of exporting them",
    ),
    yes: bool = typer.Option(
        False, "--yes", "-y", help="Don't prompt; use configured defaults"
    ),
) -> None:
    """Share configuration from one editor to others."""
    try:
        from .commands.share_cmd import ShareCommand

        share_command = ShareCommand(_config_manager())
        share_command.run(
            source_id=source,
            target_ids=targets,
            categories=only,
            extension_mode=extension_mode,
            snippet_mode=snippet_mode,
            extensions_file=extensions_file,
            from_file=from_file,
            assume_yes=yes,
        )

    except VscShareError as e:
        console.print(f"[red]Error:[/red] {e}")
        raise typer.Exit(1)
    except KeyboardInterrupt:
        console.print("\n[yellow]Share cancelled by user.[/yellow]")
        raise typer.Exit(1)


@app.command()
def export(
    editor: Optional[str] = typer.Argument(
        None, help="Id of the editor to export from (prompted if omitted)"
    ),
    output: Optional[Path] = typer.Option(
        None, "--output", "-o", help="File to write the extension list to"
    ),
) -> None:
    """Export an editor's installed extensions to a text file."""
    try:
        from .commands.export_cmd import ExportCommand

        export_command = ExportCommand(_config_manager())
        export_command.run(editor_id=editor, output=output)

    except VscShareError as e:
        console.print(f"[red]Error:[/red] {e}")
        raise typer.Exit(1)
    except KeyboardInterrupt:
        console.print("\n[yellow]Export cancelled by user.[/yellow]")
        raise typer.Exit(1)


@app.command()
def editors() -> None:
    """List supported editors and whether their CLI was found."""
    try:
        config = _config_manager().load_config()
        locator = EditorLocator.from_config(config)

        table = Table(title="Supported Editors")
        table.add_column("Id", style="cyan")
        table.add_column("Name", style="green")
        table.add_column("CLI", style="yellow")
        table.add_column("User Directory", style="dim")
        table.add_column("Status", style="magenta")

        found_any = False
        for editor in locator.editors:
            executable = locator.find_executable(editor)
            found_any = found_any or executable is not None
            table.add_row(
                editor.id,
                editor.display_name,
                str(executable) if executable else "Not found",
                str(locator.get_user_dir(editor)),
                "✓" if executable else "✗",
            )

        console.print(table)

        if not found_any:
            console.print(f"\n[yellow]{install_hint()}[/yellow]")

    except VscShareError as e:
        console.print(f"[red]Error:[/red] {e}")
        raise typer.Exit(1)


@app.command("config")
def show_config(
    init: bool = typer.Option(
        False, "--init", help="Write a configuration file with default values"
    ),
) -> None:
    """Show the configuration file location and current values."""
    try:
        config_manager = _config_manager()

        if init:
            if config_manager.config_path.exists():
                raise ConfigError(
                    f"Configuration file already exists: {config_manager.config_path}"
                )
            config_manager.save_config(VscShareConfig())
            console.print("[green]✓[/green] Wrote default configuration")

        config = config_manager.load_config()

        status = "" if config_manager.config_path.exists() else " [dim](defaults)[/dim]"
        console.print(f"Configuration file: [cyan]{config_manager.config_path}[/cyan]{status}")
        console.print(
            Syntax(
                json.dumps(config.model_dump(mode="json"), indent=2),
                "json",
                line_numbers=False,
                theme="monokai",
            )
        )

    except VscShareError as e:
        console.print(f"[red]Error:[/red] {e}")
        raise typer.Exit(1)


if __name__ == "__main__":
    app()
