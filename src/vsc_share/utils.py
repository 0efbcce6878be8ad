"""General utility functions for vsc-share."""

import logging
import os
import platform
from pathlib import Path

from rich.console import Console
from rich.logging import RichHandler
from rich.progress import Progress, SpinnerColumn, TextColumn

console = Console()


def setup_logging(verbose: bool = False) -> None:
    """Set up logging configuration."""
    level = logging.DEBUG if verbose else logging.INFO

    logging.basicConfig(
        level=level,
        format="%(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(console=console, rich_tracebacks=True)],
    )


def spinner(output: Console) -> Progress:
    """A transient spinner for work of unknown length."""
    return Progress(
        SpinnerColumn(),
        TextColumn("[progress.description]{task.description}"),
        console=output,
        transient=True,
    )


def get_platform_config_dir() -> Path:
    """Get the platform-specific configuration directory."""
    system = platform.system()

    if system == "Darwin":  # macOS
        return Path.home() / "Library" / "Application Support"
    elif system == "Windows":
        appdata = os.environ.get("APPDATA")
        return Path(appdata) if appdata else Path.home() / "AppData" / "Roaming"
    else:  # Linux and others
        xdg_config = os.environ.get("XDG_CONFIG_HOME")
        return Path(xdg_config) if xdg_config else Path.home() / ".config"


def get_vsc_share_config_path() -> Path:
    """Get the path where vsc-share stores its own configuration."""
    return get_platform_config_dir() / "vsc-share" / "config.json"


def resolve_path(path_str: str) -> Path:
    """Resolve a path string to an absolute Path object."""
    return Path(path_str).expanduser().resolve()


def install_hint() -> str:
    """Platform-specific advice for putting an editor CLI on PATH."""
    system = platform.system()

    if system == "Darwin":
        return (
            "Open the editor, run 'Shell Command: Install <command> command in PATH' "
            "from the Command Palette, then try again."
        )
    elif system == "Windows":
        return (
            "Re-run the editor installer with 'Add to PATH' checked, "
            "then open a new terminal."
        )
    return (
        "Install at least one supported editor and make sure its CLI is on your PATH."
    )
