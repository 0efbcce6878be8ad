"""Tests for utility helpers."""

from rich.console import Console
from rich.progress import SpinnerColumn

from vsc_share.utils import resolve_path, spinner


def test_spinner_is_transient_on_given_console():
    """Test that the spinner renders to the console it was given and clears itself."""
    output = Console()

    progress = spinner(output)

    assert progress.console is output
    assert progress.live.transient
    assert isinstance(progress.columns[0], SpinnerColumn)


def test_resolve_path_expands_home(monkeypatch, temp_dir):
    """Test that ~ in a configured path is expanded."""
    monkeypatch.setenv("HOME", str(temp_dir))

    assert resolve_path("~/extensions.txt") == (temp_dir / "extensions.txt").resolve()
