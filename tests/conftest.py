"""Pytest configuration and shared fixtures."""

import json
import tempfile
from pathlib import Path

import pytest

from vsc_share.config import ConfigManager
from vsc_share.core.editors import EditorLocator
from vsc_share.exceptions import ProcessFailure
from vsc_share.models import Editor, VscShareConfig


class FakeRunner:
    """Stands in for ProcessRunner, keeping an in-memory extension list per editor."""

    def __init__(
        self,
        installed=None,
        fail_install=(),
        fail_uninstall=(),
        unavailable=(),
    ):
        self.installed = {k: list(v) for k, v in (installed or {}).items()}
        self.fail_install = set(fail_install)
        self.fail_uninstall = set(fail_uninstall)
        self.unavailable = set(unavailable)
        self.calls = []

    def run(self, editor, args, capture_output=True, ignore_error=False):
        self.calls.append((editor.id, list(args)))

        if editor.id in self.unavailable:
            return self._fail(editor, args, ignore_error)

        current = self.installed.setdefault(editor.id, [])
        operation = args[0]

        if operation == "--list-extensions":
            return "".join(f"{ext}\n" for ext in current)

        extension_id = args[1]
        if operation == "--install-extension":
            if extension_id in self.fail_install:
                return self._fail(editor, args, ignore_error)
            if extension_id not in current:
                current.append(extension_id)
            return f"Extension '{extension_id}' was successfully installed.\n"

        if operation == "--uninstall-extension":
            if extension_id in self.fail_uninstall:
                return self._fail(editor, args, ignore_error)
            if extension_id in current:
                current.remove(extension_id)
            return ""

        raise AssertionError(f"Unexpected CLI call: {args}")

    def _fail(self, editor, args, ignore_error):
        if ignore_error:
            return None
        raise ProcessFailure([editor.command, *args], 1, "boom")

    def calls_for(self, operation, editor_id=None):
        """Extension IDs passed to ``operation``, in call order."""
        return [
            args[1]
            for called_id, args in self.calls
            if args[0] == operation and (editor_id is None or called_id == editor_id)
        ]


@pytest.fixture
def temp_dir():
    """Create a temporary directory for tests."""
    with tempfile.TemporaryDirectory() as tmpdir:
        yield Path(tmpdir)


@pytest.fixture
def fake_runner_factory():
    """Return the FakeRunner class so tests can build one with their own state."""
    return FakeRunner


@pytest.fixture
def code_editor():
    return Editor(id="code", display_name="VS Code", command="code")


@pytest.fixture
def cursor_editor():
    return Editor(id="cursor", display_name="Cursor", command="cursor")


@pytest.fixture
def windsurf_editor():
    return Editor(id="windsurf", display_name="Windsurf", command="windsurf")


@pytest.fixture
def editor_dirs(temp_dir):
    """User directories for three editors, the source (code) pre-populated."""
    dirs = {
        "code": temp_dir / "Code" / "User",
        "cursor": temp_dir / "Cursor" / "User",
        "windsurf": temp_dir / "Windsurf" / "User",
    }

    source = dirs["code"]
    (source / "snippets").mkdir(parents=True)
    (source / "settings.json").write_text(
        '{\n  // editor font\n  "editor.fontSize": 14,\n  "files.autoSave": "afterDelay",\n}\n'
    )
    (source / "keybindings.json").write_text(
        json.dumps([{"key": "ctrl+k", "command": "workbench.action.quickOpen"}])
    )
    (source / "snippets" / "python.json").write_text(
        json.dumps({"main": {"prefix": "main", "body": ["if __name__ == '__main__':"]}})
    )

    target = dirs["cursor"]
    target.mkdir(parents=True)
    (target / "settings.json").write_text('{"editor.fontSize": 12, "cursor.ai": true}')

    return dirs


@pytest.fixture
def locator(temp_dir, editor_dirs, code_editor, cursor_editor, windsurf_editor):
    """An EditorLocator where code and cursor are installed and windsurf is not."""
    bin_dir = temp_dir / "bin"
    bin_dir.mkdir()
    for command in ("code", "cursor"):
        (bin_dir / command).write_text("")

    return EditorLocator(
        editors=[cursor_editor, code_editor, windsurf_editor],
        user_dirs=editor_dirs,
        executables={
            "code": bin_dir / "code",
            "cursor": bin_dir / "cursor",
            "windsurf": bin_dir / "windsurf",
        },
    )


@pytest.fixture
def config_manager(temp_dir):
    """A ConfigManager backed by a config file inside the temp directory."""
    manager = ConfigManager(temp_dir / "config" / "config.json")
    manager.save_config(VscShareConfig(extensions_file="extensions.txt"))
    return manager
