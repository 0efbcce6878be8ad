"""Tests for SettingsSync."""

import json

import pytest

from vsc_share.core.settings import SettingsSync
from vsc_share.exceptions import InvalidShapeError, ParseError, SourceNotFoundError


class TestSettingsSync:
    """Test class for settings merging."""

    def test_source_wins_and_target_keys_kept(self, temp_dir):
        """Test that shared keys take the source value."""
        target = temp_dir / "settings.json"
        target.write_text('{"a": 2, "b": 3}')

        merged = SettingsSync.sync_settings({"a": 1}, target)

        assert merged == {"a": 1, "b": 3}
        assert json.loads(target.read_text()) == {"a": 1, "b": 3}

    def test_empty_source_keeps_target_content(self, temp_dir):
        """Test that merging nothing leaves the values unchanged but rewrites the file."""
        target = temp_dir / "settings.json"
        target.write_text('{\n  // keep me\n  "a": 2,\n}')

        merged = SettingsSync.sync_settings({}, target)

        assert merged == {"a": 2}
        assert target.read_text() == '{\n  "a": 2\n}\n'

    def test_nested_objects_replaced_not_merged(self, temp_dir):
        """Test that the merge is shallow."""
        target = temp_dir / "settings.json"
        target.write_text('{"[python]": {"editor.tabSize": 4, "editor.rulers": [88]}}')

        merged = SettingsSync.sync_settings({"[python]": {"editor.tabSize": 2}}, target)

        assert merged == {"[python]": {"editor.tabSize": 2}}

    def test_missing_target_created(self, temp_dir):
        """Test that a missing target is treated as empty and created with parents."""
        target = temp_dir / "Cursor" / "User" / "settings.json"

        SettingsSync.sync_settings({"a": 1}, target)

        assert target.read_text() == '{\n  "a": 1\n}\n'

    def test_idempotent(self, temp_dir):
        """Test that syncing twice equals syncing once."""
        target = temp_dir / "settings.json"
        target.write_text('{"b": 3}')

        SettingsSync.sync_settings({"a": 1}, target)
        once = target.read_text()
        SettingsSync.sync_settings({"a": 1}, target)

        assert target.read_text() == once

    def test_target_key_order_preserved(self, temp_dir):
        """Test that existing keys keep their position and new keys are appended."""
        target = temp_dir / "settings.json"
        target.write_text('{"z": 1, "a": 2}')

        merged = SettingsSync.sync_settings({"m": 3, "z": 9}, target)

        assert list(merged) == ["z", "a", "m"]

    def test_malformed_target(self, temp_dir):
        """Test that a malformed target is an error, not silently replaced."""
        target = temp_dir / "settings.json"
        target.write_text('{"a": ')

        with pytest.raises(ParseError):
            SettingsSync.sync_settings({"a": 1}, target)

        assert target.read_text() == '{"a": '

    def test_target_not_an_object(self, temp_dir):
        """Test that a non-object target is rejected."""
        target = temp_dir / "settings.json"
        target.write_text("[]")

        with pytest.raises(InvalidShapeError):
            SettingsSync.sync_settings({"a": 1}, target)

    def test_source_not_an_object(self, temp_dir):
        """Test that a non-object source is rejected."""
        with pytest.raises(InvalidShapeError):
            SettingsSync.sync_settings(["a"], temp_dir / "settings.json")

    def test_read_source_missing(self, temp_dir):
        """Test reading a source settings file that doesn't exist."""
        with pytest.raises(SourceNotFoundError, match="Source settings not found"):
            SettingsSync.read_source_settings(temp_dir / "settings.json")
