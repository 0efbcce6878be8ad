"""Tests for ProcessRunner and shell quoting."""

import subprocess
from unittest.mock import patch

import pytest

from vsc_share.core.process import ProcessRunner, quote_shell_arg
from vsc_share.exceptions import ProcessFailure


def completed(returncode=0, stdout="", stderr=""):
    return subprocess.CompletedProcess(
        args=[], returncode=returncode, stdout=stdout, stderr=stderr
    )


class TestQuoteShellArg:
    """Test class for quote_shell_arg."""

    def test_plain_argument_unchanged(self):
        """Test that arguments without spaces or quotes pass through."""
        assert quote_shell_arg("ms-python.python") == "ms-python.python"

    def test_argument_with_space_is_quoted(self):
        """Test that an argument containing a space is wrapped in quotes."""
        assert quote_shell_arg("C:/Program Files/code.cmd") == '"C:/Program Files/code.cmd"'

    def test_embedded_quotes_are_doubled(self):
        """Test that embedded double quotes are escaped by doubling."""
        assert quote_shell_arg('say "hi"') == '"say ""hi"""'


class TestProcessRunner:
    """Test class for ProcessRunner."""

    @pytest.fixture
    def runner(self):
        return ProcessRunner(resolve_command=lambda editor: f"/opt/bin/{editor.command}")

    def test_run_uses_argument_vector(self, runner, code_editor):
        """Test that the CLI is invoked without a shell."""
        with patch("vsc_share.core.process.subprocess.run") as mock_run:
            mock_run.return_value = completed(stdout="a.b\n")
            output = runner.run(code_editor, ["--install-extension", "my ext"])

        assert output == "a.b\n"
        args, kwargs = mock_run.call_args
        assert args[0] == ["/opt/bin/code", "--install-extension", "my ext"]
        assert kwargs["shell"] is False

    def test_non_zero_exit_raises_with_stderr(self, runner, code_editor):
        """Test that a failure carries the captured stderr."""
        with patch("vsc_share.core.process.subprocess.run") as mock_run:
            mock_run.return_value = completed(returncode=1, stderr="not found\n")
            with pytest.raises(ProcessFailure, match="not found") as exc_info:
                runner.run(code_editor, ["--install-extension", "x.y"])

        assert exc_info.value.returncode == 1

    def test_non_zero_exit_without_stderr(self, runner, code_editor):
        """Test the generic message when stderr is empty."""
        with patch("vsc_share.core.process.subprocess.run") as mock_run:
            mock_run.return_value = completed(returncode=3)
            with pytest.raises(ProcessFailure, match="Exit 3"):
                runner.run(code_editor, ["--list-extensions"])

    def test_ignore_error_returns_none(self, runner, code_editor):
        """Test that ignore_error turns a failure into None."""
        with patch("vsc_share.core.process.subprocess.run") as mock_run:
            mock_run.return_value = completed(returncode=1, stderr="boom")
            assert runner.run(code_editor, ["--list-extensions"], ignore_error=True) is None

    def test_missing_program(self, runner, code_editor):
        """Test that a program that can't be started is a failure."""
        with patch("vsc_share.core.process.subprocess.run") as mock_run:
            mock_run.side_effect = FileNotFoundError("No such file")
            assert runner.run(code_editor, ["--list-extensions"], ignore_error=True) is None
            with pytest.raises(ProcessFailure):
                runner.run(code_editor, ["--list-extensions"])

    def test_timeout_is_a_failure(self, code_editor):
        """Test that a configured timeout maps to ProcessFailure."""
        runner = ProcessRunner(resolve_command=lambda editor: "code", timeout=5)
        with patch("vsc_share.core.process.subprocess.run") as mock_run:
            mock_run.side_effect = subprocess.TimeoutExpired(cmd="code", timeout=5)
            with pytest.raises(ProcessFailure, match="Timed out"):
                runner.run(code_editor, ["--list-extensions"])

        assert mock_run.call_args.kwargs["timeout"] == 5

    def test_without_capture_returns_empty_string(self, runner, code_editor):
        """Test that stdout is discarded when capture_output is False."""
        with patch("vsc_share.core.process.subprocess.run") as mock_run:
            mock_run.return_value = completed(stdout=None)
            output = runner.run(code_editor, ["--install-extension", "a.b"], capture_output=False)

        assert output == ""
        assert mock_run.call_args.kwargs["stdout"] == subprocess.DEVNULL

    def test_windows_batch_shim_uses_quoted_shell_line(self, code_editor):
        """Test that .cmd shims run through the shell with quoted arguments."""
        runner = ProcessRunner(
            resolve_command=lambda editor: "C:/Program Files/VS Code/bin/code.cmd"
        )
        with patch("vsc_share.core.process.os.name", "nt"):
            command, use_shell = runner.build_command(
                code_editor, ["--install-extension", "a.b"]
            )

        assert use_shell is True
        assert command == '"C:/Program Files/VS Code/bin/code.cmd" --install-extension a.b'
