"""Invocation of editor command-line programs."""

import logging
import os
import shutil
import subprocess
from typing import Callable, List, Optional

from ..exceptions import ProcessFailure
from ..models import Editor

logger = logging.getLogger(__name__)

_BATCH_SUFFIXES = (".cmd", ".bat")


def quote_shell_arg(arg: str) -> str:
    """Quote one argument for a shell command line.

    Arguments containing a space or a double quote are wrapped in double
    quotes, with embedded quotes doubled.
    """
    s = str(arg)
    if " " in s or '"' in s:
        return '"' + s.replace('"', '""') + '"'
    return s


def default_command_resolver(editor: Editor) -> str:
    """Resolve an editor's CLI via PATH, falling back to the bare command name."""
    return shutil.which(editor.command) or editor.command


class ProcessRunner:
    """Runs an editor's CLI and maps its exit status to success or failure."""

    def __init__(
        self,
        resolve_command: Optional[Callable[[Editor], str]] = None,
        timeout: Optional[float] = None,
    ):
        self.resolve_command = resolve_command or default_command_resolver
        self.timeout = timeout

    def build_command(self, editor: Editor, args: List[str]):
        """Return the value to hand to subprocess and whether it needs a shell."""
        program = self.resolve_command(editor)
        argv = [program, *args]

        # Batch shims on Windows can only be started through cmd.exe
        if os.name == "nt" and program.lower().endswith(_BATCH_SUFFIXES):
            return " ".join(quote_shell_arg(a) for a in argv), True

        return argv, False

    def run(
        self,
        editor: Editor,
        args: List[str],
        capture_output: bool = True,
        ignore_error: bool = False,
    ) -> Optional[str]:
        """Run the editor CLI with ``args``.

        Returns captured stdout (or an empty string when ``capture_output`` is
        false). On failure returns ``None`` if ``ignore_error`` is set, and
        raises ``ProcessFailure`` otherwise.
        """
        command, use_shell = self.build_command(editor, args)
        argv = [editor.command, *args]
        logger.debug(f"Running: {command}")

        try:
            result = subprocess.run(
                command,
                shell=use_shell,
                stdout=subprocess.PIPE if capture_output else subprocess.DEVNULL,
                stderr=subprocess.PIPE,
                text=True,
                encoding="utf-8",
                errors="replace",
                check=False,
                timeout=self.timeout,
            )
        except subprocess.TimeoutExpired:
            logger.debug(f"Timed out after {self.timeout}s: {command}")
            if ignore_error:
                return None
            raise ProcessFailure(argv, None, f"Timed out after {self.timeout}s")
        except OSError as e:
            logger.debug(f"Could not start {editor.command}: {e}")
            if ignore_error:
                return None
            raise ProcessFailure(argv, None, str(e))

        if result.returncode != 0:
            logger.debug(
                f"{editor.command} exited with {result.returncode}: {result.stderr.strip()}"
            )
            if ignore_error:
                return None
            raise ProcessFailure(argv, result.returncode, result.stderr or "")

        return result.stdout if capture_output else ""
