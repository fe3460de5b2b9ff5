"""Tab completer for the file manager shell.

The completer separates **what to complete** (pure logic, fully
testable) from **how to wire it** (readline integration in the REPL).

Readline is configured with ``>`` as the only word delimiter, so the
text being completed is a whole token, spaces included.  The first
token completes to a verb; later tokens complete to the names of
entries in the shell's CWD.
"""

from __future__ import annotations

import os
import readline
from typing import TYPE_CHECKING

from py_fm.commands import TOKEN_SEPARATOR

if TYPE_CHECKING:
    from py_fm.shell import Shell


class Completer:
    """Context-aware tab completer for the file manager shell."""

    def __init__(self, shell: Shell) -> None:
        """Create a completer attached to a shell instance."""
        self._shell = shell

    def complete(self, text: str, state: int) -> str | None:
        """Readline callback — return the *state*-th candidate for *text*.

        Args:
            text: The partial token being completed.
            state: Index into the candidate list (0, 1, 2, …).

        Returns:
            The candidate at *state*, or ``None`` when exhausted.

        """
        line = readline.get_line_buffer()
        candidates = self.completions(text, line)
        if state < len(candidates):
            return candidates[state]
        return None

    def completions(self, text: str, line: str) -> list[str]:
        """Return completion candidates based on context.

        Leading whitespace in *text* is kept on every candidate so that
        readline replaces the token exactly as typed.

        Args:
            text: The partial token under the cursor.
            line: The full input line so far.

        Returns:
            Sorted list of matching candidates.

        """
        prefix = text.lstrip()
        padding = text[: len(text) - len(prefix)]

        if TOKEN_SEPARATOR not in line:
            names = self._shell.command_names
        else:
            names = self._entry_names()

        return sorted(padding + name for name in names if name.startswith(prefix))

    def _entry_names(self) -> list[str]:
        """List the CWD, marking directories with a trailing separator."""
        cwd = self._shell.paths.cwd
        try:
            with os.scandir(cwd) as it:
                return [
                    entry.name + self._shell.paths.separator if entry.is_dir() else entry.name
                    for entry in it
                ]
        except OSError:
            return []
