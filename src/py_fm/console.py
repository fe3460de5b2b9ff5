"""Console — the shell's single input reader and output writer.

Handlers prompt for missing arguments in the middle of a command, so the
same reader must serve both the main command prompt and those nested
prompts.  The console owns exactly one reader for the life of the
process; creating a fresh reader per prompt would drop whatever the
previous one had already buffered.

Two modes:
    - **Interactive** (no streams given) — lines come from ``input()``,
      which reads through the interpreter's one ``sys.stdin`` buffer and
      gives readline editing and tab completion.
    - **Scripted** (streams given) — lines come from the supplied text
      stream.  Tests pass ``io.StringIO`` objects as a scripted input
      provider.
"""

from __future__ import annotations

import sys
from typing import TYPE_CHECKING, TextIO

from py_fm.commands import Verb
from py_fm.config import ShellConfig

if TYPE_CHECKING:
    from collections.abc import Iterable


def format_help(verbs: Iterable[str], config: ShellConfig) -> str:
    """Lay out the help banner listing every verb.

    Args:
        verbs: The command names, in display order.
        config: Supplies the rule width, column width and column count.

    Returns:
        The banner text, without a trailing newline.

    """
    rule = "=" * config.banner_width
    names = list(verbs)
    rows = [
        "".join(f"{name:<{config.column_width}}" for name in names[i : i + config.columns])
        for i in range(0, len(names), config.columns)
    ]
    return "\n".join([rule, config.banner_title, rule, *rows, rule])


class Console:
    """Line-oriented terminal I/O shared by every component."""

    def __init__(
        self,
        *,
        stdin: TextIO | None = None,
        stdout: TextIO | None = None,
        config: ShellConfig | None = None,
    ) -> None:
        """Create a console.

        Args:
            stdin: Stream to read lines from.  None means interactive
                mode via ``input()``.
            stdout: Stream to write to.  Defaults to ``sys.stdout``.
            config: Banner layout; defaults to ``ShellConfig()``.

        """
        self._stdin = stdin
        self._stdout = stdout if stdout is not None else sys.stdout
        self._config = config if config is not None else ShellConfig()
        self._at_eof = False

    @property
    def at_eof(self) -> bool:
        """Return True once a read has hit the end of the input."""
        return self._at_eof

    def read_line(self, prompt: str = "") -> str:
        """Show *prompt* and return one line of input.

        The prompt is written without a newline.  The line terminator is
        stripped.  End of input returns the empty string and sets
        ``at_eof``.
        """
        if self._stdin is None:
            try:
                return input(prompt)
            except EOFError:
                self._at_eof = True
                return ""

        self.write(prompt)
        line = self._stdin.readline()
        if not line:
            self._at_eof = True
            return ""
        return line.removesuffix("\n").removesuffix("\r")

    def write(self, text: str) -> None:
        """Write *text* as-is and flush."""
        self._stdout.write(text)
        self._stdout.flush()

    def echo(self, message: str = "") -> None:
        """Write *message* followed by a newline."""
        self.write(f"{message}\n")

    def show_help(self) -> None:
        """Print the banner of available commands."""
        self.echo(format_help(Verb, self._config))
