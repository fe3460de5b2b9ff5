"""Interactive REPL (Read-Eval-Print Loop) for the file manager.

The REPL prints the help banner, creates a shell, and enters the loop:

    1. **Read** — display the prompt and read one line.
    2. **Eval** — pass the line to ``shell.execute()``.
    3. **Loop** — repeat until the shell reaches ``TERMINATED``.

Handlers print their own results, so there is no separate print step.
The loop also ends, with the same status, when input runs out or the
user presses Ctrl+C.
"""

import readline

from py_fm.completer import Completer
from py_fm.console import Console
from py_fm.shell import Shell, ShellState


def install_completer(shell: Shell) -> Completer:
    """Wire tab completion for *shell* into readline."""
    completer = Completer(shell)
    readline.set_completer(completer.complete)
    readline.set_completer_delims(">")
    readline.parse_and_bind("tab: complete")
    return completer


def run(shell: Shell | None = None) -> int:
    """Run the interactive loop until ``exit``.

    Args:
        shell: The shell to drive.  Defaults to an interactive shell
            rooted at the process's working directory, with tab
            completion installed.

    Returns:
        The process exit status, always 0.

    """
    if shell is None:
        shell = Shell(console=Console())
        install_completer(shell)
    console = shell.console

    console.show_help()
    try:
        while shell.state is not ShellState.TERMINATED:
            line = console.read_line(shell.config.prompt)
            if console.at_eof and not line:
                # Ctrl+D graceful exit
                console.echo()
                break
            shell.execute(line)
    except KeyboardInterrupt:
        console.echo("\nInterrupted.")
    return 0


def main() -> None:
    """Console-script entrypoint."""
    raise SystemExit(run())
