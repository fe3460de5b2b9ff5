"""The shell — command dispatcher for the file manager.

The shell takes one line of input, splits it on ``>``, validates the
verb and hands the remaining tokens to a handler.  Handlers talk to the
user directly through the console (they may need to prompt for a
missing argument halfway through), so ``execute`` returns the state the
dispatcher ends in rather than output text.

Design choices:
    - **Command dispatch via a dict.**  Each verb maps to one handler
      method; the arity table in ``py_fm.commands`` decides how many
      tokens it receives.  Extra tokens are ignored and missing ones
      arrive as None.
    - **Errors stop at the handler.**  Operations print their own
      failures; an ``OSError`` that still escapes is printed here, so no
      command can end the session.
"""

from __future__ import annotations

from collections.abc import Callable
from enum import StrEnum
from typing import TypeAlias

from py_fm.commands import ARITY, Verb, lookup_verb, parse_command
from py_fm.config import ShellConfig
from py_fm.console import Console
from py_fm.directories import DirectoryOperations
from py_fm.files import FileOperations
from py_fm.logging import Logger, LogLevel
from py_fm.paths import PathHelper

# A command handler receives the verb's positional arguments.
_Handler: TypeAlias = Callable[[list[str | None]], object]

_SOURCE = "shell"

INVALID_COMMAND = "Invalid command. Please enter a supported command."


class ShellState(StrEnum):
    """Where the dispatcher is in its read-dispatch cycle."""

    PROMPT = "prompt"
    DISPATCH = "dispatch"
    TERMINATED = "terminated"


class Shell:
    """Command interpreter bound to a console and a working directory."""

    def __init__(
        self,
        *,
        console: Console | None = None,
        config: ShellConfig | None = None,
        cwd: str | None = None,
        logger: Logger | None = None,
    ) -> None:
        """Create a shell.

        Args:
            console: Terminal I/O.  Defaults to an interactive console.
            config: Separator, prompt and banner settings.
            cwd: Starting directory.  Defaults to the process's working
                directory.
            logger: Audit log shared with every operation.

        """
        self._config = config if config is not None else ShellConfig()
        self._console = console if console is not None else Console(config=self._config)
        self._logger = (
            logger if logger is not None else Logger(capacity=self._config.log_capacity)
        )
        self._paths = PathHelper(
            self._console, separator=self._config.separator, cwd=cwd, logger=self._logger
        )
        self._files = FileOperations(self._paths, self._console, self._logger)
        self._directories = DirectoryOperations(self._paths, self._console, self._logger)
        self._state = ShellState.PROMPT

        # Command dispatch table: maps verbs to handler methods.
        self._commands: dict[Verb, _Handler] = {
            Verb.LIST: self._cmd_list,
            Verb.PATH: self._cmd_path,
            Verb.INFO: self._cmd_info,
            Verb.CHDIR: self._cmd_chdir,
            Verb.PREVDIR: self._cmd_prevdir,
            Verb.MAKE_FILE: self._cmd_make_file,
            Verb.DELETE_FILE: self._cmd_delete_file,
            Verb.RENAME_FILE: self._cmd_rename_file,
            Verb.READ_FILE: self._cmd_read_file,
            Verb.WRITE_FILE: self._cmd_write_file,
            Verb.CLEAR_FILE: self._cmd_clear_file,
            Verb.COPY_FILE: self._cmd_copy_file,
            Verb.MOVE_FILE: self._cmd_move_file,
            Verb.MAKE_DIR: self._cmd_make_dir,
            Verb.DELETE_DIR: self._cmd_delete_dir,
            Verb.RENAME_DIR: self._cmd_rename_dir,
            Verb.MOVE_DIR: self._cmd_move_dir,
        }

    @property
    def console(self) -> Console:
        """Return the shell's console."""
        return self._console

    @property
    def config(self) -> ShellConfig:
        """Return the shell's configuration."""
        return self._config

    @property
    def logger(self) -> Logger:
        """Return the audit log."""
        return self._logger

    @property
    def paths(self) -> PathHelper:
        """Return the path helper owning the CWD."""
        return self._paths

    @property
    def files(self) -> FileOperations:
        """Return the file command set."""
        return self._files

    @property
    def directories(self) -> DirectoryOperations:
        """Return the directory command set."""
        return self._directories

    @property
    def state(self) -> ShellState:
        """Return the dispatcher's current state."""
        return self._state

    @property
    def command_names(self) -> list[str]:
        """Return every verb the shell accepts, ``exit`` included."""
        return [str(verb) for verb in Verb]

    def execute(self, line: str) -> ShellState:
        """Parse and run one command line.

        Args:
            line: The raw input line (e.g. ``"copy file > a.txt"``).

        Returns:
            ``ShellState.TERMINATED`` after ``exit``, otherwise
            ``ShellState.PROMPT``.

        """
        if self._state is ShellState.TERMINATED:
            return self._state

        tokens = parse_command(line)
        verb = lookup_verb(tokens[0])
        if verb is None:
            self._console.echo(INVALID_COMMAND)
            self._logger.log(LogLevel.WARNING, f"rejected {line!r}", source=_SOURCE)
            return self._state

        if verb is Verb.EXIT:
            self._state = ShellState.TERMINATED
            self._logger.log(LogLevel.INFO, "session ended", source=_SOURCE)
            return self._state

        self._state = ShellState.DISPATCH
        arity = ARITY[verb]
        args = tokens[1:arity]
        args += [None] * (arity - 1 - len(args))
        self._logger.log(LogLevel.DEBUG, f"{verb} {args}", source=_SOURCE)
        try:
            self._commands[verb](args)
        except OSError as e:
            self._console.echo(str(e))
            self._logger.log(LogLevel.ERROR, f"{verb}: {e}", source=_SOURCE)
        finally:
            self._state = ShellState.PROMPT
        return self._state

    # -- Command handlers ------------------------------------------------

    def _cmd_list(self, _args: list[str | None]) -> list[str]:
        """Print the CWD's children."""
        return self._directories.list()

    def _cmd_path(self, _args: list[str | None]) -> str:
        """Print the CWD."""
        self._console.echo(self._paths.cwd)
        return self._paths.cwd

    def _cmd_info(self, _args: list[str | None]) -> None:
        """Print the help banner."""
        self._console.show_help()

    def _cmd_chdir(self, args: list[str | None]) -> str | None:
        return self._paths.chdir(args[0])

    def _cmd_prevdir(self, _args: list[str | None]) -> str | None:
        return self._paths.prevdir()

    def _cmd_make_file(self, args: list[str | None]) -> bool:
        return self._files.create(args[0])

    def _cmd_delete_file(self, args: list[str | None]) -> bool:
        return self._files.delete(args[0])

    def _cmd_rename_file(self, args: list[str | None]) -> bool:
        return self._files.rename(args[0], args[1])

    def _cmd_read_file(self, args: list[str | None]) -> str:
        return self._files.read(args[0])

    def _cmd_write_file(self, args: list[str | None]) -> None:
        self._files.write_line(args[0], args[1])

    def _cmd_clear_file(self, args: list[str | None]) -> None:
        self._files.clear(args[0])

    def _cmd_copy_file(self, args: list[str | None]) -> str:
        """Copy a file; without a target name a numbered copy is made."""
        return self._files.copy(args[0], args[1])

    def _cmd_move_file(self, args: list[str | None]) -> bool:
        return self._files.move(args[0], args[1])

    def _cmd_make_dir(self, args: list[str | None]) -> bool:
        return self._directories.make(args[0])

    def _cmd_delete_dir(self, args: list[str | None]) -> bool:
        """Delete a directory tree, asking first if it is not empty."""
        return self._directories.delete(args[0])

    def _cmd_rename_dir(self, args: list[str | None]) -> bool:
        return self._directories.rename(args[0], args[1])

    def _cmd_move_dir(self, args: list[str | None]) -> bool:
        return self._directories.move(args[0], args[1])
