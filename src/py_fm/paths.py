"""Path helper — the shell's own current working directory.

The shell never calls ``os.chdir``.  Instead ``PathHelper`` keeps the
current working directory (CWD) as a plain string and every operation
turns its name arguments into full paths through ``join`` or
``resolve``.  The OS process directory is read once, at startup, and
ignored afterwards.
"""

from __future__ import annotations

import os
from typing import TYPE_CHECKING

from py_fm.errors import InvalidPathError
from py_fm.logging import Logger, LogLevel

if TYPE_CHECKING:
    from py_fm.console import Console

_SOURCE = "path"


class PathHelper:
    """Own the CWD and the host separator."""

    def __init__(
        self,
        console: Console,
        *,
        separator: str = os.sep,
        cwd: str | None = None,
        logger: Logger | None = None,
    ) -> None:
        """Create a path helper.

        Args:
            console: Used to prompt for a missing ``chdir`` argument and
                to report failures.
            separator: Path separator for constructed paths.
            cwd: Starting directory.  Defaults to the process's working
                directory.
            logger: Shared audit log.

        """
        self._console = console
        self._separator = separator
        self._cwd = os.path.abspath(cwd) if cwd is not None else os.getcwd()
        self._logger = logger if logger is not None else Logger()

    @property
    def cwd(self) -> str:
        """Return the current working directory."""
        return self._cwd

    @property
    def separator(self) -> str:
        """Return the path separator."""
        return self._separator

    def join(self, name: str) -> str:
        """Return ``cwd + separator + name`` without normalising.

        The separator is not doubled when the CWD already ends with one,
        which happens only at a filesystem root.
        """
        if self._cwd.endswith(self._separator):
            return self._cwd + name
        return self._cwd + self._separator + name

    def resolve(self, name: str) -> str:
        """Return the full path for a user-supplied name.

        Absolute paths are used as given; anything else is taken to be
        relative to the CWD.

        Raises:
            InvalidPathError: If *name* cannot be a host path.

        """
        if "\0" in name:
            msg = f"Invalid path: {name}"
            raise InvalidPathError(msg)
        return name if os.path.isabs(name) else self.join(name)

    def chdir(self, path: str | None = None) -> str | None:
        """Change the CWD to *path*.

        Relative paths are taken from the current CWD.  The result is
        normalised, so ``..`` components are folded away.

        Args:
            path: The directory to enter.  Prompted for when None.

        Returns:
            The new CWD, or None if it was left unchanged.

        """
        if path is None:
            path = self._console.read_line("Enter path: ")

        try:
            target = os.path.normpath(self.resolve(path))
            is_dir = os.path.isdir(target)
        except (InvalidPathError, ValueError):
            self._console.echo("invalid path")
            self._logger.log(LogLevel.ERROR, f"invalid path {path!r}", source=_SOURCE)
            return None

        if not is_dir:
            self._console.echo("directory not existing")
            self._logger.log(LogLevel.ERROR, f"no directory {target}", source=_SOURCE)
            return None

        self._cwd = target
        self._logger.log(LogLevel.INFO, f"cwd is now {target}", source=_SOURCE)
        return target

    def prevdir(self) -> str | None:
        """Move the CWD up one level.

        At a filesystem root there is nothing to strip and the CWD is
        left as it is.

        Returns:
            The new CWD, or None if it was left unchanged.

        """
        parts = self._cwd.rstrip(self._separator).split(self._separator)
        if len(parts) <= 1:
            return None

        parent = self._separator.join(parts[:-1])
        # "/home" leaves "" and "C:\\Users" leaves "C:"; both mean the root.
        if not parent or parent.endswith(":"):
            parent += self._separator
        return self.chdir(parent)
