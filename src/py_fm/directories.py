"""Directory operations — list, make, delete, rename, move.

Like the file commands, each public method prompts for missing
arguments, prints its outcome, and swallows nothing silently: every
failure is reported on the console and recorded in the audit log.

Recursive delete:
    A non-empty directory is only removed after confirmation.  The
    caller may pre-answer with ``auto_confirm``; an absent answer or
    ``"n"`` means "ask".  Subdirectories are removed depth-first with
    the same ``auto_confirm``, so a non-empty subdirectory asks again.
    Symbolic links inside the tree are unlinked, never descended into,
    so the delete cannot reach outside the directory being removed.
"""

from __future__ import annotations

import os
from typing import TYPE_CHECKING

from py_fm.errors import (
    AlreadyExistsError,
    DeletionCancelledError,
    FileManagerError,
    InvalidPathError,
    NotFoundError,
)
from py_fm.logging import Logger, LogLevel

if TYPE_CHECKING:
    from py_fm.console import Console
    from py_fm.paths import PathHelper

_SOURCE = "dir"

CONFIRM_PROMPT = "The folder is not empty. Are you sure you want to delete it? (Y/N): "


class DirectoryOperations:
    """Shell commands acting on directories."""

    def __init__(self, paths: PathHelper, console: Console, logger: Logger | None = None) -> None:
        """Create the directory command set.

        Args:
            paths: Resolves names against the shell's CWD.
            console: Prompts and output.
            logger: Shared audit log.

        """
        self._paths = paths
        self._console = console
        self._logger = logger if logger is not None else Logger()

    def list(self) -> list[str]:
        """Print the names of the CWD's children in host order."""
        try:
            names = os.listdir(self._paths.cwd)
        except OSError as e:
            self._log(LogLevel.ERROR, f"list {self._paths.cwd}: {e}")
            names = []
        for name in names:
            self._console.echo(name)
        return names

    def make(self, name: str | None = None) -> bool:
        """Create a subdirectory of the CWD.

        Returns:
            True if a new directory was created.

        """
        name = self._ask(name, "enter folder name: ")
        try:
            path = self._paths.resolve(name)
            if os.path.lexists(path):
                msg = "folder name already exists"
                raise AlreadyExistsError(msg)
            os.mkdir(path)
        except (FileManagerError, OSError) as e:
            return self._fail(e)
        self._log(LogLevel.INFO, f"made {path}")
        return True

    def delete(self, path: str | None = None, auto_confirm: str | None = None) -> bool:
        """Delete a directory and everything below it.

        Args:
            path: A CWD child's name, or a path.  Prompted for when None.
            auto_confirm: Pre-answer for the confirmation prompt.  None
                or ``"n"`` asks the user; anything else proceeds.

        Returns:
            True if the directory is gone.  A symbolic link to a directory
            is removed on its own; the directory it points to is kept.

        """
        path = self._ask(path, "enter path to folder to delete: ")
        try:
            folder = self._existing_dir(
                path, "The specified path does not exist or is not a directory."
            )
            link = folder.rstrip(self._paths.separator) or folder
            if os.path.islink(link):
                os.unlink(link)
            else:
                self._remove_tree(folder, auto_confirm)
        except DeletionCancelledError as e:
            self._console.echo(str(e))
            self._log(LogLevel.WARNING, f"kept {path}: deletion declined")
            return False
        except (FileManagerError, OSError) as e:
            return self._fail(e)
        self._log(LogLevel.INFO, f"deleted {folder}")
        return True

    def rename(self, name: str | None = None, new_name: str | None = None) -> bool:
        """Rename a CWD subdirectory, refusing to replace another entry."""
        name = self._ask(name, "enter starting folder name: ")
        try:
            source = self._existing_dir(
                name, "Starting directory does not exist or is not a directory."
            )
        except FileManagerError as e:
            return self._fail(e)

        new_name = self._ask(new_name, "enter target folder name: ")
        try:
            target = self._paths.resolve(new_name)
            if os.path.lexists(target):
                msg = "Target name already exists."
                raise AlreadyExistsError(msg)
            os.rename(source, target)
        except (FileManagerError, OSError) as e:
            return self._fail(e)
        self._log(LogLevel.INFO, f"renamed {name} -> {new_name}")
        return True

    def move(self, source: str | None = None, target_dir: str | None = None) -> bool:
        """Move a directory into *target_dir*, keeping its name."""
        source = self._ask(source, "enter starting path: ")
        try:
            folder = self._source_dir(source)
        except FileManagerError as e:
            return self._fail(e)

        target_dir = self._ask(target_dir, "enter target path: ")
        try:
            sep = self._paths.separator
            parent = self._paths.resolve(target_dir).rstrip(sep) or sep
            destination = parent.rstrip(sep) + sep + os.path.basename(folder)
            if not os.path.isdir(parent):
                msg = "path not found"
                raise NotFoundError(msg)
            if os.path.lexists(destination):
                msg = "folder name already exist in path"
                raise AlreadyExistsError(msg)
            os.rename(folder, destination)
        except FileNotFoundError:
            return self._fail(NotFoundError("path not found"))
        except (FileManagerError, OSError) as e:
            return self._fail(e)
        self._log(LogLevel.INFO, f"moved {folder} -> {destination}")
        return True

    # -- Helpers ------------------------------------------------------------

    def _remove_tree(self, folder: str, auto_confirm: str | None) -> None:
        """Remove *folder*, asking first if it has children.

        Raises:
            DeletionCancelledError: If the user declines at any level.
            FileManagerError: If the folder itself cannot be removed.

        """
        with os.scandir(folder) as it:
            entries = list(it)

        if entries:
            if auto_confirm is None or auto_confirm.lower() == "n":
                reply = self._console.read_line(CONFIRM_PROMPT)
                if reply.strip().lower() != "y":
                    msg = "Deletion cancelled."
                    raise DeletionCancelledError(msg)
            for entry in entries:
                if entry.is_dir(follow_symlinks=False):
                    self._remove_tree(entry.path, auto_confirm)
                else:
                    os.unlink(entry.path)

        try:
            os.rmdir(folder)
        except OSError as e:
            msg = f"Failed to delete the folder: {folder}"
            raise FileManagerError(msg) from e

    def _existing_dir(self, name: str, missing_message: str) -> str:
        """Resolve *name* to a directory path or raise with *missing_message*."""
        try:
            path = self._paths.resolve(name)
        except InvalidPathError as e:
            raise NotFoundError(missing_message) from e
        if not os.path.isdir(path):
            raise NotFoundError(missing_message)
        return path

    def _source_dir(self, source: str) -> str:
        """Resolve the directory a ``move`` starts from.

        A bare name must be a directory in the CWD; anything containing
        the separator is taken as a path in its own right.
        """
        if self._paths.separator not in source:
            candidate = self._paths.join(source)
            if source and os.path.isdir(candidate):
                return candidate
            msg = "Invalid starting path. Please provide a valid directory name or path."
            raise InvalidPathError(msg)
        return self._existing_dir(
            source, "The specified starting path does not exist or is not a directory."
        )

    def _ask(self, value: str | None, prompt: str) -> str:
        """Return *value*, prompting for it when it is missing."""
        return value if value is not None else self._console.read_line(prompt)

    def _fail(self, error: Exception) -> bool:
        """Report *error* on the console and in the log."""
        self._console.echo(str(error))
        self._log(LogLevel.ERROR, str(error))
        return False

    def _log(self, level: LogLevel, message: str) -> None:
        self._logger.log(level, message, source=_SOURCE)
