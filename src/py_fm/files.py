"""File operations — create, clear, delete, rename, read, append, copy, move.

Each public method is a complete shell command: it prompts for missing
arguments, performs the operation, and prints the outcome.  Failures are
reported on the console and never raised to the caller.

Copy naming:
    When ``copy`` is given no target name it derives one next to the
    source by numbering it::

        a.txt      -> a (1).txt, a (2).txt, ...
        a (7).txt  -> a (1).txt, a (2).txt, ...   (marker replaced)

    A name that already ends in a ``(n)`` marker is treated as a copy of
    a copy: the marker is swapped for the next free number rather than
    nested into ``a (7) (1).txt``.

Move collisions:
    ``move`` never overwrites.  If the target directory already holds a
    file of the same name, the source is first copied to a fresh
    numbered name, that copy is moved instead, and the original is
    deleted.  Moving a file into the directory it already lives in
    changes nothing.
"""

from __future__ import annotations

import errno
import os
import re
import shutil
from typing import TYPE_CHECKING

from py_fm.errors import AlreadyExistsError, FileManagerError, NotFoundError
from py_fm.logging import Logger, LogLevel

if TYPE_CHECKING:
    from collections.abc import Callable

    from py_fm.console import Console
    from py_fm.paths import PathHelper

_SOURCE = "file"

# A trailing "(n)" copy marker on a file's base name.
_COPY_MARKER = re.compile(r"\(\d+\)$")


def split_extension(filename: str) -> tuple[str, str]:
    """Split *filename* on its first dot into ``(base, extension)``.

    Leading dots belong to the base, so hidden files such as
    ``.profile`` have no extension.  The extension is returned without
    its dot and is empty when there is none.
    """
    stripped = filename.lstrip(".")
    leading = filename[: len(filename) - len(stripped)]
    base, _dot, extension = stripped.partition(".")
    return leading + base, extension


def derive_copy_name(name: str, exists: Callable[[str], bool], *, separator: str = os.sep) -> str:
    """Return the first numbered variant of *name* that does not exist.

    If *name* itself is free it is returned unchanged.

    Args:
        name: The source file name, optionally with a directory part.
        exists: Predicate telling whether a candidate name is taken.
        separator: Separator between the directory part and the file
            name.

    Returns:
        The chosen destination name, in the same directory as *name*.

    """
    directory, sep, filename = name.rpartition(separator)
    base, extension = split_extension(filename)
    suffix = f".{extension}" if extension else ""

    marker = _COPY_MARKER.search(base)
    stem = base[: marker.start()] if marker else f"{base} "

    chosen = name
    index = 1
    while exists(chosen):
        chosen = f"{directory}{sep}{stem}({index}){suffix}"
        index += 1
    return chosen


def _same_file(source: str, destination: str) -> bool:
    """Return True if both paths exist and name the same file."""
    return (
        os.path.exists(source)
        and os.path.exists(destination)
        and os.path.samefile(source, destination)
    )


class FileOperations:
    """Shell commands acting on regular files."""

    def __init__(self, paths: PathHelper, console: Console, logger: Logger | None = None) -> None:
        """Create the file command set.

        Args:
            paths: Resolves names against the shell's CWD.
            console: Prompts and output.
            logger: Shared audit log.

        """
        self._paths = paths
        self._console = console
        self._logger = logger if logger is not None else Logger()

    # -- Commands -----------------------------------------------------------

    def create(self, name: str | None = None) -> bool:
        """Create an empty file.  Existing files are left untouched."""
        name = self._ask(name, "Enter file name: ")
        try:
            self._create_empty(self._paths.resolve(name))
        except AlreadyExistsError:
            self._console.echo("File name already exists")
            return False
        except (FileManagerError, OSError) as e:
            return self._fail(e)
        self._console.echo("new file created")
        self._log(LogLevel.INFO, f"created {name}")
        return True

    def clear(self, name: str | None = None) -> None:
        """Truncate an existing file to zero bytes."""
        name = self._ask(name, "Enter file name: ")
        try:
            path = self._paths.resolve(name)
            if not os.path.exists(path):
                msg = "file not existing"
                raise NotFoundError(msg)
            self._truncate(path)
        except (FileManagerError, OSError) as e:
            self._fail(e)
            return
        self._log(LogLevel.INFO, f"cleared {name}")

    def delete(self, name: str | None = None) -> bool:
        """Empty and remove a file."""
        name = self._ask(name, "Enter file name: ")
        try:
            path = self._paths.resolve(name)
            if not os.path.exists(path):
                msg = "File not existing"
                raise NotFoundError(msg)
            self._truncate(path)
            os.remove(path)
        except (FileManagerError, OSError) as e:
            return self._fail(e)
        self._console.echo("File deleted")
        self._log(LogLevel.INFO, f"deleted {name}")
        return True

    def rename(self, name: str | None = None, new_name: str | None = None) -> bool:
        """Rename a file within the CWD, refusing to replace another entry."""
        name = self._ask(name, "Enter file name: ")
        try:
            source = self._paths.resolve(name)
            if not os.path.isfile(source):
                msg = "File not existing"
                raise NotFoundError(msg)
        except FileManagerError as e:
            return self._fail(e)

        new_name = self._ask(new_name, "Enter new file name: ")
        try:
            self._rename_exclusive(source, self._paths.resolve(new_name))
        except (FileManagerError, OSError) as e:
            self._console.echo("file renaming failed")
            self._log(LogLevel.ERROR, f"rename {name} -> {new_name}: {e}")
            return False
        self._console.echo("file renamed")
        self._log(LogLevel.INFO, f"renamed {name} -> {new_name}")
        return True

    def read(self, name: str | None = None) -> str:
        """Print a text file line by line.

        Returns:
            The file's lines joined with their terminators removed, or
            the empty string if the file could not be read.

        """
        name = self._ask(name, "Enter file name: ")
        lines: list[str] = []
        try:
            with open(self._paths.resolve(name), encoding="utf-8") as handle:
                for raw in handle:
                    line = raw.removesuffix("\n")
                    self._console.echo(line)
                    lines.append(line)
        except (FileManagerError, OSError, UnicodeDecodeError) as e:
            self._console.echo("file not found")
            self._log(LogLevel.ERROR, f"read {name}: {e}")
            return ""
        return "".join(lines)

    def write_line(self, name: str | None = None, text: str | None = None) -> None:
        """Append one line of text to an existing file.

        A newline is written before *text* unless the file is empty, and
        none after it, so successive writes never leave a trailing
        newline.
        """
        name = self._ask(name, "Enter file name: ")
        try:
            path = self._paths.resolve(name)
            if not os.path.exists(path):
                msg = "File not existing"
                raise NotFoundError(msg)
        except FileManagerError as e:
            self._fail(e)
            return

        text = self._ask(text, "Enter text: ")
        try:
            with open(path, encoding="utf-8", errors="replace") as handle:
                line_count = sum(1 for _ in handle)
            with open(path, "a", encoding="utf-8") as handle:
                if line_count:
                    handle.write("\n")
                handle.write(text)
        except OSError as e:
            self._fail(e)
            return
        self._log(LogLevel.INFO, f"appended a line to {name}")

    def copy(self, source: str | None = None, target: str | None = None) -> str:
        """Copy a file byte for byte.

        Args:
            source: File to copy.  Prompted for when None.
            target: Destination name.  When None a numbered name is
                derived next to the source; an existing *target* is
                overwritten.

        Returns:
            The destination name that was used.

        """
        source = self._ask(source, "Enter file name: ")
        try:
            source_path = self._paths.resolve(source)
            if target is None:
                chosen = derive_copy_name(
                    source,
                    lambda candidate: os.path.lexists(self._paths.resolve(candidate)),
                    separator=self._paths.separator,
                )
            else:
                chosen = target
                try:
                    self._create_empty(self._paths.resolve(target))
                except AlreadyExistsError:
                    self._console.echo("file name already exists")
            self._copy_bytes(source_path, self._paths.resolve(chosen))
        except FileNotFoundError as e:
            self._console.echo("File not found")
            self._log(LogLevel.ERROR, f"copy {source}: {e}")
            return target if target is not None else source
        except (FileManagerError, OSError) as e:
            self._fail(e)
            return target if target is not None else source
        self._log(LogLevel.INFO, f"copied {source} -> {chosen}")
        return chosen

    def move(self, name: str | None = None, target_dir: str | None = None) -> bool:
        """Move a file into another directory without overwriting.

        Returns:
            True if the file (or a numbered copy of it) ended up in
            *target_dir* and the original is gone.

        """
        name = self._ask(name, "Enter file name: ")
        target_dir = self._ask(target_dir, "Enter target path: ")
        try:
            source = self._paths.resolve(name)
            filename = os.path.basename(source)
            parent = self._paths.resolve(target_dir).rstrip(self._paths.separator)
            destination = parent + self._paths.separator + filename
            if _same_file(source, destination):
                self._log(LogLevel.INFO, f"{name} is already in {target_dir}")
                return True
            self._rename_exclusive(source, destination)
        except FileNotFoundError as e:
            self._console.echo("file or path not found error")
            self._log(LogLevel.ERROR, f"move {name} -> {target_dir}: {e}")
            return False
        except FileExistsError:
            return self._move_as_copy(name, target_dir)
        except (FileManagerError, OSError) as e:
            return self._fail(e)
        self._log(LogLevel.INFO, f"moved {name} -> {target_dir}")
        return True

    # -- Helpers ------------------------------------------------------------

    def _move_as_copy(self, name: str, target_dir: str) -> bool:
        """Move a numbered copy of *name* instead, then drop the original."""
        copy_name = self.copy(name)
        if copy_name == name or not os.path.lexists(self._paths.resolve(copy_name)):
            return False
        if not self.move(copy_name, target_dir):
            return False
        return self.delete(name)

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

    @staticmethod
    def _create_empty(path: str) -> None:
        """Create an empty file at *path*, failing if anything is there.

        Raises:
            AlreadyExistsError: If *path* already exists.

        """
        try:
            with open(path, "x", encoding="utf-8"):
                pass
        except FileExistsError as e:
            msg = "File name already exists"
            raise AlreadyExistsError(msg) from e

    @staticmethod
    def _truncate(path: str) -> None:
        with open(path, "w", encoding="utf-8"):
            pass

    @staticmethod
    def _copy_bytes(source: str, destination: str) -> None:
        """Copy the bytes of *source* over *destination*.

        A file copied onto itself is left as it is; opening the
        destination for writing would otherwise truncate the source.
        """
        if _same_file(source, destination):
            return
        with open(source, "rb") as reader, open(destination, "wb") as writer:
            shutil.copyfileobj(reader, writer)

    @staticmethod
    def _rename_exclusive(source: str, destination: str) -> None:
        """Rename *source* to *destination* unless *destination* exists.

        ``os.rename`` silently replaces files on POSIX, so the
        destination is checked first.

        Raises:
            FileNotFoundError: If *source* does not exist.
            FileExistsError: If *destination* already exists.

        """
        if not os.path.lexists(source):
            raise FileNotFoundError(errno.ENOENT, os.strerror(errno.ENOENT), source)
        if os.path.lexists(destination):
            raise FileExistsError(errno.EEXIST, os.strerror(errno.EEXIST), destination)
        os.rename(source, destination)
