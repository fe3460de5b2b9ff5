"""Tests for directory operations, including recursive delete."""

import os
from io import StringIO
from pathlib import Path
from unittest.mock import patch

import pytest

from py_fm.console import Console
from py_fm.directories import CONFIRM_PROMPT, DirectoryOperations
from py_fm.paths import PathHelper


def _dirs(cwd: Path, script: str = "") -> tuple[DirectoryOperations, StringIO]:
    """Create directory operations rooted at *cwd* with a scripted console."""
    stdout = StringIO()
    console = Console(stdin=StringIO(script), stdout=stdout)
    paths = PathHelper(console, separator="/", cwd=str(cwd))
    return DirectoryOperations(paths, console), stdout


def _tree(root: Path, depth: int) -> None:
    """Build a chain of *depth* nested directories, each holding a file."""
    current = root
    for level in range(depth):
        current = current / f"level{level}"
        current.mkdir()
        (current / "data.txt").write_text(str(level))


class TestList:
    """Verify 'list'."""

    def test_lists_children(self, tmp_path: Path) -> None:
        """Every child name is printed on its own line."""
        (tmp_path / "a.txt").touch()
        (tmp_path / "sub").mkdir()
        dirs, stdout = _dirs(tmp_path)
        names = dirs.list()
        assert sorted(names) == ["a.txt", "sub"]
        assert sorted(stdout.getvalue().splitlines()) == ["a.txt", "sub"]

    def test_empty_directory(self, tmp_path: Path) -> None:
        """An empty CWD prints nothing."""
        dirs, stdout = _dirs(tmp_path)
        assert dirs.list() == []
        assert stdout.getvalue() == ""

    def test_vanished_cwd_is_empty(self, tmp_path: Path) -> None:
        """A CWD removed behind the shell's back lists as empty."""
        gone = tmp_path / "gone"
        gone.mkdir()
        dirs, stdout = _dirs(gone)
        gone.rmdir()
        assert dirs.list() == []
        assert stdout.getvalue() == ""


class TestMake:
    """Verify 'make dir'."""

    def test_make_directory(self, tmp_path: Path) -> None:
        """A new directory is created."""
        dirs, _out = _dirs(tmp_path)
        assert dirs.make("sub")
        assert (tmp_path / "sub").is_dir()

    def test_make_existing(self, tmp_path: Path) -> None:
        """An existing name is reported and nothing changes."""
        (tmp_path / "sub").mkdir()
        dirs, stdout = _dirs(tmp_path)
        assert not dirs.make("sub")
        assert stdout.getvalue() == "folder name already exists\n"

    def test_make_over_file(self, tmp_path: Path) -> None:
        """A file of the same name also blocks the directory."""
        (tmp_path / "sub").touch()
        dirs, _out = _dirs(tmp_path)
        assert not dirs.make("sub")


class TestDelete:
    """Verify 'delete dir'."""

    def test_empty_directory_no_prompt(self, tmp_path: Path) -> None:
        """An empty directory is removed without asking."""
        (tmp_path / "d").mkdir()
        dirs, stdout = _dirs(tmp_path)
        assert dirs.delete("d", "n")
        assert not (tmp_path / "d").exists()
        assert CONFIRM_PROMPT not in stdout.getvalue()

    def test_auto_confirm_removes_deep_tree(self, tmp_path: Path) -> None:
        """With 'y' a tree of any depth goes without prompting."""
        _tree(tmp_path, depth=6)
        dirs, stdout = _dirs(tmp_path)
        assert dirs.delete("level0", "y")
        assert not (tmp_path / "level0").exists()
        assert stdout.getvalue() == ""

    def test_declined_leaves_tree(self, tmp_path: Path) -> None:
        """Answering 'n' keeps every file."""
        (tmp_path / "d").mkdir()
        (tmp_path / "d" / "x.txt").write_text("x")
        dirs, stdout = _dirs(tmp_path, "n\n")
        assert not dirs.delete("d")
        assert (tmp_path / "d" / "x.txt").exists()
        assert stdout.getvalue() == CONFIRM_PROMPT + "Deletion cancelled.\n"

    def test_explicit_n_still_prompts(self, tmp_path: Path) -> None:
        """auto_confirm 'n' means 'ask', not 'refuse'."""
        (tmp_path / "d").mkdir()
        (tmp_path / "d" / "x.txt").write_text("x")
        dirs, _out = _dirs(tmp_path, "Y\n")
        assert dirs.delete("d", "n")
        assert not (tmp_path / "d").exists()

    @pytest.mark.parametrize("reply", ["y", "Y"])
    def test_confirmed_is_case_insensitive(self, tmp_path: Path, reply: str) -> None:
        """Both 'y' and 'Y' authorise the delete."""
        (tmp_path / "d").mkdir()
        (tmp_path / "d" / "x.txt").write_text("x")
        dirs, _out = _dirs(tmp_path, f"{reply}\n")
        assert dirs.delete("d")
        assert not (tmp_path / "d").exists()

    def test_nested_directories_ask_again(self, tmp_path: Path) -> None:
        """Each non-empty level asks for its own confirmation."""
        _tree(tmp_path, depth=2)
        dirs, stdout = _dirs(tmp_path, "y\ny\n")
        assert dirs.delete("level0")
        assert stdout.getvalue().count(CONFIRM_PROMPT) == 2
        assert not (tmp_path / "level0").exists()

    def test_nested_decline_keeps_parent(self, tmp_path: Path) -> None:
        """Declining at a lower level keeps the directory being deleted."""
        _tree(tmp_path, depth=2)
        dirs, stdout = _dirs(tmp_path, "y\nn\n")
        assert not dirs.delete("level0")
        assert (tmp_path / "level0" / "level1" / "data.txt").exists()
        assert "Deletion cancelled." in stdout.getvalue()

    def test_delete_by_absolute_path(self, tmp_path: Path) -> None:
        """A path containing the separator is used directly."""
        (tmp_path / "d").mkdir()
        dirs, _out = _dirs(tmp_path)
        assert dirs.delete(str(tmp_path / "d"), "y")
        assert not (tmp_path / "d").exists()

    def test_delete_missing(self, tmp_path: Path) -> None:
        """A missing directory is reported and False returned."""
        dirs, stdout = _dirs(tmp_path)
        assert not dirs.delete("nope", "y")
        assert "does not exist or is not a directory" in stdout.getvalue()

    def test_delete_file_is_refused(self, tmp_path: Path) -> None:
        """A regular file is not a directory."""
        (tmp_path / "f.txt").touch()
        dirs, _out = _dirs(tmp_path)
        assert not dirs.delete("f.txt", "y")
        assert (tmp_path / "f.txt").exists()

    @pytest.mark.skipif(not hasattr(os, "symlink"), reason="needs symlinks")
    def test_symlinks_are_not_followed(self, tmp_path: Path) -> None:
        """A link inside the tree is removed; its target survives."""
        outside = tmp_path / "outside"
        outside.mkdir()
        (outside / "keep.txt").write_text("keep")
        (tmp_path / "d").mkdir()
        (tmp_path / "d" / "link").symlink_to(outside, target_is_directory=True)
        dirs, _out = _dirs(tmp_path)
        assert dirs.delete("d", "y")
        assert (outside / "keep.txt").read_text() == "keep"
        assert not (tmp_path / "d").exists()

    @pytest.mark.skipif(not hasattr(os, "symlink"), reason="needs symlinks")
    @pytest.mark.parametrize("name", ["link", "link/"])
    def test_link_to_directory_removes_only_the_link(self, tmp_path: Path, name: str) -> None:
        """Deleting a link to a directory keeps everything it points to."""
        outside = tmp_path / "outside"
        outside.mkdir()
        (outside / "keep.txt").write_text("keep")
        (tmp_path / "link").symlink_to(outside, target_is_directory=True)
        dirs, stdout = _dirs(tmp_path, "y\n")
        assert dirs.delete(name)
        assert not (tmp_path / "link").is_symlink()
        assert (outside / "keep.txt").read_text() == "keep"
        assert CONFIRM_PROMPT not in stdout.getvalue()


class TestRename:
    """Verify 'rename dir'."""

    def test_rename(self, tmp_path: Path) -> None:
        """The directory and its content move to the new name."""
        (tmp_path / "old").mkdir()
        (tmp_path / "old" / "x.txt").touch()
        dirs, _out = _dirs(tmp_path)
        assert dirs.rename("old", "new")
        assert (tmp_path / "new" / "x.txt").exists()
        assert not (tmp_path / "old").exists()

    def test_rename_to_existing(self, tmp_path: Path) -> None:
        """An existing target name blocks the rename."""
        (tmp_path / "a").mkdir()
        (tmp_path / "b").mkdir()
        dirs, stdout = _dirs(tmp_path)
        assert not dirs.rename("a", "b")
        assert stdout.getvalue() == "Target name already exists.\n"
        assert (tmp_path / "a").is_dir()

    def test_rename_missing(self, tmp_path: Path) -> None:
        """The source must be an existing directory."""
        dirs, stdout = _dirs(tmp_path)
        assert not dirs.rename("nope", "b")
        assert "Starting directory does not exist" in stdout.getvalue()


class TestMove:
    """Verify 'move dir'."""

    def test_move_child_into_sibling(self, tmp_path: Path) -> None:
        """A CWD child moves under the target, keeping its name."""
        (tmp_path / "src").mkdir()
        (tmp_path / "src" / "x.txt").touch()
        (tmp_path / "parent").mkdir()
        dirs, _out = _dirs(tmp_path)
        assert dirs.move("src", "parent")
        assert (tmp_path / "parent" / "src" / "x.txt").exists()
        assert not (tmp_path / "src").exists()

    def test_move_by_absolute_paths(self, tmp_path: Path) -> None:
        """Source and target may both be absolute."""
        (tmp_path / "src").mkdir()
        (tmp_path / "parent").mkdir()
        dirs, _out = _dirs(tmp_path)
        assert dirs.move(str(tmp_path / "src"), str(tmp_path / "parent"))
        assert (tmp_path / "parent" / "src").is_dir()

    def test_move_onto_existing(self, tmp_path: Path) -> None:
        """A same-named directory in the target blocks the move."""
        (tmp_path / "src").mkdir()
        (tmp_path / "parent" / "src").mkdir(parents=True)
        dirs, stdout = _dirs(tmp_path)
        assert not dirs.move("src", "parent")
        assert stdout.getvalue() == "folder name already exist in path\n"
        assert (tmp_path / "src").is_dir()

    def test_move_to_missing_target(self, tmp_path: Path) -> None:
        """A missing target directory reports 'path not found'."""
        (tmp_path / "src").mkdir()
        dirs, stdout = _dirs(tmp_path)
        assert not dirs.move("src", "nowhere")
        assert stdout.getvalue() == "path not found\n"

    def test_move_into_root(self, tmp_path: Path) -> None:
        """A target of '/' is the root itself, not a missing path."""
        name = "py-fm-root-move-target"
        (tmp_path / name).mkdir()
        dirs, stdout = _dirs(tmp_path)
        with patch("py_fm.directories.os.rename") as rename:
            assert dirs.move(name, "/")
        rename.assert_called_once_with(str(tmp_path / name), f"/{name}")
        assert stdout.getvalue() == ""

    def test_move_unknown_child(self, tmp_path: Path) -> None:
        """A bare name that is not a CWD directory is rejected."""
        dirs, stdout = _dirs(tmp_path)
        assert not dirs.move("nope", "parent")
        assert "Invalid starting path" in stdout.getvalue()

    def test_move_missing_absolute_source(self, tmp_path: Path) -> None:
        """A path that names no directory is rejected."""
        dirs, stdout = _dirs(tmp_path)
        assert not dirs.move(str(tmp_path / "nope"), str(tmp_path))
        assert "starting path does not exist" in stdout.getvalue()
