"""Unit tests for listing the files of an analysis root."""

import os
import sys
from pathlib import Path

import pytest

from filescope.core.errors import EnumerationError, FileCollectionError
from filescope.core.file_collector import enumerate_files
from tests.support.file_tree_strategies import write_files

running_as_root = hasattr(os, "geteuid") and os.geteuid() == 0


def test_lists_nested_files_relative_to_root(tmp_path):
    write_files(tmp_path, ["README.md", "src/Main.scala", "src/util/deep/Helper.scala"])

    assert enumerate_files(tmp_path) == {
        Path("README.md"),
        Path("src/Main.scala"),
        Path("src/util/deep/Helper.scala"),
    }


def test_empty_root(tmp_path):
    assert enumerate_files(tmp_path) == frozenset()


def test_top_level_vcs_directory_is_skipped(tmp_path):
    write_files(tmp_path, [".git/config", ".git/objects/ab/cdef", ".github/workflows/ci.yml", "a.py"])

    assert enumerate_files(tmp_path) == {Path(".github/workflows/ci.yml"), Path("a.py")}


def test_nested_vcs_directory_is_kept(tmp_path):
    write_files(tmp_path, ["vendor/lib/.git/config"])

    assert enumerate_files(tmp_path) == {Path("vendor/lib/.git/config")}


def test_custom_vcs_directory(tmp_path):
    write_files(tmp_path, [".hg/store", ".git/config"])

    assert enumerate_files(tmp_path, ".hg") == {Path(".git/config")}


def test_directories_themselves_are_not_listed(tmp_path):
    (tmp_path / "empty" / "nested").mkdir(parents=True)
    write_files(tmp_path, ["a.py"])

    assert enumerate_files(tmp_path) == {Path("a.py")}


@pytest.mark.skipif(sys.platform == "win32", reason="symlinks need privileges on Windows")
def test_symlinks_are_neither_listed_nor_followed(tmp_path):
    outside = tmp_path / "outside"
    root = tmp_path / "root"
    write_files(outside, ["secret.py"])
    write_files(root, ["a.py"])
    (root / "link.py").symlink_to(root / "a.py")
    (root / "linked_dir").symlink_to(outside, target_is_directory=True)

    assert enumerate_files(root) == {Path("a.py")}


def test_missing_root_raises(tmp_path):
    with pytest.raises(EnumerationError, match="does not exist"):
        enumerate_files(tmp_path / "missing")


def test_file_root_raises(tmp_path):
    write_files(tmp_path, ["a.py"])

    with pytest.raises(EnumerationError, match="not a directory"):
        enumerate_files(tmp_path / "a.py")


def test_enumeration_error_is_a_collection_error():
    assert issubclass(EnumerationError, FileCollectionError)


@pytest.mark.skipif(
    sys.platform == "win32" or running_as_root,
    reason="directory permissions are not enforced",
)
def test_unlistable_subdirectory_fails_the_whole_enumeration(tmp_path):
    write_files(tmp_path, ["a.py", "locked/b.py"])
    locked = tmp_path / "locked"
    locked.chmod(0o000)
    try:
        with pytest.raises(EnumerationError, match="Cannot list directory"):
            enumerate_files(tmp_path)
    finally:
        locked.chmod(0o755)
