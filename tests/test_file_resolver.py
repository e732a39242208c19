# topmark:header:start
#
#   project      : CommentFlow
#   file         : test_file_resolver.py
#   file_relpath : tests/test_file_resolver.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""File list resolution: directory walks, extension filter and exclusions."""

from __future__ import annotations

from pathlib import Path

import pytest

from commentflow.file_resolver import resolve_file_list
from tests.conftest import make_config


def _touch(root: Path, *names: str) -> None:
    for name in names:
        path: Path = root / name
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text("x = 1\n", encoding="utf-8")


def test_directory_walk_filters_by_extension(tmp_path: Path) -> None:
    """Only files with a configured suffix are collected from directories."""
    _touch(tmp_path, "a.py", "pkg/b.py", "pkg/c.txt", "pkg/D.PY")
    files = resolve_file_list(make_config(files=[str(tmp_path)]), workspace_root=tmp_path)
    assert [f.relative_to(tmp_path).as_posix() for f in files] == ["a.py", "pkg/D.PY", "pkg/b.py"]


def test_explicit_file_bypasses_extension_filter(tmp_path: Path) -> None:
    """A file named on the command line is processed whatever its suffix."""
    _touch(tmp_path, "notes.txt")
    target: Path = tmp_path / "notes.txt"
    assert resolve_file_list(make_config(files=[str(target)]), workspace_root=tmp_path) == [target]


def test_exclude_patterns_apply_to_walked_and_explicit_files(tmp_path: Path) -> None:
    """Gitignore-style patterns remove matching files."""
    _touch(tmp_path, "keep.py", "build/gen.py", "skip_me.py")
    config = make_config(
        files=[str(tmp_path), str(tmp_path / "skip_me.py")],
        exclude_patterns=["build/", "skip_*.py"],
    )
    files = resolve_file_list(config, workspace_root=tmp_path)
    assert files == [tmp_path / "keep.py"]


def test_duplicates_are_removed(tmp_path: Path) -> None:
    """A file reached twice is listed once."""
    _touch(tmp_path, "a.py")
    config = make_config(files=[str(tmp_path), str(tmp_path / "a.py")], exclude_patterns=[])
    assert resolve_file_list(config, workspace_root=tmp_path) == [tmp_path / "a.py"]


def test_missing_path_raises(tmp_path: Path) -> None:
    """A path that does not exist is an error."""
    with pytest.raises(FileNotFoundError):
        resolve_file_list(make_config(files=[str(tmp_path / "nope.py")]), workspace_root=tmp_path)


def test_custom_extensions(tmp_path: Path) -> None:
    """Extensions configured without a dot are normalized."""
    _touch(tmp_path, "a.py", "b.pyi")
    files = resolve_file_list(
        make_config(files=[str(tmp_path)], extensions=["pyi"]), workspace_root=tmp_path
    )
    assert files == [tmp_path / "b.pyi"]
