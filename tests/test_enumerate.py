import os

import pytest

from folderinsights.errors import TraversalError
from folderinsights import scanner
from folderinsights.scanner import list_folders

from conftest import can_symlink


def test_root_first_depth_first(tmp_path):
    for d in ["b/y", "a/x/deep", "a/w", "c"]:
        (tmp_path / d).mkdir(parents=True)
    (tmp_path / "a" / "file.txt").write_text("not a folder")
    root = str(tmp_path)
    got = [os.path.relpath(p, root) for p in list_folders(root)]
    assert got == [".", "a", os.path.join("a", "w"), os.path.join("a", "x"),
                   os.path.join("a", "x", "deep"), "b", os.path.join("b", "y"), "c"]


def test_single_folder(tmp_path):
    assert list_folders(str(tmp_path)) == [str(tmp_path)]


def test_deep_tree_does_not_recurse(tmp_path):
    p = tmp_path
    for _ in range(60):
        p = p / "d"
    p.mkdir(parents=True)
    assert len(list_folders(str(tmp_path))) == 61


def test_symlinked_folder_not_traversed(tmp_path):
    if not can_symlink(tmp_path):
        pytest.skip("symlinks not available")
    (tmp_path / "real" / "inner").mkdir(parents=True)
    os.symlink(tmp_path / "real", tmp_path / "link", target_is_directory=True)
    os.symlink(tmp_path, tmp_path / "real" / "loop", target_is_directory=True)
    got = list_folders(str(tmp_path))
    assert got == [str(tmp_path), str(tmp_path / "real"), str(tmp_path / "real" / "inner")]


def test_missing_root_raises(tmp_path):
    missing = str(tmp_path / "nope")
    with pytest.raises(TraversalError) as ei:
        list_folders(missing)
    assert ei.value.path == missing


def test_unlistable_folder_raises(tmp_path, monkeypatch):
    (tmp_path / "locked").mkdir()
    real_scandir = os.scandir
    locked = str(tmp_path / "locked")

    def fake_scandir(path):
        if os.fspath(path) == locked:
            raise PermissionError(13, "Permission denied", locked)
        return real_scandir(path)

    monkeypatch.setattr(scanner.os, "scandir", fake_scandir)
    with pytest.raises(TraversalError) as ei:
        list_folders(str(tmp_path))
    assert ei.value.path == locked
    assert "Permission denied" in str(ei.value)
