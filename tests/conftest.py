from __future__ import annotations

import os
from datetime import datetime, timezone

import pytest


def utc_ts(year: int, month: int, day: int, hour: int = 12) -> float:
    return datetime(year, month, day, hour, tzinfo=timezone.utc).timestamp()


def make_file(path, size: int, when: float = None):
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_bytes(b"x" * size)
    if when is not None:
        os.utime(path, (when, when))
    return path


@pytest.fixture
def tree(tmp_path):
    """root/a.txt (100, 2024-01-01), root/b.txt (200, 2024-01-02), root/sub/c.log (50, 2024-01-01)."""
    root = tmp_path / "root"
    make_file(root / "a.txt", 100, utc_ts(2024, 1, 1))
    make_file(root / "b.txt", 200, utc_ts(2024, 1, 2))
    make_file(root / "sub" / "c.log", 50, utc_ts(2024, 1, 1))
    return root


@pytest.fixture
def out_dir(tmp_path):
    d = tmp_path / "out"
    d.mkdir()
    return d


@pytest.fixture
def report_paths(out_dir):
    return (
        str(out_dir / "DateReport.csv"),
        str(out_dir / "ExtensionReport.csv"),
        str(out_dir / "FolderReport.csv"),
    )


def can_symlink(tmp_path) -> bool:
    try:
        os.symlink(tmp_path, tmp_path / "_probe", target_is_directory=True)
    except (OSError, NotImplementedError):
        return False
    os.unlink(tmp_path / "_probe")
    return True
