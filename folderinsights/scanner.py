from __future__ import annotations
import logging
import os
import stat as statmod
import time
from datetime import datetime
from typing import Any, List, Optional, Sequence, Set, Tuple

from .aggregate import SizeAggregator, earliest_date
from .errors import ConfigurationError, FileAccessError, TraversalError
from .models import ScanResult
from .progress import ProgressSink
from .report import (
    DATE_HEADER, EXTENSION_HEADER, FOLDER_HEADER,
    destination_name, format_date, is_sink, write_report,
)
from .utils import format_elapsed

logger = logging.getLogger(__name__)

_REPARSE_ATTR = getattr(statmod, "FILE_ATTRIBUTE_REPARSE_POINT", 0)


def is_reparse_point(entry: os.DirEntry) -> bool:
    """Symlink, junction, reparse-tagged entry or mount point."""
    if entry.is_symlink():
        return True
    is_junction = getattr(entry, "is_junction", None)
    if is_junction is not None and is_junction():
        return True
    st = entry.stat(follow_symlinks=False)
    if getattr(st, "st_file_attributes", 0) & _REPARSE_ATTR:
        return True
    return os.path.ismount(entry.path)


def _entries(path: str) -> List[os.DirEntry]:
    with os.scandir(path) as it:
        return sorted(it, key=lambda e: e.name)


def list_folders(root: str) -> List[str]:
    """Every directory under root, depth-first, root first.

    Reparse points are left out together with everything below them.
    """
    folders: List[str] = []
    stack = [root]
    while stack:
        path = stack.pop()
        folders.append(path)
        subdirs = []
        try:
            for entry in _entries(path):
                if not entry.is_dir():
                    continue
                if is_reparse_point(entry):
                    logger.debug("Skipping reparse point %s", entry.path)
                    continue
                subdirs.append(entry.path)
        except OSError as e:
            raise TraversalError(path, e.strerror or str(e)) from e
        stack.extend(reversed(subdirs))
    return folders


def file_times(st: os.stat_result) -> Tuple[float, float]:
    """(created, modified) timestamps.

    Where the platform has no birth time, st_ctime stands in: it is the
    creation time on Windows and the inode change time elsewhere.
    """
    created = getattr(st, "st_birthtime", None)
    if created is None:
        created = st.st_ctime
    return created, st.st_mtime


def file_extension(name: str) -> str:
    """From the last dot to the end; "" when there is no dot or it ends the name."""
    i = name.rfind(".")
    if i < 0 or i == len(name) - 1:
        return ""
    return name[i:]


def _folder_identity(path: str) -> str:
    return os.path.normcase(os.path.realpath(path))


def _check_destination(dest: Any, label: str) -> Any:
    if dest is None:
        raise ConfigurationError(f"{label} is required")
    if is_sink(dest):
        return dest
    try:
        path = os.path.abspath(os.fspath(dest))
    except TypeError as e:
        raise ConfigurationError(f"{label} must be a path or a writable sink") from e
    if not os.path.isdir(os.path.dirname(path)):
        raise ConfigurationError(f"Directory not found for {path}")
    return path


class FolderScanner:
    """Scans one or more root folders and writes the three size reports.

    Without a progress sink nothing is reported and the scan cannot be
    canceled.
    """

    def __init__(self,
                 roots: Sequence[str],
                 date_report: Any,
                 extension_report: Any,
                 folder_report: Any,
                 folder_report_min_bytes: int = 0,
                 progress: Optional[ProgressSink] = None):
        if roots is None:
            raise ConfigurationError("roots is required")
        if isinstance(roots, (str, bytes, os.PathLike)):
            roots = [roots]
        roots = list(roots)
        if not roots:
            raise ConfigurationError("roots must contain at least one directory")
        self.roots: List[str] = []
        for r in roots:
            if r is None:
                raise ConfigurationError("roots must not contain None")
            p = os.path.abspath(os.fspath(r))
            if not os.path.isdir(p):
                raise ConfigurationError(f"Root directory not found: {p}")
            self.roots.append(p)

        self.date_report = _check_destination(date_report, "date_report")
        self.extension_report = _check_destination(extension_report, "extension_report")
        self.folder_report = _check_destination(folder_report, "folder_report")

        if (not isinstance(folder_report_min_bytes, int)
                or isinstance(folder_report_min_bytes, bool)
                or folder_report_min_bytes < 0):
            raise ConfigurationError("folder_report_min_bytes must be a non-negative integer")
        self.folder_report_min_bytes = folder_report_min_bytes

        self.progress = progress
        self.tallies = SizeAggregator()
        self._visited: Set[str] = set()
        self._t0 = time.monotonic()

    # -------------------- progress --------------------
    def _canceled(self) -> bool:
        return self.progress is not None and self.progress.request_cancel

    def _report(self, message: str):
        if self.progress is None:
            return
        elapsed = format_elapsed(time.monotonic() - self._t0)
        self.progress.report_progress(f"{datetime.now():%H:%M:%S} {elapsed} - {message}")

    # -------------------- scan --------------------
    def scan(self) -> ScanResult:
        self._t0 = time.monotonic()
        self._report("Scan starting")
        self.tallies.reset()
        self._visited.clear()
        result = ScanResult(roots=list(self.roots))
        logger.info("Scanning %d root(s): %s", len(self.roots), ", ".join(self.roots))

        for root in self.roots:
            if not self._scan_root(root):
                return self._finish(result, canceled=True)

        reports = [
            ("extension", self.extension_report, self.tallies.by_extension, EXTENSION_HEADER, None, 0),
            ("date", self.date_report, self.tallies.by_date, DATE_HEADER, format_date, 0),
            ("folder", self.folder_report, self.tallies.by_folder, FOLDER_HEADER, None,
             self.folder_report_min_bytes),
        ]
        for kind, dest, rows, header, fmt, min_bytes in reports:
            if self._canceled():
                return self._finish(result, canceled=True)
            self._report(f"Writing size by {kind} report")
            write_report(dest, rows, header, format_key=fmt, min_bytes=min_bytes)
            result.reports_written.append(destination_name(dest))

        self._report("Done")
        return self._finish(result, canceled=False)

    def _finish(self, result: ScanResult, canceled: bool) -> ScanResult:
        result.by_date = dict(self.tallies.by_date)
        result.by_extension = dict(self.tallies.by_extension)
        result.by_folder = dict(self.tallies.by_folder)
        result.files = self.tallies.files
        result.folders = len(self._visited)
        result.bytes_scanned = self.tallies.total_bytes
        result.elapsed_sec = time.monotonic() - self._t0
        result.canceled = canceled
        if canceled:
            logger.info("Scan canceled after %d files in %.2fs", result.files, result.elapsed_sec)
        else:
            logger.info("Scan finished: %d files, %d folders, %d bytes in %.2fs",
                        result.files, result.folders, result.bytes_scanned, result.elapsed_sec)
        return result

    def _scan_root(self, root: str) -> bool:
        if self._canceled():
            return False
        self._report(f"Building folder list for {root}")
        folders = list_folders(root)

        # folders[0] is the root itself
        for folder in folders:
            if not self._scan_folder(folder):
                return False
        return True

    def _scan_folder(self, folder: str) -> bool:
        """Tally the files directly inside folder. False when canceled."""
        if self._canceled():
            return False
        ident = _folder_identity(folder)
        if ident in self._visited:
            logger.debug("Already scanned %s", folder)
            return True
        self._visited.add(ident)

        self._report(f"Scanning files in {folder}")
        self.tallies.touch_folder(folder)

        try:
            files = [e for e in _entries(folder) if not e.is_dir()]
        except OSError as e:
            raise TraversalError(folder, e.strerror or str(e)) from e

        for entry in files:
            if self._canceled():
                return False
            st = self._stat_file(entry.path)
            created, modified = file_times(st)
            self.tallies.record_file(
                folder,
                int(st.st_size),
                file_extension(entry.name),
                earliest_date(created, modified),
            )
        return True

    def _stat_file(self, path: str) -> os.stat_result:
        try:
            return os.lstat(path)
        except OSError as e:
            raise FileAccessError(path, e.strerror or str(e)) from e
