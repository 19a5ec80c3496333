from __future__ import annotations
from datetime import date, datetime, timedelta, timezone
from typing import Dict
from .models import FileRecord

EPOCH = datetime(1970, 1, 1, tzinfo=timezone.utc)


def earliest_date(created: float, modified: float) -> date:
    """UTC calendar date of whichever timestamp comes first.

    Timestamps beyond the datetime range land on date.min / date.max.
    """
    ts = min(created, modified)
    try:
        return (EPOCH + timedelta(seconds=ts)).date()
    except OverflowError:
        return date.min if ts < 0 else date.max


class SizeAggregator:
    """Running byte totals by date, by extension and by folder."""

    def __init__(self):
        self.by_date: Dict[date, int] = {}
        self.by_extension: Dict[str, int] = {}
        self.by_folder: Dict[str, int] = {}
        self.files = 0
        self.total_bytes = 0

    def reset(self):
        self.by_date.clear()
        self.by_extension.clear()
        self.by_folder.clear()
        self.files = 0
        self.total_bytes = 0

    def touch_folder(self, folder: str):
        self.by_folder.setdefault(folder, 0)

    def record_file(self, folder: str, size: int, extension: str, earliest: date):
        self.by_folder[folder] = self.by_folder.get(folder, 0) + size
        self.by_date[earliest] = self.by_date.get(earliest, 0) + size
        self.by_extension[extension] = self.by_extension.get(extension, 0) + size
        self.files += 1
        self.total_bytes += size

    def record(self, rec: FileRecord):
        self.record_file(rec.folder, rec.size, rec.extension, rec.earliest)
