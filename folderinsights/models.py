from __future__ import annotations
from dataclasses import dataclass, field
from datetime import date
from typing import List, Dict


@dataclass
class FileRecord:
    folder: str
    size: int
    extension: str
    earliest: date


@dataclass
class ScanResult:
    roots: List[str]
    by_date: Dict[date, int] = field(default_factory=dict)
    by_extension: Dict[str, int] = field(default_factory=dict)
    by_folder: Dict[str, int] = field(default_factory=dict)
    files: int = 0
    folders: int = 0
    bytes_scanned: int = 0
    elapsed_sec: float = 0.0
    canceled: bool = False
    reports_written: List[str] = field(default_factory=list)
