from __future__ import annotations
from typing import Any, List, Optional

from PySide6.QtCore import QThread, Signal

from .errors import FolderInsightsError
from .progress import FolderProgress
from .scanner import FolderScanner


class ScanThread(QThread):
    """Runs a FolderScanner off the GUI thread."""
    progress = Signal(str)
    done = Signal(object)    # ScanResult
    error = Signal(str)

    def __init__(self, roots: List[str], date_report: Any, extension_report: Any,
                 folder_report: Any, folder_report_min_bytes: int = 0,
                 parent: Optional[Any] = None):
        super().__init__(parent)
        self.cancel_flag = FolderProgress()
        self.cancel_flag.add_listener(self.progress.emit)
        # Configuration errors surface here, on the caller's thread.
        self.scanner = FolderScanner(roots, date_report, extension_report, folder_report,
                                     folder_report_min_bytes, progress=self.cancel_flag)

    def cancel(self):
        self.cancel_flag.cancel()

    def run(self):
        try:
            res = self.scanner.scan()
            self.done.emit(res)
        except FolderInsightsError as e:
            self.error.emit(str(e))
