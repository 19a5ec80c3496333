from __future__ import annotations
import threading
from typing import Callable, List, Protocol

ProgressListener = Callable[[str], None]


class ProgressSink(Protocol):
    """Anything the scanner can report to and poll for cancellation."""

    @property
    def request_cancel(self) -> bool: ...

    def report_progress(self, message: str) -> None: ...


class FolderProgress:
    """Default progress sink: a cancel flag plus a list of listeners.

    The flag and the listener list share one re-entrant lock, so the flag may
    be flipped from any thread, including from inside a listener.
    """

    def __init__(self):
        self._lock = threading.RLock()
        self._cancel = False
        self._listeners: List[ProgressListener] = []

    @property
    def request_cancel(self) -> bool:
        with self._lock:
            return self._cancel

    @request_cancel.setter
    def request_cancel(self, value: bool):
        with self._lock:
            self._cancel = bool(value)

    def cancel(self):
        self.request_cancel = True

    def __call__(self) -> bool:
        return self.request_cancel

    def add_listener(self, fn: ProgressListener):
        with self._lock:
            self._listeners.append(fn)

    def remove_listener(self, fn: ProgressListener):
        with self._lock:
            if fn in self._listeners:
                self._listeners.remove(fn)

    def report_progress(self, message: str):
        with self._lock:
            for fn in list(self._listeners):
                fn(message)
