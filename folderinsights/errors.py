from __future__ import annotations
from typing import Optional


class FolderInsightsError(Exception):
    """Base class for every error raised by a scan."""


class ConfigurationError(FolderInsightsError, ValueError):
    """Invalid scanner input; raised before any scan starts."""


class _PathError(FolderInsightsError):
    action = "access"

    def __init__(self, path: str, reason: Optional[str] = None):
        self.path = path
        self.reason = reason
        msg = f"Cannot {self.action} {path}"
        if reason:
            msg += f": {reason}"
        super().__init__(msg)


class TraversalError(_PathError):
    action = "list directory"


class FileAccessError(_PathError):
    action = "read metadata of"


class OutputError(_PathError):
    action = "write report"
