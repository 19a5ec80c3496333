from __future__ import annotations
import csv
import logging
import os
from decimal import Context, Decimal
from typing import Any, Callable, Dict, Optional, Sequence

from .errors import OutputError

logger = logging.getLogger(__name__)

GIGABYTE = Decimal(1073741824)

# n / 2**30 always terminates within 30 decimal places; 64 digits keeps every
# 64-bit byte count exact.
_EXACT = Context(prec=64)

DATE_HEADER = ("Date", "GB")
EXTENSION_HEADER = ("Extension", "GB")
FOLDER_HEADER = ("Folder", "GB")


def bytes_to_gb(num: int) -> str:
    gb = _EXACT.divide(Decimal(num), GIGABYTE)
    text = format(gb, "f")
    if "." in text:
        text = text.rstrip("0").rstrip(".")
    return text


def format_date(d) -> str:
    return d.isoformat()


def is_sink(dest: Any) -> bool:
    return hasattr(dest, "write")


def destination_name(dest: Any) -> str:
    if is_sink(dest):
        return getattr(dest, "name", None) or repr(dest)
    return os.fspath(dest)


def _write_rows(f, rows: Dict[Any, int], header: Sequence[str],
                format_key: Callable[[Any], str], min_bytes: int) -> int:
    w = csv.writer(f, lineterminator="\r\n")
    w.writerow(header)
    n = 0
    for key, size in rows.items():
        if size < min_bytes:
            continue
        w.writerow([format_key(key), bytes_to_gb(size)])
        n += 1
    return n


def write_report(dest: Any,
                 rows: Dict[Any, int],
                 header: Sequence[str],
                 format_key: Optional[Callable[[Any], str]] = None,
                 min_bytes: int = 0) -> int:
    """Write one tally as CSV to a path or an open text sink.

    Rows keep the tally's iteration order. Returns the number of data rows.
    """
    format_key = format_key or str
    name = destination_name(dest)
    try:
        if is_sink(dest):
            n = _write_rows(dest, rows, header, format_key, min_bytes)
        else:
            # surrogateescape writes undecodable OS names back as their original bytes
            with open(dest, "w", encoding="utf-8", errors="surrogateescape", newline="") as f:
                n = _write_rows(f, rows, header, format_key, min_bytes)
    except OSError as e:
        raise OutputError(name, e.strerror or str(e)) from e
    except ValueError as e:
        # closed sink, or a sink whose encoding cannot hold the key
        raise OutputError(name, str(e)) from e
    logger.debug("Wrote %d rows to %s", n, name)
    return n
