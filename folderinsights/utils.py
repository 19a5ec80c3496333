from __future__ import annotations
import re

UNITS = ["B", "KB", "MB", "GB", "TB", "PB"]

_SIZE_RE = re.compile(r"^\s*(\d+(?:\.\d+)?)\s*([KMGTP]?I?B?)\s*$", re.IGNORECASE)


def format_bytes(num: int) -> str:
    """Human-readable size in binary units, e.g. '350 B', '1.50 KB'."""
    if abs(num) < 1024:
        return f"{num} B"
    value = float(num)
    unit = 0
    while abs(value) >= 1024.0 and unit < len(UNITS) - 1:
        value /= 1024.0
        unit += 1
    return f"{value:.2f} {UNITS[unit]}"


def parse_size(text: str) -> int:
    """Parse '1073741824', '512MB', '1.5 GiB' into bytes (binary units)."""
    m = _SIZE_RE.match(text or "")
    if not m:
        raise ValueError(f"Invalid size: {text!r}")
    value, unit = m.groups()
    unit = unit.upper().replace("I", "")
    if unit in ("", "B"):
        power = 0
    else:
        if not unit.endswith("B"):
            unit += "B"
        power = UNITS.index(unit)
    return int(float(value) * (1024 ** power))


def format_elapsed(seconds: float) -> str:
    total = int(max(0.0, seconds))
    h, rem = divmod(total, 3600)
    m, s = divmod(rem, 60)
    return f"{h:02d}:{m:02d}:{s:02d}"
