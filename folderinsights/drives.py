from __future__ import annotations
import logging
import os
from dataclasses import dataclass
from typing import List

import psutil

logger = logging.getLogger(__name__)

# Pseudo and virtual filesystems that hold no user data worth reporting.
SKIP_FSTYPES = {"", "proc", "sysfs", "devtmpfs", "tmpfs", "squashfs", "overlay", "devfs", "autofs"}


@dataclass
class Drive:
    mountpoint: str
    fstype: str
    used: int
    free: int


def list_drives() -> List[Drive]:
    """Mounted real filesystems, one entry per mount point, ordered by path."""
    found = {}
    for part in psutil.disk_partitions(all=False):
        if not part.mountpoint or part.fstype.lower() in SKIP_FSTYPES:
            continue
        mountpoint = os.path.abspath(part.mountpoint)
        if mountpoint in found:
            continue
        try:
            usage = psutil.disk_usage(mountpoint)
        except OSError as e:
            logger.debug("Skipping %s: %s", mountpoint, e)
            continue
        found[mountpoint] = Drive(mountpoint, part.fstype, int(usage.used), int(usage.free))
    return sorted(found.values(), key=lambda d: d.mountpoint.lower())


def drive_roots() -> List[str]:
    return [d.mountpoint for d in list_drives()]


def estimate_used_bytes(paths: List[str]) -> int:
    """Sum of used space on the drives holding paths, each drive counted once."""
    total = 0
    seen = set()
    for p in paths:
        try:
            dev = os.stat(p).st_dev
            if dev in seen:
                continue
            u = psutil.disk_usage(p)
        except OSError as e:
            logger.debug("No usage for %s: %s", p, e)
            continue
        seen.add(dev)
        total += int(u.used)
    return total
