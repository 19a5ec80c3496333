from __future__ import annotations
import argparse
import logging
import os
import signal
import sys
import threading
from typing import List, Optional

from rich.console import Console
from rich.logging import RichHandler
from rich.table import Table
from rich import box

from .drives import drive_roots, estimate_used_bytes
from .errors import ConfigurationError, FolderInsightsError
from .models import ScanResult
from .progress import FolderProgress
from .scanner import FolderScanner
from .utils import format_bytes, format_elapsed, parse_size

DEFAULT_DATE_REPORT = "DateReport.csv"
DEFAULT_EXTENSION_REPORT = "ExtensionReport.csv"
DEFAULT_FOLDER_REPORT = "FolderReport.csv"

EXIT_OK = 0
EXIT_ERROR = 1
EXIT_CONFIG = 2
EXIT_CANCELED = 130

logger = logging.getLogger("folderinsights")


def _make_console() -> Console:
    if sys.stdout.isatty():
        return Console()
    # Redirected output: no ANSI, no wrapping of long paths
    return Console(width=200, force_terminal=False, no_color=True, highlight=False, soft_wrap=True)


def printable(text: str) -> str:
    """Undecodable file name bytes become U+FFFD for display."""
    return text.encode("utf-8", "surrogateescape").decode("utf-8", "replace")


def build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(
        prog="folderinsights",
        description="Scan folders and report total size by date, extension and folder.",
    )
    p.add_argument("roots", nargs="*", metavar="ROOT", help="Folder(s) to scan")
    p.add_argument("-a", "--all-drives", action="store_true",
                   help="Scan every mounted drive in addition to ROOT(s)")
    p.add_argument("-o", "--out-dir", default=".",
                   help="Folder for the reports (default: current folder)")
    p.add_argument("--date-report", help=f"Date report path (default: OUT_DIR/{DEFAULT_DATE_REPORT})")
    p.add_argument("--extension-report",
                   help=f"Extension report path (default: OUT_DIR/{DEFAULT_EXTENSION_REPORT})")
    p.add_argument("--folder-report", help=f"Folder report path (default: OUT_DIR/{DEFAULT_FOLDER_REPORT})")
    p.add_argument("-m", "--min-folder-size", type=parse_size, default=0, metavar="SIZE",
                   help="Leave folders smaller than SIZE out of the folder report (e.g. 1GB)")
    p.add_argument("-q", "--quiet", action="store_true", help="Do not print progress lines")
    p.add_argument("-v", "--verbose", action="store_true", help="Debug logging")
    return p


def setup_logging(console: Console, verbose: bool):
    handler = RichHandler(console=console, show_path=False)
    handler.setFormatter(logging.Formatter("%(message)s", datefmt="[%X]"))
    logger.handlers[:] = [handler]
    logger.setLevel(logging.DEBUG if verbose else logging.WARNING)
    logger.propagate = False


def print_summary(console: Console, res: ScanResult):
    t = Table(box=box.SIMPLE, show_header=False)
    t.add_column("Key", style="bold")
    t.add_column("Value", justify="right")
    t.add_row("Files", f"{res.files:,}")
    t.add_row("Folders", f"{res.folders:,}")
    t.add_row("Total size", format_bytes(res.bytes_scanned))
    t.add_row("Elapsed", format_elapsed(res.elapsed_sec))
    console.print(t)
    for path in res.reports_written:
        console.print(f"Report: {printable(path)}", markup=False)


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    console = _make_console()
    setup_logging(console, args.verbose)

    roots = list(args.roots)
    if args.all_drives:
        drives = drive_roots()
        roots.extend(drives)
        if not args.quiet:
            console.print(f"{len(drives)} drive(s), about {format_bytes(estimate_used_bytes(drives))} in use")
    if not roots:
        console.print("No folder to scan: give ROOT(s) or --all-drives")
        return EXIT_CONFIG

    out_dir = args.out_dir
    progress = FolderProgress()
    if not args.quiet:
        progress.add_listener(lambda msg: console.print(printable(msg), markup=False, highlight=False))

    try:
        scanner = FolderScanner(
            roots,
            args.date_report or os.path.join(out_dir, DEFAULT_DATE_REPORT),
            args.extension_report or os.path.join(out_dir, DEFAULT_EXTENSION_REPORT),
            args.folder_report or os.path.join(out_dir, DEFAULT_FOLDER_REPORT),
            folder_report_min_bytes=args.min_folder_size,
            progress=progress,
        )
    except ConfigurationError as e:
        logger.error("%s", printable(str(e)))
        return EXIT_CONFIG

    def on_sigint(_signum, _frame):
        progress.cancel()

    # signal handlers can only be installed from the main thread
    previous = None
    if threading.current_thread() is threading.main_thread():
        previous = signal.signal(signal.SIGINT, on_sigint)
    try:
        res = scanner.scan()
    except FolderInsightsError as e:
        logger.error("%s", printable(str(e)))
        return EXIT_ERROR
    finally:
        if previous is not None:
            signal.signal(signal.SIGINT, previous)

    if res.canceled:
        console.print("Scan canceled")
        return EXIT_CANCELED
    print_summary(console, res)
    return EXIT_OK
