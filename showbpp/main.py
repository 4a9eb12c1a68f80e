import argparse
import logging
import sys
import time
from pathlib import Path
from typing import List, Optional

import click
from rich.logging import RichHandler

from . import config
from .core import BppScanApp
from .exceptions import NoVideoFilesError
from .metadata.probe import FfprobeProber
from .organization.marker import FileMarker
from .reporting import ConsoleReporter, CsvReportWriter


def setup_logging(verbose: bool, log_file: Optional[Path] = None):
    """
    Console logging goes through rich (warnings only unless verbose);
    the optional log file records everything at DEBUG.
    """
    console_handler = RichHandler(show_path=False)
    console_handler.setLevel(logging.DEBUG if verbose else logging.WARNING)
    handlers: List[logging.Handler] = [console_handler]

    if log_file:
        log_file.parent.mkdir(parents=True, exist_ok=True)
        file_handler = logging.FileHandler(log_file, encoding='utf-8')
        file_handler.setFormatter(logging.Formatter("%(asctime)s [%(levelname)s] %(message)s"))
        handlers.append(file_handler)

    logging.basicConfig(
        level=logging.DEBUG,
        format="%(message)s",
        handlers=handlers,
        force=True,
    )


def parse_args(argv: Optional[List[str]] = None):
    p = argparse.ArgumentParser(
        prog="showbpp",
        description="Compute the BPP (bits per pixel) of video files and mark AV1 files as already optimal",
    )

    p.add_argument("paths", nargs="*", type=Path, help="Video files or directories (scanned recursively)")

    p.add_argument("--ffprobe", default=None, help=f"ffprobe executable (default: ${config.FFPROBE_ENV_VAR} or 'ffprobe')")
    p.add_argument("--timeout", type=float, default=None, help="Seconds before a single ffprobe call is abandoned (default: wait forever)")
    p.add_argument("--dry-run", action="store_true", help="Report renames without touching the disk")
    p.add_argument("--report-csv", type=Path, default=None, help="Also write per-file results to this CSV file")
    p.add_argument("--no-pause", action="store_true", help="Exit immediately instead of waiting for a key press")
    p.add_argument("--no-progress", action="store_true", help="Hide the progress bar")
    p.add_argument("-v", "--verbose", action="store_true", help="Enable debug logging")
    p.add_argument("--log-file", type=Path, default=None, help="Write a debug log to this file")

    return p.parse_args(argv)


def print_usage_and_wait(no_pause: bool):
    print(config.USAGE_TEXT, file=sys.stderr)
    if not no_pause:
        time.sleep(config.USAGE_DELAY_SEC)


def wait_for_key():
    # No-op when stdin is not a terminal; Ctrl-C and EOF just end the wait
    click.pause(info="Press any key to exit...")


def main(argv: Optional[List[str]] = None) -> int:
    args = parse_args(argv)

    if not args.paths:
        try:
            print_usage_and_wait(args.no_pause)
        except KeyboardInterrupt:
            return config.EXIT_INTERRUPTED
        return config.EXIT_FAILURE

    setup_logging(args.verbose, args.log_file)

    reporter = ConsoleReporter()
    app = BppScanApp(
        prober=FfprobeProber(executable=args.ffprobe, timeout=args.timeout),
        reporter=reporter,
        marker=FileMarker(dry_run=args.dry_run),
        show_progress=not args.no_progress,
    )

    try:
        summary = app.run(args.paths)
    except NoVideoFilesError:
        logging.debug("Nothing to do.")
        return config.EXIT_FAILURE
    except KeyboardInterrupt:
        logging.warning("Operation cancelled by user.")
        return config.EXIT_INTERRUPTED
    except Exception:
        logging.exception("Fatal error during scan.")
        return config.EXIT_FAILURE

    if args.report_csv:
        try:
            CsvReportWriter().write(summary, args.report_csv)
        except OSError as e:
            logging.error(f"Failed to write report {args.report_csv}: {e}")

    reporter.summary(summary)
    reporter.bell()

    if not args.no_pause:
        wait_for_key()

    return config.EXIT_OK


if __name__ == "__main__":
    sys.exit(main())
