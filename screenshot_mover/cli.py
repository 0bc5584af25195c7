"""Command line interface for ScreenshotMover."""
from __future__ import annotations

import argparse
import logging
import signal
import sys
import threading
from contextlib import contextmanager
from pathlib import Path
from typing import Iterator

from .config import MoverOptions
from .errors import (
    ConfigError,
    DestinationCreateError,
    PatternError,
    SourceMissingError,
    StartupError,
)
from .logger import configure_logging, log_event
from .patterns import SCREENSHOT_PATTERN, pattern_predicate
from .processor import ScreenshotProcessor
from .scanner import process_existing_files
from .watcher import watch_folder


def main(argv: list[str] | None = None) -> int:
    parser = _build_parser()
    args = parser.parse_args(argv)
    options = MoverOptions(
        source=args.src,
        destination=args.dest,
        dry_run=args.dry_run,
        watch=args.watch,
        pattern=args.pattern,
        log_file=args.log_file,
        verbose=args.verbose,
    )
    logger = configure_logging(
        options.log_file,
        level=logging.DEBUG if options.verbose else logging.INFO,
    )
    try:
        return run(options, logger)
    except (StartupError, ConfigError, PatternError) as exc:
        log_event(
            logger,
            level=logging.ERROR,
            action="startup.failed",
            message=str(exc),
            extra={"error": type(exc).__name__},
        )
        print(f"Error: {exc}", file=sys.stderr)
        return 1


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="screenshot-mover",
        description="Move macOS screenshots out of a folder, once or continuously",
    )
    parser.add_argument("--src", type=Path, required=True, help="Source folder to search for screenshots")
    parser.add_argument("--dest", type=Path, required=True, help="Destination folder to move screenshots")
    parser.add_argument(
        "--dry-run",
        action="store_true",
        help="Show what would be done without actually moving files",
    )
    parser.add_argument(
        "--watch",
        action="store_true",
        help="Watch the source folder for new screenshots and move them automatically",
    )
    parser.add_argument(
        "--pattern",
        default=SCREENSHOT_PATTERN,
        help="Regular expression a filename must match to be moved",
    )
    parser.add_argument("--log-file", type=Path, help="Write JSON logs to this file instead of stderr")
    parser.add_argument("--verbose", action="store_true", help="Enable debug logging")
    return parser


def run(options: MoverOptions, logger: logging.Logger) -> int:
    """Scan the source folder and optionally keep watching it."""

    if options.dry_run:
        print("Running in dry run mode")

    predicate = pattern_predicate(options.pattern)
    _check_source(options.source)
    if not options.dry_run:
        _ensure_destination(options.destination)

    processor = ScreenshotProcessor(
        options.source,
        options.destination,
        dry_run=options.dry_run,
        predicate=predicate,
        logger=logger.getChild("processor"),
    )
    process_existing_files(processor)

    if options.watch:
        cancel = threading.Event()
        with _cancel_on_signals(cancel):
            watch_folder(processor, cancel=cancel)
    return 0


def _check_source(source: Path) -> None:
    if not source.is_dir():
        raise SourceMissingError(f"Source folder does not exist or is not a directory: {source}")


def _ensure_destination(destination: Path) -> None:
    if destination.is_dir():
        return
    try:
        destination.mkdir(parents=True, exist_ok=True)
    except OSError as exc:
        raise DestinationCreateError(f"Failed to create destination folder {destination}: {exc}") from exc


@contextmanager
def _cancel_on_signals(cancel: threading.Event) -> Iterator[None]:
    """Set *cancel* on SIGINT/SIGTERM for the duration of the block."""

    if threading.current_thread() is not threading.main_thread():
        yield
        return

    def handler(signum: int, frame: object) -> None:
        cancel.set()

    previous = {sig: signal.signal(sig, handler) for sig in (signal.SIGINT, signal.SIGTERM)}
    try:
        yield
    finally:
        for sig, old in previous.items():
            signal.signal(sig, old)


if __name__ == "__main__":  # pragma: no cover
    raise SystemExit(main())
