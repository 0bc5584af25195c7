"""Per-file processing: match a filename and move it to the destination."""
from __future__ import annotations

import logging
from enum import Enum
from pathlib import Path

from .logger import get_logger, log_event
from .patterns import Predicate
from .relocator import Relocator, relocate


class ProcessOutcome(str, Enum):
    """Result of processing a single filename."""

    IGNORED = "ignored"
    DRY_RUN = "dry_run"
    MOVED = "moved"
    VANISHED = "vanished"
    FAILED = "failed"


class ScreenshotProcessor:
    """Move files whose names satisfy *predicate* from *source_dir* to *destination_dir*.

    The processor never raises for per-file conditions. A source that is gone
    by the time it is processed is reported as :attr:`ProcessOutcome.VANISHED`,
    which makes repeated calls for the same name safe.
    """

    def __init__(
        self,
        source_dir: str | Path,
        destination_dir: str | Path,
        *,
        dry_run: bool,
        predicate: Predicate,
        relocator: Relocator = relocate,
        logger: logging.Logger | None = None,
    ) -> None:
        self.source_dir = Path(source_dir)
        self.destination_dir = Path(destination_dir)
        self.dry_run = dry_run
        self.predicate = predicate
        self.relocator = relocator
        self.logger = logger or get_logger("processor")

    def process(self, filename: str) -> ProcessOutcome:
        if not self.predicate(filename):
            return ProcessOutcome.IGNORED

        source = self.source_dir / filename
        destination = self.destination_dir / filename

        if self.dry_run:
            print(f"[DRY RUN] Would move {filename} to {self.destination_dir}")
            log_event(
                self.logger,
                level=logging.INFO,
                action="process.dry_run",
                message=f"Would move {filename}",
                extra={"source": str(source), "destination": str(destination)},
            )
            return ProcessOutcome.DRY_RUN

        if not source.exists():
            log_event(
                self.logger,
                level=logging.WARNING,
                action="process.vanished",
                message=f"Source file does not exist: {source}",
                extra={"file": filename},
            )
            return ProcessOutcome.VANISHED

        failure = self.relocator(source, destination)
        if failure is not None:
            log_event(
                self.logger,
                level=logging.ERROR,
                action="process.move_failed",
                message=(
                    f"Failed to move file {filename}: {failure.detail} "
                    f"(srcPath: {source}, destPath: {destination})"
                ),
                extra={"file": filename, "kind": failure.kind.value},
            )
            return ProcessOutcome.FAILED

        print(f"Moved {filename} to {self.destination_dir}")
        log_event(
            self.logger,
            level=logging.INFO,
            action="process.moved",
            message=f"Moved {filename}",
            extra={"source": str(source), "destination": str(destination)},
        )
        return ProcessOutcome.MOVED


def process_screenshot(
    filename: str,
    source_dir: str | Path,
    destination_dir: str | Path,
    dry_run: bool,
    predicate: Predicate,
) -> ProcessOutcome:
    """Process a single *filename* without keeping a processor around."""

    processor = ScreenshotProcessor(
        source_dir,
        destination_dir,
        dry_run=dry_run,
        predicate=predicate,
    )
    return processor.process(filename)


__all__ = ["ProcessOutcome", "ScreenshotProcessor", "process_screenshot"]
