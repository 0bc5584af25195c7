"""One-shot scan of the files already present in the source directory."""

from __future__ import annotations

import logging
import os
from collections import Counter
from dataclasses import dataclass, field

from .errors import SourceUnreadableError
from .logger import log_event
from .processor import ProcessOutcome, ScreenshotProcessor


@dataclass
class ScanSummary:
    """Counts gathered while scanning the source directory."""

    directories_skipped: int = 0
    outcomes: Counter = field(default_factory=Counter)

    @property
    def files_seen(self) -> int:
        return sum(self.outcomes.values())

    def count(self, outcome: ProcessOutcome) -> int:
        return self.outcomes[outcome]


def process_existing_files(processor: ScreenshotProcessor) -> ScanSummary:
    """Feed every file in the processor's source directory through it once."""

    source = processor.source_dir
    try:
        with os.scandir(source) as it:
            entries = sorted(it, key=lambda entry: entry.name)
    except OSError as exc:
        raise SourceUnreadableError(f"Failed to read source folder {source}: {exc}") from exc

    summary = ScanSummary()
    for entry in entries:
        if entry.is_dir():
            print(f"Skipping directory {entry.name}")
            summary.directories_skipped += 1
            continue
        summary.outcomes[processor.process(entry.name)] += 1

    log_event(
        processor.logger,
        level=logging.INFO,
        action="scan.completed",
        message=f"Scanned {summary.files_seen} file(s) in {source}",
        extra={
            "moved": summary.count(ProcessOutcome.MOVED),
            "dry_run": summary.count(ProcessOutcome.DRY_RUN),
            "failed": summary.count(ProcessOutcome.FAILED),
            "skipped_directories": summary.directories_skipped,
        },
    )
    return summary


__all__ = ["ScanSummary", "process_existing_files"]
