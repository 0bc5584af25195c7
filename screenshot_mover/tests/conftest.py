from __future__ import annotations

import json
import logging
from pathlib import Path

import pytest

from screenshot_mover.logger import configure_logging
from screenshot_mover.processor import ProcessOutcome


class FakeClock:
    def __init__(self, start: float = 1000.0) -> None:
        self.now = start

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


class RecordingProcessor:
    """Stands in for :class:`ScreenshotProcessor` and records each call."""

    def __init__(self, source_dir: Path, on_process=None) -> None:
        self.source_dir = Path(source_dir)
        self.dry_run = False
        self.calls: list[str] = []
        self._on_process = on_process

    def process(self, filename: str) -> ProcessOutcome:
        self.calls.append(filename)
        if self._on_process is not None:
            self._on_process(filename)
        return ProcessOutcome.MOVED


@pytest.fixture()
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture()
def recording_processor():
    return RecordingProcessor


@pytest.fixture()
def log_records(tmp_path):
    """Route package logs to a file and return a reader for the JSON records."""

    log_file = tmp_path / "logs" / "screenshot_mover.log"
    logger = configure_logging(log_file, level=logging.DEBUG)

    def read() -> list[dict]:
        for handler in logger.handlers:
            handler.flush()
        if not log_file.exists():
            return []
        lines = log_file.read_text(encoding="utf-8").splitlines()
        return [json.loads(line) for line in lines if line.strip()]

    read.logger = logger  # type: ignore[attr-defined]
    yield read
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()


@pytest.fixture()
def dirs(tmp_path):
    src = tmp_path / "src"
    dest = tmp_path / "dest"
    src.mkdir()
    dest.mkdir()
    return src, dest
