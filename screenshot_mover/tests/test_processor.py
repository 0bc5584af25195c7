from __future__ import annotations

import pytest

from screenshot_mover.patterns import is_screenshot
from screenshot_mover.processor import ProcessOutcome, ScreenshotProcessor, process_screenshot
from screenshot_mover.relocator import FailureKind, MoveFailure

SCREENSHOT_NAME = "Screen Shot 2020-06-21 at 4.21.35 PM.png"


def make_processor(src, dest, *, dry_run=False, relocator=None, logger=None) -> ScreenshotProcessor:
    kwargs = {"relocator": relocator} if relocator else {}
    return ScreenshotProcessor(
        src,
        dest,
        dry_run=dry_run,
        predicate=is_screenshot,
        logger=logger,
        **kwargs,
    )


def test_moves_matching_file(dirs, capsys) -> None:
    src, dest = dirs
    (src / SCREENSHOT_NAME).write_bytes(b"pixels")

    outcome = make_processor(src, dest).process(SCREENSHOT_NAME)

    assert outcome is ProcessOutcome.MOVED
    assert not (src / SCREENSHOT_NAME).exists()
    assert (dest / SCREENSHOT_NAME).read_bytes() == b"pixels"
    assert f"Moved {SCREENSHOT_NAME} to {dest}" in capsys.readouterr().out


def test_dry_run_reports_without_moving(dirs, capsys) -> None:
    src, dest = dirs
    name = "Screenshot 2025-03-29 at 11.16.20 PM.png"
    (src / name).write_text("test content")

    outcome = make_processor(src, dest, dry_run=True).process(name)

    assert outcome is ProcessOutcome.DRY_RUN
    assert (src / name).exists()
    assert not (dest / name).exists()
    assert f"[DRY RUN] Would move {name} to {dest}" in capsys.readouterr().out


@pytest.mark.parametrize("dry_run", [False, True])
def test_non_matching_file_is_left_alone(dirs, capsys, log_records, dry_run) -> None:
    src, dest = dirs
    (src / "not-a-screenshot.png").write_text("test content")
    calls = []

    processor = make_processor(
        src,
        dest,
        dry_run=dry_run,
        relocator=lambda s, d: calls.append((s, d)),
        logger=log_records.logger,
    )
    outcome = processor.process("not-a-screenshot.png")

    assert outcome is ProcessOutcome.IGNORED
    assert calls == []
    assert (src / "not-a-screenshot.png").exists()
    assert list(dest.iterdir()) == []
    assert capsys.readouterr().out == ""
    assert log_records() == []


def test_vanished_source_is_reported_and_repeatable(dirs, log_records) -> None:
    src, dest = dirs
    (src / SCREENSHOT_NAME).write_text("x")
    processor = make_processor(src, dest, logger=log_records.logger)

    assert processor.process(SCREENSHOT_NAME) is ProcessOutcome.MOVED
    (dest / SCREENSHOT_NAME).unlink()

    assert processor.process(SCREENSHOT_NAME) is ProcessOutcome.VANISHED
    assert processor.process(SCREENSHOT_NAME) is ProcessOutcome.VANISHED
    assert list(dest.iterdir()) == []

    vanished = [record for record in log_records() if record["action"] == "process.vanished"]
    assert len(vanished) == 2
    assert vanished[0]["message"] == f"Source file does not exist: {src / SCREENSHOT_NAME}"


def test_move_failure_is_logged_with_both_paths(dirs, log_records) -> None:
    src, dest = dirs
    (src / SCREENSHOT_NAME).write_text("x")
    attempts = []

    def failing_relocator(source, destination):
        attempts.append((source, destination))
        return MoveFailure(FailureKind.CROSS_DEVICE, "Invalid cross-device link")

    processor = make_processor(src, dest, relocator=failing_relocator, logger=log_records.logger)

    assert processor.process(SCREENSHOT_NAME) is ProcessOutcome.FAILED
    assert attempts == [(src / SCREENSHOT_NAME, dest / SCREENSHOT_NAME)]
    (record,) = [r for r in log_records() if r["action"] == "process.move_failed"]
    assert record["level"] == "ERROR"
    assert record["kind"] == "cross_device"
    assert str(src / SCREENSHOT_NAME) in record["message"]
    assert str(dest / SCREENSHOT_NAME) in record["message"]
    assert (src / SCREENSHOT_NAME).exists()


def test_missing_destination_folder_is_a_failure_not_a_crash(tmp_path) -> None:
    src = tmp_path / "src"
    src.mkdir()
    (src / SCREENSHOT_NAME).write_text("x")

    outcome = process_screenshot(SCREENSHOT_NAME, src, tmp_path / "absent", False, is_screenshot)

    assert outcome is ProcessOutcome.FAILED
    assert (src / SCREENSHOT_NAME).exists()
