from __future__ import annotations

import errno

from screenshot_mover.relocator import FailureKind, classify_error, relocate


def test_relocate_moves_file_and_keeps_content(tmp_path) -> None:
    source = tmp_path / "a.png"
    source.write_bytes(b"\x89PNG payload")
    destination = tmp_path / "moved.png"

    assert relocate(source, destination) is None
    assert not source.exists()
    assert destination.read_bytes() == b"\x89PNG payload"


def test_relocate_reports_missing_source(tmp_path) -> None:
    failure = relocate(tmp_path / "missing.png", tmp_path / "out.png")

    assert failure is not None
    assert failure.kind is FailureKind.NOT_FOUND
    assert not (tmp_path / "out.png").exists()


def test_relocate_reports_missing_destination_folder(tmp_path) -> None:
    source = tmp_path / "a.png"
    source.write_text("x")

    failure = relocate(source, tmp_path / "nowhere" / "a.png")

    assert failure is not None
    assert source.exists()


def test_classify_error_maps_errno() -> None:
    assert classify_error(OSError(errno.EACCES, "Permission denied")).kind is FailureKind.PERMISSION_DENIED
    assert classify_error(OSError(errno.EPERM, "Operation not permitted")).kind is FailureKind.PERMISSION_DENIED
    assert classify_error(OSError(errno.EXDEV, "Invalid cross-device link")).kind is FailureKind.CROSS_DEVICE
    other = classify_error(OSError(errno.ENOSPC, "No space left on device"))
    assert other.kind is FailureKind.OTHER
    assert other.detail == "No space left on device"
