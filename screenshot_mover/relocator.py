"""Single-attempt file relocation."""
from __future__ import annotations

import errno
import os
from dataclasses import dataclass
from enum import Enum
from pathlib import Path
from typing import Callable


class FailureKind(str, Enum):
    """Classified reasons a move can fail."""

    NOT_FOUND = "not_found"
    PERMISSION_DENIED = "permission_denied"
    CROSS_DEVICE = "cross_device"
    OTHER = "other"


@dataclass(frozen=True, slots=True)
class MoveFailure:
    kind: FailureKind
    detail: str

    def __str__(self) -> str:
        return self.detail


Relocator = Callable[[Path, Path], "MoveFailure | None"]

_ERRNO_KINDS = {
    errno.ENOENT: FailureKind.NOT_FOUND,
    errno.EACCES: FailureKind.PERMISSION_DENIED,
    errno.EPERM: FailureKind.PERMISSION_DENIED,
    errno.EXDEV: FailureKind.CROSS_DEVICE,
}


def classify_error(exc: OSError) -> MoveFailure:
    """Map an :class:`OSError` to a :class:`MoveFailure`."""

    kind = _ERRNO_KINDS.get(exc.errno, FailureKind.OTHER)
    detail = exc.strerror or str(exc)
    return MoveFailure(kind=kind, detail=detail)


def relocate(source: Path, destination: Path) -> MoveFailure | None:
    """Atomically rename *source* to *destination*.

    Returns ``None`` on success. Failures are returned, not raised, and the
    move is never retried; a rename across filesystems reports
    :attr:`FailureKind.CROSS_DEVICE` instead of falling back to a copy.
    """

    try:
        os.rename(source, destination)
    except OSError as exc:
        return classify_error(exc)
    return None


__all__ = ["FailureKind", "MoveFailure", "Relocator", "classify_error", "relocate"]
