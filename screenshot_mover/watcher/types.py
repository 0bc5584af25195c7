"""Shared type definitions for the watcher subsystem."""
from __future__ import annotations

from dataclasses import dataclass
from enum import Enum, auto
from pathlib import Path


class EventType(Enum):
    """Normalized filesystem event types that the watcher understands."""

    CREATED = auto()
    MODIFIED = auto()
    DELETED = auto()
    MOVED = auto()


@dataclass(frozen=True, slots=True)
class FileSystemEvent:
    """A single filesystem change notification."""

    path: Path
    event_type: EventType
    is_directory: bool = False
    dest_path: Path | None = None


@dataclass(frozen=True, slots=True)
class WatchError:
    """An error reported by the notification source."""

    error: BaseException

    def __str__(self) -> str:
        return repr(self.error)


class StreamClosed:
    """Marker placed on a subscription queue when one of its streams ends."""

    __slots__ = ("stream",)

    def __init__(self, stream: str) -> None:
        self.stream = stream

    def __repr__(self) -> str:
        return f"<{self.stream} closed>"


EVENTS_CLOSED = StreamClosed("events")
ERRORS_CLOSED = StreamClosed("errors")

Notification = FileSystemEvent | WatchError | StreamClosed


__all__ = [
    "ERRORS_CLOSED",
    "EVENTS_CLOSED",
    "EventType",
    "FileSystemEvent",
    "Notification",
    "StreamClosed",
    "WatchError",
]
