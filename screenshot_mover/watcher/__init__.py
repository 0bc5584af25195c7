"""Watcher subsystem for ScreenshotMover."""
from .dedup import DedupTable
from .loop import FolderWatcher, StopReason, WatchState, watch_folder
from .subscription import Subscription, WatchdogSubscription
from .types import EventType, FileSystemEvent, WatchError

__all__ = [
    "DedupTable",
    "EventType",
    "FileSystemEvent",
    "FolderWatcher",
    "StopReason",
    "Subscription",
    "WatchError",
    "WatchState",
    "WatchdogSubscription",
    "watch_folder",
]
