"""ScreenshotMover package exports."""

from .cli import main as cli_main
from .patterns import is_screenshot
from .processor import ProcessOutcome, ScreenshotProcessor, process_screenshot
from .scanner import process_existing_files
from .watcher import EventType, FileSystemEvent, FolderWatcher, watch_folder

__all__ = [
    "cli_main",
    "EventType",
    "FileSystemEvent",
    "FolderWatcher",
    "ProcessOutcome",
    "ScreenshotProcessor",
    "is_screenshot",
    "process_existing_files",
    "process_screenshot",
    "watch_folder",
]
