"""Configuration data structures for ScreenshotMover."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path

from .errors import ConfigError
from .patterns import SCREENSHOT_PATTERN

DEFAULT_DEDUP_WINDOW = 2.0
DEFAULT_CLEANUP_INTERVAL = 30.0
DEFAULT_SETTLE_DELAY = 0.1
DEFAULT_POLL_INTERVAL = 0.25


@dataclass(frozen=True)
class WatchSettings:
    """Timing knobs for the folder watcher, in seconds."""

    dedup_window: float = DEFAULT_DEDUP_WINDOW
    cleanup_interval: float = DEFAULT_CLEANUP_INTERVAL
    settle_delay: float = DEFAULT_SETTLE_DELAY
    poll_interval: float = DEFAULT_POLL_INTERVAL

    def __post_init__(self) -> None:
        for name in ("dedup_window", "cleanup_interval", "settle_delay"):
            if getattr(self, name) < 0:
                raise ConfigError(f"{name} must not be negative")
        if self.poll_interval <= 0:
            raise ConfigError("poll_interval must be positive")
        if self.dedup_window >= self.cleanup_interval:
            raise ConfigError(
                "dedup_window must be smaller than cleanup_interval "
                f"({self.dedup_window} >= {self.cleanup_interval})"
            )


@dataclass
class MoverOptions:
    """Options collected by the command line front end."""

    source: Path
    destination: Path
    dry_run: bool = False
    watch: bool = False
    pattern: str = SCREENSHOT_PATTERN
    log_file: Path | None = None
    verbose: bool = False


__all__ = [
    "DEFAULT_CLEANUP_INTERVAL",
    "DEFAULT_DEDUP_WINDOW",
    "DEFAULT_POLL_INTERVAL",
    "DEFAULT_SETTLE_DELAY",
    "MoverOptions",
    "WatchSettings",
]
