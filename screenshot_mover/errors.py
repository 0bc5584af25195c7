"""Exception hierarchy for ScreenshotMover."""
from __future__ import annotations


class ScreenshotMoverError(Exception):
    """Base error for the project."""


class ConfigError(ScreenshotMoverError):
    pass


class PatternError(ScreenshotMoverError):
    pass


class StartupError(ScreenshotMoverError):
    """Raised for conditions that must stop the process before any work starts."""


class SourceMissingError(StartupError):
    pass


class SourceUnreadableError(StartupError):
    pass


class DestinationCreateError(StartupError):
    pass


class SubscriptionError(ScreenshotMoverError):
    """The notification source could not be created or attached."""


__all__ = [
    "ConfigError",
    "DestinationCreateError",
    "PatternError",
    "ScreenshotMoverError",
    "SourceMissingError",
    "SourceUnreadableError",
    "StartupError",
    "SubscriptionError",
]
