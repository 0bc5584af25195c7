"""Screenshot filename recognition."""
from __future__ import annotations

import re
from typing import Callable

from .errors import PatternError

Predicate = Callable[[str], bool]

# macOS names captures "Screen Shot <date> at <time> PM.png" (older releases) or
# "Screenshot ...". Newer releases put a narrow no-break space before AM/PM.
SCREENSHOT_PATTERN = (
    r"^(Screen Shot|Screenshot) \d{4}-\d{2}-\d{2} at \d{1,2}\.\d{2}\.\d{2}"
    "[\\s\u202f]*(AM|PM)\\.png$"
)


def compile_pattern(pattern: str = SCREENSHOT_PATTERN) -> re.Pattern[str]:
    """Compile *pattern*, raising :class:`PatternError` when it is invalid."""

    try:
        return re.compile(pattern)
    except re.error as exc:
        raise PatternError(f"Invalid filename pattern {pattern!r}: {exc}") from exc


def pattern_predicate(pattern: str | re.Pattern[str]) -> Predicate:
    """Return a predicate matching bare filenames against *pattern*."""

    regex = pattern if isinstance(pattern, re.Pattern) else compile_pattern(pattern)

    def predicate(filename: str) -> bool:
        return regex.match(filename) is not None

    return predicate


_DEFAULT_REGEX = compile_pattern()


def is_screenshot(filename: str) -> bool:
    return _DEFAULT_REGEX.match(filename) is not None


__all__ = [
    "Predicate",
    "SCREENSHOT_PATTERN",
    "compile_pattern",
    "is_screenshot",
    "pattern_predicate",
]
