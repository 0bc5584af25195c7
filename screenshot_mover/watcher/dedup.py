"""Suppression of repeated creation notifications for the same filename."""
from __future__ import annotations

import time
from typing import Callable

from ..errors import ConfigError


class DedupTable:
    """Remember when each bare filename was last accepted.

    A name seen less than ``window`` seconds ago is a duplicate. Stale entries
    are only dropped by a sweep, and :meth:`maybe_cleanup` runs a sweep at
    most once per ``cleanup_interval``. The table is owned by a single
    consumer and is not thread-safe.
    """

    def __init__(
        self,
        window: float,
        cleanup_interval: float,
        *,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        if window >= cleanup_interval:
            raise ConfigError("dedup window must be smaller than the cleanup interval")
        self.window = window
        self.cleanup_interval = cleanup_interval
        self._clock = clock
        self._entries: dict[str, float] = {}
        self.last_cleanup = clock()

    def __len__(self) -> int:
        return len(self._entries)

    def __contains__(self, filename: object) -> bool:
        return filename in self._entries

    def last_seen(self, filename: str) -> float | None:
        return self._entries.get(filename)

    def should_process(self, filename: str, now: float | None = None) -> bool:
        """Return ``False`` for a duplicate, otherwise record *filename* and return ``True``."""

        now = self._clock() if now is None else now
        seen = self._entries.get(filename)
        if seen is not None and (now - seen) < self.window:
            return False
        self._entries[filename] = now
        return True

    def maybe_cleanup(self, now: float | None = None) -> int:
        """Sweep if the cleanup interval has elapsed; return the number of evictions."""

        now = self._clock() if now is None else now
        if (now - self.last_cleanup) <= self.cleanup_interval:
            return 0
        return self.sweep(now)

    def sweep(self, now: float | None = None) -> int:
        """Evict every entry older than ``now - window``."""

        now = self._clock() if now is None else now
        cutoff = now - self.window
        stale = [name for name, seen in self._entries.items() if seen < cutoff]
        for name in stale:
            del self._entries[name]
        self.last_cleanup = now
        return len(stale)


__all__ = ["DedupTable"]
