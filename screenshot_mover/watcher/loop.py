"""The folder watching loop."""
from __future__ import annotations

import logging
import queue
import threading
import time
from enum import Enum, auto
from pathlib import Path
from typing import Callable

from ..config import WatchSettings
from ..errors import SubscriptionError
from ..logger import get_logger, log_event
from ..processor import ScreenshotProcessor
from .dedup import DedupTable
from .subscription import Subscription, WatchdogSubscription
from .types import ERRORS_CLOSED, EVENTS_CLOSED, EventType, FileSystemEvent, WatchError

SubscriptionFactory = Callable[[Path], Subscription]


class WatchState(Enum):
    """Lifecycle of a :class:`FolderWatcher` run."""

    STARTING = auto()
    RUNNING = auto()
    STOPPED = auto()


class StopReason(str, Enum):
    """Why :meth:`FolderWatcher.run` returned."""

    CANCELLED = "cancelled"
    EVENTS_CLOSED = "events_closed"
    ERRORS_CLOSED = "errors_closed"
    SUBSCRIPTION_FAILED = "subscription_failed"


class FolderWatcher:
    """Process screenshots created in the processor's source directory.

    A single thread waits on the subscription, which carries events, errors
    and stream closure, and checks the *cancel* event between waits. Creation
    events are deduplicated by bare filename, delayed by
    ``settings.settle_delay`` and handed to the processor in delivery order.
    When *processed* is given, a ``True`` is offered to it after each
    processed event without blocking; the signal is dropped if the queue is
    full.
    """

    def __init__(
        self,
        processor: ScreenshotProcessor,
        *,
        settings: WatchSettings | None = None,
        subscription_factory: SubscriptionFactory = WatchdogSubscription,
        cancel: threading.Event | None = None,
        processed: queue.Queue[bool] | None = None,
        clock: Callable[[], float] = time.monotonic,
        sleep: Callable[[float], None] = time.sleep,
        logger: logging.Logger | None = None,
    ) -> None:
        self.processor = processor
        self.settings = settings or WatchSettings()
        self.subscription_factory = subscription_factory
        self.cancel = cancel or threading.Event()
        self.processed = processed
        self._clock = clock
        self._sleep = sleep
        self.logger = logger or get_logger("watcher")
        self.state = WatchState.STOPPED
        self.dedup: DedupTable | None = None

    def stop(self) -> None:
        """Request cancellation; honoured at the next wait."""

        self.cancel.set()

    def run(self) -> StopReason:
        source = self.processor.source_dir
        self.state = WatchState.STARTING
        try:
            subscription = self.subscription_factory(source)
        except SubscriptionError as exc:
            return self._fail(exc)
        try:
            subscription.start()
        except SubscriptionError as exc:
            subscription.close()
            return self._fail(exc)

        self.dedup = DedupTable(
            self.settings.dedup_window,
            self.settings.cleanup_interval,
            clock=self._clock,
        )
        print(f"Watching {source} for new screenshots...")
        log_event(
            self.logger,
            level=logging.INFO,
            action="watch.started",
            message=f"Watching {source}",
            extra={"dry_run": self.processor.dry_run},
        )
        self.state = WatchState.RUNNING
        try:
            reason = self._serve(subscription)
        finally:
            subscription.close()
            self.dedup = None
            self.state = WatchState.STOPPED

        log_event(
            self.logger,
            level=logging.INFO,
            action="watch.stopped",
            message=f"Stopped watching {source}",
            extra={"reason": reason.value},
        )
        return reason

    def _fail(self, exc: SubscriptionError) -> StopReason:
        self.state = WatchState.STOPPED
        log_event(
            self.logger,
            level=logging.ERROR,
            action="watch.subscription_failed",
            message=str(exc),
            extra={"path": str(self.processor.source_dir)},
        )
        return StopReason.SUBSCRIPTION_FAILED

    def _serve(self, subscription: Subscription) -> StopReason:
        while True:
            if self.cancel.is_set():
                return StopReason.CANCELLED

            item = subscription.get(timeout=self.settings.poll_interval)
            if item is None:
                continue
            if item is EVENTS_CLOSED:
                return StopReason.EVENTS_CLOSED
            if item is ERRORS_CLOSED:
                return StopReason.ERRORS_CLOSED
            if isinstance(item, WatchError):
                log_event(
                    self.logger,
                    level=logging.WARNING,
                    action="watch.error",
                    message=f"Watcher error: {item}",
                )
                continue
            if isinstance(item, FileSystemEvent):
                self.handle_event(item)

    def handle_event(self, event: FileSystemEvent) -> bool:
        """Handle one notification; return ``True`` if it reached the processor."""

        if event.event_type is not EventType.CREATED:
            return False
        if self.dedup is None:
            raise RuntimeError("handle_event() called while the watcher is not running")

        now = self._clock()
        evicted = self.dedup.maybe_cleanup(now)
        if evicted:
            log_event(
                self.logger,
                level=logging.DEBUG,
                action="watch.cleanup",
                message=f"Evicted {evicted} stale entr{'y' if evicted == 1 else 'ies'}",
                extra={"remaining": len(self.dedup)},
            )

        filename = event.path.name
        if not self.dedup.should_process(filename, now):
            log_event(
                self.logger,
                level=logging.DEBUG,
                action="watch.duplicate",
                message=f"Skipping duplicate event for {filename}",
            )
            return False

        if self.settings.settle_delay:
            self._sleep(self.settings.settle_delay)

        self.processor.process(filename)
        self._signal_processed()
        return True

    def _signal_processed(self) -> None:
        if self.processed is None:
            return
        try:
            self.processed.put_nowait(True)
        except queue.Full:
            log_event(
                self.logger,
                level=logging.DEBUG,
                action="watch.signal_dropped",
                message="Completion queue is full; signal dropped",
            )


def watch_folder(
    processor: ScreenshotProcessor,
    *,
    cancel: threading.Event | None = None,
    processed: queue.Queue[bool] | None = None,
    settings: WatchSettings | None = None,
    subscription_factory: SubscriptionFactory = WatchdogSubscription,
) -> StopReason:
    """Watch the processor's source directory until cancelled or the streams close."""

    watcher = FolderWatcher(
        processor,
        settings=settings,
        subscription_factory=subscription_factory,
        cancel=cancel,
        processed=processed,
    )
    return watcher.run()


__all__ = ["FolderWatcher", "StopReason", "WatchState", "watch_folder"]
