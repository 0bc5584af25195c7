"""Notification sources bound to a single directory."""
from __future__ import annotations

import logging
import threading
from pathlib import Path
from queue import Empty, Queue

from watchdog.events import FileSystemEvent as WatchdogEvent
from watchdog.events import FileSystemEventHandler
from watchdog.observers import Observer

from ..errors import SubscriptionError
from ..logger import get_logger, log_event
from .types import (
    ERRORS_CLOSED,
    EVENTS_CLOSED,
    EventType,
    FileSystemEvent,
    Notification,
    WatchError,
)


class Subscription:
    """Event stream, error stream and their closure merged into one FIFO.

    Producers call :meth:`publish`, :meth:`publish_error`,
    :meth:`close_events` and :meth:`close_errors`; the single consumer waits
    on :meth:`get`. Once :meth:`close` has been called nothing else is
    delivered. This class on its own is a manually fed source, used for
    tests and injection; :class:`WatchdogSubscription` feeds it from the OS.
    """

    def __init__(self, path: str | Path) -> None:
        self.path = Path(path)
        self._queue: Queue[Notification] = Queue()
        self._closed = threading.Event()

    @property
    def closed(self) -> bool:
        return self._closed.is_set()

    def start(self) -> None:
        """Attach to :attr:`path`. Raises :class:`SubscriptionError` on failure."""

    def get(self, timeout: float | None = None) -> Notification | None:
        """Return the next notification, or ``None`` if none arrived within *timeout*.

        A released subscription reports ``EVENTS_CLOSED`` so its consumer stops waiting.
        """

        if self.closed:
            return EVENTS_CLOSED
        try:
            item = self._queue.get(timeout=timeout)
        except Empty:
            return None
        return EVENTS_CLOSED if self.closed else item

    def publish(self, event: FileSystemEvent) -> None:
        if not self.closed:
            self._queue.put(event)

    def publish_error(self, error: BaseException) -> None:
        if not self.closed:
            self._queue.put(WatchError(error))

    def close_events(self) -> None:
        if not self.closed:
            self._queue.put(EVENTS_CLOSED)

    def close_errors(self) -> None:
        if not self.closed:
            self._queue.put(ERRORS_CLOSED)

    def close(self) -> None:
        """Release the subscription and discard anything still queued."""

        self._closed.set()
        while True:
            try:
                self._queue.get_nowait()
            except Empty:
                break

    def __enter__(self) -> "Subscription":
        self.start()
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()


_EVENT_TYPES = {
    "created": EventType.CREATED,
    "modified": EventType.MODIFIED,
    "deleted": EventType.DELETED,
    "moved": EventType.MOVED,
}


class _ForwardingHandler(FileSystemEventHandler):
    """Translate watchdog callbacks into subscription notifications."""

    def __init__(self, subscription: "WatchdogSubscription") -> None:
        super().__init__()
        self._subscription = subscription

    def dispatch(self, event: WatchdogEvent) -> None:
        try:
            self._forward(event)
        except Exception as exc:
            self._subscription.publish_error(exc)

    def _forward(self, event: WatchdogEvent) -> None:
        event_type = _EVENT_TYPES.get(event.event_type)
        if event_type is None:
            return

        path = Path(_as_str(event.src_path))
        if event_type is EventType.DELETED and event.is_directory and path == self._subscription.path:
            # The emitter stops once the watched directory is gone.
            self._subscription.publish_error(
                FileNotFoundError(f"Watched directory was removed: {path}")
            )
            self._subscription.close_events()
            return

        dest = _as_str(getattr(event, "dest_path", "") or "")
        self._subscription.publish(
            FileSystemEvent(
                path=path,
                event_type=event_type,
                is_directory=event.is_directory,
                dest_path=Path(dest) if dest else None,
            )
        )


def _as_str(value: str | bytes) -> str:
    return value.decode() if isinstance(value, bytes) else value


class WatchdogSubscription(Subscription):
    """Subscription fed by a non-recursive :class:`watchdog.observers.Observer`."""

    def __init__(self, path: str | Path, *, logger: logging.Logger | None = None) -> None:
        super().__init__(path)
        self._observer: Observer | None = None
        self._observer_lost = False
        self.logger = logger or get_logger("subscription")

    def start(self) -> None:
        if not self.path.is_dir():
            raise SubscriptionError(f"Cannot watch {self.path}: not a directory")

        observer = Observer()
        try:
            observer.schedule(_ForwardingHandler(self), str(self.path), recursive=False)
            observer.start()
        except OSError as exc:
            raise SubscriptionError(f"Failed to add directory to watcher: {exc}") from exc
        self._observer = observer
        log_event(
            self.logger,
            level=logging.DEBUG,
            action="watch.subscribed",
            message=f"Observer attached to {self.path}",
            extra={"observer": type(observer).__name__},
        )

    def get(self, timeout: float | None = None) -> Notification | None:
        item = super().get(timeout)
        if item is None and not self._observer_alive():
            # A dead observer delivers nothing more; end the event stream.
            self.publish_error(RuntimeError(f"Observer for {self.path} stopped unexpectedly"))
            self.close_events()
            self._observer_lost = True
            return super().get(0)
        return item

    def _observer_alive(self) -> bool:
        observer = self._observer
        if observer is None or self._observer_lost:
            return True
        if not observer.is_alive():
            return False
        return all(emitter.is_alive() for emitter in observer.emitters)

    def close(self) -> None:
        observer, self._observer = self._observer, None
        if observer is not None:
            observer.stop()
            if observer.is_alive():
                observer.join()
        super().close()


__all__ = ["Subscription", "WatchdogSubscription"]
