from __future__ import annotations

from threading import RLock
from typing import Callable, Generic, TypeVar

T = TypeVar("T")


class Signal(Generic[T]):
    """
    Framework-agnostic observer used to publish recomputed schedules to
    whatever view layer is listening.

    Subscribers are held strongly until disconnected. An exception raised
    by a subscriber propagates to the publisher.
    """

    def __init__(self) -> None:
        self._subscribers: list[Callable[[T], None]] = []
        self._lock: RLock = RLock()

    def connect(self, callback: Callable[[T], None]) -> None:
        with self._lock:
            if callback not in self._subscribers:
                self._subscribers.append(callback)

    def disconnect(self, callback: Callable[[T], None]) -> None:
        with self._lock:
            if callback in self._subscribers:
                self._subscribers.remove(callback)

    @property
    def subscriber_count(self) -> int:
        with self._lock:
            return len(self._subscribers)

    def emit(self, payload: T) -> None:
        # Snapshot so callbacks may (dis)connect while being notified.
        with self._lock:
            subscribers = list(self._subscribers)
        for callback in subscribers:
            callback(payload)
