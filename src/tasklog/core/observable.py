# src/tasklog/core/observable.py

"""
In-process publish/subscribe value holder.

The holder keeps the current value and pushes every replacement, in full, to
all subscribers. There are no incremental updates: a subscriber always gets
the whole new value.

Usage:
    tasks = Observable[tuple[Task, ...]](())

    unsubscribe = tasks.subscribe(render)   # render(()) is called right away
    tasks.publish(new_snapshot)             # render(new_snapshot)
    unsubscribe()
"""

from __future__ import annotations

import logging
import threading
from collections.abc import Callable
from typing import Generic, TypeVar

logger = logging.getLogger(__name__)

T = TypeVar("T")


class Observable(Generic[T]):
    """Current value + subscriber callbacks (thread-safe subscribe/unsubscribe)."""

    def __init__(self, initial: T) -> None:
        self._value = initial
        self._subscribers: list[Callable[[T], None]] = []
        self._lock = threading.Lock()
        self._publish_count = 0
        self._error_count = 0

    @property
    def value(self) -> T:
        return self._value

    @property
    def subscriber_count(self) -> int:
        return len(self._subscribers)

    @property
    def publish_count(self) -> int:
        return self._publish_count

    @property
    def error_count(self) -> int:
        """Number of subscriber callbacks that raised."""
        return self._error_count

    def subscribe(self, callback: Callable[[T], None], *, replay: bool = True) -> Callable[[], None]:
        """
        Register a callback and return a function that unregisters it.

        With replay=True the callback receives the current value immediately.
        Subscribing the same callback twice is a no-op (no second replay either).
        """
        with self._lock:
            added = callback not in self._subscribers
            if added:
                self._subscribers.append(callback)

        if replay and added:
            self._notify(callback, self._value)

        def _unsubscribe() -> None:
            self.unsubscribe(callback)

        return _unsubscribe

    def unsubscribe(self, callback: Callable[[T], None]) -> bool:
        with self._lock:
            try:
                self._subscribers.remove(callback)
            except ValueError:
                return False
            return True

    def publish(self, value: T) -> int:
        """
        Replace the value and notify every subscriber in subscription order.

        Callbacks run synchronously in the publishing thread. Errors raised by a
        callback are logged and counted, never propagated to the publisher.

        Returns the number of subscribers notified successfully.
        """
        with self._lock:
            self._value = value
            subscribers = list(self._subscribers)
            self._publish_count += 1

        notified = 0
        for callback in subscribers:
            if self._notify(callback, value):
                notified += 1
        return notified

    def _notify(self, callback: Callable[[T], None], value: T) -> bool:
        try:
            callback(value)
        except Exception as e:
            with self._lock:
                self._error_count += 1
            logger.warning(
                "Observable subscriber error: %s (callback: %s)",
                e,
                getattr(callback, "__name__", str(callback)),
            )
            return False
        return True
