"""Minimal synchronous event emitter.

Components that own a piece of state (favorites, connectivity) expose an
``EventEmitter`` so interested controllers subscribe directly instead of going
through a process-wide notification channel.
"""

import logging
from collections.abc import Callable
from typing import Generic, TypeVar

logger = logging.getLogger(__name__)

T = TypeVar("T")

Listener = Callable[[T], None]


class EventEmitter(Generic[T]):
    """Fan out a value to every subscribed listener, in subscription order."""

    def __init__(self, name: str = "event") -> None:
        self.name = name
        self._listeners: list[Listener[T]] = []

    def subscribe(self, listener: Listener[T]) -> Callable[[], None]:
        """Register ``listener`` and return a callable that unsubscribes it."""
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    def emit(self, value: T) -> None:
        """Deliver ``value`` to all listeners.

        A failing listener is logged and does not prevent delivery to the
        others.
        """
        for listener in list(self._listeners):
            try:
                listener(value)
            except Exception:
                logger.exception(f"Listener for {self.name} failed")

    @property
    def listener_count(self) -> int:
        return len(self._listeners)
