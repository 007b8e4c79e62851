"""Multicast event hook.

A hook is a named list of callbacks. Raising the hook calls every
subscriber synchronously, in subscription order, on the calling thread.
Callers that need to marshal onto a UI thread must do so themselves.
"""

import logging
import threading
from collections.abc import Callable
from typing import Any

from launchpad.events.types import EventType

logger = logging.getLogger(__name__)

Handler = Callable[[Any, Any], Any]


class EventHook:
    """Subscribable event stream with (sender, args) callbacks."""

    def __init__(self, event_type: EventType) -> None:
        self.event_type = event_type
        self._callbacks: list[Handler] = []
        self._lock = threading.Lock()

    def add_callback(self, callback: Handler) -> None:
        """Add a callback to be called every time the hook is raised."""
        with self._lock:
            self._callbacks.append(callback)

    def remove_callback(self, callback: Handler) -> None:
        """Remove a callback."""
        with self._lock:
            if callback in self._callbacks:
                self._callbacks.remove(callback)

    def __iadd__(self, callback: Handler) -> "EventHook":
        self.add_callback(callback)
        return self

    def __isub__(self, callback: Handler) -> "EventHook":
        self.remove_callback(callback)
        return self

    def emit(self, sender: Any, args: Any) -> None:
        """Call every subscriber with the sender and payload, unchanged."""
        logger.debug("Raising event: %s", self.event_type.value)

        with self._lock:
            callbacks = list(self._callbacks)

        for callback in callbacks:
            try:
                callback(sender, args)
            except Exception as e:
                logger.error("Callback error in %s: %s: %s", self.event_type.value, type(e).__name__, e)

    @property
    def subscriber_count(self) -> int:
        """Get the number of subscribed callbacks."""
        with self._lock:
            return len(self._callbacks)
