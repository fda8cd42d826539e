"""
Event bus for invoicing events.

Synchronous in-process pub/sub. Handlers run in the publisher's thread, in
subscription order. Handler errors are logged and never propagate: the
invoice change has already been saved.
"""

import logging
from typing import Callable

from invoicing.events import InvoicingEvent

logger = logging.getLogger(__name__)


class EventBus:
    """Subscribe by event class name, publish by event instance."""

    def __init__(self):
        self._subscribers: dict[str, list[Callable]] = {}

    def subscribe(self, event_type: str, callback: Callable) -> None:
        """
        Subscribe to events of a specific type.

        Args:
            event_type: Name of event class (e.g. 'InvoicePaid')
            callback: Called with the event instance
        """
        self._subscribers.setdefault(event_type, []).append(callback)

    def unsubscribe(self, event_type: str, callback: Callable) -> None:
        """Remove a callback. Unknown callbacks are ignored."""
        callbacks = self._subscribers.get(event_type, [])
        if callback in callbacks:
            callbacks.remove(callback)

    def publish(self, event: InvoicingEvent) -> None:
        """Deliver event to every subscriber of its class name."""
        event_type = event.__class__.__name__

        for callback in list(self._subscribers.get(event_type, [])):
            try:
                callback(event)
            except Exception:
                logger.exception(
                    "Handler %s failed for %s (event_id=%s)",
                    getattr(callback, "__name__", repr(callback)),
                    event_type,
                    event.event_id,
                )
