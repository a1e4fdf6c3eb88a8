"""Event registry protocol and the in-process implementation."""

from __future__ import annotations

import logging
from typing import Callable, Protocol, TypeVar, runtime_checkable

from .events import DomainEvent

logger = logging.getLogger(__name__)

E = TypeVar("E", bound=DomainEvent)


@runtime_checkable
class EventsRegistry(Protocol):
    """Anything that accepts published domain events."""

    def publish(self, event: DomainEvent) -> None: ...


class InMemoryEventsRegistry:
    """EventsRegistry that keeps every event and fans out to subscribers.

    Delivery is synchronous and in-process. A subscriber that raises stops
    the fan-out and the error reaches the publisher.
    """

    def __init__(self) -> None:
        self.published: list[DomainEvent] = []
        self._subscribers: dict[type, list[Callable[[DomainEvent], None]]] = {}

    def subscribe(self, event_type: type[E], handler: Callable[[E], None]) -> None:
        """Register handler for event_type. Subscribing to DomainEvent receives everything."""
        self._subscribers.setdefault(event_type, []).append(handler)

    def publish(self, event: DomainEvent) -> None:
        self.published.append(event)
        logger.info("Published %s", event)
        for handler in self._handlers_for(type(event)):
            handler(event)

    def events_of(self, event_type: type[E]) -> list[E]:
        return [e for e in self.published if isinstance(e, event_type)]

    def clear(self) -> None:
        self.published.clear()

    def _handlers_for(self, event_type: type) -> list[Callable[[DomainEvent], None]]:
        handlers = list(self._subscribers.get(event_type, []))
        if event_type is not DomainEvent:
            handlers.extend(self._subscribers.get(DomainEvent, []))
        return handlers
