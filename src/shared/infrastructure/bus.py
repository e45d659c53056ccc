"""In-memory event publisher implementation."""

from __future__ import annotations

from typing import Dict, List, Tuple

import structlog

from shared.domain.bus import IEventHandler, IEventPublisher, PublishFailure
from shared.domain.events import LifecycleEvent, LifecycleEventType

logger = structlog.get_logger(__name__)


class InMemoryEventPublisher(IEventPublisher):
    """Simple in-process publisher.

    Keeps every ``(key, event)`` pair it receives and routes each event to
    the handlers subscribed to its type.  Used by the test-suite and for
    local development without a broker.
    """

    def __init__(self) -> None:
        self.published: List[Tuple[str, LifecycleEvent]] = []
        self._handlers: Dict[LifecycleEventType, List[IEventHandler]] = {}

    def subscribe(self, event_type: LifecycleEventType, handler: IEventHandler) -> None:
        handlers = self._handlers.setdefault(event_type, [])
        if handler not in handlers:
            handlers.append(handler)

    def publish(self, key: str, event: LifecycleEvent) -> None:
        self.published.append((key, event))
        logger.info(
            "event.published",
            backend="memory",
            key=key,
            event_type=str(event.event_type),
            event_id=str(event.event_id),
        )
        for handler in self._handlers.get(event.event_type, []):
            try:
                handler.handle(event)
            except Exception as exc:
                logger.error(
                    "event.handler_failed",
                    event_type=str(event.event_type),
                    event_id=str(event.event_id),
                    error=str(exc),
                )
                raise PublishFailure(f"Handler failed for {event.event_type}: {exc}") from exc

    @property
    def events(self) -> List[LifecycleEvent]:
        return [event for _, event in self.published]

    def clear(self) -> None:
        self.published.clear()
