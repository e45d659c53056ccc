"""Lifecycle event publishers wired for the customers module."""

from __future__ import annotations

import structlog
from django.conf import settings
from kombu.exceptions import KombuError

from modules.customers.tasks import get_kafka_publisher, publish_lifecycle_event
from shared.domain.bus import IEventPublisher, PublishFailure
from shared.domain.events import LifecycleEvent
from shared.infrastructure.bus import InMemoryEventPublisher

logger = structlog.get_logger(__name__)


class CeleryEventPublisher(IEventPublisher):
    """Hand the event to a Celery worker and return immediately.

    Only the enqueue is observed here; the Kafka send happens in
    ``customers.publish_lifecycle_event``.
    """

    def publish(self, key: str, event: LifecycleEvent) -> None:
        try:
            publish_lifecycle_event.apply_async((key, event.to_dict()), retry=False)
        except (KombuError, OSError) as exc:
            raise PublishFailure(f"Could not enqueue {event.event_type}: {exc}") from exc
        logger.info(
            "event.enqueued",
            key=key,
            event_type=str(event.event_type),
            event_id=str(event.event_id),
        )


def get_event_publisher() -> IEventPublisher:
    """Build the publisher selected by ``CUSTOMER_EVENTS_BACKEND``."""
    backend = settings.CUSTOMER_EVENTS_BACKEND
    if backend == "celery":
        return CeleryEventPublisher()
    if backend == "kafka":
        return get_kafka_publisher()
    if backend == "memory":
        return InMemoryEventPublisher()
    raise ValueError(f"Unknown CUSTOMER_EVENTS_BACKEND: {backend!r}")
