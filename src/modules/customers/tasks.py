"""Asynchronous tasks of the customers module."""

from __future__ import annotations

from functools import lru_cache
from typing import Any, Dict

import structlog
from celery import shared_task
from django.conf import settings

from modules.customers.handlers import account_event_handler
from shared.domain.bus import PublishFailure
from shared.domain.events import LifecycleEvent
from shared.infrastructure.kafka import KafkaEventPublisher, ProducerConfig

logger = structlog.get_logger(__name__)


@lru_cache(maxsize=1)
def get_kafka_publisher() -> KafkaEventPublisher:
    """One producer per worker process."""
    return KafkaEventPublisher(
        ProducerConfig(
            bootstrap_servers=settings.KAFKA_BOOTSTRAP_SERVERS,
            topic=settings.KAFKA_CUSTOMER_EVENTS_TOPIC,
        )
    )


@shared_task(name="customers.publish_lifecycle_event", ignore_result=True)
def publish_lifecycle_event(key: str, event: Dict[str, Any]) -> Dict[str, str]:
    """Send one lifecycle event to Kafka.  Attempted once, never retried."""
    lifecycle_event = LifecycleEvent.from_dict(event)
    publisher = get_kafka_publisher()
    try:
        publisher.publish(key, lifecycle_event)
        pending = publisher.flush(settings.KAFKA_FLUSH_TIMEOUT)
    except PublishFailure as exc:
        return _failed(key, lifecycle_event, str(exc))
    if pending > 0:
        return _failed(key, lifecycle_event, f"{pending} message(s) undelivered after flush")
    return {"status": "sent", "event_id": str(lifecycle_event.event_id)}


@shared_task(name="customers.process_account_event", ignore_result=True)
def process_account_event(key: str, value: str) -> None:
    """Hand an inbound account event to its (no-op) handler."""
    account_event_handler.handle(key, value)


def _failed(key: str, event: LifecycleEvent, error: str) -> Dict[str, str]:
    logger.error(
        "customer.event.publish_failed",
        key=key,
        event_type=str(event.event_type),
        event_id=str(event.event_id),
        error=error,
    )
    return {"status": "failed", "event_id": str(event.event_id)}
