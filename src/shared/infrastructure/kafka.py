"""Kafka publisher for lifecycle events."""

from __future__ import annotations

import json
from dataclasses import dataclass
from typing import Any

import structlog
from confluent_kafka import KafkaException, Producer

from shared.domain.bus import IEventPublisher, PublishFailure
from shared.domain.events import LifecycleEvent

logger = structlog.get_logger(__name__)


@dataclass
class ProducerConfig:
    """Kafka producer configuration."""

    bootstrap_servers: str
    topic: str
    acks: str = "all"  # "0", "1", "all"
    linger_ms: int = 5
    retries: int = 0  # failed sends are logged and dropped


class KafkaEventPublisher(IEventPublisher):
    """Send lifecycle events to a Kafka topic, keyed by entity id.

    ``publish`` only enqueues the record in the producer buffer and polls
    once; the broker acknowledgment arrives later in ``_delivery_report``
    where it is logged.
    """

    def __init__(self, config: ProducerConfig, producer: Producer | None = None) -> None:
        self.config = config
        self.producer = producer or self._create_producer()

    def _create_producer(self) -> Producer:
        return Producer(
            {
                "bootstrap.servers": self.config.bootstrap_servers,
                "acks": self.config.acks,
                "retries": self.config.retries,
                "linger.ms": self.config.linger_ms,
            }
        )

    def publish(self, key: str, event: LifecycleEvent) -> None:
        value = json.dumps(event.to_dict(), ensure_ascii=False, default=str)
        try:
            self.producer.produce(
                topic=self.config.topic,
                key=key.encode("utf-8"),
                value=value.encode("utf-8"),
                callback=self._delivery_report,
            )
            self.producer.poll(0)
        except (BufferError, KafkaException) as exc:
            logger.error(
                "event.send_failed",
                topic=self.config.topic,
                key=key,
                event_type=str(event.event_type),
                error=str(exc),
            )
            raise PublishFailure(f"Could not send {event.event_type}: {exc}") from exc

        logger.info(
            "event.sent",
            topic=self.config.topic,
            key=key,
            event_type=str(event.event_type),
            event_id=str(event.event_id),
        )

    def flush(self, timeout: float = 10.0) -> int:
        """Wait for outstanding deliveries; returns the number still queued."""
        return self.producer.flush(timeout)

    def _delivery_report(self, err: Any, msg: Any) -> None:
        if err:
            logger.error("event.delivery_failed", topic=self.config.topic, error=str(err))
        else:
            logger.debug(
                "event.delivered",
                topic=msg.topic(),
                partition=msg.partition(),
                offset=msg.offset(),
            )
