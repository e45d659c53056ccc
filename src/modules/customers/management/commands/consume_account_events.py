from __future__ import annotations

import structlog
from confluent_kafka import Consumer
from django.conf import settings
from django.core.management.base import BaseCommand

from modules.customers.handlers import account_event_handler

logger = structlog.get_logger(__name__)


def _decode(raw) -> str:
    if raw is None:
        return ""
    if isinstance(raw, bytes):
        return raw.decode("utf-8", errors="replace")
    return str(raw)


class Command(BaseCommand):
    help = "Consume account events from Kafka and hand them to the account event handler"

    def add_arguments(self, parser):
        parser.add_argument(
            "--max-messages",
            type=int,
            default=0,
            help="Stop after this many messages (0 runs until interrupted)",
        )
        parser.add_argument(
            "--poll-timeout",
            type=float,
            default=1.0,
            help="Seconds to wait on each poll",
        )

    def handle(self, *args, **options):
        max_messages = options["max_messages"]
        consumer = Consumer(
            {
                "bootstrap.servers": settings.KAFKA_BOOTSTRAP_SERVERS,
                "group.id": settings.KAFKA_CONSUMER_GROUP_ID,
                "auto.offset.reset": "earliest",
            }
        )
        consumer.subscribe([settings.KAFKA_ACCOUNT_EVENTS_TOPIC])
        logger.info(
            "account_events.consumer_started",
            topic=settings.KAFKA_ACCOUNT_EVENTS_TOPIC,
            group_id=settings.KAFKA_CONSUMER_GROUP_ID,
        )

        consumed = 0
        try:
            while not max_messages or consumed < max_messages:
                msg = consumer.poll(options["poll_timeout"])
                if msg is None:
                    continue
                if msg.error():
                    logger.error("account_events.consume_error", error=str(msg.error()))
                    continue
                account_event_handler.handle(_decode(msg.key()), _decode(msg.value()))
                consumed += 1
        except KeyboardInterrupt:
            logger.info("account_events.consumer_interrupted")
        finally:
            consumer.close()

        self.stdout.write(self.style.SUCCESS(f"Account events consumed: {consumed}"))
