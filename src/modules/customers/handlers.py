"""Handlers for events consumed from other services."""

from __future__ import annotations

import structlog

logger = structlog.get_logger(__name__)


class AccountEventHandler:
    """Inbound account events are acknowledged and logged, nothing more."""

    def handle(self, key: str, value: str) -> None:
        logger.info(
            f"Account event received for key {key}",
            key=key,
            size=len(value),
        )


account_event_handler = AccountEventHandler()
