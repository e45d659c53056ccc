"""Event publishing interfaces."""

from __future__ import annotations

from typing import Protocol

from shared.domain.events import LifecycleEvent


class PublishFailure(Exception):
    """An event could not be handed to the message bus.

    Non-fatal: callers log it and carry on, persistence is the source
    of truth.
    """


class IEventHandler(Protocol):
    """Handler interface for in-process subscribers."""

    def handle(self, event: LifecycleEvent) -> None: ...


class IEventPublisher(Protocol):
    """Publisher interface.

    ``publish`` is fire-and-forget: it returns once the send has been
    attempted and raises ``PublishFailure`` when that attempt fails.
    Implementations never retry.
    """

    def publish(self, key: str, event: LifecycleEvent) -> None: ...
