"""Lifecycle event primitives shared by the bounded contexts."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import StrEnum
from typing import Any, Dict
from uuid import UUID, uuid4


class LifecycleEventType(StrEnum):
    """Mutations that produce a lifecycle event."""

    CUSTOMER_CREATED = "CUSTOMER_CREATED"
    CUSTOMER_UPDATED = "CUSTOMER_UPDATED"
    CUSTOMER_DELETED = "CUSTOMER_DELETED"


@dataclass(frozen=True)
class LifecycleEvent:
    """Notification describing one completed mutation (immutable).

    ``payload`` is a JSON-safe snapshot of the entity taken right after the
    write; it is never refreshed afterwards.
    """

    event_type: LifecycleEventType
    entity_type: str
    payload: Dict[str, Any]
    event_id: UUID = field(default_factory=uuid4)
    timestamp: datetime = field(default_factory=lambda: datetime.now(timezone.utc))

    def to_dict(self) -> Dict[str, Any]:
        """Wire representation (camelCase keys, ISO timestamp)."""
        return {
            "eventId": str(self.event_id),
            "eventType": str(self.event_type),
            "entityType": self.entity_type,
            "timestamp": self.timestamp.isoformat(),
            "payload": self.payload,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> LifecycleEvent:
        return cls(
            event_id=UUID(data["eventId"]),
            event_type=LifecycleEventType(data["eventType"]),
            entity_type=data["entityType"],
            timestamp=datetime.fromisoformat(data["timestamp"]),
            payload=data["payload"],
        )
