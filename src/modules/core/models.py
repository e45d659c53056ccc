"""Base abstract models for the customer service.

Provides:
- ``BaseModel``: UUIDv7 primary key + created_at / updated_at timestamps.
- ``SoftDeleteModel``: Extends BaseModel with soft-delete via an ``active`` flag.

Design decisions:
- ``objects`` manager returns ALL records (unfiltered).  Use ``.alive()``
  explicitly to exclude inactive rows, so uniqueness look-ups keep seeing
  soft-deleted records.
- ``save()`` guard ensures ``updated_at`` is included when ``update_fields``
  is specified (Django skips ``auto_now`` fields otherwise).
"""

from __future__ import annotations

import uuid6
from django.db import models

# ---------------------------------------------------------------------------
# BaseModel
# ---------------------------------------------------------------------------


class BaseModel(models.Model):
    """Abstract base with UUIDv7 PK and timestamp bookkeeping."""

    id = models.UUIDField(
        primary_key=True,
        default=uuid6.uuid7,
        editable=False,
    )
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        abstract = True

    def save(self, *args, **kwargs) -> None:
        """Ensure ``updated_at`` is refreshed even when ``update_fields`` is passed."""
        update_fields = kwargs.get("update_fields")
        if update_fields is not None and "updated_at" not in update_fields:
            kwargs["update_fields"] = list(update_fields) + ["updated_at"]
        super().save(*args, **kwargs)


# ---------------------------------------------------------------------------
# Soft Delete infrastructure
# ---------------------------------------------------------------------------


class SoftDeleteQuerySet(models.QuerySet):
    """QuerySet with soft-delete helpers."""

    def alive(self) -> SoftDeleteQuerySet:
        """Return only active records."""
        return self.filter(active=True)

    def inactive(self) -> SoftDeleteQuerySet:
        """Return only soft-deleted records."""
        return self.filter(active=False)


class SoftDeleteManager(models.Manager):
    """Manager that exposes ``.alive()`` / ``.inactive()`` on the queryset."""

    def get_queryset(self) -> SoftDeleteQuerySet:
        return SoftDeleteQuerySet(self.model, using=self._db)

    def alive(self) -> SoftDeleteQuerySet:
        return self.get_queryset().alive()

    def inactive(self) -> SoftDeleteQuerySet:
        return self.get_queryset().inactive()


class SoftDeleteModel(BaseModel):
    """Abstract model with soft-delete via a single ``active`` flag.

    - ``objects`` is **unfiltered** (returns all rows).
    - ``soft_delete()`` flips ``active`` off; the row is retained.
    - ``hard_delete()`` removes the row physically.
    - There is no way back from inactive: a soft-deleted record stays so.
    """

    active = models.BooleanField(default=True, db_index=True)

    objects = SoftDeleteManager()

    class Meta:
        abstract = True

    @property
    def is_deleted(self) -> bool:
        """Computed: ``True`` when the record has been soft-deleted."""
        return not self.active

    def soft_delete(self) -> None:
        """Mark this instance inactive in memory (persisted by the caller)."""
        self.active = False

    def hard_delete(self, using=None, keep_parents=False) -> tuple[int, dict[str, int]]:
        """Permanently remove this record from the database."""
        return super().delete(using=using, keep_parents=keep_parents)
