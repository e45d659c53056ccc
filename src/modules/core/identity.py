"""Caller identity supplied by the upstream gateway.

The gateway authenticates the user and forwards two headers:

* ``X-User-Id``: opaque user identifier (required);
* ``X-User-Roles``: comma-separated role names (optional).

Both are trusted as-is; this service implements no authentication
protocol.  ``HeaderIdentityAuthentication`` turns them into a typed
``IdentityContext`` that DRF exposes as ``request.user``, so views and
permissions never parse headers themselves.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import FrozenSet, Iterable, Optional

import structlog
from rest_framework.authentication import BaseAuthentication

logger = structlog.get_logger(__name__)

HEADER_USER_ID = "HTTP_X_USER_ID"
HEADER_USER_ROLES = "HTTP_X_USER_ROLES"

ROLE_ADMIN = "ROLE_ADMIN"


@dataclass(frozen=True)
class IdentityContext:
    """Typed identity of the caller for one request."""

    user_id: str
    roles: FrozenSet[str] = field(default_factory=frozenset)

    # DRF checks
    is_authenticated = True
    is_active = True

    @classmethod
    def from_headers(cls, user_id: Optional[str], roles_header: Optional[str]) -> Optional[IdentityContext]:
        """Build a context from raw header values; ``None`` when no user id."""
        if not user_id or not user_id.strip():
            return None
        return cls(user_id=user_id.strip(), roles=parse_roles(roles_header))

    def has_role(self, role: str) -> bool:
        return role in self.roles

    def has_any_role(self, roles: Iterable[str]) -> bool:
        return any(role in self.roles for role in roles)

    @property
    def is_admin(self) -> bool:
        return self.has_role(ROLE_ADMIN)

    def can_access(self, owner_id: str) -> bool:
        """Admins may access anything; other users only their own resources."""
        return self.is_admin or self.user_id == owner_id

    def __str__(self) -> str:  # pragma: no cover
        return self.user_id


def parse_roles(header: Optional[str]) -> FrozenSet[str]:
    if not header:
        return frozenset()
    return frozenset(role.strip() for role in header.split(",") if role.strip())


class HeaderIdentityAuthentication(BaseAuthentication):
    """DRF authentication class reading the gateway identity headers."""

    def authenticate(self, request):
        """Return ``(IdentityContext, None)`` or ``None`` (no identity)."""
        identity = IdentityContext.from_headers(
            request.META.get(HEADER_USER_ID),
            request.META.get(HEADER_USER_ROLES),
        )
        if identity is None:
            logger.debug("identity.missing")
            return None

        logger.debug(
            "identity.resolved",
            user_id=identity.user_id,
            roles=sorted(identity.roles),
        )
        return (identity, None)

    def authenticate_header(self, request):
        """Value for the ``WWW-Authenticate`` response header on 401."""
        return 'X-User-Id realm="api"'
