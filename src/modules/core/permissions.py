"""Role-based DRF permissions over ``IdentityContext``."""

from __future__ import annotations

from typing import Type

import structlog
from rest_framework.permissions import BasePermission

from modules.core.identity import ROLE_ADMIN, IdentityContext

logger = structlog.get_logger(__name__)


def HasRole(*roles: str) -> Type[BasePermission]:
    """Permission class granting access when the caller holds any of ``roles``."""

    class _HasRole(BasePermission):
        message = (
            "Access denied. At least one of the following roles is required: "
            + ", ".join(roles)
        )

        def has_permission(self, request, view) -> bool:
            identity = request.user
            if not isinstance(identity, IdentityContext):
                return False
            allowed = identity.has_any_role(roles)
            if not allowed:
                logger.warning(
                    "identity.access_denied",
                    user_id=identity.user_id,
                    roles=sorted(identity.roles),
                    required=list(roles),
                )
            return allowed

    _HasRole.__name__ = f"HasRole({', '.join(roles)})"
    return _HasRole


IsAdmin = HasRole(ROLE_ADMIN)
