"""Customer domain constants.

Defines the identity-document catalogue and the customer classifications.
"""

from __future__ import annotations

import re
from enum import Enum
from typing import List, Optional

from django.conf import settings
from django.db import models

from modules.customers.exceptions import InvalidDocumentType

_NUMERIC = re.compile(r"[0-9]+")
_ALPHANUMERIC = re.compile(r"[A-Za-z0-9]+")


class DocumentType(Enum):
    """Identity document kinds with their length/format rules.

    Each member is ``(code, required_length, numeric_only)``.
    """

    DNI = ("DNI", 8, True)
    RUC = ("RUC", 11, True)
    FOREIGNERS_CARD = ("FOREIGNERS_CARD", 12, False)
    PASSPORT = ("PASSPORT", 15, False)

    def __init__(self, code: str, required_length: int, numeric_only: bool) -> None:
        self.code = code
        self.required_length = required_length
        self.numeric_only = numeric_only

    # ------------------------------------------------------------------
    # Catalogue look-ups
    # ------------------------------------------------------------------

    @classmethod
    def codes(cls) -> List[str]:
        """Valid codes in declaration order."""
        return [member.code for member in cls]

    @classmethod
    def lookup(cls, code: Optional[str]) -> Optional[DocumentType]:
        if code is None:
            return None
        wanted = code.upper()
        for member in cls:
            if member.code == wanted:
                return member
        return None

    @classmethod
    def is_valid(cls, code: Optional[str]) -> bool:
        return cls.lookup(code) is not None

    @classmethod
    def from_code(cls, code: Optional[str]) -> DocumentType:
        """Resolve ``code`` (case-insensitive).

        Raises:
            InvalidDocumentType: if the code is unknown.
        """
        member = cls.lookup(code)
        if member is None:
            raise InvalidDocumentType(code, cls.codes())
        return member

    @classmethod
    def choices(cls) -> List[tuple[str, str]]:
        return [(member.code, member.code) for member in cls]

    # ------------------------------------------------------------------
    # Number checks
    # ------------------------------------------------------------------

    def is_valid_length(self, number: Optional[str]) -> bool:
        """Exact character count, no trimming."""
        if number is None:
            return False
        return len(number) == self.required_length

    def is_valid_format(self, number: Optional[str]) -> bool:
        if number is None or not number.strip():
            return False
        pattern = _NUMERIC if self.numeric_only else _ALPHANUMERIC
        return pattern.fullmatch(number) is not None

    def is_valid_document(self, number: Optional[str]) -> bool:
        return self.is_valid_length(number) and self.is_valid_format(number)


class CustomerType(models.TextChoices):
    PERSONAL = "PERSONAL", "Personal"
    BUSINESS = "BUSINESS", "Business"
    VIP = "VIP", "VIP"
    PYME = "PYME", "PYME"

    @property
    def requires_credit_card(self) -> bool:
        """Whether this classification needs an active credit card.

        The premium set comes from ``settings.PREMIUM_CUSTOMER_TYPES``.
        """
        return self.value in premium_customer_types()


DEFAULT_PREMIUM_CUSTOMER_TYPES = frozenset({CustomerType.VIP.value, CustomerType.PYME.value})


def premium_customer_types() -> frozenset[str]:
    configured = getattr(settings, "PREMIUM_CUSTOMER_TYPES", None)
    if configured is None:
        return DEFAULT_PREMIUM_CUSTOMER_TYPES
    if isinstance(configured, str):
        configured = configured.split(",")
    return frozenset(value.strip().upper() for value in configured if value.strip())
