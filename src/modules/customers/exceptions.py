"""Customer domain exceptions.

Raised by the validation pipeline and the Service Layer when business
rules are violated.  The API layer (Views) catches these and translates
them into appropriate HTTP responses.
"""

from __future__ import annotations

from typing import Iterable, Optional


class CustomerNotFound(Exception):
    """No customer matches the look-up.

    ``field`` names the attribute used (``id`` or ``document_number``).
    """

    def __init__(self, value: str, field: str = "id") -> None:
        self.field = field
        self.value = value
        super().__init__(f"Customer with {field} {value} not found.")


class CustomerAlreadyExists(Exception):
    """A customer with the same document number already exists.

    Uniqueness is global: soft-deleted customers still hold their number.
    """

    def __init__(self, document_number: str) -> None:
        self.document_number = document_number
        super().__init__(f"Customer with document number {document_number} already exists.")


class CustomerValidationError(Exception):
    """Base class for caller-correctable document and business-rule errors."""


class InvalidDocumentType(CustomerValidationError):
    def __init__(self, code: Optional[str], valid_codes: Iterable[str]) -> None:
        self.code = code
        self.valid_codes = list(valid_codes)
        super().__init__(
            f"Invalid document type: {code}. "
            f"Valid types: {', '.join(self.valid_codes)}"
        )


class InvalidDocumentLength(CustomerValidationError):
    def __init__(self, code: str, expected: int, received: int) -> None:
        self.code = code
        self.expected = expected
        self.received = received
        super().__init__(
            f"The {code} must have exactly {expected} characters. Received: {received}"
        )


class InvalidDocumentFormat(CustomerValidationError):
    def __init__(self, code: str, numeric_only: bool) -> None:
        self.code = code
        self.numeric_only = numeric_only
        kind = "digits" if numeric_only else "letters and digits"
        super().__init__(f"The {code} must contain only {kind}")


class PremiumRequiresCreditCard(CustomerValidationError):
    """Premium customer types need an active credit card."""

    def __init__(self, customer_type: str) -> None:
        self.customer_type = customer_type
        super().__init__(f"Customer type {customer_type} requires an active credit card")
