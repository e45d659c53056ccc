"""Unit tests for the document-type catalogue and customer types.

Covers:
- DocumentType look-ups: codes, case-insensitive resolution, unknown codes.
- Length and format checks per document type.
- CustomerType.requires_credit_card against the configured premium set.
"""

from __future__ import annotations

import pytest

from modules.customers.constants import CustomerType, DocumentType, premium_customer_types
from modules.customers.exceptions import InvalidDocumentType

pytestmark = pytest.mark.unit


class TestDocumentTypeCatalogue:
    def test_codes_in_declaration_order(self):
        assert DocumentType.codes() == ["DNI", "RUC", "FOREIGNERS_CARD", "PASSPORT"]

    @pytest.mark.parametrize(
        "member, length, numeric_only",
        [
            (DocumentType.DNI, 8, True),
            (DocumentType.RUC, 11, True),
            (DocumentType.FOREIGNERS_CARD, 12, False),
            (DocumentType.PASSPORT, 15, False),
        ],
    )
    def test_rules_per_type(self, member, length, numeric_only):
        assert member.required_length == length
        assert member.numeric_only is numeric_only

    def test_from_code_is_case_insensitive(self):
        assert DocumentType.from_code("dni") is DocumentType.DNI
        assert DocumentType.from_code("Passport") is DocumentType.PASSPORT

    def test_from_code_unknown_raises_with_valid_list(self):
        with pytest.raises(InvalidDocumentType) as exc_info:
            DocumentType.from_code("CPF")
        assert str(exc_info.value) == (
            "Invalid document type: CPF. Valid types: DNI, RUC, FOREIGNERS_CARD, PASSPORT"
        )

    def test_from_code_none_raises(self):
        with pytest.raises(InvalidDocumentType):
            DocumentType.from_code(None)

    def test_is_valid(self):
        assert DocumentType.is_valid("ruc") is True
        assert DocumentType.is_valid("") is False
        assert DocumentType.is_valid(None) is False

    def test_choices_use_codes(self):
        assert ("FOREIGNERS_CARD", "FOREIGNERS_CARD") in DocumentType.choices()


class TestDocumentNumberChecks:
    def test_length_is_exact(self):
        assert DocumentType.DNI.is_valid_length("12345678") is True
        assert DocumentType.DNI.is_valid_length("1234567") is False
        assert DocumentType.DNI.is_valid_length("123456789") is False

    def test_length_does_not_trim(self):
        assert DocumentType.DNI.is_valid_length(" 1234567") is True
        assert DocumentType.DNI.is_valid_format(" 1234567") is False

    def test_length_of_none_is_invalid(self):
        assert DocumentType.RUC.is_valid_length(None) is False

    def test_numeric_format(self):
        assert DocumentType.RUC.is_valid_format("20512345678") is True
        assert DocumentType.RUC.is_valid_format("2051234567A") is False

    def test_alphanumeric_format(self):
        assert DocumentType.PASSPORT.is_valid_format("PA1234567890123") is True
        assert DocumentType.PASSPORT.is_valid_format("PA-234567890123") is False

    def test_blank_format_is_invalid(self):
        assert DocumentType.FOREIGNERS_CARD.is_valid_format("   ") is False
        assert DocumentType.FOREIGNERS_CARD.is_valid_format(None) is False

    def test_non_ascii_digits_rejected(self):
        assert DocumentType.DNI.is_valid_format("١٢٣٤٥٦٧٨") is False

    def test_is_valid_document_combines_both(self):
        assert DocumentType.FOREIGNERS_CARD.is_valid_document("CE0012345678") is True
        assert DocumentType.FOREIGNERS_CARD.is_valid_document("CE001234567") is False
        assert DocumentType.FOREIGNERS_CARD.is_valid_document("CE00123456_8") is False


class TestCustomerType:
    @pytest.mark.parametrize(
        "customer_type, expected",
        [
            (CustomerType.PERSONAL, False),
            (CustomerType.BUSINESS, False),
            (CustomerType.VIP, True),
            (CustomerType.PYME, True),
        ],
    )
    def test_default_premium_set(self, customer_type, expected):
        assert customer_type.requires_credit_card is expected

    def test_premium_set_follows_settings(self, settings):
        settings.PREMIUM_CUSTOMER_TYPES = ["business", " VIP "]
        assert premium_customer_types() == frozenset({"BUSINESS", "VIP"})
        assert CustomerType.BUSINESS.requires_credit_card is True
        assert CustomerType.PYME.requires_credit_card is False

    def test_premium_set_from_comma_separated_string(self, settings):
        settings.PREMIUM_CUSTOMER_TYPES = "VIP, pyme"
        assert premium_customer_types() == frozenset({"VIP", "PYME"})
        assert CustomerType.PYME.requires_credit_card is True
