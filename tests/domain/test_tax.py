from decimal import Decimal

import pytest

from service_quote.domain.contract import CustomerType
from service_quote.domain.errors import ValidationError
from service_quote.domain.tax import (
    Currency,
    SymbolPosition,
    TaxConfig,
    display_label,
    format_amount,
    normalize_for_display,
    tax_amount,
    with_tax,
)


DKK = Currency("DKK", "kr.")
EUR_BEFORE = Currency("EUR", "€", SymbolPosition.BEFORE)


# ============================================================================
# NORMALIZATION
# ============================================================================


def test_private_customers_see_tax_inclusive_amount():
    config = TaxConfig(vat_rate=Decimal("25"), currency=DKK, customer_type=CustomerType.PRIVATE)

    assert normalize_for_display(Decimal("1000"), config) == Decimal("1250")


def test_business_customers_see_pre_tax_amount():
    config = TaxConfig(vat_rate=Decimal("25"), currency=DKK, customer_type=CustomerType.BUSINESS)

    assert normalize_for_display(Decimal("1000"), config) == Decimal("1000")


def test_normalization_does_not_change_input():
    amount = Decimal("1000")
    config = TaxConfig(vat_rate=Decimal("25"), currency=DKK)

    normalize_for_display(amount, config)

    assert amount == Decimal("1000")


def test_tax_helpers():
    assert tax_amount(Decimal("200"), Decimal("19")) == Decimal("38")
    assert with_tax(Decimal("200"), Decimal("19")) == Decimal("238")


def test_zero_rate_is_allowed():
    config = TaxConfig(vat_rate=Decimal("0"), currency=DKK)

    config.validate()
    assert normalize_for_display(Decimal("99.99"), config) == Decimal("99.99")


# ============================================================================
# VALIDATION
# ============================================================================


@pytest.mark.parametrize("rate", [Decimal("-1"), Decimal("100.01")])
def test_rate_outside_0_to_100_is_rejected(rate):
    with pytest.raises(ValidationError) as exc_info:
        TaxConfig(vat_rate=rate, currency=DKK).validate()

    assert exc_info.value.errors[0]["code"] == "OUT_OF_RANGE"


def test_float_rate_is_rejected():
    with pytest.raises(ValidationError) as exc_info:
        TaxConfig(vat_rate=25.0, currency=DKK).validate()

    assert exc_info.value.errors[0]["code"] == "INVALID_DECIMAL"


# ============================================================================
# PRESENTATION
# ============================================================================


def test_display_label():
    assert display_label(CustomerType.PRIVATE) == "incl. VAT"
    assert display_label(CustomerType.BUSINESS) == "excl. VAT"


def test_format_amount_symbol_after():
    assert format_amount(Decimal("4864.5"), DKK) == "4,864.50 kr."


def test_format_amount_symbol_before():
    assert format_amount(Decimal("1234567.891"), EUR_BEFORE) == "€1,234,567.89"
