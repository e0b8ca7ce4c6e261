from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal
from enum import Enum

from service_quote.domain.contract import CustomerType
from service_quote.domain.errors import ValidationError


HUNDRED = Decimal("100")


class SymbolPosition(str, Enum):
    BEFORE = "before"
    AFTER = "after"


@dataclass(frozen=True, slots=True)
class Currency:
    code: str
    symbol: str
    position: SymbolPosition = SymbolPosition.AFTER


@dataclass(frozen=True, slots=True)
class TaxConfig:
    """Jurisdiction VAT and currency, plus who the prices are shown to."""

    vat_rate: Decimal
    currency: Currency
    customer_type: CustomerType = CustomerType.PRIVATE

    def validate(self) -> None:
        if not isinstance(self.vat_rate, Decimal):
            raise ValidationError(
                errors=[
                    {
                        "field": "vat_rate",
                        "message": "vat_rate must be Decimal (no floats past the boundary)",
                        "code": "INVALID_DECIMAL",
                    }
                ]
            )
        if not Decimal("0") <= self.vat_rate <= HUNDRED:
            raise ValidationError(
                errors=[
                    {"field": "vat_rate", "message": "Must be within 0-100", "code": "OUT_OF_RANGE"}
                ]
            )


def tax_amount(amount: Decimal, vat_rate: Decimal) -> Decimal:
    return amount * vat_rate / HUNDRED


def with_tax(amount: Decimal, vat_rate: Decimal) -> Decimal:
    return amount * (Decimal("1") + vat_rate / HUNDRED)


def normalize_for_display(amount: Decimal, tax_config: TaxConfig) -> Decimal:
    """
    Amount as shown to the customer.

    Private customers see tax-inclusive amounts, business customers see the
    pre-tax amount. Never feeds back into other computations.
    """
    if tax_config.customer_type is CustomerType.PRIVATE:
        return with_tax(amount, tax_config.vat_rate)
    return amount


def display_label(customer_type: CustomerType) -> str:
    return "incl. VAT" if customer_type is CustomerType.PRIVATE else "excl. VAT"


def format_amount(amount: Decimal, currency: Currency) -> str:
    """Two decimals with thousands separators and the currency symbol placed per currency."""
    formatted = f"{amount:,.2f}"
    if currency.position is SymbolPosition.BEFORE:
        return f"{currency.symbol}{formatted}"
    return f"{formatted} {currency.symbol}"
