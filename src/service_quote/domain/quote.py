from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal
from enum import Enum

from service_quote.domain.contract import CustomerType


class LineKind(str, Enum):
    BASE = "base"
    DISCOUNT = "discount"
    SURCHARGE = "surcharge"
    ADD_ON = "add_on"


@dataclass(frozen=True, slots=True)
class Advisory:
    """User-visible notice attached to a quote, e.g. an estimated add-on price."""

    component: str
    reason: str


@dataclass(frozen=True, slots=True)
class QuoteLine:
    """
    One itemized, already rounded amount.

    Discounts are stored as positive amounts; their kind says they are subtracted.
    """

    code: str
    label: str
    kind: LineKind
    amount: Decimal
    package_id: str | None = None
    original_amount: Decimal | None = None  # add-ons: price before dealer subsidy
    dealer_subsidy_percent: int = 0


@dataclass(frozen=True, slots=True)
class Quote:
    """
    A fully recomputed quote. All money is annual unless named monthly.

    Rounding policy:
    - Line items are rounded once, to cents, ROUND_HALF_UP
    - Subtotal, tax and totals are derived from the rounded items (not re-rounded
      individually), so the subtotal equals the sum of its items exactly
    - monthly_installment = subtotal / 12, normalized for display, rounded once
    """

    base_price: Decimal
    discounts: tuple[QuoteLine, ...]
    surcharges: tuple[QuoteLine, ...]
    add_ons: tuple[QuoteLine, ...]
    discount_total: Decimal
    surcharge_total: Decimal
    add_on_total: Decimal
    subtotal: Decimal
    vat_rate: Decimal
    tax_amount: Decimal
    total_including_tax: Decimal
    customer_type: CustomerType
    display_total: Decimal
    monthly_installment: Decimal
    currency_code: str
    term_months: int
    advisories: tuple[Advisory, ...] = ()

    @property
    def is_estimate(self) -> bool:
        return bool(self.advisories)

    @property
    def prices_include_tax(self) -> bool:
        return self.customer_type is CustomerType.PRIVATE

    def add_on(self, code: str) -> QuoteLine | None:
        for line in self.add_ons:
            if line.code == code:
                return line
        return None
