from __future__ import annotations

from decimal import ROUND_HALF_UP, Decimal


MONTHS_PER_YEAR = Decimal("12")
CENT = Decimal("0.01")


def monthly_installment(annual_total: Decimal) -> Decimal:
    """
    Annual amount spread over twelve months, at full precision.

    Rule prices are already annual, so the contract term never enters the
    arithmetic here; it only selects rules and rate factors upstream.
    """
    return annual_total / MONTHS_PER_YEAR


def round_money(amount: Decimal) -> Decimal:
    """Round half-up to the smallest currency unit (cents)."""
    return amount.quantize(CENT, rounding=ROUND_HALF_UP)
