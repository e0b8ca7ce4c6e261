from decimal import Decimal

import pytest

from service_quote.domain.errors import InvalidRuleDataError
from service_quote.domain.pricing_policy import (
    DEFAULT_HORSEPOWER_BANDS,
    DEFAULT_PRICING_POLICY,
    DEFAULT_TERM_FACTORS,
    PricingPolicy,
)
from service_quote.domain.rules import RuleTables


# ============================================================================
# FACTORY WARRANTY DISCOUNT
# ============================================================================


@pytest.mark.parametrize(
    "years, percent",
    [(0, "0"), (1, "0"), (2, "10"), (3, "15"), (4, "20"), (5, "25"), (8, "25")],
)
def test_factory_warranty_discount_table(years, percent):
    assert DEFAULT_PRICING_POLICY.factory_warranty_discount_percent(years) == Decimal(percent)


def test_factory_warranty_discount_is_monotonic():
    """More remaining warranty years never yields a smaller discount."""
    discounts = [DEFAULT_PRICING_POLICY.factory_warranty_discount_percent(y) for y in range(0, 12)]

    assert discounts == sorted(discounts)


def test_negative_years_earn_nothing():
    assert DEFAULT_PRICING_POLICY.factory_warranty_discount_percent(-3) == Decimal("0")


# ============================================================================
# FACTORS
# ============================================================================


def test_mileage_factor_lookup():
    assert DEFAULT_PRICING_POLICY.mileage_factor(15000) == Decimal("1.00")
    assert DEFAULT_PRICING_POLICY.mileage_factor(60000) == Decimal("2.00")


def test_term_factor_lookup():
    assert DEFAULT_PRICING_POLICY.term_factor(12) == Decimal("1.00")
    assert DEFAULT_PRICING_POLICY.term_factor(60) == Decimal("0.80")


# ============================================================================
# VALIDATION
# ============================================================================


def test_default_policy_is_valid():
    DEFAULT_PRICING_POLICY.validate()


def test_default_bands_are_valid():
    RuleTables(horsepower_bands=DEFAULT_HORSEPOWER_BANDS).validate()


def test_rejects_non_monotonic_discounts():
    policy = PricingPolicy(
        factory_warranty_discounts=((2, Decimal("20")), (3, Decimal("10"))),
    )

    with pytest.raises(InvalidRuleDataError) as exc_info:
        policy.validate()

    assert [e["code"] for e in exc_info.value.errors] == ["NOT_MONOTONIC"]


def test_rejects_unordered_thresholds():
    policy = PricingPolicy(
        factory_warranty_discounts=((3, Decimal("10")), (2, Decimal("10"))),
    )

    with pytest.raises(InvalidRuleDataError) as exc_info:
        policy.validate()

    assert exc_info.value.errors[0]["code"] == "INVALID_ORDER"


def test_rejects_incomplete_term_table():
    policy = PricingPolicy(term_factors=DEFAULT_TERM_FACTORS[:-1])

    with pytest.raises(InvalidRuleDataError) as exc_info:
        policy.validate()

    assert exc_info.value.errors == [
        {"field": "term_factors", "message": "Missing factors for [60]", "code": "INCOMPLETE_TABLE"}
    ]


def test_rejects_negative_van_surcharge():
    with pytest.raises(InvalidRuleDataError):
        PricingPolicy(van_surcharge_percent=Decimal("-5")).validate()
