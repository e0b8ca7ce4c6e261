from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal

from service_quote.domain.contract import ALLOWED_ANNUAL_MILEAGES, ALLOWED_TERMS
from service_quote.domain.errors import InvalidRuleDataError
from service_quote.domain.rules import HorsepowerBand


# (minimum remaining warranty years, discount percent); one year earns nothing
DEFAULT_FACTORY_WARRANTY_DISCOUNTS: tuple[tuple[int, Decimal], ...] = (
    (2, Decimal("10")),
    (3, Decimal("15")),
    (4, Decimal("20")),
    (5, Decimal("25")),
)

DEFAULT_VAN_SURCHARGE_PERCENT = Decimal("15")

DEFAULT_MILEAGE_FACTORS: tuple[tuple[int, Decimal], ...] = (
    (15000, Decimal("1.00")),
    (20000, Decimal("1.15")),
    (25000, Decimal("1.25")),
    (30000, Decimal("1.35")),
    (35000, Decimal("1.45")),
    (40000, Decimal("1.55")),
    (45000, Decimal("1.65")),
    (50000, Decimal("1.75")),
    (55000, Decimal("1.85")),
    (60000, Decimal("2.00")),
)

DEFAULT_TERM_FACTORS: tuple[tuple[int, Decimal], ...] = (
    (12, Decimal("1.00")),
    (24, Decimal("0.95")),
    (36, Decimal("0.90")),
    (48, Decimal("0.85")),
    (60, Decimal("0.80")),
)

# Annual base service fee per horsepower band
DEFAULT_HORSEPOWER_BANDS: tuple[HorsepowerBand, ...] = (
    HorsepowerBand(name="Small", min_hp=0, max_hp=100, annual_price=Decimal("2388")),
    HorsepowerBand(name="Medium", min_hp=101, max_hp=150, annual_price=Decimal("2988")),
    HorsepowerBand(name="Large", min_hp=151, max_hp=200, annual_price=Decimal("3588")),
    HorsepowerBand(name="Premium", min_hp=201, max_hp=300, annual_price=Decimal("4188")),
    HorsepowerBand(name="Luxury", min_hp=301, max_hp=500, annual_price=Decimal("4788")),
)


@dataclass(frozen=True, slots=True)
class PricingPolicy:
    """
    Rate tables applied to the base service fee.

    Rates are percentages, factors are multipliers of the base price.
    The policy is read-only reference data for a calculation.
    """

    factory_warranty_discounts: tuple[tuple[int, Decimal], ...] = DEFAULT_FACTORY_WARRANTY_DISCOUNTS
    van_surcharge_percent: Decimal = DEFAULT_VAN_SURCHARGE_PERCENT
    mileage_factors: tuple[tuple[int, Decimal], ...] = DEFAULT_MILEAGE_FACTORS
    term_factors: tuple[tuple[int, Decimal], ...] = DEFAULT_TERM_FACTORS

    def factory_warranty_discount_percent(self, remaining_years: int) -> Decimal:
        """Discount for the highest threshold the remaining years reach."""
        percent = Decimal("0")
        if remaining_years <= 0:
            return percent
        for min_years, rate in self.factory_warranty_discounts:
            if remaining_years >= min_years:
                percent = rate
        return percent

    def mileage_factor(self, annual_mileage_km: int) -> Decimal:
        return dict(self.mileage_factors)[annual_mileage_km]

    def term_factor(self, term_months: int) -> Decimal:
        return dict(self.term_factors)[term_months]

    def validate(self) -> None:
        """
        Raises:
            InvalidRuleDataError: If a rate table is incomplete or not monotonic
        """
        errors: list[dict[str, str]] = []

        previous_years = 0
        previous_rate = Decimal("0")
        for min_years, rate in self.factory_warranty_discounts:
            if min_years <= previous_years:
                errors.append(
                    {
                        "field": "factory_warranty_discounts",
                        "message": "Year thresholds must be positive and strictly increasing",
                        "code": "INVALID_ORDER",
                    }
                )
            if not Decimal("0") <= rate <= Decimal("100"):
                errors.append(
                    {
                        "field": "factory_warranty_discounts",
                        "message": f"Discount for {min_years} years must be within 0-100",
                        "code": "INVALID_VALUE",
                    }
                )
            if rate < previous_rate:
                errors.append(
                    {
                        "field": "factory_warranty_discounts",
                        "message": "More remaining warranty years cannot earn a smaller discount",
                        "code": "NOT_MONOTONIC",
                    }
                )
            previous_years, previous_rate = min_years, rate

        if self.van_surcharge_percent < 0:
            errors.append(
                {"field": "van_surcharge_percent", "message": "Must be >= 0", "code": "INVALID_VALUE"}
            )

        errors.extend(_factor_errors("mileage_factors", self.mileage_factors, ALLOWED_ANNUAL_MILEAGES))
        errors.extend(_factor_errors("term_factors", self.term_factors, ALLOWED_TERMS))

        if errors:
            raise InvalidRuleDataError(errors=errors)


def _factor_errors(
    name: str, factors: tuple[tuple[int, Decimal], ...], required: tuple[int, ...]
) -> list[dict[str, str]]:
    errors: list[dict[str, str]] = []
    keys = {key for key, _ in factors}

    missing = [key for key in required if key not in keys]
    if missing:
        errors.append(
            {"field": name, "message": f"Missing factors for {missing}", "code": "INCOMPLETE_TABLE"}
        )
    for key, factor in factors:
        if factor <= 0:
            errors.append(
                {"field": name, "message": f"Factor for {key} must be > 0", "code": "INVALID_VALUE"}
            )

    return errors


DEFAULT_PRICING_POLICY = PricingPolicy()
