from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal
from typing import Sequence

from service_quote.domain.contract import AddOnSelection, ContractTerms
from service_quote.domain.errors import ValidationError
from service_quote.domain.pricing_policy import PricingPolicy
from service_quote.domain.rule_matching import RuleMatch
from service_quote.domain.rules import HorsepowerBand, RuleCategory
from service_quote.domain.vehicle import VehicleCategory, VehicleSnapshot


HUNDRED = Decimal("100")


@dataclass(frozen=True, slots=True)
class Adjustment:
    """A named discount or surcharge on the base price (positive amount)."""

    code: str
    label: str
    percent: Decimal
    amount: Decimal


@dataclass(frozen=True, slots=True)
class AddOnPrice:
    category: RuleCategory
    match: RuleMatch
    dealer_subsidy_percent: int
    original_price: Decimal
    price: Decimal


@dataclass(frozen=True, slots=True)
class PriceBreakdown:
    """Unrounded pre-tax components of an annual price."""

    band: HorsepowerBand
    discounts: tuple[Adjustment, ...]
    surcharges: tuple[Adjustment, ...]
    add_ons: tuple[AddOnPrice, ...]

    @property
    def base_price(self) -> Decimal:
        return self.band.annual_price

    @property
    def discount_total(self) -> Decimal:
        return sum((d.amount for d in self.discounts), Decimal("0"))

    @property
    def surcharge_total(self) -> Decimal:
        return sum((s.amount for s in self.surcharges), Decimal("0"))

    @property
    def add_on_total(self) -> Decimal:
        return sum((a.price for a in self.add_ons), Decimal("0"))

    @property
    def subtotal(self) -> Decimal:
        return self.base_price - self.discount_total + self.surcharge_total + self.add_on_total


def find_horsepower_band(bands: Sequence[HorsepowerBand], horsepower: int) -> HorsepowerBand:
    """
    First band whose inclusive [min_hp, max_hp] contains the horsepower.

    Raises:
        ValidationError: If no band contains it (never clamped to the nearest band)
    """
    for band in bands:
        if band.contains(horsepower):
            return band

    raise ValidationError(
        errors=[
            {
                "field": "horsepower",
                "message": f"No horsepower band covers {horsepower} hp",
                "code": "OUT_OF_RANGE",
            }
        ]
    )


def subsidized_price(price: Decimal, dealer_subsidy_percent: int) -> Decimal:
    """Customer-facing price after the dealer absorbs part of it."""
    return price * (HUNDRED - Decimal(dealer_subsidy_percent)) / HUNDRED


def base_adjustments(
    base_price: Decimal,
    vehicle: VehicleSnapshot,
    terms: ContractTerms,
    policy: PricingPolicy,
) -> tuple[tuple[Adjustment, ...], tuple[Adjustment, ...]]:
    """Discounts and surcharges on the base price. Zero-valued adjustments are omitted."""
    discounts: list[Adjustment] = []
    surcharges: list[Adjustment] = []

    warranty_percent = policy.factory_warranty_discount_percent(vehicle.factory_warranty_years)
    if warranty_percent > 0:
        discounts.append(
            Adjustment(
                code="factory_warranty",
                label=f"Factory warranty discount ({vehicle.factory_warranty_years} years)",
                percent=warranty_percent,
                amount=base_price * warranty_percent / HUNDRED,
            )
        )

    term_percent = (Decimal("1") - policy.term_factor(terms.term_months)) * HUNDRED
    if term_percent > 0:
        discounts.append(
            Adjustment(
                code="term",
                label=f"Term discount ({terms.term_months} months)",
                percent=term_percent,
                amount=base_price * term_percent / HUNDRED,
            )
        )

    if vehicle.category is VehicleCategory.VAN and policy.van_surcharge_percent > 0:
        surcharges.append(
            Adjustment(
                code="van",
                label="Van surcharge",
                percent=policy.van_surcharge_percent,
                amount=base_price * policy.van_surcharge_percent / HUNDRED,
            )
        )

    mileage_percent = (policy.mileage_factor(terms.annual_mileage_km) - Decimal("1")) * HUNDRED
    if mileage_percent > 0:
        surcharges.append(
            Adjustment(
                code="mileage",
                label=f"Mileage surcharge ({terms.annual_mileage_km} km/year)",
                percent=mileage_percent,
                amount=base_price * mileage_percent / HUNDRED,
            )
        )

    return tuple(discounts), tuple(surcharges)


def aggregate_price(
    band: HorsepowerBand,
    vehicle: VehicleSnapshot,
    terms: ContractTerms,
    add_on_matches: Sequence[tuple[RuleCategory, AddOnSelection, RuleMatch]],
    policy: PricingPolicy,
) -> PriceBreakdown:
    """
    Combine the base tier price, adjustments and matched add-ons.

    Dealer subsidies reduce only their own add-on. Add-ons that are not
    toggled are not passed in and contribute no line at all.
    """
    discounts, surcharges = base_adjustments(band.annual_price, vehicle, terms, policy)

    add_ons = tuple(
        AddOnPrice(
            category=category,
            match=match,
            dealer_subsidy_percent=selection.dealer_subsidy_percent,
            original_price=match.rule.price,
            price=subsidized_price(match.rule.price, selection.dealer_subsidy_percent),
        )
        for category, selection, match in add_on_matches
    )

    return PriceBreakdown(band=band, discounts=discounts, surcharges=surcharges, add_ons=add_ons)
