"""Resolve the best-fitting range rule for a vehicle.

Matching runs in three tiers and the first tier producing a match wins:

1. Exact: declared vehicle-category and fuel-type filters match, and every
   declared range contains the vehicle's attribute. The size dimension is
   motor power for electrified drivetrains and engine displacement otherwise.
2. Generic: fuel type and engine/motor size are ignored; only vehicle
   category, age and mileage are checked.
3. Estimate: the first rule in input order, flagged with an advisory.

Within a tier, ties are broken by input order.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Sequence

from service_quote.domain.errors import NoPricingDataError
from service_quote.domain.quote import Advisory
from service_quote.domain.rules import RangeRule
from service_quote.domain.vehicle import VehicleSnapshot


ESTIMATE_REASON = "Price is an estimate: the vehicle does not fully match any pricing rule"


class MatchTier(str, Enum):
    EXACT = "exact"
    GENERIC = "generic"
    ESTIMATE = "estimate"


@dataclass(frozen=True, slots=True)
class RuleMatch:
    rule: RangeRule
    tier: MatchTier
    advisory: Advisory | None = None

    @property
    def is_estimate(self) -> bool:
        return self.tier is MatchTier.ESTIMATE


def matches_generic(rule: RangeRule, vehicle: VehicleSnapshot) -> bool:
    """Category, age and mileage only."""
    if rule.vehicle_category is not None and rule.vehicle_category is not vehicle.category:
        return False
    if not rule.car_age_months.contains(vehicle.age_months):
        return False
    if not rule.mileage_km.contains(vehicle.odometer_km):
        return False
    return True


def matches_exact(rule: RangeRule, vehicle: VehicleSnapshot) -> bool:
    if not matches_generic(rule, vehicle):
        return False
    if rule.fuel_type is not None and rule.fuel_type is not vehicle.fuel_type:
        return False

    size_range = rule.motor_power_hp if vehicle.fuel_type.uses_motor_power else rule.engine_ccm
    if size_range.is_unbounded:
        return True

    size = vehicle.size_attribute
    # A declared size range cannot be confirmed against an unknown size
    if size is None:
        return False
    return size_range.contains(size)


def match_rule(
    vehicle: VehicleSnapshot, rules: Sequence[RangeRule], component: str = "pricing"
) -> RuleMatch:
    """
    Resolve the single most specific rule for a vehicle.

    Args:
        vehicle: Validated vehicle snapshot
        rules: Rules of one priced category, in declaration order, pre-validated
        component: Name used in advisories and errors (e.g. "warranty")

    Returns:
        RuleMatch with the matched rule and the tier that produced it

    Raises:
        NoPricingDataError: If rules is empty (nothing to estimate from)
    """
    if not rules:
        raise NoPricingDataError(component)

    for rule in rules:
        if matches_exact(rule, vehicle):
            return RuleMatch(rule=rule, tier=MatchTier.EXACT)

    for rule in rules:
        if matches_generic(rule, vehicle):
            return RuleMatch(rule=rule, tier=MatchTier.GENERIC)

    return RuleMatch(
        rule=rules[0],
        tier=MatchTier.ESTIMATE,
        advisory=Advisory(component=component, reason=ESTIMATE_REASON),
    )
