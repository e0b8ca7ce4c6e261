from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal
from enum import Enum

from service_quote.domain.errors import InvalidRuleDataError
from service_quote.domain.vehicle import FuelType, VehicleCategory


class RuleCategory(str, Enum):
    WARRANTY = "warranty"
    TIRES = "tires"
    ROADSIDE = "roadside"


@dataclass(frozen=True, slots=True)
class Range:
    """Inclusive numeric range. A missing bound is unconstrained."""

    lower: int | None = None
    upper: int | None = None

    @property
    def is_unbounded(self) -> bool:
        return self.lower is None and self.upper is None

    @property
    def is_well_formed(self) -> bool:
        return self.lower is None or self.upper is None or self.lower <= self.upper

    def contains(self, value: int) -> bool:
        if self.lower is not None and value < self.lower:
            return False
        if self.upper is not None and value > self.upper:
            return False
        return True


UNBOUNDED = Range()


@dataclass(frozen=True, slots=True)
class RangeRule:
    """
    An annual price valid inside declared attribute ranges.

    Every range and categorical filter is optional; an undeclared dimension
    never excludes a vehicle. Rules are read-only during a calculation.
    """

    category: RuleCategory
    package_id: str
    price: Decimal
    description: str | None = None
    car_age_months: Range = UNBOUNDED
    mileage_km: Range = UNBOUNDED
    engine_ccm: Range = UNBOUNDED
    motor_power_hp: Range = UNBOUNDED
    vehicle_category: VehicleCategory | None = None
    fuel_type: FuelType | None = None

    def validation_errors(self) -> list[dict[str, str]]:
        errors: list[dict[str, str]] = []

        if not self.package_id or not self.package_id.strip():
            errors.append(
                {"field": "package_id", "message": "Package id is required", "code": "REQUIRED"}
            )
        if not isinstance(self.price, Decimal):
            errors.append(
                {
                    "field": "price",
                    "message": "price must be Decimal (no floats past the boundary)",
                    "code": "INVALID_DECIMAL",
                }
            )
        elif self.price < 0:
            errors.append({"field": "price", "message": "Must be >= 0", "code": "INVALID_VALUE"})

        for name in ("car_age_months", "mileage_km", "engine_ccm", "motor_power_hp"):
            bounds: Range = getattr(self, name)
            if not bounds.is_well_formed:
                errors.append(
                    {
                        "field": f"{name}_from",
                        "message": f"{name}_from cannot be greater than {name}_to",
                        "code": "INVALID_RANGE",
                    }
                )

        return errors


@dataclass(frozen=True, slots=True)
class HorsepowerBand:
    name: str
    min_hp: int
    max_hp: int
    annual_price: Decimal

    def contains(self, horsepower: int) -> bool:
        return self.min_hp <= horsepower <= self.max_hp


@dataclass(frozen=True, slots=True)
class RuleTables:
    """
    Immutable snapshot of every rule table a quote is priced from.

    Tables are tuples so a snapshot handed to a calculation can never be
    changed under it; editing rules means building a new RuleTables.
    """

    warranty: tuple[RangeRule, ...] = ()
    tires: tuple[RangeRule, ...] = ()
    roadside: tuple[RangeRule, ...] = ()
    horsepower_bands: tuple[HorsepowerBand, ...] = ()

    def rules_for(
        self, category: RuleCategory, package_id: str | None = None
    ) -> tuple[RangeRule, ...]:
        """Rules of one category in input order, optionally narrowed to a package."""
        rules = {
            RuleCategory.WARRANTY: self.warranty,
            RuleCategory.TIRES: self.tires,
            RuleCategory.ROADSIDE: self.roadside,
        }[category]
        if package_id is None:
            return rules
        return tuple(rule for rule in rules if rule.package_id == package_id)

    def validate(self) -> None:
        """
        Validate every table. Called once when tables are loaded.

        Raises:
            InvalidRuleDataError: Listing every malformed rule and band
        """
        errors: list[dict[str, str]] = []

        for category in RuleCategory:
            for index, rule in enumerate(self.rules_for(category)):
                if rule.category is not category:
                    errors.append(
                        {
                            "field": f"{category.value}[{index}].category",
                            "message": f"Rule of category '{rule.category.value}' "
                            f"found in the {category.value} table",
                            "code": "INVALID_VALUE",
                        }
                    )
                for error in rule.validation_errors():
                    errors.append({**error, "field": f"{category.value}[{index}].{error['field']}"})

        errors.extend(_band_errors(self.horsepower_bands))

        if errors:
            raise InvalidRuleDataError(errors=errors)


def _band_errors(bands: tuple[HorsepowerBand, ...]) -> list[dict[str, str]]:
    errors: list[dict[str, str]] = []
    previous: HorsepowerBand | None = None

    for index, band in enumerate(bands):
        prefix = f"horsepower_bands[{index}]"
        if band.min_hp < 0:
            errors.append(
                {"field": f"{prefix}.min_hp", "message": "Must be >= 0", "code": "INVALID_VALUE"}
            )
        if band.min_hp > band.max_hp:
            errors.append(
                {
                    "field": f"{prefix}.min_hp",
                    "message": "min_hp cannot be greater than max_hp",
                    "code": "INVALID_RANGE",
                }
            )
        if band.annual_price < 0:
            errors.append(
                {
                    "field": f"{prefix}.annual_price",
                    "message": "Must be >= 0",
                    "code": "INVALID_VALUE",
                }
            )
        if previous is not None and band.min_hp <= previous.max_hp:
            errors.append(
                {
                    "field": f"{prefix}.min_hp",
                    "message": f"Band '{band.name}' overlaps or precedes band '{previous.name}'",
                    "code": "OVERLAPPING_BANDS",
                }
            )
        previous = band

    return errors
