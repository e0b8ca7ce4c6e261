from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from enum import Enum

from service_quote.domain.errors import ValidationError


class VehicleCategory(str, Enum):
    PERSONAL = "personal"
    VAN = "van"
    SUV = "suv"
    OTHER = "other"


class FuelType(str, Enum):
    PETROL = "petrol"
    DIESEL = "diesel"
    ELECTRIC = "electric"
    HYBRID = "hybrid"
    PLUGIN_HYBRID = "plugin_hybrid"

    @property
    def uses_motor_power(self) -> bool:
        """Electrified drivetrains are sized by motor power, not displacement."""
        return self in _MOTOR_POWER_FUELS


_MOTOR_POWER_FUELS = frozenset({FuelType.ELECTRIC, FuelType.HYBRID, FuelType.PLUGIN_HYBRID})

# Spellings used by the Danish admin tooling and its CSV exports
_CATEGORY_ALIASES = {
    "personbil": VehicleCategory.PERSONAL,
    "varebil": VehicleCategory.VAN,
    "andet": VehicleCategory.OTHER,
}
_FUEL_ALIASES = {
    "benzin": FuelType.PETROL,
    "el": FuelType.ELECTRIC,
    "plugin-hybrid": FuelType.PLUGIN_HYBRID,
    "plug-in-hybrid": FuelType.PLUGIN_HYBRID,
}


def parse_vehicle_category(value: str) -> VehicleCategory:
    """
    Raises:
        ValueError: If the value names no known category
    """
    key = value.strip().lower()
    return _CATEGORY_ALIASES.get(key) or VehicleCategory(key)


def parse_fuel_type(value: str) -> FuelType:
    """
    Raises:
        ValueError: If the value names no known fuel type
    """
    key = value.strip().lower()
    return _FUEL_ALIASES.get(key) or FuelType(key)


def age_in_months(first_registration: date, on: date) -> int:
    """
    Whole calendar months between first registration and a reference date.

    A month only counts once its day-of-month has been reached, so a car
    registered on 2024-01-31 is 0 months old on 2024-02-29 and 1 month old
    on 2024-03-30. Registration dates in the future yield 0.
    """
    months = (on.year - first_registration.year) * 12 + (on.month - first_registration.month)
    if on.day < first_registration.day:
        months -= 1
    return max(months, 0)


@dataclass(frozen=True, slots=True)
class VehicleSnapshot:
    horsepower: int
    age_months: int
    odometer_km: int
    category: VehicleCategory
    fuel_type: FuelType
    factory_warranty_years: int = 0
    engine_ccm: int | None = None
    motor_power_hp: int | None = None
    curb_weight_kg: int | None = None

    @property
    def size_attribute(self) -> int | None:
        """The engine/motor size relevant to this vehicle's fuel type."""
        if self.fuel_type.uses_motor_power:
            return self.motor_power_hp
        return self.engine_ccm

    def validate(self) -> None:
        """
        Validate vehicle attributes.

        Raises:
            ValidationError: With one entry per offending field
        """
        errors: list[dict[str, str]] = []

        if self.horsepower <= 0:
            errors.append(_field_error("horsepower", "Must be > 0"))
        if self.age_months < 0:
            errors.append(_field_error("age_months", "Must be >= 0"))
        if self.odometer_km < 0:
            errors.append(_field_error("odometer_km", "Must be >= 0"))
        if self.factory_warranty_years < 0:
            errors.append(_field_error("factory_warranty_years", "Must be >= 0"))
        if self.engine_ccm is not None and self.engine_ccm <= 0:
            errors.append(_field_error("engine_ccm", "Must be > 0"))
        if self.motor_power_hp is not None and self.motor_power_hp <= 0:
            errors.append(_field_error("motor_power_hp", "Must be > 0"))
        if self.curb_weight_kg is not None and self.curb_weight_kg <= 0:
            errors.append(_field_error("curb_weight_kg", "Must be > 0"))
        if self.fuel_type is FuelType.ELECTRIC and self.engine_ccm is not None:
            errors.append(
                _field_error(
                    "engine_ccm",
                    "Electric vehicles have no engine displacement; use motor_power_hp",
                    code="MUTUALLY_EXCLUSIVE",
                )
            )

        if errors:
            raise ValidationError(errors=errors)


def _field_error(field: str, message: str, code: str = "INVALID_VALUE") -> dict[str, str]:
    return {"field": field, "message": message, "code": code}
