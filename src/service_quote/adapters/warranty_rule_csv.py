"""CSV import/export of warranty pricing rules.

The column layout is the one produced and consumed by the admin tooling and
must stay stable:

    package_id,description,price,car_age_months_from,car_age_months_to,
    mileage_km_from,mileage_km_to,engine_size_ccm_from,engine_size_ccm_to,
    vehicle_category,fuel_type

Empty cells mean "unconstrained". Motor-power bounds travel in two optional
trailing columns (motor_power_hp_from, motor_power_hp_to), which are only
written when at least one rule declares them.
"""

from __future__ import annotations

import csv
import io
import logging
from dataclasses import dataclass
from decimal import Decimal, InvalidOperation
from typing import Sequence

from service_quote.domain.errors import InvalidRuleDataError
from service_quote.domain.rules import Range, RangeRule, RuleCategory
from service_quote.domain.vehicle import (
    FuelType,
    VehicleCategory,
    parse_fuel_type,
    parse_vehicle_category,
)

logger = logging.getLogger(__name__)


CSV_HEADERS = [
    "package_id",
    "description",
    "price",
    "car_age_months_from",
    "car_age_months_to",
    "mileage_km_from",
    "mileage_km_to",
    "engine_size_ccm_from",
    "engine_size_ccm_to",
    "vehicle_category",
    "fuel_type",
]
MOTOR_POWER_HEADERS = ["motor_power_hp_from", "motor_power_hp_to"]

# (csv column prefix, human label) for every range column pair
RANGE_COLUMNS = [
    ("car_age_months", "Car age"),
    ("mileage_km", "Mileage"),
    ("engine_size_ccm", "Engine size"),
    ("motor_power_hp", "Motor power"),
]

FIRST_DATA_ROW = 2  # row 1 is the header

# Spellings the admin tooling writes; import accepts these and the enum values
ADMIN_CATEGORY_NAMES = {
    VehicleCategory.PERSONAL: "personbil",
    VehicleCategory.VAN: "varebil",
    VehicleCategory.SUV: "suv",
    VehicleCategory.OTHER: "andet",
}
ADMIN_FUEL_NAMES = {
    FuelType.PETROL: "benzin",
    FuelType.DIESEL: "diesel",
    FuelType.ELECTRIC: "el",
    FuelType.HYBRID: "hybrid",
    FuelType.PLUGIN_HYBRID: "plugin-hybrid",
}


@dataclass(frozen=True, slots=True)
class RowError:
    row: int
    column: str
    message: str
    value: str

    def to_dict(self) -> dict[str, str]:
        return {
            "field": f"row {self.row}: {self.column}",
            "message": self.message,
            "code": "INVALID_CSV_VALUE",
        }


@dataclass(frozen=True, slots=True)
class RuleImportResult:
    """Valid rules in file order, plus one error per offending cell."""

    rules: tuple[RangeRule, ...]
    errors: tuple[RowError, ...]

    @property
    def is_valid(self) -> bool:
        return not self.errors


def parse_warranty_rules_csv(content: str) -> RuleImportResult:
    """
    Parse and validate warranty rules row by row.

    Rows with errors are left out of `rules`; every other row is kept, so an
    admin can preview a partially broken file.
    """
    if not content.strip():
        return RuleImportResult(
            rules=(),
            errors=(RowError(row=0, column="general", message="CSV file is empty", value=""),),
        )

    # Leading blank lines would otherwise be read as the header row
    reader = csv.DictReader(io.StringIO(content.lstrip()))
    reader.fieldnames = [name.strip() for name in reader.fieldnames or []]

    missing = [header for header in ("package_id", "price") if header not in reader.fieldnames]
    if missing:
        return RuleImportResult(
            rules=(),
            errors=(
                RowError(
                    row=1,
                    column="header",
                    message=f"Missing required columns: {', '.join(missing)}",
                    value=",".join(reader.fieldnames),
                ),
            ),
        )

    rules: list[RangeRule] = []
    errors: list[RowError] = []

    row_number = FIRST_DATA_ROW - 1
    for record in reader:
        cells = {key: (value or "").strip() for key, value in record.items() if key is not None}
        # Blank and whitespace-only lines are not rows; quoted newlines stay inside their cell
        if not any(cells.values()):
            continue
        row_number += 1
        rule, row_errors = _parse_row(cells, row_number)
        if row_errors:
            errors.extend(row_errors)
        elif rule is not None:
            rules.append(rule)

    if errors:
        logger.info(
            "Warranty rule CSV contains invalid rows",
            extra={"valid_rules": len(rules), "errors": len(errors)},
        )

    return RuleImportResult(rules=tuple(rules), errors=tuple(errors))


def load_warranty_rules_csv(content: str) -> tuple[RangeRule, ...]:
    """
    Parse a CSV file for use in pricing. All rows must be valid.

    Raises:
        InvalidRuleDataError: Listing every invalid cell
    """
    result = parse_warranty_rules_csv(content)
    if not result.is_valid:
        raise InvalidRuleDataError(
            "Warranty rule CSV contains invalid rows",
            errors=[error.to_dict() for error in result.errors],
        )
    return result.rules


def export_warranty_rules_csv(rules: Sequence[RangeRule]) -> str:
    """Serialize rules in the admin tooling's CSV layout (no trailing newline)."""
    headers = list(CSV_HEADERS)
    if any(not rule.motor_power_hp.is_unbounded for rule in rules):
        headers += MOTOR_POWER_HEADERS

    buffer = io.StringIO()
    writer = csv.DictWriter(buffer, fieldnames=headers, lineterminator="\n", extrasaction="ignore")
    writer.writeheader()
    for rule in rules:
        writer.writerow(_to_csv_row(rule))

    return buffer.getvalue().rstrip("\n")


def _to_csv_row(rule: RangeRule) -> dict[str, str]:
    return {
        "package_id": rule.package_id,
        "description": rule.description or "",
        "price": _format_number(rule.price),
        "car_age_months_from": _format_number(rule.car_age_months.lower),
        "car_age_months_to": _format_number(rule.car_age_months.upper),
        "mileage_km_from": _format_number(rule.mileage_km.lower),
        "mileage_km_to": _format_number(rule.mileage_km.upper),
        "engine_size_ccm_from": _format_number(rule.engine_ccm.lower),
        "engine_size_ccm_to": _format_number(rule.engine_ccm.upper),
        "vehicle_category": (
            ADMIN_CATEGORY_NAMES[rule.vehicle_category] if rule.vehicle_category else ""
        ),
        "fuel_type": ADMIN_FUEL_NAMES[rule.fuel_type] if rule.fuel_type else "",
        "motor_power_hp_from": _format_number(rule.motor_power_hp.lower),
        "motor_power_hp_to": _format_number(rule.motor_power_hp.upper),
    }


def _format_number(value: Decimal | int | None) -> str:
    """Plain notation, no trailing zeros: 7500.00 -> '7500', 99.50 -> '99.5'."""
    if value is None:
        return ""
    if isinstance(value, int):
        return str(value)
    normalized = value.normalize()
    if normalized == normalized.to_integral_value():
        return str(normalized.quantize(Decimal("1")))
    return format(normalized, "f")


def _parse_row(cells: dict[str, str], row: int) -> tuple[RangeRule | None, list[RowError]]:
    errors: list[RowError] = []

    package_id = cells.get("package_id", "")
    if not package_id:
        errors.append(RowError(row, "package_id", "Package id is required", package_id))

    raw_price = cells.get("price", "")
    price = None
    if not raw_price:
        errors.append(RowError(row, "price", "Price is required", raw_price))
    else:
        price = _parse_decimal(raw_price)
        if price is None:
            errors.append(RowError(row, "price", "Price must be a number", raw_price))
        elif price < 0:
            errors.append(RowError(row, "price", "Price cannot be negative", raw_price))

    ranges: dict[str, Range] = {}
    for prefix, label in RANGE_COLUMNS:
        bounds: list[int | None] = []
        for column in (f"{prefix}_from", f"{prefix}_to"):
            raw = cells.get(column, "")
            value = _parse_whole_number(raw) if raw else None
            if raw and value is None:
                errors.append(RowError(row, column, f"{column} must be a whole number", raw))
            bounds.append(value)

        lower, upper = bounds
        if lower is not None and upper is not None and lower > upper:
            errors.append(
                RowError(
                    row,
                    f"{prefix}_from",
                    f"{label} from must be less than or equal to {label.lower()} to",
                    f"{lower} > {upper}",
                )
            )
        ranges[prefix] = Range(lower, upper)

    vehicle_category = None
    raw_category = cells.get("vehicle_category", "")
    if raw_category:
        try:
            vehicle_category = parse_vehicle_category(raw_category)
        except ValueError:
            errors.append(RowError(row, "vehicle_category", "Unknown vehicle category", raw_category))

    fuel_type = None
    raw_fuel = cells.get("fuel_type", "")
    if raw_fuel:
        try:
            fuel_type = parse_fuel_type(raw_fuel)
        except ValueError:
            errors.append(RowError(row, "fuel_type", "Unknown fuel type", raw_fuel))

    if errors or price is None:
        return None, errors

    rule = RangeRule(
        category=RuleCategory.WARRANTY,
        package_id=package_id,
        price=price,
        description=cells.get("description") or None,
        car_age_months=ranges["car_age_months"],
        mileage_km=ranges["mileage_km"],
        engine_ccm=ranges["engine_size_ccm"],
        motor_power_hp=ranges["motor_power_hp"],
        vehicle_category=vehicle_category,
        fuel_type=fuel_type,
    )
    return rule, []


def _parse_decimal(raw: str) -> Decimal | None:
    try:
        value = Decimal(raw)
    except InvalidOperation:
        return None
    return value if value.is_finite() else None


def _parse_whole_number(raw: str) -> int | None:
    value = _parse_decimal(raw)
    if value is None or value != value.to_integral_value():
        return None
    return int(value)
