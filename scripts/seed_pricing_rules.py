#!/usr/bin/env python3
"""
Seed the pricing tables with a fixed reference dataset.

Features:
- Deterministic: same rules and bands every run
- Idempotent: safe to run multiple times (clears before seeding)
- Warranty rules can come from an admin CSV export instead (WARRANTY_RULES_CSV)

Usage:
    python scripts/seed_pricing_rules.py
    WARRANTY_RULES_CSV=warranty.csv python scripts/seed_pricing_rules.py
"""

from __future__ import annotations

import os
import sys
from decimal import Decimal
from pathlib import Path

# Add src to path so we can import our modules
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from service_quote.adapters.warranty_rule_csv import load_warranty_rules_csv
from service_quote.domain.pricing_policy import DEFAULT_HORSEPOWER_BANDS
from service_quote.domain.rules import Range, RangeRule, RuleCategory, RuleTables
from service_quote.domain.vehicle import FuelType, VehicleCategory
from service_quote.infra.db.models import HorsepowerBandRow, PricingRuleRow
from service_quote.infra.db.session import get_session


# ==============================================================================
# Reference Rules
# ==============================================================================

WARRANTY_RULES = (
    RangeRule(
        category=RuleCategory.WARRANTY,
        package_id="fragus-basic",
        description="Engine and gearbox, petrol and diesel up to 2.0 l",
        price=Decimal("4500"),
        car_age_months=Range(0, 96),
        mileage_km=Range(0, 150000),
        engine_ccm=Range(0, 2000),
        vehicle_category=VehicleCategory.PERSONAL,
    ),
    RangeRule(
        category=RuleCategory.WARRANTY,
        package_id="fragus-basic",
        description="Engine and gearbox, petrol and diesel above 2.0 l",
        price=Decimal("5900"),
        car_age_months=Range(0, 96),
        mileage_km=Range(0, 150000),
        engine_ccm=Range(2001, None),
        vehicle_category=VehicleCategory.PERSONAL,
    ),
    RangeRule(
        category=RuleCategory.WARRANTY,
        package_id="fragus-basic",
        description="Drivetrain and battery management, electric up to 300 hp",
        price=Decimal("7500"),
        car_age_months=Range(0, 96),
        mileage_km=Range(0, 150000),
        motor_power_hp=Range(100, 300),
        fuel_type=FuelType.ELECTRIC,
    ),
    RangeRule(
        category=RuleCategory.WARRANTY,
        package_id="fragus-plus",
        description="Extended cover including electronics",
        price=Decimal("6900"),
        car_age_months=Range(0, 72),
        mileage_km=Range(0, 120000),
    ),
)

TIRE_RULES = (
    RangeRule(
        category=RuleCategory.TIRES,
        package_id="tires-standard",
        description="Two sets per contract year, up to 17 inch",
        price=Decimal("1800"),
        engine_ccm=Range(None, 2000),
    ),
    RangeRule(
        category=RuleCategory.TIRES,
        package_id="tires-standard",
        description="Two sets per contract year, electric",
        price=Decimal("2400"),
        fuel_type=FuelType.ELECTRIC,
    ),
    RangeRule(
        category=RuleCategory.TIRES,
        package_id="tires-van",
        description="Commercial tires for vans",
        price=Decimal("2900"),
        vehicle_category=VehicleCategory.VAN,
    ),
)

ROADSIDE_RULES = (
    RangeRule(
        category=RuleCategory.ROADSIDE,
        package_id="roadside-eu",
        description="Roadside assistance in the EU",
        price=Decimal("540"),
    ),
)


# ==============================================================================
# Row Mapping
# ==============================================================================


def to_row(rule: RangeRule, position: int) -> PricingRuleRow:
    return PricingRuleRow(
        category=rule.category.value,
        package_id=rule.package_id,
        description=rule.description,
        price=rule.price,
        car_age_months_from=rule.car_age_months.lower,
        car_age_months_to=rule.car_age_months.upper,
        mileage_km_from=rule.mileage_km.lower,
        mileage_km_to=rule.mileage_km.upper,
        engine_size_ccm_from=rule.engine_ccm.lower,
        engine_size_ccm_to=rule.engine_ccm.upper,
        motor_power_hp_from=rule.motor_power_hp.lower,
        motor_power_hp_to=rule.motor_power_hp.upper,
        vehicle_category=rule.vehicle_category.value if rule.vehicle_category else None,
        fuel_type=rule.fuel_type.value if rule.fuel_type else None,
        position=position,
    )


def reference_tables() -> RuleTables:
    """Reference tables, with warranty rules read from WARRANTY_RULES_CSV when set."""
    warranty = WARRANTY_RULES
    csv_path = os.getenv("WARRANTY_RULES_CSV")
    if csv_path:
        warranty = load_warranty_rules_csv(Path(csv_path).read_text(encoding="utf-8"))

    tables = RuleTables(
        warranty=warranty,
        tires=TIRE_RULES,
        roadside=ROADSIDE_RULES,
        horsepower_bands=DEFAULT_HORSEPOWER_BANDS,
    )
    tables.validate()
    return tables


# ==============================================================================
# Seeding
# ==============================================================================


def seed_pricing_rules() -> None:
    tables = reference_tables()

    print("🌱 Seeding pricing tables...")

    with get_session() as session:
        # Step 1: Clear existing data (idempotent)
        print("🗑️  Clearing existing rules and bands...")
        deleted_rules = session.query(PricingRuleRow).delete()
        deleted_bands = session.query(HorsepowerBandRow).delete()
        print(f"   Deleted {deleted_rules} rules and {deleted_bands} bands")

        # Step 2: Insert bands and rules, keeping declaration order per category
        session.add_all(
            HorsepowerBandRow(
                name=band.name,
                min_hp=band.min_hp,
                max_hp=band.max_hp,
                annual_price=band.annual_price,
            )
            for band in tables.horsepower_bands
        )
        for rules in (tables.warranty, tables.tires, tables.roadside):
            session.add_all(to_row(rule, position) for position, rule in enumerate(rules))
        session.flush()

        print(
            f"✅ Seeded {len(tables.horsepower_bands)} bands, "
            f"{len(tables.warranty)} warranty, {len(tables.tires)} tire "
            f"and {len(tables.roadside)} roadside rules"
        )


# ==============================================================================
# Main
# ==============================================================================


if __name__ == "__main__":
    try:
        seed_pricing_rules()
    except Exception as e:
        print(f"❌ Error seeding database: {e}", file=sys.stderr)
        sys.exit(1)
