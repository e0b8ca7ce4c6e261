"""PostgreSQL implementation of PricingRuleRepository."""

from __future__ import annotations

import logging

from sqlalchemy import select
from sqlalchemy.orm import Session

from service_quote.domain.errors import InvalidRuleDataError
from service_quote.domain.rules import HorsepowerBand, Range, RangeRule, RuleCategory, RuleTables
from service_quote.domain.vehicle import parse_fuel_type, parse_vehicle_category
from service_quote.infra.db.models import HorsepowerBandRow, PricingRuleRow
from service_quote.ports.pricing_rule_repository import PricingRuleRepository

logger = logging.getLogger(__name__)


class PostgresPricingRuleRepository(PricingRuleRepository):
    """
    PostgreSQL implementation of PricingRuleRepository.

    - Uses SQLAlchemy ORM for database access
    - Reads rules ordered by category position, bands by min_hp
    - Converts rows (infrastructure) to rules (domain)
    - Validates the assembled tables before returning them
    """

    def __init__(self, session: Session) -> None:
        """
        Initialize repository with database session.

        Args:
            session: SQLAlchemy session for database operations
        """
        self._session = session

    def load_rule_tables(self) -> RuleTables:
        """
        Load every rule table in one snapshot.

        Raises:
            InvalidRuleDataError: If any stored row cannot be mapped or is malformed
        """
        rule_query = select(PricingRuleRow).order_by(PricingRuleRow.position, PricingRuleRow.id)
        band_query = select(HorsepowerBandRow).order_by(HorsepowerBandRow.min_hp)

        rule_rows = self._session.execute(rule_query).scalars().all()
        band_rows = self._session.execute(band_query).scalars().all()

        by_category: dict[RuleCategory, list[RangeRule]] = {category: [] for category in RuleCategory}
        for row in rule_rows:
            rule = self._to_domain(row)
            by_category[rule.category].append(rule)

        tables = RuleTables(
            warranty=tuple(by_category[RuleCategory.WARRANTY]),
            tires=tuple(by_category[RuleCategory.TIRES]),
            roadside=tuple(by_category[RuleCategory.ROADSIDE]),
            horsepower_bands=tuple(self._band_to_domain(row) for row in band_rows),
        )
        tables.validate()

        logger.info(
            "Loaded pricing rule tables",
            extra={
                "warranty_rules": len(tables.warranty),
                "tire_rules": len(tables.tires),
                "roadside_rules": len(tables.roadside),
                "horsepower_bands": len(tables.horsepower_bands),
            },
        )
        return tables

    def _to_domain(self, row: PricingRuleRow) -> RangeRule:
        """
        Convert database model (PricingRuleRow) to domain rule (RangeRule).

        Raises:
            InvalidRuleDataError: If a categorical column holds an unknown value
        """
        try:
            category = RuleCategory(row.category)
            vehicle_category = (
                parse_vehicle_category(row.vehicle_category) if row.vehicle_category else None
            )
            fuel_type = parse_fuel_type(row.fuel_type) if row.fuel_type else None
        except ValueError as exc:
            raise InvalidRuleDataError(
                errors=[
                    {
                        "field": f"pricing_rules[{row.id}]",
                        "message": str(exc),
                        "code": "INVALID_VALUE",
                    }
                ]
            ) from exc

        return RangeRule(
            category=category,
            package_id=row.package_id,
            price=row.price,  # Already Decimal from NUMERIC column
            description=row.description,
            car_age_months=Range(row.car_age_months_from, row.car_age_months_to),
            mileage_km=Range(row.mileage_km_from, row.mileage_km_to),
            engine_ccm=Range(row.engine_size_ccm_from, row.engine_size_ccm_to),
            motor_power_hp=Range(row.motor_power_hp_from, row.motor_power_hp_to),
            vehicle_category=vehicle_category,
            fuel_type=fuel_type,
        )

    def _band_to_domain(self, row: HorsepowerBandRow) -> HorsepowerBand:
        return HorsepowerBand(
            name=row.name,
            min_hp=row.min_hp,
            max_hp=row.max_hp,
            annual_price=row.annual_price,
        )
