from __future__ import annotations

from service_quote.adapters.warranty_rule_csv import RuleImportResult
from service_quote.domain.rules import RangeRule
from service_quote.entrypoints.http.dtos.warranty_rules import (
    CsvRowErrorDTO,
    WarrantyRuleDTO,
    WarrantyRuleImportResponseDTO,
)


class WarrantyRuleMapper:
    """Maps warranty rules and CSV import results to REST DTOs."""

    @staticmethod
    def to_rule_dto(rule: RangeRule) -> WarrantyRuleDTO:
        return WarrantyRuleDTO(
            package_id=rule.package_id,
            description=rule.description,
            price=str(rule.price),
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
        )

    @staticmethod
    def to_import_response(result: RuleImportResult) -> WarrantyRuleImportResponseDTO:
        return WarrantyRuleImportResponseDTO(
            valid=result.is_valid,
            rules=[WarrantyRuleMapper.to_rule_dto(rule) for rule in result.rules],
            errors=[
                CsvRowErrorDTO(row=e.row, column=e.column, message=e.message, value=e.value)
                for e in result.errors
            ],
        )
