from __future__ import annotations

from datetime import date

from service_quote.domain.contract import AddOnSelection, ContractTerms, ContractType, CustomerType
from service_quote.domain.errors import ValidationError
from service_quote.domain.quote import Quote, QuoteLine
from service_quote.domain.tax import Currency, display_label, format_amount
from service_quote.domain.vehicle import FuelType, VehicleCategory, VehicleSnapshot, age_in_months
from service_quote.entrypoints.http.dtos.quote import (
    AddOnDTO,
    AdvisoryDTO,
    ContractTermsDTO,
    QuoteLineDTO,
    QuoteResponseDTO,
    VehicleDTO,
)


class QuoteMapper:
    """Maps between REST DTOs and domain models for quotes."""

    @staticmethod
    def to_vehicle(dto: VehicleDTO, today: date) -> VehicleSnapshot:
        """
        Converts vehicle DTO to a domain VehicleSnapshot.

        Age comes from age_months when given, otherwise from the first
        registration date relative to `today`.

        Raises:
            ValidationError: If neither age_months nor first_registration_date is given
        """
        if dto.age_months is not None:
            age_months = dto.age_months
        elif dto.first_registration_date is not None:
            age_months = age_in_months(dto.first_registration_date, today)
        else:
            raise ValidationError(
                errors=[
                    {
                        "field": "vehicle.age_months",
                        "message": "Provide age_months or first_registration_date",
                        "code": "REQUIRED",
                    }
                ]
            )

        return VehicleSnapshot(
            horsepower=dto.horsepower,
            age_months=age_months,
            odometer_km=dto.odometer_km,
            category=VehicleCategory(dto.category),
            fuel_type=FuelType(dto.fuel_type),
            factory_warranty_years=dto.factory_warranty_years,
            engine_ccm=dto.engine_ccm,
            motor_power_hp=dto.motor_power_hp,
            curb_weight_kg=dto.curb_weight_kg,
        )

    @staticmethod
    def to_terms(dto: ContractTermsDTO) -> ContractTerms:
        return ContractTerms(
            term_months=dto.term_months,
            annual_mileage_km=dto.annual_mileage_km,
            contract_type=ContractType(dto.contract_type),
            tires=_to_selection(dto.tires),
            roadside=_to_selection(dto.roadside),
            warranty=_to_selection(dto.warranty),
        )

    @staticmethod
    def to_customer_type(value: str) -> CustomerType:
        return CustomerType(value)

    @staticmethod
    def to_response(quote: Quote, currency: Currency) -> QuoteResponseDTO:
        """
        Converts domain Quote to response DTO.

        Handles Decimal → string conversion at the boundary.
        """
        return QuoteResponseDTO(
            base_price=str(quote.base_price),
            discounts=[_to_line_dto(line) for line in quote.discounts],
            surcharges=[_to_line_dto(line) for line in quote.surcharges],
            add_ons=[_to_line_dto(line) for line in quote.add_ons],
            discount_total=str(quote.discount_total),
            surcharge_total=str(quote.surcharge_total),
            add_on_total=str(quote.add_on_total),
            subtotal=str(quote.subtotal),
            vat_rate=str(quote.vat_rate),
            tax_amount=str(quote.tax_amount),
            total_including_tax=str(quote.total_including_tax),
            display_total=str(quote.display_total),
            display_total_formatted=format_amount(quote.display_total, currency),
            monthly_installment=str(quote.monthly_installment),
            monthly_installment_formatted=format_amount(quote.monthly_installment, currency),
            price_label=display_label(quote.customer_type),
            currency_code=quote.currency_code,
            term_months=quote.term_months,
            is_estimate=quote.is_estimate,
            advisories=[
                AdvisoryDTO(component=advisory.component, reason=advisory.reason)
                for advisory in quote.advisories
            ],
        )


def _to_selection(dto: AddOnDTO | None) -> AddOnSelection | None:
    if dto is None:
        return None
    return AddOnSelection(package_id=dto.package_id, dealer_subsidy_percent=dto.dealer_subsidy_percent)


def _to_line_dto(line: QuoteLine) -> QuoteLineDTO:
    return QuoteLineDTO(
        code=line.code,
        label=line.label,
        kind=line.kind.value,
        amount=str(line.amount),
        package_id=line.package_id,
        original_amount=str(line.original_amount) if line.original_amount is not None else None,
        dealer_subsidy_percent=line.dealer_subsidy_percent,
    )
