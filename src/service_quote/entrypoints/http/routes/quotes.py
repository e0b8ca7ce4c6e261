from datetime import date

from fastapi import APIRouter, Depends

from service_quote.domain.rules import RuleTables
from service_quote.entrypoints.http.dependencies import (
    get_compute_quote_use_case,
    get_rule_tables,
)
from service_quote.entrypoints.http.dtos.quote import QuoteRequestDTO, QuoteResponseDTO
from service_quote.entrypoints.http.error_responses import ErrorResponse
from service_quote.entrypoints.http.mappers.quote_mapper import QuoteMapper
from service_quote.infra.countries import find_country
from service_quote.infra.settings import default_country_code
from service_quote.use_cases.compute_quote import ComputeQuote, QuoteRequest


router = APIRouter(tags=["Quotes"])


@router.post(
    "/quotes",
    response_model=QuoteResponseDTO,
    summary="Compute service contract quote",
    description="""
    Price a service contract for one vehicle.

    ## Monetary Values
    - All monetary values are strings (e.g., "3891.60")
    - Amounts are annual unless named monthly
    - Every line item is rounded half-up to cents; totals are sums of rounded lines

    ## Pricing
    - Base price from the horsepower band the vehicle falls into
    - Discounts: remaining factory warranty, contract term
    - Surcharges: van category, annual mileage
    - Add-ons (tires, roadside, warranty) priced from range rules, optionally
      subsidized 0, 50 or 100 percent by the dealer

    ## Estimates
    When no rule fits the vehicle, the add-on is priced from the first rule in
    the table, `is_estimate` is true and `advisories` names the component.

    ## Tax
    Private customers see totals incl. VAT, business customers excl. VAT.
    """,
    responses={
        404: {"model": ErrorResponse, "description": "Unknown country code"},
        409: {
            "model": ErrorResponse,
            "description": "No pricing data for a selected component",
            "content": {
                "application/json": {
                    "example": {
                        "detail": "No pricing data for warranty package 'fragus-plus'",
                        "code": "NO_PRICING_DATA",
                    }
                }
            },
        },
        422: {
            "model": ErrorResponse,
            "description": "Validation error",
            "content": {
                "application/json": {
                    "examples": {
                        "invalid_term": {
                            "summary": "Invalid term",
                            "value": {
                                "detail": "Validation failed",
                                "code": "VALIDATION_ERROR",
                                "errors": [
                                    {
                                        "field": "term_months",
                                        "message": "Must be one of [12, 24, 36, 48, 60]",
                                        "code": "INVALID_VALUE",
                                    }
                                ],
                            },
                        },
                        "horsepower_out_of_range": {
                            "summary": "Horsepower outside all bands",
                            "value": {
                                "detail": "Validation failed",
                                "code": "VALIDATION_ERROR",
                                "errors": [
                                    {
                                        "field": "horsepower",
                                        "message": "No horsepower band covers 650 hp",
                                        "code": "OUT_OF_RANGE",
                                    }
                                ],
                            },
                        },
                    }
                }
            },
        },
    },
)
def create_quote(
    payload: QuoteRequestDTO,
    rule_tables: RuleTables = Depends(get_rule_tables),
    use_case: ComputeQuote = Depends(get_compute_quote_use_case),
) -> QuoteResponseDTO:
    """Compute quote endpoint following parse → execute → map → return pattern."""
    # 1. Map to domain request
    country = find_country(payload.country_code or default_country_code())
    tax_config = country.tax_config(QuoteMapper.to_customer_type(payload.customer_type))
    request = QuoteRequest(
        vehicle=QuoteMapper.to_vehicle(payload.vehicle, today=date.today()),
        terms=QuoteMapper.to_terms(payload.terms),
        rule_tables=rule_tables,
        tax_config=tax_config,
    )

    # 2. Execute use case
    quote = use_case.execute(request)

    # 3. Map to response
    return QuoteMapper.to_response(quote, country.currency)
