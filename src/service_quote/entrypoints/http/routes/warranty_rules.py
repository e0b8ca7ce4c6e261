from fastapi import APIRouter, Depends
from fastapi.responses import Response

from service_quote.adapters.warranty_rule_csv import (
    export_warranty_rules_csv,
    parse_warranty_rules_csv,
)
from service_quote.domain.rules import RuleTables
from service_quote.entrypoints.http.dependencies import get_rule_tables
from service_quote.entrypoints.http.dtos.warranty_rules import (
    WarrantyRuleCsvImportDTO,
    WarrantyRuleImportResponseDTO,
)
from service_quote.entrypoints.http.mappers.warranty_rule_mapper import WarrantyRuleMapper


router = APIRouter(prefix="/warranty-rules", tags=["Warranty rules"])


@router.get(
    "/export",
    response_class=Response,
    summary="Export warranty rules as CSV",
    responses={
        200: {
            "description": "CSV file in the admin tooling layout",
            "content": {
                "text/csv": {
                    "example": "package_id,description,price,car_age_months_from,car_age_months_to,"
                    "mileage_km_from,mileage_km_to,engine_size_ccm_from,engine_size_ccm_to,"
                    "vehicle_category,fuel_type\n"
                    "fragus-basic,Standard,4500,0,60,0,100000,,,personbil,"
                }
            },
        }
    },
)
def export_warranty_rules(rule_tables: RuleTables = Depends(get_rule_tables)) -> Response:
    content = export_warranty_rules_csv(rule_tables.warranty)
    return Response(
        content=content,
        media_type="text/csv",
        headers={"Content-Disposition": 'attachment; filename="warranty_rules.csv"'},
    )


@router.post(
    "/import/validate",
    response_model=WarrantyRuleImportResponseDTO,
    summary="Validate a warranty rule CSV",
    description="""
    Parse a warranty rule CSV without storing it.

    Returns every valid rule plus one error per invalid cell. Row numbers are
    1-based file rows, so the first data row is row 2.
    """,
)
def validate_warranty_rule_import(
    payload: WarrantyRuleCsvImportDTO,
) -> WarrantyRuleImportResponseDTO:
    result = parse_warranty_rules_csv(payload.content)
    return WarrantyRuleMapper.to_import_response(result)
