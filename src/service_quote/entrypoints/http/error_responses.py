"""REST API error response models.

Structured error responses that provide consistent format for all HTTP errors.
"""

from pydantic import BaseModel, ConfigDict


class ErrorDetail(BaseModel):
    """Individual error detail for field-level errors.

    Used in validation errors to indicate which field failed and why.
    """

    field: str
    message: str
    code: str | None = None

    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "field": "warranty.dealer_subsidy_percent",
                "message": "Must be one of [0, 50, 100]",
                "code": "INVALID_VALUE",
            }
        }
    )


class ErrorResponse(BaseModel):
    """Structured error response format.

    Supports:
    - Simple errors (just detail and code)
    - Multi-field validation errors (detail + errors array)
    - Error codes for i18n (code field can be used for translation keys)

    Examples:
        Missing reference data:
            {
                "detail": "No pricing data for tires",
                "code": "NO_PRICING_DATA"
            }

        Validation error with multiple fields:
            {
                "detail": "Validation failed",
                "code": "VALIDATION_ERROR",
                "errors": [
                    {
                        "field": "term_months",
                        "message": "Must be one of [12, 24, 36, 48, 60]",
                        "code": "INVALID_VALUE"
                    }
                ]
            }
    """

    detail: str
    code: str | None = None
    errors: list[ErrorDetail] | None = None

    model_config = ConfigDict(
        json_schema_extra={
            "examples": [
                {"detail": "No pricing data for tires", "code": "NO_PRICING_DATA"},
                {"detail": "Country with identifier 'xx' not found", "code": "NOT_FOUND"},
                {
                    "detail": "Validation failed",
                    "code": "VALIDATION_ERROR",
                    "errors": [
                        {
                            "field": "term_months",
                            "message": "Must be one of [12, 24, 36, 48, 60]",
                            "code": "INVALID_VALUE",
                        },
                        {
                            "field": "warranty",
                            "message": "Warranty insurance requires a service-only contract",
                            "code": "NOT_ALLOWED",
                        },
                    ],
                },
            ]
        }
    )
