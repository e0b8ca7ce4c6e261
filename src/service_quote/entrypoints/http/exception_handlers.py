"""FastAPI exception handlers.

Every failure leaves the API in the ErrorResponse shape:
{"detail": ..., "code": ..., "errors": [...]} with errors only for field-level failures.
"""

import logging
from typing import Any

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from service_quote.domain.errors import DomainError

logger = logging.getLogger(__name__)

STATUS_CODE_MAP: dict[str, int] = {
    "VALIDATION_ERROR": 422,  # HTTP_422_UNPROCESSABLE_CONTENT
    "INVALID_RULE_DATA": 422,
    "NOT_FOUND": status.HTTP_404_NOT_FOUND,
    "NO_PRICING_DATA": status.HTTP_409_CONFLICT,
    "INTERNAL_ERROR": status.HTTP_500_INTERNAL_SERVER_ERROR,
}

# Caused by stored pricing data rather than by the caller
_DATA_ERROR_CODES = frozenset({"NO_PRICING_DATA", "INVALID_RULE_DATA"})

# Request locations FastAPI prefixes to field paths
_LOCATION_PREFIXES = ("body", "query", "path")


def _error_body(detail: str, code: str, errors: list[dict[str, Any]] | None = None) -> dict[str, Any]:
    body: dict[str, Any] = {"detail": detail, "code": code}
    if errors:
        body["errors"] = errors
    return body


def _request_extra(request: Request, **fields: Any) -> dict[str, Any]:
    return {"path": request.url.path, "method": request.method, **fields}


async def handle_domain_error(request: Request, exc: DomainError) -> JSONResponse:
    """Translate a DomainError using STATUS_CODE_MAP (unmapped codes → 400).

    Log level follows who has to act:
    - 5xx: ERROR with context
    - missing or malformed pricing data: WARNING, an operator has to fix the rule tables
    - other client errors: INFO
    """
    status_code = STATUS_CODE_MAP.get(exc.error_code, status.HTTP_400_BAD_REQUEST)
    extra = _request_extra(request, error_code=exc.error_code, error_message=exc.message)

    if status_code >= 500:
        logger.error("Domain error occurred", extra={**extra, "context": exc.context})
    elif exc.error_code in _DATA_ERROR_CODES:
        logger.warning("Pricing data error", extra={**extra, "context": exc.context})
    else:
        logger.info("Client error", extra=extra)

    error_dict = exc.to_dict()
    return JSONResponse(
        status_code=status_code,
        content=_error_body(error_dict["message"], error_dict["code"], error_dict.get("errors")),
    )


async def handle_request_validation_error(
    request: Request, exc: RequestValidationError
) -> JSONResponse:
    """Handle pydantic errors raised while parsing the request.

    Field paths drop the request location, so a bad
    body.vehicle.fuel_type is reported as vehicle.fuel_type.
    """
    errors = [
        {
            "field": ".".join(str(loc) for loc in error["loc"] if loc not in _LOCATION_PREFIXES),
            "message": error["msg"],
            "code": error["type"],
        }
        for error in exc.errors()
    ]

    logger.info("Request validation error", extra=_request_extra(request, errors=errors))

    return JSONResponse(
        status_code=422,  # HTTP_422_UNPROCESSABLE_CONTENT
        content=_error_body("Invalid request parameters", "VALIDATION_ERROR", errors),
    )


async def handle_value_error(request: Request, exc: ValueError) -> JSONResponse:
    """Enum conversions in the mappers raise ValueError for values the DTO patterns missed."""
    logger.info("Value error", extra=_request_extra(request, error_message=str(exc)))

    return JSONResponse(
        status_code=422,  # HTTP_422_UNPROCESSABLE_CONTENT
        content=_error_body(str(exc), "INVALID_VALUE"),
    )


async def handle_unexpected_error(request: Request, exc: Exception) -> JSONResponse:
    logger.error(
        "Unexpected error occurred",
        exc_info=exc,
        extra=_request_extra(request, error_type=type(exc).__name__, error_message=str(exc)),
    )

    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content=_error_body("An unexpected error occurred", "INTERNAL_ERROR"),
    )


def register_exception_handlers(app: FastAPI) -> None:
    """Register all exception handlers. Call once while building the app."""
    app.add_exception_handler(DomainError, handle_domain_error)  # type: ignore[arg-type]
    app.add_exception_handler(RequestValidationError, handle_request_validation_error)  # type: ignore[arg-type]
    app.add_exception_handler(ValueError, handle_value_error)  # type: ignore[arg-type]
    app.add_exception_handler(Exception, handle_unexpected_error)

    logger.info("Exception handlers registered")
