"""Domain error classes.

Protocol-agnostic errors that represent quoting failures.
These errors are translated to appropriate formats (HTTP, CLI) by protocol adapters.
"""

from typing import Any


class DomainError(Exception):
    """Base class for all domain errors.

    Protocol-agnostic. Contains business error information that
    can be translated to HTTP or other transport formats.
    """

    # Default error code (can be used as i18n key)
    error_code: str = "DOMAIN_ERROR"

    def __init__(self, message: str, **context: Any) -> None:
        """Create a domain error.

        Args:
            message: Human-readable error message (default locale)
            **context: Additional context for error (e.g., field names, values)
        """
        self.message = message
        self.context = context
        super().__init__(message)

    def to_dict(self) -> dict[str, Any]:
        """Convert to structured format for protocol translation."""
        return {
            "message": self.message,
            "code": self.error_code,
            **self.context,
        }


class ValidationError(DomainError):
    """Input validation error.

    Raised before any rule matching is attempted. Inputs are never
    silently coerced into range.

    Examples:
        - horsepower outside every horsepower band
        - term_months not one of the offered terms
        - dealer subsidy other than 0, 50 or 100

    Protocol mappings:
        - REST: 422 Unprocessable Entity
    """

    error_code: str = "VALIDATION_ERROR"

    def __init__(
        self,
        message: str | None = None,
        errors: list[dict[str, str]] | None = None,
        **context: Any,
    ) -> None:
        """Create a validation error.

        Args:
            message: Overall validation error message (optional if errors provided)
            errors: List of field-specific errors, each with 'field' and 'message'
                   Example: [{"field": "horsepower", "message": "Must be > 0"}]
            **context: Additional context
        """
        self.errors: list[dict[str, str]] | None
        if errors:
            self.errors = errors
            msg = message or "Validation failed"
        else:
            self.errors = None
            msg = message or "Validation error"

        super().__init__(msg, **context)

    def to_dict(self) -> dict[str, Any]:
        """Convert to structured format."""
        if self.errors:
            return {
                "message": self.message,
                "code": self.error_code,
                "errors": self.errors,
                **self.context,
            }
        return super().to_dict()


class InvalidRuleDataError(ValidationError):
    """Malformed pricing rule data.

    Raised when a rule table is loaded, never during a calculation:
    rule matching assumes well-formed ranges.

    Examples:
        - car_age_months_from greater than car_age_months_to
        - overlapping horsepower bands
        - CSV row with a non-numeric price

    Protocol mappings:
        - REST: 422 Unprocessable Entity
    """

    error_code: str = "INVALID_RULE_DATA"


class NoPricingDataError(DomainError):
    """A required priced component has no rules to price from.

    Fatal for the calculation. The component is never priced at zero
    and never skipped.

    Protocol mappings:
        - REST: 409 Conflict
    """

    error_code: str = "NO_PRICING_DATA"

    def __init__(self, component: str, package_id: str | None = None, **context: Any) -> None:
        if package_id:
            message = f"No pricing data for {component} package '{package_id}'"
        else:
            message = f"No pricing data for {component}"

        super().__init__(message, component=component, package_id=package_id, **context)


class NotFoundError(DomainError):
    """Reference data not found.

    Examples:
        - Unknown country code

    Protocol mappings:
        - REST: 404 Not Found
    """

    error_code: str = "NOT_FOUND"

    def __init__(self, resource: str, identifier: str | None = None, **context: Any) -> None:
        """Create a not found error.

        Args:
            resource: Type of resource (e.g., "Country")
            identifier: Resource identifier (e.g., "dk")
            **context: Additional context
        """
        if identifier:
            message = f"{resource} with identifier '{identifier}' not found"
        else:
            message = f"{resource} not found"

        super().__init__(message, resource=resource, identifier=identifier, **context)


class InternalError(DomainError):
    """Internal domain error (unexpected conditions).

    Should be logged for investigation.

    Protocol mappings:
        - REST: 500 Internal Server Error
    """

    error_code: str = "INTERNAL_ERROR"
