from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

from service_quote.domain.errors import ValidationError
from service_quote.domain.rules import RuleCategory


ALLOWED_TERMS = (12, 24, 36, 48, 60)
ALLOWED_ANNUAL_MILEAGES = (15000, 20000, 25000, 30000, 35000, 40000, 45000, 50000, 55000, 60000)
ALLOWED_DEALER_SUBSIDIES = (0, 50, 100)


class ContractType(str, Enum):
    SERVICE = "service"
    SERVICE_AND_REPAIR = "service_and_repair"


class CustomerType(str, Enum):
    PRIVATE = "private"
    BUSINESS = "business"


@dataclass(frozen=True, slots=True)
class AddOnSelection:
    """A toggled add-on. An add-on that is not toggled is simply absent (None)."""

    package_id: str | None = None
    dealer_subsidy_percent: int = 0


@dataclass(frozen=True, slots=True)
class ContractTerms:
    term_months: int
    annual_mileage_km: int
    contract_type: ContractType = ContractType.SERVICE
    tires: AddOnSelection | None = None
    roadside: AddOnSelection | None = None
    warranty: AddOnSelection | None = None

    def selected_add_ons(self) -> list[tuple[RuleCategory, AddOnSelection]]:
        """Toggled add-ons in display order: tires, roadside, warranty."""
        candidates = (
            (RuleCategory.TIRES, self.tires),
            (RuleCategory.ROADSIDE, self.roadside),
            (RuleCategory.WARRANTY, self.warranty),
        )
        return [(category, selection) for category, selection in candidates if selection is not None]

    def validate(self) -> None:
        """
        Validate contract terms.

        Raises:
            ValidationError: With one entry per offending field
        """
        errors: list[dict[str, str]] = []

        if self.term_months not in ALLOWED_TERMS:
            errors.append(
                {
                    "field": "term_months",
                    "message": f"Must be one of {list(ALLOWED_TERMS)}",
                    "code": "INVALID_VALUE",
                }
            )
        if self.annual_mileage_km not in ALLOWED_ANNUAL_MILEAGES:
            errors.append(
                {
                    "field": "annual_mileage_km",
                    "message": f"Must be one of {list(ALLOWED_ANNUAL_MILEAGES)}",
                    "code": "INVALID_VALUE",
                }
            )

        for category, selection in self.selected_add_ons():
            if selection.dealer_subsidy_percent not in ALLOWED_DEALER_SUBSIDIES:
                errors.append(
                    {
                        "field": f"{category.value}.dealer_subsidy_percent",
                        "message": f"Must be one of {list(ALLOWED_DEALER_SUBSIDIES)}",
                        "code": "INVALID_VALUE",
                    }
                )

        # Warranty insurance is only sold alongside service-only contracts
        if self.warranty is not None and self.contract_type is not ContractType.SERVICE:
            errors.append(
                {
                    "field": "warranty",
                    "message": "Warranty insurance requires a service-only contract",
                    "code": "NOT_ALLOWED",
                }
            )

        if errors:
            raise ValidationError(errors=errors)
