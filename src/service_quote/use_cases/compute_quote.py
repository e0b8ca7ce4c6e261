from __future__ import annotations

import logging
from dataclasses import dataclass
from decimal import Decimal

from service_quote.domain.amortization import monthly_installment, round_money
from service_quote.domain.contract import AddOnSelection, ContractTerms, CustomerType
from service_quote.domain.errors import InternalError, NoPricingDataError
from service_quote.domain.price_aggregation import (
    AddOnPrice,
    Adjustment,
    PriceBreakdown,
    aggregate_price,
    find_horsepower_band,
)
from service_quote.domain.pricing_policy import DEFAULT_PRICING_POLICY, PricingPolicy
from service_quote.domain.quote import LineKind, Quote, QuoteLine
from service_quote.domain.rule_matching import RuleMatch, match_rule
from service_quote.domain.rules import RuleCategory, RuleTables
from service_quote.domain.tax import TaxConfig, normalize_for_display, tax_amount
from service_quote.domain.vehicle import VehicleSnapshot

logger = logging.getLogger(__name__)


ZERO = Decimal("0.00")

ADD_ON_LABELS = {
    RuleCategory.TIRES: "Tire plan",
    RuleCategory.ROADSIDE: "Roadside assistance",
    RuleCategory.WARRANTY: "Warranty insurance",
}


@dataclass(frozen=True, slots=True)
class QuoteRequest:
    vehicle: VehicleSnapshot
    terms: ContractTerms
    rule_tables: RuleTables
    tax_config: TaxConfig


@dataclass(frozen=True, slots=True)
class ComputeQuote:
    """
    Recompute a complete quote from scratch.

    There is no incremental path: any input change can move band selection,
    discount eligibility and rule matching (a new fuel type even changes which
    size dimension is relevant), so every call prices everything again from its
    own immutable inputs.

    Rounding policy:
    - All intermediate calculations use full precision Decimal
    - Each line item is rounded once to cents using ROUND_HALF_UP
    - Subtotal and totals are summed from the rounded items (not re-rounded)
    - This ensures: subtotal == base - discounts + surcharges + add-ons (exactly)
    """

    policy: PricingPolicy = DEFAULT_PRICING_POLICY

    def __post_init__(self) -> None:
        self.policy.validate()

    def execute(self, request: QuoteRequest) -> Quote:
        vehicle, terms, tables = request.vehicle, request.terms, request.rule_tables

        # Validate everything before any rule is matched
        vehicle.validate()
        terms.validate()
        request.tax_config.validate()

        if not tables.horsepower_bands:
            raise NoPricingDataError("base_service")
        band = find_horsepower_band(tables.horsepower_bands, vehicle.horsepower)

        add_on_matches = [
            (category, selection, self._match_add_on(vehicle, tables, category, selection))
            for category, selection in terms.selected_add_ons()
        ]

        breakdown = aggregate_price(band, vehicle, terms, add_on_matches, self.policy)
        quote = _build_quote(breakdown, terms, request.tax_config)

        if quote.subtotal < 0:
            raise InternalError("Computed subtotal is negative", subtotal=str(quote.subtotal))

        if quote.is_estimate:
            logger.info(
                "Quote contains estimated prices",
                extra={"components": [advisory.component for advisory in quote.advisories]},
            )

        return quote

    def _match_add_on(
        self,
        vehicle: VehicleSnapshot,
        tables: RuleTables,
        category: RuleCategory,
        selection: AddOnSelection,
    ) -> RuleMatch:
        rules = tables.rules_for(category, selection.package_id)
        if not rules:
            logger.warning(
                "No pricing rules for selected add-on",
                extra={"component": category.value, "package_id": selection.package_id},
            )
            raise NoPricingDataError(category.value, selection.package_id)

        match = match_rule(vehicle, rules, component=category.value)
        logger.debug(
            "Matched pricing rule",
            extra={
                "component": category.value,
                "package_id": match.rule.package_id,
                "tier": match.tier.value,
            },
        )
        return match


def compute_quote(
    vehicle: VehicleSnapshot,
    terms: ContractTerms,
    rule_tables: RuleTables,
    tax_config: TaxConfig,
    policy: PricingPolicy = DEFAULT_PRICING_POLICY,
) -> Quote:
    """
    Price a service contract.

    Args:
        vehicle: Vehicle attributes for this calculation
        terms: Contract length, mileage and toggled add-ons
        rule_tables: Validated rule tables snapshot
        tax_config: VAT rate, currency and customer type
        policy: Discount and surcharge rate tables

    Returns:
        Quote, possibly annotated with estimate advisories

    Raises:
        ValidationError: If any input is invalid (e.g. horsepower outside all bands)
        NoPricingDataError: If a toggled add-on has no rules to price from
    """
    request = QuoteRequest(vehicle=vehicle, terms=terms, rule_tables=rule_tables, tax_config=tax_config)
    return ComputeQuote(policy=policy).execute(request)


def _adjustment_line(adjustment: Adjustment, kind: LineKind) -> QuoteLine:
    return QuoteLine(
        code=adjustment.code,
        label=adjustment.label,
        kind=kind,
        amount=round_money(adjustment.amount),
    )


def _add_on_line(add_on: AddOnPrice) -> QuoteLine:
    return QuoteLine(
        code=add_on.category.value,
        label=ADD_ON_LABELS[add_on.category],
        kind=LineKind.ADD_ON,
        amount=round_money(add_on.price),
        package_id=add_on.match.rule.package_id,
        original_amount=round_money(add_on.original_price),
        dealer_subsidy_percent=add_on.dealer_subsidy_percent,
    )


def _build_quote(breakdown: PriceBreakdown, terms: ContractTerms, tax_config: TaxConfig) -> Quote:
    base_price = round_money(breakdown.base_price)
    discounts = tuple(_adjustment_line(d, LineKind.DISCOUNT) for d in breakdown.discounts)
    surcharges = tuple(_adjustment_line(s, LineKind.SURCHARGE) for s in breakdown.surcharges)
    add_ons = tuple(_add_on_line(a) for a in breakdown.add_ons)

    discount_total = sum((line.amount for line in discounts), ZERO)
    surcharge_total = sum((line.amount for line in surcharges), ZERO)
    add_on_total = sum((line.amount for line in add_ons), ZERO)
    subtotal = base_price - discount_total + surcharge_total + add_on_total

    tax = round_money(tax_amount(subtotal, tax_config.vat_rate))
    total_including_tax = subtotal + tax
    display_total = (
        total_including_tax if tax_config.customer_type is CustomerType.PRIVATE else subtotal
    )

    # Installment comes from the pre-tax subtotal and is normalized separately
    installment = round_money(normalize_for_display(monthly_installment(subtotal), tax_config))

    advisories = tuple(
        add_on.match.advisory for add_on in breakdown.add_ons if add_on.match.advisory is not None
    )

    return Quote(
        base_price=base_price,
        discounts=discounts,
        surcharges=surcharges,
        add_ons=add_ons,
        discount_total=discount_total,
        surcharge_total=surcharge_total,
        add_on_total=add_on_total,
        subtotal=subtotal,
        vat_rate=tax_config.vat_rate,
        tax_amount=tax,
        total_including_tax=total_including_tax,
        customer_type=tax_config.customer_type,
        display_total=display_total,
        monthly_installment=installment,
        currency_code=tax_config.currency.code,
        term_months=terms.term_months,
        advisories=advisories,
    )
