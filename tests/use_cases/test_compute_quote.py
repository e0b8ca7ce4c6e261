"""
Test suite for ComputeQuote / compute_quote.

Reference vehicle: 150 hp electric (Medium band, 2988/year), 2 years of
factory warranty left, on a 36 month / 20,000 km contract:

    base                      2988.00
    factory warranty -10%     -298.80
    term (36 months) -10%     -298.80
    mileage (20,000) +15%     +448.20
    tires                    +1800.00
    warranty 7500 at 50%     +3750.00
    subtotal                  8388.60
    VAT 25%                   2097.15
"""

import logging
from dataclasses import replace
from decimal import Decimal

import pytest

from service_quote.domain.contract import AddOnSelection, ContractTerms, CustomerType
from service_quote.domain.errors import (
    InternalError,
    NoPricingDataError,
    ValidationError,
)
from service_quote.domain.pricing_policy import DEFAULT_HORSEPOWER_BANDS, PricingPolicy
from service_quote.domain.quote import LineKind
from service_quote.domain.rules import Range, RangeRule, RuleCategory, RuleTables
from service_quote.domain.tax import Currency, TaxConfig
from service_quote.domain.vehicle import FuelType, VehicleCategory, VehicleSnapshot
from service_quote.use_cases.compute_quote import ComputeQuote, QuoteRequest, compute_quote


DKK = Currency("DKK", "kr.")


@pytest.fixture
def vehicle() -> VehicleSnapshot:
    return VehicleSnapshot(
        horsepower=150,
        age_months=20,
        odometer_km=30000,
        category=VehicleCategory.PERSONAL,
        fuel_type=FuelType.ELECTRIC,
        factory_warranty_years=2,
        motor_power_hp=150,
    )


@pytest.fixture
def terms() -> ContractTerms:
    return ContractTerms(
        term_months=36,
        annual_mileage_km=20000,
        tires=AddOnSelection(),
        warranty=AddOnSelection(package_id="fragus-basic", dealer_subsidy_percent=50),
    )


@pytest.fixture
def tables() -> RuleTables:
    return RuleTables(
        warranty=(
            RangeRule(
                category=RuleCategory.WARRANTY,
                package_id="fragus-basic",
                price=Decimal("4500"),
                car_age_months=Range(0, 96),
                engine_ccm=Range(0, 2000),
                fuel_type=FuelType.PETROL,
            ),
            RangeRule(
                category=RuleCategory.WARRANTY,
                package_id="fragus-basic",
                price=Decimal("7500"),
                car_age_months=Range(0, 96),
                motor_power_hp=Range(100, 300),
                fuel_type=FuelType.ELECTRIC,
            ),
        ),
        tires=(RangeRule(category=RuleCategory.TIRES, package_id="tires", price=Decimal("1800")),),
        roadside=(
            RangeRule(category=RuleCategory.ROADSIDE, package_id="roadside", price=Decimal("540")),
        ),
        horsepower_bands=DEFAULT_HORSEPOWER_BANDS,
    )


@pytest.fixture
def tax_config() -> TaxConfig:
    return TaxConfig(vat_rate=Decimal("25"), currency=DKK, customer_type=CustomerType.PRIVATE)


# ============================================================================
# CALCULATION
# ============================================================================


def test_reference_quote(vehicle, terms, tables, tax_config):
    quote = compute_quote(vehicle, terms, tables, tax_config)

    assert quote.base_price == Decimal("2988.00")
    assert [(line.code, line.amount) for line in quote.discounts] == [
        ("factory_warranty", Decimal("298.80")),
        ("term", Decimal("298.80")),
    ]
    assert [(line.code, line.amount) for line in quote.surcharges] == [
        ("mileage", Decimal("448.20")),
    ]
    assert [(line.code, line.amount) for line in quote.add_ons] == [
        ("tires", Decimal("1800.00")),
        ("warranty", Decimal("3750.00")),
    ]
    assert quote.subtotal == Decimal("8388.60")
    assert quote.tax_amount == Decimal("2097.15")
    assert quote.total_including_tax == Decimal("10485.75")
    assert quote.display_total == Decimal("10485.75")
    assert quote.monthly_installment == Decimal("873.81")
    assert quote.currency_code == "DKK"
    assert quote.term_months == 36
    assert not quote.is_estimate


def test_business_customer_sees_pre_tax_amounts(vehicle, terms, tables, tax_config):
    business = replace(tax_config, customer_type=CustomerType.BUSINESS)

    quote = compute_quote(vehicle, terms, tables, business)

    assert quote.display_total == Decimal("8388.60")
    assert quote.monthly_installment == Decimal("699.05")
    # Tax is still computed, only the display changes
    assert quote.tax_amount == Decimal("2097.15")
    assert not quote.prices_include_tax


def test_add_on_lines_carry_package_and_subsidy(vehicle, terms, tables, tax_config):
    quote = compute_quote(vehicle, terms, tables, tax_config)

    warranty = quote.add_on("warranty")
    assert warranty is not None
    assert warranty.kind is LineKind.ADD_ON
    assert warranty.package_id == "fragus-basic"
    assert warranty.original_amount == Decimal("7500.00")
    assert warranty.dealer_subsidy_percent == 50
    assert quote.add_on("roadside") is None


# ============================================================================
# PROPERTIES
# ============================================================================


def test_identical_inputs_give_identical_quotes(vehicle, terms, tables, tax_config):
    assert compute_quote(vehicle, terms, tables, tax_config) == compute_quote(
        vehicle, terms, tables, tax_config
    )


@pytest.mark.parametrize("horsepower", [60, 99, 133, 187, 251, 499])
@pytest.mark.parametrize("mileage", [15000, 35000, 55000])
def test_subtotal_is_additive_to_the_cent(vehicle, terms, tables, tax_config, horsepower, mileage):
    quote = compute_quote(
        replace(vehicle, horsepower=horsepower),
        replace(terms, annual_mileage_km=mileage, roadside=AddOnSelection(dealer_subsidy_percent=50)),
        tables,
        tax_config,
    )

    assert quote.subtotal == (
        quote.base_price - quote.discount_total + quote.surcharge_total + quote.add_on_total
    )
    assert quote.discount_total == sum(line.amount for line in quote.discounts)
    assert quote.add_on_total == sum(line.amount for line in quote.add_ons)
    assert quote.total_including_tax == quote.subtotal + quote.tax_amount


@pytest.mark.parametrize("customer_type", [CustomerType.PRIVATE, CustomerType.BUSINESS])
@pytest.mark.parametrize("horsepower", [77, 123, 199, 287, 411])
def test_installment_reproduces_annual_total(
    vehicle, terms, tables, tax_config, customer_type, horsepower
):
    """
    The installment is the subtotal over twelve months, normalized and rounded once.

    Twelve installments may miss the displayed total by the rounding of each
    month: at most 12 × half a cent, and both sides are whole cents, so 0.06.
    """
    quote = compute_quote(
        replace(vehicle, horsepower=horsepower),
        terms,
        tables,
        replace(tax_config, customer_type=customer_type),
    )

    assert abs(quote.monthly_installment - quote.display_total / 12) <= Decimal("0.01")
    assert abs(quote.monthly_installment * 12 - quote.display_total) <= Decimal("0.06")


def test_more_warranty_years_never_decrease_discount(vehicle, terms, tables, tax_config):
    totals = [
        compute_quote(replace(vehicle, factory_warranty_years=y), terms, tables, tax_config).discount_total
        for y in range(0, 8)
    ]

    assert totals == sorted(totals)


def test_van_surcharge_never_decreases_price(vehicle, terms, tables, tax_config):
    personal = compute_quote(vehicle, terms, tables, tax_config)
    van = compute_quote(replace(vehicle, category=VehicleCategory.VAN), terms, tables, tax_config)

    assert van.surcharge_total > personal.surcharge_total
    assert van.base_price == personal.base_price


def test_subsidy_halves_only_the_warranty(vehicle, terms, tables, tax_config):
    full = compute_quote(
        vehicle, replace(terms, warranty=AddOnSelection("fragus-basic", 0)), tables, tax_config
    )
    half = compute_quote(
        vehicle, replace(terms, warranty=AddOnSelection("fragus-basic", 50)), tables, tax_config
    )

    assert half.add_on("warranty").amount == full.add_on("warranty").amount / 2
    assert half.add_on("tires").amount == full.add_on("tires").amount
    assert half.base_price == full.base_price
    assert half.discounts == full.discounts
    assert half.surcharges == full.surcharges


def test_untoggled_add_on_has_no_line(vehicle, terms, tables, tax_config):
    quote = compute_quote(vehicle, replace(terms, tires=None, warranty=None), tables, tax_config)

    assert quote.add_ons == ()
    assert quote.add_on_total == Decimal("0.00")


# ============================================================================
# ESTIMATES
# ============================================================================


def test_unmatched_warranty_is_estimated_from_first_rule(vehicle, terms, tables, tax_config, caplog):
    old_vehicle = replace(vehicle, age_months=120)

    with caplog.at_level(logging.INFO, logger="service_quote.use_cases.compute_quote"):
        quote = compute_quote(old_vehicle, terms, tables, tax_config)

    assert quote.is_estimate
    assert [advisory.component for advisory in quote.advisories] == ["warranty"]
    # First warranty rule (4500) at 50% subsidy
    assert quote.add_on("warranty").amount == Decimal("2250.00")
    assert "Quote contains estimated prices" in caplog.text


# ============================================================================
# ERRORS
# ============================================================================


def test_empty_rule_set_is_no_data_error(vehicle, terms, tables, tax_config):
    """A toggled add-on without rules is never priced at zero."""
    with pytest.raises(NoPricingDataError) as exc_info:
        compute_quote(vehicle, terms, replace(tables, tires=()), tax_config)

    assert exc_info.value.context["component"] == "tires"


def test_unknown_package_is_no_data_error(vehicle, terms, tables, tax_config):
    with pytest.raises(NoPricingDataError, match="warranty package 'fragus-plus'"):
        compute_quote(
            vehicle, replace(terms, warranty=AddOnSelection("fragus-plus")), tables, tax_config
        )


def test_missing_bands_is_no_data_error(vehicle, terms, tables, tax_config):
    with pytest.raises(NoPricingDataError, match="base_service"):
        compute_quote(vehicle, terms, replace(tables, horsepower_bands=()), tax_config)


def test_validation_runs_before_rule_matching(vehicle, terms, tables, tax_config):
    """Horsepower outside all bands is reported even though tires have no rules."""
    with pytest.raises(ValidationError) as exc_info:
        compute_quote(
            replace(vehicle, horsepower=650), terms, replace(tables, tires=()), tax_config
        )

    assert exc_info.value.errors[0]["field"] == "horsepower"


def test_invalid_terms_are_rejected(vehicle, terms, tables, tax_config):
    with pytest.raises(ValidationError):
        compute_quote(vehicle, replace(terms, term_months=18), tables, tax_config)


def test_negative_subtotal_is_internal_error(vehicle, tables, tax_config):
    policy = PricingPolicy(factory_warranty_discounts=((2, Decimal("100")),))
    terms = ContractTerms(term_months=60, annual_mileage_km=15000)

    with pytest.raises(InternalError):
        compute_quote(vehicle, terms, tables, tax_config, policy=policy)


def test_invalid_policy_is_rejected_on_construction():
    with pytest.raises(ValidationError):
        ComputeQuote(policy=PricingPolicy(term_factors=()))


def test_execute_accepts_request(vehicle, terms, tables, tax_config):
    request = QuoteRequest(vehicle=vehicle, terms=terms, rule_tables=tables, tax_config=tax_config)

    assert ComputeQuote().execute(request) == compute_quote(vehicle, terms, tables, tax_config)
