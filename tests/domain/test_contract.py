import pytest

from service_quote.domain.contract import AddOnSelection, ContractTerms, ContractType
from service_quote.domain.errors import ValidationError
from service_quote.domain.rules import RuleCategory


def test_selected_add_ons_in_display_order():
    warranty = AddOnSelection("fragus-basic", 50)
    tires = AddOnSelection()
    terms = ContractTerms(term_months=36, annual_mileage_km=20000, warranty=warranty, tires=tires)

    assert terms.selected_add_ons() == [
        (RuleCategory.TIRES, tires),
        (RuleCategory.WARRANTY, warranty),
    ]


def test_no_add_ons_selected():
    assert ContractTerms(term_months=12, annual_mileage_km=15000).selected_add_ons() == []


@pytest.mark.parametrize("term", [12, 24, 36, 48, 60])
def test_accepts_offered_terms(term):
    ContractTerms(term_months=term, annual_mileage_km=15000).validate()


@pytest.mark.parametrize("term", [0, 18, 72, -12])
def test_rejects_other_terms(term):
    with pytest.raises(ValidationError) as exc_info:
        ContractTerms(term_months=term, annual_mileage_km=15000).validate()

    assert exc_info.value.errors[0]["field"] == "term_months"


@pytest.mark.parametrize("mileage", [10000, 17500, 65000])
def test_rejects_mileage_off_the_grid(mileage):
    with pytest.raises(ValidationError) as exc_info:
        ContractTerms(term_months=12, annual_mileage_km=mileage).validate()

    assert exc_info.value.errors[0]["field"] == "annual_mileage_km"


def test_rejects_unsupported_dealer_subsidy():
    terms = ContractTerms(
        term_months=12, annual_mileage_km=15000, roadside=AddOnSelection(dealer_subsidy_percent=25)
    )

    with pytest.raises(ValidationError) as exc_info:
        terms.validate()

    assert exc_info.value.errors[0]["field"] == "roadside.dealer_subsidy_percent"


def test_warranty_requires_service_only_contract():
    terms = ContractTerms(
        term_months=12,
        annual_mileage_km=15000,
        contract_type=ContractType.SERVICE_AND_REPAIR,
        warranty=AddOnSelection(),
    )

    with pytest.raises(ValidationError) as exc_info:
        terms.validate()

    assert exc_info.value.errors == [
        {
            "field": "warranty",
            "message": "Warranty insurance requires a service-only contract",
            "code": "NOT_ALLOWED",
        }
    ]
