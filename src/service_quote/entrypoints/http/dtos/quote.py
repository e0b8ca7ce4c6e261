from datetime import date

from pydantic import BaseModel, ConfigDict, Field


class VehicleDTO(BaseModel):
    """Vehicle attributes. Age is given directly or derived from the registration date."""

    horsepower: int = Field(description="Engine power in HK", examples=[150], ge=1)
    first_registration_date: date | None = Field(
        default=None,
        description="First registration date; used when age_months is omitted",
        examples=["2023-02-15"],
    )
    age_months: int | None = Field(default=None, description="Vehicle age in months", ge=0)
    odometer_km: int = Field(description="Current odometer reading", examples=[30000], ge=0)
    category: str = Field(
        description="Vehicle category",
        examples=["personal"],
        pattern=r"^(personal|van|suv|other)$",
    )
    fuel_type: str = Field(
        description="Fuel type",
        examples=["petrol"],
        pattern=r"^(petrol|diesel|electric|hybrid|plugin_hybrid)$",
    )
    factory_warranty_years: int = Field(
        default=0, description="Whole years of factory warranty remaining", ge=0
    )
    engine_ccm: int | None = Field(default=None, description="Engine displacement (ccm)", ge=1)
    motor_power_hp: int | None = Field(
        default=None, description="Motor power for electrified vehicles (hp)", ge=1
    )
    curb_weight_kg: int | None = Field(default=None, description="Curb weight (kg)", ge=1)


class AddOnDTO(BaseModel):
    package_id: str | None = Field(
        default=None, description="Package to price; all packages when omitted", examples=["fragus-basic"]
    )
    dealer_subsidy_percent: int = Field(
        default=0, description="Share of the add-on paid by the dealer: 0, 50 or 100", examples=[50]
    )


class ContractTermsDTO(BaseModel):
    term_months: int = Field(description="One of: 12, 24, 36, 48, 60", examples=[36])
    annual_mileage_km: int = Field(description="15000 to 60000 in steps of 5000", examples=[20000])
    contract_type: str = Field(
        default="service",
        description="Contract type",
        pattern=r"^(service|service_and_repair)$",
    )
    tires: AddOnDTO | None = None
    roadside: AddOnDTO | None = None
    warranty: AddOnDTO | None = None


class QuoteRequestDTO(BaseModel):
    """Request payload for computing a quote."""

    vehicle: VehicleDTO
    terms: ContractTermsDTO
    country_code: str | None = Field(
        default=None, description="ISO country code; server default when omitted", examples=["dk"]
    )
    customer_type: str = Field(
        default="private",
        description="Private customers see prices incl. VAT, business customers excl. VAT",
        pattern=r"^(private|business)$",
    )

    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "vehicle": {
                    "horsepower": 150,
                    "age_months": 20,
                    "odometer_km": 30000,
                    "category": "personal",
                    "fuel_type": "petrol",
                    "engine_ccm": 1598,
                    "factory_warranty_years": 2,
                },
                "terms": {
                    "term_months": 36,
                    "annual_mileage_km": 20000,
                    "contract_type": "service",
                    "warranty": {"package_id": "fragus-basic", "dealer_subsidy_percent": 50},
                },
                "country_code": "dk",
                "customer_type": "private",
            }
        }
    )


class QuoteLineDTO(BaseModel):
    code: str
    label: str
    kind: str
    amount: str = Field(description="Annual amount as decimal string", examples=["1494.00"])
    package_id: str | None = None
    original_amount: str | None = None
    dealer_subsidy_percent: int = 0


class AdvisoryDTO(BaseModel):
    component: str
    reason: str


class QuoteResponseDTO(BaseModel):
    """Complete quote. Money values are decimal strings; annual unless named monthly."""

    base_price: str
    discounts: list[QuoteLineDTO]
    surcharges: list[QuoteLineDTO]
    add_ons: list[QuoteLineDTO]
    discount_total: str
    surcharge_total: str
    add_on_total: str
    subtotal: str = Field(description="Pre-tax annual subtotal", examples=["3891.60"])
    vat_rate: str = Field(examples=["25"])
    tax_amount: str
    total_including_tax: str
    display_total: str = Field(description="Annual total as shown to this customer type")
    display_total_formatted: str = Field(examples=["4,864.50 kr."])
    monthly_installment: str = Field(examples=["405.38"])
    monthly_installment_formatted: str = Field(examples=["405.38 kr."])
    price_label: str = Field(examples=["incl. VAT"])
    currency_code: str = Field(examples=["DKK"])
    term_months: int
    is_estimate: bool
    advisories: list[AdvisoryDTO]
