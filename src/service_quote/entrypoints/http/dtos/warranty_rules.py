from pydantic import BaseModel, ConfigDict, Field


class WarrantyRuleCsvImportDTO(BaseModel):
    """CSV file content to validate before import."""

    content: str = Field(description="CSV text in the warranty rule layout")

    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "content": "package_id,description,price,car_age_months_from,car_age_months_to,"
                "mileage_km_from,mileage_km_to,engine_size_ccm_from,engine_size_ccm_to,"
                "vehicle_category,fuel_type\n"
                "fragus-basic,Standard,4500,0,60,0,100000,,,personbil,"
            }
        }
    )


class WarrantyRuleDTO(BaseModel):
    package_id: str
    description: str | None = None
    price: str = Field(description="Annual price as decimal string", examples=["4500"])
    car_age_months_from: int | None = None
    car_age_months_to: int | None = None
    mileage_km_from: int | None = None
    mileage_km_to: int | None = None
    engine_size_ccm_from: int | None = None
    engine_size_ccm_to: int | None = None
    motor_power_hp_from: int | None = None
    motor_power_hp_to: int | None = None
    vehicle_category: str | None = None
    fuel_type: str | None = None


class CsvRowErrorDTO(BaseModel):
    row: int = Field(description="1-based file row; data starts at row 2")
    column: str
    message: str
    value: str


class WarrantyRuleImportResponseDTO(BaseModel):
    valid: bool
    rules: list[WarrantyRuleDTO]
    errors: list[CsvRowErrorDTO]
