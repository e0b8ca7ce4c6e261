"""Route tests for the warranty rule CSV endpoints."""

from __future__ import annotations

from decimal import Decimal

import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient

from service_quote.adapters.warranty_rule_csv import CSV_HEADERS
from service_quote.domain.rules import Range, RangeRule, RuleCategory, RuleTables
from service_quote.domain.vehicle import VehicleCategory
from service_quote.entrypoints.http.app import build_app
from service_quote.entrypoints.http.dependencies import get_rule_tables


HEADER = ",".join(CSV_HEADERS)


@pytest.fixture
def tables() -> RuleTables:
    return RuleTables(
        warranty=(
            RangeRule(
                category=RuleCategory.WARRANTY,
                package_id="fragus-basic",
                description="Standard",
                price=Decimal("4500.00"),
                car_age_months=Range(0, 60),
                mileage_km=Range(0, 100000),
                vehicle_category=VehicleCategory.PERSONAL,
            ),
        ),
        tires=(RangeRule(category=RuleCategory.TIRES, package_id="tires", price=Decimal("1800")),),
    )


@pytest.fixture
def app(tables: RuleTables) -> FastAPI:
    test_app = build_app()
    test_app.dependency_overrides[get_rule_tables] = lambda: tables
    return test_app


@pytest.fixture
def client(app: FastAPI) -> TestClient:
    return TestClient(app, raise_server_exceptions=False)


# ==============================================================================
# GET /v1/warranty-rules/export
# ==============================================================================


def test_export_returns_csv_attachment(client: TestClient) -> None:
    response = client.get("/v1/warranty-rules/export")

    assert response.status_code == 200
    assert response.headers["content-type"].startswith("text/csv")
    assert response.headers["content-disposition"] == 'attachment; filename="warranty_rules.csv"'


def test_export_contains_only_warranty_rules(client: TestClient) -> None:
    response = client.get("/v1/warranty-rules/export")

    assert response.text == HEADER + "\nfragus-basic,Standard,4500,0,60,0,100000,,,personbil,"


def test_export_with_no_rules_is_header_only(app: FastAPI, client: TestClient) -> None:
    app.dependency_overrides[get_rule_tables] = lambda: RuleTables()

    assert client.get("/v1/warranty-rules/export").text == HEADER


# ==============================================================================
# POST /v1/warranty-rules/import/validate
# ==============================================================================


def test_validate_accepts_exported_file(client: TestClient) -> None:
    exported = client.get("/v1/warranty-rules/export").text

    response = client.post("/v1/warranty-rules/import/validate", json={"content": exported})

    assert response.status_code == 200
    data = response.json()
    assert data["valid"] is True
    assert data["errors"] == []
    assert data["rules"] == [
        {
            "package_id": "fragus-basic",
            "description": "Standard",
            "price": "4500",
            "car_age_months_from": 0,
            "car_age_months_to": 60,
            "mileage_km_from": 0,
            "mileage_km_to": 100000,
            "engine_size_ccm_from": None,
            "engine_size_ccm_to": None,
            "motor_power_hp_from": None,
            "motor_power_hp_to": None,
            "vehicle_category": "personal",
            "fuel_type": None,
        }
    ]


def test_validate_reports_cell_errors(client: TestClient) -> None:
    content = "\n".join([HEADER, "ok,,100,,,,,,,,", "bad,,abc,,,,,,,,"])

    response = client.post("/v1/warranty-rules/import/validate", json={"content": content})

    assert response.status_code == 200
    data = response.json()
    assert data["valid"] is False
    assert [rule["package_id"] for rule in data["rules"]] == ["ok"]
    assert data["errors"] == [
        {"row": 3, "column": "price", "message": "Price must be a number", "value": "abc"}
    ]


def test_validate_reports_empty_file(client: TestClient) -> None:
    data = client.post("/v1/warranty-rules/import/validate", json={"content": ""}).json()

    assert data["valid"] is False
    assert data["errors"][0]["message"] == "CSV file is empty"


def test_validate_requires_content(client: TestClient) -> None:
    response = client.post("/v1/warranty-rules/import/validate", json={})

    assert response.status_code == 422
    assert response.json()["errors"][0]["field"] == "content"
