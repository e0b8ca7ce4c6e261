"""
Unit tests for FastAPI application setup and configuration.

This test suite verifies the application structure and wiring:
- build_app() creates properly configured FastAPI instance
- Application metadata (title, version, docs URLs)
- Router registration (health, quotes, warranty rules with correct prefixes)
- OpenAPI schema generation

Tests verify the app follows the structure defined in the codebase without
requiring external dependencies.
"""

from __future__ import annotations

from fastapi import FastAPI
from fastapi.testclient import TestClient

from service_quote.entrypoints.http.app import build_app


# ==============================================================================
# Application Creation
# ==============================================================================


def test_build_app_returns_fastapi_instance() -> None:
    """build_app() returns a FastAPI application instance."""
    assert isinstance(build_app(), FastAPI)


def test_build_app_creates_new_instance_each_call() -> None:
    """build_app() creates a new app instance for each call (not cached)."""
    assert build_app() is not build_app()


# ==============================================================================
# Application Metadata
# ==============================================================================


def test_app_metadata() -> None:
    app = build_app()

    assert app.title == "Service Quote API"
    assert app.version == "0.1.0"
    assert "Quote engine for vehicle service contracts" in app.description
    assert app.license_info == {"name": "Proprietary"}


def test_app_documentation_urls() -> None:
    app = build_app()

    assert app.docs_url == "/docs"
    assert app.redoc_url == "/redoc"
    assert app.openapi_url == "/openapi.json"


def test_app_documentation_endpoints_are_accessible() -> None:
    """Documentation endpoints are accessible."""
    client = TestClient(build_app())

    assert client.get("/docs").status_code == 200
    assert client.get("/redoc").status_code == 200

    response = client.get("/openapi.json")
    assert response.status_code == 200
    assert response.headers["content-type"] == "application/json"


# ==============================================================================
# Router Registration
# ==============================================================================


def test_app_registers_routes_with_v1_prefix() -> None:
    """Versioned routes live under /v1; health stays unversioned."""
    # Verify via OpenAPI schema (doesn't trigger dependencies)
    paths = build_app().openapi()["paths"]

    assert "/health" in paths
    assert "/v1/quotes" in paths
    assert "/v1/warranty-rules/export" in paths
    assert "/v1/warranty-rules/import/validate" in paths
    assert "/quotes" not in paths


def test_openapi_documents_quote_endpoint() -> None:
    schema = build_app().openapi()

    operation = schema["paths"]["/v1/quotes"]["post"]
    assert operation["tags"] == ["Quotes"]
    assert operation["summary"] == "Compute service contract quote"
    assert {"200", "404", "409", "422"} <= set(operation["responses"])


def test_openapi_documents_csv_export() -> None:
    schema = build_app().openapi()

    operation = schema["paths"]["/v1/warranty-rules/export"]["get"]
    assert "text/csv" in operation["responses"]["200"]["content"]


def test_health_endpoint_responds() -> None:
    client = TestClient(build_app())

    response = client.get("/health")

    assert response.status_code == 200
    assert response.json() == {"status": "ok"}


def test_app_returns_404_for_unknown_routes() -> None:
    client = TestClient(build_app())

    assert client.get("/unknown").status_code == 404
    assert client.get("/v1/unknown").status_code == 404


# ==============================================================================
# Application Structure
# ==============================================================================


def test_module_level_app_is_from_build_app() -> None:
    """Module-level app instance is created via build_app()."""
    from service_quote.entrypoints.http.app import app

    assert isinstance(app, FastAPI)
    assert app.title == "Service Quote API"
