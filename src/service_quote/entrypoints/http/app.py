from fastapi import FastAPI

from service_quote.entrypoints.http.exception_handlers import register_exception_handlers
from service_quote.entrypoints.http.routes.health import router as health_router
from service_quote.entrypoints.http.routes.quotes import router as quotes_router
from service_quote.entrypoints.http.routes.warranty_rules import router as warranty_rules_router


def build_app() -> FastAPI:
    app = FastAPI(
        title="Service Quote API",
        description="""
        Quote engine for vehicle service contracts.

        ## Features
        - Compute service contract quotes with add-ons
        - Export warranty pricing rules as CSV
        - Validate warranty rule CSV files before import

        ## Error Handling
        All errors return structured JSON responses with error codes.
        See the error response schemas in the API documentation.
        """,
        version="0.1.0",
        docs_url="/docs",
        redoc_url="/redoc",
        openapi_url="/openapi.json",
        license_info={
            "name": "Proprietary",
        },
    )

    register_exception_handlers(app)

    app.include_router(health_router)
    app.include_router(quotes_router, prefix="/v1")
    app.include_router(warranty_rules_router, prefix="/v1")

    return app


app = build_app()
