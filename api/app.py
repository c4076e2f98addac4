"""
FastAPI Application

Main application setup and configuration.

Usage:
    uvicorn api.app:app --reload

    # Or run directly
    python -m api.app
"""

import logging

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from api.deps import load_runtime_config
from api.errors import (
    APIError,
    api_error_handler,
    domain_error_handler,
    generic_error_handler,
)
from api.routes import catalog, commitments, health, merkle
from core.schemas.errors import BeaconRootException


logging.basicConfig(
    level=getattr(logging, load_runtime_config().log_level.upper(), logging.INFO),
    format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
)


def create_app() -> FastAPI:
    """Create and configure the FastAPI application."""

    app = FastAPI(
        title="BeaconRoot API",
        description="""
Commit block fields to a Merkle root and verify single-field proofs.

## Endpoints

- **GET /catalog**, **GET /index/{field_name}** - Field catalog and leaf indices
- **POST /root** - Root of a record derived from raw values
- **POST /proof** - Single-field proof bundle
- **POST /verify** - Verify a proof against a given root
- **POST /commitments** - Commit a root under a strictly increasing timestamp
- **GET /commitments/{timestamp}** - Look up a committed root
- **POST /commitments/{timestamp}/verify** - Verify against a committed root
- **GET /health** - Health check

A rejected proof is a normal `ok: false` response; errors use the
`ErrorResponse` envelope.
        """,
        version="0.1.0",
        docs_url="/docs",
        redoc_url="/redoc",
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # Register exception handlers
    app.add_exception_handler(APIError, api_error_handler)
    app.add_exception_handler(BeaconRootException, domain_error_handler)
    app.add_exception_handler(Exception, generic_error_handler)

    # Include routers
    app.include_router(health.router)
    app.include_router(catalog.router)
    app.include_router(merkle.router)
    app.include_router(commitments.router)

    return app


# Create the application instance
app = create_app()


if __name__ == "__main__":
    import uvicorn
    uvicorn.run(app, host="0.0.0.0", port=8000)
