# =============================================================================
# app/main.py - FastAPI Application Entry Point
# =============================================================================
# This is the main entry point for the ContaEmpresa API.
# It configures the FastAPI application with middleware, routers, and handlers.
#
# Usage:
#   poetry run uvicorn app.main:app --reload
# =============================================================================

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from app.config import settings
from app.exceptions import (
    ContaEmpresaException,
    application_error_handler,
    contaempresa_exception_handler,
    http_exception_handler,
    validation_exception_handler,
)
from app.routers import health, paises, nomencladores, usuarios, roles, empresas, contabilidad, tesoreria
from app.auth import routes as auth_routes
from lib.utils import ApplicationError

# Configure logging
logging.basicConfig(
    level=logging.DEBUG if settings.DEBUG else logging.INFO,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s"
)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Application lifespan handler.

    Runs on startup and shutdown:
    - Startup: Log the effective configuration
    - Shutdown: Log
    """
    # Startup
    logger.info(f"Starting ContaEmpresa API in {settings.ENVIRONMENT} mode")
    logger.info(f"CORS origins: {settings.cors_origins_list}")
    if not settings.auth0_management_configured:
        logger.warning(
            f"Auth0 Management API not configured (missing "
            f"{', '.join(settings.missing_auth0_management_vars)}); /auth0-users serves mock data"
        )
    if not settings.token_verification_configured:
        logger.warning("AUTH0_DOMAIN/AUTH0_AUDIENCE not set; caller tokens are not verified")

    yield

    # Shutdown
    logger.info("Shutting down ContaEmpresa API")


# Create FastAPI application
app = FastAPI(
    title="ContaEmpresa API",
    description="""
## Multi-tenant Accounting Backend

REST API behind the ContaEmpresa frontend.

### Resources

| Resource | Description |
|----------|-------------|
| **Paises** | Country registry (soft delete) |
| **Nomencladores** | Per-country catalogs: document types, taxes, banks... |
| **Usuarios** | Auth0 user management proxy |
| **Roles** | Role and permission catalog |
| **Empresas / Contabilidad / Tesorería** | Company-scoped reads |

### Quick Start

```bash
# List active countries
curl http://localhost:8000/api/v1/paises

# List users (mock data until Auth0 is configured)
curl http://localhost:8000/api/v1/auth0-users \\
  -H "Authorization: Bearer <token>"
```
""",
    version="1.0.0",
    docs_url="/docs",
    redoc_url="/redoc",
    lifespan=lifespan,
    openapi_tags=[
        {
            "name": "Auth",
            "description": "Caller identity and capabilities",
        },
        {
            "name": "Paises",
            "description": "Country registry",
        },
        {
            "name": "Nomencladores",
            "description": "Per-country reference catalogs",
        },
        {
            "name": "Usuarios",
            "description": "Auth0 user management",
        },
        {
            "name": "Roles",
            "description": "Roles and permissions",
        },
        {
            "name": "Empresas",
            "description": "Companies visible to the caller",
        },
        {
            "name": "Contabilidad",
            "description": "Chart of accounts and journal entries",
        },
        {
            "name": "Tesoreria",
            "description": "Bank accounts and treasury movements",
        },
        {
            "name": "Health",
            "description": "API health and readiness checks",
        },
    ],
)


# =============================================================================
# Middleware
# =============================================================================

# CORS middleware - allows cross-origin requests
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins_list if settings.is_production else ["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
    expose_headers=["X-Mock-Data"],
)


# =============================================================================
# Exception Handlers
# =============================================================================

app.add_exception_handler(ContaEmpresaException, contaempresa_exception_handler)
app.add_exception_handler(ApplicationError, application_error_handler)
app.add_exception_handler(StarletteHTTPException, http_exception_handler)
app.add_exception_handler(RequestValidationError, validation_exception_handler)


@app.exception_handler(Exception)
async def handle_general_exception(request: Request, exc: Exception):
    """Handle unexpected exceptions."""
    logger.exception(f"Unexpected error: {exc}")
    return JSONResponse(
        status_code=500,
        content={
            "error": "An unexpected error occurred",
            "code": "INTERNAL_ERROR",
        }
    )


# =============================================================================
# Routers
# =============================================================================

API_PREFIX = "/api/v1"

# Caller identity
app.include_router(
    auth_routes.router,
    prefix=API_PREFIX,
    tags=["Auth"]
)

# Health check endpoints
app.include_router(
    health.router,
    prefix=API_PREFIX,
    tags=["Health"]
)

# Country registry
app.include_router(
    paises.router,
    prefix=f"{API_PREFIX}/paises",
    tags=["Paises"]
)

# Per-country catalogs
app.include_router(
    nomencladores.router,
    prefix=f"{API_PREFIX}/nomencladores",
    tags=["Nomencladores"]
)

# Auth0 user management
app.include_router(
    usuarios.router,
    prefix=f"{API_PREFIX}/auth0-users",
    tags=["Usuarios"]
)

# Role catalog
app.include_router(
    roles.router,
    prefix=f"{API_PREFIX}/roles",
    tags=["Roles"]
)

# Company-scoped reads
app.include_router(
    empresas.router,
    prefix=f"{API_PREFIX}/empresas",
    tags=["Empresas"]
)

app.include_router(
    contabilidad.router,
    prefix=f"{API_PREFIX}/contabilidad",
    tags=["Contabilidad"]
)

app.include_router(
    tesoreria.router,
    prefix=f"{API_PREFIX}/tesoreria",
    tags=["Tesoreria"]
)


# =============================================================================
# Root Endpoint
# =============================================================================

@app.get("/", tags=["Root"])
async def root():
    """
    Root endpoint - returns API info.
    """
    return {
        "name": "ContaEmpresa API",
        "version": "1.0.0",
        "docs": "/docs",
        "health": "/api/v1/health",
    }
