# =============================================================================
# tests/conftest.py - Pytest Configuration
# =============================================================================
# This module provides pytest fixtures and configuration for all tests.
#
# Key features:
# - Sets up mock environment variables before any imports
# - Provides an HTTP test client and caller tokens
# =============================================================================

import os

# =============================================================================
# Set up test environment BEFORE any imports
# =============================================================================
# This must happen before importing app.config which loads settings immediately

os.environ.setdefault("SUPABASE_URL", "https://test-project.supabase.co")
os.environ.setdefault("SUPABASE_ANON_KEY", "test-anon-key")
os.environ.setdefault("SUPABASE_SERVICE_KEY", "test-service-key")
os.environ.setdefault("ENVIRONMENT", "development")
os.environ.setdefault("DEBUG", "true")

# Auth0 stays unconfigured: user endpoints serve mock data and caller
# tokens are read without verification
for name in ("AUTH0_DOMAIN", "AUTH0_MGMT_CLIENT_ID", "AUTH0_MGMT_CLIENT_SECRET", "AUTH0_AUDIENCE"):
    os.environ.pop(name, None)

import pytest
from fastapi.testclient import TestClient
from jose import jwt


# =============================================================================
# Fixtures
# =============================================================================

@pytest.fixture
def client():
    """HTTP client for the app. Unhandled errors become 500 responses."""
    from app.main import app

    with TestClient(app, raise_server_exceptions=False) as test_client:
        yield test_client


@pytest.fixture
def make_token():
    """
    Build an unsigned-looking caller token carrying app_metadata.

    In development the API reads claims without verifying the signature,
    so any HS256 secret works.
    """
    def _make(rol="usuario", permisos=None, empresas=None, sub="auth0|test-user", **claims):
        app_metadata = {"rol": rol, "empresas": empresas or []}
        if permisos is not None:
            app_metadata["permisos"] = permisos
        payload = {
            "sub": sub,
            "email": "test@contaempresa.com",
            "https://contaempresa.app/app_metadata": app_metadata,
            **claims,
        }
        return jwt.encode(payload, "test-secret", algorithm="HS256")

    return _make


@pytest.fixture
def auth_headers(make_token):
    """Headers factory: auth_headers(rol=..., empresas=[...])."""
    def _headers(**kwargs):
        return {"Authorization": f"Bearer {make_token(**kwargs)}"}

    return _headers


@pytest.fixture
def admin_headers():
    """Opaque bearer token: the local development super_admin."""
    return {"Authorization": "Bearer dev-token"}


@pytest.fixture
def sample_pais():
    """A stored country row."""
    return {
        "id": "PE",
        "nombre": "Perú",
        "codigo": "PE",
        "codigo_iso": "PER",
        "moneda_principal": "PEN",
        "simbolo_moneda": "S/",
        "activo": True,
        "created_at": "2024-01-15T10:00:00+00:00",
        "updated_at": "2024-01-15T10:00:00+00:00",
    }


@pytest.fixture
def sample_auth0_user():
    """A user record as returned by the Auth0 Management API."""
    return {
        "user_id": "auth0|abc123",
        "email": "ana.torres@empresa.pe",
        "name": None,
        "nickname": "ana",
        "picture": "https://cdn.example.com/ana.png",
        "app_metadata": {
            "rol": "contador",
            "empresas": ["emp-pe-1"],
            "permisos": ["contabilidad:read", "contabilidad:write"],
        },
        "created_at": "2024-02-01T09:00:00.000Z",
        "last_login": "2024-03-01T12:00:00.000Z",
        "blocked": False,
    }
