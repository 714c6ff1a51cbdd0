# =============================================================================
# app/routers/roles.py - Role Catalog Endpoints
# =============================================================================
# Static role/permission tables for the admin UI. Public.
# =============================================================================

from fastapi import APIRouter

from core.permissions import permission_catalog, role_catalog

router = APIRouter()


@router.get("")
async def list_roles():
    """Roles, highest level first, with their default permissions."""
    return role_catalog()


@router.get("/permisos")
async def list_permisos():
    """Permissions with description and category."""
    return permission_catalog()
