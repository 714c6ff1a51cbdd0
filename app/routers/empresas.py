# =============================================================================
# app/routers/empresas.py - Company Endpoints
# =============================================================================
# Read-only. Callers without admin:all only see their assigned companies.
# =============================================================================

from typing import Annotated

from fastapi import APIRouter, Depends

from app.auth import AuthUser, require_permission
from core.permissions import Permission
from core.services.empresa_service import EmpresaService

router = APIRouter()

CanRead = Annotated[AuthUser, Depends(require_permission(Permission.EMPRESAS_READ))]


@router.get("")
async def list_empresas(user: CanRead):
    """Companies visible to the caller."""
    return EmpresaService.list_empresas(allowed=user.allowed_companies)


@router.get("/pais/{pais_id}")
async def list_empresas_by_pais(pais_id: str, user: CanRead):
    return EmpresaService.list_by_pais(pais_id, allowed=user.allowed_companies)


@router.get("/{empresa_id}")
async def get_empresa(empresa_id: str, user: CanRead):
    """Get one company. 403 if it isn't assigned to the caller."""
    return EmpresaService.get_empresa(empresa_id, allowed=user.allowed_companies)
