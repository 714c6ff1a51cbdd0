# =============================================================================
# app/routers/contabilidad.py - Ledger Endpoints
# =============================================================================
# Chart of accounts and journal entries of one company (?empresa_id=).
# Requires contabilidad:read and access to the company.
# =============================================================================

from typing import Annotated

from fastapi import APIRouter, Depends, Query

from app.auth import AuthUser, require_permission, scoped_company
from core.permissions import Permission
from core.services.contabilidad_service import ContabilidadService

router = APIRouter()

CanRead = Annotated[AuthUser, Depends(require_permission(Permission.CONTABILIDAD_READ))]
EmpresaId = Annotated[str | None, Query(description="Company id")]


@router.get("/cuentas")
async def list_cuentas(user: CanRead, empresa_id: EmpresaId = None):
    """Chart of accounts, ordered by code."""
    return ContabilidadService.list_cuentas(scoped_company(empresa_id, user))


@router.get("/asientos")
async def list_asientos(
    user: CanRead,
    empresa_id: EmpresaId = None,
    fecha_desde: Annotated[str | None, Query(description="From date (YYYY-MM-DD)")] = None,
    fecha_hasta: Annotated[str | None, Query(description="To date (YYYY-MM-DD)")] = None,
    page: Annotated[int, Query(ge=1, description="Page number")] = 1,
    limit: Annotated[int, Query(ge=1, le=500, description="Items per page")] = 50,
):
    """
    Journal entries, newest first.

    Each entry includes total_debito, total_credito and cuadrado
    (debits equal credits).
    """
    return ContabilidadService.list_asientos(
        scoped_company(empresa_id, user),
        fecha_desde=fecha_desde,
        fecha_hasta=fecha_hasta,
        page=page,
        limit=limit,
    )
