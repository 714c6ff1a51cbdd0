# =============================================================================
# app/routers/tesoreria.py - Treasury Endpoints
# =============================================================================
# Bank accounts and treasury movements of one company (?empresa_id=).
# Requires finanzas:read and access to the company.
# =============================================================================

from typing import Annotated

from fastapi import APIRouter, Depends, Query

from app.auth import AuthUser, require_permission, scoped_company
from core.permissions import Permission
from core.services.tesoreria_service import TesoreriaService

router = APIRouter()

CanRead = Annotated[AuthUser, Depends(require_permission(Permission.FINANZAS_READ))]
EmpresaId = Annotated[str | None, Query(description="Company id")]


@router.get("/cuentas")
async def list_cuentas_bancarias(user: CanRead, empresa_id: EmpresaId = None):
    """Active bank accounts."""
    cuentas = TesoreriaService.list_cuentas_bancarias(scoped_company(empresa_id, user))
    return {"data": cuentas, "total": len(cuentas)}


@router.get("/movimientos")
async def list_movimientos(user: CanRead, empresa_id: EmpresaId = None):
    """Treasury movements, newest first."""
    movimientos = TesoreriaService.list_movimientos(scoped_company(empresa_id, user))
    return {"data": movimientos, "total": len(movimientos)}
