# =============================================================================
# app/routers/paises.py - Country Registry Endpoints
# =============================================================================
# CRUD over the country registry. DELETE is a soft delete.
# These endpoints are public: the registry is reference data.
# =============================================================================

from typing import Annotated

from fastapi import APIRouter, Path, Query

from app.exceptions import MissingIdError
from core.models.pais import PaisCreate, PaisUpdate
from core.services.pais_service import PaisService

router = APIRouter()

PaisId = Annotated[str, Path(min_length=1, description="Country id, e.g. PE")]


@router.get("")
async def list_paises(
    incluir_inactivos: Annotated[bool, Query(description="Include deactivated countries")] = False,
):
    """List active countries (all countries with incluir_inactivos=true)."""
    return PaisService.list_paises(include_inactive=incluir_inactivos)


@router.get("/{pais_id}")
async def get_pais(pais_id: PaisId):
    """Get one country, active or not."""
    return PaisService.get_pais(pais_id)


@router.post("", status_code=201)
async def create_pais(payload: PaisCreate):
    """
    Create a country.

    Requires id, nombre, codigo, codigo_iso, moneda_principal and
    simbolo_moneda. Returns 409 if the id is taken.
    """
    return PaisService.create_pais(payload)


@router.put("/{pais_id}")
async def update_pais(pais_id: PaisId, payload: PaisUpdate):
    """Update the given fields of a country."""
    return PaisService.update_pais(pais_id, payload)


@router.delete("/{pais_id}")
async def delete_pais(pais_id: PaisId):
    """Deactivate a country. The row is kept with activo=false."""
    PaisService.deactivate_pais(pais_id)
    return {"success": True}


# PUT/DELETE on the collection are client mistakes, not unsupported methods
@router.put("", include_in_schema=False)
async def update_without_id():
    raise MissingIdError("PUT")


@router.delete("", include_in_schema=False)
async def delete_without_id():
    raise MissingIdError("DELETE")
