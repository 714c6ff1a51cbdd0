# =============================================================================
# app/routers/nomencladores.py - Per-Country Catalog Endpoints
# =============================================================================
# /nomencladores/{tipo}/{pais_id}[/{id}]
#
# tipo selects the catalog table (bancos, formas_pago, ...). Bodies are
# validated against the tipo's schema in the service, so they are taken
# here as plain JSON objects.
# =============================================================================

from typing import Annotated, Any

from fastapi import APIRouter, Body

from app.exceptions import MissingIdError
from core.services.nomenclador_service import NomencladorService

router = APIRouter()

JsonObject = Annotated[dict[str, Any], Body()]


@router.get("/{tipo}/{pais_id}")
async def list_items(tipo: str, pais_id: str):
    """List a catalog for one country."""
    return NomencladorService.list_items(tipo, pais_id)


@router.get("/{tipo}/{pais_id}/{item_id}")
async def get_item(tipo: str, pais_id: str, item_id: str):
    return NomencladorService.get_item(tipo, pais_id, item_id)


@router.post("/{tipo}/{pais_id}", status_code=201)
async def create_item(tipo: str, pais_id: str, body: JsonObject):
    """Create a catalog record. pais_id always comes from the URL."""
    return NomencladorService.create_item(tipo, pais_id, body)


@router.put("/{tipo}/{pais_id}/{item_id}")
async def update_item(tipo: str, pais_id: str, item_id: str, body: JsonObject):
    return NomencladorService.update_item(tipo, pais_id, item_id, body)


@router.delete("/{tipo}/{pais_id}/{item_id}")
async def delete_item(tipo: str, pais_id: str, item_id: str):
    """Remove a catalog record permanently."""
    NomencladorService.delete_item(tipo, pais_id, item_id)
    return {"success": True}


@router.put("/{tipo}/{pais_id}", include_in_schema=False)
async def update_without_id(tipo: str, pais_id: str):
    raise MissingIdError("PUT")


@router.delete("/{tipo}/{pais_id}", include_in_schema=False)
async def delete_without_id(tipo: str, pais_id: str):
    raise MissingIdError("DELETE")
