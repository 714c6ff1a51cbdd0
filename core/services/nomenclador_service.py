# =============================================================================
# core/services/nomenclador_service.py - Per-Country Catalog Logic
# =============================================================================
# CRUD over the catalog tables. The table is chosen by `tipo`, which must be
# one of NomencladorTipo; every query is scoped by pais_id, so a record
# is only reachable under the country it belongs to.
# =============================================================================

import logging
from typing import Any

from pydantic import ValidationError

from lib.supabase_client import SupabaseClient
from lib.utils import utc_now_iso
from core.models.nomenclador import NOMENCLADOR_MODELS, NOMENCLADOR_UPDATE_MODELS
from app.exceptions import (
    InvalidNomencladorTypeError,
    InvalidPayloadError,
    NomencladorNotFoundError,
)

logger = logging.getLogger(__name__)


def _validate_tipo(tipo: str) -> str:
    if tipo not in NOMENCLADOR_MODELS:
        raise InvalidNomencladorTypeError(tipo, list(NOMENCLADOR_MODELS))
    return tipo


def _validate_body(model: type, body: dict[str, Any], **dump_kwargs: Any) -> dict[str, Any]:
    """Validate a raw body against the tipo's schema."""
    try:
        return model.model_validate(body).model_dump(**dump_kwargs)
    except ValidationError as e:
        raise InvalidPayloadError(e.errors())


class NomencladorService:
    """Service for per-country catalogs."""

    @staticmethod
    def list_items(tipo: str, pais_id: str) -> list[dict[str, Any]]:
        _validate_tipo(tipo)
        return SupabaseClient.fetch_rows(tipo, filters={"pais_id": pais_id}, order_by="nombre")

    @staticmethod
    def get_item(tipo: str, pais_id: str, item_id: str) -> dict[str, Any]:
        """
        Raises:
            InvalidNomencladorTypeError: If tipo is unknown
            NomencladorNotFoundError: If the record doesn't exist for the country
        """
        _validate_tipo(tipo)
        item = SupabaseClient.fetch_row(tipo, item_id, filters={"pais_id": pais_id})
        if not item:
            raise NomencladorNotFoundError(tipo, item_id)
        return item

    @staticmethod
    def create_item(tipo: str, pais_id: str, body: dict[str, Any]) -> dict[str, Any]:
        """
        Validate body for the tipo and insert it under pais_id.

        Any pais_id in the body is replaced by the one from the URL.
        """
        _validate_tipo(tipo)
        body = {k: v for k, v in body.items() if k != "pais_id"}
        data = _validate_body(NOMENCLADOR_MODELS[tipo], body, exclude_none=True)
        data["pais_id"] = pais_id

        item = SupabaseClient.insert_row(tipo, data)
        logger.info(f"Created {tipo} record {item.get('id')} for country {pais_id}")
        return item

    @staticmethod
    def update_item(tipo: str, pais_id: str, item_id: str, body: dict[str, Any]) -> dict[str, Any]:
        """Partial update; raises NomencladorNotFoundError if nothing matched."""
        _validate_tipo(tipo)
        data = _validate_body(NOMENCLADOR_UPDATE_MODELS[tipo], body, exclude_unset=True)
        data["updated_at"] = utc_now_iso()

        rows = SupabaseClient.update_rows(tipo, data, filters={"id": item_id, "pais_id": pais_id})
        if not rows:
            raise NomencladorNotFoundError(tipo, item_id)
        return rows[0]

    @staticmethod
    def delete_item(tipo: str, pais_id: str, item_id: str) -> None:
        """Hard delete; raises NomencladorNotFoundError if nothing matched."""
        _validate_tipo(tipo)
        rows = SupabaseClient.delete_rows(tipo, filters={"id": item_id, "pais_id": pais_id})
        if not rows:
            raise NomencladorNotFoundError(tipo, item_id)
        logger.info(f"Deleted {tipo} record {item_id} for country {pais_id}")
