# =============================================================================
# core/services/pais_service.py - Country Registry Logic
# =============================================================================
# Handles country CRUD operations against the `paises` table.
# Countries are never removed: DELETE flips `activo` to false.
# =============================================================================

import logging
from typing import Any

from lib.supabase_client import SupabaseClient, SupabaseClientError
from lib.utils import utc_now_iso
from core.models.pais import PaisCreate, PaisUpdate
from app.exceptions import PaisAlreadyExistsError, PaisNotFoundError

logger = logging.getLogger(__name__)

TABLE = "paises"


class PaisService:
    """Service for the country registry."""

    @staticmethod
    def list_paises(include_inactive: bool = False) -> list[dict[str, Any]]:
        """
        List countries.

        Only active countries are returned unless include_inactive is set.
        """
        filters = None if include_inactive else {"activo": True}
        return SupabaseClient.fetch_rows(TABLE, filters=filters, order_by="nombre")

    @staticmethod
    def get_pais(pais_id: str) -> dict[str, Any]:
        """
        Get a country by id, active or not.

        Raises:
            PaisNotFoundError: If the id doesn't exist
        """
        pais = SupabaseClient.fetch_row(TABLE, pais_id)
        if not pais:
            raise PaisNotFoundError(pais_id)
        return pais

    @staticmethod
    def create_pais(payload: PaisCreate) -> dict[str, Any]:
        """
        Create a country.

        Raises:
            PaisAlreadyExistsError: If the id is already taken
        """
        if SupabaseClient.fetch_row(TABLE, payload.id, columns="id"):
            raise PaisAlreadyExistsError(payload.id)

        data = payload.model_dump(exclude_none=True)
        data["activo"] = payload.activo is not False
        now = utc_now_iso()
        data["created_at"] = now
        data["updated_at"] = now

        try:
            pais = SupabaseClient.insert_row(TABLE, data)
        except SupabaseClientError as e:
            # Lost a race with a concurrent create of the same id
            if e.code == "DUPLICATE_KEY":
                raise PaisAlreadyExistsError(payload.id) from e
            raise

        logger.info(f"Created country: {pais.get('id')}")
        return pais

    @staticmethod
    def update_pais(pais_id: str, payload: PaisUpdate) -> dict[str, Any]:
        """
        Update the fields present in payload.

        Raises:
            PaisNotFoundError: If the id doesn't exist
        """
        data = payload.model_dump(exclude_unset=True)
        data["updated_at"] = utc_now_iso()

        rows = SupabaseClient.update_rows(TABLE, data, filters={"id": pais_id})
        if not rows:
            raise PaisNotFoundError(pais_id)

        logger.info(f"Updated country: {pais_id}")
        return rows[0]

    @staticmethod
    def deactivate_pais(pais_id: str) -> dict[str, Any]:
        """
        Soft delete a country.

        Raises:
            PaisNotFoundError: If the id doesn't exist
        """
        rows = SupabaseClient.update_rows(
            TABLE,
            {"activo": False, "updated_at": utc_now_iso()},
            filters={"id": pais_id},
        )
        if not rows:
            raise PaisNotFoundError(pais_id)

        logger.info(f"Deactivated country: {pais_id}")
        return rows[0]
