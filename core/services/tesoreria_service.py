# =============================================================================
# core/services/tesoreria_service.py - Treasury Reads
# =============================================================================

import logging
from typing import Any

from lib.supabase_client import SupabaseClient

logger = logging.getLogger(__name__)

CUENTAS_TABLE = "cuentas_bancarias"
MOVIMIENTOS_TABLE = "movimientos_tesoreria"


class TesoreriaService:
    """Service for bank accounts and treasury movements."""

    @staticmethod
    def list_cuentas_bancarias(empresa_id: str) -> list[dict[str, Any]]:
        """Active bank accounts of a company."""
        return SupabaseClient.fetch_rows(
            CUENTAS_TABLE,
            filters={"empresa_id": empresa_id, "activa": True},
            order_by="nombre",
        )

    @staticmethod
    def list_movimientos(empresa_id: str) -> list[dict[str, Any]]:
        """Treasury movements, newest first."""
        return SupabaseClient.fetch_rows(
            MOVIMIENTOS_TABLE,
            filters={"empresa_id": empresa_id},
            order_by="fecha",
            desc=True,
        )
