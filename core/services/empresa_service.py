# =============================================================================
# core/services/empresa_service.py - Company Reads
# =============================================================================
# Read-only access to the `empresas` table.
#
# Every method takes `allowed`: the company ids the caller may see, or None
# for callers with admin:all. Tenant checks live here so routers can't
# forget them.
# =============================================================================

import logging
from typing import Any

from lib.supabase_client import SupabaseClient
from app.exceptions import EmpresaNotFoundError, PermissionDeniedError

logger = logging.getLogger(__name__)

TABLE = "empresas"


def ensure_company_access(empresa_id: str, allowed: list[str] | None) -> None:
    """
    Raise PermissionDeniedError unless empresa_id is in allowed.

    allowed=None means unrestricted.
    """
    if allowed is not None and empresa_id not in allowed:
        logger.warning(f"Access to company {empresa_id} denied")
        raise PermissionDeniedError(f"empresa:{empresa_id}")


class EmpresaService:
    """Service for company records."""

    @staticmethod
    def list_empresas(allowed: list[str] | None = None) -> list[dict[str, Any]]:
        if allowed is not None and not allowed:
            return []
        in_ = {"id": allowed} if allowed is not None else None
        return SupabaseClient.fetch_rows(TABLE, in_=in_, order_by="nombre")

    @staticmethod
    def get_empresa(empresa_id: str, allowed: list[str] | None = None) -> dict[str, Any]:
        """
        Get a company by id.

        Raises:
            PermissionDeniedError: If the company isn't assigned to the caller
            EmpresaNotFoundError: If the id doesn't exist
        """
        ensure_company_access(empresa_id, allowed)
        empresa = SupabaseClient.fetch_row(TABLE, empresa_id)
        if not empresa:
            raise EmpresaNotFoundError(empresa_id)
        return empresa

    @staticmethod
    def list_by_pais(pais_id: str, allowed: list[str] | None = None) -> list[dict[str, Any]]:
        """Companies registered in a country, limited to the allowed ones."""
        if allowed is not None and not allowed:
            return []
        in_ = {"id": allowed} if allowed is not None else None
        return SupabaseClient.fetch_rows(
            TABLE,
            filters={"pais_id": pais_id},
            in_=in_,
            order_by="nombre",
        )
