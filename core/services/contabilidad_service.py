# =============================================================================
# core/services/contabilidad_service.py - Ledger Reads
# =============================================================================
# Chart of accounts (plan_cuentas) and journal entries (asientos_contables)
# for one company. Entries are returned with their lines and balance totals.
# =============================================================================

import logging
from typing import Any

from lib.supabase_client import SupabaseClient
from core.models.contabilidad import AsientoContable

logger = logging.getLogger(__name__)

CUENTAS_TABLE = "plan_cuentas"
ASIENTOS_TABLE = "asientos_contables"

# Embed each entry's lines from movimientos_contables
ASIENTO_COLUMNS = "*, movimientos:movimientos_contables(*)"


class ContabilidadService:
    """Service for accounting reads."""

    @staticmethod
    def list_cuentas(empresa_id: str) -> dict[str, Any]:
        """Chart of accounts ordered by account code."""
        cuentas = SupabaseClient.fetch_rows(
            CUENTAS_TABLE,
            filters={"empresa_id": empresa_id},
            order_by="codigo",
        )
        return {"data": cuentas, "total": len(cuentas)}

    @staticmethod
    def list_asientos(
        empresa_id: str,
        fecha_desde: str | None = None,
        fecha_hasta: str | None = None,
        page: int = 1,
        limit: int = 50,
    ) -> dict[str, Any]:
        """
        Journal entries, newest first, one page at a time.

        Args:
            empresa_id: Company whose entries to list
            fecha_desde: Inclusive lower date bound (YYYY-MM-DD)
            fecha_hasta: Inclusive upper date bound (YYYY-MM-DD)
            page: 1-based page number
            limit: Entries per page

        Returns:
            {"data": [...], "total": int, "page": int, "limit": int}, where
            each entry carries total_debito, total_credito and cuadrado
        """
        rows = SupabaseClient.fetch_rows(
            ASIENTOS_TABLE,
            filters={"empresa_id": empresa_id},
            columns=ASIENTO_COLUMNS,
            order_by="fecha",
            desc=True,
            gte={"fecha": fecha_desde} if fecha_desde else None,
            lte={"fecha": fecha_hasta} if fecha_hasta else None,
        )

        start = (page - 1) * limit
        asientos = [AsientoContable.model_validate(row) for row in rows[start:start + limit]]

        unbalanced = [a.id for a in asientos if not a.cuadrado]
        if unbalanced:
            logger.warning(f"Company {empresa_id} has unbalanced entries: {unbalanced}")

        return {
            "data": [a.with_totals() for a in asientos],
            "total": len(rows),
            "page": page,
            "limit": limit,
        }
