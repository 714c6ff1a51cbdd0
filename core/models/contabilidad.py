# =============================================================================
# core/models/contabilidad.py - Ledger Schemas
# =============================================================================
# Journal entries (asientos) and their lines (movimientos).
#
# Rows come straight from Supabase, so unknown columns are kept
# (extra="allow") and every amount is read as Decimal to avoid float drift
# when totalling.
# =============================================================================

from decimal import Decimal
from enum import Enum
from typing import Annotated

from pydantic import BaseModel, ConfigDict, Field, PlainSerializer

# Monetary amount; JSON output uses plain numbers
Amount = Annotated[
    Decimal | None,
    PlainSerializer(lambda v: float(v) if v is not None else None, when_used="json"),
]


class EstadoAsiento(str, Enum):
    BORRADOR = "borrador"
    CONFIRMADO = "confirmado"
    ANULADO = "anulado"


class MovimientoContable(BaseModel):
    """One debit or credit line of a journal entry."""

    model_config = ConfigDict(extra="allow")

    cuenta_id: str | None = None
    cuenta: str | None = None
    debito: Amount = None
    credito: Amount = None
    descripcion: str | None = None


class AsientoContable(BaseModel):
    """
    Journal entry.

    The entry is balanced ("cuadrado") when total debits equal total
    credits. Entries are stored as-is; balance is reported, not enforced.
    """

    model_config = ConfigDict(extra="allow")

    id: str | int
    numero: str | None = None
    fecha: str | None = None
    descripcion: str | None = None
    # Unknown states from older rows are kept as plain strings
    estado: EstadoAsiento | str = EstadoAsiento.BORRADOR
    empresa_id: str | None = None
    movimientos: list[MovimientoContable] = Field(default_factory=list)

    @property
    def total_debito(self) -> Decimal:
        return sum((m.debito or Decimal("0") for m in self.movimientos), Decimal("0"))

    @property
    def total_credito(self) -> Decimal:
        return sum((m.credito or Decimal("0") for m in self.movimientos), Decimal("0"))

    @property
    def cuadrado(self) -> bool:
        return self.total_debito == self.total_credito

    def with_totals(self) -> dict:
        """Serialize the entry with totals added. Amounts become floats for JSON."""
        data = self.model_dump(mode="json")
        data["total_debito"] = float(self.total_debito)
        data["total_credito"] = float(self.total_credito)
        data["cuadrado"] = self.cuadrado
        return data
