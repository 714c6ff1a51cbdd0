# =============================================================================
# core/models/pais.py - Country Schemas
# =============================================================================
# These models define the API contract for the country registry:
# - PaisCreate: Input for POST /paises
# - PaisUpdate: Input for PUT /paises/{id} (partial)
#
# Every company belongs to one country; the country fixes the currency,
# number formats and the catalogs (nomencladores) available to it.
# =============================================================================

from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator


class PaisBase(BaseModel):
    """Optional country attributes shared by create and update."""

    # Keys the UI echoes back (created_at, id on PUT) are dropped
    model_config = ConfigDict(extra="ignore")

    formato_fecha: str | None = Field(
        default=None,
        max_length=20,
        description="Date display format, e.g. DD/MM/YYYY"
    )
    separador_decimal: str | None = Field(default=None, max_length=1)
    separador_miles: str | None = Field(default=None, max_length=1)
    plan_contable_base: str | None = Field(
        default=None,
        description="Id of the base chart of accounts for the country"
    )
    configuracion_tributaria: dict[str, Any] | None = Field(
        default=None,
        description="Tax configuration (document types, taxes, regimes)"
    )


class PaisCreate(PaisBase):
    """
    Schema for creating a country.

    Example:
        {
            "id": "PE",
            "nombre": "Perú",
            "codigo": "PE",
            "codigo_iso": "PER",
            "moneda_principal": "PEN",
            "simbolo_moneda": "S/"
        }
    """

    id: str = Field(..., min_length=1, max_length=10, description="Country id (usually the ISO alpha-2 code)")
    nombre: str = Field(..., min_length=1, max_length=100)
    codigo: str = Field(..., min_length=1, max_length=3, description="Short code: PE, CO, MX")
    codigo_iso: str = Field(..., min_length=1, max_length=3, description="ISO alpha-3: PER, COL, MEX")
    moneda_principal: str = Field(..., min_length=1, max_length=3, description="Currency code: PEN")
    simbolo_moneda: str = Field(..., min_length=1, max_length=5, description="Currency symbol: S/")

    # Anything other than an explicit false is stored as active
    activo: bool | None = Field(default=None)


class PaisUpdate(PaisBase):
    """
    Schema for updating a country.

    All fields are optional; only fields present in the body are written.
    The id cannot be changed.
    """

    nombre: str | None = Field(default=None, min_length=1, max_length=100)
    codigo: str | None = Field(default=None, min_length=1, max_length=3)
    codigo_iso: str | None = Field(default=None, min_length=1, max_length=3)
    moneda_principal: str | None = Field(default=None, min_length=1, max_length=3)
    simbolo_moneda: str | None = Field(default=None, min_length=1, max_length=5)
    activo: bool | None = None

    @field_validator(
        "nombre", "codigo", "codigo_iso", "moneda_principal", "simbolo_moneda", "activo"
    )
    @classmethod
    def reject_null(cls, value: Any) -> Any:
        """Omit a field to leave it unchanged; null is not a value these columns take."""
        if value is None:
            raise ValueError("must not be null")
        return value
