# =============================================================================
# core/models/nomenclador.py - Per-Country Catalog Schemas
# =============================================================================
# Each catalog ("nomenclador") lives in its own table and is scoped to a
# country through pais_id. The tables share a common core (nombre, codigo,
# descripcion, activo) and add their own flags.
#
# NOMENCLADOR_MODELS maps the table name used in the URL to the create
# schema for that table.
# =============================================================================

from enum import Enum
from typing import Any, get_args

from pydantic import BaseModel, ConfigDict, Field, create_model, field_validator


class NomencladorTipo(str, Enum):
    """Catalog tables, as they appear in /nomencladores/{tipo}/..."""
    TIPOS_DOCUMENTO_IDENTIDAD = "tipos_documento_identidad"
    TIPOS_DOCUMENTO_FACTURA = "tipos_documento_factura"
    TIPOS_IMPUESTO = "tipos_impuesto"
    FORMAS_PAGO = "formas_pago"
    TIPOS_MOVIMIENTO_TESORERIA = "tipos_movimiento_tesoreria"
    TIPOS_MONEDA = "tipos_moneda"
    BANCOS = "bancos"


class NomencladorBase(BaseModel):
    """Fields every catalog record has. pais_id comes from the URL."""

    model_config = ConfigDict(extra="ignore")

    nombre: str = Field(..., min_length=1, max_length=150)
    codigo: str = Field(..., min_length=1, max_length=20)
    descripcion: str | None = None
    activo: bool = True


class TipoDocumentoIdentidad(NomencladorBase):
    """DNI, RUC, NIT, RFC..."""


class TipoDocumentoFactura(NomencladorBase):
    requiere_impuesto: bool = False
    requiere_cliente: bool = False
    afecta_inventario: bool = False
    afecta_contabilidad: bool = True
    prefijo: str | None = None
    formato: str | None = None


class TipoImpuesto(NomencladorBase):
    porcentaje: float = Field(..., ge=0, le=100)
    tipo: str = Field(..., min_length=1, description="e.g. IVA, IGV, retencion")
    cuenta_contable_id: str | None = None


class FormaPago(NomencladorBase):
    requiere_banco: bool = False
    requiere_referencia: bool = False
    requiere_fecha: bool = False


class TipoMovimientoTesoreria(NomencladorBase):
    afecta_saldo: bool = True
    requiere_referencia: bool = False
    requiere_documento: bool = False


class TipoMoneda(NomencladorBase):
    simbolo: str = Field(..., min_length=1, max_length=5)
    es_principal: bool = False


class Banco(NomencladorBase):
    """Banks operating in the country."""


NOMENCLADOR_MODELS: dict[str, type[NomencladorBase]] = {
    NomencladorTipo.TIPOS_DOCUMENTO_IDENTIDAD.value: TipoDocumentoIdentidad,
    NomencladorTipo.TIPOS_DOCUMENTO_FACTURA.value: TipoDocumentoFactura,
    NomencladorTipo.TIPOS_IMPUESTO.value: TipoImpuesto,
    NomencladorTipo.FORMAS_PAGO.value: FormaPago,
    NomencladorTipo.TIPOS_MOVIMIENTO_TESORERIA.value: TipoMovimientoTesoreria,
    NomencladorTipo.TIPOS_MONEDA.value: TipoMoneda,
    NomencladorTipo.BANCOS.value: Banco,
}


def update_model_for(model: type[NomencladorBase]) -> type[BaseModel]:
    """
    Derive the partial-update schema for a catalog model.

    Same fields and constraints, all optional. Fields that can't be null
    on create (nombre, codigo, activo...) reject an explicit null.
    """
    fields: dict[str, Any] = {
        name: (field.annotation | None, Field(default=None, **_constraints(field)))
        for name, field in model.model_fields.items()
    }
    non_nullable = [
        name for name, field in model.model_fields.items()
        if type(None) not in get_args(field.annotation)
    ]
    return create_model(
        f"{model.__name__}Update",
        __config__=ConfigDict(extra="ignore"),
        __validators__={"reject_null": field_validator(*non_nullable)(_reject_null)},
        **fields,
    )


def _reject_null(cls, value: Any) -> Any:
    if value is None:
        raise ValueError("must not be null")
    return value


def _constraints(field: Any) -> dict[str, Any]:
    """Carry min/max constraints over to the optional field."""
    kwargs: dict[str, Any] = {}
    for meta in field.metadata:
        for attr in ("min_length", "max_length", "ge", "le"):
            value = getattr(meta, attr, None)
            if value is not None:
                kwargs[attr] = value
    return kwargs


NOMENCLADOR_UPDATE_MODELS: dict[str, type[BaseModel]] = {
    tipo: update_model_for(model) for tipo, model in NOMENCLADOR_MODELS.items()
}
