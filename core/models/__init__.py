# =============================================================================
# core/models/ - Pydantic Data Models
# =============================================================================
# This package contains Pydantic schemas for data validation:
# - pais.py: Country registry create/update schemas
# - nomenclador.py: Per-country catalog schemas
# - usuario.py: Auth0 user schemas
# - contabilidad.py: Journal entry schemas
#
# These models define the "contract" between API and clients.
# =============================================================================

from .pais import PaisCreate, PaisUpdate

from .nomenclador import (
    NOMENCLADOR_MODELS,
    NOMENCLADOR_UPDATE_MODELS,
    Banco,
    FormaPago,
    NomencladorBase,
    NomencladorTipo,
    TipoDocumentoFactura,
    TipoDocumentoIdentidad,
    TipoImpuesto,
    TipoMoneda,
    TipoMovimientoTesoreria,
)

from .usuario import UsuarioCreate, UsuarioResponse, UsuarioUpdate

from .contabilidad import AsientoContable, EstadoAsiento, MovimientoContable

__all__ = [
    # Pais
    "PaisCreate",
    "PaisUpdate",
    # Nomencladores
    "NOMENCLADOR_MODELS",
    "NOMENCLADOR_UPDATE_MODELS",
    "Banco",
    "FormaPago",
    "NomencladorBase",
    "NomencladorTipo",
    "TipoDocumentoFactura",
    "TipoDocumentoIdentidad",
    "TipoImpuesto",
    "TipoMoneda",
    "TipoMovimientoTesoreria",
    # Usuario
    "UsuarioCreate",
    "UsuarioResponse",
    "UsuarioUpdate",
    # Contabilidad
    "AsientoContable",
    "EstadoAsiento",
    "MovimientoContable",
]
