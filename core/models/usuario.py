# =============================================================================
# core/models/usuario.py - User Schemas
# =============================================================================
# Users live in Auth0. These models describe:
# - UsuarioResponse: the shape the frontend expects (camelCase keys)
# - UsuarioCreate / UsuarioUpdate: bodies forwarded to the Management API
#
# Role, permissions and company assignments travel in Auth0 app_metadata:
#   {"rol": "contador", "permisos": [...], "empresas": [...], "subdominio": "..."}
# =============================================================================

import json
from datetime import datetime
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator

from core.permissions import Role


class UsuarioResponse(BaseModel):
    """
    User as returned by /auth0-users.

    Example:
        {
            "id": "auth0|987654321",
            "email": "contador@contaempresa.com",
            "nombre": "María González",
            "rol": "contador",
            "empresasAsignadas": ["dev-empresa-pe"],
            "permisos": ["contabilidad:read", "contabilidad:write"],
            "fechaCreacion": "2024-01-15T10:30:00Z",
            "ultimaConexion": null,
            "activo": true
        }
    """

    model_config = ConfigDict(populate_by_name=True)

    id: str
    email: str | None = None
    nombre: str
    avatar: str | None = None
    rol: str = Role.USUARIO.value
    empresas_asignadas: list[str] = Field(default_factory=list, alias="empresasAsignadas")
    permisos: list[str] = Field(default_factory=list)
    fecha_creacion: datetime | str | None = Field(default=None, alias="fechaCreacion")
    ultima_conexion: datetime | str | None = Field(default=None, alias="ultimaConexion")
    activo: bool = True


def _parse_app_metadata(value: Any) -> Any:
    """app_metadata may arrive JSON-encoded from form posts."""
    if isinstance(value, str):
        try:
            return json.loads(value)
        except json.JSONDecodeError:
            raise ValueError("app_metadata must be an object or a JSON-encoded object")
    return value


class UsuarioCreate(BaseModel):
    """
    Body for POST /auth0-users, forwarded to Auth0.

    Extra Auth0 attributes (given_name, user_metadata, ...) pass through.
    """

    model_config = ConfigDict(extra="allow")

    email: str = Field(..., min_length=3, max_length=254)
    password: str | None = Field(default=None, min_length=8)
    name: str | None = None
    connection: str = "Username-Password-Authentication"
    app_metadata: dict[str, Any] | None = None

    @field_validator("app_metadata", mode="before")
    @classmethod
    def parse_app_metadata(cls, value: Any) -> Any:
        return _parse_app_metadata(value)


class UsuarioUpdate(BaseModel):
    """Body for PATCH /auth0-users/{id}. Only present fields are sent."""

    model_config = ConfigDict(extra="allow")

    email: str | None = Field(default=None, min_length=3, max_length=254)
    password: str | None = Field(default=None, min_length=8)
    name: str | None = None
    blocked: bool | None = None
    app_metadata: dict[str, Any] | None = None

    @field_validator("app_metadata", mode="before")
    @classmethod
    def parse_app_metadata(cls, value: Any) -> Any:
        return _parse_app_metadata(value)
