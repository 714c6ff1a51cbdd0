# =============================================================================
# core/services/user_service.py - Auth0 User Management
# =============================================================================
# Proxies user CRUD to the Auth0 Management API and maps Auth0 user records
# to the UsuarioResponse shape the frontend expects.
#
# When the Management API credentials are not configured, every operation
# answers from a fixed set of mock users instead (see using_mock()); the
# router flags those responses with an "X-Mock-Data: true" header.
# =============================================================================

import logging
import time
from typing import Any

from app.config import settings
from app.exceptions import IdentityProviderError, UsuarioNotFoundError
from core.models.usuario import UsuarioCreate, UsuarioResponse, UsuarioUpdate
from core.permissions import Role, build_app_metadata
from lib.auth0_client import TOKEN_ERROR_CODES, USER_FIELDS, Auth0ClientError, get_management_client
from lib.utils import utc_now_iso

logger = logging.getLogger(__name__)


def _mock_users() -> list[dict[str, Any]]:
    """Development users, in the Auth0 record format."""
    now = utc_now_iso()
    return [
        {
            "user_id": "auth0|123456789",
            "email": "admin@contaempresa.com",
            "name": "Administrador",
            "picture": "https://images.pexels.com/photos/774909/pexels-photo-774909.jpeg?auto=compress&cs=tinysrgb&w=150",
            "app_metadata": {
                "rol": "admin_empresa",
                "empresas": ["dev-empresa-pe", "dev-empresa-co", "dev-empresa-mx"],
                "permisos": ["admin:all"],
            },
            "created_at": now,
            "last_login": now,
            "blocked": False,
        },
        {
            "user_id": "auth0|987654321",
            "email": "contador@contaempresa.com",
            "name": "María González",
            "picture": "https://images.pexels.com/photos/1036623/pexels-photo-1036623.jpeg?auto=compress&cs=tinysrgb&w=150",
            "app_metadata": {
                "rol": "contador",
                "empresas": ["dev-empresa-pe"],
                "permisos": ["contabilidad:read", "contabilidad:write", "reportes:read"],
            },
            "created_at": now,
            "last_login": now,
            "blocked": False,
        },
        {
            "user_id": "auth0|567891234",
            "email": "usuario@contaempresa.com",
            "name": "Carlos Mendoza",
            "picture": "https://images.pexels.com/photos/220453/pexels-photo-220453.jpeg?auto=compress&cs=tinysrgb&w=150",
            "app_metadata": {
                "rol": "usuario",
                "empresas": ["dev-empresa-pe"],
                "permisos": ["contabilidad:read"],
            },
            "created_at": now,
            "last_login": None,
            "blocked": False,
        },
    ]


def _find_mock_user(user_id: str) -> dict[str, Any]:
    """Match by full id, bare id ("123456789") or substring; else the first user."""
    users = _mock_users()
    for user in users:
        bare_id = user["user_id"].removeprefix("auth0|")
        if user_id in (user["user_id"], bare_id) or bare_id in user_id:
            return user
    return users[0]


def _normalize_app_metadata(app_metadata: dict[str, Any] | None) -> dict[str, Any] | None:
    """
    Complete app_metadata that names a role.

    admin roles get admin:all and subdominio defaults to the first company.
    Metadata without a role is forwarded untouched.
    """
    if not app_metadata or not app_metadata.get("rol"):
        return app_metadata
    normalized = build_app_metadata(
        app_metadata["rol"],
        app_metadata.get("permisos") or [],
        app_metadata.get("empresas") or [],
        app_metadata.get("subdominio"),
    )["app_metadata"]
    # Keep any extra keys the caller stored alongside
    return {**app_metadata, **normalized}


def to_usuario(user: dict[str, Any]) -> UsuarioResponse:
    """
    Map an Auth0 user record to UsuarioResponse.

    nombre falls back from name to nickname to the email local part,
    then to "Usuario".
    """
    app_metadata = user.get("app_metadata") or {}
    email = user.get("email")
    nombre = (
        user.get("name")
        or user.get("nickname")
        or (email.split("@")[0] if email else None)
        or "Usuario"
    )
    return UsuarioResponse(
        id=user.get("user_id", ""),
        email=email,
        nombre=nombre,
        avatar=user.get("picture"),
        rol=app_metadata.get("rol") or Role.USUARIO.value,
        empresas_asignadas=app_metadata.get("empresas") or [],
        permisos=app_metadata.get("permisos") or [],
        fecha_creacion=user.get("created_at"),
        ultima_conexion=user.get("last_login"),
        activo=not user.get("blocked", False),
    )


def _upstream_error(e: Auth0ClientError, user_id: str | None = None) -> Exception:
    if e.code in TOKEN_ERROR_CODES:
        # Management credentials are server configuration, never the caller's
        logger.error(f"Auth0 Management API token unavailable: {e.message}")
        return IdentityProviderError(
            e.message,
            suggestion=e.suggestion,
        )
    if user_id and e.status_code == 404:
        return UsuarioNotFoundError(user_id)
    return IdentityProviderError(e.message, upstream_status=e.status_code)


class UserService:
    """Service for Auth0-backed users."""

    @staticmethod
    def using_mock() -> bool:
        """True when the Management API credentials are missing."""
        return not settings.auth0_management_configured

    @staticmethod
    def list_users(page: int = 0, per_page: int = 100, q: str | None = None) -> list[UsuarioResponse]:
        """
        List users, optionally filtered by an Auth0 search query.

        Raises:
            IdentityProviderError: If Auth0 rejects the request
        """
        if UserService.using_mock():
            logger.warning(
                f"Auth0 not configured (missing {', '.join(settings.missing_auth0_management_vars)}), "
                f"returning mock users"
            )
            return [to_usuario(u) for u in _mock_users()]

        params: dict[str, Any] = {
            "page": page,
            "per_page": per_page,
            "fields": USER_FIELDS,
            "include_fields": True,
        }
        if q:
            params["q"] = q
            params["search_engine"] = "v3"

        try:
            users = get_management_client().list_users(params)
        except Auth0ClientError as e:
            raise _upstream_error(e)
        return [to_usuario(u) for u in users]

    @staticmethod
    def get_user(user_id: str) -> UsuarioResponse:
        """
        Get one user.

        Raises:
            UsuarioNotFoundError: If Auth0 has no such user
            IdentityProviderError: If Auth0 rejects the request
        """
        if UserService.using_mock():
            return to_usuario(_find_mock_user(user_id))

        try:
            user = get_management_client().get_user(user_id)
        except Auth0ClientError as e:
            raise _upstream_error(e, user_id)
        return to_usuario(user)

    @staticmethod
    def create_user(payload: UsuarioCreate) -> UsuarioResponse:
        """
        Create a user in Auth0.

        Role, permissions and companies in the response come from the
        submitted app_metadata, as Auth0 may not echo them back.
        """
        data = payload.model_dump(exclude_none=True)
        app_metadata = _normalize_app_metadata(payload.app_metadata)
        if app_metadata is not None:
            data["app_metadata"] = app_metadata

        if UserService.using_mock():
            user = {
                "user_id": f"auth0_{int(time.time() * 1000)}",
                "email": payload.email,
                "name": payload.name,
                "created_at": utc_now_iso(),
            }
        else:
            try:
                user = get_management_client().create_user(data)
            except Auth0ClientError as e:
                raise _upstream_error(e)

        user["app_metadata"] = app_metadata or {}
        user["blocked"] = False
        user["last_login"] = None
        return to_usuario(user)

    @staticmethod
    def update_user(user_id: str, payload: UsuarioUpdate) -> UsuarioResponse:
        """
        Update the fields present in payload.

        Raises:
            UsuarioNotFoundError: If Auth0 has no such user
            IdentityProviderError: If Auth0 rejects the request
        """
        data = payload.model_dump(exclude_unset=True)
        if "app_metadata" in data:
            data["app_metadata"] = _normalize_app_metadata(data["app_metadata"])

        if UserService.using_mock():
            user = _find_mock_user(user_id)
            if data.get("name"):
                user["name"] = data["name"]
            if "blocked" in data:
                user["blocked"] = data["blocked"]
            user["app_metadata"] = {**user["app_metadata"], **(data.get("app_metadata") or {})}
            return to_usuario(user)

        try:
            user = get_management_client().update_user(user_id, data)
        except Auth0ClientError as e:
            raise _upstream_error(e, user_id)
        return to_usuario(user)

    @staticmethod
    def delete_user(user_id: str) -> str:
        """Delete a user and return the confirmation message."""
        if UserService.using_mock():
            return "Usuario eliminado correctamente (simulado)"

        try:
            get_management_client().delete_user(user_id)
        except Auth0ClientError as e:
            raise _upstream_error(e, user_id)
        return "Usuario eliminado correctamente"
