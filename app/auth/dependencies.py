# =============================================================================
# app/auth/dependencies.py - FastAPI Auth Dependencies
# =============================================================================
# Provides dependency injection for authentication.
#
# Caller tokens are Auth0 access tokens:
# - With AUTH0_DOMAIN and AUTH0_AUDIENCE set, they are verified as RS256
#   JWTs against the tenant JWKS
# - Otherwise (development only) claims are read without verification, and
#   an opaque bearer token becomes a local super_admin identity
#
# Usage:
#   from app.auth import get_current_user, require_permission, AuthUser
#
#   @router.get("/protected")
#   async def protected(user: AuthUser = Depends(require_permission("empresas:read"))):
#       return {"user": user.sub}
# =============================================================================

import logging
import time
from typing import Any, Callable, Optional

import httpx
from fastapi import Depends
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials
from jose import jwt, JWTError, ExpiredSignatureError
from pydantic import ValidationError

from app.config import settings
from app.auth.models import AuthUser
from app.exceptions import (
    AuthenticationRequiredError,
    AuthNotConfiguredError,
    InvalidTokenError,
    MissingQueryParamError,
    PermissionDeniedError,
)
from core.permissions import Permission, Role, get_permissions_for_role, resolve_permissions
from core.services.empresa_service import ensure_company_access

logger = logging.getLogger(__name__)

# HTTP Bearer token extractor; missing headers are reported by get_current_user
security = HTTPBearer(auto_error=False)

# Cache for JWKS keys
_jwks_cache: dict = {}
_jwks_cache_time: float = 0
JWKS_CACHE_TTL = 3600  # 1 hour

DEV_USER_SUB = "dev|local"


def _get_jwks_url() -> str:
    """Get the JWKS URL of the Auth0 tenant."""
    domain = (settings.AUTH0_DOMAIN or "").removeprefix("https://").rstrip("/")
    return f"https://{domain}/.well-known/jwks.json"


def _fetch_jwks() -> dict:
    """Fetch JWKS from Auth0 with caching."""
    global _jwks_cache, _jwks_cache_time

    current_time = time.time()

    # Return cached if valid
    if _jwks_cache and (current_time - _jwks_cache_time) < JWKS_CACHE_TTL:
        return _jwks_cache

    jwks_url = _get_jwks_url()
    try:
        response = httpx.get(jwks_url, timeout=settings.AUTH0_TIMEOUT_SECONDS)
        response.raise_for_status()
        _jwks_cache = response.json()
        _jwks_cache_time = current_time
        logger.debug(f"Fetched JWKS from {jwks_url}")
        return _jwks_cache
    except httpx.HTTPError as e:
        logger.warning(f"Failed to fetch JWKS: {e}")
        # Return cached even if expired, as fallback
        if _jwks_cache:
            return _jwks_cache
        return {"keys": []}


def _get_signing_key(token: str) -> dict:
    """
    Find the JWK that signed a token.

    Raises:
        InvalidTokenError: If the header is unreadable or the kid is unknown
    """
    try:
        unverified_header = jwt.get_unverified_header(token)
    except JWTError:
        raise InvalidTokenError("malformed token header")

    kid = unverified_header.get("kid")
    for key in _fetch_jwks().get("keys", []):
        if key.get("kid") == kid:
            return key

    logger.warning(f"No JWKS key matches kid={kid}")
    raise InvalidTokenError("signing key not found")


def _verify_token(token: str) -> dict[str, Any]:
    """Verify signature, audience, issuer and expiry; return the claims."""
    domain = (settings.AUTH0_DOMAIN or "").removeprefix("https://").rstrip("/")
    try:
        return jwt.decode(
            token,
            _get_signing_key(token),
            algorithms=["RS256"],
            audience=settings.AUTH0_AUDIENCE,
            issuer=f"https://{domain}/",
        )
    except ExpiredSignatureError:
        logger.warning("JWT token has expired")
        raise InvalidTokenError("token has expired")
    except JWTError as e:
        logger.warning(f"JWT validation failed: {e}")
        raise InvalidTokenError(str(e))


def _user_from_claims(claims: dict[str, Any]) -> AuthUser:
    """Build the caller identity from token claims."""
    namespace = settings.AUTH0_CLAIMS_NAMESPACE
    app_metadata = claims.get(f"{namespace}app_metadata") or claims.get("app_metadata") or {}

    sub = claims.get("sub")
    if not sub:
        logger.warning("JWT token missing 'sub' claim")
        raise InvalidTokenError("missing user ID")

    if not isinstance(app_metadata, dict):
        logger.warning(f"JWT app_metadata claim is a {type(app_metadata).__name__}, not an object")
        raise InvalidTokenError("malformed app_metadata claim")

    rol = app_metadata.get("rol") or Role.USUARIO.value
    permisos = app_metadata.get("permisos") or []
    empresas = app_metadata.get("empresas") or []
    if not isinstance(rol, str) or not isinstance(permisos, list) or not isinstance(empresas, list):
        raise InvalidTokenError("malformed app_metadata claim")

    try:
        return AuthUser(
            sub=sub,
            email=claims.get(f"{namespace}email") or claims.get("email"),
            rol=rol,
            permisos=resolve_permissions(rol, permisos),
            empresas=empresas,
        )
    except ValidationError as e:
        logger.warning(f"JWT claims rejected: {e.errors()}")
        raise InvalidTokenError("malformed app_metadata claim")


def _development_user(token: str) -> AuthUser:
    """Identity for development when tokens can't be verified."""
    try:
        claims = jwt.get_unverified_claims(token)
    except JWTError:
        logger.debug("Opaque bearer token in development, using local super_admin")
        return AuthUser(
            sub=DEV_USER_SUB,
            email="dev@contaempresa.local",
            rol=Role.SUPER_ADMIN.value,
            permisos=get_permissions_for_role(Role.SUPER_ADMIN),
        )
    return _user_from_claims(claims)


async def get_current_user(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(security)
) -> AuthUser:
    """
    Extract and validate the caller from the bearer token.

    Raises:
        AuthenticationRequiredError: 401 if no bearer token was sent
        InvalidTokenError: 401 if the token fails verification
        AuthNotConfiguredError: 503 in production without AUTH0_AUDIENCE
    """
    if credentials is None:
        raise AuthenticationRequiredError()

    token = credentials.credentials

    if settings.token_verification_configured:
        user = _user_from_claims(_verify_token(token))
    elif settings.is_production:
        logger.error("Token verification is not configured in production")
        raise AuthNotConfiguredError()
    else:
        user = _development_user(token)

    logger.debug(f"Authenticated user: {user.sub}")
    return user


def require_permission(permission: str | Permission) -> Callable:
    """
    Dependency factory: the caller must hold permission (or admin:all).

    Usage:
        @router.get("/", dependencies=[Depends(require_permission("usuarios:read"))])
    """
    required = permission.value if isinstance(permission, Permission) else permission

    async def dependency(user: AuthUser = Depends(get_current_user)) -> AuthUser:
        if not user.can(required):
            logger.warning(f"User {user.sub} lacks {required}")
            raise PermissionDeniedError(required)
        return user

    return dependency


def scoped_company(empresa_id: str | None, user: AuthUser) -> str:
    """
    Validate the ?empresa_id= of a tenant endpoint.

    Raises:
        MissingQueryParamError: 400 if empresa_id is absent
        PermissionDeniedError: 403 if the company isn't assigned to the caller
    """
    if not empresa_id:
        raise MissingQueryParamError("empresa_id")
    ensure_company_access(empresa_id, user.allowed_companies)
    return empresa_id
