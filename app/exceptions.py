# =============================================================================
# app/exceptions.py - Custom Exception Handlers
# =============================================================================
# Centralized exception handling for the API.
# Every error leaves the API as {"error": ..., "code": ...} so the frontend
# can show the message as-is. Errors should tell HOW to fix, not just WHAT
# failed.
# =============================================================================

import logging
from typing import Any

from fastapi import Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from lib.utils import ApplicationError

logger = logging.getLogger(__name__)


class ContaEmpresaException(Exception):
    """
    Base exception for the ContaEmpresa API.

    All custom exceptions inherit from this class.
    Provides structured error responses with actionable suggestions.
    """

    def __init__(
        self,
        message: str,
        code: str = "CONTAEMPRESA_ERROR",
        status_code: int = 500,
        suggestion: str | None = None,
        details: dict[str, Any] | None = None,
    ):
        super().__init__(message)
        self.message = message
        self.code = code
        self.status_code = status_code
        self.suggestion = suggestion
        self.details = details or {}

    def to_dict(self) -> dict[str, Any]:
        """Convert exception to API response dict."""
        result = {
            "error": self.message,
            "code": self.code,
        }
        if self.suggestion:
            result["suggestion"] = self.suggestion
        if self.details:
            result["details"] = self.details
        return result


# =============================================================================
# Validation Helpers
# =============================================================================

def _summarize_errors(errors: list[dict[str, Any]]) -> list[dict[str, Any]]:
    """Keep the JSON-safe parts of pydantic errors."""
    return [
        {"loc": list(e.get("loc", ())), "msg": e.get("msg"), "type": e.get("type")}
        for e in errors
    ]


def _describe_validation_error(error: dict[str, Any]) -> str:
    """Turn the first pydantic error into a one-line message."""
    error_type = error.get("type", "")
    loc = [str(part) for part in error.get("loc", ()) if part not in ("body", "query", "path")]
    field = loc[-1] if loc else None

    if error_type == "json_invalid":
        return "Invalid JSON body"
    if field and error_type in ("missing", "string_too_short"):
        return f"Field '{field}' is required"
    if field:
        return f"Invalid value for field '{field}': {error.get('msg')}"
    return str(error.get("msg", "Invalid request"))


# =============================================================================
# Request Exceptions
# =============================================================================

class InvalidPayloadError(ContaEmpresaException):
    """Raised when a body fails validation outside FastAPI's own parsing."""

    def __init__(self, errors: list[dict[str, Any]]):
        errors = _summarize_errors(errors)
        super().__init__(
            message=_describe_validation_error(errors[0]) if errors else "Invalid request",
            code="VALIDATION_ERROR",
            status_code=400,
            details={"errors": errors},
        )


class MissingIdError(ContaEmpresaException):
    """Raised when PUT/DELETE target a collection instead of one record."""

    def __init__(self, method: str):
        super().__init__(
            message=f"ID is required for {method}",
            code="ID_REQUIRED",
            status_code=400,
            suggestion=f"Append the record id to the URL, e.g. {method} /paises/PE",
        )


class MissingQueryParamError(ContaEmpresaException):
    """Raised when a required query parameter is absent."""

    def __init__(self, param: str):
        super().__init__(
            message=f"{param} is required",
            code="QUERY_PARAM_REQUIRED",
            status_code=400,
            suggestion=f"Add ?{param}=<value> to the request",
            details={"param": param},
        )


# =============================================================================
# Pais Exceptions
# =============================================================================

class PaisNotFoundError(ContaEmpresaException):
    """Raised when a country id doesn't exist."""

    def __init__(self, pais_id: str):
        super().__init__(
            message=f"Country not found: {pais_id}",
            code="PAIS_NOT_FOUND",
            status_code=404,
            suggestion="Check the country id (e.g. PE, CO, MX)",
            details={"id": pais_id},
        )


class PaisAlreadyExistsError(ContaEmpresaException):
    """Raised when creating a country whose id is taken."""

    def __init__(self, pais_id: str):
        super().__init__(
            message=f"Country with id '{pais_id}' already exists",
            code="PAIS_ALREADY_EXISTS",
            status_code=409,
            suggestion="Use PUT /paises/{id} to modify an existing country",
            details={"id": pais_id},
        )


# =============================================================================
# Nomenclador Exceptions
# =============================================================================

class InvalidNomencladorTypeError(ContaEmpresaException):
    """Raised when the catalog type in the path is unknown."""

    def __init__(self, tipo: str, allowed: list[str]):
        super().__init__(
            message="Invalid tipo",
            code="INVALID_TIPO",
            status_code=400,
            suggestion=f"Use one of: {', '.join(allowed)}",
            details={"tipo": tipo},
        )


class NomencladorNotFoundError(ContaEmpresaException):
    """Raised when a catalog record doesn't exist."""

    def __init__(self, tipo: str, record_id: str):
        super().__init__(
            message=f"Record not found: {tipo}/{record_id}",
            code="NOMENCLADOR_NOT_FOUND",
            status_code=404,
            details={"tipo": tipo, "id": record_id},
        )


# =============================================================================
# Tenant Data Exceptions
# =============================================================================

class EmpresaNotFoundError(ContaEmpresaException):
    """Raised when a company id doesn't exist."""

    def __init__(self, empresa_id: str):
        super().__init__(
            message="Empresa not found",
            code="EMPRESA_NOT_FOUND",
            status_code=404,
            details={"id": empresa_id},
        )


# =============================================================================
# Auth Exceptions
# =============================================================================

class AuthenticationRequiredError(ContaEmpresaException):
    """Raised when a request carries no bearer token."""

    def __init__(self):
        super().__init__(
            message="Se requiere autenticación",
            code="AUTHENTICATION_REQUIRED",
            status_code=401,
            suggestion="Send an 'Authorization: Bearer <token>' header",
        )


class InvalidTokenError(ContaEmpresaException):
    """Raised when a bearer token fails verification."""

    def __init__(self, reason: str):
        super().__init__(
            message=f"Invalid token: {reason}",
            code="INVALID_TOKEN",
            status_code=401,
            suggestion="Log in again to obtain a fresh access token",
        )


class AuthNotConfiguredError(ContaEmpresaException):
    """Raised in production when caller tokens cannot be verified."""

    def __init__(self):
        super().__init__(
            message="Token verification is not configured",
            code="AUTH_NOT_CONFIGURED",
            status_code=503,
            suggestion="Set AUTH0_DOMAIN and AUTH0_AUDIENCE",
        )


class PermissionDeniedError(ContaEmpresaException):
    """Raised when the caller lacks a permission or company assignment."""

    def __init__(self, required: str):
        super().__init__(
            message=f"Permission denied: {required}",
            code="PERMISSION_DENIED",
            status_code=403,
            suggestion="Ask an administrator to grant the permission",
            details={"required": required},
        )


# =============================================================================
# Identity Provider Exceptions
# =============================================================================

class UsuarioNotFoundError(ContaEmpresaException):
    """Raised when Auth0 has no user with the given id."""

    def __init__(self, user_id: str):
        super().__init__(
            message=f"Usuario no encontrado: {user_id}",
            code="USUARIO_NOT_FOUND",
            status_code=404,
            details={"user_id": user_id},
        )


# Auth0 statuses that describe the caller's request; anything else is ours
PASSTHROUGH_STATUSES = (400, 404, 409, 429)


class IdentityProviderError(ContaEmpresaException):
    """
    Raised when an Auth0 call fails.

    Only statuses in PASSTHROUGH_STATUSES reach the caller; credential
    failures (401/403 from Auth0) and outages become 502.
    """

    def __init__(
        self,
        message: str,
        upstream_status: int | None = None,
        suggestion: str | None = None,
    ):
        status_code = upstream_status if upstream_status in PASSTHROUGH_STATUSES else 502
        super().__init__(
            message=message,
            code="IDENTITY_PROVIDER_ERROR",
            status_code=status_code,
            suggestion=suggestion,
            details={"upstream_status": upstream_status} if upstream_status else None,
        )


# =============================================================================
# Exception Handlers
# =============================================================================

async def contaempresa_exception_handler(
    request: Request,
    exc: ContaEmpresaException
) -> JSONResponse:
    """Convert ContaEmpresaException to JSON response."""
    headers = {"WWW-Authenticate": "Bearer"} if exc.status_code == 401 else None
    return JSONResponse(
        status_code=exc.status_code,
        content=exc.to_dict(),
        headers=headers,
    )


async def application_error_handler(
    request: Request,
    exc: ApplicationError
) -> JSONResponse:
    """Errors bubbling up from lib/ clients (database, Auth0)."""
    logger.error(f"{request.method} {request.url.path} failed: {exc}")
    return JSONResponse(
        status_code=500,
        content=exc.to_dict(),
    )


async def http_exception_handler(
    request: Request,
    exc: StarletteHTTPException
) -> JSONResponse:
    """Unknown routes (404) and unsupported methods (405)."""
    return JSONResponse(
        status_code=exc.status_code,
        content={"error": exc.detail},
        headers=getattr(exc, "headers", None),
    )


async def validation_exception_handler(
    request: Request,
    exc: RequestValidationError
) -> JSONResponse:
    """
    Handle request validation errors.

    Returns 400 with the first failing field in the message, plus the
    full error list for debugging.
    """
    errors = _summarize_errors(exc.errors())
    message = _describe_validation_error(errors[0]) if errors else "Invalid request"
    return JSONResponse(
        status_code=400,
        content={
            "error": message,
            "code": "VALIDATION_ERROR",
            "details": {"errors": errors},
        }
    )
